from __future__ import annotations

import json

import pytest

from wisata.recommendations.region_tables import (
    DEFAULT_REGION_TABLES,
    RegionTables,
    load_region_tables,
)
from wisata.recommendations.region_tables import fold
from wisata.recommendations.regions import RegionResolver, normalize

resolver = RegionResolver()


# ── resolve ──────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "address, expected",
    [
        ("Kuta, Badung, Bali", "bali"),
        ("Jl. Asia Afrika, Bandung", "jawa barat"),
        ("Sleman, DIY", "di yogyakarta"),
        ("Kota Medan", "sumatera utara"),
        ("  MAKASSAR  ", "sulawesi selatan"),
        ("Gambir, Jakarta Pusat", "dki jakarta"),
    ],
)
def test_resolve_matches_patterns(address, expected):
    assert resolver.resolve(address) == expected


def test_resolve_first_declared_region_wins():
    # bogor (jawa barat) is declared before tangerang (banten)
    assert resolver.resolve("Perbatasan Tangerang dan Bogor") == "jawa barat"


def test_resolve_falls_back_to_last_comma_part():
    assert resolver.resolve("Jalan Mawar 5, Springfield, Oregon") == "Oregon"


def test_resolve_falls_back_to_trimmed_address():
    assert resolver.resolve("  Atlantis  ") == "Atlantis"


@pytest.mark.parametrize("address", ["", "   ", None])
def test_resolve_never_raises_on_blank(address):
    assert resolver.resolve(address) == ""


# ── normalize ────────────────────────────────────────────────────────────


def test_normalize_folds_case_whitespace_and_aliases():
    assert resolver.normalize(" Jabar ") == resolver.normalize("jawa barat") == "jawa barat"
    assert resolver.normalize("Jawa   Barat") == "jawa barat"
    assert resolver.normalize("DIY") == "di yogyakarta"


@pytest.mark.parametrize(
    "value",
    [
        "Bali",
        " Jabar ",
        "JAKARTA",
        "dki jakarta",
        "Nusa  Tenggara Timur",
        "Oregon",
        "",
        *DEFAULT_REGION_TABLES.aliases.keys(),
        *DEFAULT_REGION_TABLES.aliases.values(),
    ],
)
def test_normalize_is_idempotent(value):
    once = resolver.normalize(value)
    assert resolver.normalize(once) == once


def test_module_normalize_applies_default_aliases():
    assert normalize(" Jabar ") == normalize("jawa barat") == "jawa barat"
    assert normalize("DIY") == resolver.normalize("DIY")
    assert normalize(None) == ""


def test_fold_only_collapses_case_and_whitespace():
    assert fold("  Cagar   ALAM ") == "cagar alam"
    assert fold(" Jabar ") == "jabar"


# ── replaceable tables ───────────────────────────────────────────────────


def test_custom_tables_replace_defaults():
    tables = RegionTables.build({"Atlantis": ["poseidonia"]}, {"ATL": "atlantis"})
    custom = RegionResolver(tables)

    assert custom.resolve("Poseidonia, Sea Floor") == "atlantis"
    assert custom.resolve("Kuta, Bali") == "Bali"
    assert custom.normalize("atl") == "atlantis"


def test_chained_aliases_are_rejected():
    with pytest.raises(ValueError):
        RegionTables.build({}, {"a": "b", "b": "c"})


def test_load_region_tables_from_json(tmp_path):
    path = tmp_path / "tables.json"
    path.write_text(json.dumps({
        "patterns": {"lembah hijau": ["hijau", "lh"]},
        "aliases": {"lh": "lembah hijau"},
    }))

    tables = load_region_tables(path)
    custom = RegionResolver(tables)

    assert custom.resolve("Desa Hijau") == "lembah hijau"
    assert custom.normalize(" LH ") == "lembah hijau"

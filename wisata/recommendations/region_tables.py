"""
Region lookup tables for Indonesian addresses.

``REGION_PATTERNS`` maps a canonical province name to the substrings that
identify it inside a free-text address. Declaration order matters: the
first province with a matching substring wins.

``REGION_ALIASES`` maps abbreviations and variant spellings to the
canonical province name. No alias value may itself be an alias key.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

REGION_PATTERNS: dict[str, list[str]] = {
    "jawa barat": ["jawa barat", "jabar", "west java", "bandung", "bogor", "depok", "bekasi", "cimahi", "sukabumi", "cirebon", "tasikmalaya", "garut"],
    "jawa tengah": ["jawa tengah", "jateng", "central java", "semarang", "solo", "surakarta", "magelang", "salatiga", "pekalongan", "tegal"],
    "jawa timur": ["jawa timur", "jatim", "east java", "surabaya", "malang", "kediri", "blitar", "madiun", "mojokerto", "pasuruan", "probolinggo"],
    "dki jakarta": ["jakarta", "dki jakarta", "jakarta pusat", "jakarta utara", "jakarta selatan", "jakarta timur", "jakarta barat", "kepulauan seribu"],
    "banten": ["banten", "tangerang", "serang", "cilegon", "lebak", "pandeglang", "tangerang selatan"],
    "di yogyakarta": ["yogyakarta", "jogja", "yogya", "diy", "sleman", "bantul", "kulonprogo", "gunungkidul"],
    "bali": ["bali", "denpasar", "ubud", "kuta", "sanur", "badung", "gianyar", "tabanan", "klungkung", "bangli"],
    "sumatera utara": ["sumatera utara", "sumut", "medan", "north sumatra", "pematangsiantar", "binjai", "tebing tinggi", "tanjungbalai"],
    "sumatera barat": ["sumatera barat", "sumbar", "padang", "west sumatra", "bukittinggi", "payakumbuh", "padangpanjang"],
    "sumatera selatan": ["sumatera selatan", "sumsel", "palembang", "south sumatra", "lubuklinggau", "pagar alam", "prabumulih"],
    "lampung": ["lampung", "bandar lampung", "metro"],
    "riau": ["riau", "pekanbaru", "dumai"],
    "kepulauan riau": ["kepulauan riau", "kepri", "batam", "tanjungpinang"],
    "jambi": ["jambi", "sungai penuh"],
    "bengkulu": ["bengkulu"],
    "aceh": ["aceh", "banda aceh", "langsa", "lhokseumawe", "sabang"],
    "kalimantan barat": ["kalimantan barat", "kalbar", "pontianak", "singkawang"],
    "kalimantan tengah": ["kalimantan tengah", "kalteng", "palangkaraya"],
    "kalimantan selatan": ["kalimantan selatan", "kalsel", "banjarmasin", "banjarbaru"],
    "kalimantan timur": ["kalimantan timur", "kaltim", "samarinda", "balikpapan", "bontang"],
    "kalimantan utara": ["kalimantan utara", "kalut", "tanjung selor"],
    "sulawesi selatan": ["sulawesi selatan", "sulsel", "makassar", "parepare", "palopo"],
    "sulawesi utara": ["sulawesi utara", "sulut", "manado", "bitung", "tomohon", "kotamobagu"],
    "sulawesi tengah": ["sulawesi tengah", "sulteng", "palu"],
    "sulawesi tenggara": ["sulawesi tenggara", "sultra", "kendari", "bau-bau"],
    "sulawesi barat": ["sulawesi barat", "sulbar", "mamuju"],
    "gorontalo": ["gorontalo"],
    "papua": ["papua", "jayapura"],
    "papua barat": ["papua barat", "manokwari", "sorong"],
    "papua barat daya": ["papua barat daya"],
    "papua selatan": ["papua selatan"],
    "papua tengah": ["papua tengah"],
    "papua pegunungan": ["papua pegunungan"],
    "nusa tenggara barat": ["nusa tenggara barat", "ntb", "mataram", "bima", "lombok"],
    "nusa tenggara timur": ["nusa tenggara timur", "ntt", "kupang", "flores", "ende"],
    "maluku": ["maluku", "ambon", "tual"],
    "maluku utara": ["maluku utara", "ternate", "tidore"],
}

REGION_ALIASES: dict[str, str] = {
    "jabar": "jawa barat",
    "jateng": "jawa tengah",
    "jatim": "jawa timur",
    "jakarta": "dki jakarta",
    "jogja": "di yogyakarta",
    "yogya": "di yogyakarta",
    "diy": "di yogyakarta",
    "sumut": "sumatera utara",
    "sumbar": "sumatera barat",
    "sumsel": "sumatera selatan",
    "kepri": "kepulauan riau",
    "kalbar": "kalimantan barat",
    "kalteng": "kalimantan tengah",
    "kalsel": "kalimantan selatan",
    "kaltim": "kalimantan timur",
    "kalut": "kalimantan utara",
    "sulsel": "sulawesi selatan",
    "sulut": "sulawesi utara",
    "sulteng": "sulawesi tengah",
    "sultra": "sulawesi tenggara",
    "sulbar": "sulawesi barat",
    "ntb": "nusa tenggara barat",
    "ntt": "nusa tenggara timur",
}


@dataclass(frozen=True)
class RegionTables:
    patterns: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    aliases: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        patterns: Mapping[str, list[str] | tuple[str, ...]],
        aliases: Mapping[str, str],
    ) -> RegionTables:
        """Fold keys and values and freeze both tables.

        Raises ``ValueError`` if an alias points at another alias, since
        normalization would then not be idempotent.
        """
        folded_patterns = {
            fold(region): tuple(fold(p) for p in subs if fold(p))
            for region, subs in patterns.items()
        }
        folded_aliases = {fold(k): fold(v) for k, v in aliases.items()}
        chained = sorted(v for v in folded_aliases.values() if v in folded_aliases)
        if chained:
            raise ValueError(f"alias targets must be canonical, got: {', '.join(chained)}")
        return cls(
            patterns=MappingProxyType(folded_patterns),
            aliases=MappingProxyType(folded_aliases),
        )


def fold(value: str) -> str:
    """Lower-case, trim and collapse inner whitespace."""
    return " ".join(str(value).split()).lower()


def load_region_tables(path: str | Path) -> RegionTables:
    """Load replacement tables from a JSON file with ``patterns`` and ``aliases`` keys."""
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    return RegionTables.build(payload.get("patterns", {}), payload.get("aliases", {}))


DEFAULT_REGION_TABLES = RegionTables.build(REGION_PATTERNS, REGION_ALIASES)

from __future__ import annotations

import asyncio

import pytest

from wisata.recommendations.config import RecommendationConfig
from wisata.recommendations.models import Destination
from wisata.recommendations.scoring import ScoringEngine


class _FixedProvider:
    name = "fixed"

    def __init__(self, value):
        self.value = value

    def predict(self, category, region):
        return self.value


class _FailingProvider:
    name = "failing"

    def predict(self, category, region):
        raise RuntimeError("model unavailable")


def _bare(**overrides) -> Destination:
    fields = {
        "category": "Bahari",
        "name": "Pantai Kuta",
        "region": "Bali",
        "description": "",
        "image_path": "",
        "latitude": 0.0,
        "longitude": 0.0,
    }
    fields.update(overrides)
    return Destination(**fields)


def _complete(**overrides) -> Destination:
    fields = {
        "description": "Pantai terkenal di Bali dengan sunset yang indah",
        "image_path": "images/kuta.jpg",
        "latitude": -8.7184,
        "longitude": 115.1686,
    }
    fields.update(overrides)
    return _bare(**fields)


engine = ScoringEngine(_FixedProvider(0.5))


def test_exact_matches_are_floored():
    assert engine.score(0.3, _bare()) == pytest.approx(0.8)
    assert engine.score(0.0, _bare()) == pytest.approx(0.8)


def test_predictive_above_floor_is_kept():
    assert engine.score(0.9, _bare()) == pytest.approx(0.9)


def test_all_boosts_applied():
    assert engine.score(0.5, _complete()) == pytest.approx(0.95)


def test_score_is_capped():
    assert engine.score(0.98, _complete()) == pytest.approx(1.0)
    assert engine.score(1.0, _complete()) <= 1.0


def test_description_boost_boundary():
    assert engine.score(0.0, _bare(description="a" * 10)) == pytest.approx(0.8)
    assert engine.score(0.0, _bare(description="a" * 11)) == pytest.approx(0.85)


def test_blank_description_gets_no_boost():
    assert engine.score(0.0, _bare(description=" " * 20)) == pytest.approx(0.8)


def test_image_boost_requires_non_blank_path():
    assert engine.score(0.0, _bare(image_path="   ")) == pytest.approx(0.8)
    assert engine.score(0.0, _bare(image_path="images/a.jpg")) == pytest.approx(0.85)


def test_coordinates_boost_requires_both():
    assert engine.score(0.0, _bare(latitude=-8.7)) == pytest.approx(0.8)
    assert engine.score(0.0, _bare(latitude=-8.7, longitude=115.1)) == pytest.approx(0.85)


def test_constants_come_from_config():
    custom = ScoringEngine(_FixedProvider(0.5), RecommendationConfig(exact_match_floor=0.6, image_boost=0.1))
    assert custom.score(0.0, _bare(image_path="x.jpg")) == pytest.approx(0.7)


@pytest.mark.parametrize("raw, expected", [(0.42, 0.42), (1.7, 1.0), (-0.2, 0.0)])
def test_predictive_is_clamped(raw, expected):
    assert ScoringEngine(_FixedProvider(raw)).predictive("Bahari", "Bali") == pytest.approx(expected)


def test_predictive_falls_back_when_provider_raises():
    assert ScoringEngine(_FailingProvider()).predictive("Bahari", "Bali") == pytest.approx(0.7)


def test_predictive_falls_back_on_nan():
    assert ScoringEngine(_FixedProvider(float("nan"))).predictive("Bahari", "Bali") == pytest.approx(0.7)


def test_score_match_uses_fallback_score():
    failing = ScoringEngine(_FailingProvider())
    match = failing.score_match(_complete(), "Bahari", "bali")

    assert match.predictive_score == pytest.approx(0.7)
    assert match.compatibility_score == pytest.approx(failing.score(0.7, _complete()))
    assert match.id == "pantai_kuta_bali_bahari"
    assert match.match_reason == "Perfect match: Bahari destination in bali"


def test_score_all_keeps_input_order():
    destinations = [_bare(name=f"Pantai {i}") for i in range(5)]
    matches = asyncio.run(engine.score_all(destinations, "Bahari", "bali"))
    assert [m.destination.name for m in matches] == [d.name for d in destinations]

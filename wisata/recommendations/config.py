from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _env_timeout() -> float | None:
    raw = os.getenv("WISATA_REQUEST_TIMEOUT", "10")
    try:
        value = float(raw)
    except ValueError:
        return 10.0
    return value if value > 0 else None


@dataclass(frozen=True)
class RecommendationConfig:
    """
    Business constants of the matching pipeline.

    Exact matches are floored at ``exact_match_floor`` and each piece of
    complete metadata adds a fixed boost, capped at ``score_cap``.
    """

    max_results: int = 10
    exact_match_floor: float = 0.8
    description_boost: float = 0.05
    description_min_length: int = 10
    image_boost: float = 0.05
    coordinates_boost: float = 0.05
    score_cap: float = 1.0
    fallback_predictive_score: float = 0.7
    request_timeout: float | None = _env_timeout()
    region_tables_path: str | None = os.getenv("WISATA_REGION_TABLES") or None


STRATEGY = "strict category+region"

DEFAULT_RECOMMENDATION_CONFIG = RecommendationConfig()

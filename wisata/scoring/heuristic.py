from __future__ import annotations

import hashlib

from ..recommendations.region_tables import fold


def encode(value: str | None) -> float:
    """Fold a string into [0, 1) via a stable sha256 digest."""
    digest = hashlib.sha256(fold(value or "").encode()).hexdigest()
    return (int(digest[:8], 16) % 1000) / 1000


class HeuristicScoringProvider:
    """Deterministic stand-in used when no trained model is available."""

    name = "heuristic"

    def predict(self, category: str, region: str) -> float:
        return encode(f"{fold(category)}|{fold(region)}")

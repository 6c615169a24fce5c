from __future__ import annotations

import asyncio
import logging
import math
from typing import Iterable

from ..scoring.provider import ScoringProvider
from .config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig
from .models import Destination, ScoredMatch

logger = logging.getLogger(__name__)


class ScoringEngine:
    """Blends the predictive signal with completeness boosts into [0, 1]."""

    def __init__(
        self,
        provider: ScoringProvider,
        config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
    ) -> None:
        self.provider = provider
        self.config = config

    def score(self, predictive: float, destination: Destination) -> float:
        """Compatibility of a destination that already passed strict filtering."""
        cfg = self.config
        total = max(predictive, cfg.exact_match_floor)

        description = destination.description or ""
        if description.strip() and len(description) > cfg.description_min_length:
            total += cfg.description_boost
        if destination.image_path and destination.image_path.strip():
            total += cfg.image_boost
        # 0.0 is the ingestion default for a missing coordinate
        if destination.latitude and destination.longitude:
            total += cfg.coordinates_boost

        return round(min(total, cfg.score_cap), 6)

    def predictive(self, category: str, region: str) -> float:
        """Provider output clamped to [0, 1]; the fixed fallback if the call fails."""
        fallback = self.config.fallback_predictive_score
        try:
            value = float(self.provider.predict(category, region))
        except Exception:
            logger.warning(
                "Scoring unavailable for (%s, %s), using fallback score %.2f",
                category, region, fallback,
                exc_info=True,
            )
            return fallback
        if not math.isfinite(value):
            logger.warning("Non-finite score for (%s, %s), using fallback score %.2f", category, region, fallback)
            return fallback
        return min(max(value, 0.0), 1.0)

    def score_match(self, destination: Destination, category: str, region: str) -> ScoredMatch:
        predictive = self.predictive(category, destination.region or region)
        return ScoredMatch(
            id=destination.identifier,
            destination=destination,
            predictive_score=predictive,
            compatibility_score=self.score(predictive, destination),
            match_reason=f"Perfect match: {category} destination in {region}",
        )

    async def score_all(
        self,
        destinations: Iterable[Destination],
        category: str,
        region: str,
    ) -> list[ScoredMatch]:
        """Score every destination concurrently. Output follows input order."""
        return list(
            await asyncio.gather(*(
                asyncio.to_thread(self.score_match, d, category, region)
                for d in destinations
            ))
        )

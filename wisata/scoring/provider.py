from __future__ import annotations

import logging
from typing import Protocol

from .config import DEFAULT_SCORING_CONFIG, ScoringConfig
from .heuristic import HeuristicScoringProvider
from .model import ModelScoringProvider

logger = logging.getLogger(__name__)


class ScoringProvider(Protocol):
    """Anything that yields a [0, 1] compatibility number for a pair. May raise."""

    name: str

    def predict(self, category: str, region: str) -> float:
        ...


class FallbackScoringProvider:
    """Use *primary*, and *fallback* for any call where primary raises."""

    def __init__(self, primary: ScoringProvider, fallback: ScoringProvider) -> None:
        self.primary = primary
        self.fallback = fallback
        self.name = f"{primary.name}+{fallback.name}"

    def predict(self, category: str, region: str) -> float:
        try:
            return self.primary.predict(category, region)
        except Exception:
            logger.warning(
                "Scoring provider %r failed for (%s, %s), using %r",
                self.primary.name, category, region, self.fallback.name,
                exc_info=True,
            )
            return self.fallback.predict(category, region)


def load_scoring_provider(config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> ScoringProvider:
    """Load the model-backed provider, falling back to the heuristic one."""
    heuristic = HeuristicScoringProvider()
    if not config.enabled:
        logger.info("Model scoring disabled, using heuristic scoring")
        return heuristic
    if not config.model_path.is_file():
        logger.warning("Scoring model not found at %s, using heuristic scoring", config.model_path)
        return heuristic
    try:
        model = ModelScoringProvider.load(config.model_path)
    except Exception:
        logger.warning(
            "Could not load scoring model from %s, using heuristic scoring",
            config.model_path,
            exc_info=True,
        )
        return heuristic
    return FallbackScoringProvider(model, heuristic)

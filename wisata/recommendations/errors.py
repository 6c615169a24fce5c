from __future__ import annotations

from typing import Any


class RecommendationError(Exception):
    """Base class for failures surfaced by the recommendation pipeline."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = {k: v for k, v in context.items() if v is not None}


class InputError(RecommendationError):
    """A required query field is missing."""


class IncompleteProfile(InputError):
    """The user's profile lacks an interest or an address."""


class UserNotFound(RecommendationError):
    pass


class NoCatalogData(RecommendationError):
    """The catalog is empty or unavailable; retry once ingestion recovers."""


class UpstreamLookupFailure(RecommendationError):
    """The profile or visit-history collaborator failed."""


class ScoringUnavailable(RecommendationError):
    """A single predictive call failed. Always recovered inside the pipeline."""


class RecommendationTimeout(RecommendationError):
    pass

from __future__ import annotations

from typing import Iterable, NamedTuple

from .models import ScoredMatch


class RankedMatches(NamedTuple):
    matches: list[ScoredMatch]
    total: int


class Ranker:
    def __init__(self, limit: int = 10) -> None:
        self.limit = limit

    def rank(self, scored: Iterable[ScoredMatch]) -> RankedMatches:
        """Sort by compatibility, highest first, and keep the top ``limit``.

        The sort is stable, so equal scores keep their incoming
        (catalog/filter) order.
        """
        ordered = sorted(scored, key=lambda m: m.compatibility_score, reverse=True)
        return RankedMatches(matches=ordered[: self.limit], total=len(ordered))

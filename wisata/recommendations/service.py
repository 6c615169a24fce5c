from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, TypeVar

from ..auth.users import ProfileStore
from ..scoring.provider import ScoringProvider
from ..visits.store import VisitHistoryStore
from .catalog import Catalog
from .config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig
from .errors import (
    IncompleteProfile,
    InputError,
    NoCatalogData,
    RecommendationTimeout,
    UpstreamLookupFailure,
    UserNotFound,
)
from .matcher import filter_subregion, strict_filter
from .models import FilterOverrides, RecommendationQuery, RecommendationResult
from .ranking import Ranker
from .regions import RegionResolver
from .scoring import ScoringEngine

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RecommendationService:
    """
    Resolve → strict filter → score → rank.

    Holds only read-only collaborators, so one instance serves any
    number of concurrent requests.
    """

    def __init__(
        self,
        catalog: Catalog,
        scoring_provider: ScoringProvider,
        resolver: RegionResolver | None = None,
        profiles: ProfileStore | None = None,
        visits: VisitHistoryStore | None = None,
        config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
    ) -> None:
        self.catalog = catalog
        self.resolver = resolver or RegionResolver()
        self.engine = ScoringEngine(scoring_provider, config)
        self.ranker = Ranker(config.max_results)
        self.profiles = profiles
        self.visits = visits
        self.config = config

    # ── Entry points ─────────────────────────────────────────────────────

    async def recommend(
        self,
        category: str,
        raw_address: str,
        user_id: str | None = None,
        timeout: float | None = None,
    ) -> RecommendationResult:
        query = RecommendationQuery(category=category or "", raw_address=raw_address or "", user_id=user_id)
        return await self._bounded(self._recommend(query), timeout, query)

    async def recommend_filtered(
        self,
        category: str,
        raw_address: str,
        overrides: FilterOverrides | None = None,
        user_id: str | None = None,
        timeout: float | None = None,
    ) -> RecommendationResult:
        query = RecommendationQuery(
            category=category or "",
            raw_address=raw_address or "",
            user_id=user_id,
            overrides=overrides or FilterOverrides(),
        )
        return await self._bounded(self._recommend(query), timeout, query)

    async def recommend_by_category(
        self,
        raw_address: str,
        category: str,
        user_id: str | None = None,
        timeout: float | None = None,
    ) -> RecommendationResult:
        return await self.recommend_filtered(
            category, raw_address, FilterOverrides(category=category), user_id=user_id, timeout=timeout,
        )

    async def recommend_personalized(self, user_id: str, timeout: float | None = None) -> RecommendationResult:
        return await self._bounded(self._recommend_personalized(user_id), timeout, None, user_id=user_id)

    # ── Pipeline ─────────────────────────────────────────────────────────

    async def _recommend(self, query: RecommendationQuery) -> RecommendationResult:
        overrides = query.overrides
        _require(query)

        resolved = self.resolver.resolve(query.raw_address)
        region = (overrides.region if overrides and overrides.region else None) or resolved
        category = (overrides.category if overrides and overrides.category else None) or query.category
        logger.info("Recommending %r near %r (resolved region %r)", category, query.raw_address, resolved)

        if self.catalog.is_empty:
            raise NoCatalogData(
                "No destination data available", category=category, region=region, user_id=query.user_id,
            )

        matched = strict_filter(self.catalog.all(), category, region, self.resolver)
        if overrides and overrides.subregion:
            matched = filter_subregion(matched, overrides.subregion)
        logger.info("%d destinations match %r in %r", len(matched), category, region)

        applied = None
        if overrides is not None:
            applied = {**overrides.applied(), "effective_category": category, "effective_region": region}

        if not matched:
            return RecommendationResult(
                matches=[],
                total_matched=0,
                category=category,
                region=region,
                message=(
                    f"No {category} destinations found in {region or 'an unknown region'}. "
                    "Try a different category or region."
                ),
                user_id=query.user_id,
                applied_filters=applied,
            )

        scored = await self.engine.score_all(matched, category, region)
        ranked = self.ranker.rank(scored)
        return RecommendationResult(
            matches=ranked.matches,
            total_matched=ranked.total,
            category=category,
            region=region,
            user_id=query.user_id,
            applied_filters=applied,
        )

    async def _recommend_personalized(self, user_id: str) -> RecommendationResult:
        if not user_id:
            raise InputError("A user id is required")
        if self.profiles is None:
            raise UpstreamLookupFailure("No profile store configured", user_id=user_id)

        try:
            profile = await asyncio.to_thread(self.profiles.get_profile, user_id)
        except Exception as exc:
            raise UpstreamLookupFailure("Profile lookup failed", user_id=user_id) from exc
        if profile is None:
            raise UserNotFound("User not found", user_id=user_id)
        if not profile.interest or not profile.address:
            raise IncompleteProfile(
                "User profile incomplete: interest and address are required", user_id=user_id,
            )

        result = await self._recommend(
            RecommendationQuery(category=profile.interest, raw_address=profile.address, user_id=user_id)
        )

        visited = await self._visited_ids(user_id)
        if not visited:
            return result
        kept = [m for m in result.matches if m.id not in visited]
        return result.model_copy(
            update={"matches": kept, "excluded_visited": len(result.matches) - len(kept)}
        )

    async def _visited_ids(self, user_id: str) -> set[str]:
        if self.visits is None:
            return set()
        try:
            return set(await asyncio.to_thread(self.visits.get_visited_ids, user_id))
        except Exception:
            logger.warning("Visit history lookup failed for %s, not excluding any", user_id, exc_info=True)
            return set()

    async def _bounded(
        self,
        work: Awaitable[T],
        timeout: float | None,
        query: RecommendationQuery | None,
        **context: Any,
    ) -> T:
        limit = timeout if timeout is not None else self.config.request_timeout
        try:
            return await asyncio.wait_for(work, timeout=limit)
        except asyncio.TimeoutError as exc:
            if query is not None:
                context.update(category=query.category, address=query.raw_address, user_id=query.user_id)
            raise RecommendationTimeout(f"Recommendation timed out after {limit}s", **context) from exc


def _require(query: RecommendationQuery) -> None:
    missing = [
        name
        for name, value in (("category", query.category), ("address", query.raw_address))
        if not value or not value.strip()
    ]
    if missing:
        raise InputError(
            f"Missing required field(s): {', '.join(missing)}",
            category=query.category or None,
            user_id=query.user_id,
        )

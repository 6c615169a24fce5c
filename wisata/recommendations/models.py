from __future__ import annotations

import re
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import STRATEGY
from .region_tables import fold

CATEGORIES: tuple[str, ...] = (
    "Bahari",
    "Budaya",
    "Cagar Alam",
    "Pusat Perbelanjaan",
    "Taman Hiburan",
    "Tempat Ibadah",
)

_CATEGORY_BY_FOLDED = {c.lower(): c for c in CATEGORIES}
_NON_ALNUM = re.compile(r"[^a-z0-9]")


def canonical_category(value: str) -> str | None:
    """Return the enumerated spelling of *value*, or ``None`` if unknown."""
    return _CATEGORY_BY_FOLDED.get(fold(value))


class Destination(BaseModel):
    """One validated catalog entry. Immutable once loaded."""

    model_config = ConfigDict(frozen=True)

    category: str
    name: str = Field(..., min_length=1)
    latitude: float = 0.0
    longitude: float = 0.0
    address: str = ""
    region: str = Field(..., min_length=1)
    subregion: str = ""
    full_name: str = ""
    description: str = ""
    image_path: str = ""

    @field_validator("category")
    @classmethod
    def _known_category(cls, value: str) -> str:
        canonical = canonical_category(value)
        if canonical is None:
            raise ValueError(f"unknown category: {value!r}")
        return canonical

    @property
    def identifier(self) -> str:
        return destination_id(self.name, self.region, self.category)


def destination_id(name: str, region: str, category: str) -> str:
    """Deterministic id: ``name_region_category`` lower-cased, non-alphanumerics as ``_``."""
    base = f"{name or 'unknown'}_{region or 'unknown'}_{category or 'unknown'}"
    return _NON_ALNUM.sub("_", base.lower())


# ── Queries ──────────────────────────────────────────────────────────────


class FilterOverrides(BaseModel):
    """Explicit filter values that take precedence over derived ones."""

    region: str | None = None
    category: str | None = None
    subregion: str | None = None

    def applied(self) -> dict[str, str]:
        return {k: v for k, v in self.model_dump().items() if v}


class RecommendationQuery(BaseModel):
    category: str
    raw_address: str
    user_id: str | None = None
    overrides: FilterOverrides | None = None


# ── Results ──────────────────────────────────────────────────────────────


class ScoredMatch(BaseModel):
    id: str
    destination: Destination
    predictive_score: float = Field(..., ge=0.0, le=1.0)
    compatibility_score: float = Field(..., ge=0.0, le=1.0)
    match_reason: str


class RecommendationResult(BaseModel):
    matches: list[ScoredMatch]
    total_matched: int
    category: str
    region: str
    strategy: str = STRATEGY
    message: str | None = None
    user_id: str | None = None
    applied_filters: dict[str, str] | None = None
    excluded_visited: int = 0
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# ── API bodies ───────────────────────────────────────────────────────────


class RecommendationRequest(BaseModel):
    category: str = Field(..., min_length=1, description="Interest category, e.g. Bahari")
    address: str = Field(..., min_length=1, description="Free-text home address")


class FilteredRecommendationRequest(RecommendationRequest):
    region: str | None = Field(default=None, description="Overrides the region resolved from address")
    override_category: str | None = Field(default=None, description="Overrides the declared category")
    subregion: str | None = Field(default=None, description="City/regency substring to narrow by")

    def overrides(self) -> FilterOverrides:
        return FilterOverrides(
            region=self.region,
            category=self.override_category,
            subregion=self.subregion,
        )


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=3, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=2, max_length=50)


class ProfileUpdate(BaseModel):
    interest: str | None = None
    address: str | None = Field(default=None, max_length=255)
    phone_number: str | None = Field(default=None, pattern=r"^[0-9+\-\s()]*$")

    @field_validator("interest")
    @classmethod
    def _interest_in_categories(cls, value: str | None) -> str | None:
        if value is None or value == "":
            return value
        canonical = canonical_category(value)
        if canonical is None:
            raise ValueError(f"interest must be one of {', '.join(CATEGORIES)}")
        return canonical


class UserProfile(BaseModel):
    user_id: str
    email: str
    name: str
    interest: str = ""
    address: str = ""
    phone_number: str = ""


class VisitRequest(BaseModel):
    destination_id: str = Field(..., min_length=1)


class VisitResponse(BaseModel):
    status: str
    total_visits: int

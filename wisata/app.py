from __future__ import annotations

import os

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from .auth.dependencies import require_user
from .auth.users import DuplicateUser, UserStore, seed_demo_user
from .data_ingestion.ingest import load_catalog
from .recommendations.config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig
from .recommendations.errors import (
    InputError,
    NoCatalogData,
    RecommendationError,
    RecommendationTimeout,
    UpstreamLookupFailure,
    UserNotFound,
)
from .recommendations.models import (
    FilteredRecommendationRequest,
    LoginRequest,
    ProfileUpdate,
    RecommendationRequest,
    RecommendationResult,
    RegisterRequest,
    UserProfile,
    VisitRequest,
    VisitResponse,
)
from .recommendations.region_tables import DEFAULT_REGION_TABLES, load_region_tables
from .recommendations.regions import RegionResolver
from .recommendations.service import RecommendationService
from .scoring.provider import load_scoring_provider
from .visits.store import VisitStore

_STATUS_BY_ERROR: list[tuple[type[RecommendationError], int]] = [
    (InputError, 400),
    (UserNotFound, 404),
    (NoCatalogData, 503),
    (UpstreamLookupFailure, 502),
    (RecommendationTimeout, 504),
]


def build_service(
    users: UserStore,
    visits: VisitStore,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> RecommendationService:
    """Load the catalog, region tables and scoring provider once at startup."""
    tables = (
        load_region_tables(config.region_tables_path)
        if config.region_tables_path
        else DEFAULT_REGION_TABLES
    )
    return RecommendationService(
        catalog=load_catalog(),
        scoring_provider=load_scoring_provider(),
        resolver=RegionResolver(tables),
        profiles=users,
        visits=visits,
        config=config,
    )


def get_service(request: Request) -> RecommendationService:
    return request.app.state.service


def get_users(request: Request) -> UserStore:
    return request.app.state.users


def get_visits(request: Request) -> VisitStore:
    return request.app.state.visits


router = APIRouter()


# ── Public endpoints ─────────────────────────────────────────────────────


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/metadata")
def metadata(service: RecommendationService = Depends(get_service)) -> dict:
    return {
        "categories": service.catalog.categories(),
        "regions": service.catalog.regions(),
    }


# ── Auth endpoints ───────────────────────────────────────────────────────


@router.post("/auth/register", status_code=201)
def register(body: RegisterRequest, request: Request, users: UserStore = Depends(get_users)) -> dict:
    try:
        profile = users.register(body.email, body.password, body.name)
    except DuplicateUser:
        raise HTTPException(status_code=409, detail="User already exists")
    request.session["user"] = {"user_id": profile.user_id, "email": profile.email, "name": profile.name}
    return {"status": "registered", "user": request.session["user"]}


@router.post("/auth/login")
def login(body: LoginRequest, request: Request, users: UserStore = Depends(get_users)) -> dict:
    profile = users.authenticate(body.email, body.password)
    if not profile:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user"] = {"user_id": profile.user_id, "email": profile.email, "name": profile.name}
    return {"status": "ok", "user": request.session["user"]}


@router.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@router.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── Profile & visits ─────────────────────────────────────────────────────


@router.get("/profile", response_model=UserProfile)
def get_profile(user: dict = Depends(require_user), users: UserStore = Depends(get_users)) -> UserProfile:
    profile = users.get_profile(user["user_id"])
    if profile is None:
        raise HTTPException(status_code=404, detail="User not found")
    return profile


@router.put("/profile", response_model=UserProfile)
def update_profile(
    body: ProfileUpdate,
    user: dict = Depends(require_user),
    users: UserStore = Depends(get_users),
) -> UserProfile:
    profile = users.update_profile(user["user_id"], body)
    if profile is None:
        raise HTTPException(status_code=404, detail="User not found")
    return profile


@router.post("/visits", response_model=VisitResponse)
def record_visit(
    body: VisitRequest,
    user: dict = Depends(require_user),
    visits: VisitStore = Depends(get_visits),
) -> VisitResponse:
    total = visits.record_visit(user["user_id"], body.destination_id)
    return VisitResponse(status="recorded", total_visits=total)


# ── Recommendations ──────────────────────────────────────────────────────


@router.post("/recommendations", response_model=RecommendationResult)
async def recommendations(
    body: RecommendationRequest,
    user: dict = Depends(require_user),
    service: RecommendationService = Depends(get_service),
) -> RecommendationResult:
    return await service.recommend(body.category, body.address, user_id=user["user_id"])


@router.get("/recommendations/category/{category}", response_model=RecommendationResult)
async def recommendations_by_category(
    category: str,
    address: str | None = None,
    user: dict = Depends(require_user),
    service: RecommendationService = Depends(get_service),
) -> RecommendationResult:
    if not address:
        raise HTTPException(status_code=400, detail="Address parameter is required")
    return await service.recommend_by_category(address, category, user_id=user["user_id"])


@router.post("/recommendations/filtered", response_model=RecommendationResult)
async def recommendations_filtered(
    body: FilteredRecommendationRequest,
    user: dict = Depends(require_user),
    service: RecommendationService = Depends(get_service),
) -> RecommendationResult:
    return await service.recommend_filtered(
        body.category, body.address, body.overrides(), user_id=user["user_id"],
    )


@router.get("/recommendations/personalized", response_model=RecommendationResult)
async def recommendations_personalized(
    user: dict = Depends(require_user),
    service: RecommendationService = Depends(get_service),
) -> RecommendationResult:
    return await service.recommend_personalized(user["user_id"])


async def recommendation_error_handler(request: Request, exc: RecommendationError) -> JSONResponse:
    status = next((code for cls, code in _STATUS_BY_ERROR if isinstance(exc, cls)), 500)
    return JSONResponse(status_code=status, content={"detail": exc.message, **exc.context})


def create_app(
    service: RecommendationService | None = None,
    users: UserStore | None = None,
    visits: VisitStore | None = None,
) -> FastAPI:
    if users is None:
        users = UserStore()
        seed_demo_user(users)
    visits = visits if visits is not None else VisitStore()

    application = FastAPI(title="Destination Recommendation API", version="1.0.0")
    application.add_middleware(
        SessionMiddleware,
        secret_key=os.environ.get("SESSION_SECRET", "wisata-secret-change-in-production"),
    )
    application.state.users = users
    application.state.visits = visits
    application.state.service = service or build_service(users, visits)
    application.add_exception_handler(RecommendationError, recommendation_error_handler)
    application.include_router(router)
    return application


app = create_app()

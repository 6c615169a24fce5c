from __future__ import annotations

import asyncio

import pytest

from wisata.auth.users import UserStore
from wisata.recommendations.catalog import Catalog
from wisata.recommendations.errors import IncompleteProfile, UpstreamLookupFailure, UserNotFound
from wisata.recommendations.models import Destination, ProfileUpdate, UserProfile
from wisata.recommendations.service import RecommendationService
from wisata.visits.store import VisitStore


class _FixedProvider:
    name = "fixed"

    def predict(self, category, region):
        return 0.5


class _Profiles:
    def __init__(self, *profiles):
        self.profiles = {p.user_id: p for p in profiles}

    def get_profile(self, user_id):
        return self.profiles.get(user_id)


class _BrokenStore:
    def get_profile(self, user_id):
        raise ConnectionError("profile backend down")

    def get_visited_ids(self, user_id):
        raise ConnectionError("visit backend down")


CATALOG = Catalog([
    Destination(category="Bahari", name="Pantai Kuta", region="Bali", description="Pantai terkenal dengan sunset", image_path="k.jpg"),
    Destination(category="Bahari", name="Pantai Sanur", region="Bali", description="Pantai berombak tenang"),
    Destination(category="Bahari", name="Pantai Pandawa", region="Bali"),
    Destination(category="Budaya", name="Candi Borobudur", region="Jawa Tengah"),
])

ALICE = UserProfile(user_id="alice", email="alice@example.com", name="Alice", interest="Bahari", address="Kuta, Badung, Bali")
BOB = UserProfile(user_id="bob", email="bob@example.com", name="Bob", interest="Bahari", address="")


def _service(profiles=None, visits=None) -> RecommendationService:
    return RecommendationService(
        catalog=CATALOG,
        scoring_provider=_FixedProvider(),
        profiles=profiles if profiles is not None else _Profiles(ALICE, BOB),
        visits=visits,
    )


def _run(coro):
    return asyncio.run(coro)


def test_personalized_uses_profile_interest_and_address():
    result = _run(_service().recommend_personalized("alice"))

    assert result.user_id == "alice"
    assert result.category == "Bahari"
    assert result.region == "bali"
    assert [m.destination.name for m in result.matches] == ["Pantai Kuta", "Pantai Sanur", "Pantai Pandawa"]
    assert result.excluded_visited == 0


def test_personalized_excludes_visited_destinations():
    visits = VisitStore()
    visits.record_visit("alice", "pantai_kuta_bali_bahari")
    visits.record_visit("alice", "somewhere_else_entirely")

    result = _run(_service(visits=visits).recommend_personalized("alice"))

    assert [m.destination.name for m in result.matches] == ["Pantai Sanur", "Pantai Pandawa"]
    assert result.excluded_visited == 1
    assert result.total_matched == 3


def test_other_users_visits_are_ignored():
    visits = VisitStore()
    visits.record_visit("bob", "pantai_kuta_bali_bahari")

    result = _run(_service(visits=visits).recommend_personalized("alice"))
    assert len(result.matches) == 3


def test_visit_history_failure_is_not_fatal():
    result = _run(_service(visits=_BrokenStore()).recommend_personalized("alice"))
    assert len(result.matches) == 3
    assert result.excluded_visited == 0


def test_unknown_user_raises_user_not_found():
    with pytest.raises(UserNotFound) as excinfo:
        _run(_service().recommend_personalized("carol"))
    assert excinfo.value.context["user_id"] == "carol"


def test_incomplete_profile_raises():
    with pytest.raises(IncompleteProfile):
        _run(_service().recommend_personalized("bob"))


def test_profile_store_failure_is_surfaced():
    with pytest.raises(UpstreamLookupFailure):
        _run(_service(profiles=_BrokenStore()).recommend_personalized("alice"))


def test_personalized_with_user_store():
    users = UserStore()
    profile = users.register("dewi@example.com", "rahasia123", "Dewi")
    users.update_profile(profile.user_id, ProfileUpdate(interest="budaya", address="Magelang, Jawa Tengah"))

    result = _run(_service(profiles=users).recommend_personalized(profile.user_id))

    assert [m.destination.name for m in result.matches] == ["Candi Borobudur"]

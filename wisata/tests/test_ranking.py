from __future__ import annotations

from wisata.recommendations.models import Destination, ScoredMatch
from wisata.recommendations.ranking import Ranker


def _match(name: str, score: float) -> ScoredMatch:
    destination = Destination(category="Bahari", name=name, region="Bali")
    return ScoredMatch(
        id=destination.identifier,
        destination=destination,
        predictive_score=0.5,
        compatibility_score=score,
        match_reason="Perfect match: Bahari destination in bali",
    )


def test_rank_orders_by_compatibility_descending():
    ranked = Ranker().rank([_match("a", 0.8), _match("b", 0.95), _match("c", 0.85)])
    assert [m.destination.name for m in ranked.matches] == ["b", "c", "a"]
    assert ranked.total == 3


def test_rank_ties_keep_incoming_order():
    incoming = [_match("a", 0.85), _match("b", 0.9), _match("c", 0.85), _match("d", 0.85)]
    ranked = Ranker().rank(incoming)
    assert [m.destination.name for m in ranked.matches] == ["b", "a", "c", "d"]


def test_rank_truncates_but_reports_total():
    incoming = [_match(f"p{i}", 0.8 + (i % 4) * 0.05) for i in range(15)]
    ranked = Ranker(limit=10).rank(incoming)

    assert len(ranked.matches) == 10
    assert ranked.total == 15
    scores = [m.compatibility_score for m in ranked.matches]
    assert scores == sorted(scores, reverse=True)


def test_rank_empty():
    ranked = Ranker().rank([])
    assert ranked.matches == []
    assert ranked.total == 0

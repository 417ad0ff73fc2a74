"""Mutual-like detection and greedy conflict resolution for swap events."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Final

from .votes import EligibleVote

# Reported in place of a missing preference order when summing scores.
UNRANKED_PREFERENCE: Final[int] = 9999


def effective_order(order: int | None) -> int:
    """Preference order used in the combined score."""
    return UNRANKED_PREFERENCE if order is None else order


def _order_key(order: int | None) -> tuple[bool, int]:
    return (order is None, order or 0)


@dataclass(frozen=True)
class CandidatePair:
    """A reciprocal like between two artworks owned by different artists.

    The pair is kept in canonical orientation: ``artwork1_id`` sorts before
    ``artwork2_id``.

    Attributes:
        artwork1_id: First artwork of the pair.
        artwork2_id: Second artwork of the pair.
        owner1_id: Artist who owns artwork1.
        owner2_id: Artist who owns artwork2.
        artist1_preference_order: Rank the owner of artwork2 gave artwork1.
        artist2_preference_order: Rank the owner of artwork1 gave artwork2.
    """

    artwork1_id: str
    artwork2_id: str
    owner1_id: str
    owner2_id: str
    artist1_preference_order: int | None = None
    artist2_preference_order: int | None = None

    @property
    def combined_score(self) -> int:
        """Sum of both ranks; lower is a stronger mutual preference."""
        return effective_order(self.artist1_preference_order) + effective_order(
            self.artist2_preference_order
        )

    @property
    def rank_key(self) -> tuple[int, int, str, str]:
        """Deterministic sort key.

        Lower combined score first. On equal scores a pair with fewer unranked
        votes wins, then artwork ids decide lexicographically.
        """
        orders = (self.artist1_preference_order, self.artist2_preference_order)
        unranked = sum(1 for o in orders if o is None)
        return (self.combined_score, unranked, self.artwork1_id, self.artwork2_id)

    @property
    def artwork_ids(self) -> tuple[str, str]:
        return (self.artwork1_id, self.artwork2_id)

    def to_dict(self) -> dict[str, Any]:
        """Public result shape of a resolved pair."""
        return {
            "artwork1_id": self.artwork1_id,
            "artwork2_id": self.artwork2_id,
            "artist1_preference_order": effective_order(self.artist1_preference_order),
            "artist2_preference_order": effective_order(self.artist2_preference_order),
            "combined_score": self.combined_score,
        }


def _best_votes(votes: Iterable[EligibleVote]) -> list[EligibleVote]:
    """Collapse duplicate (voter, artwork) votes to the most preferred one.

    Votes an artist cast on their own artwork are dropped.
    """
    best: dict[tuple[str, str], EligibleVote] = {}
    for vote in votes:
        if vote.voter_id == vote.owner_id:
            continue
        key = (vote.voter_id, vote.artwork_id)
        current = best.get(key)
        if current is None or _order_key(vote.preference_order) < _order_key(
            current.preference_order
        ):
            best[key] = vote
    return list(best.values())


def _orient(forward: EligibleVote, reverse: EligibleVote) -> CandidatePair:
    """Build a canonical pair from two reciprocal votes."""
    if forward.artwork_id <= reverse.artwork_id:
        first, second = forward, reverse
    else:
        first, second = reverse, forward
    return CandidatePair(
        artwork1_id=first.artwork_id,
        artwork2_id=second.artwork_id,
        owner1_id=first.owner_id,
        owner2_id=second.owner_id,
        artist1_preference_order=first.preference_order,
        artist2_preference_order=second.preference_order,
    )


def find_mutual_likes(votes: Iterable[EligibleVote]) -> list[CandidatePair]:
    """Find every artwork pair whose owners liked each other's artwork.

    Votes are indexed by (voter, owner of the voted artwork). For each vote of
    artist X on an artwork owned by Y, the index is probed at (Y, X) for the
    reverse edge, so the scan stays near-linear in the number of votes.

    Args:
        votes: Eligible (liked, finalized) votes.

    Returns:
        Candidate pairs in discovery order, each unordered pair once.
    """
    eligible = _best_votes(votes)

    by_edge: dict[tuple[str, str], list[EligibleVote]] = defaultdict(list)
    for vote in eligible:
        by_edge[(vote.voter_id, vote.owner_id)].append(vote)

    seen: set[tuple[str, str]] = set()
    pairs: list[CandidatePair] = []
    for vote in eligible:
        for reverse in by_edge.get((vote.owner_id, vote.voter_id), ()):
            pair = _orient(vote, reverse)
            # Both artworks must belong to different artists.
            if pair.owner1_id == pair.owner2_id or pair.artwork_ids in seen:
                continue
            seen.add(pair.artwork_ids)
            pairs.append(pair)
    return pairs


def resolve_conflicts(candidates: Sequence[CandidatePair]) -> list[CandidatePair]:
    """Greedily accept pairs so that no artwork is matched twice.

    Candidates are sorted once by ``rank_key`` and walked in order; a pair is
    accepted only when neither artwork has been claimed by an earlier pair.
    This is the greedy approximation of a minimum-weight matching.

    Args:
        candidates: Pairs produced by find_mutual_likes.

    Returns:
        Accepted pairs in ascending combined-score order.
    """
    ordered = tuple(sorted(candidates, key=lambda p: p.rank_key))
    claimed: dict[str, bool] = {}
    accepted: list[CandidatePair] = []

    for pair in ordered:
        if claimed.get(pair.artwork1_id) or claimed.get(pair.artwork2_id):
            continue
        claimed[pair.artwork1_id] = True
        claimed[pair.artwork2_id] = True
        accepted.append(pair)

    return accepted

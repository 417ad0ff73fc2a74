from .pairing import (
    UNRANKED_PREFERENCE,
    CandidatePair,
    effective_order,
    find_mutual_likes,
    resolve_conflicts,
)
from .service import MatchRunResult, MatchService, PersistFailure, calculate_matches
from .votes import EligibleVote, LoadedVotes, shape_votes

__all__ = [
    "UNRANKED_PREFERENCE",
    "CandidatePair",
    "EligibleVote",
    "LoadedVotes",
    "MatchRunResult",
    "MatchService",
    "PersistFailure",
    "calculate_matches",
    "effective_order",
    "find_mutual_likes",
    "resolve_conflicts",
    "shape_votes",
]

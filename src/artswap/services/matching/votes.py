"""Shape loaded vote rows into the records the detector works on."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

import structlog

from artswap.models import Artist, Artwork, Vote

logger = structlog.get_logger()


@dataclass(frozen=True)
class EligibleVote:
    """A liked, finalized vote enriched with the voted artwork's owner.

    Attributes:
        vote_id: Source vote id.
        voter_id: Artist who cast the vote.
        artwork_id: Artwork the vote was cast on.
        owner_id: Artist who owns ``artwork_id``.
        preference_order: Voter's rank for the artwork, None when unranked.
    """

    vote_id: str
    voter_id: str
    artwork_id: str
    owner_id: str
    preference_order: int | None = None


@dataclass
class LoadedVotes:
    """Votes that can take part in matching plus the count of dropped rows."""

    votes: list[EligibleVote] = field(default_factory=list)
    skipped: int = 0

    def __len__(self) -> int:
        return len(self.votes)


def _valid_order(vote: Vote) -> int | None:
    order = vote.preference_order
    if order is not None and order < 1:
        logger.warning("vote_rank_invalid", vote_id=vote.id, preference_order=order)
        return None
    return order


def shape_votes(rows: Iterable[tuple[Vote, Artwork | None, Artist | None]]) -> LoadedVotes:
    """Build eligible votes from (vote, artwork, artist) rows.

    Rows whose artwork or casting artist is missing are data-integrity faults.
    They are skipped and counted rather than failing the run. A preference
    order below 1 is not a valid rank and is treated as unranked.

    Args:
        rows: Vote rows joined with the voted artwork and the voter.

    Returns:
        LoadedVotes with the eligible records in row order.
    """
    loaded = LoadedVotes()
    for vote, artwork, artist in rows:
        if artwork is None or artist is None:
            loaded.skipped += 1
            logger.warning(
                "vote_skipped",
                vote_id=vote.id,
                missing="artwork" if artwork is None else "artist",
            )
            continue
        loaded.votes.append(
            EligibleVote(
                vote_id=vote.id,
                voter_id=vote.artist_id,
                artwork_id=vote.artwork_id,
                owner_id=artwork.artist_id,
                preference_order=_valid_order(vote),
            )
        )
    return loaded

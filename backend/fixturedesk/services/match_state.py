"""
Match State Machine

Validates and applies status / score changes to a single match.

    Scheduled -> In-Progress -> Completed

Walkover P1, Walkover P2 and Disqualified may be requested from any state;
they are never stored, but normalised to Completed with fixed scores:

    Walkover P1   -> 1-0, Completed
    Walkover P2   -> 0-1, Completed
    Disqualified  -> 0-0, Completed

Requesting Scheduled or In-Progress clears both scores. Requesting
Completed directly needs both scores set. Score edits never touch status.

Every accepted change appends one MatchHistoryEntry (old state, new state,
actor, reason, timestamp). History is append-only; a rejected change leaves
the match, including its history, exactly as it was.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Literal, Optional, Union

from fixturedesk.exceptions import InvalidScoreInput, MissingScores
from fixturedesk.schemas import Match, MatchHistoryEntry, MatchStatus, Tournament, utc_now
from fixturedesk.services.fixture_builder import find_match, splice_match

logger = logging.getLogger(__name__)

ScoreSide = Literal["P1", "P2"]

# Requested status -> (score_p1, score_p2) forced on completion
_FORCED_RESULTS: Dict[MatchStatus, tuple] = {
    MatchStatus.WALKOVER_P1: (1, 0),
    MatchStatus.WALKOVER_P2: (0, 1),
    MatchStatus.DISQUALIFIED: (0, 0),
}

_RESET_STATUSES = (MatchStatus.SCHEDULED, MatchStatus.IN_PROGRESS)


@dataclass(frozen=True)
class StatusChange:
    status: MatchStatus


@dataclass(frozen=True)
class ScoreEdit:
    side: ScoreSide
    value: Any  # raw operator input: int, numeric string, "" or None


MatchRequest = Union[StatusChange, ScoreEdit]


def parse_score_input(raw: Any) -> Optional[int]:
    """
    Parse an operator-entered score.

    None or blank string -> None (clears the score). Integers and integer
    strings -> int. Anything else raises InvalidScoreInput.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise InvalidScoreInput(raw)
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        if text == "":
            return None
        try:
            return int(text)
        except ValueError:
            raise InvalidScoreInput(raw) from None
    raise InvalidScoreInput(raw)


def _commit(match: Match, changes: Dict[str, Any], actor: str, reason: str, now: Optional[datetime]) -> Match:
    """Snapshot old/new state, append history, return the new match."""
    candidate = match.model_copy(update=changes)
    entry = MatchHistoryEntry(
        timestamp=now or utc_now(),
        changed_by=actor,
        old_state=match.state(),
        new_state=candidate.state(),
        reason=reason,
    )
    return candidate.model_copy(update={"history": [*match.history, entry]})


def apply_status(
    match: Match,
    requested: MatchStatus,
    actor: str,
    now: Optional[datetime] = None,
) -> Match:
    """Apply a requested status. Raises MissingScores for an unscored direct completion."""
    requested = MatchStatus(requested)

    if requested in _FORCED_RESULTS:
        score_p1, score_p2 = _FORCED_RESULTS[requested]
        changes = {"score_p1": score_p1, "score_p2": score_p2, "status": MatchStatus.COMPLETED}
    elif requested in _RESET_STATUSES:
        changes = {"score_p1": None, "score_p2": None, "status": requested}
    else:
        if match.score_p1 is None or match.score_p2 is None:
            logger.info("Rejected completion of match %s: scores not set", match.id)
            raise MissingScores(match.id)
        changes = {"status": MatchStatus.COMPLETED}

    return _commit(match, changes, actor, f"Status changed to {requested.value}", now)


def apply_score_edit(
    match: Match,
    side: ScoreSide,
    raw_value: Any,
    actor: str,
    now: Optional[datetime] = None,
) -> Match:
    """Set or clear one side's score. Raises InvalidScoreInput for non-numeric input."""
    if side not in ("P1", "P2"):
        raise ValueError(f"Invalid score side: {side}")
    try:
        value = parse_score_input(raw_value)
    except InvalidScoreInput:
        logger.info("Rejected score for match %s: %r is not a number", match.id, raw_value)
        raise
    field = "score_p1" if side == "P1" else "score_p2"
    return _commit(match, {field: value}, actor, f"Score updated for {side}", now)


def apply(match: Match, request: MatchRequest, actor: str, now: Optional[datetime] = None) -> Match:
    if isinstance(request, StatusChange):
        return apply_status(match, request.status, actor, now=now)
    if isinstance(request, ScoreEdit):
        return apply_score_edit(match, request.side, request.value, actor, now=now)
    raise TypeError(f"Unsupported match request: {request!r}")


def update_match_in_tournament(
    tournament: Tournament,
    match_id: str,
    request: MatchRequest,
    actor: str,
    now: Optional[datetime] = None,
) -> Tournament:
    """Find the match, apply the request, splice the result back in."""
    _, _, match = find_match(tournament, match_id)
    updated = apply(match, request, actor, now=now)
    return splice_match(tournament, updated)

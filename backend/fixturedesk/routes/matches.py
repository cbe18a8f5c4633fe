"""
Match runtime: status + scoring.

Each accepted change appends a history entry; rejected changes (missing
scores on completion, non-numeric score) return 422 and store nothing.
"""

from typing import Any, List, Literal, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlmodel import Session

from fixturedesk.config import DEFAULT_ACTOR
from fixturedesk.database import get_session
from fixturedesk.exceptions import FixtureDeskError
from fixturedesk.schemas import Match, MatchHistoryEntry, MatchStatus
from fixturedesk.services.document_store import save_document
from fixturedesk.services.fixture_builder import find_match
from fixturedesk.services.match_state import MatchRequest, ScoreEdit, StatusChange, update_match_in_tournament
from fixturedesk.utils.document_guards import require_tournament, to_http_error

router = APIRouter()


class MatchStatusUpdate(BaseModel):
    status: MatchStatus
    actor: Optional[str] = None


class MatchScoreUpdate(BaseModel):
    side: Literal["P1", "P2"]
    value: Any = None  # validated by parse_score_input
    actor: Optional[str] = None


def _apply(session: Session, tournament_id: str, match_id: str, request: MatchRequest, actor: Optional[str]) -> Match:
    tournament = require_tournament(session, tournament_id)
    try:
        tournament = update_match_in_tournament(tournament, match_id, request, actor or DEFAULT_ACTOR)
        _, _, match = find_match(tournament, match_id)
    except FixtureDeskError as exc:
        raise to_http_error(exc)
    save_document(session, tournament)
    return match


@router.patch("/tournaments/{tournament_id}/matches/{match_id}/status", response_model=Match)
def update_match_status(
    tournament_id: str,
    match_id: str,
    payload: MatchStatusUpdate,
    session: Session = Depends(get_session),
) -> Match:
    """Scheduled / In-Progress reset scores; Walkover P1/P2 and Disqualified complete with fixed scores"""
    return _apply(session, tournament_id, match_id, StatusChange(payload.status), payload.actor)


@router.patch("/tournaments/{tournament_id}/matches/{match_id}/score", response_model=Match)
def update_match_score(
    tournament_id: str,
    match_id: str,
    payload: MatchScoreUpdate,
    session: Session = Depends(get_session),
) -> Match:
    """Set one side's score; empty value clears it"""
    return _apply(session, tournament_id, match_id, ScoreEdit(payload.side, payload.value), payload.actor)


@router.get("/tournaments/{tournament_id}/matches/{match_id}/history", response_model=List[MatchHistoryEntry])
def get_match_history(tournament_id: str, match_id: str, session: Session = Depends(get_session)):
    """Audit trail for a match, oldest first"""
    tournament = require_tournament(session, tournament_id)
    try:
        _, _, match = find_match(tournament, match_id)
    except FixtureDeskError as exc:
        raise to_http_error(exc)
    return match.history

"""
Document Guards and Utilities

Reusable route helpers:
- Load a stored tournament or 404
- Translate service errors into HTTPException
"""

from fastapi import HTTPException
from sqlmodel import Session

from fixturedesk.exceptions import (
    FixtureDeskError,
    MatchNotFound,
    TournamentNotFound,
)
from fixturedesk.schemas import Tournament
from fixturedesk.services.document_store import load_document


def require_tournament(session: Session, tournament_id: str) -> Tournament:
    """
    Load a tournament document, otherwise raise 404.

    Raises:
        HTTPException 404: Tournament not found
    """
    try:
        return load_document(session, tournament_id)
    except TournamentNotFound:
        raise HTTPException(status_code=404, detail="Tournament not found") from None


def to_http_error(exc: FixtureDeskError) -> HTTPException:
    """Map a service error to the HTTP error the routes raise.

    Not-found kinds -> 404, everything else -> 422 with the error message.
    """
    if isinstance(exc, (MatchNotFound, TournamentNotFound)):
        return HTTPException(status_code=404, detail=str(exc))
    return HTTPException(status_code=422, detail=str(exc))

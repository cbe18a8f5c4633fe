"""
Public read-only API endpoints.

No auth required. Used by the spectator pages: published tournaments,
their player list and their fixtures board. A tournament that is not
published answers NOT_PUBLISHED instead of its data.
"""

import logging
from typing import Dict, List, Optional, Union

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlmodel import Session

from fixturedesk.database import get_session
from fixturedesk.schemas import CategoryFixture, Match, MatchStatus
from fixturedesk.services import public_view
from fixturedesk.services.document_store import list_documents
from fixturedesk.utils.document_guards import require_tournament

logger = logging.getLogger(__name__)

router = APIRouter()

_FINISHED = {
    MatchStatus.COMPLETED,
    MatchStatus.WALKOVER_P1,
    MatchStatus.WALKOVER_P2,
    MatchStatus.DISQUALIFIED,
}


# ── Response models ──────────────────────────────────────────────────────


class PublicTournamentItem(BaseModel):
    tournament_id: str
    name: str


class PublicPlayer(BaseModel):
    name: str
    mobile_number: str
    categories: List[str]


class PublicPlayersResponse(BaseModel):
    tournament_name: str
    types: List[str]
    categories: List[str]
    players: List[PublicPlayer]


class PublicMatchRow(BaseModel):
    match_id: str
    player1: str
    player2: str
    status: str
    score_display: Optional[str] = None  # "21 - 17" once finished


class PublicGroup(BaseModel):
    name: str
    players: List[str]
    matches: List[PublicMatchRow]


class PublicFixture(BaseModel):
    category: str
    event_type: str
    groups: List[PublicGroup]


class PublicFixturesResponse(BaseModel):
    tournament_name: str
    available_groups: List[str]
    fixtures: List[PublicFixture]


class NotPublishedResponse(BaseModel):
    status: str = "NOT_PUBLISHED"
    message: str = "Tournament not yet published. Please check back later."


# ── Helpers ──────────────────────────────────────────────────────────────


def _match_row(match: Match, names: Dict[str, str]) -> PublicMatchRow:
    score = None
    if match.status in _FINISHED:
        score = f"{match.score_p1} - {match.score_p2}"
    return PublicMatchRow(
        match_id=match.id,
        player1=names.get(match.player1_id, "TBD"),
        player2=names.get(match.player2_id, "TBD"),
        status=match.status.value,
        score_display=score,
    )


def _public_fixture(fixture: CategoryFixture, names: Dict[str, str]) -> PublicFixture:
    return PublicFixture(
        category=fixture.category,
        event_type=fixture.event_type,
        groups=[
            PublicGroup(
                name=group.name,
                players=[names.get(pid, "TBD") for pid in group.player_ids],
                matches=[_match_row(m, names) for m in group.matches],
            )
            for group in fixture.groups
        ],
    )


# ── Endpoints ────────────────────────────────────────────────────────────


@router.get("/public/tournaments", response_model=List[PublicTournamentItem])
def public_tournament_list(session: Session = Depends(get_session)):
    """Published tournaments only, oldest first."""
    return [
        PublicTournamentItem(tournament_id=row.id, name=row.name)
        for row in list_documents(session, published_only=True)
    ]


@router.get(
    "/public/tournaments/{tournament_id}/players",
    response_model=Union[PublicPlayersResponse, NotPublishedResponse],
)
def public_players(
    tournament_id: str,
    search: Optional[str] = Query(None, description="Substring of name (any case) or mobile number"),
    category: Optional[str] = Query(None, description="Category name, or All"),
    session: Session = Depends(get_session),
):
    tournament = require_tournament(session, tournament_id)
    if not tournament.is_published:
        return NotPublishedResponse()

    players = public_view.filter_players(tournament.players, search=search, category=category)
    return PublicPlayersResponse(
        tournament_name=tournament.settings.name,
        types=tournament.settings.types,
        categories=tournament.settings.categories,
        players=[
            PublicPlayer(name=p.name, mobile_number=p.mobile_number, categories=p.categories)
            for p in players
        ],
    )


@router.get(
    "/public/tournaments/{tournament_id}/fixtures",
    response_model=Union[PublicFixturesResponse, NotPublishedResponse],
)
def public_fixtures(
    tournament_id: str,
    category: Optional[str] = Query(None, description="Category name, or All"),
    group: Optional[str] = Query(None, description="Group name within the category, or All"),
    session: Session = Depends(get_session),
):
    tournament = require_tournament(session, tournament_id)
    if not tournament.is_published:
        return NotPublishedResponse()

    names = {p.id: p.name for p in tournament.players}
    fixtures = public_view.filter_fixtures(tournament.fixtures, category=category, group=group)
    logger.debug("Public fixtures for %s: %d after filters", tournament_id, len(fixtures))
    return PublicFixturesResponse(
        tournament_name=tournament.settings.name,
        available_groups=public_view.available_groups(tournament.fixtures, category),
        fixtures=[_public_fixture(f, names) for f in fixtures],
    )

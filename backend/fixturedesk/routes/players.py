"""Player registration endpoints, including bulk CSV import."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel
from sqlmodel import Session

from fixturedesk.database import get_session
from fixturedesk.exceptions import InvalidImportFile, InvalidPlayer
from fixturedesk.schemas import Player
from fixturedesk.services import player_roster
from fixturedesk.services.document_store import save_document
from fixturedesk.utils.document_guards import require_tournament, to_http_error

router = APIRouter()


class PlayerCreate(BaseModel):
    name: str
    mobile_number: str
    categories: List[str] = []
    fee_paid: bool = False


class PlayerImportRequest(BaseModel):
    csv_text: str


class PlayerImportResponse(BaseModel):
    tournament_id: str
    added: int
    skipped: int
    invalid: int = 0
    warnings: List[str]


def _require_player(tournament, player_id: str) -> None:
    if not any(p.id == player_id for p in tournament.players):
        raise HTTPException(status_code=404, detail="Player not found")


@router.post("/tournaments/{tournament_id}/players", response_model=Player, status_code=201)
def add_player(tournament_id: str, payload: PlayerCreate, session: Session = Depends(get_session)):
    tournament = require_tournament(session, tournament_id)
    player = Player(**payload.model_dump())
    try:
        tournament = player_roster.add_player(tournament, player)
    except InvalidPlayer as exc:
        raise to_http_error(exc)
    save_document(session, tournament)
    return player


@router.put("/tournaments/{tournament_id}/players/{player_id}", response_model=Player)
def update_player(
    tournament_id: str,
    player_id: str,
    payload: PlayerCreate,
    session: Session = Depends(get_session),
):
    tournament = require_tournament(session, tournament_id)
    _require_player(tournament, player_id)
    player = Player(id=player_id, **payload.model_dump())
    try:
        tournament = player_roster.update_player(tournament, player)
    except InvalidPlayer as exc:
        raise to_http_error(exc)
    save_document(session, tournament)
    return player


@router.delete("/tournaments/{tournament_id}/players/{player_id}", status_code=204)
def delete_player(tournament_id: str, player_id: str, session: Session = Depends(get_session)):
    tournament = require_tournament(session, tournament_id)
    _require_player(tournament, player_id)
    try:
        tournament = player_roster.remove_player(tournament, player_id)
    except InvalidPlayer as exc:
        raise to_http_error(exc)
    save_document(session, tournament)
    return Response(status_code=204)


@router.post("/tournaments/{tournament_id}/players/import", response_model=PlayerImportResponse)
def import_players(tournament_id: str, payload: PlayerImportRequest, session: Session = Depends(get_session)):
    """Bulk add players from CSV text (Name, MobileNumber, Categories, Paid(Y/N))"""
    tournament = require_tournament(session, tournament_id)
    try:
        result = player_roster.import_players_csv(tournament, payload.csv_text)
    except InvalidImportFile as exc:
        raise to_http_error(exc)
    save_document(session, result.tournament)
    return PlayerImportResponse(
        tournament_id=tournament_id,
        added=result.added,
        skipped=result.skipped,
        invalid=result.invalid,
        warnings=result.warnings,
    )

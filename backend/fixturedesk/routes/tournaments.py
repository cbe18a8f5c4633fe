from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, ConfigDict, field_validator
from sqlmodel import Session

from fixturedesk.database import get_session
from fixturedesk.exceptions import DuplicateCategory, PublishBlocked
from fixturedesk.schemas import Tournament, TournamentSettings
from fixturedesk.services import publishing, tournament_setup
from fixturedesk.services.document_store import delete_document, list_documents, save_document
from fixturedesk.utils.document_guards import require_tournament, to_http_error

router = APIRouter()


class TournamentCreate(BaseModel):
    name: str
    types: List[str] = []
    categories: List[str] = []

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("name is required")
        return v.strip()


class SettingsUpdate(BaseModel):
    name: Optional[str] = None
    types: Optional[List[str]] = None
    categories: Optional[List[str]] = None


class CategoryRename(BaseModel):
    old_name: str
    new_name: str


class TournamentSummary(BaseModel):
    id: str
    name: str
    status: str
    is_published: bool
    gist_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


@router.get("/tournaments", response_model=List[TournamentSummary])
def list_tournaments(session: Session = Depends(get_session)):
    """List stored tournaments (summary columns only)"""
    return list_documents(session)


@router.post("/tournaments", response_model=Tournament, status_code=201)
def create_tournament(payload: TournamentCreate, session: Session = Depends(get_session)):
    """Create an empty Draft tournament"""
    tournament = tournament_setup.new_tournament(TournamentSettings(**payload.model_dump()))
    save_document(session, tournament)
    return tournament


@router.get("/tournaments/{tournament_id}", response_model=Tournament)
def get_tournament(tournament_id: str, session: Session = Depends(get_session)):
    return require_tournament(session, tournament_id)


@router.delete("/tournaments/{tournament_id}", status_code=204)
def delete_tournament(tournament_id: str, session: Session = Depends(get_session)):
    require_tournament(session, tournament_id)
    delete_document(session, tournament_id)
    return Response(status_code=204)


@router.put("/tournaments/{tournament_id}/settings", response_model=Tournament)
def update_settings(tournament_id: str, payload: SettingsUpdate, session: Session = Depends(get_session)):
    """Partial update of name / types / categories"""
    tournament = require_tournament(session, tournament_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    settings = tournament.settings.model_copy(update=changes)
    tournament = tournament_setup.update_settings(tournament, settings)
    save_document(session, tournament)
    return tournament


@router.post("/tournaments/{tournament_id}/categories/rename", response_model=Tournament)
def rename_category(tournament_id: str, payload: CategoryRename, session: Session = Depends(get_session)):
    """Rename a category across settings, players and fixtures"""
    tournament = require_tournament(session, tournament_id)
    if payload.old_name not in tournament.settings.categories:
        raise HTTPException(status_code=404, detail=f"Category {payload.old_name} not found")
    try:
        tournament = tournament_setup.rename_category(tournament, payload.old_name, payload.new_name)
    except DuplicateCategory as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    save_document(session, tournament)
    return tournament


# ============================================================================
# Backup / restore
# ============================================================================


@router.get("/tournaments/{tournament_id}/document")
def export_document(tournament_id: str, session: Session = Depends(get_session)):
    """Full tournament document in its stored JSON shape (backup)"""
    return require_tournament(session, tournament_id).to_document()


@router.put("/tournaments/{tournament_id}/document", response_model=Tournament)
def restore_document(tournament_id: str, document: Tournament, session: Session = Depends(get_session)):
    """Overwrite (or create) the stored document from a backup. The path id wins."""
    tournament = document.model_copy(update={"id": tournament_id})
    save_document(session, tournament)
    return tournament


# ============================================================================
# Publish controls
# ============================================================================


@router.post("/tournaments/{tournament_id}/publish", response_model=Tournament)
def publish_tournament(tournament_id: str, session: Session = Depends(get_session)):
    tournament = require_tournament(session, tournament_id)
    try:
        tournament = publishing.publish(tournament)
    except PublishBlocked as exc:
        raise to_http_error(exc)
    save_document(session, tournament)
    return tournament


@router.post("/tournaments/{tournament_id}/unpublish", response_model=Tournament)
def unpublish_tournament(tournament_id: str, session: Session = Depends(get_session)):
    tournament = publishing.unpublish(require_tournament(session, tournament_id))
    save_document(session, tournament)
    return tournament

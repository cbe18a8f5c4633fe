"""
Fixture generation endpoints.

Regenerating a (category, type) key discards every group, match and
history entry it had. The core does that unconditionally, so the confirm
step lives here: the caller must send replace_existing=true when fixtures
already exist for the key, otherwise 409.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlmodel import Session

from fixturedesk.database import get_session
from fixturedesk.exceptions import FixtureDeskError
from fixturedesk.schemas import CategoryFixture
from fixturedesk.services import fixture_builder
from fixturedesk.services.document_store import save_document
from fixturedesk.utils.document_guards import require_tournament, to_http_error

logger = logging.getLogger(__name__)

router = APIRouter()


class FixtureGenerateRequest(BaseModel):
    category: str
    event_type: str
    replace_existing: bool = False


@router.get("/tournaments/{tournament_id}/fixtures", response_model=List[CategoryFixture])
def list_fixtures(tournament_id: str, session: Session = Depends(get_session)):
    return require_tournament(session, tournament_id).fixtures


@router.post(
    "/tournaments/{tournament_id}/fixtures/generate",
    response_model=CategoryFixture,
    status_code=201,
)
def generate_fixtures(tournament_id: str, payload: FixtureGenerateRequest, session: Session = Depends(get_session)):
    """Partition the category's players into groups and build each group's round robin"""
    tournament = require_tournament(session, tournament_id)

    if payload.category not in tournament.settings.categories:
        raise HTTPException(status_code=422, detail=f"Unknown category: {payload.category}")
    if payload.event_type not in tournament.settings.types:
        raise HTTPException(status_code=422, detail=f"Unknown event type: {payload.event_type}")

    if fixture_builder.has_fixture(tournament, payload.category, payload.event_type) and not payload.replace_existing:
        raise HTTPException(
            status_code=409,
            detail=(
                f"Fixtures already exist for {payload.category} / {payload.event_type}. "
                "Regenerating discards all matches and scores; resend with replace_existing=true to confirm."
            ),
        )

    try:
        tournament = fixture_builder.build(tournament, payload.category, payload.event_type)
    except FixtureDeskError as exc:
        raise to_http_error(exc)

    save_document(session, tournament)
    return tournament.fixtures[-1]


@router.put("/tournaments/{tournament_id}/fixtures", response_model=List[CategoryFixture])
def upload_fixtures(
    tournament_id: str,
    fixtures: List[CategoryFixture],
    session: Session = Depends(get_session),
):
    """Replace all fixtures with a hand-built list (custom fixture upload)"""
    tournament = require_tournament(session, tournament_id)
    try:
        tournament = fixture_builder.replace_all_fixtures(tournament, fixtures)
    except FixtureDeskError as exc:
        raise to_http_error(exc)
    save_document(session, tournament)
    logger.info("Uploaded %d custom fixtures for tournament %s", len(fixtures), tournament_id)
    return tournament.fixtures

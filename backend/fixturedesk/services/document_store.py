"""
Tournament document store.

save_document / load_document are the storage seam: whatever is saved comes
back structurally identical on load. Summary columns (name, status ...) are
denormalised from the document for listing.
"""

import logging
from typing import List

from sqlmodel import Session, select

from fixturedesk.exceptions import TournamentNotFound
from fixturedesk.models.tournament_document import TournamentDocument
from fixturedesk.schemas import Tournament

logger = logging.getLogger(__name__)


def save_document(session: Session, tournament: Tournament) -> str:
    """Insert or overwrite the stored document. Returns its id."""
    row = session.get(TournamentDocument, tournament.id)
    if row is None:
        row = TournamentDocument(id=tournament.id)
    row.name = tournament.settings.name
    row.status = tournament.status
    row.is_published = tournament.is_published
    row.gist_id = tournament.gist_id
    row.document_json = tournament.to_document()
    session.add(row)
    session.commit()
    logger.debug("Saved tournament document %s", tournament.id)
    return tournament.id


def load_document(session: Session, tournament_id: str) -> Tournament:
    row = session.get(TournamentDocument, tournament_id)
    if row is None:
        raise TournamentNotFound(tournament_id)
    return Tournament.model_validate(row.document_json)


def list_documents(session: Session, published_only: bool = False) -> List[TournamentDocument]:
    statement = select(TournamentDocument)
    if published_only:
        statement = statement.where(TournamentDocument.is_published == True)
    return list(session.exec(statement.order_by(TournamentDocument.created_at)).all())


def delete_document(session: Session, tournament_id: str) -> None:
    row = session.get(TournamentDocument, tournament_id)
    if row is None:
        raise TournamentNotFound(tournament_id)
    session.delete(row)
    session.commit()

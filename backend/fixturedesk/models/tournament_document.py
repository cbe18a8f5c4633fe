from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import JSON
from sqlmodel import Column, Field, SQLModel

from fixturedesk.schemas import utc_now


class TournamentDocument(SQLModel, table=True):
    """One stored tournament document, keyed by the document's own id."""

    id: str = Field(primary_key=True)
    name: str = Field(default="")
    status: str = Field(default="Draft")  # "Draft" | "Publishing" | "Published"
    is_published: bool = Field(default=False)
    gist_id: Optional[str] = Field(default=None)  # remote backup id, if synced

    # Full camelCase document as produced by Tournament.to_document()
    document_json: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

"""
Tournament document schema.

The document is the unit of storage and backup: one JSON object per
tournament holding its settings, players and fixtures. Field names on the
wire are camelCase (``mobileNumber``, ``scoreP1``, ``changedBy`` ...);
Python attributes are snake_case and either spelling is accepted on input.

All models are frozen. Services derive new values with ``model_copy(update=...)``
instead of mutating in place.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MIN_GROUP_SIZE = 4
MAX_GROUP_SIZE = 6
MAX_PLAYER_CATEGORIES = 2


def new_id(prefix: str) -> str:
    """Mint a fresh identifier such as ``match-3f9c0d1e2a4b``."""
    return f"{prefix}-{uuid4().hex[:12]}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DocumentModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class MatchStatus(str, Enum):
    SCHEDULED = "Scheduled"
    IN_PROGRESS = "In-Progress"
    COMPLETED = "Completed"
    WALKOVER_P1 = "Walkover P1"
    WALKOVER_P2 = "Walkover P2"
    DISQUALIFIED = "Disqualified"


TournamentStatus = Literal["Draft", "Publishing", "Published"]
FixtureFormat = Literal["RoundRobin", "Knockout"]


class Player(DocumentModel):
    id: str = Field(default_factory=lambda: new_id("player"))
    name: str
    mobile_number: str
    categories: List[str] = Field(default_factory=list)
    fee_paid: bool = False


class MatchState(DocumentModel):
    """Snapshot of the mutable part of a match, as recorded in history."""

    score_p1: Optional[int] = Field(default=None, alias="scoreP1")
    score_p2: Optional[int] = Field(default=None, alias="scoreP2")
    status: MatchStatus


class MatchHistoryEntry(DocumentModel):
    timestamp: datetime
    changed_by: str
    old_state: MatchState
    new_state: MatchState
    reason: str


class Match(DocumentModel):
    id: str = Field(default_factory=lambda: new_id("match"))
    player1_id: Optional[str] = Field(default=None, alias="player1Id")
    player2_id: Optional[str] = Field(default=None, alias="player2Id")
    score_p1: Optional[int] = Field(default=None, alias="scoreP1")
    score_p2: Optional[int] = Field(default=None, alias="scoreP2")
    status: MatchStatus = MatchStatus.SCHEDULED
    history: List[MatchHistoryEntry] = Field(default_factory=list)

    # Reserved for knockout draws; carried through storage untouched
    round_name: Optional[str] = None
    next_match_id: Optional[str] = None
    next_match_player_index: Optional[Literal[0, 1]] = None

    def state(self) -> MatchState:
        return MatchState(score_p1=self.score_p1, score_p2=self.score_p2, status=self.status)


class Group(DocumentModel):
    id: str = Field(default_factory=lambda: new_id("group"))
    name: str
    player_ids: List[str] = Field(default_factory=list)
    matches: List[Match] = Field(default_factory=list)


class CategoryFixture(DocumentModel):
    category: str
    event_type: str = Field(alias="type")
    format: FixtureFormat = "RoundRobin"
    groups: List[Group] = Field(default_factory=list)
    knockout_matches: Optional[List[Match]] = None

    def key(self):
        return (self.category, self.event_type)


class TournamentSettings(DocumentModel):
    name: str = ""
    types: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)


class Tournament(DocumentModel):
    id: str = Field(default_factory=lambda: new_id("tourn"))
    created_at: datetime = Field(default_factory=utc_now)
    settings: TournamentSettings = Field(default_factory=TournamentSettings)
    players: List[Player] = Field(default_factory=list)
    fixtures: List[CategoryFixture] = Field(default_factory=list)
    is_published: bool = False
    status: TournamentStatus = "Draft"
    gist_id: Optional[str] = None

    def players_in_category(self, category: str) -> List[Player]:
        return [p for p in self.players if category in p.categories]

    def to_document(self) -> dict:
        """JSON-ready dict in the stored camelCase shape."""
        return self.model_dump(mode="json", by_alias=True)

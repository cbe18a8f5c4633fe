"""Tournament settings: name, event types and categories."""

import logging
from typing import Optional

from fixturedesk.exceptions import DuplicateCategory
from fixturedesk.schemas import Tournament, TournamentSettings

logger = logging.getLogger(__name__)

DEFAULT_EVENT_TYPES = ["Men Singles", "Men Doubles", "Women Singles", "Women Doubles", "Mixed Doubles"]
DEFAULT_CATEGORIES = ["Open", "30+", "40+", "50+", "60+", "70+"]


def new_tournament(settings: Optional[TournamentSettings] = None) -> Tournament:
    return Tournament(settings=settings or TournamentSettings())


def update_settings(tournament: Tournament, settings: TournamentSettings) -> Tournament:
    return tournament.model_copy(update={"settings": settings})


def rename_category(tournament: Tournament, old_name: str, new_name: str) -> Tournament:
    """
    Rename a category everywhere it is referenced.

    Settings, player memberships and fixture keys all move to the new name;
    matches and history are kept.
    """
    new_name = new_name.strip()
    if not new_name or new_name == old_name:
        return tournament
    if new_name in tournament.settings.categories:
        raise DuplicateCategory("Category name already exists!")

    def _swap(cat: str) -> str:
        return new_name if cat == old_name else cat

    settings = tournament.settings.model_copy(
        update={"categories": [_swap(c) for c in tournament.settings.categories]}
    )
    players = [p.model_copy(update={"categories": [_swap(c) for c in p.categories]}) for p in tournament.players]
    fixtures = [f.model_copy(update={"category": _swap(f.category)}) for f in tournament.fixtures]

    logger.info(
        "Renamed category %r -> %r (%d players, %d fixtures)",
        old_name,
        new_name,
        sum(1 for p in tournament.players if old_name in p.categories),
        sum(1 for f in tournament.fixtures if f.category == old_name),
    )
    return tournament.model_copy(update={"settings": settings, "players": players, "fixtures": fixtures})

"""Publish controls: a tournament goes public only once it has something to show."""

from typing import Optional

from fixturedesk.exceptions import PublishBlocked
from fixturedesk.schemas import Tournament


def publish_blockers(tournament: Tournament) -> Optional[str]:
    """Return the first reason the tournament cannot be published, or None."""
    if not tournament.settings.name:
        return "Tournament name is not set."
    if not tournament.settings.types:
        return "No tournament types selected."
    if not tournament.settings.categories:
        return "No player categories selected."
    if not tournament.players:
        return "No players have been registered."
    if not tournament.fixtures:
        return "No fixtures have been generated."
    return None


def publish(tournament: Tournament) -> Tournament:
    reason = publish_blockers(tournament)
    if reason:
        raise PublishBlocked(reason)
    return tournament.model_copy(update={"is_published": True, "status": "Published"})


def unpublish(tournament: Tournament) -> Tournament:
    return tournament.model_copy(update={"is_published": False, "status": "Draft"})

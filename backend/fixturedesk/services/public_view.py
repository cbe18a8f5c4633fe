"""
Public View

Read-only filtering for the spectator pages: the player list (search +
category) and the fixtures board (category + group). "All" or an empty
value means no filter.
"""

from typing import List, Optional, Sequence

from fixturedesk.schemas import CategoryFixture, Player

ALL = "All"


def _is_set(value: Optional[str]) -> bool:
    return bool(value) and value != ALL


def filter_players(
    players: Sequence[Player],
    search: Optional[str] = None,
    category: Optional[str] = None,
) -> List[Player]:
    """
    Players whose name (case-insensitive) or mobile number contains `search`
    and who are registered in `category`.

    Sorted by mobile number, then name, so one person's entries sit together.
    """
    term = (search or "").strip()
    result = []
    for player in players:
        if term and term.lower() not in player.name.lower() and term not in player.mobile_number:
            continue
        if _is_set(category) and category not in player.categories:
            continue
        result.append(player)
    return sorted(result, key=lambda p: (p.mobile_number, p.name.casefold()))


def filter_fixtures(
    fixtures: Sequence[CategoryFixture],
    category: Optional[str] = None,
    group: Optional[str] = None,
) -> List[CategoryFixture]:
    """Fixtures for `category`, narrowed to groups named `group`; fixtures left without groups are dropped."""
    result = [f for f in fixtures if not _is_set(category) or f.category == category]
    if _is_set(group):
        result = [f.model_copy(update={"groups": [g for g in f.groups if g.name == group]}) for f in result]
        result = [f for f in result if f.groups]
    return result


def available_groups(fixtures: Sequence[CategoryFixture], category: Optional[str]) -> List[str]:
    """Group names offered by the group filter; empty until a category is chosen."""
    if not _is_set(category):
        return []
    for fixture in fixtures:
        if fixture.category == category:
            return [g.name for g in fixture.groups]
    return []

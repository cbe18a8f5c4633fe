"""
Fixture Builder

Orchestrates partitioning + round robin generation for one
(category, event type) key and swaps the result into the tournament.
Also holds the identifier-based helpers used to locate and replace a
single match inside a tournament document.
"""

import logging
import random
from typing import List, Optional, Sequence, Tuple

from fixturedesk.exceptions import InvalidFixture, MatchNotFound
from fixturedesk.schemas import CategoryFixture, Group, Match, Tournament
from fixturedesk.services import group_partitioner, round_robin

logger = logging.getLogger(__name__)


def has_fixture(tournament: Tournament, category: str, event_type: str) -> bool:
    """True if fixtures already exist for the key (regeneration would discard them)."""
    return any(f.key() == (category, event_type) for f in tournament.fixtures)


def build_category_fixture(
    tournament: Tournament,
    category: str,
    event_type: str,
    rng: Optional[random.Random] = None,
) -> CategoryFixture:
    """Partition the category's players and expand each group into its round robin."""
    players = tournament.players_in_category(category)
    groups = group_partitioner.partition(players, rng=rng)
    groups = [g.model_copy(update={"matches": round_robin.generate(g)}) for g in groups]
    return CategoryFixture(category=category, event_type=event_type, format="RoundRobin", groups=groups)


def build(
    tournament: Tournament,
    category: str,
    event_type: str,
    rng: Optional[random.Random] = None,
) -> Tournament:
    """
    Generate round robin fixtures for (category, event_type).

    Any existing fixture for the same key is dropped along with all of its
    matches and history. Each call reshuffles and mints new ids.

    Raises:
        InsufficientPlayers / UnpartitionableCount from the partitioner; the
        input tournament is untouched in that case.
    """
    fixture = build_category_fixture(tournament, category, event_type, rng=rng)

    if has_fixture(tournament, category, event_type):
        logger.warning(
            "Replacing existing fixtures for %s / %s in tournament %s",
            category,
            event_type,
            tournament.id,
        )

    others = [f for f in tournament.fixtures if f.key() != (category, event_type)]
    logger.info(
        "Generated fixtures for %s / %s: group sizes %s, %d matches",
        category,
        event_type,
        [len(g.player_ids) for g in fixture.groups],
        sum(len(g.matches) for g in fixture.groups),
    )
    return tournament.model_copy(update={"fixtures": [*others, fixture]})


def validate_fixtures(fixtures: Sequence[CategoryFixture]) -> None:
    """
    Check a hand-built fixture list before it replaces the stored one.

    Each (category, type) key may appear once, and every group match must
    pair two different members of its own group.

    Raises:
        InvalidFixture naming the first offending fixture, group or match.
    """
    seen = set()
    for fixture in fixtures:
        if fixture.key() in seen:
            raise InvalidFixture(f"Duplicate fixtures for {fixture.category} / {fixture.event_type}")
        seen.add(fixture.key())

        for group in fixture.groups:
            members = set(group.player_ids)
            for match in group.matches:
                if None in (match.player1_id, match.player2_id) or match.player1_id == match.player2_id:
                    raise InvalidFixture(f"Match {match.id} in {group.name} needs two different players")
                if match.player1_id not in members or match.player2_id not in members:
                    raise InvalidFixture(f"Match {match.id} has a player who is not in {group.name}")


def replace_all_fixtures(tournament: Tournament, fixtures: Sequence[CategoryFixture]) -> Tournament:
    """Swap the whole fixture list, e.g. for a hand-built upload. Raises InvalidFixture."""
    validate_fixtures(fixtures)
    return tournament.model_copy(update={"fixtures": list(fixtures)})


# ============================================================================
# Match lookup / splice
# ============================================================================


def find_match(tournament: Tournament, match_id: str) -> Tuple[CategoryFixture, Group, Match]:
    """Locate a match by id. Raises MatchNotFound."""
    for fixture in tournament.fixtures:
        for group in fixture.groups:
            for match in group.matches:
                if match.id == match_id:
                    return fixture, group, match
    raise MatchNotFound(match_id)


def splice_match(tournament: Tournament, updated: Match) -> Tournament:
    """Return a new tournament with the match of the same id replaced by `updated`."""
    find_match(tournament, updated.id)

    def _replace(matches: List[Match]) -> List[Match]:
        return [updated if m.id == updated.id else m for m in matches]

    fixtures = [
        f.model_copy(
            update={"groups": [g.model_copy(update={"matches": _replace(g.matches)}) for g in f.groups]}
        )
        for f in tournament.fixtures
    ]
    return tournament.model_copy(update={"fixtures": fixtures})

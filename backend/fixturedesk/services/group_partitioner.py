"""
Group Partitioning - Balanced Round Robin Groups

Splits a category's players into groups of MIN_GROUP_SIZE..MAX_GROUP_SIZE
members using every player exactly once.
"""

import logging
import random
from math import ceil, floor
from string import ascii_uppercase
from typing import List, Optional, Sequence

from fixturedesk.exceptions import InsufficientPlayers, UnpartitionableCount
from fixturedesk.schemas import MAX_GROUP_SIZE, MIN_GROUP_SIZE, Group, Player

logger = logging.getLogger(__name__)


# ============================================================================
# Group Count / Size Computation
# ============================================================================


def group_count(player_count: int) -> int:
    """
    Compute number of groups for a category.

    Deterministic rule:
        min_groups = ceil(n / MAX_GROUP_SIZE)
        max_groups = floor(n / MIN_GROUP_SIZE)
        groups_count = max_groups

    Picking the most groups keeps groups small, so each round robin is
    short.

    Examples:
    - 4 players  -> 1 group
    - 8 players  -> 2 groups
    - 11 players -> 2 groups
    - 12 players -> 3 groups

    Raises:
        InsufficientPlayers: n < MIN_GROUP_SIZE
        UnpartitionableCount: min_groups > max_groups (n = 7)
    """
    if player_count < MIN_GROUP_SIZE:
        raise InsufficientPlayers(player_count, MIN_GROUP_SIZE)

    min_groups = ceil(player_count / MAX_GROUP_SIZE)
    max_groups = floor(player_count / MIN_GROUP_SIZE)
    if min_groups > max_groups:
        raise UnpartitionableCount(player_count, MIN_GROUP_SIZE, MAX_GROUP_SIZE)
    return max_groups


def group_sizes(player_count: int) -> List[int]:
    """
    Compute size for each group.

    Algorithm:
    - base_size = floor(n / groups_count)
    - remainder = n % groups_count
    - First `remainder` groups have size (base_size + 1)
    - Remaining groups have size base_size
    """
    groups_count = group_count(player_count)
    base_size = player_count // groups_count
    remainder = player_count % groups_count
    return [base_size + 1 if i < remainder else base_size for i in range(groups_count)]


def group_label(index: int) -> str:
    """0 -> 'A', 25 -> 'Z', 26 -> 'AA', 27 -> 'AB' ..."""
    label = ""
    index += 1
    while index > 0:
        index, rem = divmod(index - 1, len(ascii_uppercase))
        label = ascii_uppercase[rem] + label
    return label


# ============================================================================
# Partition
# ============================================================================


def partition(players: Sequence[Player], rng: Optional[random.Random] = None) -> List[Group]:
    """
    Shuffle players and slice them into balanced groups.

    Groups are named "Group A", "Group B", ... in creation order and come
    back with no matches; see round_robin.generate.

    Args:
        players: Eligible players for one category
        rng: Random source for the shuffle (module-level random if omitted)

    Returns:
        List of groups covering every player exactly once
    """
    sizes = group_sizes(len(players))

    shuffled = list(players)
    (rng or random).shuffle(shuffled)

    groups: List[Group] = []
    start = 0
    for index, size in enumerate(sizes):
        members = shuffled[start:start + size]
        start += size
        groups.append(
            Group(
                name=f"Group {group_label(index)}",
                player_ids=[p.id for p in members],
                matches=[],
            )
        )

    logger.debug("Partitioned %d players into groups of sizes %s", len(players), sizes)
    return groups

"""
Round Robin Generation

Expands a group into one match per unordered pair of members. Pairs are
enumerated by nested ascending index traversal over the group's member
list, so the same member order always yields the same match order:

    k=4:  (0,1) (0,2) (0,3) (1,2) (1,3) (2,3)
"""

from typing import Iterator, List, Tuple

from fixturedesk.exceptions import GroupTooSmall
from fixturedesk.schemas import Group, Match, MatchStatus


def rr_match_count(group_size: int) -> int:
    """Return number of RR matches in a group: C(k, 2) = k*(k-1)/2."""
    return (group_size * (group_size - 1)) // 2


def round_robin_pairs(group_size: int) -> Iterator[Tuple[int, int]]:
    """Yield 0-based index pairs (i, j), i < j, in nested ascending order."""
    for i in range(group_size):
        for j in range(i + 1, group_size):
            yield i, j


def generate(group: Group) -> List[Match]:
    """
    Produce the full round robin for a group.

    Every match starts Scheduled with null scores and an empty history.
    Raises GroupTooSmall for groups with fewer than two members.
    """
    members = group.player_ids
    if len(members) < 2:
        raise GroupTooSmall(f"{group.name} has {len(members)} member(s); at least 2 are required")

    return [
        Match(
            player1_id=members[i],
            player2_id=members[j],
            score_p1=None,
            score_p2=None,
            status=MatchStatus.SCHEDULED,
            history=[],
        )
        for i, j in round_robin_pairs(len(members))
    ]

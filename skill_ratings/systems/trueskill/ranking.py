"""Stable ordering of teams by observed rank."""

from typing import List, Sequence, Tuple, TypeVar

from ...base.errors import DimensionMismatch

T = TypeVar("T")


def sort_by_rank(teams: Sequence[T], ranks: Sequence[int]) -> Tuple[List[T], List[int]]:
    """
    Order teams best-first by rank without touching the caller's sequences.

    The sort is stable: tied teams keep their input order, so position i
    and i+1 of the result always identify a "better or tied" pair.

    Returns:
        (sorted_teams, sorted_ranks) as new lists
    """
    if len(teams) != len(ranks):
        raise DimensionMismatch(
            f"Number of teams [{len(teams)}] does not match number of ranks [{len(ranks)}]"
        )
    order = sorted(range(len(ranks)), key=lambda i: ranks[i])
    return [teams[i] for i in order], [ranks[i] for i in order]


def is_draw(sorted_ranks: Sequence[int], i: int) -> bool:
    """Whether sorted team i tied with sorted team i+1."""
    return sorted_ranks[i] == sorted_ranks[i + 1]

"""Team container: an ordered roster of player -> Rating."""

from typing import Dict, Hashable, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .rating import Rating


class Team:
    """
    Ordered mapping of player to Rating, with optional partial play.

    Partial play is the fraction of the match (0 to 1) a player took part
    in. It only affects the factor graph calculator; the closed-form
    calculators treat every player as fully present.

    Example:
        >>> team = Team({"alice": Rating(25, 8.3), "bob": Rating(30, 4.0)})
        >>> team = team.add("carol", Rating(20, 6.0), partial_play=0.5)
        >>> team.player_count
        3
    """

    def __init__(
        self,
        ratings: Optional[Union[Mapping[Hashable, Rating], Iterable[Tuple[Hashable, Rating]]]] = None,
        partial_play: Optional[Mapping[Hashable, float]] = None,
    ):
        self._ratings: Dict[Hashable, Rating] = {}
        self._partial_play: Dict[Hashable, float] = {}

        if ratings is not None:
            items = ratings.items() if isinstance(ratings, Mapping) else ratings
            for player, rating in items:
                self.add(player, rating)

        if partial_play:
            for player, weight in partial_play.items():
                if player not in self._ratings:
                    raise KeyError(f"partial play given for unknown player {player!r}")
                self._partial_play[player] = _check_weight(weight)

    @classmethod
    def single(cls, player: Hashable, rating: Rating) -> "Team":
        """Team of exactly one player."""
        return cls({player: rating})

    def add(self, player: Hashable, rating: Rating, partial_play: float = 1.0) -> "Team":
        """Add (or replace) a player. Returns self for chaining."""
        self._ratings[player] = rating
        self._partial_play[player] = _check_weight(partial_play)
        return self

    @property
    def player_count(self) -> int:
        return len(self._ratings)

    @property
    def players(self) -> List[Hashable]:
        return list(self._ratings)

    def rating(self, player: Hashable) -> Rating:
        return self._ratings[player]

    def partial_play(self, player: Hashable) -> float:
        return self._partial_play.get(player, 1.0)

    def has_partial_play(self) -> bool:
        """True if any player took part in less than the full match."""
        return any(w != 1.0 for w in self._partial_play.values())

    def items(self):
        return self._ratings.items()

    def mean_sum(self) -> float:
        """Sum of player means (team performance mean)."""
        return sum(r.mean for r in self._ratings.values())

    def variance_sum(self) -> float:
        """Sum of player variances (team performance variance, excluding beta)."""
        return sum(r.variance for r in self._ratings.values())

    def __len__(self) -> int:
        return len(self._ratings)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._ratings)

    def __contains__(self, player) -> bool:
        return player in self._ratings

    def __repr__(self) -> str:
        body = ", ".join(f"{p!r}: {r}" for p, r in self._ratings.items())
        return f"Team({{{body}}})"


def _check_weight(weight: float) -> float:
    weight = float(weight)
    if not 0.0 <= weight <= 1.0:
        raise ValueError(f"partial play must be in [0, 1], got {weight}")
    return weight

"""Rating values, game parameters and the per-player result container."""

from dataclasses import dataclass
from typing import Dict, Hashable

import polars as pl

from .errors import InvalidGameInfo


@dataclass(frozen=True)
class Rating:
    """
    A player's skill belief: a Gaussian N(mean, stddev^2).

    Ratings are immutable values. Calculators never modify a Rating, they
    return new ones in a PlayerRatings mapping.
    """

    mean: float
    stddev: float

    @property
    def variance(self) -> float:
        return self.stddev * self.stddev

    def conservative_rating(self, k: float = 3.0) -> float:
        """
        Conservative skill estimate: mean - k * stddev.

        With the default k=3 the true skill is above this value with ~99%
        confidence, which makes it a reasonable leaderboard key.
        """
        return self.mean - k * self.stddev

    def __str__(self) -> str:
        return f"{{μ:{self.mean:.6g} σ:{self.stddev:.6g}}}"


@dataclass(frozen=True)
class GameInfo:
    """Parameters describing one kind of game.

    Default values follow the original TrueSkill paper:
    - initial_mean = 25
    - initial_stddev = 25/3 (three stddevs cover the 0-50 range)
    - beta = 25/6 (performance noise, half a skill class)
    - dynamics_factor = 25/300 (skill drift added per match)
    - draw_probability = 0.10
    """

    initial_mean: float = 25.0
    initial_stddev: float = 25.0 / 3.0
    beta: float = 25.0 / 6.0
    dynamics_factor: float = 25.0 / 300.0
    draw_probability: float = 0.10

    def __post_init__(self):
        if not self.beta > 0.0:
            raise InvalidGameInfo(f"beta must be positive, got {self.beta}")
        if not self.initial_stddev > 0.0:
            raise InvalidGameInfo(f"initial_stddev must be positive, got {self.initial_stddev}")
        if self.dynamics_factor < 0.0:
            raise InvalidGameInfo(f"dynamics_factor must be >= 0, got {self.dynamics_factor}")
        if not 0.0 <= self.draw_probability < 1.0:
            raise InvalidGameInfo(
                f"draw_probability must be in [0, 1), got {self.draw_probability}"
            )

    def default_rating(self) -> Rating:
        """Rating given to a player with no history."""
        return Rating(self.initial_mean, self.initial_stddev)


DEFAULT_GAME_INFO = GameInfo()


class PlayerRatings(Dict[Hashable, Rating]):
    """
    Mapping of player -> new Rating, as returned by every calculator.

    Players are whatever hashable tokens the caller put in its teams;
    nothing is invented here.
    """

    def to_dataframe(self, k: float = 3.0) -> pl.DataFrame:
        """Convert ratings to a Polars DataFrame, one row per player."""
        players = list(self.keys())
        ratings = list(self.values())
        return pl.DataFrame({
            "player": [str(p) for p in players],
            "mean": [r.mean for r in ratings],
            "stddev": [r.stddev for r in ratings],
            "conservative": [r.conservative_rating(k) for r in ratings],
        })

    def __repr__(self) -> str:
        body = ", ".join(f"{p!r}: {r}" for p, r in self.items())
        return f"PlayerRatings({{{body}}})"

"""Abstract base class for skill calculators."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Sequence

from .errors import DimensionMismatch, InvalidCardinality
from .rating import GameInfo, PlayerRatings
from .team import Team


class CalculatorType(Enum):
    """How a calculator arrives at its answer."""

    CLOSED_FORM = auto()  # Exact formula (two players, two teams)
    ITERATIVE = auto()    # Approximate inference via message passing


@dataclass(frozen=True)
class CountRange:
    """Inclusive range of allowed counts; max_count=None means unbounded."""

    min_count: int
    max_count: Optional[int] = None

    @classmethod
    def exactly(cls, n: int) -> "CountRange":
        return cls(n, n)

    @classmethod
    def at_least(cls, n: int) -> "CountRange":
        return cls(n, None)

    def __contains__(self, n: int) -> bool:
        if n < self.min_count:
            return False
        return self.max_count is None or n <= self.max_count

    def __str__(self) -> str:
        if self.max_count is None:
            return f"[{self.min_count}, inf)"
        if self.max_count == self.min_count:
            return f"exactly {self.min_count}"
        return f"[{self.min_count}, {self.max_count}]"


class SkillCalculator(ABC):
    """
    Abstract base class for all TrueSkill calculators.

    Subclasses declare the team and player counts they support and must
    implement:
    - _calculate_new_ratings(): posterior ratings for validated input
    - _calculate_match_quality(): draw probability for validated input

    The base class provides:
    - calculate_new_ratings(): validate, then update
    - calculate_match_quality(): validate, then score
    - supports(): whether a set of teams fits this calculator
    """

    calculator_type: CalculatorType = CalculatorType.CLOSED_FORM
    team_range: CountRange = CountRange.at_least(2)
    player_range: CountRange = CountRange.at_least(1)
    supports_partial_play: bool = False

    def calculate_new_ratings(
        self,
        game_info: GameInfo,
        teams: Sequence[Team],
        ranks: Sequence[int],
    ) -> PlayerRatings:
        """
        Calculate new ratings from prior ratings and a game outcome.

        Args:
            game_info: Parameters of the game being rated
            teams: Teams that took part, each a player -> Rating mapping
            ranks: Rank of each team, parallel to teams. Use 1 for first
                place; repeat a number for a tie (e.g. 1, 2, 2)

        Returns:
            PlayerRatings with a new Rating for every player in teams

        Raises:
            InvalidCardinality: Team or player counts not supported
            DimensionMismatch: len(ranks) != len(teams)
        """
        self.validate(teams, ranks)
        return self._calculate_new_ratings(game_info, teams, ranks)

    def calculate_match_quality(self, game_info: GameInfo, teams: Sequence[Team]) -> float:
        """
        Calculate the match quality as the likelihood of all teams drawing.

        0 means a badly matched game, 1 a perfectly even one.
        """
        self.validate(teams)
        return self._calculate_match_quality(game_info, teams)

    def validate(self, teams: Sequence[Team], ranks: Optional[Sequence[int]] = None) -> None:
        """
        Raise InvalidCardinality if teams do not fit this calculator, or
        DimensionMismatch if ranks are given and not parallel to teams.
        """
        if len(teams) not in self.team_range:
            raise InvalidCardinality(
                f"len(teams) [{len(teams)}] outside of expected range [{self.team_range}]"
            )
        for team in teams:
            if team.player_count not in self.player_range:
                raise InvalidCardinality(
                    f"PlayerCount [{team.player_count}] outside of expected range [{self.player_range}]"
                )
        if ranks is not None and len(ranks) != len(teams):
            raise DimensionMismatch(
                f"Number of teams [{len(teams)}] does not match number of ranks [{len(ranks)}]"
            )

    def supports(self, teams: Sequence[Team]) -> bool:
        """Whether this calculator can rate the given teams."""
        if len(teams) not in self.team_range:
            return False
        if any(t.player_count not in self.player_range for t in teams):
            return False
        if not self.supports_partial_play and any(t.has_partial_play() for t in teams):
            return False
        return True

    @abstractmethod
    def _calculate_new_ratings(
        self,
        game_info: GameInfo,
        teams: Sequence[Team],
        ranks: Sequence[int],
    ) -> PlayerRatings:
        pass

    @abstractmethod
    def _calculate_match_quality(self, game_info: GameInfo, teams: Sequence[Team]) -> float:
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(teams={self.team_range}, players={self.player_range})"

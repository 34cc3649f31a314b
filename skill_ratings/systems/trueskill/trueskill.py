"""
TrueSkill rating system - calculator selection and convenience API.

TrueSkill models player skill as a Gaussian distribution N(mu, sigma^2),
where mu is the estimated skill and sigma represents uncertainty.

Based on:
Herbrich, Minka, Graepel (2006). "TrueSkill: A Bayesian Skill Rating System"

Three calculators implement the same update:
- TwoPlayerCalculator: closed form, 1 vs 1
- TwoTeamCalculator: closed form, team vs team
- FactorGraphCalculator: message passing, any number of teams, partial play

TrueSkill picks the cheapest one that supports a given game.
"""

import logging
import math
from typing import Hashable, List, Optional, Sequence

from ...base import DEFAULT_GAME_INFO, GameInfo, PlayerRatings, Rating, SkillCalculator, Team
from ...numerics.gaussian import cdf
from .n_team import FactorGraphCalculator
from .two_player import TwoPlayerCalculator
from .two_team import TwoTeamCalculator

logger = logging.getLogger(__name__)


class TrueSkill:
    """
    TrueSkill rating environment.

    Parameters:
        game_info: Game parameters (default: mu=25, sigma=25/3, beta=25/6,
            tau=25/300, draw probability 10%)
        max_iterations: Message passing cap for games needing the factor graph
        tolerance: Message passing convergence threshold

    Example:
        >>> ts = TrueSkill()
        >>> alice, bob = ts.create_rating(), ts.create_rating()
        >>> new = ts.rate([Team.single("alice", alice), Team.single("bob", bob)], [1, 2])
        >>> new["alice"].mean > alice.mean
        True
        >>> ts.quality([Team.single("alice", alice), Team.single("bob", bob)])  # doctest: +ELLIPSIS
        0.447...
    """

    def __init__(
        self,
        game_info: Optional[GameInfo] = None,
        max_iterations: int = 100,
        tolerance: float = 1e-4,
    ):
        self.game_info = game_info or DEFAULT_GAME_INFO
        self._factor_graph = FactorGraphCalculator(max_iterations=max_iterations, tolerance=tolerance)
        self._calculators: List[SkillCalculator] = [
            TwoPlayerCalculator(),
            TwoTeamCalculator(),
            self._factor_graph,
        ]

    def create_rating(self, mean: Optional[float] = None, stddev: Optional[float] = None) -> Rating:
        """New rating, defaulting to the game's initial mean and stddev."""
        default = self.game_info.default_rating()
        return Rating(
            default.mean if mean is None else mean,
            default.stddev if stddev is None else stddev,
        )

    def calculator_for(self, teams: Sequence[Team]) -> SkillCalculator:
        """
        Cheapest calculator that supports teams.

        Falls through to the factor graph calculator, which raises
        InvalidCardinality itself for unusable input (fewer than two teams
        or an empty team).
        """
        for calculator in self._calculators:
            if calculator.supports(teams):
                return calculator
        return self._factor_graph

    def rate(self, teams: Sequence[Team], ranks: Sequence[int]) -> PlayerRatings:
        """
        New ratings for every player after a game.

        Args:
            teams: Teams that took part
            ranks: Rank per team, lower is better, equal ranks are a tie

        Returns:
            PlayerRatings mapping each player to its posterior Rating
        """
        calculator = self.calculator_for(teams)
        logger.debug("Rating %d teams with %s", len(teams), calculator.__class__.__name__)
        return calculator.calculate_new_ratings(self.game_info, teams, ranks)

    def quality(self, teams: Sequence[Team]) -> float:
        """Probability of a draw under current ratings (0 = lopsided, 1 = even)."""
        return self.calculator_for(teams).calculate_match_quality(self.game_info, teams)

    def probability_of_ranking(self, teams: Sequence[Team], ranks: Sequence[int]) -> float:
        """
        Probability of ranks occurring given the current ratings.

        Always evaluated on the factor graph, whatever the game size.
        """
        return self._factor_graph.calculate_probability_of_ranking(self.game_info, teams, ranks)

    def win_probability(self, team_a: Team, team_b: Team) -> float:
        """
        Probability that team_a beats team_b.

        P = Phi((sum mu_a - sum mu_b) / sqrt(sum sigma^2 + n * beta^2))
        """
        total_players = team_a.player_count + team_b.player_count
        beta_sq = self.game_info.beta * self.game_info.beta
        c = math.sqrt(team_a.variance_sum() + team_b.variance_sum() + total_players * beta_sq)
        return cdf((team_a.mean_sum() - team_b.mean_sum()) / c)

    def rate_1vs1(self, winner: Hashable, winner_rating: Rating, loser: Hashable,
                  loser_rating: Rating, drawn: bool = False) -> PlayerRatings:
        """Shortcut for a single game between two players."""
        teams = [Team.single(winner, winner_rating), Team.single(loser, loser_rating)]
        return self.rate(teams, [1, 1] if drawn else [1, 2])

    def __repr__(self) -> str:
        gi = self.game_info
        return (
            f"TrueSkill(mu={gi.initial_mean:.3f}, sigma={gi.initial_stddev:.3f}, "
            f"beta={gi.beta:.3f}, tau={gi.dynamics_factor:.3f}, "
            f"draw_probability={gi.draw_probability:.1%})"
        )

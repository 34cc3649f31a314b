"""
TrueSkill calculator for any number of teams, built on the factor graph.

Supports ties anywhere in the ranking and partial play per player. Match
quality is the multivariate generalisation of equation 4.1 in the
TrueSkill paper, evaluated with dense matrices.
"""

import logging
import math
from typing import Sequence

import numpy as np

from ...base import (
    CalculatorType,
    CountRange,
    GameInfo,
    PlayerRatings,
    SkillCalculator,
    Team,
)
from ...numerics import matrix
from .factor_graph import TrueSkillFactorGraph, partial_play_weight
from .ranking import sort_by_rank

logger = logging.getLogger(__name__)


def player_means_vector(teams: Sequence[Team]) -> np.ndarray:
    """Column vector of all player means, team by team."""
    return matrix.column_vector([r.mean for team in teams for _, r in team.items()])


def player_covariance_matrix(teams: Sequence[Team]) -> np.ndarray:
    """Diagonal matrix of all player variances, team by team."""
    return matrix.diagonal([r.variance for team in teams for _, r in team.items()])


def player_team_assignment_matrix(teams: Sequence[Team]) -> np.ndarray:
    """
    The "A" matrix: players x (teams - 1).

    Column i compares team i with team i + 1: players of team i get their
    partial play weight, players of team i + 1 the negated weight. For
    example, with team 1 = p1, team 2 = p2 (25%) and p3 (75%), team 3 = p4:

        |  1.00  0.00 |
        | -0.25  0.25 |
        | -0.75  0.75 |
        |  0.00 -1.00 |
    """
    total_players = sum(team.player_count for team in teams)
    a = np.zeros((total_players, len(teams) - 1), dtype=np.float64)

    offsets = np.cumsum([0] + [team.player_count for team in teams])
    for col in range(len(teams) - 1):
        for k, player in enumerate(teams[col]):
            a[offsets[col] + k, col] = partial_play_weight(teams[col], player)
        for k, player in enumerate(teams[col + 1]):
            a[offsets[col + 1] + k, col] = -partial_play_weight(teams[col + 1], player)
    return a


class FactorGraphCalculator(SkillCalculator):
    """
    TrueSkill calculator using the full factor graph.

    Handles two or more teams of one or more players, ties and partial
    play. Ratings come from approximate message passing, so they match the
    closed-form calculators only up to the convergence tolerance.

    Parameters:
        max_iterations: Cap on message passing sweeps (default: 100)
        tolerance: Convergence threshold on marginal change (default: 1e-4)

    Example:
        >>> calc = FactorGraphCalculator()
        >>> teams = [Team.single(p, GameInfo().default_rating()) for p in "abc"]
        >>> new = calc.calculate_new_ratings(GameInfo(), teams, [1, 2, 3])
        >>> round(new["a"].mean, 1)
        31.7
    """

    calculator_type = CalculatorType.ITERATIVE
    team_range = CountRange.at_least(2)
    player_range = CountRange.at_least(1)
    supports_partial_play = True

    def __init__(self, max_iterations: int = 100, tolerance: float = 1e-4):
        if max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {max_iterations}")
        self.max_iterations = max_iterations
        self.tolerance = tolerance

    def calculate_probability_of_ranking(
        self,
        game_info: GameInfo,
        teams: Sequence[Team],
        ranks: Sequence[int],
    ) -> float:
        """
        Probability of the observed ranking under the current ratings.

        This is the evidence of the converged factor graph: for two teams
        it is exact, for more it is the usual message passing estimate.

        Raises:
            InvalidCardinality: Team or player counts not supported
            DimensionMismatch: len(ranks) != len(teams)
            ConvergenceFailed: Message passing did not settle
        """
        self.validate(teams, ranks)
        probability = self._solve(game_info, teams, ranks).probability_of_ranking()
        logger.debug("Probability of ranking %s: %.4g", list(ranks), probability)
        return probability

    def _solve(
        self,
        game_info: GameInfo,
        teams: Sequence[Team],
        ranks: Sequence[int],
    ) -> TrueSkillFactorGraph:
        sorted_teams, sorted_ranks = sort_by_rank(teams, ranks)

        graph = TrueSkillFactorGraph(
            game_info,
            sorted_teams,
            sorted_ranks,
            max_iterations=self.max_iterations,
            tolerance=self.tolerance,
        )
        graph.run_schedule()
        return graph

    def _calculate_new_ratings(
        self,
        game_info: GameInfo,
        teams: Sequence[Team],
        ranks: Sequence[int],
    ) -> PlayerRatings:
        return self._solve(game_info, teams, ranks).updated_ratings()

    def _calculate_match_quality(self, game_info: GameInfo, teams: Sequence[Team]) -> float:
        means = player_means_vector(teams)
        means_t = matrix.transpose(means)
        skills = player_covariance_matrix(teams)

        a = player_team_assignment_matrix(teams)
        a_t = matrix.transpose(a)

        beta_sq = game_info.beta * game_info.beta

        start = matrix.multiply(means_t, a)
        a_ta = beta_sq * matrix.multiply(a_t, a)
        a_tsa = matrix.multiply(matrix.multiply(a_t, skills), a)
        middle = a_ta + a_tsa

        middle_inverse = matrix.inverse(middle)
        end = matrix.multiply(a_t, means)

        exp_part = -0.5 * float(matrix.multiply(matrix.multiply(start, middle_inverse), end)[0, 0])
        sqrt_part = matrix.determinant(a_ta) / matrix.determinant(middle)

        quality = math.exp(exp_part) * math.sqrt(sqrt_part)
        logger.debug("Match quality for %d teams: %.4f", len(teams), quality)
        return quality

    def __repr__(self) -> str:
        return (
            f"FactorGraphCalculator(max_iterations={self.max_iterations}, "
            f"tolerance={self.tolerance})"
        )

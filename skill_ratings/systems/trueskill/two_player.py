"""
Closed-form TrueSkill update for two players.

With exactly two players the factor graph collapses to a single truncated
Gaussian, so each player's update can be written down directly:

- c = sqrt(sigma_1^2 + sigma_2^2 + 2 * beta^2)
- mean' = mean + rank_multiplier * (sigma^2 + tau^2) / c * v
- sigma' = sqrt((sigma^2 + tau^2) * (1 - w * (sigma^2 + tau^2) / c^2))

This is the bare minimum a TrueSkill implementation needs; the other
calculators generalize it.
"""

import logging
import math
from enum import IntEnum
from typing import Sequence

from ...base import CalculatorType, CountRange, GameInfo, PlayerRatings, Rating, SkillCalculator, Team
from .draw_margin import draw_margin_from_draw_probability
from .ranking import is_draw, sort_by_rank
from .truncation import (
    v_exceeds_margin_c,
    v_within_margin_c,
    w_exceeds_margin_c,
    w_within_margin_c,
)

logger = logging.getLogger(__name__)


class Comparison(IntEnum):
    """Outcome from one side's point of view; the value is its rank multiplier."""

    LOSE = -1
    DRAW = 0
    WIN = 1


def outcome_corrections(comparison: Comparison, mean_delta: float, draw_margin: float, c: float):
    """
    V, W and rank multiplier for one side of a two-sided comparison.

    mean_delta is always winning mean minus losing mean, so the multiplier
    only has to flip the sign for the loser. Draws use +1 for both sides;
    the direction is already encoded in mean_delta.
    """
    if comparison == Comparison.DRAW:
        v = v_within_margin_c(mean_delta, draw_margin, c)
        w = w_within_margin_c(mean_delta, draw_margin, c)
        return v, w, 1.0

    v = v_exceeds_margin_c(mean_delta, draw_margin, c)
    w = w_exceeds_margin_c(mean_delta, draw_margin, c)
    return v, w, float(comparison)


def calculate_new_rating(
    game_info: GameInfo,
    self_rating: Rating,
    opponent_rating: Rating,
    comparison: Comparison,
) -> Rating:
    """
    Posterior rating of one player after a 1v1 game.

    Args:
        game_info: Game parameters
        self_rating: Prior rating of the player being updated
        opponent_rating: Prior rating of the opponent
        comparison: Outcome from self's point of view

    Returns:
        New Rating for self
    """
    draw_margin = draw_margin_from_draw_probability(game_info.draw_probability, game_info.beta)

    c = math.sqrt(
        self_rating.variance + opponent_rating.variance + 2.0 * game_info.beta * game_info.beta
    )

    winning_mean = self_rating.mean
    losing_mean = opponent_rating.mean
    if comparison == Comparison.LOSE:
        winning_mean, losing_mean = losing_mean, winning_mean

    v, w, rank_multiplier = outcome_corrections(
        comparison, winning_mean - losing_mean, draw_margin, c
    )

    variance_with_dynamics = self_rating.variance + game_info.dynamics_factor ** 2
    mean_multiplier = variance_with_dynamics / c
    stddev_multiplier = variance_with_dynamics / (c * c)

    new_mean = self_rating.mean + rank_multiplier * mean_multiplier * v
    new_stddev = math.sqrt(variance_with_dynamics * (1.0 - w * stddev_multiplier))

    return Rating(new_mean, new_stddev)


class TwoPlayerCalculator(SkillCalculator):
    """
    TrueSkill calculator for exactly two players (one per team).

    Example:
        >>> calc = TwoPlayerCalculator()
        >>> teams = [Team.single("a", Rating(25, 25 / 3)), Team.single("b", Rating(25, 25 / 3))]
        >>> new = calc.calculate_new_ratings(GameInfo(), teams, [1, 2])
        >>> round(new["a"].mean, 3)
        29.396
    """

    calculator_type = CalculatorType.CLOSED_FORM
    team_range = CountRange.exactly(2)
    player_range = CountRange.exactly(1)

    def _calculate_new_ratings(
        self,
        game_info: GameInfo,
        teams: Sequence[Team],
        ranks: Sequence[int],
    ) -> PlayerRatings:
        sorted_teams, sorted_ranks = sort_by_rank(teams, ranks)

        # Each team holds exactly one player
        winner, winner_prior = next(iter(sorted_teams[0].items()))
        loser, loser_prior = next(iter(sorted_teams[1].items()))

        was_draw = is_draw(sorted_ranks, 0)
        logger.debug("Two-player update: %r vs %r (draw=%s)", winner, loser, was_draw)

        new_ratings = PlayerRatings()
        new_ratings[winner] = calculate_new_rating(
            game_info, winner_prior, loser_prior,
            Comparison.DRAW if was_draw else Comparison.WIN,
        )
        new_ratings[loser] = calculate_new_rating(
            game_info, loser_prior, winner_prior,
            Comparison.DRAW if was_draw else Comparison.LOSE,
        )
        return new_ratings

    def _calculate_match_quality(self, game_info: GameInfo, teams: Sequence[Team]) -> float:
        # Equation 4.1 on page 8 of the TrueSkill 2006 paper
        rating_1 = next(iter(teams[0].items()))[1]
        rating_2 = next(iter(teams[1].items()))[1]

        two_beta_sq = 2.0 * game_info.beta * game_info.beta
        total = two_beta_sq + rating_1.variance + rating_2.variance
        mean_delta = rating_1.mean - rating_2.mean

        sqrt_part = math.sqrt(two_beta_sq / total)
        exp_part = math.exp(-(mean_delta * mean_delta) / (2.0 * total))
        return sqrt_part * exp_part

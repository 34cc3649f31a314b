"""
Closed-form TrueSkill update for two teams of any size.

Team performance is the sum of its players' performances, so with two
teams there is still only one truncated Gaussian and no factor graph is
needed. V and W are computed once for the pair of teams; each player then
moves in proportion to its own variance, so players with tight priors
move less than teammates with loose ones.
"""

import logging
import math
from typing import Sequence

from ...base import CalculatorType, CountRange, GameInfo, PlayerRatings, Rating, SkillCalculator, Team
from .draw_margin import draw_margin_from_draw_probability
from .ranking import is_draw, sort_by_rank
from .two_player import Comparison, outcome_corrections

logger = logging.getLogger(__name__)


def update_team_ratings(
    game_info: GameInfo,
    new_ratings: PlayerRatings,
    self_team: Team,
    other_team: Team,
    comparison: Comparison,
) -> None:
    """
    Write posterior ratings for every player of self_team into new_ratings.

    Args:
        game_info: Game parameters
        new_ratings: Output mapping (filled in place)
        self_team: Team being updated
        other_team: Opposing team
        comparison: Outcome from self_team's point of view
    """
    draw_margin = draw_margin_from_draw_probability(game_info.draw_probability, game_info.beta)
    beta_sq = game_info.beta * game_info.beta
    tau_sq = game_info.dynamics_factor * game_info.dynamics_factor

    total_players = self_team.player_count + other_team.player_count

    c = math.sqrt(
        self_team.variance_sum() + other_team.variance_sum() + total_players * beta_sq
    )

    winning_mean = self_team.mean_sum()
    losing_mean = other_team.mean_sum()
    if comparison == Comparison.LOSE:
        winning_mean, losing_mean = losing_mean, winning_mean

    v, w, rank_multiplier = outcome_corrections(
        comparison, winning_mean - losing_mean, draw_margin, c
    )

    for player, prior in self_team.items():
        variance_with_dynamics = prior.variance + tau_sq
        mean_multiplier = variance_with_dynamics / c
        stddev_multiplier = variance_with_dynamics / (c * c)

        new_mean = prior.mean + rank_multiplier * mean_multiplier * v
        new_stddev = math.sqrt(variance_with_dynamics * (1.0 - w * stddev_multiplier))
        new_ratings[player] = Rating(new_mean, new_stddev)


class TwoTeamCalculator(SkillCalculator):
    """
    TrueSkill calculator for exactly two teams with one or more players each.

    Partial play is not supported; every player counts fully.
    """

    calculator_type = CalculatorType.CLOSED_FORM
    team_range = CountRange.exactly(2)
    player_range = CountRange.at_least(1)

    def _calculate_new_ratings(
        self,
        game_info: GameInfo,
        teams: Sequence[Team],
        ranks: Sequence[int],
    ) -> PlayerRatings:
        sorted_teams, sorted_ranks = sort_by_rank(teams, ranks)
        winning_team, losing_team = sorted_teams

        was_draw = is_draw(sorted_ranks, 0)
        logger.debug(
            "Two-team update: %d vs %d players (draw=%s)",
            winning_team.player_count, losing_team.player_count, was_draw,
        )

        new_ratings = PlayerRatings()
        update_team_ratings(
            game_info, new_ratings, winning_team, losing_team,
            Comparison.DRAW if was_draw else Comparison.WIN,
        )
        update_team_ratings(
            game_info, new_ratings, losing_team, winning_team,
            Comparison.DRAW if was_draw else Comparison.LOSE,
        )
        return new_ratings

    def _calculate_match_quality(self, game_info: GameInfo, teams: Sequence[Team]) -> float:
        team_1, team_2 = teams
        total_players = team_1.player_count + team_2.player_count

        # Equation 4.1 of the TrueSkill paper, with n * beta^2 for n players
        beta_sq_players = game_info.beta * game_info.beta * total_players
        total = beta_sq_players + team_1.variance_sum() + team_2.variance_sum()
        mean_delta = team_1.mean_sum() - team_2.mean_sum()

        sqrt_part = math.sqrt(beta_sq_players / total)
        exp_part = math.exp(-0.5 * mean_delta * mean_delta / total)
        return exp_part * sqrt_part

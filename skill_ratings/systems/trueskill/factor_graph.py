"""
TrueSkill factor graph and its message passing schedule.

The graph for a game with teams sorted best-first:

    skill_ij  <- PriorFactor (N(mu, sigma^2 + tau^2))
      |  LikelihoodFactor (beta^2)
    perf_ij
      |  SumFactor (weights = partial play)
    team_perf_i
      |  SumFactor (+1, -1) over teams i and i+1
    team_diff_i
      |  TruncateFactor (exceeds or within the draw margin)

Variables live in a VariableArena and are referred to by index, so factors
and variables never point at each other. Messages flow down from the
priors, iterate along the chain of team differences until the truncation
marginals stop moving, then flow back up to the skills.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Hashable, List, Sequence

from ...base import ConvergenceFailed, GameInfo, PlayerRatings, Rating, Team
from ...numerics.gaussian import Gaussian, absolute_difference, log_product_normalization
from .draw_margin import draw_margin_from_draw_probability
from .factors import Factor, LikelihoodFactor, PriorFactor, SumFactor, TruncateFactor
from .ranking import is_draw

logger = logging.getLogger(__name__)

# A zero weight makes the team-sum factor singular
MIN_PARTIAL_PLAY = 1e-4


def partial_play_weight(team: Team, player: Hashable) -> float:
    return max(MIN_PARTIAL_PLAY, team.partial_play(player))


class VariableArena:
    """
    Indexed storage for variable marginals.

    A new variable starts uninformative. The two update methods keep a
    factor's stored message and the variable marginal consistent and return
    how far the marginal moved.
    """

    def __init__(self):
        self._values: List[Gaussian] = []
        self.names: List[str] = []

    def create(self, name: str = "") -> int:
        self._values.append(Gaussian.uninformative())
        self.names.append(name)
        return len(self._values) - 1

    def __getitem__(self, index: int) -> Gaussian:
        return self._values[index]

    def __len__(self) -> int:
        return len(self._values)

    def _set(self, index: int, value: Gaussian) -> float:
        delta = absolute_difference(self._values[index], value)
        self._values[index] = value
        return delta

    def update_message(self, factor: Factor, slot: int, message: Gaussian) -> float:
        """Replace factor's message in slot; the marginal follows."""
        index = factor.variables[slot]
        old_message = factor.messages[slot]
        factor.messages[slot] = message
        return self._set(index, self._values[index] / old_message * message)

    def update_value(self, factor: Factor, slot: int, value: Gaussian) -> float:
        """Set the marginal directly and back out factor's implied message."""
        index = factor.variables[slot]
        old_message = factor.messages[slot]
        factor.messages[slot] = value * old_message / self._values[index]
        return self._set(index, value)


@dataclass
class PlayerNode:
    """Arena indices belonging to one player."""

    player: Hashable
    skill: int
    performance: int


@dataclass
class TrueSkillFactorGraph:
    """
    Factor graph for one rated game.

    Args:
        game_info: Game parameters
        teams: Teams sorted best-first
        ranks: Ranks parallel to teams (sorted ascending)
        max_iterations: Cap on schedule sweeps before ConvergenceFailed
        tolerance: Sweep stops once no truncation marginal moves more than this
    """

    game_info: GameInfo
    teams: Sequence[Team]
    ranks: Sequence[int]
    max_iterations: int = 100
    tolerance: float = 1e-4

    arena: VariableArena = field(default_factory=VariableArena, init=False)
    players: List[List[PlayerNode]] = field(default_factory=list, init=False)
    prior_layer: List[PriorFactor] = field(default_factory=list, init=False)
    performance_layer: List[LikelihoodFactor] = field(default_factory=list, init=False)
    team_performance_layer: List[SumFactor] = field(default_factory=list, init=False)
    team_difference_layer: List[SumFactor] = field(default_factory=list, init=False)
    truncation_layer: List[TruncateFactor] = field(default_factory=list, init=False)
    iterations: int = field(default=0, init=False)

    def __post_init__(self):
        self._build()

    def _build(self) -> None:
        beta_sq = self.game_info.beta * self.game_info.beta
        draw_margin = draw_margin_from_draw_probability(
            self.game_info.draw_probability, self.game_info.beta
        )

        team_performances = []
        for i, team in enumerate(self.teams):
            nodes = []
            for player, rating in team.items():
                skill = self.arena.create(f"skill[{player!r}]")
                performance = self.arena.create(f"perf[{player!r}]")
                nodes.append(PlayerNode(player, skill, performance))
                self.prior_layer.append(
                    PriorFactor(skill, rating, self.game_info.dynamics_factor)
                )
                self.performance_layer.append(LikelihoodFactor(skill, performance, beta_sq))
            self.players.append(nodes)

            team_performance = self.arena.create(f"team_perf[{i}]")
            team_performances.append(team_performance)
            self.team_performance_layer.append(SumFactor(
                team_performance,
                [node.performance for node in nodes],
                [partial_play_weight(team, node.player) for node in nodes],
            ))

        for i in range(len(self.teams) - 1):
            difference = self.arena.create(f"team_diff[{i}]")
            self.team_difference_layer.append(SumFactor(
                difference,
                [team_performances[i], team_performances[i + 1]],
                [1.0, -1.0],
            ))
            self.truncation_layer.append(
                TruncateFactor(difference, draw_margin, is_draw(self.ranks, i))
            )

    def run_schedule(self) -> int:
        """
        Run message passing to convergence.

        Returns:
            Number of sweeps along the team-difference chain

        Raises:
            ConvergenceFailed: tolerance not met within max_iterations sweeps
        """
        for factor in self.prior_layer:
            factor.down(self.arena)
        for factor in self.performance_layer:
            factor.down(self.arena)
        for factor in self.team_performance_layer:
            factor.down(self.arena)

        differences = self.team_difference_layer
        truncations = self.truncation_layer
        n = len(differences)

        delta = math.inf
        for iteration in range(1, self.max_iterations + 1):
            if n == 1:
                delta = max(
                    differences[0].down(self.arena),
                    truncations[0].up(self.arena),
                )
            else:
                delta = 0.0
                # Forward sweep: push evidence towards the worst team
                for i in range(n - 1):
                    delta = max(
                        delta,
                        differences[i].down(self.arena),
                        truncations[i].up(self.arena),
                        differences[i].up(self.arena, 1),
                    )
                # Backward sweep: push evidence towards the best team
                for i in range(n - 1, 0, -1):
                    delta = max(
                        delta,
                        differences[i].down(self.arena),
                        truncations[i].up(self.arena),
                        differences[i].up(self.arena, 0),
                    )

            if delta <= self.tolerance:
                self.iterations = iteration
                break
        else:
            logger.warning(
                "Factor graph did not converge after %d iterations (delta=%.3g)",
                self.max_iterations, delta,
            )
            raise ConvergenceFailed(self.max_iterations, delta)

        differences[0].up(self.arena, 0)
        differences[n - 1].up(self.arena, 1)
        for factor in self.team_performance_layer:
            for i in range(factor.term_count):
                factor.up(self.arena, i)
        for factor in self.performance_layer:
            factor.up(self.arena)

        logger.debug(
            "Factor graph converged in %d iterations (delta=%.3g, %d variables)",
            self.iterations, delta, len(self.arena),
        )
        return self.iterations

    def updated_ratings(self) -> PlayerRatings:
        """Posterior skill marginals as Ratings."""
        new_ratings = PlayerRatings()
        for nodes in self.players:
            for node in nodes:
                skill = self.arena[node.skill]
                new_ratings[node.player] = Rating(skill.mean, skill.stddev)
        return new_ratings

    def factors(self) -> List[Factor]:
        """Every factor, layer by layer from the priors down."""
        return [
            *self.prior_layer,
            *self.performance_layer,
            *self.team_performance_layer,
            *self.team_difference_layer,
            *self.truncation_layer,
        ]

    def log_evidence(self) -> float:
        """
        Log probability of the observed ranking under the prior ratings.

        The marginals are rebuilt by multiplying in every factor's message,
        accumulating each product's normalization, and then every factor
        adds its own log normalization. Only meaningful after run_schedule().
        """
        factors = self.factors()
        marginals = [Gaussian.uninformative() for _ in range(len(self.arena))]

        log_z = 0.0
        for factor in factors:
            for variable, message in zip(factor.variables, factor.messages):
                log_z += log_product_normalization(marginals[variable], message)
                marginals[variable] = marginals[variable] * message

        for factor in factors:
            log_z += factor.log_normalization(marginals)
        return log_z

    def probability_of_ranking(self) -> float:
        return math.exp(self.log_evidence())

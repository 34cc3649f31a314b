"""
Factor types for the TrueSkill factor graph.

Factors never hold variables directly. Each factor keeps the arena indices
of the variables it touches and its own outgoing message to each of them
(one slot per edge); the arena owns the variable marginals. Every message
update returns the absolute difference between the old and new marginal
so the schedule can detect convergence. Once converged, each factor also
reports its share of the log evidence through log_normalization().
"""

import math
from typing import TYPE_CHECKING, List, Sequence

from ...base import Rating
from ...numerics.gaussian import (
    Gaussian,
    cdf,
    log_product_normalization,
    log_ratio_normalization,
)
from .truncation import corrections_for

if TYPE_CHECKING:
    from .factor_graph import VariableArena


class Factor:
    """A factor connected to one or more arena variables."""

    def __init__(self, variables: Sequence[int]):
        self.variables: List[int] = list(variables)
        self.messages: List[Gaussian] = [Gaussian.uninformative() for _ in self.variables]

    def message_division(self, arena: "VariableArena", slot: int) -> Gaussian:
        """Marginal of the variable in slot, with this factor's message removed."""
        return arena[self.variables[slot]] / self.messages[slot]

    def log_normalization(self, marginals: Sequence[Gaussian]) -> float:
        """Log evidence contributed by this factor, given variable marginals."""
        return 0.0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(variables={self.variables})"


class PriorFactor(Factor):
    """
    Player skill prior, inflated by the per-match dynamics term.

    Sends N(mean, sqrt(stddev^2 + tau^2)) down to the skill variable.
    """

    def __init__(self, variable: int, rating: Rating, dynamics_factor: float):
        super().__init__([variable])
        self.prior = Gaussian(
            rating.mean,
            math.sqrt(rating.variance + dynamics_factor * dynamics_factor),
        )

    def down(self, arena: "VariableArena") -> float:
        return arena.update_value(self, 0, self.prior)


class LikelihoodFactor(Factor):
    """
    Performance given skill: perf ~ N(skill, beta^2).

    Slot 0 is the skill (mean) variable, slot 1 the performance variable.
    """

    def __init__(self, mean_variable: int, value_variable: int, variance: float):
        super().__init__([mean_variable, value_variable])
        self.variance = variance

    def _send(self, arena: "VariableArena", source: int, target: int) -> float:
        msg = self.message_division(arena, source)
        a = 1.0 / (1.0 + self.variance * msg.precision)
        return arena.update_message(
            self, target, Gaussian.from_precision(a * msg.precision, a * msg.precision_mean)
        )

    def down(self, arena: "VariableArena") -> float:
        return self._send(arena, 0, 1)

    def up(self, arena: "VariableArena") -> float:
        return self._send(arena, 1, 0)

    def log_normalization(self, marginals: Sequence[Gaussian]) -> float:
        return log_ratio_normalization(marginals[self.variables[0]], self.messages[0])


class SumFactor(Factor):
    """
    Weighted sum: sum = sum_i coefficients[i] * terms[i].

    Used both for team performance (weights = partial play) and for the
    difference between rank-adjacent teams (coefficients +1, -1).
    Slot 0 is the sum variable; slot i + 1 is term i.
    """

    def __init__(self, sum_variable: int, term_variables: Sequence[int], coefficients: Sequence[float]):
        if len(term_variables) != len(coefficients):
            raise ValueError("one coefficient per term variable is required")
        super().__init__([sum_variable, *term_variables])
        self.coefficients = [float(c) for c in coefficients]

    @property
    def term_count(self) -> int:
        return len(self.coefficients)

    def down(self, arena: "VariableArena") -> float:
        """Send the weighted sum of the terms to the sum variable."""
        slots = range(1, len(self.variables))
        return self._update(arena, 0, slots, self.coefficients)

    def up(self, arena: "VariableArena", index: int) -> float:
        """
        Send to term `index` by solving the sum for that term:
        term = sum / c_index - sum_{j != index} (c_j / c_index) * term_j
        """
        coeff = self.coefficients[index]
        slots = []
        coefficients = []
        for j, c in enumerate(self.coefficients):
            if j == index:
                slots.append(0)
                coefficients.append(1.0 / coeff)
            else:
                slots.append(j + 1)
                coefficients.append(-c / coeff)
        return self._update(arena, index + 1, slots, coefficients)

    def _update(self, arena: "VariableArena", target: int, slots, coefficients) -> float:
        variance = 0.0
        mean = 0.0
        for slot, coeff in zip(slots, coefficients):
            div = self.message_division(arena, slot)
            mean += coeff * div.mean
            if variance == math.inf:
                continue
            if div.precision == 0.0:
                variance = math.inf
            else:
                variance += coeff * coeff / div.precision

        precision = 1.0 / variance
        return arena.update_message(
            self, target, Gaussian.from_precision(precision, precision * mean)
        )

    def log_normalization(self, marginals: Sequence[Gaussian]) -> float:
        # Slot 0 (the sum) is implied by the terms
        return sum(
            log_ratio_normalization(marginals[variable], message)
            for variable, message in zip(self.variables[1:], self.messages[1:])
        )


class TruncateFactor(Factor):
    """
    Observation on a team performance difference.

    For a decisive result the difference is truncated to exceed the draw
    margin, for a draw to lie within it.
    """

    def __init__(self, variable: int, draw_margin: float, was_draw: bool):
        super().__init__([variable])
        self.draw_margin = draw_margin
        self.was_draw = was_draw
        self.v_func, self.w_func = corrections_for(was_draw)

    def up(self, arena: "VariableArena") -> float:
        div = self.message_division(arena, 0)
        sqrt_precision = math.sqrt(div.precision)
        t = div.precision_mean / sqrt_precision
        eps = self.draw_margin * sqrt_precision
        v = self.v_func(t, eps)
        w = self.w_func(t, eps)

        denom = 1.0 - w
        precision = div.precision / denom
        precision_mean = (div.precision_mean + sqrt_precision * v) / denom
        return arena.update_value(self, 0, Gaussian.from_precision(precision, precision_mean))

    def log_normalization(self, marginals: Sequence[Gaussian]) -> float:
        """
        log P(observation | incoming message) minus the overlap already
        counted when the marginal was assembled.
        """
        message = self.messages[0]
        incoming = marginals[self.variables[0]] / message
        mean = incoming.mean
        stddev = incoming.stddev

        if self.was_draw:
            z = cdf((self.draw_margin - mean) / stddev) - cdf((-self.draw_margin - mean) / stddev)
        else:
            z = cdf((mean - self.draw_margin) / stddev)

        if z <= 0.0:
            return -math.inf
        return -log_product_normalization(incoming, message) + math.log(z)

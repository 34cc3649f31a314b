"""Draw margin calibration."""

import math

from ...base.errors import InvalidGameInfo
from ...numerics.gaussian import inverse_cumulative


def draw_margin_from_draw_probability(draw_probability: float, beta: float) -> float:
    """
    Latent performance margin (epsilon) that yields the given draw rate.

    Two equally skilled players draw when their performance difference is
    within +/- epsilon. The difference has stddev sqrt(2) * beta, so:

        epsilon = Phi^-1((p + 1) / 2) * sqrt(2) * beta

    Args:
        draw_probability: Probability of a draw between equal players, in [0, 1)
        beta: Performance noise stddev

    Returns:
        Draw margin epsilon (0 when draws are impossible)
    """
    if not 0.0 <= draw_probability < 1.0:
        raise InvalidGameInfo(f"draw_probability must be in [0, 1), got {draw_probability}")
    return inverse_cumulative(0.5 * (draw_probability + 1.0), 0.0, 1.0) * math.sqrt(2.0) * beta

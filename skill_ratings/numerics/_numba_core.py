"""
Numba-accelerated scalar kernels for the TrueSkill update.

Standard normal helpers plus the truncated Gaussian correction functions
from the bottom of page 4 of the TrueSkill paper:
- v(t, eps): additive correction (how far the mean moves)
- w(t, eps): multiplicative correction (how much the variance shrinks)

"Exceeds margin" is the one-sided truncation used for a decisive result,
"within margin" the two-sided truncation used for a draw. All arguments
are already divided by the standard deviation of the performance
difference.

These kernels are compiled without fastmath: the underflow guards compare
against values near the bottom of the double range.
"""

import math

from numba import njit


# Constants
INV_SQRT_2 = 1.0 / math.sqrt(2.0)
INV_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)

# Below this the truncation denominator is treated as zero
DENOM_UNDERFLOW = 2.222758749e-162


@njit(cache=True)
def norm_pdf(x: float) -> float:
    """Standard normal PDF."""
    return INV_SQRT_2PI * math.exp(-0.5 * x * x)


@njit(cache=True)
def norm_cdf(x: float) -> float:
    """Standard normal CDF via erfc, accurate far into the lower tail."""
    return 0.5 * math.erfc(-x * INV_SQRT_2)


@njit(cache=True)
def v_exceeds_margin(t: float, eps: float) -> float:
    """
    V for a decisive outcome: pdf(t - eps) / cdf(t - eps).

    When the denominator underflows the asymptote eps - t is returned.
    """
    denom = norm_cdf(t - eps)
    if denom < DENOM_UNDERFLOW:
        return eps - t
    return norm_pdf(t - eps) / denom


@njit(cache=True)
def w_exceeds_margin(t: float, eps: float) -> float:
    """W for a decisive outcome: v * (v + t - eps), in [0, 1]."""
    denom = norm_cdf(t - eps)
    if denom < DENOM_UNDERFLOW:
        if t < 0.0:
            return 1.0
        return 0.0
    v = v_exceeds_margin(t, eps)
    return v * (v + t - eps)


@njit(cache=True)
def v_within_margin(t: float, eps: float) -> float:
    """V for a draw; the correction opposes the sign of t."""
    t_abs = abs(t)
    denom = norm_cdf(eps - t_abs) - norm_cdf(-eps - t_abs)
    if denom < DENOM_UNDERFLOW:
        if t < 0.0:
            return -t - eps
        return -t + eps

    numerator = norm_pdf(-eps - t_abs) - norm_pdf(eps - t_abs)
    if t < 0.0:
        return -numerator / denom
    return numerator / denom


@njit(cache=True)
def w_within_margin(t: float, eps: float) -> float:
    """W for a draw."""
    t_abs = abs(t)
    denom = norm_cdf(eps - t_abs) - norm_cdf(-eps - t_abs)
    if denom < DENOM_UNDERFLOW:
        return 1.0

    v = v_within_margin(t_abs, eps)
    return v * v + (
        (eps - t_abs) * norm_pdf(eps - t_abs) - (-eps - t_abs) * norm_pdf(-eps - t_abs)
    ) / denom

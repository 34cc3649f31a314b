"""
Truncated Gaussian correction functions (V and W).

These are the entire non-linearity of a TrueSkill update: every calculator
picks one V/W pair per compared pair of teams, "exceeds margin" for a
decisive result and "within margin" for a draw.

The plain forms take arguments already scaled to unit variance; the `_c`
forms take the raw performance difference and draw margin together with
c, the standard deviation of the performance difference.
"""

from typing import Callable, Tuple

from ...numerics._numba_core import (
    v_exceeds_margin,
    v_within_margin,
    w_exceeds_margin,
    w_within_margin,
)

Correction = Callable[[float, float], float]


def v_exceeds_margin_c(perf_diff: float, draw_margin: float, c: float) -> float:
    return v_exceeds_margin(perf_diff / c, draw_margin / c)


def w_exceeds_margin_c(perf_diff: float, draw_margin: float, c: float) -> float:
    return w_exceeds_margin(perf_diff / c, draw_margin / c)


def v_within_margin_c(perf_diff: float, draw_margin: float, c: float) -> float:
    return v_within_margin(perf_diff / c, draw_margin / c)


def w_within_margin_c(perf_diff: float, draw_margin: float, c: float) -> float:
    return w_within_margin(perf_diff / c, draw_margin / c)


def corrections_for(was_draw: bool) -> Tuple[Correction, Correction]:
    """(v, w) pair for a draw or a decisive outcome."""
    if was_draw:
        return v_within_margin, w_within_margin
    return v_exceeds_margin, w_exceeds_margin


__all__ = [
    "v_exceeds_margin",
    "w_exceeds_margin",
    "v_within_margin",
    "w_within_margin",
    "v_exceeds_margin_c",
    "w_exceeds_margin_c",
    "v_within_margin_c",
    "w_within_margin_c",
    "corrections_for",
]

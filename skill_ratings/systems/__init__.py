"""Rating system implementations.

- TrueSkill: Bayesian skill estimation with Gaussian beliefs, rated by
  closed form for two players or two teams and by factor graph message
  passing for any number of teams.
"""

from .trueskill import (
    FactorGraphCalculator,
    TrueSkill,
    TwoPlayerCalculator,
    TwoTeamCalculator,
    draw_margin_from_draw_probability,
)

__all__ = [
    "FactorGraphCalculator",
    "TrueSkill",
    "TwoPlayerCalculator",
    "TwoTeamCalculator",
    "draw_margin_from_draw_probability",
]

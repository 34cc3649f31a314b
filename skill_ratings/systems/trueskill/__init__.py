"""TrueSkill calculators."""

from .draw_margin import draw_margin_from_draw_probability
from .n_team import FactorGraphCalculator
from .trueskill import TrueSkill
from .two_player import TwoPlayerCalculator
from .two_team import TwoTeamCalculator

__all__ = [
    "draw_margin_from_draw_probability",
    "FactorGraphCalculator",
    "TrueSkill",
    "TwoPlayerCalculator",
    "TwoTeamCalculator",
]

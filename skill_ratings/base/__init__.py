"""Base classes and value types shared by all calculators."""

from .calculator import CalculatorType, CountRange, SkillCalculator
from .errors import (
    ConvergenceFailed,
    DimensionMismatch,
    InvalidCardinality,
    InvalidGameInfo,
    SingularMatrix,
    SkillRatingError,
)
from .rating import DEFAULT_GAME_INFO, GameInfo, PlayerRatings, Rating
from .team import Team

__all__ = [
    "CalculatorType",
    "CountRange",
    "SkillCalculator",
    "ConvergenceFailed",
    "DimensionMismatch",
    "InvalidCardinality",
    "InvalidGameInfo",
    "SingularMatrix",
    "SkillRatingError",
    "DEFAULT_GAME_INFO",
    "GameInfo",
    "PlayerRatings",
    "Rating",
    "Team",
]

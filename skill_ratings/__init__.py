"""
Skill Ratings - TrueSkill calculators for players and teams.

This package computes posterior skill ratings after a ranked game and the
quality (draw probability) of a proposed matchup. Skill is a Gaussian
belief per player; outcomes are folded in through truncated Gaussian
corrections, in closed form for two players or two teams and by factor
graph message passing for any number of teams, ties and partial play.

Quick Start:
    from skill_ratings import TrueSkill, Team

    ts = TrueSkill()
    alice, bob, carol = ts.create_rating(), ts.create_rating(), ts.create_rating()

    # Free-for-all: alice first, bob and carol tied for second
    teams = [Team.single("alice", alice), Team.single("bob", bob), Team.single("carol", carol)]
    new_ratings = ts.rate(teams, ranks=[1, 2, 2])
    print(new_ratings["alice"])        # {μ:... σ:...}
    print(new_ratings.to_dataframe())  # Polars DataFrame

    # How even is a 2v2?
    print(ts.quality([Team({"a": alice, "b": bob}), Team({"c": carol, "d": ts.create_rating()})]))

Calculators can also be used directly:
    from skill_ratings import GameInfo, TwoPlayerCalculator

    calc = TwoPlayerCalculator()
    calc.calculate_new_ratings(GameInfo(), teams[:2], [1, 2])
"""

from .base import (
    DEFAULT_GAME_INFO,
    CalculatorType,
    ConvergenceFailed,
    CountRange,
    DimensionMismatch,
    GameInfo,
    InvalidCardinality,
    InvalidGameInfo,
    PlayerRatings,
    Rating,
    SingularMatrix,
    SkillCalculator,
    SkillRatingError,
    Team,
)
from .numerics import Gaussian
from .systems import (
    FactorGraphCalculator,
    TrueSkill,
    TwoPlayerCalculator,
    TwoTeamCalculator,
    draw_margin_from_draw_probability,
)

__version__ = "0.1.0"

__all__ = [
    # Values
    "DEFAULT_GAME_INFO",
    "GameInfo",
    "PlayerRatings",
    "Rating",
    "Team",
    "Gaussian",
    # Calculators
    "CalculatorType",
    "CountRange",
    "SkillCalculator",
    "TwoPlayerCalculator",
    "TwoTeamCalculator",
    "FactorGraphCalculator",
    "TrueSkill",
    "draw_margin_from_draw_probability",
    # Errors
    "SkillRatingError",
    "ConvergenceFailed",
    "DimensionMismatch",
    "InvalidCardinality",
    "InvalidGameInfo",
    "SingularMatrix",
]

"""Exception types raised by the rating calculators."""

from typing import Optional


class SkillRatingError(Exception):
    """Base class for every error raised by skill_ratings."""


class InvalidGameInfo(SkillRatingError, ValueError):
    """GameInfo parameters outside their valid domain."""


class InvalidCardinality(SkillRatingError, ValueError):
    """Team count or players-per-team outside what a calculator supports."""


class DimensionMismatch(SkillRatingError, ValueError):
    """Parallel sequences or matrix operands with incompatible shapes."""


class SingularMatrix(SkillRatingError, ArithmeticError):
    """A matrix inverse was requested for a matrix with zero determinant."""


class ConvergenceFailed(SkillRatingError, RuntimeError):
    """
    Message passing did not settle within the iteration cap.

    Attributes:
        iterations: Number of schedule sweeps that were run
        delta: Largest marginal change seen in the final sweep
    """

    def __init__(self, iterations: int, delta: Optional[float] = None):
        self.iterations = iterations
        self.delta = delta
        message = f"Maximum iterations ({iterations}) exceeded"
        if delta is not None:
            message += f" (last delta {delta:.3g})"
        super().__init__(message)

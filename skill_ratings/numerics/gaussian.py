"""
Gaussian distribution value type for TrueSkill message passing.

Uses precision form (precision, precision_mean) as the source of truth and
exposes the moment form (mean, stddev, variance) as derived views, so the
two can never drift apart. Products and quotients of Gaussians are exact
additions/subtractions in precision form, which is what belief propagation
needs. A precision of zero is a valid "uninformative" distribution.
"""

import math

from scipy.special import erfcinv

from ._numba_core import norm_cdf, norm_pdf

# Constants
SQRT_2 = math.sqrt(2.0)
LOG_SQRT_2PI = 0.5 * math.log(2.0 * math.pi)  # 0.91893853320467274
INF = float("inf")


def pdf(x: float) -> float:
    """Standard normal PDF."""
    return norm_pdf(x)


def cdf(x: float) -> float:
    """Standard normal CDF."""
    return norm_cdf(x)


def inverse_cumulative(p: float, mean: float = 0.0, stddev: float = 1.0) -> float:
    """Value x with P(X <= x) = p for X ~ N(mean, stddev^2)."""
    return mean - SQRT_2 * stddev * float(erfcinv(2.0 * p))


class Gaussian:
    """
    A univariate Gaussian in canonical form.

    - precision = 1/sigma^2
    - precision_mean = mu/sigma^2

    Construct from moments with Gaussian(mean, stddev) or from the canonical
    parameters with Gaussian.from_precision().

    Example:
        >>> product = Gaussian(0, 1) * Gaussian(2, 3)
        >>> round(product.mean, 6)
        0.2
    """

    __slots__ = ("_precision", "_precision_mean")

    def __init__(self, mean: float = 0.0, stddev: float = INF):
        if stddev == INF:
            self._precision = 0.0
            self._precision_mean = 0.0
        else:
            variance = stddev * stddev
            self._precision = 1.0 / variance
            self._precision_mean = self._precision * mean

    @classmethod
    def from_precision(cls, precision: float, precision_mean: float) -> "Gaussian":
        g = cls.__new__(cls)
        g._precision = precision
        g._precision_mean = precision_mean
        return g

    @classmethod
    def uninformative(cls) -> "Gaussian":
        """Zero precision (infinite variance) Gaussian; identity for products."""
        return cls.from_precision(0.0, 0.0)

    @property
    def precision(self) -> float:
        return self._precision

    @property
    def precision_mean(self) -> float:
        return self._precision_mean

    @property
    def mean(self) -> float:
        """Mean of the distribution (0 when uninformative)."""
        if self._precision == 0.0:
            return 0.0
        return self._precision_mean / self._precision

    @property
    def variance(self) -> float:
        if self._precision == 0.0:
            return INF
        return 1.0 / self._precision

    @property
    def stddev(self) -> float:
        if self._precision == 0.0:
            return INF
        return math.sqrt(1.0 / self._precision)

    def is_uninformative(self) -> bool:
        return self._precision == 0.0

    def __mul__(self, other: "Gaussian") -> "Gaussian":
        return Gaussian.from_precision(
            self._precision + other._precision,
            self._precision_mean + other._precision_mean,
        )

    def __truediv__(self, other: "Gaussian") -> "Gaussian":
        return Gaussian.from_precision(
            self._precision - other._precision,
            self._precision_mean - other._precision_mean,
        )

    def cumulative_at(self, x: float) -> float:
        """P(X <= x)."""
        return norm_cdf((x - self.mean) / self.stddev)

    def density_at(self, x: float) -> float:
        """Density of this distribution at x."""
        stddev = self.stddev
        return norm_pdf((x - self.mean) / stddev) / stddev

    def __eq__(self, other) -> bool:
        if not isinstance(other, Gaussian):
            return NotImplemented
        return (
            self._precision == other._precision
            and self._precision_mean == other._precision_mean
        )

    def __hash__(self) -> int:
        return hash((self._precision, self._precision_mean))

    def __repr__(self) -> str:
        return f"Gaussian(mean={self.mean:.6g}, stddev={self.stddev:.6g})"


def multiply(a: Gaussian, b: Gaussian) -> Gaussian:
    """Product of two Gaussian densities (normalized)."""
    return a * b


def divide(a: Gaussian, b: Gaussian) -> Gaussian:
    """Quotient of two Gaussian densities (normalized)."""
    return a / b


def log_product_normalization(a: Gaussian, b: Gaussian) -> float:
    """Log of the normalization constant of a * b."""
    if a.precision == 0.0 or b.precision == 0.0:
        return 0.0

    variance_sum = a.variance + b.variance
    mean_diff = a.mean - b.mean
    return -LOG_SQRT_2PI - (math.log(variance_sum) + mean_diff * mean_diff / variance_sum) / 2.0


def log_ratio_normalization(a: Gaussian, b: Gaussian) -> float:
    """Log of the normalization constant of a / b."""
    if a.precision == 0.0 or b.precision == 0.0:
        return 0.0

    variance_diff = b.variance - a.variance
    mean_diff = a.mean - b.mean
    return (
        math.log(b.variance)
        + LOG_SQRT_2PI
        - math.log(variance_diff) / 2.0
        + mean_diff * mean_diff / (2.0 * variance_diff)
    )


def absolute_difference(a: Gaussian, b: Gaussian) -> float:
    """
    Distance between two Gaussians in precision form.

    max(|delta precision_mean|, sqrt(|delta precision|)); used to decide
    when message passing has settled.
    """
    precision_delta = abs(a.precision - b.precision)
    if precision_delta == INF:
        return 0.0
    return max(abs(a.precision_mean - b.precision_mean), math.sqrt(precision_delta))

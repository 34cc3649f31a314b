"""Tests for the Gaussian value type and normal distribution helpers."""

import math

import pytest

from skill_ratings import Gaussian
from skill_ratings.numerics import (
    absolute_difference,
    cdf,
    divide,
    inverse_cumulative,
    log_product_normalization,
    log_ratio_normalization,
    multiply,
    pdf,
)


def test_standard_normal_helpers():
    """PDF, CDF and inverse CDF of the standard normal."""
    assert pdf(0.5) == pytest.approx(0.352065, abs=1e-6)
    assert cdf(0.5) == pytest.approx(0.69146246, abs=1e-7)
    assert cdf(0.0) == pytest.approx(0.5)
    assert inverse_cumulative(0.69146246) == pytest.approx(0.5, abs=1e-6)
    assert inverse_cumulative(0.5, 10.0, 3.0) == pytest.approx(10.0, abs=1e-9)


def test_inverse_cumulative_quantiles():
    """Quantiles of the standard and a shifted normal."""
    assert inverse_cumulative(0.975) == pytest.approx(1.959963984540054, abs=1e-9)
    assert inverse_cumulative(0.025) == pytest.approx(-1.959963984540054, abs=1e-9)
    assert inverse_cumulative(0.975, 25.0, 2.0) == pytest.approx(25.0 + 2.0 * 1.959963984540054)
    assert cdf(inverse_cumulative(0.3)) == pytest.approx(0.3, abs=1e-12)


def test_lower_tail_is_not_flushed_to_zero():
    assert cdf(-10.0) == pytest.approx(7.61985302416e-24, rel=1e-6)


def test_moment_and_precision_forms_agree():
    g = Gaussian(10.0, 2.0)
    assert g.precision == pytest.approx(0.25)
    assert g.precision_mean == pytest.approx(2.5)
    assert g.variance == pytest.approx(4.0)

    h = Gaussian.from_precision(0.25, 2.5)
    assert h.mean == pytest.approx(10.0)
    assert h.stddev == pytest.approx(2.0)


def test_uninformative():
    """Zero precision has infinite variance and a mean of zero."""
    g = Gaussian.uninformative()
    assert g.is_uninformative()
    assert g.mean == 0.0
    assert g.variance == math.inf
    assert g.stddev == math.inf
    assert Gaussian() == g

    other = Gaussian(3.0, 1.5)
    assert other * g == other


def test_multiply_and_divide():
    simple = Gaussian(0.0, 1.0) * Gaussian(2.0, 3.0)
    assert simple.mean == pytest.approx(0.2)
    assert simple.stddev == pytest.approx(3.0 / math.sqrt(10.0))

    product = multiply(Gaussian(0.0, 3.0), Gaussian(2.0, 4.0))
    assert product.mean == pytest.approx(0.72)
    assert product.stddev == pytest.approx(2.4)

    quotient = divide(Gaussian(0.72, 2.4), Gaussian(2.0, 4.0))
    assert quotient.mean == pytest.approx(0.0, abs=1e-12)
    assert quotient.stddev == pytest.approx(3.0)


def test_log_product_normalization():
    standard = Gaussian(0.0, 1.0)
    assert log_product_normalization(standard, standard) == pytest.approx(-1.2655121234846454)
    assert log_product_normalization(Gaussian(1.0, 2.0), Gaussian(3.0, 4.0)) == pytest.approx(
        -2.5168046699816684
    )
    assert log_product_normalization(standard, Gaussian.uninformative()) == 0.0


def test_log_ratio_normalization():
    assert log_ratio_normalization(Gaussian(1.0, 2.0), Gaussian(3.0, 4.0)) == pytest.approx(
        2.6157405972171204
    )
    assert log_ratio_normalization(Gaussian.uninformative(), Gaussian(1.0, 1.0)) == 0.0


def test_absolute_difference():
    standard = Gaussian(0.0, 1.0)
    assert absolute_difference(standard, standard) == 0.0
    assert absolute_difference(Gaussian(1.0, 2.0), Gaussian(3.0, 4.0)) == pytest.approx(
        0.4330127018922193
    )


def test_cumulative_and_density_at():
    g = Gaussian(10.0, 2.0)
    assert g.cumulative_at(10.0) == pytest.approx(0.5)
    assert g.density_at(11.0) == pytest.approx(pdf(0.5) / 2.0)


def test_equality_and_hash():
    a = Gaussian.from_precision(0.5, 1.0)
    b = Gaussian.from_precision(0.5, 1.0)
    assert a == b
    assert hash(a) == hash(b)
    assert a != Gaussian.from_precision(0.5, 1.5)

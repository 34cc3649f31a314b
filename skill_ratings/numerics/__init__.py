"""Numerical building blocks: Gaussians, truncation kernels and matrices."""

from .gaussian import (
    Gaussian,
    absolute_difference,
    cdf,
    divide,
    inverse_cumulative,
    log_product_normalization,
    log_ratio_normalization,
    multiply,
    pdf,
)

__all__ = [
    "Gaussian",
    "absolute_difference",
    "cdf",
    "divide",
    "inverse_cumulative",
    "log_product_normalization",
    "log_ratio_normalization",
    "multiply",
    "pdf",
]

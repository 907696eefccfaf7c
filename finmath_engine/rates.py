"""
Interest-rate conventions.

Each conversion is the exact algebraic inverse of its pair. Invalid inputs
(m = 0, i <= -1, ...) give inf/nan rather than raising.
"""
from __future__ import annotations

import numpy as np

from .utils import Number, as_float, float_semantics


@float_semantics
def discount_factor(i: Number) -> float:
    """v = 1 / (1 + i)."""
    return 1.0 / (1.0 + as_float(i))


@float_semantics
def discount_rate(i: Number) -> float:
    """d = i / (1 + i)."""
    i = as_float(i)
    return i / (1.0 + i)


@float_semantics
def effective_from_discount(d: Number) -> float:
    """i = d / (1 - d)."""
    d = as_float(d)
    return d / (1.0 - d)


@float_semantics
def effective_subperiod(i: Number, m: Number) -> float:
    """Effective rate per 1/m of a period: (1 + i)^(1/m) - 1."""
    return np.power(1.0 + as_float(i), 1.0 / as_float(m)) - 1.0


@float_semantics
def effective_from_nominal(j: Number, m: Number) -> float:
    """Effective annual rate from nominal j^(m): (1 + j/m)^m - 1."""
    m = as_float(m)
    return np.power(1.0 + as_float(j) / m, m) - 1.0


@float_semantics
def force_from_nominal(j: Number, m: Number) -> float:
    """Force of interest equivalent to nominal j^(m): m ln(1 + j/m)."""
    m = as_float(m)
    return m * np.log(1.0 + as_float(j) / m)


@float_semantics
def effective_from_nominal_discount(d: Number, m: Number) -> float:
    """Effective annual rate from nominal discount d^(m): (1 - d/m)^(-m) - 1."""
    m = as_float(m)
    return np.power(1.0 - as_float(d) / m, -m) - 1.0

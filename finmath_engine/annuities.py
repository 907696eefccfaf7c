"""
Annuity values.

Closed forms for level, due, continuous and varying annuities; these are the
building blocks reused by loans and bonds. Removable singularities at a zero
rate are branched explicitly (tolerance from settings) rather than left to
limits.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

import numpy as np
from scipy.integrate import quad

from .rates import discount_rate, effective_subperiod
from .utils import Number, as_float, float_semantics, nearly, whole_periods


@float_semantics
def annuity_immediate(n: Number, i: Number, tol: Optional[float] = None) -> float:
    """a(n, i) = (1 - (1+i)^-n) / i, and n at i = 0."""
    n, i = as_float(n), as_float(i)
    if nearly(i, 0.0, tol):
        return n
    return (1.0 - np.power(1.0 + i, -n)) / i


@float_semantics
def annuity_accumulated(n: Number, i: Number, tol: Optional[float] = None) -> float:
    """s(n, i) = ((1+i)^n - 1) / i, and n at i = 0."""
    n, i = as_float(n), as_float(i)
    if nearly(i, 0.0, tol):
        return n
    return (np.power(1.0 + i, n) - 1.0) / i


@float_semantics
def annuity_due(n: Number, i: Number, tol: Optional[float] = None) -> float:
    """ä(n, i) = (1 - (1+i)^-n) / d with d = i/(1+i); n when d = 0."""
    n, i = as_float(n), as_float(i)
    d = discount_rate(i)
    if nearly(d, 0.0, tol):
        return n
    return (1.0 - np.power(1.0 + i, -n)) / d


@float_semantics
def annuity_continuous(n: Number, delta: Number, tol: Optional[float] = None) -> float:
    """ā(n, δ) = (1 - e^(-δn)) / δ, and n at δ = 0."""
    n, delta = as_float(n), as_float(delta)
    if nearly(delta, 0.0, tol):
        return n
    return (1.0 - np.exp(-delta * n)) / delta


@float_semantics
def annuity_mthly(n: Number, i: Number, m: Number, tol: Optional[float] = None) -> Tuple[float, float]:
    """
    n periods paid m times per period at effective rate i per period.

    Returns (value in units of the sub-period payment, sub-period rate i_m).
    """
    n, m = as_float(n), as_float(m)
    i_m = effective_subperiod(i, m)
    return annuity_immediate(m * n, i_m, tol), i_m


@float_semantics
def increasing_annuity(n: Number, i: Number, step: Number = 1.0) -> float:
    """Payments step, 2 step, ..., n step: step (a(n,i) - n v^n) / i."""
    n, i = as_float(n), as_float(i)
    a = annuity_immediate(n, i)
    return as_float(step) * (a - n * np.power(1.0 + i, -n)) / i


@float_semantics
def decreasing_annuity(n: Number, i: Number, step: Number = 1.0) -> float:
    """Payments n step, (n-1) step, ..., step: step (n - a(n,i)) / i."""
    n, i = as_float(n), as_float(i)
    return as_float(step) * (n - annuity_immediate(n, i)) / i


@float_semantics
def geometric_annuity(n: Number, i: Number, g: Number, tol: Optional[float] = None) -> float:
    """
    First payment 1, growing by factor (1+g) each period.

    When i == g the closed form is 0/0; sum sum_{k=1..n} (1+g)^(k-1) v^k directly.
    """
    n, i, g = as_float(n), as_float(i), as_float(g)

    if nearly(i, g, tol):
        if not np.isfinite(n):
            return n / (1.0 + i)
        k = np.arange(1, whole_periods(n) + 1, dtype=float)
        v = 1.0 / (1.0 + i)
        return np.float64(np.sum(np.power(1.0 + g, k - 1.0) * np.power(v, k)))

    return (1.0 - np.power((1.0 + g) / (1.0 + i), n)) / (i - g)


@float_semantics
def deferred_perpetuity(i: Number, deferral: Number) -> float:
    """Level perpetuity-immediate deferred by ``deferral`` periods: v^m / i."""
    i = as_float(i)
    return np.power(1.0 / (1.0 + i), as_float(deferral)) / i


def annuity_continuous_varying(
    n: Number,
    force: Callable[[float], float],
    epsabs: float = 1e-10,
    epsrel: float = 1e-10,
) -> float:
    """
    Continuous annuity under a time-varying force of interest:

        ā(n) = ∫_0^n exp(-∫_0^t δ(u) du) dt

    ``n`` may be ``inf`` for a continuous perpetuity.
    """
    n = as_float(n)
    if np.isnan(n):
        return np.float64(np.nan)

    def discount(t: float) -> float:
        integral, _ = quad(force, 0.0, t, epsabs=epsabs, epsrel=epsrel)
        return float(np.exp(-integral))

    value, _ = quad(discount, 0.0, n, epsabs=epsabs, epsrel=epsrel)
    return np.float64(value)

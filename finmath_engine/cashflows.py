from __future__ import annotations

from typing import Iterable

import numpy as np

from .utils import Number, as_array, as_float, float_semantics


@float_semantics
def present_value(cashflows: Iterable[Number], i: Number) -> float:
    """
    Value at time 0 of end-of-period cashflows: sum cf[t-1] / (1+i)^t, t = 1..n.
    """
    cfs = as_array(cashflows)
    t = np.arange(1, len(cfs) + 1, dtype=float)
    return np.float64(np.sum(cfs * np.power(1.0 + as_float(i), -t)))


@float_semantics
def accumulated_value(cashflows: Iterable[Number], i: Number) -> float:
    """Value at the final period n: sum cf[t-1] (1+i)^(n-t)."""
    cfs = as_array(cashflows)
    n = len(cfs)
    t = np.arange(1, n + 1, dtype=float)
    return np.float64(np.sum(cfs * np.power(1.0 + as_float(i), n - t)))


@float_semantics
def time_weighted_return(returns: Iterable[Number]) -> float:
    """Chain-linked sub-period returns: prod(1 + r_k) - 1."""
    r = as_array(returns)
    return np.float64(np.prod(1.0 + r) - 1.0)

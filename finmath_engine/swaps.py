"""
Plain fixed-for-floating swap valued off a discount curve.

Discount factors are given per payment date; accrual fractions default to 1
for any period without one (unit-length periods are assumed, not checked).
"""
from __future__ import annotations

from typing import Iterable, Optional, Tuple

import numpy as np

from .utils import Number, as_array, as_float, float_semantics


def accrual_fractions(n: int, alphas: Optional[Iterable[Number]] = None) -> np.ndarray:
    """First n accrual fractions, padded with 1 where none was supplied."""
    out = np.ones(n, dtype=float)
    if alphas is None:
        return out

    a = as_array(alphas)[:n]
    out[: len(a)] = a
    return out


@float_semantics
def swap_annuity(discount_factors: Iterable[Number], alphas: Optional[Iterable[Number]] = None) -> float:
    """sum alpha_t DF_t."""
    dfs = as_array(discount_factors)
    return np.float64(np.sum(accrual_fractions(len(dfs), alphas) * dfs))


@float_semantics
def par_swap_rate(discount_factors: Iterable[Number], alphas: Optional[Iterable[Number]] = None) -> float:
    """Fixed rate giving zero value at inception: (1 - DF_n) / sum alpha_t DF_t."""
    dfs = as_array(discount_factors)
    if len(dfs) == 0:
        return np.float64(np.nan)
    return (1.0 - dfs[-1]) / swap_annuity(dfs, alphas)


@float_semantics
def swap_value(
    discount_factors: Iterable[Number],
    fixed_rate: Number,
    notional: Number,
    alphas: Optional[Iterable[Number]] = None,
) -> float:
    """
    Value to the fixed-rate receiver:

        V = N (S sum alpha_t DF_t - (1 - DF_n))
    """
    dfs = as_array(discount_factors)
    if len(dfs) == 0:
        return np.float64(np.nan)

    fixed_leg = as_float(fixed_rate) * swap_annuity(dfs, alphas)
    floating_leg = 1.0 - dfs[-1]
    return as_float(notional) * (fixed_leg - floating_leg)


def price_swap(
    discount_factors: Iterable[Number],
    fixed_rate: Number,
    notional: Number,
    alphas: Optional[Iterable[Number]] = None,
) -> Tuple[float, float]:
    """(par swap rate, mark-to-market value)."""
    dfs = as_array(discount_factors)
    return par_swap_rate(dfs, alphas), swap_value(dfs, fixed_rate, notional, alphas)

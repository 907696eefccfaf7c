from __future__ import annotations

import numpy as np
from dataclasses import dataclass
from typing import Iterable, Tuple

from .utils import Number, as_array, as_float, float_semantics


@dataclass(frozen=True)
class PortfolioMeasures:
    present_value: float
    macaulay_duration: float
    macaulay_convexity: float


def _discounted(cashflows: Iterable[Number], i: Number) -> Tuple[np.ndarray, np.ndarray, np.float64]:
    """(t, cf_t (1+i)^-t, 1+i) with t = 1..n."""
    cfs = as_array(cashflows)
    growth = 1.0 + as_float(i)
    t = np.arange(1, len(cfs) + 1, dtype=float)
    return t, cfs * np.power(growth, -t), growth


@float_semantics
def price_from_cashflows(cashflows: Iterable[Number], i: Number) -> float:
    _, pv, _ = _discounted(cashflows, i)
    return np.float64(np.sum(pv))


@float_semantics
def macaulay_duration(cashflows: Iterable[Number], i: Number) -> float:
    """PV-weighted average time to payment, in periods."""
    t, pv, _ = _discounted(cashflows, i)
    return np.float64(np.sum(t * pv) / np.sum(pv))


@float_semantics
def macaulay_convexity(cashflows: Iterable[Number], i: Number) -> float:
    """sum t(t+1) cf_t (1+i)^-(t+2) / price."""
    t, pv, growth = _discounted(cashflows, i)
    return np.float64(np.sum(t * (t + 1.0) * pv) / growth**2 / np.sum(pv))


@float_semantics
def modified_duration(cashflows: Iterable[Number], i: Number) -> float:
    return macaulay_duration(cashflows, i) / (1.0 + as_float(i))


@float_semantics
def modified_convexity(cashflows: Iterable[Number], i: Number) -> float:
    return macaulay_convexity(cashflows, i) / (1.0 + as_float(i)) ** 2


def portfolio_measures(cashflows: Iterable[Number], i: Number) -> PortfolioMeasures:
    cfs = as_array(cashflows)
    return PortfolioMeasures(
        present_value=price_from_cashflows(cfs, i),
        macaulay_duration=macaulay_duration(cfs, i),
        macaulay_convexity=macaulay_convexity(cfs, i),
    )


# ---- price sensitivity from (price, modified duration) ----

@float_semantics
def dv01(price: Number, mod_duration: Number) -> float:
    """Price change for a 1bp move: 0.0001 P D_mod (reported as a positive amount)."""
    return 0.0001 * as_float(price) * as_float(mod_duration)


@float_semantics
def dollar_duration(price: Number, mod_duration: Number) -> float:
    """dP/di = -P D_mod."""
    return -as_float(price) * as_float(mod_duration)

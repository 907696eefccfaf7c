"""
Term structure from a spot-rate curve.

Spot rates are annual-effective and indexed by integer maturity t = 1..n.
Discount factors, one-period forwards and the par yield are recomputed from
the spots on every call; there is no curve object.
"""
from __future__ import annotations

import numpy as np
import pandas as pd
from typing import Iterable, List, Tuple

from .utils import Number, as_array, as_float, float_semantics


@float_semantics
def discount_factor_from_spot(spot: Number, t: Number) -> float:
    """DF(t) = (1 + s_t)^-t."""
    return np.power(1.0 + as_float(spot), -as_float(t))


@float_semantics
def discount_factors_from_spots(spots: Iterable[Number]) -> np.ndarray:
    s = as_array(spots)
    t = np.arange(1, len(s) + 1, dtype=float)
    return np.power(1.0 + s, -t)


@float_semantics
def forward_from_spots(spot_t: Number, spot_next: Number, t: Number) -> float:
    """
    One-period forward from maturity t to t+1:

        f = (1 + s_{t+1})^(t+1) / (1 + s_t)^t - 1
    """
    t = as_float(t)
    return np.power(1.0 + as_float(spot_next), t + 1.0) / np.power(1.0 + as_float(spot_t), t) - 1.0


@float_semantics
def forward_rates(spots: Iterable[Number]) -> np.ndarray:
    """The n-1 one-period forwards implied by n spots; entry k is f(k+1 -> k+2)."""
    s = as_array(spots)
    if len(s) < 2:
        return np.array([], dtype=float)
    t = np.arange(1, len(s), dtype=float)
    return np.power(1.0 + s[1:], t + 1.0) / np.power(1.0 + s[:-1], t) - 1.0


@float_semantics
def par_yield(discount_factors: Iterable[Number]) -> float:
    """Coupon pricing an n-period bond at par: (1 - DF(n)) / sum DF(t)."""
    dfs = as_array(discount_factors)
    if len(dfs) == 0:
        return np.float64(np.nan)
    return (1.0 - dfs[-1]) / np.sum(dfs)


@float_semantics
def par_yield_from_spots(spots: Iterable[Number]) -> float:
    return par_yield(discount_factors_from_spots(spots))


def term_structure_report(spots: Iterable[Number]) -> pd.DataFrame:
    s = as_array(spots)
    dfs = discount_factors_from_spots(s)
    fwds = forward_rates(s)

    return pd.DataFrame(
        {
            "maturity": np.arange(1, len(s) + 1),
            "spot": s,
            "discount_factor": dfs,
            "forward_to_next": np.r_[fwds, np.nan] if len(s) else fwds,
        }
    )


def curve_plot_points(spots_pct: Iterable[Number]) -> Tuple[List[Tuple[int, float]], float]:
    """
    (maturity, spot %) points for a line-and-marker plot, and the y-axis
    maximum max(5, max(points) + 1).
    """
    s = as_array(spots_pct)
    points = [(t, float(x)) for t, x in enumerate(s, start=1)]
    y_max = max(5.0, float(np.max(s)) + 1.0) if len(s) else 5.0
    return points, y_max

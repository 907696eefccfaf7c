from __future__ import annotations

import pandas as pd
import numpy as np
from dataclasses import dataclass
from typing import Optional, Tuple

from .annuities import annuity_immediate
from .utils import Number, as_float, float_semantics, whole_periods

AMORTIZATION_COLUMNS = ["period", "book_value_start", "interest", "coupon", "book_value_end"]


@dataclass(frozen=True)
class Bond:
    face: float
    coupon_rate: float          # per period, decimal
    yield_rate: float           # per period, decimal
    periods: float
    redemption: Optional[float] = None  # defaults to face (redeemed at par)

    @property
    def redemption_value(self) -> float:
        return self.face if self.redemption is None else self.redemption

    @property
    def coupon(self) -> float:
        return self.face * self.coupon_rate

    def price(self) -> float:
        return bond_price(self.face, self.redemption_value, self.coupon_rate, self.yield_rate, self.periods)

    def amortization_table(self, price: Optional[float] = None) -> pd.DataFrame:
        """Book values starting from ``price`` (default: the price at this bond's yield)."""
        if price is None:
            price = self.price()
        return bond_amortization_table(price, self.face, self.coupon_rate, self.yield_rate, self.periods)


@float_semantics
def bond_price(
    face: Number,
    redemption: Number,
    coupon_rate: Number,
    yield_rate: Number,
    n: Number,
) -> float:
    """
    Price of a level-coupon bond at yield i:

        P = F r a(n, i) + C (1+i)^-n
    """
    F, C, r, i = as_float(face), as_float(redemption), as_float(coupon_rate), as_float(yield_rate)
    return F * r * annuity_immediate(n, i) + C * np.power(1.0 + i, -as_float(n))


@float_semantics
def bond_amortization_table(
    price: Number,
    face: Number,
    coupon_rate: Number,
    yield_rate: Number,
    n: Number,
) -> pd.DataFrame:
    """
    Book-value schedule: book_end = book_start (1+i) - F r, starting at ``price``.

    The last book value equals the redemption value only when ``price`` was
    computed at the same yield.
    """
    i = as_float(yield_rate)
    coupon = as_float(face) * as_float(coupon_rate)

    rows = []
    book = as_float(price)
    for t in range(1, whole_periods(n) + 1):
        interest = book * i
        book_end = book * (1.0 + i) - coupon
        rows.append((t, book, interest, coupon, book_end))
        book = book_end

    return pd.DataFrame(rows, columns=AMORTIZATION_COLUMNS)


@float_semantics
def price_bond_dirty_clean(
    face: Number,
    coupon_rate: Number,
    yield_rate: Number,
    n: Number,
    days: Number,
    period_days: Number,
) -> Tuple[float, float, float]:
    """
    Returns (dirty, clean, accrued) for a purchase ``days`` into a
    ``period_days``-day coupon period.

    Base price assumes redemption at par. Accrued is the straight-line share
    of one coupon: F r days / period_days.
    """
    base = bond_price(face, face, coupon_rate, yield_rate, n)
    accrued = as_float(face) * as_float(coupon_rate) * (as_float(days) / as_float(period_days))

    dirty = base + accrued
    clean = dirty - accrued
    return dirty, clean, accrued

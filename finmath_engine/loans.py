from __future__ import annotations

from typing import Tuple

import numpy as np
import pandas as pd

from .annuities import annuity_accumulated, annuity_immediate
from .utils import Number, as_float, float_semantics, whole_periods

SCHEDULE_COLUMNS = ["period", "payment", "interest", "principal", "balance_after"]


@float_semantics
def level_payment(principal: Number, n: Number, i: Number) -> float:
    """Level payment repaying ``principal`` over n periods: L / a(n, i)."""
    return as_float(principal) / annuity_immediate(n, i)


@float_semantics
def loan_schedule(principal: Number, n: Number, i: Number) -> pd.DataFrame:
    """
    Amortization schedule for a level-payment loan, one row per period.

    Built forward: interest on the opening balance, the rest of the payment
    retires principal. The reported balance is clamped at zero so the
    floating-point residue on the final row shows as 0.
    """
    i = as_float(i)
    payment = level_payment(principal, n, i)

    rows = []
    balance = as_float(principal)
    for t in range(1, whole_periods(n) + 1):
        interest = balance * i
        repaid = payment - interest
        balance = balance - repaid
        rows.append((t, payment, interest, repaid, np.maximum(0.0, balance)))

    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)


@float_semantics
def outstanding_balance_prospective(principal: Number, n: Number, i: Number, t: Number) -> float:
    """Balance after t payments as the value of the remaining ones: P a(n-t, i)."""
    return level_payment(principal, n, i) * annuity_immediate(as_float(n) - as_float(t), i)


@float_semantics
def outstanding_balance_retrospective(principal: Number, n: Number, i: Number, t: Number) -> float:
    """Balance after t payments as accumulated loan less accumulated payments: L(1+i)^t - P s(t, i)."""
    L, i, t = as_float(principal), as_float(i), as_float(t)
    return L * np.power(1.0 + i, t) - level_payment(L, n, i) * annuity_accumulated(t, i)


def outstanding_balance(principal: Number, n: Number, i: Number, t: Number) -> Tuple[float, float]:
    """(prospective, retrospective) balance after t payments; the two agree."""
    return (
        outstanding_balance_prospective(principal, n, i, t),
        outstanding_balance_retrospective(principal, n, i, t),
    )

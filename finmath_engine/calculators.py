"""
Calculator entry points.

One function per "compute" action of the site. Each takes the raw field
values (strings or numbers), divides percentage fields by 100, calls the
engine and returns a CalcOutput of named display values, plus optional text
and an optional table for the presentation layer.

Scalar fields that are not numbers raise InputError here, at the boundary.
List fields drop non-numeric tokens. Inside the engine nan/inf propagate and
are rendered as a placeholder.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Optional, Union

import pandas as pd

from .annuities import (
    annuity_accumulated,
    annuity_continuous,
    annuity_due,
    annuity_immediate,
    annuity_mthly,
    decreasing_annuity,
    deferred_perpetuity,
    geometric_annuity,
    increasing_annuity,
)
from .bonds import bond_amortization_table, bond_price, price_bond_dirty_clean
from .cashflows import accumulated_value, present_value, time_weighted_return
from .curves import (
    curve_plot_points,
    discount_factors_from_spots,
    forward_rates,
    par_yield,
    term_structure_report,
)
from .immunization import redington_check
from .loans import level_payment, loan_schedule, outstanding_balance
from .rates import effective_from_nominal, force_from_nominal
from .risk import dollar_duration, dv01, modified_convexity, modified_duration, portfolio_measures
from .rootfinding import irr
from .swaps import price_swap
from .utils import (
    Number,
    NumberList,
    format_number,
    format_percent,
    parse_number,
    parse_number_list,
    parse_percent,
)

logger = logging.getLogger(__name__)

Input = Union[str, Number]


@dataclass(frozen=True)
class CalcValue:
    """A computed number, finite or not, with how it should be shown."""
    value: float
    kind: str = "number"    # "number" | "percent"
    places: int = 2

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.value)

    def display(self) -> str:
        if self.kind == "percent":
            return format_percent(self.value, self.places)
        return format_number(self.value, self.places)


@dataclass
class CalcOutput:
    values: Dict[str, CalcValue] = field(default_factory=dict)
    text: Dict[str, str] = field(default_factory=dict)
    table: Optional[pd.DataFrame] = None

    def __getitem__(self, name: str) -> float:
        return self.values[name].value

    def render(self) -> Dict[str, str]:
        out = {name: v.display() for name, v in self.values.items()}
        out.update(self.text)
        return out


def _num(x: Number, places: int) -> CalcValue:
    return CalcValue(float(x), "number", places)


def _pct(x: Number, places: int) -> CalcValue:
    return CalcValue(float(x), "percent", places)


def _versus(a: float, b: float, places: int = 6) -> str:
    return f"{format_number(a, places)} vs {format_number(b, places)}"


# ---- rates & cashflows ----

def nominal_rates(j_pct: Input, m: Input) -> CalcOutput:
    """Effective annual rate and force of interest for nominal j^(m)."""
    j, m = parse_percent(j_pct), parse_number(m)
    if not math.isfinite(j) or not math.isfinite(m) or m <= 0:
        i = delta = math.nan
    else:
        i = effective_from_nominal(j, m)
        delta = force_from_nominal(j, m)
    return CalcOutput(values={"effective_rate": _pct(i, 6), "force_of_interest": _pct(delta, 6)})


def cashflow_values(cashflows: NumberList, i_pct: Input) -> CalcOutput:
    cfs, i = parse_number_list(cashflows), parse_percent(i_pct)
    return CalcOutput(
        values={
            "present_value": _num(present_value(cfs, i), 4),
            "accumulated_value": _num(accumulated_value(cfs, i), 4),
        }
    )


# ---- annuities ----

def level_annuities(n: Input, i_pct: Input) -> CalcOutput:
    n, i = parse_number(n), parse_percent(i_pct)
    return CalcOutput(
        values={
            "annuity_immediate": _num(annuity_immediate(n, i), 8),
            "annuity_due": _num(annuity_due(n, i), 8),
            "accumulated_value": _num(annuity_accumulated(n, i), 8),
        }
    )


def continuous_annuity(n: Input, delta_pct: Input) -> CalcOutput:
    n, delta = parse_number(n), parse_percent(delta_pct)
    return CalcOutput(values={"annuity_continuous": _num(annuity_continuous(n, delta), 8)})


def mthly_annuity(i_pct: Input, m: Input, n: Input) -> CalcOutput:
    """n periods payable m times per period; value in sub-period payment units."""
    i, m, n = parse_percent(i_pct), parse_number(m), parse_number(n)
    value, i_m = annuity_mthly(n, i, m)
    out = CalcOutput(values={"annuity": _num(value, 8), "subperiod_rate": _pct(i_m, 6)})
    out.text["summary"] = f"{out.values['annuity'].display()} (i_m={out.values['subperiod_rate'].display()})"
    return out


def arithmetic_annuities(n: Input, i_pct: Input, step: Input) -> CalcOutput:
    n, i, step = parse_number(n), parse_percent(i_pct), parse_number(step)
    return CalcOutput(
        values={
            "increasing": _num(increasing_annuity(n, i, step), 6),
            "decreasing": _num(decreasing_annuity(n, i, step), 6),
        }
    )


def geometric_annuity_value(n: Input, i_pct: Input, g_pct: Input) -> CalcOutput:
    n, i, g = parse_number(n), parse_percent(i_pct), parse_percent(g_pct)
    return CalcOutput(values={"geometric": _num(geometric_annuity(n, i, g), 6)})


# ---- loans ----

def loan_amortization(principal: Input, i_pct: Input, n: Input) -> CalcOutput:
    L, i, n = parse_number(principal), parse_percent(i_pct), parse_number(n)
    schedule = loan_schedule(L, n, i)
    logger.debug("Loan schedule L=%s n=%s i=%s: %s rows", L, n, i, len(schedule))
    return CalcOutput(values={"payment": _num(level_payment(L, n, i), 6)}, table=schedule)


def loan_balance(principal: Input, i_pct: Input, n: Input, t: Input) -> CalcOutput:
    L, i, n, t = parse_number(principal), parse_percent(i_pct), parse_number(n), parse_number(t)
    prospective, retrospective = outstanding_balance(L, n, i, t)
    return CalcOutput(
        values={
            "prospective": _num(prospective, 6),
            "retrospective": _num(retrospective, 6),
        }
    )


# ---- bonds ----

def bond_pricing(
    face: Input,
    redemption: Input,
    coupon_pct: Input,
    yield_pct: Input,
    n: Input,
    show_schedule: bool = False,
) -> CalcOutput:
    F, C = parse_number(face), parse_number(redemption)
    r, i, n = parse_percent(coupon_pct), parse_percent(yield_pct), parse_number(n)

    price = bond_price(F, C, r, i, n)
    table = bond_amortization_table(price, F, r, i, n) if show_schedule else None
    return CalcOutput(values={"price": _num(price, 6)}, table=table)


def bond_accrued_interest(
    face: Input,
    coupon_pct: Input,
    n: Input,
    yield_pct: Input,
    days: Input,
    period_days: Input,
) -> CalcOutput:
    F, r, n, i = parse_number(face), parse_percent(coupon_pct), parse_number(n), parse_percent(yield_pct)
    dirty, clean, accrued = price_bond_dirty_clean(F, r, i, n, parse_number(days), parse_number(period_days))
    return CalcOutput(
        values={
            "accrued": _num(accrued, 6),
            "dirty": _num(dirty, 6),
            "clean": _num(clean, 6),
        }
    )


# ---- duration, curve, immunization ----

def duration_convexity(cashflows: NumberList, i_pct: Input) -> CalcOutput:
    cfs, i = parse_number_list(cashflows), parse_percent(i_pct)
    m = portfolio_measures(cfs, i)
    return CalcOutput(
        values={
            "price": _num(m.present_value, 6),
            "macaulay_duration": _num(m.macaulay_duration, 6),
            "modified_duration": _num(modified_duration(cfs, i), 6),
            "macaulay_convexity": _num(m.macaulay_convexity, 6),
            "modified_convexity": _num(modified_convexity(cfs, i), 6),
        }
    )


def term_structure(spots_pct: NumberList) -> CalcOutput:
    """Discount factors, forwards and par yield from spot rates given in percent."""
    spots_in_pct = parse_number_list(spots_pct)
    spots = spots_in_pct / 100.0

    dfs = discount_factors_from_spots(spots)
    fwds = forward_rates(spots)
    points, y_max = curve_plot_points(spots_in_pct)

    out = CalcOutput(values={"par_yield": _pct(par_yield(dfs), 6)}, table=term_structure_report(spots))
    out.text["discount_factors"] = ", ".join(format_number(x, 6) for x in dfs)
    out.text["forward_rates"] = ", ".join(format_percent(x, 4) for x in fwds)
    out.text["plot_points"] = ", ".join(f"({t}, {format_number(y, 4)})" for t, y in points)
    out.values["plot_y_max"] = _num(y_max, 4)
    return out


def immunization(liabilities: NumberList, assets: NumberList, i_pct: Input) -> CalcOutput:
    check = redington_check(parse_number_list(liabilities), parse_number_list(assets), parse_percent(i_pct))
    a, l = check.assets, check.liabilities

    if check.immunized:
        verdict = "Yes: Redington satisfied"
    else:
        marks = [
            ("PV", check.pv_matched),
            ("Dur", check.duration_matched),
            ("Conv", check.convexity_dominates),
        ]
        verdict = "No: conditions " + " ".join(f"[{name} {'✓' if ok else '✗'}]" for name, ok in marks)

    return CalcOutput(
        text={
            "present_value": _versus(a.present_value, l.present_value),
            "duration": _versus(a.macaulay_duration, l.macaulay_duration),
            "convexity": _versus(a.macaulay_convexity, l.macaulay_convexity),
            "verdict": verdict,
        }
    )


# ---- swaps & odds and ends ----

def swap_valuation(
    discount_factors: NumberList,
    alphas: NumberList,
    fixed_pct: Input,
    notional: Input,
) -> CalcOutput:
    dfs, acc = parse_number_list(discount_factors), parse_number_list(alphas)
    s_par, value = price_swap(dfs, parse_percent(fixed_pct), parse_number(notional), acc)
    return CalcOutput(values={"par_swap_rate": _pct(s_par, 6), "value": _num(value, 2)})


def deferred_perpetuity_value(i_pct: Input, deferral: Input) -> CalcOutput:
    return CalcOutput(
        values={"present_value": _num(deferred_perpetuity(parse_percent(i_pct), parse_number(deferral)), 6)}
    )


def dv01_calculator(price: Input, mod_duration: Input) -> CalcOutput:
    P, d_mod = parse_number(price), parse_number(mod_duration)
    return CalcOutput(
        values={
            "dv01": _num(dv01(P, d_mod), 6),
            "dollar_duration": _num(dollar_duration(P, d_mod), 6),
        }
    )


def time_weighted_return_calculator(returns_pct: NumberList) -> CalcOutput:
    returns = parse_number_list(returns_pct) / 100.0
    return CalcOutput(values={"time_weighted_return": _pct(time_weighted_return(returns), 6)})


def irr_calculator(cashflows: NumberList) -> CalcOutput:
    """IRR of cashflows from t = 0; an unconverged estimate is still shown."""
    result = irr(parse_number_list(cashflows))
    if not result.converged:
        logger.debug("IRR did not converge after %s iterations; showing %s", result.iterations, result.root)
    out = CalcOutput(values={"irr": _pct(result.root, 6)})
    out.text["converged"] = "yes" if result.converged else "no"
    return out

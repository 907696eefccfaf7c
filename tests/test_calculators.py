import math

import pytest

from finmath_engine import calculators as calc
from finmath_engine.loans import level_payment
from finmath_engine.utils import InputError

DASH = "—"


def test_nominal_rates_display():
    out = calc.nominal_rates("12", "12")
    shown = out.render()
    assert shown["effective_rate"] == "12.682503%"
    assert out.values["force_of_interest"].is_finite


def test_nominal_rates_non_positive_m_shows_placeholder():
    shown = calc.nominal_rates(12, 0).render()
    assert shown["effective_rate"] == DASH
    assert shown["force_of_interest"] == DASH


def test_cashflow_values_drop_junk_tokens():
    out = calc.cashflow_values("100, abc 100,,100", "5")
    assert out["present_value"] == pytest.approx(272.3248029, abs=1e-6)
    assert out.render()["present_value"] == "272.3248"


def test_level_annuities():
    out = calc.level_annuities("10", "5")
    assert out.render()["annuity_immediate"] == "7.72173493"
    assert out["annuity_due"] == pytest.approx(1.05 * out["annuity_immediate"], rel=1e-12)


def test_zero_rate_annuity_via_calculator():
    shown = calc.level_annuities(10, 0).render()
    assert shown["annuity_immediate"] == "10"
    assert shown["accumulated_value"] == "10"


def test_non_numeric_scalar_rejected_at_boundary():
    with pytest.raises(InputError):
        calc.level_annuities("ten", "5")
    with pytest.raises(InputError):
        calc.loan_amortization("10000", "", "12")


def test_nan_input_accepted_and_rendered_as_placeholder():
    out = calc.continuous_annuity(float("nan"), 5)
    assert not out.values["annuity_continuous"].is_finite
    assert out.render()["annuity_continuous"] == DASH


def test_mthly_annuity_summary():
    out = calc.mthly_annuity(5, 12, 2)
    assert out.text["summary"].endswith(f"(i_m={out.render()['subperiod_rate']})")


def test_arithmetic_and_geometric():
    out = calc.arithmetic_annuities(6, 5, 2)
    assert out["decreasing"] > out["increasing"], "Front-loaded payments are worth more"
    geo = calc.geometric_annuity_value(5, 4, 4)
    assert geo["geometric"] == pytest.approx(5 / 1.04, rel=1e-12)


def test_loan_amortization_table():
    out = calc.loan_amortization(10_000, 1, 12)
    assert out["payment"] == pytest.approx(level_payment(10_000, 12, 0.01))
    assert len(out.table) == 12
    assert abs(out.table["balance_after"].iloc[-1]) < 1e-6


def test_loan_balance_agrees():
    out = calc.loan_balance(10_000, 1, 12, 4)
    assert abs(out["prospective"] - out["retrospective"]) < 1e-6


def test_bond_pricing_optional_schedule():
    without = calc.bond_pricing(1000, 1000, 5, 6, 10)
    assert without.table is None
    assert abs(without["price"] - 926.40) < 0.01

    with_table = calc.bond_pricing(1000, 1000, 5, 6, 10, show_schedule=True)
    assert len(with_table.table) == 10


def test_bond_accrued_interest():
    out = calc.bond_accrued_interest(1000, 5, 10, 6, 90, 180)
    assert out["accrued"] == pytest.approx(25.0)
    assert out["dirty"] - out["clean"] == pytest.approx(25.0)


def test_duration_convexity_outputs():
    out = calc.duration_convexity("0 0 0 100", 4)
    assert out["macaulay_duration"] == pytest.approx(4.0)
    assert out["modified_duration"] == pytest.approx(4.0 / 1.04)


def test_term_structure_text():
    out = calc.term_structure("5, 5")
    assert out.text["discount_factors"] == "0.952381, 0.907029"
    assert out.text["forward_rates"] == "5.0000%"
    assert out.render()["par_yield"] == "5.000000%"
    assert out["plot_y_max"] == 6.0
    assert len(out.table) == 2


def test_immunization_verdicts():
    i = 5
    L = "0 1000"
    A = f"{1000 / (2 * 1.05)}, 0, {1000 * 1.05 / 2}"
    assert calc.immunization(L, A, i).text["verdict"] == "Yes: Redington satisfied"

    failed = calc.immunization(L, L, i).text["verdict"]
    assert failed == "No: conditions [PV ✓] [Dur ✓] [Conv ✗]"


def test_swap_valuation():
    dfs = ", ".join(str(1.05**-t) for t in range(1, 6))
    out = calc.swap_valuation(dfs, "", 5, 1_000_000)
    assert out.render()["par_swap_rate"] == "5.000000%"
    assert abs(out["value"]) < 1e-6


def test_odds_and_ends():
    perp = calc.deferred_perpetuity_value(5, 0)
    assert perp["present_value"] == pytest.approx(20.0)

    risk = calc.dv01_calculator(1000, 4.5)
    assert risk["dv01"] == pytest.approx(0.45)
    assert risk["dollar_duration"] == pytest.approx(-4500.0)

    twr = calc.time_weighted_return_calculator("10 -5")
    assert twr.render()["time_weighted_return"] == "4.500000%"


def test_irr_calculator_reports_convergence():
    ok = calc.irr_calculator("-1000, 300, 300, 300, 300, 300")
    assert ok.text["converged"] == "yes"
    assert 0.15 < ok["irr"] < 0.155

    stale = calc.irr_calculator("5")
    assert stale.text["converged"] == "no"
    assert stale.render()["irr"] == "10.000000%"
    assert math.isfinite(stale["irr"])


def test_geometric_equal_rates_nan_term_shows_placeholder():
    assert calc.geometric_annuity_value("nan", 4, 4).render()["geometric"] == DASH


def test_decimal_comma_rejected():
    with pytest.raises(InputError):
        calc.level_annuities("10", "5,25")


def test_term_structure_ignores_infinite_token():
    out = calc.term_structure("5 inf 6")
    assert out["plot_y_max"] == 7.0
    assert len(out.table) == 2

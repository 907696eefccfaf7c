import pytest

from finmath_engine.immunization import redington_check


@pytest.fixture(scope="module")
def rate():
    return 0.05


@pytest.fixture(scope="module")
def liabilities():
    # single payment of 1000 at t = 2
    return [0.0, 1000.0]


@pytest.fixture(scope="module")
def barbell_assets(rate):
    """
    Assets at t = 1 and t = 3 with the liability's PV and duration:
    equal PV split around t = 2 gives duration 2 and more dispersion.
    """
    return [1000.0 / (2 * (1 + rate)), 0.0, 1000.0 * (1 + rate) / 2]


def test_matched_barbell_is_immunized(liabilities, barbell_assets, rate):
    check = redington_check(liabilities, barbell_assets, rate)
    assert check.pv_matched
    assert check.duration_matched
    assert check.convexity_dominates
    assert check.immunized
    assert check.failed_conditions == []


def test_identical_streams_fail_only_convexity(liabilities, rate):
    check = redington_check(liabilities, liabilities, rate)
    assert check.pv_matched and check.duration_matched
    assert not check.convexity_dominates, "Convexity must be strictly greater"
    assert not check.immunized
    assert check.failed_conditions == ["convexity"]


def test_each_condition_reported_independently(liabilities, rate):
    # same PV, shorter duration
    assets = [1000.0 / (1 + rate)]
    check = redington_check(liabilities, assets, rate)
    assert check.pv_matched
    assert not check.duration_matched
    assert "duration" in check.failed_conditions
    assert "present_value" not in check.failed_conditions


def test_pv_mismatch(liabilities, barbell_assets, rate):
    scaled = [1.01 * cf for cf in barbell_assets]
    check = redington_check(liabilities, scaled, rate)
    assert not check.pv_matched
    assert check.duration_matched, "Scaling leaves duration unchanged"
    assert check.convexity_dominates
    assert check.failed_conditions == ["present_value"]


def test_measures_exposed(liabilities, barbell_assets, rate):
    check = redington_check(liabilities, barbell_assets, rate)
    assert abs(check.liabilities.macaulay_duration - 2.0) < 1e-12
    assert check.assets.macaulay_convexity > check.liabilities.macaulay_convexity


def test_empty_side_fails_without_raising(liabilities, rate):
    check = redington_check(liabilities, [], rate)
    assert not check.immunized
    assert "duration" in check.failed_conditions

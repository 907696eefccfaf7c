import logging
import math

import numpy as np
import pytest

from finmath_engine.config import EngineSettings, configure_logging, get_settings
from finmath_engine.utils import (
    InputError,
    format_number,
    format_percent,
    nearly,
    parse_number,
    parse_number_list,
    parse_percent,
    whole_periods,
)


def test_parse_number_list_drops_non_numeric_tokens():
    assert parse_number_list("1, 2 x 3,,4").tolist() == [1.0, 2.0, 3.0, 4.0]
    assert parse_number_list("  ").tolist() == []
    assert parse_number_list(None).tolist() == []
    assert parse_number_list("-1000 3e2 nan").tolist() == [-1000.0, 300.0]


def test_parse_number_list_passes_sequences_through():
    assert parse_number_list([1, 2.5]).tolist() == [1.0, 2.5]
    assert parse_number_list(np.array([3.0])).tolist() == [3.0]


def test_parse_number():
    assert parse_number("12.5") == 12.5
    assert parse_number(" 10,000 ") == 10_000.0
    assert parse_number(7) == 7.0
    assert math.isnan(parse_number(float("nan"))), "Numbers pass through unchecked"
    assert parse_percent("5") == 0.05


@pytest.mark.parametrize("bad", ["abc", "", "5%", "5,25", "1,2,3", ",100", "1_000", None, True, [1]])
def test_parse_number_rejects_non_numbers(bad):
    with pytest.raises(InputError):
        parse_number(bad)


def test_input_error_is_value_error():
    assert issubclass(InputError, ValueError)


def test_format_number():
    assert format_number(12345.678, 2) == "12,345.68"
    assert format_number(1.5, 6) == "1.5"
    assert format_number(1000.0, 2) == "1,000"
    assert format_number(float("nan")) == "—"
    assert format_number(float("inf"), 4) == "—"


def test_format_percent():
    assert format_percent(0.05, 2) == "5.00%"
    assert format_percent(0.126825030, 6) == "12.682503%"
    assert format_percent(float("-inf")) == "—"


def test_nearly_and_whole_periods():
    assert nearly(0.0, 1e-13)
    assert not nearly(0.0, 1e-11)
    assert nearly(1.0, 1.0 + 1e-7, 1e-6)
    assert not nearly(float("nan"), 0.0)
    assert whole_periods(12) == 12
    assert whole_periods(3.9) == 3
    assert whole_periods(-2) == 0
    assert whole_periods(float("inf")) == 0


def test_default_settings():
    s = get_settings()
    assert s.zero_tolerance == 1e-12
    assert s.immunization_tolerance == 1e-6
    assert s.irr_initial_guess == 0.1
    assert s.irr_tolerance == 1e-9
    assert s.irr_max_iterations == 100


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("FINMATH_IRR_MAX_ITERATIONS", "5")
    monkeypatch.setenv("FINMATH_PERCENT_PLACES", "4")
    s = EngineSettings()
    assert s.irr_max_iterations == 5
    assert s.percent_places == 4


def test_configure_logging_is_idempotent():
    logger = configure_logging("DEBUG")
    configure_logging("DEBUG")
    ours = [h for h in logger.handlers if getattr(h, "_finmath_handler", False)]
    try:
        assert len(ours) == 1
        assert logger.level == logging.DEBUG
    finally:
        for h in ours:
            logger.removeHandler(h)
        logger.setLevel(logging.NOTSET)


def test_parse_number_thousands_grouping():
    assert parse_number("1,234,567.5") == 1_234_567.5
    assert parse_number("-1,000") == -1000.0
    assert parse_number("nan") != parse_number("nan")


def test_parse_number_list_drops_non_finite_and_underscored_tokens():
    assert parse_number_list("5 inf 6 -Infinity 1_000 7").tolist() == [5.0, 6.0, 7.0]

from __future__ import annotations

import functools
import math
import numbers
import re
from typing import Iterable, List, Optional, Union

import numpy as np

from .config import get_settings

Number = Union[int, float, np.floating]
NumberList = Union[str, Iterable[Number]]

_LIST_SEPARATORS = re.compile(r"[,\s]+")
_THOUSANDS = re.compile(r"^[+-]?\d{1,3}(,\d{3})+(\.\d*)?$")


class InputError(ValueError):
    """Raised at the input boundary for values that are not numbers at all."""


def float_semantics(func):
    """
    Run ``func`` with IEEE-754 semantics: division by zero, log of a non-positive
    number, fractional powers of negative bases and overflow give inf/nan
    instead of raising or warning.

    Arguments still have to be numpy floats for this to hold; plain Python
    floats raise ZeroDivisionError regardless of errstate.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            return func(*args, **kwargs)

    return wrapper


def as_float(x: Number) -> np.float64:
    return np.float64(x)


def as_array(values: Iterable[Number]) -> np.ndarray:
    """Cashflow-like sequence as a 1-D float array (empty allowed)."""
    if not isinstance(values, np.ndarray):
        values = list(values)
    return np.asarray(values, dtype=float).ravel()


def nearly(a: Number, b: Number, eps: Optional[float] = None) -> bool:
    """|a - b| < eps, eps defaulting to the configured zero tolerance."""
    if eps is None:
        eps = get_settings().zero_tolerance
    with np.errstate(invalid="ignore"):
        return bool(abs(np.float64(a) - np.float64(b)) < eps)


def whole_periods(n: Number) -> int:
    """Number of loop steps k = 1, 2, ... with k <= n (0 for non-finite n)."""
    n = np.float64(n)
    if not np.isfinite(n) or n < 1:
        return 0
    return int(math.floor(n))


# ---- input boundary ----

def parse_number_list(values: NumberList) -> np.ndarray:
    """
    Comma/space-delimited list of numbers.

    Tokens that are not finite numbers (inf, nan, digit underscores) are
    dropped silently. Sequences of numbers pass through unchanged.
    """
    if values is None:
        return np.array([], dtype=float)

    if not isinstance(values, str):
        return as_array(values)

    out: List[float] = []
    for token in _LIST_SEPARATORS.split(values.strip()):
        if not token or "_" in token:
            continue
        try:
            x = float(token)
        except ValueError:
            continue
        if not math.isfinite(x):
            continue
        out.append(x)
    return np.array(out, dtype=float)


def parse_number(value: Union[str, Number]) -> float:
    """
    Single numeric input.

    Numbers pass through (nan/inf included). Strings must parse as a float,
    with commas only as thousands separators ("10,000.5"); anything else
    raises InputError.
    """
    if isinstance(value, bool):
        raise InputError(f"Expected a number, got {value!r}")

    if isinstance(value, numbers.Real):
        return float(value)

    if isinstance(value, str):
        text = value.strip()
        if "_" in text:
            raise InputError(f"Not a number: {value!r}")
        if "," in text:
            if not _THOUSANDS.match(text):
                raise InputError(f"Not a number: {value!r}")
            text = text.replace(",", "")
        try:
            return float(text)
        except ValueError:
            raise InputError(f"Not a number: {value!r}") from None

    raise InputError(f"Expected a number, got {type(value).__name__}")


def parse_percent(value: Union[str, Number]) -> float:
    """Whole-number percentage input (5 -> 0.05)."""
    return parse_number(value) / 100.0


# ---- display ----

def format_number(x: Number, places: Optional[int] = None) -> str:
    """Thousands-grouped, at most ``places`` decimals, trailing zeros dropped."""
    settings = get_settings()
    if places is None:
        places = settings.number_places

    x = float(x)
    if not math.isfinite(x):
        return settings.placeholder

    s = f"{x:,.{places}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def format_percent(x: Number, places: Optional[int] = None) -> str:
    """``x * 100`` with exactly ``places`` decimals and a trailing %."""
    settings = get_settings()
    if places is None:
        places = settings.percent_places

    x = float(x)
    if not math.isfinite(x):
        return settings.placeholder
    return f"{100.0 * x:.{places}f}%"

"""Newton-Raphson root finding and the IRR of a cashflow stream."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple

import logging

import numpy as np

from .config import get_settings
from .utils import Number, as_array, float_semantics

logger = logging.getLogger(__name__)

FuncDeriv = Callable[[float], Tuple[float, float]]


@dataclass(frozen=True)
class RootResult:
    root: float
    iterations: int
    converged: bool
    method: str


@float_semantics
def newton_raphson(
    func_and_deriv: FuncDeriv,
    initial_guess: float,
    *,
    tol: float,
    max_iter: int,
) -> RootResult:
    """
    Plain Newton iteration x <- x - f(x)/f'(x).

    Stops when |f(x)| < tol or after ``max_iter`` steps. A non-finite update
    resets x to ``initial_guess`` and stops; the result is then reported with
    converged=False rather than raised. There is no bracketing fallback.
    """
    x = np.float64(initial_guess)

    for iteration in range(1, max_iter + 1):
        value, deriv = func_and_deriv(x)
        logger.debug("Newton iter %s: x=%s value=%s deriv=%s", iteration, x, value, deriv)
        if abs(value) < tol:
            return RootResult(float(x), iteration, True, "newton")

        x = x - np.float64(value) / np.float64(deriv)
        if not np.isfinite(x):
            logger.info("Non-finite Newton step at iter %s; returning initial guess %s", iteration, initial_guess)
            return RootResult(float(initial_guess), iteration, False, "newton")

    logger.debug("Newton stopped after %s iterations without convergence", max_iter)
    return RootResult(float(x), max_iter, False, "newton")


def _npv_and_derivative(cfs: np.ndarray) -> FuncDeriv:
    t = np.arange(len(cfs), dtype=float)

    def func_and_deriv(j: float) -> Tuple[float, float]:
        growth = 1.0 + np.float64(j)
        value = np.sum(cfs * np.power(growth, -t))
        deriv = np.sum(-t * cfs * np.power(growth, -(t + 1.0)))
        return value, deriv

    return func_and_deriv


def irr(
    cashflows: Iterable[Number],
    initial_guess: Optional[float] = None,
    tol: Optional[float] = None,
    max_iter: Optional[int] = None,
) -> RootResult:
    """
    Internal rate of return of cashflows indexed from t = 0 (initial outlay included):
    solves sum cf_t / (1+j)^t = 0 for j.

    Defaults (guess 0.1, |f| < 1e-9, 100 iterations) come from settings.
    """
    settings = get_settings()
    if initial_guess is None:
        initial_guess = settings.irr_initial_guess
    if tol is None:
        tol = settings.irr_tolerance
    if max_iter is None:
        max_iter = settings.irr_max_iterations

    cfs = as_array(cashflows)
    return newton_raphson(_npv_and_derivative(cfs), initial_guess, tol=tol, max_iter=max_iter)

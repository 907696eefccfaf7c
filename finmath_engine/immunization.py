"""
Redington immunization.

A liability stream is immunized against small parallel rate moves when the
asset stream matches its present value and Macaulay duration and has higher
convexity. Each condition is reported separately.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

import numpy as np

from .config import get_settings
from .risk import PortfolioMeasures, portfolio_measures
from .utils import Number, nearly

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImmunizationCheck:
    assets: PortfolioMeasures
    liabilities: PortfolioMeasures
    pv_matched: bool
    duration_matched: bool
    convexity_dominates: bool

    @property
    def immunized(self) -> bool:
        return self.pv_matched and self.duration_matched and self.convexity_dominates

    @property
    def failed_conditions(self) -> List[str]:
        failed = []
        if not self.pv_matched:
            failed.append("present_value")
        if not self.duration_matched:
            failed.append("duration")
        if not self.convexity_dominates:
            failed.append("convexity")
        return failed


def redington_check(
    liabilities: Iterable[Number],
    assets: Iterable[Number],
    i: Number,
    tol: Optional[float] = None,
) -> ImmunizationCheck:
    """
    Compare asset and liability cashflows (end-of-period, t = 1..n) at flat rate i.

    PV and duration are matched within ``tol`` (default from settings);
    convexity must be strictly greater on the asset side.
    """
    if tol is None:
        tol = get_settings().immunization_tolerance

    m_l = portfolio_measures(liabilities, i)
    m_a = portfolio_measures(assets, i)

    with np.errstate(invalid="ignore"):
        convexity_dominates = bool(m_a.macaulay_convexity > m_l.macaulay_convexity)

    check = ImmunizationCheck(
        assets=m_a,
        liabilities=m_l,
        pv_matched=nearly(m_a.present_value, m_l.present_value, tol),
        duration_matched=nearly(m_a.macaulay_duration, m_l.macaulay_duration, tol),
        convexity_dominates=convexity_dominates,
    )
    logger.debug("Redington check at i=%s: failed=%s", i, check.failed_conditions)
    return check

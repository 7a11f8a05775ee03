"""Fixed-degree polynomial curve through the national daily death counts."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd
import statsmodels.api as sm

from epicurve.config import DAILY_DEATHS_COL, DATE_COL, DEFAULT_DEGREE, DEFAULT_FIT_START
from epicurve.errors import InsufficientFitDataError
from epicurve.utils import day_numbers, normalize_dates

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FitWindow:
    """Dates on or after *start* take part in the fit; earlier dates stay in
    the series for display only."""

    start: pd.Timestamp = DEFAULT_FIT_START

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", pd.Timestamp(self.start).normalize())

    def select(self, national: pd.DataFrame) -> pd.DataFrame:
        return national[national[DATE_COL] >= self.start]


@dataclass(frozen=True)
class FittedModel:
    """OLS polynomial of daily deaths against date.

    Dates are encoded as days since the Unix epoch, then shifted by *origin*
    and divided by *scale* before the polynomial basis is built;
    *coefficients* are in increasing powers of that scaled day number.
    """

    degree: int
    coefficients: tuple[float, ...]
    origin: float
    scale: float
    window_start: pd.Timestamp
    first_date: pd.Timestamp
    last_date: pd.Timestamp
    n_obs: int
    rsquared: float

    def evaluate(self, days) -> np.ndarray:
        """Predicted daily deaths at numeric *days* (days since epoch)."""
        x = (np.asarray(days, dtype=float) - self.origin) / self.scale
        basis = np.vander(np.atleast_1d(x), self.degree + 1, increasing=True)
        return basis @ np.asarray(self.coefficients)

    def predict(self, dates) -> np.ndarray:
        """Predicted daily deaths at *dates*, inside or outside the fit window."""
        return self.evaluate(day_numbers(normalize_dates(dates)))


def fit_curve(
    national: pd.DataFrame,
    window: FitWindow | None = None,
    degree: int = DEFAULT_DEGREE,
) -> FittedModel:
    """Fit a degree-*degree* polynomial to ``daily_deaths`` over *window*.

    Raises:
        InsufficientFitDataError: the window holds fewer distinct dates than
            the ``degree + 1`` coefficients to estimate.
    """
    if degree < 0:
        raise ValueError(f"degree must be >= 0, got {degree}")
    window = window or FitWindow()

    train = window.select(national)
    required = degree + 1
    available = int(train[DATE_COL].nunique())
    if available < required:
        logger.error(
            "Fit window from %s has %d distinct date(s); degree %d needs %d.",
            window.start.date(), available, degree, required,
        )
        raise InsufficientFitDataError(required=required, available=available)

    days = day_numbers(train[DATE_COL])
    lo, hi = float(days.min()), float(days.max())
    origin = (lo + hi) / 2.0
    scale = (hi - lo) / 2.0 or 1.0

    basis = np.vander((days - origin) / scale, required, increasing=True)
    y = train[DAILY_DEATHS_COL].to_numpy(dtype=float)
    results = sm.OLS(y, basis).fit()

    model = FittedModel(
        degree=degree,
        coefficients=tuple(float(c) for c in results.params),
        origin=origin,
        scale=scale,
        window_start=window.start,
        first_date=pd.Timestamp(train[DATE_COL].min()),
        last_date=pd.Timestamp(train[DATE_COL].max()),
        n_obs=int(results.nobs),
        rsquared=float(results.rsquared),
    )
    logger.info(
        "Fitted degree-%d curve on %d days [%s, %s], R^2=%.4f",
        degree, model.n_obs, model.first_date.date(), model.last_date.date(),
        model.rsquared,
    )
    return model

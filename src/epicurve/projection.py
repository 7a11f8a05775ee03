from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from epicurve.config import (
    CLAMP_PROJECTION,
    DAILY_DEATHS_COL,
    DATE_COL,
    DEFAULT_HORIZON,
    OBSERVED,
    PROJECTED,
    SOURCE_COL,
)
from epicurve.fitting import FittedModel
from epicurve.utils import step_days

logger = logging.getLogger(__name__)


def projection_dates(last_date: pd.Timestamp, horizon: int = DEFAULT_HORIZON) -> pd.DatetimeIndex:
    """The *horizon* consecutive calendar days right after *last_date*."""
    if isinstance(horizon, bool) or not isinstance(horizon, (int, np.integer)) or horizon < 1:
        raise ValueError(f"horizon must be a positive integer, got {horizon!r}")
    return pd.date_range(step_days(last_date, 1), periods=int(horizon), freq="D", name=DATE_COL)


def project(
    model: FittedModel,
    last_date: pd.Timestamp,
    horizon: int = DEFAULT_HORIZON,
    clamp_non_negative: bool = CLAMP_PROJECTION,
) -> pd.DataFrame:
    """Evaluate *model* over the projection horizon.

    Predictions are returned as the curve gives them, negative values
    included, unless *clamp_non_negative* is set.
    """
    dates = projection_dates(last_date, horizon)
    predicted = model.predict(dates)

    below = int((predicted < 0).sum())
    if clamp_non_negative:
        predicted = np.clip(predicted, 0.0, None)
    elif below:
        logger.warning(
            "%d projected day(s) fall below zero; pass clamp_non_negative=True to floor them.",
            below,
        )

    logger.info(
        "Projected %d day(s) [%s, %s]", len(dates), dates[0].date(), dates[-1].date(),
    )
    return pd.DataFrame({DATE_COL: dates, DAILY_DEATHS_COL: predicted})


def combine(observed: pd.DataFrame, projected: pd.DataFrame) -> pd.DataFrame:
    """Stack observed and projected daily deaths into one labelled series.

    Observed counts are whole numbers and projections are not, so the
    combined ``daily_deaths`` column is float; observed values keep their
    exact integer value.
    """
    obs = observed[[DATE_COL, DAILY_DEATHS_COL]].assign(**{SOURCE_COL: OBSERVED})
    proj = projected[[DATE_COL, DAILY_DEATHS_COL]].assign(**{SOURCE_COL: PROJECTED})

    overlap = pd.DatetimeIndex(obs[DATE_COL]).intersection(pd.DatetimeIndex(proj[DATE_COL]))
    if len(overlap):
        raise ValueError(
            f"Projected dates overlap observed dates: "
            f"{[d.date().isoformat() for d in overlap[:5]]}"
        )

    out = pd.concat([obs, proj], ignore_index=True)
    out[DAILY_DEATHS_COL] = out[DAILY_DEATHS_COL].astype(float)
    return out.sort_values(DATE_COL).reset_index(drop=True)

"""Daily increments per region and their national aggregation."""

from __future__ import annotations

import logging
from typing import Mapping

import numpy as np
import pandas as pd

from epicurve.config import (
    CLAMP_INCREMENTS,
    DAILY_DEATHS_COL,
    DATE_COL,
    OBSERVED,
    REGION_COL,
    SOURCE_COL,
)
from epicurve.errors import MisalignedAxisError
from epicurve.utils import is_daily_axis

logger = logging.getLogger(__name__)


def daily_increments(cumulative, clamp: bool = CLAMP_INCREMENTS):
    """Difference a completed cumulative series (or an arena, column-wise).

    The first day keeps its full cumulative count; every later day is the
    change from the day before. A decrease in the cumulative count comes out
    as a negative increment. With *clamp*, a decreased count is instead held
    at its previous maximum, so increments never go negative.
    """
    if clamp:
        cumulative = cumulative.cummax()
    return cumulative - cumulative.shift(1, fill_value=0)


def monotonicity_anomalies(cumulative: pd.DataFrame) -> pd.DataFrame:
    """List every (date, region) whose cumulative count decreased."""
    increments = daily_increments(cumulative)
    long = (
        increments.rename_axis(index=DATE_COL)
        .reset_index()
        .melt(id_vars=DATE_COL, var_name=REGION_COL, value_name="increment")
    )
    out = long[long["increment"] < 0]
    if not out.empty:
        logger.warning(
            "%d decreasing cumulative count(s) across %d region(s): %s",
            len(out),
            out[REGION_COL].nunique(),
            sorted(out[REGION_COL].unique().tolist()),
        )
    return out.sort_values([DATE_COL, REGION_COL]).reset_index(drop=True)


def _as_aligned_frame(
    series: pd.DataFrame | Mapping[str, pd.Series],
) -> pd.DataFrame:
    if isinstance(series, pd.DataFrame):
        frame = series
    else:
        items = list(series.items())
        if not items:
            raise ValueError("No region series to aggregate.")
        axis = items[0][1].index
        for region, s in items[1:]:
            if not s.index.equals(axis):
                raise MisalignedAxisError(
                    f"Series for region {region!r} is not on the same date axis "
                    f"as region {items[0][0]!r}."
                )
        frame = pd.concat({region: s for region, s in items}, axis=1)

    if not is_daily_axis(frame.index):
        raise MisalignedAxisError(
            "Region series must share one complete, strictly increasing daily axis."
        )
    return frame


def national_daily(increments: pd.DataFrame | Mapping[str, pd.Series]) -> pd.DataFrame:
    """Sum per-region daily increments into one national daily series.

    *increments* is an arena (date index, one column per region) or a
    mapping of region -> increment series; either way every region must sit
    on the same complete daily axis.
    """
    frame = _as_aligned_frame(increments)
    total = frame.sum(axis=1)
    out = pd.DataFrame({
        DATE_COL: pd.DatetimeIndex(frame.index),
        DAILY_DEATHS_COL: np.asarray(total, dtype=np.int64),
        SOURCE_COL: OBSERVED,
    })
    negative = int((out[DAILY_DEATHS_COL] < 0).sum())
    if negative:
        logger.warning("National series has %d day(s) with a negative total.", negative)
    return out


def national_totals(arenas: Mapping[str, pd.DataFrame]) -> pd.DataFrame:
    """Per-day national sum of each completed cumulative metric.

    *arenas* maps metric name (``cases``, ``hospitalizations``, ``deaths``)
    to the arena returned by ``complete_metric``.
    """
    totals = {}
    axis = None
    for metric, arena in arenas.items():
        frame = _as_aligned_frame(arena)
        if axis is None:
            axis = frame.index
        elif not frame.index.equals(axis):
            raise MisalignedAxisError(
                f"Arena for {metric!r} does not share the date axis of the others."
            )
        totals[metric] = frame.sum(axis=1).astype(np.int64)

    if axis is None:
        return pd.DataFrame(columns=[DATE_COL])
    out = pd.DataFrame(totals, index=axis)
    out.index.name = DATE_COL
    return out.reset_index()

"""Gap-free cumulative series from sparse, irregular regional reports.

Regions report cumulative counts on whichever days they report at all. Each
region is completed independently onto the shared daily date axis and the
results are written into one preallocated (date x region) arena, rather than
appending cleaned rows to a growing table.
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd
from tqdm import tqdm

from epicurve.config import DATE_COL, DEATHS_COL, METRIC_COLS, REGION_COL, ZERO_AS_MISSING
from epicurve.utils import normalize_dates

logger = logging.getLogger(__name__)


def date_axis(dates) -> pd.DatetimeIndex:
    """Every calendar day from the first to the last of *dates*, once each,
    including days on which nobody reported."""
    idx = normalize_dates(dates)
    if len(idx) == 0:
        return pd.DatetimeIndex([], freq="D", name=DATE_COL)
    return pd.date_range(idx.min(), idx.max(), freq="D", name=DATE_COL)


def complete_region(
    axis: pd.DatetimeIndex,
    reports: pd.Series,
    zero_as_missing: bool = ZERO_AS_MISSING,
) -> pd.Series:
    """Complete one region's cumulative series onto *axis*.

    *reports* holds the region's reported cumulative values indexed by
    report date; missing values mean "no report". Absent days take the most
    recent known value, and days before any known value take 0.

    With *zero_as_missing* (the default) a reported ``0`` cannot be told
    apart from an absent report and is forward-filled as well. Pass
    ``False`` to trust reported zeros.
    """
    values = pd.Series(
        reports.astype("float64").to_numpy(),
        index=normalize_dates(reports.index),
    )
    if zero_as_missing:
        values = values.mask(values == 0)

    usable = values.dropna()
    # among usable reports, a later one for the same day supersedes the earlier
    usable = usable[~usable.index.duplicated(keep="last")]
    if usable.empty:
        logger.info("Region %r has no usable reports; completing to zeros.", reports.name)

    completed = usable.reindex(axis).ffill().fillna(0.0)
    return pd.Series(
        np.rint(completed.to_numpy()).astype(np.int64),
        index=axis,
        name=reports.name,
    )


def complete_metric(
    observations: pd.DataFrame,
    metric: str = DEATHS_COL,
    zero_as_missing: bool = ZERO_AS_MISSING,
    progress: bool = False,
) -> pd.DataFrame:
    """Complete every region's cumulative *metric* series.

    Returns the arena as a frame indexed by the full daily date axis with
    one column per region (sorted by name).
    """
    if metric not in METRIC_COLS:
        raise ValueError(f"Unknown metric {metric!r}. Supported: {list(METRIC_COLS)}")

    axis = date_axis(observations[DATE_COL])
    regions = sorted(observations[REGION_COL].unique().tolist())

    arena = np.zeros((len(axis), len(regions)), dtype=np.int64)
    groups = observations.groupby(REGION_COL, sort=False)

    for j, region in enumerate(
        tqdm(regions, desc=f"Completing {metric}", unit="region", disable=not progress)
    ):
        rows = groups.get_group(region)
        reports = pd.Series(
            rows[metric].to_numpy(dtype=float),
            index=rows[DATE_COL].to_numpy(),
            name=region,
        )
        arena[:, j] = complete_region(axis, reports, zero_as_missing).to_numpy()

    logger.info(
        "Completed %s: %d regions x %d days.", metric, len(regions), len(axis),
    )
    return pd.DataFrame(
        arena,
        index=axis,
        columns=pd.Index(regions, name=REGION_COL),
    )

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

_EPOCH = pd.Timestamp("1970-01-01")


def normalize_dates(values) -> pd.DatetimeIndex:
    """Parse *values* into a midnight-normalized ``DatetimeIndex``."""
    return pd.DatetimeIndex(pd.to_datetime(values)).normalize()


def day_numbers(dates) -> np.ndarray:
    """Encode dates as whole days since the Unix epoch (float array)."""
    idx = normalize_dates(dates)
    return (idx - _EPOCH).days.to_numpy(dtype=float)


def step_days(current: pd.Timestamp, k: int) -> pd.Timestamp:
    """Move *k* calendar days forward (positive) or backward (negative)."""
    return pd.Timestamp(current).normalize() + pd.Timedelta(days=k)


def missing_days(index: pd.Index) -> list[pd.Timestamp]:
    """Return the calendar days between ``min(index)`` and ``max(index)``
    that are absent from *index*."""
    if len(index) == 0:
        return []
    idx = normalize_dates(index)
    expected = pd.date_range(idx.min(), idx.max(), freq="D")
    missing = expected.difference(idx)
    if len(missing):
        logger.warning(
            "Date axis [%s, %s] is missing %d day(s): %s",
            expected[0].date(), expected[-1].date(), len(missing),
            [d.date().isoformat() for d in missing[:10]],
        )
    return list(missing)


def is_daily_axis(index: pd.Index) -> bool:
    """*True* when *index* is a ``DatetimeIndex`` of midnight dates, strictly
    increasing by exactly one day."""
    if not isinstance(index, pd.DatetimeIndex):
        return False
    if len(index) == 0:
        return True
    if not index.equals(index.normalize()):
        return False
    if not index.is_monotonic_increasing or index.has_duplicates:
        return False
    expected = pd.date_range(index[0], periods=len(index), freq="D")
    if (index == expected).all():
        return True
    missing_days(index)
    return False

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from epicurve.config import DATE_COL, METRIC_COLS, OBSERVATION_COLS, REGION_COL
from epicurve.sources.base import RecordLoader
from epicurve.utils import normalize_dates

logger = logging.getLogger(__name__)


class TableLoader(RecordLoader):
    """RecordLoader over a single input table.

    Args:
        table: Path to a CSV file, or an already loaded ``DataFrame``.
        columns: Optional mapping of canonical column name (``date``,
            ``region``, ``cases``, ``hospitalizations``, ``deaths``) to the
            column name used in *table*. Unmapped names are expected verbatim.
    """

    def __init__(
        self,
        table: str | Path | pd.DataFrame,
        columns: dict[str, str] | None = None,
    ) -> None:
        if isinstance(table, pd.DataFrame):
            self._frame: pd.DataFrame | None = table.copy()
            self.path = None
        else:
            self._frame = None
            self.path = str(table)

        unknown = set(columns or {}) - set(OBSERVATION_COLS)
        if unknown:
            raise ValueError(
                f"Unknown canonical column(s) {sorted(unknown)}. "
                f"Supported: {list(OBSERVATION_COLS)}"
            )
        self._columns = {c: c for c in OBSERVATION_COLS}
        self._columns.update(columns or {})

    @property
    def columns(self) -> dict[str, str]:
        return dict(self._columns)

    def _read(self) -> pd.DataFrame:
        if self._frame is not None:
            return self._frame.copy()
        return pd.read_csv(self.path)

    def fetch_observations(self) -> pd.DataFrame:
        raw = self._read()

        missing = [src for src in self._columns.values() if src not in raw.columns]
        if missing:
            raise ValueError(
                f"Input table is missing required column(s) {missing}. "
                f"Available: {list(raw.columns)}"
            )

        rename = {src: canon for canon, src in self._columns.items()}
        df = raw[list(self._columns.values())].rename(columns=rename)

        # empty region identifiers are not regions
        region = df[REGION_COL].astype("string").str.strip()
        keep = (region.fillna("") != "").to_numpy(dtype=bool)
        dropped = int((~keep).sum())
        if dropped:
            logger.info("Dropping %d row(s) with an empty region identifier.", dropped)
        df = df[keep].copy()
        df[REGION_COL] = region[keep].astype(str).to_numpy()

        df[DATE_COL] = normalize_dates(df[DATE_COL])
        for col in METRIC_COLS:
            df[col] = pd.to_numeric(df[col], errors="coerce").astype(float)

        df = df[list(OBSERVATION_COLS)].sort_values([DATE_COL, REGION_COL])
        df = df.reset_index(drop=True)

        if df.empty:
            logger.warning("Input table has no usable rows.")
        else:
            logger.info(
                "Loaded %d rows, %d regions, range [%s, %s]",
                len(df),
                df[REGION_COL].nunique(),
                df[DATE_COL].min().date(),
                df[DATE_COL].max().date(),
            )
        return df

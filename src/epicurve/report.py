from __future__ import annotations

import logging

import pandas as pd

from epicurve.aggregation import (
    daily_increments,
    monotonicity_anomalies,
    national_daily,
    national_totals,
)
from epicurve.cfr import crude_cfr, join_boundaries
from epicurve.completion import complete_metric
from epicurve.config import (
    CLAMP_INCREMENTS,
    CLAMP_PROJECTION,
    DATE_COL,
    DEATHS_COL,
    DEFAULT_DEGREE,
    DEFAULT_FIT_START,
    DEFAULT_HORIZON,
    EXCLUDED_REGIONS,
    METRIC_COLS,
    REGION_COL,
    ZERO_AS_MISSING,
)
from epicurve.fitting import FitWindow, FittedModel, fit_curve
from epicurve.projection import combine, project
from epicurve.sources.base import RecordLoader

logger = logging.getLogger(__name__)


class Report:
    """One run of the surveillance pipeline over a loaded input table.

    Args:
        loader: A `RecordLoader` implementation (e.g. `TableLoader`).
        fit_start: First date (inclusive) used to fit the death curve.
        degree: Polynomial degree of the death curve.
        horizon: Number of days projected past the last observed date.
        zero_as_missing: If *True* (the default), a reported cumulative ``0``
            is treated as an absent report and forward-filled.
        clamp_increments: If *True*, hold decreasing cumulative counts at
            their previous value instead of passing negative increments on.
        clamp_projection: If *True*, floor projected daily deaths at zero.
        progress: Show a progress bar while completing regional series.

    The raw observations are read once, on first use, and kept as a
    read-only copy; every stage below is recomputed from that copy.
    """

    def __init__(
        self,
        loader: RecordLoader,
        fit_start: str | pd.Timestamp = DEFAULT_FIT_START,
        degree: int = DEFAULT_DEGREE,
        horizon: int = DEFAULT_HORIZON,
        zero_as_missing: bool = ZERO_AS_MISSING,
        clamp_increments: bool = CLAMP_INCREMENTS,
        clamp_projection: bool = CLAMP_PROJECTION,
        progress: bool = False,
    ) -> None:

        if not isinstance(loader, RecordLoader):
            raise TypeError(
                f"loader must implement RecordLoader, got {type(loader).__name__}"
            )
        self._loader = loader
        self._window = FitWindow(pd.Timestamp(fit_start))
        self._degree = degree
        self._horizon = horizon
        self._zero_as_missing = zero_as_missing
        self._clamp_increments = clamp_increments
        self._clamp_projection = clamp_projection
        self._progress = progress

        self._observations: pd.DataFrame | None = None

    # ── raw data ──────────────────────────────────────────────────────

    @property
    def observations(self) -> pd.DataFrame:
        """Copy of the loaded observation rows."""
        if self._observations is None:
            logger.info("Loading observations with %s", self._loader.describe())
            self._observations = self._loader.fetch_observations()
        return self._observations.copy()

    @property
    def regions(self) -> list[str]:
        return sorted(self.observations[REGION_COL].unique().tolist())

    @property
    def dates(self) -> pd.DatetimeIndex:
        """Distinct report dates, as observed (not gap-filled)."""
        return pd.DatetimeIndex(sorted(self.observations[DATE_COL].unique()))

    @property
    def fit_window(self) -> FitWindow:
        return self._window

    # ── cleaning and aggregation ──────────────────────────────────────

    def completed(self, metric: str = DEATHS_COL) -> pd.DataFrame:
        """Gap-free cumulative *metric*, one column per region."""
        return complete_metric(
            self.observations,
            metric=metric,
            zero_as_missing=self._zero_as_missing,
            progress=self._progress,
        )

    def increments(self, metric: str = DEATHS_COL) -> pd.DataFrame:
        return daily_increments(self.completed(metric), clamp=self._clamp_increments)

    def anomalies(self, metric: str = DEATHS_COL) -> pd.DataFrame:
        """Every day on which a region's cumulative *metric* went down."""
        return monotonicity_anomalies(self.completed(metric))

    def national_daily(self) -> pd.DataFrame:
        """Observed national daily deaths."""
        return national_daily(self.increments(DEATHS_COL))

    def totals(self) -> pd.DataFrame:
        """National per-day totals of every completed cumulative metric."""
        return national_totals({m: self.completed(m) for m in METRIC_COLS})

    # ── curve ─────────────────────────────────────────────────────────

    def fit(self, observed: pd.DataFrame | None = None) -> FittedModel:
        """Fit the death curve to *observed* (default: ``national_daily()``)."""
        if observed is None:
            observed = self.national_daily()
        return fit_curve(observed, window=self._window, degree=self._degree)

    def projection(
        self,
        model: FittedModel | None = None,
        observed: pd.DataFrame | None = None,
    ) -> pd.DataFrame:
        """Project *model* past the last date of *observed*; either one is
        computed when not given."""
        if observed is None:
            observed = self.national_daily()
        if model is None:
            model = self.fit(observed)
        return project(
            model,
            last_date=observed[DATE_COL].max(),
            horizon=self._horizon,
            clamp_non_negative=self._clamp_projection,
        )

    def daily_series(self, model: FittedModel | None = None) -> pd.DataFrame:
        """Observed national daily deaths followed by the projected ones."""
        observed = self.national_daily()
        return combine(observed, self.projection(model, observed))

    # ── case fatality ─────────────────────────────────────────────────

    def cfr(self) -> pd.DataFrame:
        return crude_cfr(self.observations)

    def choropleth(
        self,
        boundaries: pd.DataFrame,
        excluded=EXCLUDED_REGIONS,
        boundary_region_col: str = REGION_COL,
    ) -> pd.DataFrame:
        """CFR joined to *boundaries*, minus the *excluded* regions."""
        return join_boundaries(
            self.cfr(),
            boundaries,
            excluded=excluded,
            boundary_region_col=boundary_region_col,
        )

"""
Tests for projecting the fitted curve forward.
"""

import numpy as np
import pandas as pd
import pytest

from epicurve.fitting import FitWindow, fit_curve
from epicurve.projection import combine, project, projection_dates

from conftest import START, day


@pytest.fixture
def falling_national():
    """A straight decline crossing zero shortly after the last observed day."""
    dates = pd.date_range(START, periods=20, freq="D")
    return pd.DataFrame({
        "date": dates,
        "daily_deaths": 40.0 - 2.0 * np.arange(20, dtype=float),
        "source": "observed",
    })


class TestProjectionDates:
    """Test the projection horizon."""

    @pytest.mark.parametrize("horizon", [1, 3, 14])
    def test_contiguous_after_last_date(self, horizon):
        dates = projection_dates(day(10), horizon)

        assert len(dates) == horizon
        assert dates[0] == day(11)
        assert (dates[1:] - dates[:-1] == pd.Timedelta(days=1)).all()
        assert dates[-1] == day(10 + horizon)

    @pytest.mark.parametrize("horizon", [0, -3, 2.5, True])
    def test_rejects_bad_horizon(self, horizon):
        with pytest.raises(ValueError, match="horizon"):
            projection_dates(day(10), horizon)


class TestProject:
    """Test evaluation of the model over the horizon."""

    def test_default_horizon(self, quadratic_national):
        model = fit_curve(quadratic_national, FitWindow(START))
        out = project(model, quadratic_national["date"].max())

        assert list(out.columns) == ["date", "daily_deaths"]
        assert out["date"].tolist() == list(pd.date_range(day(31), periods=14, freq="D"))
        t = np.arange(30, 44, dtype=float)
        np.testing.assert_allclose(
            out["daily_deaths"], 2.0 + 0.5 * t + 0.1 * t ** 2, rtol=1e-5, atol=1e-3,
        )

    def test_negative_values_are_kept(self, falling_national):
        model = fit_curve(falling_national, FitWindow(START), degree=1)
        out = project(model, day(20), horizon=5)

        assert out["daily_deaths"].tolist() == pytest.approx([0.0, -2.0, -4.0, -6.0, -8.0], abs=1e-8)

    def test_clamp_non_negative(self, falling_national):
        model = fit_curve(falling_national, FitWindow(START), degree=1)
        out = project(model, day(20), horizon=5, clamp_non_negative=True)

        assert out["daily_deaths"].tolist() == pytest.approx([0.0, 0.0, 0.0, 0.0, 0.0], abs=1e-8)

    def test_model_untouched(self, falling_national):
        model = fit_curve(falling_national, FitWindow(START), degree=1)
        before = model.coefficients

        project(model, day(20), horizon=5, clamp_non_negative=True)

        assert model.coefficients == before


class TestCombine:
    """Test the labelled observed + projected series."""

    def test_labels_and_order(self, falling_national):
        model = fit_curve(falling_national, FitWindow(START), degree=1)
        projected = project(model, day(20), horizon=3)

        out = combine(falling_national, projected)

        assert len(out) == 23
        assert out["date"].is_unique
        assert out["date"].is_monotonic_increasing
        assert out["source"].value_counts().to_dict() == {"observed": 20, "projected": 3}
        assert (out.loc[out["date"] > day(20), "source"] == "projected").all()

    def test_overlap_rejected(self, falling_national):
        model = fit_curve(falling_national, FitWindow(START), degree=1)
        projected = project(model, day(18), horizon=3)

        with pytest.raises(ValueError, match="overlap"):
            combine(falling_national, projected)

    def test_observed_integers_are_exact(self, falling_national):
        observed = falling_national.assign(daily_deaths=np.arange(20, dtype=np.int64) + 10**12)
        model = fit_curve(falling_national, FitWindow(START), degree=1)

        out = combine(observed, project(model, day(20), horizon=2))

        assert out["daily_deaths"].dtype == np.float64
        kept = out.loc[out["source"] == "observed", "daily_deaths"]
        assert (kept.to_numpy() == observed["daily_deaths"].to_numpy()).all()

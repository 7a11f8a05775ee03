"""
Pytest fixtures for epicurve tests
"""

import numpy as np
import pandas as pd
import pytest

from epicurve.sources import TableLoader

START = pd.Timestamp("2020-04-01")


def day(n: int) -> pd.Timestamp:
    """Calendar date of 1-based day *n* of the scenario."""
    return START + pd.Timedelta(days=n - 1)


@pytest.fixture
def two_region_observations():
    """Region A reports every day; region B only on days 1, 5 and 10."""
    a_deaths = [0, 0, 0, 5, 5, 5, 10, 10, 10, 10]
    a_cases = [10, 20, 40, 60, 80, 100, 120, 140, 160, 200]
    rows = [
        {
            "date": day(i + 1),
            "region": "A",
            "cases": float(a_cases[i]),
            "hospitalizations": float(i),
            "deaths": float(a_deaths[i]),
        }
        for i in range(10)
    ]
    for n, deaths, cases in [(1, 0, 5), (5, 2, 25), (10, 8, 50)]:
        rows.append({
            "date": day(n),
            "region": "B",
            "cases": float(cases),
            "hospitalizations": np.nan,
            "deaths": float(deaths),
        })
    return pd.DataFrame(rows).sort_values(["date", "region"]).reset_index(drop=True)


@pytest.fixture
def two_region_loader(two_region_observations):
    return TableLoader(two_region_observations)


@pytest.fixture
def quadratic_national():
    """National daily series following 2 + 0.5 t + 0.1 t^2 over 30 days."""
    dates = pd.date_range(START, periods=30, freq="D")
    t = np.arange(30, dtype=float)
    return pd.DataFrame({
        "date": dates,
        "daily_deaths": 2.0 + 0.5 * t + 0.1 * t ** 2,
        "source": "observed",
    })

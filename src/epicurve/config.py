"""Named defaults for the surveillance pipeline.

Everything the pipeline would otherwise hide as a literal lives here so the
fitting and projection stages can be exercised against other settings.
"""

from __future__ import annotations

import pandas as pd

# canonical column names
DATE_COL = "date"
REGION_COL = "region"
CASES_COL = "cases"
HOSP_COL = "hospitalizations"
DEATHS_COL = "deaths"

METRIC_COLS = (CASES_COL, HOSP_COL, DEATHS_COL)
OBSERVATION_COLS = (DATE_COL, REGION_COL, *METRIC_COLS)

DAILY_DEATHS_COL = "daily_deaths"
SOURCE_COL = "source"
OBSERVED = "observed"
PROJECTED = "projected"

# curve fitting
DEFAULT_DEGREE = 5
DEFAULT_FIT_START = pd.Timestamp("2020-03-01")

# projection
DEFAULT_HORIZON = 14

# cleaning policy
ZERO_AS_MISSING = True
CLAMP_INCREMENTS = False
CLAMP_PROJECTION = False

# choropleth: two non-contiguous territories and one island territory
EXCLUDED_REGIONS = ("Alaska", "Hawaii", "Puerto Rico")

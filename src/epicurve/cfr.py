from __future__ import annotations

import logging
from typing import Iterable

import pandas as pd

from epicurve.config import CASES_COL, DEATHS_COL, EXCLUDED_REGIONS, REGION_COL

logger = logging.getLogger(__name__)


def crude_cfr(observations: pd.DataFrame) -> pd.DataFrame:
    """Crude case-fatality rate per region.

    ``cfr = max(deaths) / max(cases)``, each maximum taken on its own over
    the whole observed range. Regions that never reported deaths count as
    zero deaths. Regions without a positive case count have no defined CFR
    and are left out.
    """
    maxima = observations.groupby(REGION_COL)[[CASES_COL, DEATHS_COL]].max()
    maxima = maxima.rename(columns={CASES_COL: "max_cases", DEATHS_COL: "max_deaths"})
    maxima["max_deaths"] = maxima["max_deaths"].fillna(0.0)

    defined = maxima["max_cases"].fillna(0.0) > 0
    undefined = sorted(maxima.index[~defined.to_numpy()].tolist())
    if undefined:
        logger.warning("CFR undefined (no cases) for %d region(s): %s", len(undefined), undefined)

    out = maxima[defined].copy()
    out["cfr"] = out["max_deaths"] / out["max_cases"]
    return out.reset_index()[[REGION_COL, "max_cases", "max_deaths", "cfr"]]


def join_boundaries(
    cfr: pd.DataFrame,
    boundaries: pd.DataFrame,
    excluded: Iterable[str] = EXCLUDED_REGIONS,
    boundary_region_col: str = REGION_COL,
) -> pd.DataFrame:
    """Attach CFR values to boundary shapes for a choropleth.

    *boundaries* is any frame (a GeoDataFrame included) with one row per
    region; its other columns, ``geometry`` among them, pass through as-is.
    Regions named in *excluded* are dropped, as are regions without a CFR.
    """
    if boundary_region_col not in boundaries.columns:
        raise ValueError(
            f"Boundary table has no {boundary_region_col!r} column. "
            f"Available: {list(boundaries.columns)}"
        )

    excluded = set(excluded)
    shapes = boundaries[~boundaries[boundary_region_col].isin(excluded)]

    values = cfr.rename(columns={REGION_COL: boundary_region_col})
    joined = shapes.merge(values, on=boundary_region_col, how="inner")

    unmatched = sorted(set(shapes[boundary_region_col]) - set(joined[boundary_region_col]))
    if unmatched:
        logger.info("No CFR for %d boundary region(s): %s", len(unmatched), unmatched)
    return joined.reset_index(drop=True)

from __future__ import annotations
from abc import ABC, abstractmethod
import pandas as pd

from epicurve.config import OBSERVATION_COLS


class RecordLoader(ABC):
    """Interface that any surveillance record source must satisfy.

    Implementors return one row per (date, region) report with the canonical
    columns:
        1. ``date`` (calendar date of the report),
        2. ``region`` (non-empty region identifier),
        3. ``cases``, ``hospitalizations``, ``deaths`` (cumulative counts,
           missing where the region did not report).

    Furthermore, implementors must provide:
        1. ``fetch_observations`` (the full table, read once per run).
        2. (Optional) ``columns`` (mapping of canonical name -> source column).
    """

    @property
    def columns(self) -> dict[str, str]:
        """Canonical column name -> column name in the raw source.
        Defaults to the identity mapping."""
        return {c: c for c in OBSERVATION_COLS}

    @abstractmethod
    def fetch_observations(self) -> pd.DataFrame:
        """Fetch every observation row in canonical form."""
        pass

    def describe(self) -> dict:
        """Loader name and, where it reads a file, its path; used in logs."""
        return {"loader": type(self).__name__, "path": getattr(self, "path", None)}

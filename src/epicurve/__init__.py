"""epicurve — Clean regional surveillance counts, fit and project the death curve.

::

    from epicurve import Report
    from epicurve.sources import TableLoader

    report = Report(
        loader=TableLoader("covid_by_state.csv"),
        fit_start="2020-03-15",
        horizon=14,
    )
    series = report.daily_series()   # observed + projected daily deaths
    cfr = report.cfr()               # crude CFR per region
"""

from epicurve.errors import EpicurveError, InsufficientFitDataError, MisalignedAxisError
from epicurve.report import Report
from epicurve.sources.base import RecordLoader

__all__ = [
    "EpicurveError",
    "InsufficientFitDataError",
    "MisalignedAxisError",
    "RecordLoader",
    "Report",
]
__version__ = "0.1.0"

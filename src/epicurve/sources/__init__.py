from epicurve.sources.base import RecordLoader
from epicurve.sources.table import TableLoader

__all__ = ["RecordLoader", "TableLoader"]

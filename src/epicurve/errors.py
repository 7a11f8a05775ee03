from __future__ import annotations


class EpicurveError(Exception):
    """Base class for pipeline errors."""


class InsufficientFitDataError(EpicurveError, ValueError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            f"Polynomial fit needs at least {required} distinct dates in the "
            f"fit window, got {available}."
        )
        self.required = required
        self.available = available


class MisalignedAxisError(EpicurveError, ValueError):
    """Region series do not share one complete daily date axis."""

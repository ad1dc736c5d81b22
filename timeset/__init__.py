from .core import IntervalSet
from .interval import Interval, InvalidIntervalError

__all__ = [
    "Interval",
    "InvalidIntervalError",
    "IntervalSet",
]

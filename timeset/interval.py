from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any


class InvalidIntervalError(ValueError):
    """Raised when an interval's start is greater than its end."""

    def __init__(self, start: int, end: int):
        super().__init__(
            f"Invalid interval: start ({start}) must be <= end ({end}).\n"
            f"Hint: Intervals are closed, so a single instant is "
            f"Interval({start}, {start})"
        )
        self.start: int = start
        self.end: int = end


@dataclass(frozen=True, eq=False)
class Interval:
    """Closed range ``[start, end]`` of integer seconds.

    Bounds must be integers. Sets merge intervals one second apart, which
    only holds for discrete time; fractional bounds are not checked here
    and produce wrong merges.
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidIntervalError(self.start, self.end)

    @classmethod
    def from_pair(cls, pair: Sequence[int]) -> "Interval":
        """Build an interval from a raw ``(start, end)`` pair."""
        if len(pair) != 2:
            raise TypeError(
                f"Interval pairs must have exactly two elements.\n"
                f"Got {len(pair)}: {pair!r}\n"
                f"Example: Interval.from_pair((1704067200, 1704070800))"
            )
        start, end = pair
        return cls(start, end)

    @property
    def duration(self) -> int:
        """Number of seconds covered, counting both endpoints."""
        return self.end - self.start + 1

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Interval):
            return (self.start, self.end) == (other.start, other.end)
        if isinstance(other, tuple):
            return (self.start, self.end) == other
        return NotImplemented

    def __hash__(self) -> int:
        # Matches tuple hashing so intervals and pairs share set/dict slots
        return hash((self.start, self.end))

    def __str__(self) -> str:
        """Human-friendly string showing range and duration."""
        return f"Interval({self.start}→{self.end}, {self.duration}s)"

import bisect
import logging
import operator
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import replace
from functools import reduce

from timeset.interval import Interval, InvalidIntervalError

logger = logging.getLogger(__name__)

# Integer timestamps are discrete, so ranges this far apart leave no gap
ADJACENCY = 1


def _normalize(intervals: Iterable[Interval]) -> tuple[Interval, ...]:
    """Sort by start and fold overlapping or adjacent intervals together.

    The running end of the last merged interval only ever grows: an interval
    engulfed by the current span must not shrink it.
    """

    def merge(acc: list[Interval], interval: Interval) -> list[Interval]:
        if acc and interval.start <= acc[-1].end + ADJACENCY:
            if interval.end > acc[-1].end:
                acc[-1] = replace(acc[-1], end=interval.end)
        else:
            acc.append(interval)
        return acc

    ordered = sorted(intervals, key=lambda interval: interval.start)
    return tuple(reduce(merge, ordered, []))


class IntervalSet:
    """Immutable set of integer time ranges with logarithmic point lookup.

    Intervals are normalized once, at construction, into canonical form:
    sorted by start, with no two intervals overlapping or adjacent. Every
    query relies on that form, so there is no way to add or remove intervals
    afterwards; build a new set instead.

    Example:
        >>> spans = IntervalSet.from_pairs([(5, 10), (100, 200), (11, 20)])
        >>> spans.intervals
        (Interval(start=5, end=20), Interval(start=100, end=200))
        >>> 15 in spans
        True
    """

    def __init__(self, intervals: Iterable[Interval] = ()) -> None:
        # Interval validates itself, so nothing here can fail
        items = list(intervals)
        self._intervals: tuple[Interval, ...] = _normalize(items)
        logger.debug(
            "Normalized %d intervals into %d canonical spans",
            len(items),
            len(self._intervals),
        )

    @classmethod
    def from_pairs(cls, pairs: Iterable[Sequence[int]]) -> "IntervalSet":
        """Build a set from raw ``(start, end)`` pairs.

        Raises:
            InvalidIntervalError: For the first pair whose start exceeds its
                end. No set is built.
        """
        intervals: list[Interval] = []
        for pair in pairs:
            try:
                intervals.append(Interval.from_pair(pair))
            except InvalidIntervalError:
                logger.debug("Rejecting interval set: invalid pair %r", pair)
                raise
        return cls(intervals)

    @property
    def intervals(self) -> tuple[Interval, ...]:
        """The canonical intervals, ascending by start."""
        return self._intervals

    def is_empty(self) -> bool:
        return not self._intervals

    def contains_time(self, time: int) -> bool:
        """Return True if ``time`` falls inside any interval of the set."""
        if not self._intervals:
            return False

        # Partition point: first interval starting after ``time``. Only the
        # interval right before it can contain ``time``.
        index = bisect.bisect_right(
            self._intervals, time, key=lambda interval: interval.start
        )
        return index > 0 and self._intervals[index - 1].end >= time

    def fetch(
        self, start: int | None = None, end: int | None = None
    ) -> Iterator[Interval]:
        """Yield canonical intervals overlapping the closed range ``[start, end]``.

        Args:
            start: Lower bound (inclusive), None for unbounded
            end: Upper bound (inclusive), None for unbounded

        Intervals are returned whole, not clipped to the bounds. A range
        with ``start > end`` overlaps nothing.
        """
        start_idx = 0
        end_idx = len(self._intervals)

        # Canonical ends ascend too, so both edges can be binary searched
        if start is not None:
            start_idx = bisect.bisect_left(
                self._intervals, start, key=lambda interval: interval.end
            )
        if end is not None:
            end_idx = bisect.bisect_right(
                self._intervals, end, key=lambda interval: interval.start
            )

        return iter(self._intervals[start_idx:end_idx])

    def __or__(self, other: "IntervalSet") -> "IntervalSet":
        if not isinstance(other, IntervalSet):
            raise TypeError(
                f"Cannot union (|) an IntervalSet with {type(other).__name__!r}.\n"
                f"Hint: Build a set first: "
                f"spans | IntervalSet.from_pairs([(start, end)])"
            )
        return IntervalSet((*self._intervals, *other._intervals))

    def __contains__(self, time: object) -> bool:
        try:
            index = operator.index(time)
        except TypeError:
            return False
        return self.contains_time(index)

    def __iter__(self) -> Iterator[Interval]:
        return iter(self._intervals)

    def __len__(self) -> int:
        return len(self._intervals)

    def __bool__(self) -> bool:
        return bool(self._intervals)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntervalSet):
            return NotImplemented
        return self._intervals == other._intervals

    def __hash__(self) -> int:
        return hash(self._intervals)

    def __repr__(self) -> str:
        pairs = ", ".join(f"({i.start}, {i.end})" for i in self._intervals)
        return f"IntervalSet.from_pairs([{pairs}])"

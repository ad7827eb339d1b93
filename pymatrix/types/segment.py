"""
Index ranges and transform flags used by matrix views.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Segment:
    """
    Half-open index range [begin, end) along one axis.

    The default Segment() (begin=end=-1) means "the whole axis". Malformed
    ranges are not errors: normalized() collapses them to the full axis.
    """
    begin: int = -1
    end: int = -1

    def __len__(self) -> int:
        return self.end - self.begin

    def normalized(self, max_value: int) -> Segment:
        """
        Clamp this segment to an axis of length max_value.

        An end that is non-positive or past the axis becomes max_value.
        Afterwards, a begin that is negative, past the axis, or not before
        end becomes 0.
        """
        begin, end = self.begin, self.end
        if end <= 0 or end > max_value:
            end = max_value
        if begin >= end or begin >= max_value or begin < 0:
            begin = 0
        return Segment(begin, end)

    def shifted(self, offset: int) -> Segment:
        return Segment(self.begin + offset, self.end + offset)


FULL = Segment()


def as_segment(value: Segment | tuple[int, int] | None) -> Segment:
    """Accept a Segment, a (begin, end) pair, or None for the full axis."""
    if value is None:
        return FULL
    if isinstance(value, Segment):
        return value
    begin, end = value
    return Segment(int(begin), int(end))


@dataclass(frozen=True)
class MatrixState:
    """
    Lazy transform applied by a view on every element access.

    transposed swaps the row and column axes when mapping a view
    coordinate to storage. conjugated additionally conjugates complex
    elements on read (and on write, so a read returns what was written).
    """
    transposed: bool = False
    conjugated: bool = False

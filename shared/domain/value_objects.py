"""
Common Value Objects

Value objects used across multiple domains:
- TimeRange: Represents a reservation interval (start to end)
- PageRequest: Represents a page of a sorted result set
"""

from dataclasses import dataclass
from datetime import datetime

from shared.domain.base import ValueObject
from shared.domain.exceptions import ValidationError


@dataclass(frozen=True)
class TimeRange(ValueObject):
    """
    Time range value object

    Represents an interval from start to end with start strictly before end.
    Overlap checks treat the range as half-open [start, end), so
    back-to-back ranges do not overlap.
    """
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.start > self.end:
            raise ValidationError("Start time cannot be later than end time")
        if self.start == self.end:
            raise ValidationError("Start time cannot be equal to end time")

    def overlaps_with(self, other: 'TimeRange') -> bool:
        """
        Check if this range overlaps with another

        Examples:
            - [10:00, 12:00) overlaps with [11:00, 13:00) -> True
            - [10:00, 12:00) overlaps with [12:00, 13:00) -> False (adjacent)
        """
        if not isinstance(other, TimeRange):
            raise TypeError("Can only check overlap with another TimeRange")

        return self.start < other.end and self.end > other.start

    def contains(self, instant: datetime) -> bool:
        """Check if an instant is within this range, both ends inclusive"""
        return self.start <= instant <= self.end

    def __str__(self):
        return f"{self.start.isoformat()} - {self.end.isoformat()}"

    def __repr__(self):
        return f"TimeRange({self.start!r}, {self.end!r})"


@dataclass(frozen=True)
class PageRequest(ValueObject):
    """
    Page request value object

    ``index`` is the zero-based page number and ``size`` the number of
    elements per page. Invalid values are rejected on construction so
    query code can rely on them.
    """
    index: int = 0
    size: int = 10

    def __post_init__(self):
        if self.index < 0:
            raise ValidationError("Page index cannot be negative")
        if self.size <= 0:
            raise ValidationError("Page size must be positive")

    @classmethod
    def from_offset(cls, offset: int, size: int) -> 'PageRequest':
        """Build a page request from an element offset ("from") and a page size"""
        if offset < 0:
            raise ValidationError("from cannot be negative")
        if size <= 0:
            raise ValidationError("size must be positive")
        return cls(index=offset // size, size=size)

    @property
    def offset(self) -> int:
        return self.index * self.size

    @property
    def limit(self) -> int:
        return self.size

"""
Single timed action record.

A ``DurationReport`` holds the begin/end instants of one action inside an
event. Timestamps are integer nanoseconds taken from a monotonic clock, which
defaults to ``time.perf_counter_ns`` and can be swapped for a fake in tests.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .units import DurationUnit

Clock = Callable[[], int]


@dataclass
class DurationReport:
    """Timing record for one action instance"""
    title: str
    action: Optional[str] = None
    begin_timestamp: Optional[int] = None
    end_timestamp: Optional[int] = None
    begin_payload: Any = None
    end_payload: Any = None
    clock: Clock = field(default=time.perf_counter_ns, repr=False, compare=False)

    def __post_init__(self):
        if self.action is None:
            self.action = self.title

    def begin(self) -> None:
        """Start the timer. Calling it again keeps the first timestamp."""
        if self.begin_timestamp is None:
            self.begin_timestamp = self.clock()

    def end(self) -> None:
        """Stop the timer."""
        self.end_timestamp = self.clock()

    @property
    def duration(self) -> Optional[int]:
        """Elapsed nanoseconds, or None until both timestamps are set"""
        if self.begin_timestamp is None or self.end_timestamp is None:
            return None
        return self.end_timestamp - self.begin_timestamp

    @property
    def is_complete(self) -> bool:
        return self.end_timestamp is not None

    def to_dict(self, unit: Optional[DurationUnit] = None) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        duration = self.duration
        data = {
            'title': self.title,
            'action': self.action,
            'begin_timestamp_ns': self.begin_timestamp,
            'end_timestamp_ns': self.end_timestamp,
            'duration_ns': duration,
            'complete': self.is_complete,
            'begin_payload': self.begin_payload,
            'end_payload': self.end_payload,
        }
        if unit is not None:
            data['duration'] = unit.convert(duration) if duration is not None else None
            data['unit'] = unit.symbol
        return data

"""
Display units for elapsed time.

Durations are measured in integer nanoseconds. A ``DurationUnit`` describes
how a raw measurement is presented: the measurement is floor-divided by
``divider`` and rendered with ``symbol`` appended (``100ms``).
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class DurationUnit:
    """Divider and symbol used to present nanosecond durations."""
    divider: int
    symbol: str

    def __post_init__(self):
        if not isinstance(self.divider, int) or isinstance(self.divider, bool) or self.divider <= 0:
            raise ValueError(f"DurationUnit divider must be a positive integer, got {self.divider!r}")

    def convert(self, nanoseconds: int) -> int:
        """Convert a nanosecond measurement into this unit."""
        return nanoseconds // self.divider

    def format(self, nanoseconds: int) -> str:
        """Render a nanosecond measurement as ``<value><symbol>``."""
        return f"{self.convert(nanoseconds)}{self.symbol}"


NANOSECOND = DurationUnit(divider=1, symbol="ns")
MICROSECOND = DurationUnit(divider=1_000, symbol="μs")
MILLISECOND = DurationUnit(divider=1_000_000, symbol="ms")
SECOND = DurationUnit(divider=1_000_000_000, symbol="s")

_UNITS_BY_NAME: Dict[str, DurationUnit] = {
    "ns": NANOSECOND,
    "nanosecond": NANOSECOND,
    "nanoseconds": NANOSECOND,
    "us": MICROSECOND,
    "μs": MICROSECOND,
    "microsecond": MICROSECOND,
    "microseconds": MICROSECOND,
    "ms": MILLISECOND,
    "millisecond": MILLISECOND,
    "milliseconds": MILLISECOND,
    "s": SECOND,
    "second": SECOND,
    "seconds": SECOND,
}


def unit_from_name(name: str) -> DurationUnit:
    """Resolve a unit name such as ``"ms"`` or ``"seconds"`` to a predefined unit."""
    try:
        return _UNITS_BY_NAME[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown time unit '{name}'. Expected one of: {', '.join(sorted(_UNITS_BY_NAME))}"
        ) from None

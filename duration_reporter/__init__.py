"""
Duration Reporter

In-process tracking of named actions grouped under named events, with a
pluggable text summary of per-event totals and per-action shares.

Usage:
    import duration_reporter

    duration_reporter.begin("Video::Play", "Buffering")
    duration_reporter.end("Video::Play", "Buffering")
    print(duration_reporter.generate_report())
"""

from .errors import ActionNotFoundError, DuplicateActionError, DurationReporterError
from .generators import default_report_generator, markdown_report_generator
from .report import DurationReport
from .reporter import (
    DurationReporter,
    FamilyMatch,
    begin,
    clear,
    end,
    generate_report,
    get_duration_reporter,
    report_data,
    reset_duration_reporter,
    setup_duration_reporting,
    track,
)
from .units import MICROSECOND, MILLISECOND, NANOSECOND, SECOND, DurationUnit, unit_from_name

__all__ = [
    "ActionNotFoundError",
    "DuplicateActionError",
    "DurationReport",
    "DurationReporter",
    "DurationReporterError",
    "DurationUnit",
    "FamilyMatch",
    "MICROSECOND",
    "MILLISECOND",
    "NANOSECOND",
    "SECOND",
    "begin",
    "clear",
    "default_report_generator",
    "end",
    "generate_report",
    "get_duration_reporter",
    "markdown_report_generator",
    "report_data",
    "reset_duration_reporter",
    "setup_duration_reporting",
    "track",
]

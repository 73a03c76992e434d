"""
Report generators for collected durations.

A report generator is any callable taking a registry snapshot and the display
unit and returning a string::

    generator(reports: Mapping[str, Sequence[DurationReport]], unit: DurationUnit) -> str

``DurationReporter.report_generator`` holds the active one and can be replaced
without touching the registry. Two generators ship with the package:

- ``default_report_generator``: plain text, one block per event::

      🚀 Play - 100ms
      1. Buffering 30ms 30.00%
      2. Loading 70ms 70.00%

- ``markdown_report_generator``: one markdown table per event.

Incomplete reports count as zero towards the event total and are flagged.
When an event total is zero no percentage is computed and ``n/a`` is shown.
"""

from typing import Callable, Mapping, Optional, Sequence

from .report import DurationReport
from .units import DurationUnit

ReportGenerator = Callable[[Mapping[str, Sequence[DurationReport]], DurationUnit], str]

NOT_AVAILABLE = "n/a"


def event_total(reports: Sequence[DurationReport]) -> int:
    """Sum of completed durations in nanoseconds"""
    return sum(r.duration for r in reports if r.duration is not None)


def percentage(duration: int, total: int) -> Optional[float]:
    """Share of ``duration`` in ``total``, or None when the total is zero"""
    if total <= 0:
        return None
    return duration / total * 100.0


def format_percentage(duration: int, total: int) -> str:
    share = percentage(duration, total)
    return NOT_AVAILABLE if share is None else f"{share:.2f}%"


def default_report_generator(reports: Mapping[str, Sequence[DurationReport]], unit: DurationUnit) -> str:
    """Render every event with its total and a numbered per-action breakdown."""
    output = ""

    for event_name, event_reports in reports.items():
        total = event_total(event_reports)
        output += f"\n🚀 {event_name} - {unit.format(total)}\n"

        for index, report in enumerate(event_reports, start=1):
            duration = report.duration
            if duration is not None:
                output += f"{index}. {report.title} {unit.format(duration)} {format_percentage(duration, total)}\n"
            else:
                output += f"{index}. 🔴 {report.title} - ?\n"

    return output


def markdown_report_generator(reports: Mapping[str, Sequence[DurationReport]], unit: DurationUnit) -> str:
    """Render every event as a markdown section with a breakdown table."""
    sections = []

    for event_name, event_reports in reports.items():
        total = event_total(event_reports)
        lines = [
            f"## {event_name}",
            "",
            f"**Total:** {unit.format(total)}",
            "",
            "| # | Action | Duration | Share |",
            "|---|--------|----------|-------|",
        ]
        for index, report in enumerate(event_reports, start=1):
            duration = report.duration
            if duration is not None:
                lines.append(
                    f"| {index} | {report.title} | {unit.format(duration)} | {format_percentage(duration, total)} |"
                )
            else:
                lines.append(f"| {index} | {report.title} | incomplete | - |")
        sections.append("\n".join(lines))

    return "\n\n".join(sections) + ("\n" if sections else "")

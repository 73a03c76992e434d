"""
Duration Reporter - event/action time tracking

This module keeps the process-wide registry of timed actions. Actions are
grouped under events, each event holding its reports in begin-call order:

    reporter = get_duration_reporter()
    reporter.begin("Video::Play", "Buffering")
    ...
    reporter.end("Video::Play", "Buffering")
    print(reporter.generate_report())

## Naming

Another action of the same name can only be begun once the previous one has
completed. Repeated actions are numbered so they stay addressable:
``Buffering``, ``Buffering2``, ``Buffering3``. Tracking ``Buffering`` and
``Loading`` at the same time is fine.

Action families are matched on the exact base action name by default.
``FamilyMatch.CONTAINS`` keeps the older behavior of matching any report whose
title contains the action name, where ``Load`` also matches ``Loading``.

## Errors

A begin for an action already in flight (``DuplicateActionError``) and an end
with nothing to end (``ActionNotFoundError``) leave the registry untouched.
They are logged and passed to error callbacks; in strict mode they are also
raised to the caller.

## Thread Safety

One lock guards the registry. Every read and write goes through it and
callbacks are invoked after it has been released, so a callback may call back
into the reporter.
"""

import copy
import logging
import threading
import time
from contextlib import contextmanager
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from .config import FAMILY_MATCH, STRICT, TIME_UNIT
from .errors import ActionNotFoundError, DuplicateActionError, DurationReporterError
from .generators import ReportGenerator, default_report_generator, event_total
from .report import Clock, DurationReport
from .units import DurationUnit, unit_from_name

logger = logging.getLogger(__name__)

ReportCallback = Callable[[str, DurationReport], None]
ErrorCallback = Callable[[DurationReporterError], None]


class FamilyMatch(Enum):
    """How reports are grouped into an action family"""
    EXACT = "exact"
    CONTAINS = "contains"


class DurationReporter:
    """
    Thread-safe registry of event -> ordered action reports
    """

    def __init__(
        self,
        time_unit: Optional[DurationUnit] = None,
        report_generator: ReportGenerator = default_report_generator,
        family_match: Optional[FamilyMatch] = None,
        strict: Optional[bool] = None,
        clock: Clock = time.perf_counter_ns,
    ):
        self._lock = threading.RLock()
        self._time_unit = time_unit or unit_from_name(TIME_UNIT)
        self._report_generator = report_generator
        self.family_match = family_match or FamilyMatch(FAMILY_MATCH.lower())
        self.strict = STRICT if strict is None else strict
        self.clock = clock

        self.begin_callbacks: List[ReportCallback] = []
        self.end_callbacks: List[ReportCallback] = []
        self.error_callbacks: List[ErrorCallback] = []

        self._reports: Dict[str, List[DurationReport]] = {}

        logger.debug(
            f"DurationReporter initialized - unit: {self.time_unit.symbol}, "
            f"family match: {self.family_match.value}, strict: {self.strict}"
        )

    @property
    def time_unit(self) -> DurationUnit:
        return self._time_unit

    @time_unit.setter
    def time_unit(self, unit: DurationUnit) -> None:
        with self._lock:
            self._time_unit = unit

    @property
    def report_generator(self) -> ReportGenerator:
        return self._report_generator

    @report_generator.setter
    def report_generator(self, generator: ReportGenerator) -> None:
        with self._lock:
            self._report_generator = generator

    # Single-handler hooks, replacing any registered callbacks.

    @property
    def on_report_begin(self) -> Optional[ReportCallback]:
        """Called right after a report has begun"""
        return self.begin_callbacks[-1] if self.begin_callbacks else None

    @on_report_begin.setter
    def on_report_begin(self, handler: Optional[ReportCallback]) -> None:
        with self._lock:
            self.begin_callbacks = [handler] if handler else []

    @property
    def on_report_end(self) -> Optional[ReportCallback]:
        """Called right after a report has ended"""
        return self.end_callbacks[-1] if self.end_callbacks else None

    @on_report_end.setter
    def on_report_end(self, handler: Optional[ReportCallback]) -> None:
        with self._lock:
            self.end_callbacks = [handler] if handler else []

    def add_begin_callback(self, callback: ReportCallback) -> None:
        with self._lock:
            self.begin_callbacks.append(callback)

    def add_end_callback(self, callback: ReportCallback) -> None:
        with self._lock:
            self.end_callbacks.append(callback)

    def add_error_callback(self, callback: ErrorCallback) -> None:
        """
        Add callback receiving DuplicateActionError / ActionNotFoundError
        """
        with self._lock:
            self.error_callbacks.append(callback)

    def begin(self, event: str, action: str, payload: Any = None) -> Optional[DurationReport]:
        """
        Begin time tracking.

        Args:
            event: action group name i.e. ``Video_Identifier::Play``
            action: concrete action name i.e. ``Buffering``, ``ContentLoading``
            payload: opaque value stored as the report's begin payload

        Returns:
            The started report, or None when another action of the same
            family is still being tracked.
        """
        with self._lock:
            event_reports = self._reports.setdefault(event, [])
            action_reports = self._family(event_reports, action)

            if any(not r.is_complete for r in action_reports):
                error = DuplicateActionError(event, action)
            else:
                error = None
                report = DurationReport(
                    title=self._unique_title(event_reports, action, len(action_reports)),
                    action=action,
                    begin_payload=payload,
                    clock=self.clock,
                )
                report.begin()
                event_reports.append(report)
                callbacks = list(self.begin_callbacks)

        if error is not None:
            self._reject(error)
            return None

        logger.debug(f"[{event}] {report.title} began")
        self._notify(callbacks, event, report, "begin")
        return report

    def end(self, event: str, action: str, payload: Any = None) -> Optional[DurationReport]:
        """
        Finish time tracking of the most recently begun matching action.

        Args:
            event: action group name i.e. ``Video_Identifier::Play``
            action: concrete action name i.e. ``Buffering``, ``ContentLoading``
            payload: opaque value stored as the report's end payload

        Returns:
            The completed report, or None when nothing matching was in flight.
        """
        with self._lock:
            event_reports = self._reports.get(event)
            in_flight = [
                r for r in self._family(event_reports or [], action) if not r.is_complete
            ]

            if not in_flight:
                error = ActionNotFoundError(event, action)
            else:
                error = None
                report = in_flight[-1]
                report.end_payload = payload
                report.end()
                callbacks = list(self.end_callbacks)

        if error is not None:
            self._reject(error)
            return None

        logger.debug(f"[{event}] {report.title} ended after {self.time_unit.format(report.duration)}")
        self._notify(callbacks, event, report, "end")
        return report

    @contextmanager
    def track(
        self, event: str, action: str, begin_payload: Any = None, end_payload: Any = None
    ) -> Iterator[Optional[DurationReport]]:
        """
        Context manager timing the enclosed block as one action

        Usage:
            with reporter.track("Video::Play", "Buffering"):
                buffer()
        """
        report = self.begin(event, action, begin_payload)
        try:
            yield report
        finally:
            if report is not None:
                self.end(event, action, end_payload)

    def report_data(self) -> Dict[str, Tuple[DurationReport, ...]]:
        """
        Provide a snapshot of the collected data for further processing.

        Reports are copies; changing them does not affect the registry.
        """
        with self._lock:
            return {
                event: tuple(copy.copy(r) for r in event_reports)
                for event, event_reports in self._reports.items()
            }

    def generate_report(self) -> str:
        """Generate report from collected data using the configured generator"""
        with self._lock:
            snapshot = self.report_data()
            generator = self.report_generator
            unit = self.time_unit
        return generator(snapshot, unit)

    def export(self) -> Dict[str, Any]:
        """Export collected data as a JSON-ready dictionary"""
        with self._lock:
            snapshot = self.report_data()
            unit = self.time_unit
        return {
            'unit': unit.symbol,
            'events': {
                event: {
                    'total': unit.convert(event_total(event_reports)),
                    'total_ns': event_total(event_reports),
                    'complete': all(r.is_complete for r in event_reports),
                    'reports': [r.to_dict(unit) for r in event_reports],
                }
                for event, event_reports in snapshot.items()
            },
        }

    def clear(self) -> int:
        """Clear all gathered data, returning the number of events removed"""
        with self._lock:
            event_count = len(self._reports)
            self._reports.clear()
        logger.info(f"DurationReporter cleared {event_count} event(s)")
        return event_count

    def _family(self, event_reports: List[DurationReport], action: str) -> List[DurationReport]:
        if self.family_match is FamilyMatch.CONTAINS:
            return [r for r in event_reports if action in r.title]
        return [r for r in event_reports if r.action == action]

    @staticmethod
    def _unique_title(event_reports: List[DurationReport], action: str, action_count: int) -> str:
        if action_count == 0:
            title = action
        else:
            title = f"{action}{action_count + 1}"

        # Another family may already own the numbered name, i.e. "Load2" vs "Load" + 2
        taken = {r.title for r in event_reports}
        number = action_count + 1
        while title in taken:
            number += 1
            title = f"{action}{number}"
        return title

    def _notify(self, callbacks: List[ReportCallback], event: str, report: DurationReport, stage: str) -> None:
        for callback in callbacks:
            try:
                callback(event, report)
            except Exception as e:
                logger.error(f"Error in report {stage} callback for [{event}] {report.title}: {e}")

    def _reject(self, error: DurationReporterError) -> None:
        logger.warning(f"DurationReporter: {error}")

        with self._lock:
            callbacks = list(self.error_callbacks)
        for callback in callbacks:
            try:
                callback(error)
            except Exception as e:
                logger.error(f"Error in report error callback: {e}")

        if self.strict:
            raise error


# Global duration reporter instance
_duration_reporter: Optional[DurationReporter] = None
_duration_reporter_lock = threading.Lock()


def get_duration_reporter() -> DurationReporter:
    """Get or create the global duration reporter instance"""
    global _duration_reporter
    if _duration_reporter is None:
        with _duration_reporter_lock:
            if _duration_reporter is None:
                _duration_reporter = DurationReporter()
    return _duration_reporter


def setup_duration_reporting(
    time_unit: Optional[DurationUnit] = None,
    report_generator: ReportGenerator = default_report_generator,
    family_match: Optional[FamilyMatch] = None,
    strict: Optional[bool] = None,
    clock: Clock = time.perf_counter_ns,
) -> DurationReporter:
    """Replace the global duration reporter with a freshly configured one"""
    global _duration_reporter
    reporter = DurationReporter(
        time_unit=time_unit,
        report_generator=report_generator,
        family_match=family_match,
        strict=strict,
        clock=clock,
    )
    with _duration_reporter_lock:
        _duration_reporter = reporter

    logger.info(f"Duration reporting setup complete - unit: {reporter.time_unit.symbol}")
    return reporter


def reset_duration_reporter() -> None:
    """Drop the global instance (useful between tests)"""
    global _duration_reporter
    with _duration_reporter_lock:
        _duration_reporter = None


# Module-level shortcuts bound to the global reporter

def begin(event: str, action: str, payload: Any = None) -> Optional[DurationReport]:
    return get_duration_reporter().begin(event, action, payload)


def end(event: str, action: str, payload: Any = None) -> Optional[DurationReport]:
    return get_duration_reporter().end(event, action, payload)


def track(event: str, action: str, begin_payload: Any = None, end_payload: Any = None):
    return get_duration_reporter().track(event, action, begin_payload, end_payload)


def generate_report() -> str:
    return get_duration_reporter().generate_report()


def report_data() -> Dict[str, Tuple[DurationReport, ...]]:
    return get_duration_reporter().report_data()


def clear() -> int:
    return get_duration_reporter().clear()

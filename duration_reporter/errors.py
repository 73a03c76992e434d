"""
Exceptions describing rejected begin/end calls.

The reporter builds these to describe a rejected call, logs them and hands
them to error callbacks. They only propagate to the caller when the reporter
runs in strict mode.
"""


class DurationReporterError(Exception):
    """Base exception for all duration reporter errors."""

    def __init__(self, message: str, event: str = "", action: str = ""):
        super().__init__(message)
        self.event = event
        self.action = action

    def __str__(self):
        base_msg = super().__str__()
        if self.event:
            base_msg = f"[{self.event}] {base_msg}"
        return base_msg


class DuplicateActionError(DurationReporterError):
    """Raised when an action is begun while another of its family is still in flight."""

    def __init__(self, event: str, action: str):
        super().__init__(f"Can't add action - another {action} is already tracked.", event, action)


class ActionNotFoundError(DurationReporterError):
    """Raised when ending an action that has no in-flight report in the event."""

    def __init__(self, event: str, action: str):
        super().__init__(f"Can't end action - {action} wasn't found.", event, action)

# spec_extractor/errors.py
"""Exception taxonomy for the extraction run.

Fatal errors (session, setup, enumeration) propagate to the caller of
``run_extraction``. ``ActionError`` subclasses and ``RecordParseError`` are
recoverable and get absorbed by the option/identifier loops.
"""


class ExtractionError(Exception):
    """Base class for every error raised by the extractor."""


class SessionCancelled(ExtractionError):
    """The session budget ran out or the session was cancelled explicitly."""


class ActionError(ExtractionError):
    """A single unit of browser interaction did not complete."""


class ActionTimedOut(ActionError):
    def __init__(self, timeout: float):
        super().__init__(f"action timed out after {timeout:.1f}s")
        self.timeout = timeout


class ActionFailed(ActionError):
    """Browser or script level error, message passed through from Playwright."""


# --- Setup phase (fatal) ---

class NavigationError(ExtractionError):
    """Page setup failed; no option will be processed."""


class NavigationFailed(NavigationError):
    pass


class PageLoadVerificationFailed(NavigationError):
    pass


class CheckboxToggleFailed(NavigationError):
    pass


class EnumerationError(ExtractionError):
    """The dropdown options could not be listed."""


class RecordParseError(ExtractionError):
    """An in-page payload could not be turned into a SpecRecord."""

    MALFORMED = "malformed"
    NOT_AN_OBJECT = "not-an-object"
    MISSING_NAME = "missing-name"
    BAD_FIELD = "bad-field"

    def __init__(self, reason: str, detail: str = ""):
        message = f"{reason}: {detail}" if detail else reason
        super().__init__(message)
        self.reason = reason
        self.detail = detail

"""Exception taxonomy for the cut engine.

WHY: Callers (CLI, HTTP API) need to tell bad input data apart from bad
settings. Both are fatal to the current invocation and never retried, but
they are reported differently (exit code vs. HTTP 422 detail).

HOW: A small hierarchy rooted at AutocutError. Both concrete errors also
subclass ValueError so code that already catches ValueError keeps working.

RULES:
- ValidationError: malformed/out-of-range interval, negative duration,
  non-finite timecode, oversize caption text
- ConfigurationError: missing/invalid frame rate, invalid threshold
- File write failures are plain OSError and propagate untouched
"""


class AutocutError(Exception):
    """Base class for all errors raised by the cut engine."""


class ValidationError(AutocutError, ValueError):
    """Input data violates an interval, timecode, or payload contract."""


class ConfigurationError(AutocutError, ValueError):
    """A setting is missing or outside its allowed range."""

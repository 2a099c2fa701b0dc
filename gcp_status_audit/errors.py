"""Exception types raised by the status audit."""
from __future__ import annotations


class SpecParseError(ValueError):
    """Raised when a spec document or entry cannot be parsed."""


class StatusFetchError(RuntimeError):
    """Raised when the live status of a resource could not be retrieved."""


class UnknownStatusError(StatusFetchError):
    """Raised when the remote API reports a status outside the known set."""


def fetch_error_from_exception(action: str, exc: BaseException) -> StatusFetchError:
    """Create a :class:`StatusFetchError` describing *exc* raised by *action*.

    Mirrors the ``"<action>: <cause>"`` wording used for every fetch failure so
    error records read the same regardless of which client failed.
    """

    action = action.rstrip(".")
    return StatusFetchError(f"{action}: {exc}")


__all__ = [
    "SpecParseError",
    "StatusFetchError",
    "UnknownStatusError",
    "fetch_error_from_exception",
]

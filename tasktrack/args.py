"""Command-line argument splitting."""

from __future__ import annotations

import re
import sys
from collections.abc import Sequence
from dataclasses import dataclass

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


@dataclass(frozen=True)
class Arguments:
    """A command name and the parameters passed to it."""

    cmd: str = ""
    params: tuple[str, ...] = ()


def parse_args(argv: Sequence[str] | None = None) -> Arguments:
    """Split a full argument vector (program name first) into command and params."""
    if argv is None:
        argv = sys.argv
    raw = list(argv[1:])
    if not raw:
        return Arguments()
    return Arguments(cmd=raw[0], params=tuple(raw[1:]))


def parse_int(text: str) -> int:
    """Parse a strict decimal 64-bit integer: optional sign, ASCII digits only."""
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid integer {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"integer {text!r} out of range")
    return value
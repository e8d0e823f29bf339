"""String helpers for reading the keyword/value input format."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any

_FLOAT_PREFIX = re.compile(
    r"[ \t\n\r\f\v]*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_INT_PREFIX = re.compile(r"[ \t\n\r\f\v]*([+-]?\d+)")


class InputError(ValueError):
    """Raised when an input element holds invalid or unknown settings."""


def trim(text: str) -> str:
    """Strip leading and trailing blanks and tabs."""
    return text.strip(" \t")


def chop(text: str) -> list[str]:
    """Split a comma separated list into trimmed items."""
    return [trim(item) for item in text.split(",")]


def atob(text: str) -> bool:
    """Interpret a boolean flag: only '1', 'true' and 't' count as true."""
    return text in ("1", "true", "t")


def _atof(text: str) -> float:
    """Read the leading number of a string, or 0.0 if there is none."""
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def _atoi(text: str) -> int:
    """Read the leading integer of a string, or 0 if there is none."""
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def reference(text: str, value: float) -> tuple[float, str]:
    """Resolve a value that is either a number or a '@label' reference.

    Returns the (possibly unchanged) value and the referenced label, which is
    empty when the text holds a plain number.
    """
    pos = text.find("@")
    if pos >= 0:
        return value, text[pos + 1:]
    return _atof(text), ""


_CONVERTERS: dict[Any, Callable[[str], Any]] = {
    float: _atof,
    int: _atoi,
    bool: atob,
    str: str,
}


def take_options(
    args: Mapping[str, str],
    spec: Mapping[str, Any],
    element: str,
) -> dict[str, Any]:
    """Convert the keywords of an input element according to ``spec``.

    ``spec`` maps each accepted keyword to ``float``, ``int``, ``bool``,
    ``str`` or any other callable taking the raw string. Only keywords that
    are present are returned. Unknown keywords raise :class:`InputError`.
    """
    unknown = sorted(set(args) - set(spec))
    if unknown:
        raise InputError(f"Unknown elements in {element}: {', '.join(unknown)}")
    result: dict[str, Any] = {}
    for key, kind in spec.items():
        if key in args:
            convert = _CONVERTERS.get(kind, kind)
            result[key] = convert(args[key])
    return result
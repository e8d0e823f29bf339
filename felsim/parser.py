"""Reader for the main input file made of '&name ... &end' elements."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from .textproc import InputError, trim

_TERMINATORS = ("&end", "&END", "&End")


class ParseError(InputError):
    """Raised when the main input file is malformed."""


def _fill_map(lines: list[str]) -> dict[str, str]:
    """Split the body of an element into keyword/value pairs.

    The first occurrence of a keyword wins.
    """
    result: dict[str, str] = {}
    for entry in ";".join(lines).split(";"):
        if not entry:
            continue
        key, sep, value = entry.partition("=")
        if not sep:
            raise ParseError(f"Invalid format {entry} in input file")
        result.setdefault(trim(key), trim(value))
    return result


def parse_text(text: str) -> Iterator[tuple[str, dict[str, str]]]:
    """Yield (element name, keyword dict) for each element in the text.

    Element names are lower-cased. An element left open at the end of the
    text is ignored.
    """
    element: str | None = None
    body: list[str] = []
    for raw in text.split("\n"):
        line = trim(raw)
        if not line or line.startswith("#"):
            continue
        if line in _TERMINATORS:
            if element is None:
                raise ParseError("Termination string outside element definition in input file")
            yield element, _fill_map(body)
            element, body = None, []
            continue
        if line.startswith("&"):
            if element is not None:
                raise ParseError("Nested elements in main input file")
            element = line.lower()
            continue
        if element is not None:
            body.append(line)


def read_input(path: str | os.PathLike[str]) -> Iterator[tuple[str, dict[str, str]]]:
    """Read a main input file and return an iterator over its elements."""
    try:
        text = Path(path).read_text()
    except OSError as exc:
        raise ParseError(f"Cannot open main input file: {path}") from exc
    return parse_text(text)
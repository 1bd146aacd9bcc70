"""Reading ``.ber`` map files into lists of rows."""

from __future__ import annotations

import os
from collections.abc import Iterator
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]


class MapError(Exception):
    """Raised when a map cannot be read or is not a valid map."""


def _read_text(path: PathLike) -> str:
    try:
        with open(path, encoding="utf-8", errors="replace", newline="") as handle:
            return handle.read()
    except OSError as exc:
        raise MapError("No such file or directory") from exc


def _lines(text: str) -> Iterator[str]:
    """Yield lines split on newline, each keeping its terminating newline."""
    *complete, tail = text.split("\n")
    for line in complete:
        yield line + "\n"
    if tail:
        yield tail


def count_map_lines(path: PathLike) -> int:
    """Count the lines of the file that are not a bare newline."""
    return sum(1 for line in _lines(_read_text(path)) if line != "\n")


def read_map(path: PathLike) -> list[str]:
    """Read the map rows of a file.

    Leading blank lines are skipped; after the first row, the following
    lines are taken as they come (blank ones included) until as many rows
    as the file has non-blank lines have been read or the file ends.
    """
    text = _read_text(path)
    count = sum(1 for line in _lines(text) if line != "\n")
    if count == 0:
        raise MapError("Map is empty")

    trimmed = (line.strip("\n") for line in _lines(text))
    first = next(line for line in trimmed if line)
    rows = [first]
    for line in trimmed:
        if len(rows) >= count:
            break
        rows.append(line)
    return rows
"""Reading and checking of ``.ber`` map files."""

from __future__ import annotations

import os
from typing import Union

from solong.lines import LineReader

PathLike = Union[str, "os.PathLike[str]"]

_ENCODING = "latin-1"


class SoLongError(Exception):
    """Base class for every error the game reports before it starts."""

    message = "Error"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.message)


class InvalidMapError(SoLongError):
    """The map breaks one of the layout rules."""

    message = "Map is invalid"


class MapOpenError(SoLongError):
    """The map file could not be opened."""

    message = "Failed to open map file"


class InvalidPathError(SoLongError):
    """The map path or its extension is not acceptable."""

    message = "Invalid file path or extension"


def strip_newline(line: str) -> str:
    """Cut a line at its first newline character."""
    index = line.find("\n")
    return line if index < 0 else line[:index]


def check_path(path: str) -> None:
    """Reject hidden paths and, where the path has directories, bad ``.ber`` names."""
    if path.startswith("."):
        raise InvalidPathError()
    extension_ok = len(path) >= 5 and path.endswith(".ber") and path[-5] != "/"
    for index, char in enumerate(path):
        if char != "/":
            continue
        next_is_dot = path[index + 1 : index + 2] == "."
        if next_is_dot or not extension_ok:
            raise InvalidPathError()


def _read_rows(path: PathLike) -> list[str]:
    try:
        stream = open(path, "r", encoding=_ENCODING, newline="")
    except OSError as exc:
        raise MapOpenError() from exc
    rows: list[str] = []
    with stream:
        for raw in LineReader(stream):
            row = strip_newline(raw)
            if rows and len(row) != len(rows[-1]):
                raise InvalidMapError()
            rows.append(row)
    return rows


def map_dimensions(path: PathLike) -> tuple[int, int]:
    """Return ``(width, height)`` in tiles; every row must have the same width."""
    rows = _read_rows(path)
    width = len(rows[-1]) if rows else 0
    return width, len(rows)


def read_map(path: PathLike) -> list[str]:
    """Read the map's rows, newlines removed, after checking they are all equally wide."""
    return _read_rows(path)
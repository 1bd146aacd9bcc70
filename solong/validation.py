"""Checks that decide whether a map is playable."""

from __future__ import annotations

import os
from collections import deque
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from solong.mapfile import MapError, PathLike, read_map

WALL = "1"
EMPTY = "0"
COLLECTIBLE = "C"
EXIT = "E"
PLAYER = "P"
ENEMY = "X"

BASE_TILES = frozenset({EMPTY, WALL, EXIT, COLLECTIBLE, PLAYER})
BONUS_TILES = BASE_TILES | {ENEMY}


@dataclass(frozen=True)
class Point:
    """A cell position: ``x`` is the column, ``y`` the row."""

    x: int
    y: int

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)


_NEIGHBOURS = (Point(-1, 0), Point(1, 0), Point(0, -1), Point(0, 1))


def check_extension(path: PathLike) -> bool:
    """Return True if the text from the first dot of the path is exactly ``.ber``."""
    name = os.fspath(path)
    dot = name.find(".")
    return dot != -1 and name[dot:] == ".ber"


def is_rectangular(rows: Sequence[str]) -> bool:
    """Return True if every row is as long as the first."""
    if not rows:
        return False
    width = len(rows[0])
    return all(len(row) == width for row in rows)


def is_walled(rows: Sequence[str]) -> bool:
    """Return True if the first and last rows and both side columns are walls."""
    if not rows or not rows[0]:
        return False
    width = len(rows[0])
    if any(tile != WALL for tile in rows[0]):
        return False
    if any(tile != WALL for tile in rows[-1]):
        return False
    return all(
        len(row) >= width and row[0] == WALL and row[width - 1] == WALL
        for row in rows[1:]
    )


def has_valid_chars(rows: Iterable[str], allowed: Iterable[str]) -> bool:
    """Return True if every tile of the map is one of ``allowed``."""
    allowed_set = frozenset(allowed)
    return all(tile in allowed_set for row in rows for tile in row)


def count_tile(rows: Iterable[str], tile: str) -> int:
    """Count how many cells hold ``tile``."""
    return sum(row.count(tile) for row in rows)


def find_tile(rows: Sequence[str], tile: str) -> Point | None:
    """Return the position of the last cell holding ``tile``, or None."""
    found = None
    for y, row in enumerate(rows):
        for x, cell in enumerate(row):
            if cell == tile:
                found = Point(x, y)
    return found


def grid_size(rows: Sequence[str]) -> Point:
    """Return the map size: width of the last row and number of rows."""
    if not rows:
        return Point(0, 0)
    return Point(len(rows[-1]), len(rows))


def _reachable(rows: Sequence[str], start: Point, blocked: frozenset[str]) -> set[Point]:
    size = grid_size(rows)

    def open_cell(p: Point) -> bool:
        return (
            0 <= p.y < size.y
            and 0 <= p.x < size.x
            and p.x < len(rows[p.y])
            and rows[p.y][p.x] not in blocked
        )

    if not open_cell(start):
        return set()
    seen = {start}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for step in _NEIGHBOURS:
            nxt = current + step
            if nxt not in seen and open_cell(nxt):
                seen.add(nxt)
                queue.append(nxt)
    return seen


def collectibles_reachable(rows: Sequence[str], start: Point) -> bool:
    """Return True if every collectible can be reached without crossing the exit."""
    reached = _reachable(rows, start, frozenset({WALL, EXIT}))
    targets = {
        Point(x, y)
        for y, row in enumerate(rows)
        for x, cell in enumerate(row)
        if cell == COLLECTIBLE
    }
    return targets <= reached


def exit_reachable(rows: Sequence[str], start: Point) -> bool:
    """Return True if an exit can be reached from ``start``."""
    reached = _reachable(rows, start, frozenset({WALL}))
    return any(rows[p.y][p.x] == EXIT for p in reached)


def validate_map(rows: Sequence[str], bonus: bool = False) -> None:
    """Raise MapError describing the first problem found in the map."""
    if not rows:
        raise MapError("Map is empty")
    if not is_rectangular(rows):
        raise MapError("Map isn't rectangular")
    if not is_walled(rows):
        raise MapError("Map isn't surrounded by walls")
    if not has_valid_chars(rows, BONUS_TILES if bonus else BASE_TILES):
        raise MapError("Map contains different characters")
    if count_tile(rows, COLLECTIBLE) < 1:
        raise MapError("Map doesn't contain a collectible")
    if bonus and count_tile(rows, ENEMY) < 1:
        raise MapError("Map doesn't contain an enemy")

    exits = count_tile(rows, EXIT)
    players = count_tile(rows, PLAYER)
    if exits == 0:
        raise MapError("Map doesn't contain an exit")
    if exits > 1:
        raise MapError("Map contains more than one exit")
    if players == 0:
        raise MapError("Map doesn't contain a starting position")
    if players > 1:
        raise MapError("Map contains more than one starting position")

    start = find_tile(rows, PLAYER)
    assert start is not None
    if not collectibles_reachable(rows, start) or not exit_reachable(rows, start):
        raise MapError("Invalid path")


def load_and_validate(path: PathLike, bonus: bool = False) -> list[str]:
    """Read a map file, check it, and return its rows."""
    rows = read_map(path)
    if not check_extension(path):
        raise MapError("File isn't a .ber file")
    validate_map(rows, bonus)
    return rows
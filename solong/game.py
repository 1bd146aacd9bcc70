"""Game rules: moving the player and the enemy across a map."""

from __future__ import annotations

import random
from collections.abc import Sequence
from enum import Enum
from typing import Protocol

from solong.mapfile import MapError
from solong.validation import (
    COLLECTIBLE,
    EMPTY,
    ENEMY,
    EXIT,
    PLAYER,
    WALL,
    Point,
    count_tile,
    find_tile,
)

KEY_UP = 126
KEY_DOWN = 125
KEY_RIGHT = 124
KEY_LEFT = 123
KEY_W = 13
KEY_S = 1
KEY_D = 2
KEY_A = 0
KEY_ESC = 53


class Direction(Enum):
    """A move direction, carrying its facing code and its step."""

    UP = (1, 0, -1)
    DOWN = (2, 0, 1)
    RIGHT = (3, 1, 0)
    LEFT = (4, -1, 0)

    def __init__(self, code: int, dx: int, dy: int) -> None:
        self.code = code
        self.delta = Point(dx, dy)


# Order in which a random draw of 0..3 picks the enemy's step.
_ENEMY_STEPS = (Direction.RIGHT, Direction.LEFT, Direction.DOWN, Direction.UP)

_KEYMAP = {
    KEY_UP: Direction.UP,
    KEY_W: Direction.UP,
    KEY_DOWN: Direction.DOWN,
    KEY_S: Direction.DOWN,
    KEY_RIGHT: Direction.RIGHT,
    KEY_D: Direction.RIGHT,
    KEY_LEFT: Direction.LEFT,
    KEY_A: Direction.LEFT,
}


class Outcome(Enum):
    """What a step did to the game."""

    BLOCKED = "blocked"
    MOVED = "moved"
    WON = "won"
    LOST = "lost"


class _RandRange(Protocol):
    def randrange(self, stop: int) -> int: ...


def direction_for_key(keycode: int) -> Direction | None:
    """Return the direction bound to a key code, or None for any other key."""
    return _KEYMAP.get(keycode)


class GameState:
    """The map being played, with the move counter and the player's facing."""

    def __init__(self, rows: Sequence[str], bonus: bool = False) -> None:
        self._grid = [list(row) for row in rows]
        self.bonus = bonus
        self.moves = 0
        self.direction = Direction.DOWN
        if find_tile(rows, PLAYER) is None:
            raise MapError("Map doesn't contain a starting position")

    def _tile(self, p: Point) -> str:
        if 0 <= p.y < len(self._grid) and 0 <= p.x < len(self._grid[p.y]):
            return self._grid[p.y][p.x]
        return WALL

    def _set(self, p: Point, tile: str) -> None:
        self._grid[p.y][p.x] = tile

    @property
    def player(self) -> Point:
        """Position of the player."""
        found = find_tile(self.render_rows(), PLAYER)
        if found is None:
            raise MapError("Map doesn't contain a starting position")
        return found

    def exit_open(self) -> bool:
        """Return True once no collectible is left on the map."""
        return count_tile(self.render_rows(), COLLECTIBLE) == 0

    def move(self, direction: Direction) -> Outcome:
        """Try to move the player one cell in ``direction``."""
        if self.bonus:
            self.direction = direction
        pos = self.player
        target = pos + direction.delta
        tile = self._tile(target)
        open_exit = self.exit_open()
        if tile == WALL or (self.bonus and tile == ENEMY):
            return Outcome.BLOCKED
        if tile == EXIT:
            return Outcome.WON if open_exit else Outcome.BLOCKED
        self._set(pos, EMPTY)
        self._set(target, PLAYER)
        self.moves += 1
        return Outcome.MOVED

    def step_enemy(self, direction: Direction) -> Outcome:
        """Move the enemy one cell; reaching the player loses the game."""
        enemy = find_tile(self.render_rows(), ENEMY)
        if enemy is None:
            return Outcome.BLOCKED
        target = enemy + direction.delta
        tile = self._tile(target)
        if tile in (WALL, COLLECTIBLE, EXIT):
            return Outcome.BLOCKED
        if tile == PLAYER:
            return Outcome.LOST
        self._set(enemy, EMPTY)
        self._set(target, ENEMY)
        return Outcome.MOVED

    def random_enemy_step(self, rng: _RandRange | None = None) -> Outcome:
        """Move the enemy in a direction drawn from ``rng``."""
        source = rng if rng is not None else random
        return self.step_enemy(_ENEMY_STEPS[source.randrange(4) % 4])

    def render_rows(self) -> list[str]:
        """Return the current map as a list of strings."""
        return ["".join(row) for row in self._grid]
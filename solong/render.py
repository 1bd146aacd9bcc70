"""Drawing the game with pygame and running its event loop."""

from __future__ import annotations

import os
import time
from pathlib import Path

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from solong.game import (  # noqa: E402
    KEY_A,
    KEY_D,
    KEY_DOWN,
    KEY_ESC,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_S,
    KEY_UP,
    KEY_W,
    Direction,
    GameState,
    Outcome,
    direction_for_key,
)
from solong.mapfile import PathLike  # noqa: E402
from solong.validation import (  # noqa: E402
    COLLECTIBLE,
    EMPTY,
    ENEMY,
    EXIT,
    PLAYER,
    WALL,
)

TILE = 64
FRAMES = 4
LABEL_POS = (32, 12)
LABEL_COLOUR = (255, 255, 255)
FRAME_DELAY = 0.1005
WINDOW_TITLE = "so_long"

_PYGAME_KEYS = {
    pygame.K_UP: KEY_UP,
    pygame.K_DOWN: KEY_DOWN,
    pygame.K_RIGHT: KEY_RIGHT,
    pygame.K_LEFT: KEY_LEFT,
    pygame.K_w: KEY_W,
    pygame.K_s: KEY_S,
    pygame.K_d: KEY_D,
    pygame.K_a: KEY_A,
    pygame.K_ESCAPE: KEY_ESC,
}

_STATIC_TILES = {
    WALL: "wall",
    EMPTY: "empty",
    COLLECTIBLE: "collectible",
    ENEMY: "enemy",
}


def moves_label(moves: int) -> str:
    """Return the move counter text shown in the window."""
    return f"moves :{moves}"


def texture_paths(texture_dir: PathLike, bonus: bool = False) -> dict[str, Path]:
    """Map each image name used by the renderer to its texture file."""
    root = Path(texture_dir)
    if not bonus:
        base = root / "xpm"
        return {
            "wall": base / "wall.xpm",
            "empty": base / "floor.xpm",
            "collectible": base / "c.xpm",
            "player": base / "cat_down_0.xpm",
            "exit": base / "exit_0.xpm",
            "exit_open": base / "exit_3.xpm",
        }
    paths = {
        "wall": root / "wall.xpm",
        "empty": root / "floor.xpm",
        "collectible": root / "c.xpm",
        "enemy": root / "enemy.xpm",
        "exit": root / "exit_0.xpm",
        "exit_open": root / "exit_1.xpm",
    }
    for direction in Direction:
        name = direction.name.lower()
        for frame in range(FRAMES):
            paths[f"player_{name}_{frame}"] = root / f"cat_{name}_{frame}.xpm"
    return paths


def _load(path: Path) -> pygame.Surface | None:
    if not path.is_file():
        return None
    try:
        return pygame.image.load(str(path))
    except (pygame.error, OSError):
        return None


class Renderer:
    """Draws a GameState as a grid of 64-pixel tiles and drives play."""

    def __init__(self, state: GameState, texture_dir: PathLike = "textures") -> None:
        self.state = state
        self.paths = texture_paths(texture_dir, state.bonus)
        self.images: dict[str, pygame.Surface | None] = {
            name: _load(path) for name, path in self.paths.items()
        }
        self._frame = 0
        self._font: pygame.font.Font | None = None

    def next_player_frame(self) -> int:
        """Return the current animation frame and advance to the next one."""
        frame = self._frame
        self._frame = (self._frame + 1) % FRAMES
        return frame

    def _image_for(self, tile: str) -> pygame.Surface | None:
        if tile in _STATIC_TILES:
            return self.images.get(_STATIC_TILES[tile])
        if tile == EXIT:
            if self.state.exit_open() and self.images.get("exit_open") is not None:
                return self.images["exit_open"]
            return self.images.get("exit")
        if tile == PLAYER:
            if self.state.bonus:
                name = self.state.direction.name.lower()
                return self.images.get(f"player_{name}_{self.next_player_frame()}")
            return self.images.get("player")
        return None

    def draw(self, surface: pygame.Surface) -> None:
        """Blit every tile of the map, plus the move counter in bonus mode."""
        for y, row in enumerate(self.state.render_rows()):
            for x, tile in enumerate(row):
                image = self._image_for(tile)
                if image is not None:
                    surface.blit(image, (x * TILE, y * TILE))
        if self.state.bonus:
            if self._font is None:
                pygame.font.init()
                self._font = pygame.font.Font(None, 24)
            text = self._font.render(moves_label(self.state.moves), True, LABEL_COLOUR)
            surface.blit(text, LABEL_POS)

    def _handle_key(self, key: int) -> Outcome | None:
        code = _PYGAME_KEYS.get(key)
        if code is None:
            return None
        if code == KEY_ESC:
            return Outcome.BLOCKED
        direction = direction_for_key(code)
        if direction is None:
            return None
        outcome = self.state.move(direction)
        if outcome is Outcome.MOVED:
            print(f"Moves: {self.state.moves}", flush=True)
        return outcome

    def run(self) -> Outcome | None:
        """Open the window and play until the game is won, lost or closed.

        Returns WON or LOST when the game ends that way, None when the
        window is closed, Escape is pressed, or the base textures are missing.
        """
        rows = self.state.render_rows()
        pygame.init()
        try:
            screen = pygame.display.set_mode((len(rows[0]) * TILE, len(rows) * TILE))
            pygame.display.set_caption(WINDOW_TITLE)
            if self.images.get("wall") is None or self.images.get("empty") is None:
                return None
            clock = pygame.time.Clock()
            while True:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        return None
                    if event.type == pygame.KEYDOWN:
                        if _PYGAME_KEYS.get(event.key) == KEY_ESC:
                            return None
                        if self._handle_key(event.key) is Outcome.WON:
                            return Outcome.WON
                if self.state.bonus:
                    time.sleep(FRAME_DELAY)
                screen.fill((0, 0, 0))
                self.draw(screen)
                if self.state.bonus and self.state.random_enemy_step() is Outcome.LOST:
                    return Outcome.LOST
                pygame.display.flip()
                if not self.state.bonus:
                    clock.tick(60)
        finally:
            pygame.quit()
"""Command line entry point: load a map and play it."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from solong.game import GameState
from solong.mapfile import MapError
from solong.validation import load_and_validate


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="so_long", description="Collect every item, then reach the exit."
    )
    parser.add_argument("map", nargs="?", help="path of a .ber map file")
    parser.add_argument(
        "--bonus",
        action="store_true",
        help="play with an enemy and animated sprites",
    )
    parser.add_argument(
        "--textures",
        default="textures",
        help="directory holding the texture files (default: textures)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Validate the map named on the command line and start the game."""
    args = _parser().parse_args(argv)
    if args.map is None:
        print("Error\nNo such file or directory")
        return 1
    try:
        rows = load_and_validate(args.map, args.bonus)
    except MapError as exc:
        print(f"Error\n{exc}")
        return 1

    from solong.render import Renderer

    Renderer(GameState(rows, args.bonus), args.textures).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
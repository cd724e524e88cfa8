"""Entry point for ``python -m antsvbees``.

Loads the default YAML config, builds a game, and starts either the
terminal shell or the Pygame window.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from antsvbees.simulation.config import GameConfig
from antsvbees.simulation.engine import Game

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def main() -> None:
    """Parse CLI args, create the game, launch a client."""
    parser = argparse.ArgumentParser(
        prog="antsvbees",
        description="Ants vs. Bees - turn-based tunnel defense",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Override the RNG seed from the config file",
    )
    parser.add_argument(
        "--pygame",
        action="store_true",
        help="Play in a Pygame window instead of the terminal",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colours in the terminal board",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every game event at DEBUG level",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.config == _DEFAULT_CONFIG and not args.config.exists():
        config = GameConfig()
    else:
        config = GameConfig.from_yaml(args.config)
    if args.seed is not None:
        config.seed = args.seed
    game = Game.from_config(config)

    if args.pygame:
        from antsvbees.ui.pygame_client import PygameRenderer

        PygameRenderer(game=game).run()
    else:
        from antsvbees.ui.console import GameShell

        GameShell(game, color=not args.no_color).cmdloop()


if __name__ == "__main__":
    main()

from __future__ import annotations

import logging
import os
import sys


def _configure_logging() -> None:
    level_name = os.environ.get("MUSIC_PUZZLE_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
    )


def main() -> int:
    """Entry point for playing the puzzle from a terminal."""

    os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
    _configure_logging()

    from .config import config_from_env
    from .console import run_console
    from .puzzle_core import PuzzleConfigError

    try:
        config = config_from_env()
    except (PuzzleConfigError, OSError) as exc:
        sys.stderr.write(f"music-puzzle: cannot load puzzle config: {exc}\n")
        return 2

    from .audio import PuzzleAudioAdapter

    audio = PuzzleAudioAdapter()
    try:
        return run_console(stdin=sys.stdin, stdout=sys.stdout, config=config, sounds=audio)
    finally:
        audio.stop()


if __name__ == "__main__":
    raise SystemExit(main())

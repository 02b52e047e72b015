#!/usr/bin/env python3
"""
ULTRA PAC-MAN 4K
================
Arrow keys or WASD to steer, P to pause, ESC to quit,
SPACE to start over after GAME OVER.
"""

from __future__ import annotations

import argparse
import logging

from .app import App
from .config import Settings


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="pacman4k", description="Ultra Pac-Man 4K")
    parser.add_argument("--level", type=int, default=1, help="starting level (default: 1)")
    parser.add_argument("--scale", type=int, default=2, help="window scale factor (default: 2)")
    parser.add_argument("--fps", type=int, default=60, help="frame rate cap (default: 60)")
    parser.add_argument("--mute", action="store_true", help="disable sound")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)
    if args.level < 1:
        parser.error("--level must be at least 1")
    if args.scale < 1:
        parser.error("--scale must be at least 1")
    if args.fps < 1:
        parser.error("--fps must be at least 1")
    return args


def settings_from_args(args: argparse.Namespace) -> Settings:
    return Settings(scale=args.scale, fps=args.fps, audio_enabled=not args.mute,
                    start_level=args.level)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    App(settings_from_args(args)).run()


if __name__ == "__main__":
    main()

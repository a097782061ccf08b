"""Allow running Interval Trainer as a module: python -m intervaltrainer."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from PyQt6.QtWidgets import QApplication

from . import __version__
from .app import IntervalTrainerApp, PROFILES
from .settings import load_settings


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="intervaltrainer",
        description="Work/rest interval workout timer.",
    )
    parser.add_argument(
        "--settings", type=Path, default=None,
        help="settings JSON file (e.g. the store shared with the phone)",
    )
    parser.add_argument(
        "--profile", choices=PROFILES, default="handheld",
        help="feedback profile",
    )
    parser.add_argument(
        "--notify-on-start", action="store_true",
        help="play the work cue when the first round starts",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("--version", action="version", version=__version__)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv[:1])
    app.setApplicationName("Interval Trainer")
    app.setOrganizationName("IntervalTrainer")

    window = IntervalTrainerApp(
        load_settings(args.settings),
        settings_file=args.settings,
        profile=args.profile,
        notify_on_start=args.notify_on_start,
    )
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()

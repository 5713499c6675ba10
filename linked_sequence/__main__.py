"""Command line entry point: ``python -m linked_sequence demo``."""
from __future__ import annotations

import argparse
import random
from typing import Any, Dict, List, Optional

import structlog

from .data_structures.basic.linked_list import LinkedList
from .logging.setup import LoggingConfig, configure_from_settings, setup_logging

SONGS: List[Dict[str, Any]] = [
    {"name": "Демони", "author": "Один в каноє", "song": "Демони.mp3", "duration": 2.20},
    {"name": "Човен", "author": "Один в каноє", "song": "Човен.mp3", "duration": 2.44},
    {"name": "Коала", "author": "Khrystyna Soloviy", "song": "Коала.mp3", "duration": 3.14},
]


def build_playlist() -> LinkedList:
    """Assemble the sample playlist using back, front and positional inserts."""
    demons, boat, koala = (dict(song) for song in SONGS)
    playlist = LinkedList()
    playlist.push_back(demons)
    playlist.push_front(boat)
    playlist.insert_at(koala, 1)
    return playlist


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="linked_sequence", description="Linked list playground")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_demo = sub.add_parser("demo", help="Build and print the sample playlist")
    p_demo.add_argument("--shuffle", action="store_true", help="Shuffle the playlist before printing")
    p_demo.add_argument("--seed", type=int, default=None, help="Seed for --shuffle")
    p_demo.add_argument("--sort-by", default=None, help="Sort by a record field, e.g. duration")
    p_demo.add_argument("--log-level", default=None, help="Override the configured log level")
    p_demo.add_argument("--json-logs", action="store_true", help="Render structured logs as JSON")

    args = parser.parse_args(argv)

    if args.log_level or args.json_logs:
        setup_logging(LoggingConfig(level=args.log_level or "INFO", json_logs=args.json_logs))
    else:
        configure_from_settings()
    log = structlog.get_logger(__name__)

    playlist = build_playlist()
    if args.sort_by:
        if not playlist.every(lambda song: args.sort_by in song):
            parser.error(f"unknown field for --sort-by: {args.sort_by}")
        playlist.sort(lambda left, right: left[args.sort_by] > right[args.sort_by])
    if args.shuffle:
        playlist.shuffle(rng=random.Random(args.seed))

    total = playlist.reduce(lambda acc, song: acc + song["duration"], 0)
    log.info("playlist_ready", songs=playlist.length, total_duration=round(total, 2))
    playlist.display()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

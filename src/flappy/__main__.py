#!/usr/bin/env python3
"""
Entry point: python -m flappy [--scoreboard-url URL | --db FILE | --offline]
"""

import argparse
import logging
import os

from .constants import DB_FILE, SCOREBOARD_TIMEOUT
from .scoreboard import HttpScoreBoard, SqliteScoreBoard, ScoreReporter

logger = logging.getLogger("flappy")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="flappy", description="Flappy Liberal")
    parser.add_argument("--scoreboard-url", default=os.environ.get("FLAPPY_SCOREBOARD_URL"),
                        help="remote scoreboard endpoint (env FLAPPY_SCOREBOARD_URL)")
    parser.add_argument("--db", default=os.environ.get("FLAPPY_DB", DB_FILE),
                        help="local SQLite scoreboard used when no URL is given (env FLAPPY_DB)")
    parser.add_argument("--offline", action="store_true", help="disable the scoreboard")
    parser.add_argument("--timeout", type=float, default=SCOREBOARD_TIMEOUT,
                        help="scoreboard request timeout in seconds")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def build_reporter(args: argparse.Namespace) -> ScoreReporter:
    if args.offline:
        logger.info("Scoreboard disabled")
        return ScoreReporter(None)
    if args.scoreboard_url:
        logger.info("Using remote scoreboard at %s", args.scoreboard_url)
        return ScoreReporter(HttpScoreBoard(args.scoreboard_url, timeout=args.timeout))
    logger.info("Using local scoreboard in %s", args.db)
    return ScoreReporter(SqliteScoreBoard(args.db))


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Imported late so --help works without opening a window
    from .client import FlappyClient

    client = FlappyClient(build_reporter(args))
    try:
        client.run()
    except KeyboardInterrupt:
        print("Bye.")


if __name__ == "__main__":
    main()

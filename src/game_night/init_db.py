"""Create every table directly from the ORM metadata.

Handy for local SQLite development; deployed databases use ``scripts.migrate``.
"""
from __future__ import annotations

import argparse

from game_night.db.session import create_tables, drop_tables, engine


def init_db(reset: bool = False) -> None:
    """Initialize the database by creating all tables."""
    if reset:
        drop_tables()
    create_tables()


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the Game Night Planner tables")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop every table before creating them again.",
    )
    args = parser.parse_args()

    init_db(reset=args.reset)
    print(f"Database initialized at {engine.url.render_as_string(hide_password=True)}.")


if __name__ == "__main__":
    main()

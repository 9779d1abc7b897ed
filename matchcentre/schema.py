"""
Reference DDL for the catalog tables.

Production runs against an externally managed Postgres database; this schema
exists so the service can run against SQLite for local development and tests.
Column types are kept portable across both backends.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Tuple

from sqlalchemy import text
from sqlalchemy.engine import Engine

from .config import CatalogSettings
from .db import get_engine

LOGGER = logging.getLogger(__name__)


SCHEMA_STATEMENTS: Tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS teams (
        id INTEGER PRIMARY KEY,
        name TEXT NOT NULL,
        short_name TEXT NOT NULL,
        logo_url TEXT,
        country TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS competitions (
        id INTEGER PRIMARY KEY,
        name TEXT NOT NULL,
        type TEXT NOT NULL CHECK (type IN ('league', 'cup', 'friendly')),
        season TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS players (
        id INTEGER PRIMARY KEY,
        name TEXT NOT NULL,
        date_of_birth DATE,
        nationality TEXT,
        photo_url TEXT,
        position TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS matches (
        id INTEGER PRIMARY KEY,
        date TIMESTAMP NOT NULL,
        venue TEXT,
        home_team_id INTEGER NOT NULL REFERENCES teams(id),
        away_team_id INTEGER NOT NULL REFERENCES teams(id),
        competition_id INTEGER NOT NULL REFERENCES competitions(id),
        score_home INTEGER,
        score_away INTEGER
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS match_events (
        id INTEGER PRIMARY KEY,
        match_id INTEGER NOT NULL REFERENCES matches(id),
        event_type TEXT NOT NULL
            CHECK (event_type IN ('goal', 'yellow_card', 'red_card', 'corner')),
        minute INTEGER NOT NULL CHECK (minute >= 0),
        player_id INTEGER NOT NULL REFERENCES players(id),
        assisting_player_id INTEGER REFERENCES players(id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS player_team_history (
        player_id INTEGER NOT NULL REFERENCES players(id),
        team_id INTEGER NOT NULL REFERENCES teams(id),
        start_date DATE NOT NULL,
        end_date DATE,
        PRIMARY KEY (player_id, team_id, start_date)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_matches_competition_date ON matches(competition_id, date)",
    "CREATE INDEX IF NOT EXISTS idx_matches_home_date ON matches(home_team_id, date)",
    "CREATE INDEX IF NOT EXISTS idx_matches_away_date ON matches(away_team_id, date)",
    "CREATE INDEX IF NOT EXISTS idx_match_events_match ON match_events(match_id, minute)",
    "CREATE INDEX IF NOT EXISTS idx_match_events_player ON match_events(player_id)",
    "CREATE INDEX IF NOT EXISTS idx_match_events_assist ON match_events(assisting_player_id)",
)


def create_schema(engine: Engine) -> None:
    """
    Create the catalog tables and their indexes if they do not exist yet.
    """
    with engine.begin() as conn:
        for statement in SCHEMA_STATEMENTS:
            conn.execute(text(statement))
    LOGGER.info("Catalog schema ready on %s", engine.url.render_as_string(hide_password=True))


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Create the catalog tables in a local database.",
    )
    parser.add_argument(
        "--database-url",
        type=str,
        help="SQLAlchemy URL of the target database (defaults to DATABASE_URL).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    )
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    level = getattr(logging, str(args.log_level).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    database_url = args.database_url or CatalogSettings.from_env().database_url
    if database_url.startswith("sqlite:///"):
        Path(database_url[len("sqlite:///"):]).parent.mkdir(parents=True, exist_ok=True)
    create_schema(get_engine(database_url))
    return 0


if __name__ == "__main__":
    sys.exit(main())

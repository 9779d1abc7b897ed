from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from matchcentre.clock import FixedClock
from matchcentre.config import CatalogSettings
from matchcentre.db import RowFetcher
from matchcentre.schema import create_schema

NOW = datetime(2025, 10, 18, 12, 0, tzinfo=timezone.utc)

TEAMS = [
    (1, "Arsenal", "ARS", "https://img.example/ars.png", "England"),
    (2, "Chelsea", "CHE", None, "England"),
    (3, "Everton", "EVE", None, "England"),
    (4, "Liverpool", "LIV", "https://img.example/liv.png", "England"),
]

COMPETITIONS = [
    (10, "Premier League", "league", "2025/26"),
    (11, "Premier League", "league", "2024/25"),
    (12, "EFL Cup", "cup", "2025/26"),
    (13, "Preseason Friendly", "friendly", "Summer Tour"),
]

PLAYERS = [
    (100, "Bukayo Saka", "2001-09-05", "England", None, "Forward"),
    (101, "Declan Rice", "1999-01-14", "England", None, "Midfielder"),
    (102, "Cole Palmer", "2002-05-06", "England", None, "Midfielder"),
    (103, "Jordan Pickford", "1994-03-07", "England", None, "Goalkeeper"),
    (104, "Mohamed Salah", "1992-06-15", "Egypt", None, "Forward"),
    (105, "Raheem Sterling", "1994-12-08", "England", None, "Forward"),
]

HISTORY = [
    (100, 1, "2018-07-01", None),
    (101, 1, "2023-07-15", None),
    (102, 2, "2023-09-01", None),
    (103, 3, "2017-07-01", None),
    (105, 2, "2022-07-13", "2024-08-31"),
    (105, 1, "2024-09-01", None),
]

# id, date, venue, home, away, competition, score_home, score_away
MATCHES = [
    (1, "2024-05-10 15:00:00", "Stamford Bridge", 2, 3, 11, 2, 0),
    (2, "2025-01-15 20:00:00", "Emirates Stadium", 1, 2, 11, 1, 1),
    (3, "2025-09-20 15:00:00", "Goodison Park", 3, 1, 10, 0, 2),
    (4, "2025-10-01 19:45:00", "Emirates Stadium", 1, 4, 12, 3, 1),
    (5, "2025-10-18 11:00:00", "Emirates Stadium", 1, 3, 10, None, None),
    (6, "2025-10-25 15:00:00", "Stamford Bridge", 2, 1, 10, None, None),
    (7, "2025-07-20 18:00:00", None, 4, 1, 13, 1, 2),
    (8, "2025-10-18 19:00:00", "Stamford Bridge", 2, 4, 10, None, None),
]

# id, match, type, minute, player, assisting player
EVENTS = [
    (1, 4, "goal", 12, 100, 101),
    (2, 4, "corner", 5, 100, None),
    (3, 4, "yellow_card", 30, 101, None),
    (4, 4, "goal", 40, 101, None),
    (5, 4, "goal", 55, 104, None),
    (6, 4, "goal", 77, 105, 100),
    (7, 3, "goal", 33, 100, None),
    (8, 3, "goal", 88, 105, 101),
    (9, 3, "red_card", 60, 103, None),
    (10, 2, "goal", 20, 100, None),
    (11, 2, "goal", 70, 102, None),
    (12, 2, "yellow_card", 50, 105, None),
    (13, 1, "goal", 10, 105, 102),
    (14, 1, "goal", 80, 102, 105),
    (15, 7, "goal", 15, 100, None),
    (16, 7, "goal", 60, 104, None),
    (17, 7, "goal", 75, 105, None),
]


def _seed(conn) -> None:
    conn.execute(
        text("INSERT INTO teams (id, name, short_name, logo_url, country) VALUES (:id, :name, :short, :logo, :country)"),
        [dict(zip(("id", "name", "short", "logo", "country"), row)) for row in TEAMS],
    )
    conn.execute(
        text("INSERT INTO competitions (id, name, type, season) VALUES (:id, :name, :type, :season)"),
        [dict(zip(("id", "name", "type", "season"), row)) for row in COMPETITIONS],
    )
    conn.execute(
        text(
            "INSERT INTO players (id, name, date_of_birth, nationality, photo_url, position) "
            "VALUES (:id, :name, :dob, :nat, :photo, :pos)"
        ),
        [dict(zip(("id", "name", "dob", "nat", "photo", "pos"), row)) for row in PLAYERS],
    )
    conn.execute(
        text(
            "INSERT INTO player_team_history (player_id, team_id, start_date, end_date) "
            "VALUES (:player, :team, :start, :end)"
        ),
        [dict(zip(("player", "team", "start", "end"), row)) for row in HISTORY],
    )
    conn.execute(
        text(
            "INSERT INTO matches (id, date, venue, home_team_id, away_team_id, competition_id, score_home, score_away) "
            "VALUES (:id, :date, :venue, :home, :away, :comp, :sh, :sa)"
        ),
        [dict(zip(("id", "date", "venue", "home", "away", "comp", "sh", "sa"), row)) for row in MATCHES],
    )
    conn.execute(
        text(
            "INSERT INTO match_events (id, match_id, event_type, minute, player_id, assisting_player_id) "
            "VALUES (:id, :match, :type, :minute, :player, :assist)"
        ),
        [dict(zip(("id", "match", "type", "minute", "player", "assist"), row)) for row in EVENTS],
    )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_schema(engine)
    with engine.begin() as conn:
        _seed(conn)
    yield engine
    engine.dispose()


@pytest.fixture
def fetcher(engine):
    with Session(engine) as session:
        yield RowFetcher(session)


@pytest.fixture
def settings():
    return CatalogSettings(database_url="sqlite://", api_secret=None)


@pytest.fixture
def client(engine, settings):
    from matchcentre.api.app import app, get_clock, get_fetcher, get_settings

    def _fetcher():
        with Session(engine) as session:
            yield RowFetcher(session)

    app.dependency_overrides[get_fetcher] = _fetcher
    app.dependency_overrides[get_clock] = lambda: FixedClock(NOW)
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

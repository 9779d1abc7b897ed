"""
FastAPI app exposing the catalog read API.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, Iterator, List, Optional

from fastapi import APIRouter, Depends, FastAPI, Header, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from matchcentre.api.auth import verify_signature
from matchcentre.clock import Clock, SystemClock
from matchcentre.composition.assembler import TEAM_LIST_LIMIT, parse_pagination
from matchcentre.composition.events import EVENT_KINDS
from matchcentre.config import CatalogSettings
from matchcentre.db import RowFetcher, iter_sessions, session_factory
from matchcentre.exceptions import CatalogError, StoreUnavailableError
from matchcentre.services import competitions as competition_service
from matchcentre.services import matches as match_service
from matchcentre.services import players as player_service
from matchcentre.services import teams as team_service
from matchcentre.services.filters import (
    COMPETITION_TYPES,
    parse_choice,
    parse_day_filter,
    require_text,
)
from matchcentre.services.team_homepage import load_team_homepage

LOGGER = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_settings() -> CatalogSettings:
    return CatalogSettings.from_env()


def get_session(settings: CatalogSettings = Depends(get_settings)) -> Iterator[Session]:
    yield from iter_sessions(session_factory(settings))


def get_fetcher(session: Session = Depends(get_session)) -> RowFetcher:
    return RowFetcher(session)


def get_clock() -> Clock:
    return SystemClock()


def require_signature(
    x_app_signature: Optional[str] = Header(None),
    x_app_timestamp: Optional[str] = Header(None),
    settings: CatalogSettings = Depends(get_settings),
    clock: Clock = Depends(get_clock),
) -> None:
    now_ms = int(clock.now().timestamp() * 1000)
    verify_signature(settings, x_app_signature, x_app_timestamp, now_ms)


class Page(BaseModel):
    page: int
    limit: int
    data: List[Dict[str, Any]]


class TeamHomepage(BaseModel):
    latest: Optional[Dict[str, Any]] = None
    next: Optional[Dict[str, Any]] = None
    competitions: List[Dict[str, Any]]


class HealthResponse(BaseModel):
    status: str


_settings = get_settings()

app = FastAPI(title="Matchcentre API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(_settings.cors_allow_origins),
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    if isinstance(exc, StoreUnavailableError):
        LOGGER.error("Store failure on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})


api = APIRouter(prefix="/api", dependencies=[Depends(require_signature)])


@app.get("/api/health", response_model=HealthResponse)
def health() -> Dict[str, str]:
    return {"status": "ok"}


# ---------------------------------------------------------------- players


@api.get("/players", response_model=Page)
def list_players(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    team_id: Optional[int] = Query(None, ge=1),
    position: Optional[str] = Query(None),
    fetcher: RowFetcher = Depends(get_fetcher),
) -> Dict[str, Any]:
    return player_service.list_players(
        fetcher,
        parse_pagination(page, limit),
        team_id=team_id,
        position=position,
    )


@api.get("/players/search")
def search_players(
    name: Optional[str] = Query(None),
    fetcher: RowFetcher = Depends(get_fetcher),
) -> List[Dict[str, Any]]:
    return player_service.search_players(fetcher, require_text(name, name="name"))


@api.get("/players/{player_id}")
def get_player(player_id: int, fetcher: RowFetcher = Depends(get_fetcher)) -> Dict[str, Any]:
    return player_service.get_player_profile(fetcher, player_id)


# ----------------------------------------------------------- competitions


@api.get("/competitions", response_model=Page)
def list_competitions(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    type: Optional[str] = Query(None),
    season: Optional[str] = Query(None),
    fetcher: RowFetcher = Depends(get_fetcher),
) -> Dict[str, Any]:
    return competition_service.list_competitions(
        fetcher,
        parse_pagination(page, limit),
        competition_type=parse_choice(type, COMPETITION_TYPES, name="type"),
        season=season,
    )


@api.get("/competitions/{competition_id}")
def get_competition(competition_id: int, fetcher: RowFetcher = Depends(get_fetcher)) -> Dict[str, Any]:
    return competition_service.get_competition(fetcher, competition_id)


@api.get("/competitions/{competition_id}/matches", response_model=Page)
def competition_matches(
    competition_id: int,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    date: Optional[str] = Query(None),
    fetcher: RowFetcher = Depends(get_fetcher),
    clock: Clock = Depends(get_clock),
) -> Dict[str, Any]:
    return competition_service.competition_matches(
        fetcher,
        competition_id,
        clock.now(),
        parse_pagination(page, limit),
        day=parse_day_filter(date),
    )


@api.get("/competitions/{competition_id}/matches/events", response_model=Page)
def competition_matches_events(
    competition_id: int,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    date: Optional[str] = Query(None),
    fetcher: RowFetcher = Depends(get_fetcher),
    clock: Clock = Depends(get_clock),
) -> Dict[str, Any]:
    return competition_service.competition_matches(
        fetcher,
        competition_id,
        clock.now(),
        parse_pagination(page, limit),
        day=parse_day_filter(date),
        with_events=True,
    )


# ---------------------------------------------------------------- matches


@api.get("/matches", response_model=Page)
def list_matches(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    competition_id: Optional[int] = Query(None, ge=1),
    team_id: Optional[int] = Query(None, ge=1),
    date: Optional[str] = Query(None),
    fetcher: RowFetcher = Depends(get_fetcher),
    clock: Clock = Depends(get_clock),
) -> Dict[str, Any]:
    return match_service.list_match_summaries(
        fetcher,
        clock.now(),
        parse_pagination(page, limit),
        competition_id=competition_id,
        team_id=team_id,
        day=parse_day_filter(date),
    )


@api.get("/matches/{match_id}")
def get_match(
    match_id: int,
    fetcher: RowFetcher = Depends(get_fetcher),
    clock: Clock = Depends(get_clock),
) -> Dict[str, Any]:
    return match_service.get_match(fetcher, match_id, clock.now())


@api.get("/matches/{match_id}/events")
def get_match_events(
    match_id: int,
    event_type: Optional[str] = Query(None),
    player_id: Optional[int] = Query(None, ge=1),
    fetcher: RowFetcher = Depends(get_fetcher),
) -> List[Dict[str, Any]]:
    return match_service.get_match_events(
        fetcher,
        match_id,
        event_type=parse_choice(event_type, EVENT_KINDS, name="event_type"),
        player_id=player_id,
    )


@api.get("/matches/{match_id}/details")
def get_match_details(
    match_id: int,
    fetcher: RowFetcher = Depends(get_fetcher),
    clock: Clock = Depends(get_clock),
) -> Dict[str, Any]:
    return match_service.get_match_details(fetcher, match_id, clock.now())


# ------------------------------------------------------------------ teams


@api.get("/teams", response_model=Page)
def list_teams(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    fetcher: RowFetcher = Depends(get_fetcher),
) -> Dict[str, Any]:
    return team_service.list_teams(
        fetcher, parse_pagination(page, limit, default_limit=TEAM_LIST_LIMIT)
    )


@api.get("/teams/{team_id}")
def get_team(team_id: int, fetcher: RowFetcher = Depends(get_fetcher)) -> Dict[str, Any]:
    return team_service.get_team(fetcher, team_id)


@api.get("/teams/{team_id}/players", response_model=Page)
def team_players(
    team_id: int,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    fetcher: RowFetcher = Depends(get_fetcher),
) -> Dict[str, Any]:
    return team_service.team_players(
        fetcher, team_id, parse_pagination(page, limit, default_limit=TEAM_LIST_LIMIT)
    )


@api.get("/teams/{team_id}/matches", response_model=Page)
def team_matches(
    team_id: int,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    date: Optional[str] = Query(None),
    fetcher: RowFetcher = Depends(get_fetcher),
    clock: Clock = Depends(get_clock),
) -> Dict[str, Any]:
    return team_service.team_matches(
        fetcher,
        team_id,
        clock.now(),
        parse_pagination(page, limit),
        day=parse_day_filter(date),
    )


@api.get("/teams/{team_id}/matches/events", response_model=Page)
def team_matches_events(
    team_id: int,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    date: Optional[str] = Query(None),
    fetcher: RowFetcher = Depends(get_fetcher),
    clock: Clock = Depends(get_clock),
) -> Dict[str, Any]:
    return team_service.team_matches(
        fetcher,
        team_id,
        clock.now(),
        parse_pagination(page, limit),
        day=parse_day_filter(date),
        with_events=True,
    )


@api.get("/teams/{team_id}/competitions")
def team_competitions(
    team_id: int,
    season: Optional[str] = Query(None),
    fetcher: RowFetcher = Depends(get_fetcher),
) -> Dict[str, Any]:
    return team_service.team_competitions(fetcher, team_id, season=season)


@api.get("/teams/{team_id}/homepage", response_model=TeamHomepage)
def team_homepage(
    team_id: int,
    fetcher: RowFetcher = Depends(get_fetcher),
    clock: Clock = Depends(get_clock),
) -> Dict[str, Any]:
    return load_team_homepage(fetcher, team_id, clock.now())


app.include_router(api)


@app.get("/")
def index() -> Dict[str, Any]:
    return {
        "name": "Matchcentre API",
        "version": app.version,
        "endpoints": [
            "/api/health",
            "/api/players",
            "/api/players/search",
            "/api/players/{player_id}",
            "/api/competitions",
            "/api/competitions/{competition_id}",
            "/api/competitions/{competition_id}/matches",
            "/api/competitions/{competition_id}/matches/events",
            "/api/matches",
            "/api/matches/{match_id}",
            "/api/matches/{match_id}/events",
            "/api/matches/{match_id}/details",
            "/api/teams",
            "/api/teams/{team_id}",
            "/api/teams/{team_id}/players",
            "/api/teams/{team_id}/matches",
            "/api/teams/{team_id}/matches/events",
            "/api/teams/{team_id}/competitions",
            "/api/teams/{team_id}/homepage",
        ],
    }

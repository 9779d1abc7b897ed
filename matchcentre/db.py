"""
Database session and row-fetching helpers.

Route handlers receive a request-scoped :class:`RowFetcher` that runs fixed,
parameterized SQL through SQLAlchemy Core and returns rows as plain dicts.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from sqlalchemy import bindparam, create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from .config import CatalogSettings
from .exceptions import StoreUnavailableError

LOGGER = logging.getLogger(__name__)

Row = Dict[str, Any]


@lru_cache(maxsize=4)
def get_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Build (once per URL) the SQLAlchemy engine backing the service.
    """
    connect_args: Dict[str, Any] = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    LOGGER.info("Creating engine for %s", database_url.split("@")[-1])
    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


@lru_cache(maxsize=4)
def session_factory(settings: CatalogSettings) -> sessionmaker:
    engine = get_engine(settings.database_url, settings.sql_echo)
    return sessionmaker(bind=engine)


class RowFetcher:
    """
    Execute a parameterized query and hand back rows as dicts.

    Driver failures are re-raised as :class:`StoreUnavailableError`; nothing
    is retried here.
    """

    def __init__(self, session: Session):
        self.session = session

    def fetch_all(
        self,
        sql: str,
        params: Optional[Mapping[str, Any]] = None,
        *,
        expanding: Iterable[str] = (),
    ) -> List[Row]:
        statement = text(sql)
        expanding = tuple(expanding)
        if expanding:
            statement = statement.bindparams(
                *(bindparam(name, expanding=True) for name in expanding)
            )
        try:
            result = self.session.execute(statement, dict(params or {}))
            rows = [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as exc:
            LOGGER.error("Query failed: %s", exc)
            raise StoreUnavailableError("Row store query failed.") from exc
        LOGGER.debug("Fetched %d rows", len(rows))
        return rows

    def fetch_one(
        self,
        sql: str,
        params: Optional[Mapping[str, Any]] = None,
        *,
        expanding: Iterable[str] = (),
    ) -> Optional[Row]:
        rows = self.fetch_all(sql, params, expanding=expanding)
        return rows[0] if rows else None


def iter_sessions(factory: sessionmaker) -> Iterator[Session]:
    """
    Yield one session and always close it afterwards.
    """
    session = factory()
    try:
        yield session
    finally:
        session.close()

"""
Serve the catalog API with uvicorn: ``python -m matchcentre.api``.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List

import uvicorn

from ..config import CatalogSettings

LOGGER = logging.getLogger(__name__)


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the catalog read API.")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes.")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ERROR); defaults to LOG_LEVEL.",
    )
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    level_name = str(args.log_level or CatalogSettings.from_env().log_level).upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    LOGGER.info("Serving catalog API on %s:%s", args.host, args.port)
    uvicorn.run(
        "matchcentre.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=logging.getLevelName(level).lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())

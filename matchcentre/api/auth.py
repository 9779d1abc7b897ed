"""
Request signature gate for the catalog API.

Clients send ``X-App-Timestamp`` (epoch milliseconds) and ``X-App-Signature``,
the hex SHA-256 of ``API_SECRET`` followed by the timestamp.
"""
from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Optional

from ..config import CatalogSettings
from ..exceptions import AuthenticationError

LOGGER = logging.getLogger(__name__)

_OPEN_GATE_WARNED = False


def sign(secret: str, timestamp: str) -> str:
    return hashlib.sha256(f"{secret}{timestamp}".encode("utf-8")).hexdigest()


def verify_signature(
    settings: CatalogSettings,
    signature: Optional[str],
    timestamp: Optional[str],
    now_ms: int,
) -> None:
    """
    Raise :class:`AuthenticationError` unless the request is correctly signed.
    """
    global _OPEN_GATE_WARNED  # noqa: PLW0603 - warn once per process
    if not settings.auth_enabled:
        if not _OPEN_GATE_WARNED:
            LOGGER.warning("API_SECRET is not set; request signatures are not checked.")
            _OPEN_GATE_WARNED = True
        return

    if not signature or not timestamp:
        raise AuthenticationError("Missing creds")
    try:
        sent_ms = int(timestamp)
    except ValueError:
        raise AuthenticationError("Stale") from None
    if abs(now_ms - sent_ms) > settings.auth_window_ms:
        raise AuthenticationError("Stale")

    expected = sign(settings.api_secret or "", timestamp).encode("ascii")
    # compare_digest only accepts ASCII str, and headers are latin-1 decoded
    if not hmac.compare_digest(signature.lower().encode("utf-8"), expected):
        LOGGER.info("Rejected request with a bad signature")
        raise AuthenticationError("Bad sig")

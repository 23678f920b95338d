"""Request-scoped dependencies shared by the app, routes and guards.

Kept apart from api.app so that importing a route or a guard never
triggers app construction.
"""

from __future__ import annotations

from typing import Generator

from fastapi import Request

from peereval.db.repo import DbSession
from peereval.db.session import get_session
from peereval.models.domain import CallerIdentity


def get_db_session() -> Generator[DbSession, None, None]:
    """Dependency to get database session.

    Yields:
        Database session that is automatically closed after request.
    """
    session = get_session()
    try:
        yield session
    finally:
        session.close()


def get_current_caller(request: Request) -> CallerIdentity | None:
    """Dependency returning the caller attached by the auth layer.

    The upstream authentication step stores a CallerIdentity on
    request.state.caller. Returns None when nothing was attached.
    """
    return getattr(request.state, "caller", None)

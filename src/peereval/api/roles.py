"""Role-based route guard.

Usage:
    @router.get("/grades", dependencies=[Depends(authorize_roles("teacher", "admin"))])
"""

import logging
from typing import Iterable

from fastapi import Depends

from peereval.api.deps import get_current_caller
from peereval.core.errors import Forbidden
from peereval.models.domain import CallerIdentity, Role

logger = logging.getLogger(__name__)


class RoleGate:
    """Rejects callers whose role is not in a fixed allow-list.

    A missing caller or missing role counts as non-membership. An empty
    allow-list rejects everyone.
    """

    def __init__(self, allowed_roles: Iterable[Role | str]) -> None:
        self.allowed_roles: frozenset[str] = frozenset(allowed_roles)

    def check(self, role: str | None) -> None:
        """Raise Forbidden unless role is allowed."""
        if role is None or role not in self.allowed_roles:
            logger.info("Rejected role %r (allowed: %s)", role, sorted(self.allowed_roles))
            raise Forbidden(role)

    def __call__(
        self, caller: CallerIdentity | None = Depends(get_current_caller)
    ) -> CallerIdentity | None:
        self.check(caller.role if caller is not None else None)
        return caller


def authorize_roles(*roles: Role | str) -> RoleGate:
    """Build a route dependency that only lets the given roles through."""
    return RoleGate(roles)

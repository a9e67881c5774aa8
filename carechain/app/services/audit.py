"""Access decision audit trail."""
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session

from ..domain.models import AccessLog
from ..infra.db import get_session

logger = logging.getLogger(__name__)


class AccessAuditor:
    """Collects gate decisions until the invocation's outcome is known."""

    def __init__(self) -> None:
        self.pending: List[AccessLog] = []

    def record(
        self,
        actor_id: Optional[str],
        role: Optional[str],
        action: str,
        resource: str,
        allowed: bool,
    ) -> None:
        self.pending.append(
            AccessLog(
                actor_id=actor_id or "anonymous",
                role=role,
                action=action,
                resource=resource,
                allowed=allowed,
            )
        )
        logger.debug("recorded %s on %s for %s (allowed=%s)", action, resource, actor_id, allowed)

    def write_to(self, session: Session) -> None:
        """Add the collected rows to ``session``; they commit with it."""
        session.add_all(self.pending)
        self.pending = []

    def write_separately(self, bind_engine: Optional[Engine] = None) -> None:
        """Commit the collected rows in a transaction of their own.

        Used when the invocation failed and its session is rolled back.
        """
        if not self.pending:
            return
        with get_session(bind_engine) as session:
            self.write_to(session)

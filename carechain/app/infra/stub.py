"""Ledger runtime stub: world-state access plus the caller's certificate attributes."""
from __future__ import annotations

from typing import Mapping, Optional, Protocol

from sqlmodel import Session

from ..domain.models import WorldState, utcnow


class ChaincodeStub(Protocol):
    def get_state(self, key: str) -> Optional[bytes]:
        """Return the stored bytes, or ``None`` when nothing is stored."""

    def put_state(self, key: str, value: bytes) -> None:
        ...

    def read_cert_attribute(self, name: str) -> bytes:
        """Return the attribute value; raise ``KeyError`` when the credential lacks it."""


class LedgerStub:
    """Stub backed by a SQLModel session and an already verified credential."""

    def __init__(self, session: Session, attributes: Optional[Mapping[str, bytes]] = None) -> None:
        self.session = session
        self.attributes = dict(attributes or {})

    def get_state(self, key: str) -> Optional[bytes]:
        row = self.session.get(WorldState, key)
        return row.value if row else None

    def put_state(self, key: str, value: bytes) -> None:
        row = self.session.get(WorldState, key)
        if row:
            row.value = value
            row.updated_at = utcnow()
        else:
            row = WorldState(key=key, value=value)
        self.session.add(row)
        self.session.flush()

    def read_cert_attribute(self, name: str) -> bytes:
        return self.attributes[name]

"""Registry of the issuers whose credentials the ledger accepts."""
from __future__ import annotations

import logging
from typing import List, Optional

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey
from sqlmodel import Session, select

from ..domain.errors import CredentialError, IssuerConflictError
from ..domain.models import IssuerKey

logger = logging.getLogger(__name__)


class KeyRegistry:
    def __init__(self, session: Session) -> None:
        self.session = session

    def register(self, issuer_id: str, public_key_hex: str) -> IssuerKey:
        """Trust ``public_key_hex`` for ``issuer_id``.

        An issuer keeps the first key it registers: repeating the same key is a
        no-op, a different key raises ``IssuerConflictError``.
        """
        public_key_hex = public_key_hex.lower()
        try:
            Ed25519PublicKey.from_public_bytes(bytes.fromhex(public_key_hex))
        except ValueError as exc:
            raise CredentialError(f"Issuer {issuer_id} key is not an Ed25519 public key") from exc

        existing = self.session.get(IssuerKey, issuer_id)
        if existing:
            if existing.public_key_hex != public_key_hex:
                logger.warning("refused to replace the key of issuer %s", issuer_id)
                raise IssuerConflictError(issuer_id)
            return existing

        key = IssuerKey(issuer_id=issuer_id, public_key_hex=public_key_hex)
        self.session.add(key)
        self.session.flush()
        self.session.refresh(key)
        logger.info("registered issuer %s", issuer_id)
        return key

    def get(self, issuer_id: str) -> Optional[IssuerKey]:
        return self.session.get(IssuerKey, issuer_id)

    def list(self) -> List[IssuerKey]:
        stmt = select(IssuerKey).order_by(IssuerKey.issuer_id)
        return list(self.session.exec(stmt).all())

"""Verify caller credentials against registered issuer keys."""
from __future__ import annotations

import base64
import binascii
import logging
from typing import Dict

from cryptography.exceptions import InvalidSignature

from ..domain.credential import credential_message
from ..domain.errors import CredentialError
from ..domain.schemas import Credential
from ..domain.sign import verify_signature
from .keys import KeyRegistry

logger = logging.getLogger(__name__)


class CredentialVerifier:
    def __init__(self, registry: KeyRegistry) -> None:
        self.registry = registry

    def verify(self, credential: Credential) -> Dict[str, bytes]:
        """Return the credential's attributes as the stub serves them."""
        key = self.registry.get(credential.issuer_id)
        if not key:
            raise CredentialError(f"Issuer {credential.issuer_id} is not registered")

        try:
            signature = base64.b64decode(credential.signature, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise CredentialError("Invalid signature encoding") from exc

        message = credential_message(credential.issuer_id, credential.attributes)
        try:
            verify_signature(bytes.fromhex(key.public_key_hex), message, signature)
        except (InvalidSignature, ValueError) as exc:
            logger.warning("credential from issuer %s failed verification", credential.issuer_id)
            raise CredentialError("Credential signature verification failed") from exc

        return {name: value.encode("utf-8") for name, value in credential.attributes.items()}

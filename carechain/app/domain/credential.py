"""Credential envelope carried in the ``X-Credential`` header.

The header value is base64 of the credential JSON. The signature covers the
canonical JSON of the issuer id and the attribute map, so reordering keys on
the wire does not invalidate it.
"""
from __future__ import annotations

import base64
import binascii
from typing import Dict, Mapping

from pydantic import ValidationError

from .errors import CredentialError
from .schemas import Credential
from .sign import canonical_bytes, sign_message


def credential_message(issuer_id: str, attributes: Mapping[str, str]) -> bytes:
    return canonical_bytes({"issuer_id": issuer_id, "attributes": dict(attributes)})


def issue_credential(private_bytes: bytes, issuer_id: str, attributes: Dict[str, str]) -> Credential:
    signature = sign_message(private_bytes, credential_message(issuer_id, attributes))
    return Credential(
        issuer_id=issuer_id,
        attributes=attributes,
        signature=base64.b64encode(signature).decode(),
    )


def encode_credential_header(credential: Credential) -> str:
    return base64.b64encode(credential.model_dump_json().encode("utf-8")).decode()


def decode_credential_header(header_value: str) -> Credential:
    try:
        raw = base64.b64decode(header_value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise CredentialError("Invalid credential encoding") from exc
    try:
        return Credential.model_validate_json(raw)
    except ValidationError as exc:
        raise CredentialError("Malformed credential") from exc

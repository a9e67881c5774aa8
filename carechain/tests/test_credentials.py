import base64

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey
from sqlmodel import Session

from carechain.app.domain.credential import (
    decode_credential_header,
    encode_credential_header,
    issue_credential,
)
from carechain.app.domain.errors import CredentialError, IssuerConflictError
from carechain.app.domain.sign import generate_keypair, sign_message
from carechain.app.services.credentials import CredentialVerifier
from carechain.app.services.keys import KeyRegistry


def test_ed25519_sign_and_verify():
    private_bytes, public_bytes = generate_keypair()
    message = b"share t1 with doc1"
    signature = sign_message(private_bytes, message)

    # Should not raise when verifying
    Ed25519PublicKey.from_public_bytes(public_bytes).verify(signature, message)


def test_verified_credential_yields_attribute_bytes(engine):
    private, public = generate_keypair()
    with Session(engine) as session:
        registry = KeyRegistry(session)
        registry.register("ca-1", public.hex())
        credential = issue_credential(private, "ca-1", {"username": "doc1", "role": "Doctor"})

        attributes = CredentialVerifier(registry).verify(credential)

    assert attributes == {"username": b"doc1", "role": b"Doctor"}


def test_tampered_attributes_are_rejected(engine):
    private, public = generate_keypair()
    with Session(engine) as session:
        registry = KeyRegistry(session)
        registry.register("ca-1", public.hex())
        credential = issue_credential(private, "ca-1", {"username": "doc1", "role": "Doctor"})
        forged = credential.model_copy(update={"attributes": {"username": "doc1", "role": "Patient"}})

        with pytest.raises(CredentialError):
            CredentialVerifier(registry).verify(forged)


def test_unregistered_issuer_is_rejected(engine):
    private, _ = generate_keypair()
    with Session(engine) as session:
        credential = issue_credential(private, "ca-unknown", {"username": "doc1"})

        with pytest.raises(CredentialError) as excinfo:
            CredentialVerifier(KeyRegistry(session)).verify(credential)
    assert "ca-unknown" in str(excinfo.value)


def test_signature_from_other_issuer_key_is_rejected(engine):
    private, _ = generate_keypair()
    _, other_public = generate_keypair()
    with Session(engine) as session:
        registry = KeyRegistry(session)
        registry.register("ca-1", other_public.hex())

        with pytest.raises(CredentialError):
            CredentialVerifier(registry).verify(issue_credential(private, "ca-1", {"username": "doc1"}))


def test_header_encoding(engine):
    private, _ = generate_keypair()
    credential = issue_credential(private, "ca-1", {"username": "doc1"})

    assert decode_credential_header(encode_credential_header(credential)) == credential
    with pytest.raises(CredentialError):
        decode_credential_header("%%% not base64 %%%")
    with pytest.raises(CredentialError):
        decode_credential_header(base64.b64encode(b'{"issuer_id": "ca-1"}').decode())


def test_key_registry_keeps_first_key(engine):
    _, first = generate_keypair()
    _, second = generate_keypair()
    with Session(engine) as session:
        registry = KeyRegistry(session)
        registry.register("ca-1", first.hex())
        registry.register("ca-1", first.hex().upper())

        with pytest.raises(IssuerConflictError):
            registry.register("ca-1", second.hex())
        assert [key.public_key_hex for key in registry.list()] == [first.hex()]


def test_key_registry_rejects_non_key_bytes(engine):
    with Session(engine) as session:
        with pytest.raises(CredentialError):
            KeyRegistry(session).register("ca-1", "zz" * 32)
        assert KeyRegistry(session).get("ca-1") is None

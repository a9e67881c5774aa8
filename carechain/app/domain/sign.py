"""Ed25519 signing helpers for caller credentials."""
import json
from typing import Any, Mapping, Tuple

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey, Ed25519PublicKey
from cryptography.hazmat.primitives.serialization import Encoding, PrivateFormat, PublicFormat, NoEncryption


def canonical_bytes(data: Mapping[str, Any]) -> bytes:
    """Serialize data with deterministic ordering for signing."""
    return json.dumps(data, sort_keys=True, separators=(",", ":")).encode("utf-8")


def generate_keypair() -> Tuple[bytes, bytes]:
    private_key = Ed25519PrivateKey.generate()
    public_key = private_key.public_key()
    return (
        private_key.private_bytes(Encoding.Raw, PrivateFormat.Raw, NoEncryption()),
        public_key.public_bytes(Encoding.Raw, PublicFormat.Raw),
    )


def sign_message(private_bytes: bytes, message: bytes) -> bytes:
    private_key = Ed25519PrivateKey.from_private_bytes(private_bytes)
    return private_key.sign(message)


def verify_signature(public_bytes: bytes, message: bytes, signature: bytes) -> None:
    """Raise ``cryptography.exceptions.InvalidSignature`` when the signature does not match."""
    Ed25519PublicKey.from_public_bytes(public_bytes).verify(signature, message)

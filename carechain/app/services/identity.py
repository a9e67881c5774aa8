"""Resolve verified caller attributes from the runtime stub."""
from __future__ import annotations

from typing import Optional

from ..domain.errors import IdentityError
from ..infra.stub import ChaincodeStub


class IdentityResolver:
    """Reads one certificate attribute per call; nothing is cached."""

    def __init__(self, stub: ChaincodeStub) -> None:
        self.stub = stub

    def lookup(self, attribute_name: str) -> Optional[str]:
        """Return the attribute value, or ``None`` when the credential does not carry it."""
        if not attribute_name:
            raise ValueError("attribute name must be a non-empty string")
        try:
            raw = self.stub.read_cert_attribute(attribute_name)
        except KeyError:
            return None
        except Exception as exc:
            raise IdentityError(attribute_name, str(exc) or type(exc).__name__) from exc
        if not raw:
            return None
        try:
            return raw.decode("utf-8")
        except (AttributeError, UnicodeDecodeError) as exc:
            raise IdentityError(attribute_name, "attribute value is not UTF-8 text") from exc

    def resolve(self, attribute_name: str) -> str:
        value = self.lookup(attribute_name)
        if value is None:
            raise IdentityError(attribute_name, "attribute not present in caller credential")
        return value

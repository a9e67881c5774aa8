"""Error taxonomy for chaincode invocations.

Every error is terminal for the invocation that raised it. ``status_code`` is
only consulted by the HTTP layer when rendering the error.
"""
from __future__ import annotations

from typing import Optional


class ChaincodeError(Exception):
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ArgumentCountError(ChaincodeError):
    status_code = 400

    def __init__(self, expected: int, received: int, hint: str = "") -> None:
        message = f"Incorrect number of arguments. Expecting {expected}"
        if hint:
            message = f"{message}. {hint}"
        super().__init__(message)
        self.expected = expected
        self.received = received


class IdentityError(ChaincodeError):
    status_code = 401

    def __init__(self, attribute_name: str, cause: str) -> None:
        super().__init__(f"Couldn't get attribute {attribute_name}. Error: {cause}")
        self.attribute_name = attribute_name
        self.cause = cause


class CredentialError(ChaincodeError):
    status_code = 401


class AuthorizationError(ChaincodeError):
    status_code = 403

    def __init__(
        self,
        message: str,
        identity: Optional[str] = None,
        role: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.identity = identity
        self.role = role


class AccessDeniedError(ChaincodeError):
    status_code = 403

    def __init__(self, key: str) -> None:
        super().__init__(f"You dont have access to any EMR of Patient {key}")
        self.key = key


class StoreError(ChaincodeError):
    status_code = 502

    def __init__(self, key: str, cause: str) -> None:
        super().__init__(f"Failed to get state for {key}: {cause}")
        self.key = key
        self.cause = cause


class NotFoundError(StoreError):
    status_code = 404

    def __init__(self, key: str) -> None:
        super().__init__(key, "no value stored under this key")


class CorruptStateError(ChaincodeError):
    status_code = 422

    def __init__(self, key: str, cause: str) -> None:
        super().__init__(f"Failed to convert value of {key} to an access record list: {cause}")
        self.key = key
        self.cause = cause


class UnknownOperationError(ChaincodeError):
    status_code = 400

    def __init__(self, function: str, entry_point: str = "invocation") -> None:
        super().__init__(f"Received unknown function {entry_point}: {function}")
        self.function = function


class IssuerConflictError(ChaincodeError):
    status_code = 409

    def __init__(self, issuer_id: str) -> None:
        super().__init__(f"Issuer {issuer_id} is already registered with a different key")
        self.issuer_id = issuer_id

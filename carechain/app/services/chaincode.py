"""Patient/doctor chaincode: dispatches named operations onto the access gate."""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..config import Settings
from ..domain.errors import ArgumentCountError, UnknownOperationError
from ..domain.policy import build_write_policy
from ..infra.stub import ChaincodeStub
from .audit import AccessAuditor
from .gate import AccessGate
from .state import StateAccessor

logger = logging.getLogger(__name__)


def _require_args(args: Sequence[str], expected: int, hint: str = "") -> None:
    if len(args) != expected:
        raise ArgumentCountError(expected, len(args), hint)


class PatientDoctorChaincode:
    """Stateless handler; the stub carries the world state and the caller's credential."""

    def __init__(self, gate: AccessGate) -> None:
        self.gate = gate

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        auditor: Optional[AccessAuditor] = None,
    ) -> "PatientDoctorChaincode":
        gate = AccessGate(build_write_policy(settings), settings.system_key, auditor=auditor)
        return cls(gate)

    @property
    def system_key(self) -> str:
        return self.gate.system_key

    def init(self, stub: ChaincodeStub, args: Sequence[str]) -> None:
        _require_args(args, 1)
        StateAccessor(stub).put(self.system_key, args[0].encode("utf-8"))

    def invoke(self, stub: ChaincodeStub, function: str, args: Sequence[str]) -> Optional[bytes]:
        logger.debug("invoke is running %s", function)
        if function == "init":
            # also used as a reset
            self.init(stub, args)
            return None
        if function == "write":
            self.write(stub, args)
            return None
        logger.info("invoke did not find func: %s", function)
        raise UnknownOperationError(function, "invocation")

    def query(self, stub: ChaincodeStub, function: str, args: Sequence[str]) -> bytes:
        logger.debug("query is running %s", function)
        if function == "read":
            return self.read(stub, args)
        logger.info("query did not find func: %s", function)
        raise UnknownOperationError(function, "query")

    def write(self, stub: ChaincodeStub, args: Sequence[str]) -> None:
        _require_args(args, 2, "name of the key and value to set")
        key, value = args
        self.gate.authorize_write(stub, key, value.encode("utf-8"))

    def read(self, stub: ChaincodeStub, args: Sequence[str]) -> bytes:
        _require_args(args, 1, "patientID")
        return self.gate.authorized_read(stub, args[0])

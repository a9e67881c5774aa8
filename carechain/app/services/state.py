"""World-state access and the grant-list codec."""
from __future__ import annotations

from typing import List

from pydantic import TypeAdapter, ValidationError

from ..domain.errors import CorruptStateError, NotFoundError, StoreError
from ..domain.models import AccessGrant, PatientRecord
from ..infra.stub import ChaincodeStub

_grant_list = TypeAdapter(List[AccessGrant])


class StateAccessor:
    def __init__(self, stub: ChaincodeStub) -> None:
        self.stub = stub

    def get(self, key: str) -> bytes:
        try:
            value = self.stub.get_state(key)
        except Exception as exc:
            raise StoreError(key, str(exc) or type(exc).__name__) from exc
        if value is None:
            raise NotFoundError(key)
        return value

    def put(self, key: str, value: bytes) -> None:
        try:
            self.stub.put_state(key, value)
        except Exception as exc:
            raise StoreError(key, str(exc) or type(exc).__name__) from exc

    @staticmethod
    def decode(key: str, raw: bytes) -> PatientRecord:
        try:
            grants = _grant_list.validate_json(raw)
        except ValidationError as exc:
            raise CorruptStateError(key, f"{exc.error_count()} validation error(s)") from exc
        return PatientRecord(patient_id=key, access_grants=grants)

    @staticmethod
    def encode(record: PatientRecord) -> bytes:
        return _grant_list.dump_json(record.access_grants, by_alias=True)

import json

import pytest

from carechain.app.domain.errors import CorruptStateError, NotFoundError, StoreError
from carechain.app.domain.models import AccessGrant, PatientRecord
from carechain.app.services.state import StateAccessor


class FailingStub:
    def get_state(self, key):
        raise RuntimeError("peer unreachable")

    def put_state(self, key, value):
        raise RuntimeError("peer unreachable")


GRANT = {"doctorId": "doc1", "testId": "t1", "startDate": "2020-01-01", "endDate": "2020-02-01"}


def test_decode_builds_patient_record():
    record = StateAccessor.decode("patient42", json.dumps([GRANT]).encode())

    assert record.patient_id == "patient42"
    assert record.access_grants == [
        AccessGrant(doctorId="doc1", testId="t1", startDate="2020-01-01", endDate="2020-02-01")
    ]


def test_encode_uses_wire_field_names():
    record = PatientRecord(
        patient_id="patient42",
        access_grants=[AccessGrant(doctorId="doc1", testId="t1", startDate="2020-01-01", endDate="2020-02-01")],
    )

    assert json.loads(StateAccessor.encode(record)) == [GRANT]


def test_round_trip_keeps_order_and_empty_list():
    record = PatientRecord(
        patient_id="p",
        access_grants=[
            AccessGrant(doctorId="doc2", testId="t9"),
            AccessGrant(doctorId="doc1", testId="t1", startDate="a", endDate="b"),
        ],
    )
    empty = PatientRecord(patient_id="p")

    assert StateAccessor.decode("p", StateAccessor.encode(record)) == record
    assert StateAccessor.decode("p", StateAccessor.encode(empty)) == empty
    assert StateAccessor.encode(empty) == b"[]"


@pytest.mark.parametrize(
    "raw",
    [
        b'[{"doctorId": "doc1", "testId": "t1"',
        b"null",
        b'{"doctorId": "doc1", "testId": "t1"}',
        b'[{"testId": "t1"}]',
        b'[{"doctorId": 7, "testId": "t1"}]',
        b'[{"doctorId": "", "testId": "t1"}]',
        b'[{"doctor_id": "doc1", "test_id": "t1"}]',
        b'[{"doctorId": "doc1", "testId": "t1", "ssn": "123-45-6789"}]',
        b"",
    ],
)
def test_decode_rejects_malformed_values(raw):
    with pytest.raises(CorruptStateError) as excinfo:
        StateAccessor.decode("patient42", raw)
    assert "patient42" in str(excinfo.value)


def test_get_missing_key_raises_not_found(make_stub):
    with pytest.raises(NotFoundError):
        StateAccessor(make_stub()).get("nobody")


def test_store_failures_carry_underlying_message():
    accessor = StateAccessor(FailingStub())

    with pytest.raises(StoreError) as excinfo:
        accessor.get("patient42")
    assert "peer unreachable" in str(excinfo.value)
    with pytest.raises(StoreError):
        accessor.put("patient42", b"[]")


def test_put_and_get_delegate_to_stub(make_stub):
    stub = make_stub()
    accessor = StateAccessor(stub)
    accessor.put("patient42", b"[]")

    assert accessor.get("patient42") == b"[]"
    assert stub.puts == [("patient42", b"[]")]

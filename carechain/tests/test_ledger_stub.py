from datetime import timezone

import pytest
from sqlmodel import Session, select

from carechain.app.config import Settings
from carechain.app.domain.errors import AuthorizationError
from carechain.app.domain.models import AccessLog, WorldState, utcnow
from carechain.app.infra.db import get_session
from carechain.app.infra.stub import LedgerStub
from carechain.app.services.audit import AccessAuditor
from carechain.app.services.chaincode import PatientDoctorChaincode


def test_put_then_get_round_trips_bytes(engine):
    with Session(engine) as session:
        stub = LedgerStub(session)
        assert stub.get_state("patient42") is None

        stub.put_state("patient42", b"[]")
        stub.put_state("patient42", b'[{"doctorId":"d","testId":"t"}]')
        session.commit()

    with Session(engine) as session:
        row = session.get(WorldState, "patient42")
        assert row.value == b'[{"doctorId":"d","testId":"t"}]'


def test_cert_attributes_come_from_verified_credential(engine):
    with Session(engine) as session:
        stub = LedgerStub(session, {"username": b"doc1"})
        assert stub.read_cert_attribute("username") == b"doc1"
        with pytest.raises(KeyError):
            stub.read_cert_attribute("role")


def test_failed_invocation_rolls_back_but_keeps_audit(engine):
    chaincode = PatientDoctorChaincode.from_settings(Settings())
    auditor = AccessAuditor()
    chaincode.gate.auditor = auditor

    with pytest.raises(AuthorizationError):
        with get_session(engine) as session:
            chaincode.invoke(LedgerStub(session, {"role": b"Doctor"}), "write", ["patient42", "[]"])
    auditor.write_separately(engine)

    with Session(engine) as session:
        assert session.get(WorldState, "patient42") is None
        logs = session.exec(select(AccessLog)).all()
        assert [(log.action, log.resource, log.allowed) for log in logs] == [("write", "patient42", False)]


def test_successful_write_commits_state_and_audit_together(engine):
    auditor = AccessAuditor()
    chaincode = PatientDoctorChaincode.from_settings(Settings(), auditor=auditor)

    with get_session(engine) as session:
        chaincode.invoke(LedgerStub(session, {"username": b"p42", "role": b"Patient"}), "write", ["patient42", "[]"])
        auditor.write_to(session)

    with Session(engine) as session:
        assert session.get(WorldState, "patient42").value == b"[]"
        log = session.exec(select(AccessLog)).one()
        assert (log.actor_id, log.role, log.allowed) == ("p42", "Patient", True)


def test_timestamps_are_timezone_aware():
    stamp = utcnow()

    assert stamp.tzinfo is timezone.utc
    assert WorldState(key="patient42", value=b"[]").updated_at.tzinfo is timezone.utc
    log = AccessLog(actor_id="doc1", action="read", resource="patient42", allowed=True)
    assert log.created_at.tzinfo is timezone.utc

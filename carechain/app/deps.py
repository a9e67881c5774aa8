"""Dependency injection utilities."""
import hmac
from collections.abc import Generator
from typing import Dict, Optional

from fastapi import Depends, Header
from sqlmodel import Session

from .config import Settings, get_settings
from .domain.credential import decode_credential_header
from .domain.errors import AuthorizationError
from .infra.db import get_session
from .infra.stub import LedgerStub
from .services.audit import AccessAuditor
from .services.chaincode import PatientDoctorChaincode
from .services.credentials import CredentialVerifier
from .services.keys import KeyRegistry


def db_session() -> Generator[Session, None, None]:
    """Provide a scoped DB session to FastAPI endpoints."""
    with get_session() as session:
        yield session


def access_auditor(session: Session = Depends(db_session)) -> Generator[AccessAuditor, None, None]:
    """Audit rows commit with the invocation, or on their own when it fails."""
    auditor = AccessAuditor()
    try:
        yield auditor
    except Exception:
        auditor.write_separately(session.get_bind())
        raise
    auditor.write_to(session)


def settings() -> Settings:
    return get_settings()


def require_admin(
    x_admin_token: Optional[str] = Header(None),
    current: Settings = Depends(settings),
) -> None:
    """Guard for routes that change which issuers are trusted."""
    expected = current.admin_token
    if not expected or not x_admin_token:
        raise AuthorizationError("Issuer registration requires a valid admin token")
    if not hmac.compare_digest(x_admin_token.encode(), expected.encode()):
        raise AuthorizationError("Issuer registration requires a valid admin token")


def chaincode(
    auditor: AccessAuditor = Depends(access_auditor),
    current: Settings = Depends(settings),
) -> PatientDoctorChaincode:
    return PatientDoctorChaincode.from_settings(current, auditor=auditor)


def caller_attributes(
    x_credential: Optional[str] = Header(None),
    session: Session = Depends(db_session),
) -> Dict[str, bytes]:
    """Verified attributes of the caller; empty for anonymous requests."""
    if not x_credential:
        return {}
    credential = decode_credential_header(x_credential)
    return CredentialVerifier(KeyRegistry(session)).verify(credential)


def ledger_stub(
    session: Session = Depends(db_session),
    attributes: Dict[str, bytes] = Depends(caller_attributes),
) -> LedgerStub:
    return LedgerStub(session, attributes)

"""Domain models shared between the chaincode core and persistence layers."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import DateTime, LargeBinary
from sqlmodel import Column, Field as SQLField, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AccessGrant(BaseModel):
    """A patient's permission for one doctor to view one test result."""

    # Only the wire names are accepted; unknown fields are rejected.
    model_config = ConfigDict(frozen=True, extra="forbid")

    doctor_id: str = Field(alias="doctorId", min_length=1)
    test_id: str = Field(alias="testId", min_length=1)
    # Opaque calendar tokens, never parsed or range-checked.
    start_date: str = Field(default="", alias="startDate")
    end_date: str = Field(default="", alias="endDate")


class PatientRecord(BaseModel):
    """All grants of one patient, stored under the patient's id."""

    model_config = ConfigDict(frozen=True)

    patient_id: str
    access_grants: List[AccessGrant] = Field(default_factory=list)


class WorldState(SQLModel, table=True):
    """Raw key/value pair of the ledger world state."""

    __tablename__ = "world_state"

    key: str = SQLField(primary_key=True, index=True)
    value: bytes = SQLField(sa_column=Column(LargeBinary, nullable=False))
    updated_at: datetime = SQLField(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class AccessLog(SQLModel, table=True):
    __tablename__ = "access_logs"

    id: str = SQLField(default_factory=lambda: str(uuid4()), primary_key=True, index=True)
    actor_id: str = SQLField(index=True)
    role: Optional[str] = SQLField(default=None)
    action: str
    resource: str
    allowed: bool = SQLField(default=True)
    created_at: datetime = SQLField(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
    )


class AccessLogRead(BaseModel):
    id: str
    actor_id: str
    role: Optional[str]
    action: str
    resource: str
    allowed: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class IssuerKey(SQLModel, table=True):
    """Registered Ed25519 public keys of credential issuers."""

    __tablename__ = "issuer_keys"

    issuer_id: str = SQLField(primary_key=True)
    public_key_hex: str
    created_at: datetime = SQLField(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class IssuerKeyRead(BaseModel):
    issuer_id: str
    public_key_hex: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

"""API I/O schemas."""
from typing import Dict, List

from pydantic import BaseModel, Field

from .models import IssuerKeyRead


class ChaincodeRequest(BaseModel):
    function: str = Field(..., min_length=1)
    args: List[str] = Field(default_factory=list)


class IssuerKeyIn(BaseModel):
    issuer_id: str = Field(..., min_length=1)
    public_key_hex: str = Field(..., pattern="^[0-9a-fA-F]{64}$")


class IssuerKeyOut(IssuerKeyRead):
    pass


class Credential(BaseModel):
    """Caller attributes vouched for by a registered issuer."""

    issuer_id: str
    attributes: Dict[str, str] = Field(default_factory=dict)
    signature: str

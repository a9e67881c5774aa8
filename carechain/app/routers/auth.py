"""Credential issuer key management routes."""
from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from ..deps import db_session, require_admin
from ..domain.schemas import IssuerKeyIn, IssuerKeyOut
from ..services.keys import KeyRegistry

router = APIRouter()


@router.post("/issuers", response_model=IssuerKeyOut, dependencies=[Depends(require_admin)])
def register_issuer(payload: IssuerKeyIn, session: Session = Depends(db_session)):
    return KeyRegistry(session).register(payload.issuer_id, payload.public_key_hex)


@router.get("/issuers/{issuer_id}", response_model=IssuerKeyOut)
def get_issuer(issuer_id: str, session: Session = Depends(db_session)):
    key = KeyRegistry(session).get(issuer_id)
    if not key:
        raise HTTPException(status_code=404, detail="Issuer not found")
    return key


@router.get("/issuers", response_model=list[IssuerKeyOut])
def list_issuers(session: Session = Depends(db_session)):
    return KeyRegistry(session).list()

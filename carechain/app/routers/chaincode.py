"""Chaincode invocation routes."""
from fastapi import APIRouter, Depends, Response

from ..deps import chaincode, ledger_stub
from ..domain.schemas import ChaincodeRequest
from ..infra.stub import LedgerStub
from ..services.chaincode import PatientDoctorChaincode

router = APIRouter()

MEDIA_TYPE = "application/octet-stream"


@router.post("/invoke", response_class=Response)
def invoke(
    request: ChaincodeRequest,
    stub: LedgerStub = Depends(ledger_stub),
    handler: PatientDoctorChaincode = Depends(chaincode),
) -> Response:
    payload = handler.invoke(stub, request.function, request.args)
    return Response(content=payload or b"", media_type=MEDIA_TYPE)


@router.post("/query", response_class=Response)
def query(
    request: ChaincodeRequest,
    stub: LedgerStub = Depends(ledger_stub),
    handler: PatientDoctorChaincode = Depends(chaincode),
) -> Response:
    payload = handler.query(stub, request.function, request.args)
    return Response(content=payload, media_type=MEDIA_TYPE)

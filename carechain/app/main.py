"""FastAPI application bootstrap for carechain."""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import get_settings
from .domain.errors import ChaincodeError
from .infra.db import init_db
from .routers import audit, auth, chaincode

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("carechain")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


async def chaincode_error_handler(request: Request, exc: ChaincodeError) -> JSONResponse:
    logger.info("%s %s failed: %s", request.method, request.url.path, type(exc).__name__)
    return JSONResponse(
        status_code=exc.status_code,
        content={"Error": exc.message, "kind": type(exc).__name__},
    )


def create_app() -> FastAPI:
    app = FastAPI(title="carechain API", version="0.1.0", lifespan=lifespan)

    app.include_router(chaincode.router, prefix="/chaincode", tags=["chaincode"])
    app.include_router(auth.router, prefix="/auth", tags=["auth"])
    app.include_router(audit.router, prefix="/audit", tags=["audit"])
    app.add_exception_handler(ChaincodeError, chaincode_error_handler)

    return app


app = create_app()

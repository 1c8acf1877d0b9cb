import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Mount

from formdraft.config import get_settings
from formdraft.exceptions import InputTooLargeError, InvalidFormError
from formdraft.mcp_server import mcp
from formdraft.models.common import ErrorResponse, StatusResponse
from formdraft.routers.forms import router as forms_router

VERSION = "0.1.0"


# --- Localhost-only middleware ---

class LocalhostOnlyMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        client_host = request.client.host if request.client else None
        if client_host not in ("127.0.0.1", "::1", "localhost"):
            return JSONResponse(
                status_code=403,
                content={"error_code": "forbidden", "message": "Localhost access only"},
            )
        return await call_next(request)


# --- FastAPI app ---

api = FastAPI(title="Formdraft", version=VERSION)
api.include_router(forms_router)


@api.get("/api/status")
def api_status() -> StatusResponse:
    settings = get_settings()
    return StatusResponse(
        service="formdraft",
        version=VERSION,
        id_strategy=settings.id_strategy,
        max_input_chars=settings.max_input_chars,
    )


# --- Exception handlers ---

@api.exception_handler(InputTooLargeError)
async def input_too_large_handler(request: Request, exc: InputTooLargeError):
    return JSONResponse(status_code=413, content=ErrorResponse(error_code="input_too_large", message=str(exc)).model_dump())


@api.exception_handler(InvalidFormError)
async def invalid_form_handler(request: Request, exc: InvalidFormError):
    return JSONResponse(status_code=422, content=ErrorResponse(error_code="invalid_form", message=str(exc)).model_dump())


# --- Starlette root app ---

mcp_app = mcp.http_app(path="/", stateless_http=True)

app = Starlette(
    middleware=[Middleware(LocalhostOnlyMiddleware)],
    routes=[
        Mount("/mcp", app=mcp_app),
        Mount("/", app=api),
    ],
)


def run():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "formdraft.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()

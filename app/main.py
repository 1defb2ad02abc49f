from __future__ import annotations

from contextlib import asynccontextmanager

from bcrypt import checkpw, hashpw, gensalt
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.constants import MSG_INTERNAL
from app.core.database import engine
from app.api.controllers import (
    cron_controller,
    pending_application_controller,
    signup_controller,
)
from app.domain import init as models  # noqa: F401

import logging
import sys

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

logging.getLogger("httpx").propagate = False
logging.getLogger("httpcore").propagate = False

logger = logging.getLogger("portal.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        checkpw(b"warmup", hashpw(b"warmup", gensalt(rounds=settings.bcrypt_rounds)))
    except ValueError as exc:
        logger.warning(f"bcrypt warmup failed: {exc}")

    yield

    await engine.dispose()


app = FastAPI(
    title="Portal API",
    version="1.0",
    debug=False,
    lifespan=lifespan,
)

ALLOWED_ORIGINS = [origin.strip() for origin in settings.allowed_origins.split(",") if origin.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "Accept"],
)


@app.exception_handler(StarletteHTTPException)
async def http_ex_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_ex_handler(request: Request, exc: RequestValidationError):
    messages = []

    for e in exc.errors():
        if isinstance(e, dict):
            msg = e.get("msg")
            loc = e.get("loc") or ()
            field = loc[-1] if loc else None
            if msg:
                messages.append(f"{field}: {msg}" if field and field != "body" else str(msg))

    if not messages:
        detail = "Invalid request body"
    else:
        detail = " | ".join(messages)

    return JSONResponse(status_code=400, content={"detail": detail})


@app.exception_handler(Exception)
async def unhandled_ex_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc!r}")
    return JSONResponse(status_code=500, content={"detail": MSG_INTERNAL})


app.include_router(signup_controller.router)
app.include_router(cron_controller.router)
app.include_router(pending_application_controller.router)


@app.get("/health")
def health() -> dict[str, bool]:
    return {"ok": True}

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .configuration import load_settings
from .content_store import ContentStore
from .database import ContentDatabase
from .errors import ContentValidationError, StoreUnavailable
from .validation import validate_component_data

settings = load_settings()

logging.basicConfig(
    level=str(settings.logging.level).upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

SERVICE_NAME = str(settings.service.name)
SERVICE_VERSION = str(settings.service.version)

app = FastAPI(title=SERVICE_NAME, version=SERVICE_VERSION)

allowed_origins = ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

content_store = ContentStore(ContentDatabase(Path(str(settings.database.path))))


def get_content_store() -> ContentStore:
    return content_store


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content={
                "error": "Route not found",
                "message": f"The route {request.method} {request.url.path} does not exist",
                "timestamp": _timestamp(),
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": str(exc.detail),
            "timestamp": _timestamp(),
            "path": request.url.path,
            "method": request.method,
        },
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={
            "error": str(exc) or "Something went wrong!",
            "timestamp": _timestamp(),
            "path": request.url.path,
            "method": request.method,
        },
    )


@app.get("/api/health")
def healthcheck(store: ContentStore = Depends(get_content_store)) -> JSONResponse:
    try:
        store.ping()
    except StoreUnavailable as exc:
        return JSONResponse(
            status_code=500,
            content={
                "status": "Error",
                "timestamp": _timestamp(),
                "database": "Disconnected",
                "error": str(exc),
            },
        )
    return JSONResponse(
        content={
            "status": "OK",
            "timestamp": _timestamp(),
            "database": "Connected",
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
        }
    )


@app.get("/api/components")
def get_components(store: ContentStore = Depends(get_content_store)) -> JSONResponse:
    try:
        document = store.fetch()
    except StoreUnavailable as exc:
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch component data", "message": str(exc)},
        )
    return JSONResponse(content=document.to_wire())


@app.post("/api/components")
async def save_components(request: Request, store: ContentStore = Depends(get_content_store)) -> JSONResponse:
    try:
        payload: Dict[str, Any] = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return JSONResponse(status_code=400, content={"error": "Invalid JSON payload"})

    try:
        document = validate_component_data(payload)
    except ContentValidationError as exc:
        logger.info(f"Rejected component data ({exc.code}): {exc.message}")
        return JSONResponse(status_code=400, content={"error": exc.message})

    try:
        outcome = store.save(document)
    except StoreUnavailable as exc:
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to save component data", "message": str(exc)},
        )
    return JSONResponse(content=outcome.to_wire())

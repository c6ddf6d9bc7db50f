# catalog/main.py
from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from catalog.core.crypto import configure_cipher
from catalog.core.logging import setup_logging
from catalog.core.settings import settings
from catalog.database import get_db, init_db, ping
from catalog.errors import CatalogError
from catalog.routers.category import router as categories_router
from catalog.routers.material import router as materials_router
from catalog.routers.product import router as products_router

APP_STARTED_MONO = time.monotonic()
APP_STARTED_TS = int(time.time())

# --- Logging ---
setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger("catalog-api")

tags_metadata = [
    {"name": "health", "description": "Liveness/Readiness checks"},
    {"name": "products", "description": "Product CRUD & statistics"},
    {"name": "categories", "description": "Categories (read-only)"},
    {"name": "materials", "description": "Materials (read-only)"},
]

# --- Utilitare ---
def _get_req_id_from_headers(request: Request) -> str:
    # Prefer X-Request-ID, apoi X-Correlation-ID; dacă lipsesc, generează unul.
    return (
        request.headers.get("x-request-id")
        or request.headers.get("x-correlation-id")
        or uuid.uuid4().hex[:12]
    )

def _error(request: Request, status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, **extra},
        headers={"X-Request-ID": _get_req_id_from_headers(request)},
    )

# --- Middleware func (registered after app is created) ---
async def request_context_mw(request: Request, call_next):
    """
    - Generează/propagă X-Request-ID
    - Headers de securitate minime
    - X-Process-Time
    """
    req_id = _get_req_id_from_headers(request)
    start = time.perf_counter()
    response: Response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000

    response.headers.setdefault("X-Request-ID", req_id)
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("Cache-Control", "no-store")
    response.headers.setdefault("X-App-Version", settings.APP_VERSION)
    response.headers.setdefault("X-Process-Time", f"{duration_ms:.1f}ms")
    return response

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup fail-fast: cheie invalidă sau DB indisponibil → procesul nu pornește
    configure_cipher(settings.encryption_key)
    try:
        ping()
        init_db()
    except Exception:
        logger.exception("DB startup check FAILED")
        raise
    logger.info("DB startup check OK; %s %s ready", settings.APP_TITLE, settings.APP_VERSION)

    yield

    logger.info("Shutting down %s", settings.APP_TITLE)

# --- App factory (create app BEFORE registering middleware) ---
app = FastAPI(
    title=settings.APP_TITLE,
    version=settings.APP_VERSION,
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

app.middleware("http")(request_context_mw)

# CORS din env: CORS_ORIGINS="http://localhost:3000,https://example.com" ('*' implicit)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Process-Time", "X-App-Version"],
)

# --- Exception handlers ---
@app.exception_handler(CatalogError)
async def _catalog_error_handler(request: Request, exc: CatalogError):
    if exc.status_code >= 500:
        logger.error(
            "%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc,
            exc_info=exc.__cause__ or exc,
        )
    else:
        logger.info("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
    return _error(request, exc.status_code, str(exc))

@app.exception_handler(RequestValidationError)
async def _validation_handler(request: Request, exc: RequestValidationError):
    fields = sorted({".".join(str(p) for p in err.get("loc", ())) for err in exc.errors()})
    return _error(request, status.HTTP_400_BAD_REQUEST, "Missing required fields", fields=fields)

# Prinde 404/405 Starlette și răspunde JSON unitar
@app.exception_handler(StarletteHTTPException)
async def _starlette_http_exc_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = "Not Found"
    elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        message = "Method Not Allowed"
    else:
        message = str(exc.detail)
    return _error(request, exc.status_code, message)

@app.exception_handler(Exception)
async def _unhandled_exc_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error: %s", exc)
    return _error(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error")

# --- Routes: health ---
@app.get("/", tags=["health"])
def root():
    return {"message": "Welcome to the Product Management API!", "version": settings.APP_VERSION}

@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}

@app.get("/health/uptime", tags=["health"])
def health_uptime():
    return {"uptime_seconds": round(time.monotonic() - APP_STARTED_MONO, 3), "started_at": APP_STARTED_TS}

@app.get("/health/db", tags=["health"])
def health_db(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        return {"status": "ok", "db": "up", "dialect": db.get_bind().dialect.name}
    except Exception:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="DB not ready")

# --- Routers ---
app.include_router(products_router)
app.include_router(categories_router)
app.include_router(materials_router)

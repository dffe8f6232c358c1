"""
Loyverse Bridge: FastAPI application entry-point.
"""
import logging
import os
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from loyverse_bridge import __version__
from loyverse_bridge.config import settings
from loyverse_bridge.database import Base, engine

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(name)-30s  %(levelname)-5s  %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: document store + shared HTTP client
    if settings.RECEIPT_STORE_BACKEND == "sql":
        os.makedirs(settings.DATA_DIR, exist_ok=True)
        import loyverse_bridge.models  # noqa: F401
        Base.metadata.create_all(bind=engine)
        logger.info("SQL record store ready (%s)", settings.DATABASE_URL)
    else:
        from loyverse_bridge.firebase import init_firebase
        init_firebase(settings)

    app.state.http_client = httpx.AsyncClient(timeout=settings.LOYVERSE_TIMEOUT)
    yield
    await app.state.http_client.aclose()
    logger.info("Shutting down")


app = FastAPI(
    title="Loyverse Bridge",
    description="Loyverse receipts + supplementary records → frontend receipt view",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Error bodies: {"message": ...} ───────────────────────────────────────
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info("Invalid request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request body.", "details": jsonable_errors(exc)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    body = {"message": "Internal server error."}
    if settings.EXPOSE_ERROR_DETAILS:
        body["details"] = str(exc)
    return JSONResponse(status_code=500, content=body)


def jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


@app.get("/")
async def root():
    return {"service": "Loyverse Bridge", "version": __version__, "status": "running"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


# ── Register API router ──────────────────────────────────────────────────
from loyverse_bridge.routers.loyverse import router as loyverse_router  # noqa: E402

app.include_router(loyverse_router, prefix="/api", tags=["Loyverse"])

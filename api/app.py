"""
FastAPI application factory for the tax indicator dashboard.

Usage:
    python -m api.app                    # Dev server on port 8000
    APP_DATA_PATH=/data/taxes.json python -m api.app

OpenAPI docs available at http://localhost:8000/docs after starting.

Structured JSON logging when APP_LOG_FORMAT=json.
CORS middleware with configurable origins via APP_CORS_ORIGINS.
"""

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import api.dataset as dataset_mod
from api.routes import dashboard, reference
from pipeline.loader import DatasetError
from utils.config import AppConfig

# ── Configuration ─────────────────────────────────────────────────────────────
_cfg = AppConfig.from_env()

# ── Structured JSON logging ──────────────────────────────────────────────────


class _JsonFormatter(logging.Formatter):
    """Emit log records as newline-delimited JSON."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Merge extra fields added via logger.info("...", extra={...})
        for key in ("method", "path", "status", "duration_ms", "request_id"):
            if hasattr(record, key):
                data[key] = getattr(record, key)
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data)


_logger = logging.getLogger("tax_dashboard_api")
_handler = logging.StreamHandler()
if _cfg.log_format == "json":
    _handler.setFormatter(_JsonFormatter())
else:
    _handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    )
logging.basicConfig(handlers=[_handler], level=logging.INFO, force=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the dataset at startup so the first request does not pay for it."""
    try:
        dataset_mod.load()
    except DatasetError as exc:
        _logger.warning("Dataset not loaded at startup: %s", exc)
    yield


def _error_body(error: str, detail, status_code: int) -> dict:
    return {"error": error, "detail": detail, "status_code": status_code}


def create_app(data_path: Path | None = None, current_year: int | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        data_path: Override the dataset path (useful for testing).
        current_year: Override the calendar year treated as "this year".

    Returns:
        Configured FastAPI application instance.
    """
    dataset_mod.configure(data_path=data_path, current_year=current_year)

    app = FastAPI(
        title="Tax Indicator Dashboard API",
        summary="Quarterly and annual tax indicator comparisons for the dashboard.",
        description=(
            "## Tax Indicator Dashboard API\n\n"
            "Serves the analytics behind the tax indicator dashboard.\n\n"
            "### Key concepts\n"
            "- **PIT** and **VAT** are quarterly indicators: the latest reported "
            "quarter is compared with the one before it.\n"
            "- **CIT** is an annual indicator reported quarterly: each year is "
            "represented by its latest reported quarter, and a year reported "
            "before Q4 is **provisional**. Year-over-year comparisons scale the "
            "more complete year down to the other's share of the year.\n"
            "- **Diagnosis**: change under 10 % is green, under 20 % yellow, "
            "otherwise red. Missing data or a zero baseline is yellow.\n"
            "- Absent values are `null`, never zero."
        ),
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {
                "name": "dashboard",
                "description": "Summary row, tab diagnoses and chart data.",
            },
            {
                "name": "reference",
                "description": "Reference lists: indicators and years with data.",
            },
            {
                "name": "meta",
                "description": "Health check and API metadata.",
            },
        ],
    )

    # ── CORS middleware ──────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cfg.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "HEAD", "OPTIONS"],
        allow_headers=["*"],
    )

    # ── Request logging middleware ───────────────────────────────────────────

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log each request with its duration and a short request id."""
        request_id = str(uuid.uuid4())[:8]
        start = time.monotonic()
        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000
        response.headers["X-Request-ID"] = request_id

        if _cfg.log_format == "json":
            _logger.info(
                "request",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status": response.status_code,
                    "duration_ms": round(duration_ms, 1),
                    "request_id": request_id,
                },
            )
        else:
            _logger.info(
                "method=%s path=%s status=%d duration_ms=%.1f rid=%s",
                request.method, request.url.path, response.status_code,
                duration_ms, request_id,
            )
        return response

    # ── Error handling ───────────────────────────────────────────────────────

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        labels = {404: "Not found", 503: "Service unavailable"}
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(labels.get(exc.status_code, "HTTP error"),
                                exc.detail, exc.status_code),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Catch unhandled exceptions and return JSON instead of HTML traceback."""
        _logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content=_error_body("Internal server error", str(exc), 500),
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return JSONResponse(
            status_code=400,
            content=_error_body("Bad request", str(exc), 400),
        )

    # ── Health check ──────────────────────────────────────────────────────────

    @app.get("/health", tags=["meta"], summary="Health check")
    def health():
        """Return 200 OK with the load report if the dataset is usable."""
        data_path = dataset_mod.get_data_path()
        try:
            dataset = dataset_mod.load()
        except DatasetError as exc:
            return JSONResponse(
                status_code=503,
                content={"status": "no_dataset", "dataset": str(data_path), "error": str(exc)},
            )
        return {
            "status": "ok",
            "dataset": str(data_path),
            "points": len(dataset.store),
            "load_report": dataset.report.to_dict(),
        }

    # ── Register routers ──────────────────────────────────────────────────────

    prefix = "/api/v1"
    app.include_router(dashboard.router, prefix=prefix)
    app.include_router(reference.router, prefix=prefix)

    return app


# Singleton instance for uvicorn
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.app:app",
        host=_cfg.api_host,
        port=_cfg.api_port,
        reload=True,
        log_level="info",
    )

"""Main FastAPI application for the ticket system."""

import time

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import __version__
from .api import issues, teams, users
from .api.middleware import ProblemDetailsMiddleware, register_exception_handlers
from .api.schemas import HealthResponse
from .config import get_config, validate_config
from .db.database import get_db
from .utils.logging_config import get_logger, initialize_logging

SERVICE_NAME = "ticket-system"

initialize_logging()
logger = get_logger("main")

config = get_config()

app = FastAPI(
    title=config.app.app_name,
    description=config.app.description,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

register_exception_handlers(app)
app.add_middleware(ProblemDetailsMiddleware)

if config.app.enable_cors:
    allowed_origins = [
        "http://127.0.0.1:8000",
        "http://localhost:8000",
    ]

    # In development mode, allow additional localhost ports
    if config.server.debug:
        allowed_origins.extend(["http://127.0.0.1:3000", "http://localhost:3000"])

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
    )

app.include_router(users.router)
app.include_router(teams.router)
app.include_router(issues.router)


@app.get("/", include_in_schema=False)
async def root():
    return RedirectResponse(url="/docs")


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": SERVICE_NAME, "version": __version__}


@app.get("/ready")
async def readiness_check(db: Session = Depends(get_db)):
    """Readiness check endpoint that validates database connectivity and configuration."""
    start_time = time.time()
    checks = {"database": False, "config": False}
    errors = []

    try:
        db.execute(text("SELECT 1"))
        checks["database"] = True
    except SQLAlchemyError as e:
        errors.append(f"Database check failed: {e}")

    config_problems = validate_config()
    if config_problems:
        errors.extend(f"Config check failed: {problem}" for problem in config_problems)
    else:
        checks["config"] = True

    response_time_ms = round((time.time() - start_time) * 1000, 2)
    all_ready = all(checks.values())

    response = {
        "status": "ready" if all_ready else "not_ready",
        "service": SERVICE_NAME,
        "version": __version__,
        "checks": checks,
        "response_time_ms": response_time_ms,
    }

    if errors:
        logger.warning(f"Readiness check failed: {errors}")
        response["errors"] = errors

    return JSONResponse(content=response, status_code=200 if all_ready else 503)


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    server = get_config().server
    logger.info(f"Starting {SERVICE_NAME} on {server.host}:{server.port}")
    uvicorn.run(
        "ticket_system.main:app",
        host=server.host,
        port=server.port,
        reload=server.debug,
        log_level="debug" if server.debug else "info",
    )


if __name__ == "__main__":
    run()

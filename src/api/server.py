#!/usr/bin/env python
"""FastAPI server for the scenematch asset matching API."""

import sys
import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

# Add src directory to Python path for imports
src_dir = Path(__file__).parent.parent
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.dependencies import close_services, get_asset_matching_service
from api.routers import assets, core, providers
from utils.config import load_config, validate_config
from utils.logging import clear_request_context, get_logger, set_request_context, setup_logging

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = load_config()
    setup_logging(config["log_level"], config["log_json"])
    for problem in validate_config(config):
        logger.warning("config_problem", problem=problem)
    service = await get_asset_matching_service()
    logger.info(
        "server_started",
        backend=config["provider_config_backend"],
        providers=service.get_providers(),
    )
    yield
    await close_services()
    logger.info("server_stopped")


app = FastAPI(title="Scenematch API", version="1.0.0", lifespan=lifespan)

# CORS middleware for development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000"],  # Vite default port
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag every log line emitted while handling a request with its request ID."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    set_request_context(request_id, method=request.method, path=request.url.path)
    started = time.perf_counter()
    try:
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "request_completed",
            status=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return response
    finally:
        clear_request_context()


app.include_router(core.router)
app.include_router(assets.router)
app.include_router(providers.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")

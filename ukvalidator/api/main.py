"""FastAPI application.

Assembles CORS and the API routers, and loads the rule set during the
lifespan start-up.  ukvalidator/main.py re-exports ``app``.

If the rule set or status policy cannot be loaded the service still
starts, reports ``ready: false`` on /health and answers 503 on the
validation routes.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ukvalidator.api.routes.health import router as health_router
from ukvalidator.api.routes.info import router as info_router
from ukvalidator.api.routes.validate import router as validate_router
from ukvalidator.core.logging import setup_logging
from ukvalidator.core.settings import get_settings
from ukvalidator.numbering.status import PolicyRegistry
from ukvalidator.ruleset.store import RuleSetError
from ukvalidator.service import ValidatorState

logger = logging.getLogger(__name__)


def initialize_validator(state: ValidatorState) -> None:
    """Resolve the configured policy, load the rule set and publish it."""
    settings = get_settings()
    try:
        policy = PolicyRegistry.from_file(settings.status_policy_file).get(settings.status_policy)
    except (FileNotFoundError, KeyError, ValueError) as exc:
        logger.error("Failed to load status policy %r: %s", settings.status_policy, exc)
        return

    try:
        state.load(settings.rules_path, policy)
    except FileNotFoundError as exc:
        logger.error("Failed to initialize validator: %s. Run scripts/build_rules.py first.", exc)
    except RuleSetError as exc:
        logger.error("Failed to initialize validator: %s", exc)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    state = ValidatorState()
    app.state.validator = state
    initialize_validator(state)
    if state.ready:
        logger.info("%s is ready", get_settings().app_name)
    yield


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(info_router)
app.include_router(validate_router)


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content={"detail": "Endpoint not found. Try GET /info for available endpoints."},
        )
    return await http_exception_handler(request, exc)

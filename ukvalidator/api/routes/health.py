"""GET /health: liveness and readiness check."""
from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from ukvalidator.api.deps import get_validator_state
from ukvalidator.core.settings import get_settings
from ukvalidator.service import ValidatorState

router = APIRouter(tags=["health"])


@router.get("/health", summary="Basic health check")
def health_check(state: ValidatorState = Depends(get_validator_state)) -> dict[str, object]:
    settings = get_settings()
    return {
        "status": "ok",
        "ready": state.ready,
        "rules_loaded": state.rules_loaded,
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.app_env,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

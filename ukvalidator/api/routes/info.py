"""GET /info: service description and endpoint catalogue."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from ukvalidator.api.deps import get_validator_state
from ukvalidator.core.settings import get_settings
from ukvalidator.service import ValidatorState

router = APIRouter(tags=["info"])


@router.get("/info", summary="Service information")
def service_info(state: ValidatorState = Depends(get_validator_state)) -> dict[str, object]:
    settings = get_settings()
    snapshot = state.snapshot()
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "description": "Authoritative UK number validation against Ofcom data",
        "endpoints": {
            "GET /validate?number=<number>": "Validate a single number",
            "POST /validate/batch": f"Validate multiple numbers (max {settings.batch_max_items})",
            "GET /health": "Service health check",
            "GET /info": "Service information",
        },
        "ready": state.ready,
        "rules_loaded": state.rules_loaded,
        "status_policy": snapshot.policy.name if snapshot is not None else settings.status_policy,
    }

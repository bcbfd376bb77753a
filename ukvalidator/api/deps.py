"""FastAPI dependency injection: validator state and the active snapshot."""
from __future__ import annotations

from fastapi import Depends, HTTPException, Request

from ukvalidator.service import ValidatorSnapshot, ValidatorState


def get_validator_state(request: Request) -> ValidatorState:
    """Return the ValidatorState created by the application lifespan."""
    return request.app.state.validator


def get_snapshot(state: ValidatorState = Depends(get_validator_state)) -> ValidatorSnapshot:
    """Return the published snapshot, or 503 while none has been published."""
    snapshot = state.snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="Service not ready: validator is still initializing")
    return snapshot

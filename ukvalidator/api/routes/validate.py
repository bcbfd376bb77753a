"""Number validation routes.

GET  /validate?number=...   validates one number.
POST /validate/batch        validates up to ``settings.batch_max_items`` numbers.

Each result echoes the submitted number alongside its canonical national
form, so callers can see how the input was read.  Numbers are never
written to the log.
"""
from __future__ import annotations

import logging
from collections import Counter

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from ukvalidator.api.deps import get_snapshot
from ukvalidator.core.settings import get_settings
from ukvalidator.service import ValidatorSnapshot, validate_number

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/validate", tags=["validate"])


class BatchBody(BaseModel):
    numbers: list[str]


@router.get("", summary="Validate a single number")
def validate_single(
    number: str | None = Query(default=None),
    snapshot: ValidatorSnapshot = Depends(get_snapshot),
) -> dict[str, object]:
    if not number:
        raise HTTPException(
            status_code=400,
            detail="Please provide a number in the query string (e.g., ?number=02079460000)",
        )
    outcome = validate_number(number, snapshot)
    logger.debug("validate: class=%s", outcome.result.number_class.value)
    return outcome.to_dict()


@router.post("/batch", summary="Validate multiple numbers")
def validate_batch(
    body: BatchBody,
    snapshot: ValidatorSnapshot = Depends(get_snapshot),
) -> dict[str, object]:
    limit = get_settings().batch_max_items
    if len(body.numbers) > limit:
        raise HTTPException(status_code=400, detail=f"Maximum {limit} numbers per batch request")

    outcomes = [validate_number(n, snapshot) for n in body.numbers]
    classes = Counter(o.result.number_class.value for o in outcomes)
    logger.debug("validate/batch: count=%d classes=%s", len(outcomes), dict(classes))
    return {
        "results": [o.to_dict() for o in outcomes],
        "count": len(outcomes),
    }

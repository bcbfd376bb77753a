"""Validator state: the published rule set, its index and the status policy.

A :class:`ValidatorSnapshot` is immutable.  :class:`ValidatorState` builds
a new index off to the side and then swaps a single snapshot reference,
so a request that took a snapshot keeps using a complete index even if a
refresh lands mid-request.
"""
from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from ukvalidator.numbering.classifier import (
    INVALID,
    ClassificationResult,
    NumberClass,
    classify_uk_number,
    result_message,
)
from ukvalidator.numbering.index import PrefixIndex, build_index
from ukvalidator.numbering.normalizer import format_national, normalize_uk_national, to_e164
from ukvalidator.numbering.rule import PrefixRule
from ukvalidator.numbering.status import DEFAULT_POLICY, DeadStatusPolicy
from ukvalidator.ruleset.store import load_rules

logger = logging.getLogger(__name__)

INVALID_FORMAT_MESSAGE = "Invalid number format"


@dataclass(frozen=True, slots=True)
class ValidatorSnapshot:
    rules: tuple[PrefixRule, ...]
    index: PrefixIndex
    policy: DeadStatusPolicy
    loaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    build_ms: int = 0

    @property
    def rule_count(self) -> int:
        return len(self.rules)


class ValidatorState:
    """Holder for the currently published :class:`ValidatorSnapshot`."""

    def __init__(self) -> None:
        self._snapshot: ValidatorSnapshot | None = None
        self._publish_lock = threading.Lock()

    def snapshot(self) -> ValidatorSnapshot | None:
        return self._snapshot

    @property
    def ready(self) -> bool:
        return self._snapshot is not None

    @property
    def rules_loaded(self) -> int:
        snapshot = self._snapshot
        return snapshot.rule_count if snapshot is not None else 0

    def publish(
        self,
        rules: Iterable[PrefixRule],
        policy: DeadStatusPolicy = DEFAULT_POLICY,
    ) -> ValidatorSnapshot:
        """Build an index for *rules* and make it the active snapshot."""
        frozen = tuple(rules)
        start = time.monotonic()
        index = build_index(frozen)
        build_ms = int((time.monotonic() - start) * 1000)
        snapshot = ValidatorSnapshot(rules=frozen, index=index, policy=policy, build_ms=build_ms)
        with self._publish_lock:
            self._snapshot = snapshot
        logger.info(
            "Published %d rules (%d trie nodes, policy=%s) in %dms",
            snapshot.rule_count,
            index.node_count,
            policy.name,
            build_ms,
        )
        return snapshot

    def load(self, path: str | Path, policy: DeadStatusPolicy = DEFAULT_POLICY) -> ValidatorSnapshot:
        """Load the rule set at *path* and publish it."""
        return self.publish(load_rules(path), policy)


@dataclass(frozen=True, slots=True)
class NumberValidation:
    number: str
    national: str | None
    result: ClassificationResult
    message: str
    e164: str | None = None
    display: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "number": self.number,
            "national": self.national,
            "e164": self.e164,
            "display": self.display,
            "result": self.result.to_dict(),
            "message": self.message,
        }


def validate_number(number: str, snapshot: ValidatorSnapshot) -> NumberValidation:
    """Normalize and classify *number* against *snapshot*."""
    national = normalize_uk_national(number)
    if national is None:
        return NumberValidation(number=number, national=None, result=INVALID, message=INVALID_FORMAT_MESSAGE)

    result = classify_uk_number(national, snapshot.index, snapshot.policy)
    e164 = display = None
    if result.number_class is NumberClass.NUMBER_VALID:
        e164 = to_e164(national)
        display = format_national(national)
    return NumberValidation(
        number=number,
        national=national,
        result=result,
        message=result_message(result),
        e164=e164,
        display=display,
    )

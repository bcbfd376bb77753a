"""Persisted rule set: a JSON array of allocation rules.

Malformed records are rejected with :class:`RuleSetError` naming the
record index; they are never silently skipped.  This is the only place
rule fields are validated; :func:`ukvalidator.numbering.index.build_index`
trusts its input.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from ukvalidator.numbering.rule import PrefixRule

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS: frozenset[str] = frozenset({"prefix", "totalLength"})


class RuleSetError(ValueError):
    """Raised when a persisted rule set cannot be loaded."""


def parse_rule(position: int, data: Any) -> PrefixRule:
    """Validate one persisted record and return it as a :class:`PrefixRule`.

    Raises
    ------
    RuleSetError
        On a non-mapping record, missing fields, a non-string prefix or
        non-integer length, an empty or non-digit prefix, a non-positive
        length, or a length shorter than the prefix.
    """
    if not isinstance(data, dict):
        raise RuleSetError(f"rule {position}: expected an object, got {type(data).__name__}")

    present = set(data.keys())
    if "total_length" in present:
        present.add("totalLength")
    missing = _REQUIRED_FIELDS - present
    if missing:
        raise RuleSetError(f"rule {position}: missing required fields: {sorted(missing)}")

    prefix = data["prefix"]
    total_length = data["totalLength"] if "totalLength" in data else data["total_length"]
    if not isinstance(prefix, str):
        raise RuleSetError(f"rule {position}: prefix must be a string, got {type(prefix).__name__}")
    if isinstance(total_length, bool) or not isinstance(total_length, int):
        raise RuleSetError(
            f"rule {position}: totalLength must be an integer, got {type(total_length).__name__}"
        )

    try:
        rule = PrefixRule.from_dict(data)
    except (TypeError, ValueError) as exc:
        raise RuleSetError(f"rule {position}: {exc}") from exc

    if not rule.prefix or not rule.prefix.isdigit():
        raise RuleSetError(f"rule {position}: prefix must be a non-empty digit string, got {rule.prefix!r}")
    if rule.total_length <= 0:
        raise RuleSetError(f"rule {position}: totalLength must be positive, got {rule.total_length}")
    if rule.total_length < len(rule.prefix):
        raise RuleSetError(
            f"rule {position}: totalLength {rule.total_length} is shorter than "
            f"prefix {rule.prefix!r}"
        )
    return rule


def load_rules(path: str | Path) -> list[PrefixRule]:
    """Load and validate the rule set stored at *path*.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    RuleSetError
        If the file is not a JSON array or any record is malformed.
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as fh:
        try:
            data = json.load(fh)
        except json.JSONDecodeError as exc:
            raise RuleSetError(f"{path}: invalid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise RuleSetError(f"{path}: expected a JSON array, got {type(data).__name__}")

    rules = [parse_rule(i, item) for i, item in enumerate(data)]
    logger.info("Loaded %d rules from %s", len(rules), path)
    return rules


def save_rules(rules: Iterable[PrefixRule], path: str | Path) -> int:
    """Write *rules* to *path* as an indented JSON array; return the count."""
    path = Path(path)
    payload = [r.to_dict() for r in rules]
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(payload, fh, indent=2)
        fh.write("\n")
    logger.info("Wrote %d rules to %s", len(payload), path)
    return len(payload)

"""Longest-prefix classification of canonical UK national numbers.

Decision order
--------------
1. Walk the trie, collecting every rule whose prefix the number extends.
2. Drop rules whose status the active :class:`DeadStatusPolicy` marks dead.
3. On the live rules, first match wins:

   - prefix equals the whole number          -> VALID
   - required length exceeds the number      -> TOO_SHORT
   - required length equals the number       -> VALID

   Ties within a tier go to the earliest rule in traversal order.
4. Otherwise, if any rule (live or dead) sits at or below the number's
   trie node, more digits could still reach an allocation -> TOO_SHORT.
5. Otherwise INVALID.

The function is total: every digit string, including ``""``, resolves to
exactly one class.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ukvalidator.numbering.index import PrefixIndex
from ukvalidator.numbering.status import DEFAULT_POLICY, DeadStatusPolicy


class NumberClass(StrEnum):
    NUMBER_VALID = "NUMBER_VALID"
    NUMBER_INVALID = "NUMBER_INVALID"
    NUMBER_TOO_SHORT = "NUMBER_TOO_SHORT"


@dataclass(frozen=True, slots=True)
class ClassificationResult:
    number_class: NumberClass
    provider: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {"class": self.number_class.value, "provider": self.provider}


INVALID = ClassificationResult(NumberClass.NUMBER_INVALID)


def classify_uk_number(
    national: str,
    index: PrefixIndex,
    policy: DeadStatusPolicy = DEFAULT_POLICY,
) -> ClassificationResult:
    """Classify a canonical national number against *index*."""
    if not national:
        return INVALID

    live = [r for r in index.walk(national) if policy.is_live(r.status)]
    length = len(national)

    for rule in live:
        if rule.prefix == national:
            return ClassificationResult(NumberClass.NUMBER_VALID, rule.provider)

    for rule in live:
        if rule.total_length > length:
            return ClassificationResult(NumberClass.NUMBER_TOO_SHORT, rule.provider)

    for rule in live:
        if rule.total_length == length:
            return ClassificationResult(NumberClass.NUMBER_VALID, rule.provider)

    if index.has_rule_under(national):
        return ClassificationResult(NumberClass.NUMBER_TOO_SHORT)

    return INVALID


def result_message(result: ClassificationResult) -> str:
    """Human-readable summary of *result*."""
    if result.number_class is NumberClass.NUMBER_VALID:
        return f"Valid UK number ({result.provider})" if result.provider else "Valid UK number"
    if result.number_class is NumberClass.NUMBER_TOO_SHORT:
        return f"Number too short ({result.provider})" if result.provider else "Number too short"
    return "Invalid UK number"

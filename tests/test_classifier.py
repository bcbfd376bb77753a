"""Tests for ukvalidator/numbering/classifier.py.

Covers:
- exact prefix match wins over every other tier
- too-short tier (longer live rule) before length-match tier
- length match returns VALID with the rule's provider
- dead statuses are ignored but still keep a branch TOO_SHORT
- INVALID when nothing matches and no rule lies below the number
- policy switch changes the outcome for "Free for allocation"
- end-to-end scenarios through normalize + classify
- totality and the too-short extension property
"""
from __future__ import annotations

import pytest

from ukvalidator.numbering.classifier import (
    ClassificationResult,
    NumberClass,
    classify_uk_number,
    result_message,
)
from ukvalidator.numbering.index import build_index
from ukvalidator.numbering.normalizer import normalize_uk_national
from ukvalidator.numbering.rule import PrefixRule
from ukvalidator.numbering.status import LEGACY_POLICY

VALID = NumberClass.NUMBER_VALID
INVALID = NumberClass.NUMBER_INVALID
TOO_SHORT = NumberClass.NUMBER_TOO_SHORT


def _rule(prefix: str, length: int = 11, status: str = "Allocated", provider: str | None = None) -> PrefixRule:
    return PrefixRule(prefix=prefix, total_length=length, status=status, provider=provider)


def _classify(raw: str, rules: list[PrefixRule], **kwargs) -> ClassificationResult:
    national = normalize_uk_national(raw)
    return classify_uk_number(national or "", build_index(rules), **kwargs)


# ---------------------------------------------------------------------------
# Decision tiers
# ---------------------------------------------------------------------------


class TestExactMatch:
    def test_exact_prefix_is_valid(self) -> None:
        result = classify_uk_number("0207946", build_index([_rule("0207946", 7, provider="A")]))

        assert result == ClassificationResult(VALID, "A")

    def test_exact_beats_longer_live_rule(self) -> None:
        rules = [_rule("020", 11, provider="Wide"), _rule("0207946", 7, provider="Exact")]

        result = classify_uk_number("0207946", build_index(rules))

        assert result.number_class is VALID
        assert result.provider == "Exact"

    def test_dead_exact_rule_ignored(self) -> None:
        rules = [_rule("0207946", 7, status="Withdrawn", provider="Gone")]

        result = classify_uk_number("0207946", build_index(rules))

        # only the dead rule lives at this node, so the branch is TOO_SHORT
        assert result == ClassificationResult(TOO_SHORT)


class TestTooShort:
    def test_longer_rule_gives_too_short_with_provider(self) -> None:
        index = build_index([_rule("0151496", 11, provider="Mersey")])

        result = classify_uk_number("015149612", index)

        assert result == ClassificationResult(TOO_SHORT, "Mersey")

    def test_too_short_checked_before_length_match(self) -> None:
        rules = [_rule("0800", 10, provider="Ten"), _rule("08001", 11, provider="Eleven")]

        result = classify_uk_number("0800123456", build_index(rules))

        assert result == ClassificationResult(TOO_SHORT, "Eleven")

    def test_descendant_rule_without_provider(self) -> None:
        index = build_index([_rule("0151496", 11, provider="Mersey")])

        assert classify_uk_number("0151", index) == ClassificationResult(TOO_SHORT)


class TestLengthMatch:
    def test_length_match_valid(self) -> None:
        index = build_index([_rule("0151496", 11, provider="Mersey")])

        assert classify_uk_number("01514960000", index) == ClassificationResult(VALID, "Mersey")

    def test_first_rule_in_traversal_order_wins(self) -> None:
        rules = [_rule("0161", 11, provider="Second"), _rule("01", 11, provider="First")]

        result = classify_uk_number("01614960000", build_index(rules))

        # "01" is reached before "0161" on the walk
        assert result.provider == "First"

    def test_input_order_breaks_ties_within_node(self) -> None:
        rules = [_rule("0161", 11, provider="A"), _rule("0161", 11, provider="B")]

        assert classify_uk_number("01614960000", build_index(rules)).provider == "A"

    def test_too_long_is_invalid(self) -> None:
        index = build_index([_rule("0151496", 11)])

        assert classify_uk_number("015149600001", index).number_class is INVALID


class TestStatusFiltering:
    def test_free_for_allocation_never_valid(self) -> None:
        index = build_index([_rule("0800", 11, status="Free for allocation")])

        for national in ("08001234567", "08009999999", "08000000000"):
            assert classify_uk_number(national, index).number_class is not VALID

    def test_dead_rule_does_not_hide_live_alternative(self) -> None:
        rules = [
            _rule("0800", 11, status="Unavailable", provider="Dead"),
            _rule("0800", 11, status="Allocated", provider="Live"),
        ]

        result = classify_uk_number("08001234567", build_index(rules))

        assert result == ClassificationResult(VALID, "Live")

    def test_legacy_policy_treats_free_for_allocation_as_live(self) -> None:
        index = build_index([_rule("0800", 11, status="Free for allocation")])

        result = classify_uk_number("08001234567", index, LEGACY_POLICY)

        assert result.number_class is VALID

    def test_legacy_policy_drops_closed_ranges(self) -> None:
        index = build_index([_rule("07700900", 11, status="Allocated(Closed Range)")])

        assert classify_uk_number("07700900123", index).number_class is VALID
        assert classify_uk_number("07700900123", index, LEGACY_POLICY).number_class is INVALID


class TestFallbacks:
    def test_empty_number_invalid(self) -> None:
        index = build_index([_rule("0")])

        assert classify_uk_number("", index) == ClassificationResult(INVALID)

    def test_no_subtree_invalid(self) -> None:
        index = build_index([_rule("0151496")])

        assert classify_uk_number("000", index) == ClassificationResult(INVALID)

    def test_empty_index_always_invalid(self) -> None:
        index = build_index([])

        for national in ("0", "02079460000", "118118"):
            assert classify_uk_number(national, index).number_class is INVALID


# ---------------------------------------------------------------------------
# End-to-end scenarios
# ---------------------------------------------------------------------------


class TestScenarios:
    def test_formatted_london_number(self) -> None:
        rules = [_rule("02080996910", 11, provider="ExampleTelco")]

        assert normalize_uk_national("020 8099 6910") == "02080996910"
        assert _classify("020 8099 6910", rules) == ClassificationResult(VALID, "ExampleTelco")

    def test_plus_44_number(self) -> None:
        rules = [_rule("02079460000", 11)]

        assert _classify("+44 20 7946 0000", rules).number_class is VALID

    def test_partial_area_code(self) -> None:
        rules = [_rule("0151496", 11), _rule("0151497", 11)]

        assert _classify("0151", rules) == ClassificationResult(TOO_SHORT)

    def test_unreachable_prefix(self) -> None:
        rules = [_rule("0151496", 11)]

        assert _classify("000", rules) == ClassificationResult(INVALID)

    def test_free_freephone_range(self) -> None:
        rules = [_rule("0800", 11, status="Free for allocation")]

        assert _classify("0800 123 4567", rules) == ClassificationResult(INVALID)

    def test_empty_input(self) -> None:
        assert normalize_uk_national("") is None
        assert _classify("", [_rule("0")]) == ClassificationResult(INVALID)


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

_PROPERTY_RULES = [
    _rule("02079460", 11, provider="Drama"),
    _rule("0151496", 11, status="Withdrawn"),
    _rule("0151497", 11, provider="Mersey"),
    _rule("0800", 11, status="Free"),
    _rule("080012", 11, provider="Freephone Co"),
    _rule("118", 6, provider="Directory"),
]


class TestProperties:
    @pytest.mark.parametrize(
        "raw",
        ["", " ", "abc", "+", "+44", "0", "00", "0000000000000000000", "118", "1", "0800", "☎☎", "44 0"],
    )
    def test_total_over_any_string(self, raw: str) -> None:
        result = _classify(raw, _PROPERTY_RULES)

        assert result.number_class in set(NumberClass)

    @pytest.mark.parametrize("national", ["0", "01", "0151", "015149", "0800", "08001", "0207946", "11", "1"])
    def test_too_short_extends_to_valid(self, national: str) -> None:
        index = build_index(_PROPERTY_RULES)
        assert classify_uk_number(national, index).number_class is TOO_SHORT

        frontier = [national]
        found = False
        while frontier and not found:
            candidate = frontier.pop()
            for digit in "0123456789":
                extended = candidate + digit
                number_class = classify_uk_number(extended, index).number_class
                if number_class is VALID:
                    found = True
                    break
                if number_class is TOO_SHORT and len(extended) < 12:
                    frontier.append(extended)
        assert found


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------


class TestResultMessage:
    def test_valid_with_provider(self) -> None:
        assert result_message(ClassificationResult(VALID, "BT")) == "Valid UK number (BT)"

    def test_valid_without_provider(self) -> None:
        assert result_message(ClassificationResult(VALID)) == "Valid UK number"

    def test_too_short(self) -> None:
        assert result_message(ClassificationResult(TOO_SHORT, "BT")) == "Number too short (BT)"
        assert result_message(ClassificationResult(TOO_SHORT)) == "Number too short"

    def test_invalid(self) -> None:
        assert result_message(ClassificationResult(INVALID)) == "Invalid UK number"

    def test_to_dict(self) -> None:
        assert ClassificationResult(VALID, "BT").to_dict() == {"class": "NUMBER_VALID", "provider": "BT"}

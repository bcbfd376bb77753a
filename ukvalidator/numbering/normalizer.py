"""UK number normalizer.

Converts a loosely formatted number (spaces, dashes, brackets, ``+44``,
``0044``) into the canonical national form used as the trie key, e.g.
``"+44 20 7946 0000"`` -> ``"02079460000"``.

Display helpers render a canonical number back into human or E.164 form
through ``phonenumbers``; they never change which digits are present.

Safety rule: raw values are never logged.
"""
from __future__ import annotations

import logging
import re

import phonenumbers

from ukvalidator.core.constants import (
    ACCESS_CODE_DIGIT,
    COUNTRY_CODE,
    INTERNATIONAL_PREFIX,
    REGION_CODE,
    TRUNK_PREFIX,
)

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D+")

# Longest form first so "0044..." is not read as a trunk-prefixed number.
_INTERNATIONAL_FORMS: tuple[str, ...] = (
    INTERNATIONAL_PREFIX + COUNTRY_CODE,
    COUNTRY_CODE,
)


def normalize_uk_national(raw: str | None) -> str | None:
    """Return *raw* as a canonical UK national digit string, or ``None``.

    Parameters
    ----------
    raw:
        Caller-supplied number in any loose format.

    Returns
    -------
    str | None
        Digits-only national number (leading ``0`` restored after an
        international prefix is stripped), a Type A/B/C access code
        starting with ``1``, or ``None`` when the input has no digits,
        is only an international prefix, or does not start with ``0``.
        Never raises.
    """
    digits = _NON_DIGITS.sub("", raw or "")
    if not digits:
        return None

    for form in _INTERNATIONAL_FORMS:
        if digits.startswith(form):
            rest = digits[len(form):]
            # "+44 0044 ..." repeats the exit form; strip it so the result
            # normalizes to itself.
            while rest.startswith(_INTERNATIONAL_FORMS[0]):
                rest = rest[len(_INTERNATIONAL_FORMS[0]):]
            if not rest:
                logger.debug("normalizer: international prefix with no subscriber digits")
                return None
            return rest if rest.startswith(TRUNK_PREFIX) else TRUNK_PREFIX + rest

    if digits.startswith(ACCESS_CODE_DIGIT):
        return digits

    if not digits.startswith(TRUNK_PREFIX):
        logger.debug("normalizer: no trunk prefix (length=%d)", len(digits))
        return None

    return digits


def _parse(national: str) -> phonenumbers.PhoneNumber | None:
    try:
        parsed = phonenumbers.parse(national, REGION_CODE)
    except phonenumbers.NumberParseException:
        logger.debug("normalizer: phonenumbers could not parse (length=%d)", len(national))
        return None
    if parsed.country_code != int(COUNTRY_CODE):
        return None
    return parsed


def format_national(national: str) -> str:
    """Return *national* grouped for display (``"020 7946 0000"``).

    Falls back to *national* unchanged whenever the formatted string would
    carry different digits, so normalizing the display form always gives
    back the same canonical number.
    """
    parsed = _parse(national)
    if parsed is None:
        return national
    formatted = phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.NATIONAL)
    if _NON_DIGITS.sub("", formatted) != national:
        return national
    return formatted


def to_e164(national: str) -> str | None:
    """Return the E.164 form (``"+442079460000"``) of a trunk-prefixed number."""
    if not national.startswith(TRUNK_PREFIX) or len(national) < 2:
        return None
    parsed = _parse(national)
    if parsed is None:
        return None
    e164 = phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)
    if e164 != "+" + COUNTRY_CODE + national[len(TRUNK_PREFIX):]:
        return None
    return e164

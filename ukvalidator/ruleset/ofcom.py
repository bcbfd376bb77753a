"""Ofcom numbering-data parsing.

Rules
-----
- CSVs are streamed through ``pd.read_csv`` in chunks; every cell is read
  as a trimmed string and missing cells become ``""``.
- Headings are matched case- and whitespace-insensitively against the
  alias lists in :mod:`ukvalidator.core.constants`; the first alias
  with a non-empty value wins.
- A range cell keeps only digits and ``x`` wildcards and must read as
  ``<digits><x...>``.  Outside the access-code sheets, blocks written
  without the trunk ``0`` gain one, and such a block with no wildcards
  is a full-length national block.
- Duplicate (prefix, length, status, provider) rows are collapsed,
  keeping first-seen order.
"""
from __future__ import annotations

import io
import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path

import pandas as pd

from ukvalidator.core.constants import (
    DIALLABLE_STATUSES,
    NATIONAL_NUMBER_LENGTH,
    PROVIDER_COLUMNS,
    RANGE_COLUMNS,
    STATUS_COLUMNS,
    TRUNK_PREFIX,
)
from ukvalidator.numbering.rule import PrefixRule

logger = logging.getLogger(__name__)

CHUNK_SIZE: int = 5_000  # rows per pandas iterator chunk

_RANGE_CHARS = re.compile(r"[^0-9x]")
_RANGE_SHAPE = re.compile(r"([0-9]+)(x*)")

Row = Mapping[str, str]


def _heading_key(name: str) -> str:
    return " ".join(name.split()).lower()


def pick_column(row: Row, aliases: Iterable[str]) -> str:
    """Return the first non-empty value among *aliases* in *row*, else ``""``."""
    by_key = {_heading_key(k): v for k, v in row.items()}
    for alias in aliases:
        value = by_key.get(_heading_key(alias))
        if value:
            return value
    return ""


def range_to_rule(
    number_range: str,
    status: str,
    provider: str | None = None,
    *,
    access_code: bool = False,
) -> PrefixRule | None:
    """Convert one Ofcom range cell into a rule, or ``None`` if it is unusable.

    Examples
    --------
    ``"020 7946 xxxx"`` -> prefix ``"0207946"``, length 11
    ``"207 946 0"``     -> prefix ``"02079460"``, length 11 (NMS block)
    ``"181 xx"`` with *access_code* -> prefix ``"181"``, length 5

    Access codes are dialled without the trunk prefix, so none is added.
    """
    cleaned = _RANGE_CHARS.sub("", (number_range or "").lower())
    match = _RANGE_SHAPE.fullmatch(cleaned)
    if match is None:
        return None
    prefix, wildcards = match.groups()

    if access_code or prefix.startswith(TRUNK_PREFIX):
        total_length = len(prefix) + len(wildcards)
    else:
        prefix = TRUNK_PREFIX + prefix
        if wildcards:
            total_length = len(prefix) + len(wildcards)
        else:
            total_length = max(NATIONAL_NUMBER_LENGTH, len(prefix))

    return PrefixRule(
        prefix=prefix,
        total_length=total_length,
        status=(status or "").strip(),
        provider=(provider or "").strip() or None,
    )


def is_diallable(status: str) -> bool:
    return status.strip().lower() in DIALLABLE_STATUSES


def rows_to_rules(
    rows: Iterable[Row],
    *,
    diallable_only: bool = True,
    access_codes: bool = False,
) -> list[PrefixRule]:
    """Convert parsed CSV rows into rules, skipping unusable range cells."""
    rules: list[PrefixRule] = []
    skipped = 0
    for row in rows:
        rule = range_to_rule(
            pick_column(row, RANGE_COLUMNS),
            pick_column(row, STATUS_COLUMNS),
            pick_column(row, PROVIDER_COLUMNS),
            access_code=access_codes,
        )
        if rule is None:
            skipped += 1
            continue
        if diallable_only and not is_diallable(rule.status):
            continue
        rules.append(rule)
    if skipped:
        logger.debug("ofcom: %d rows had no usable number range", skipped)
    return rules


def read_csv_rows(source: str | Path | bytes) -> Iterator[dict[str, str]]:
    """Yield each CSV row as a ``heading -> trimmed string`` dict."""
    handle = io.BytesIO(source) if isinstance(source, bytes) else str(source)
    for chunk in pd.read_csv(
        handle,
        chunksize=CHUNK_SIZE,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        encoding="utf-8-sig",
        encoding_errors="replace",
        on_bad_lines="skip",
    ):
        headings = [str(c).strip() for c in chunk.columns]
        for values in chunk.itertuples(index=False, name=None):
            yield {
                heading: ("" if pd.isna(value) else str(value).strip())
                for heading, value in zip(headings, values)
            }


def dedupe_rules(rules: Iterable[PrefixRule]) -> list[PrefixRule]:
    """Drop repeated (prefix, length, status, provider) rules, keeping order."""
    seen: dict[tuple[str, int, str, str], PrefixRule] = {}
    for rule in rules:
        key = (rule.prefix, rule.total_length, rule.status, rule.provider or "")
        seen.setdefault(key, rule)
    return list(seen.values())

"""Ofcom numbering-data download with an on-disk cache.

Ofcom publishes the CSVs under stable file names; each file is fetched
from ``settings.ofcom_base_url``, cached under ``settings.data_dir`` and
parsed into rules.  With ``no_fetch`` only cached copies are used.

A file that cannot be fetched or parsed is logged and skipped so one
broken sheet does not block a refresh of the others.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from urllib.parse import quote

import httpx
import pandas as pd

from ukvalidator.core.constants import ACCESS_CODE_FILES, OFCOM_FILES
from ukvalidator.core.settings import get_settings
from ukvalidator.numbering.rule import PrefixRule
from ukvalidator.ruleset.ofcom import dedupe_rules, read_csv_rows, rows_to_rules

logger = logging.getLogger(__name__)


class RuleSetDownloadError(ConnectionError):
    """Raised when an Ofcom file cannot be retrieved."""


def file_url(name: str, base_url: str) -> str:
    return base_url.rstrip("/") + "/" + quote(name)


def cached_path(name: str, data_dir: str | Path) -> Path:
    return Path(data_dir) / name


def fetch_file(
    name: str,
    *,
    base_url: str | None = None,
    data_dir: str | Path | None = None,
    timeout_s: int | None = None,
    no_fetch: bool = False,
) -> bytes:
    """Return the raw bytes of Ofcom file *name*, downloading unless *no_fetch*.

    Raises
    ------
    FileNotFoundError
        If *no_fetch* is set and no cached copy exists.
    RuleSetDownloadError
        If the HTTP request fails or returns a non-2xx status.
    """
    settings = get_settings()
    base_url = base_url or settings.ofcom_base_url
    data_dir = Path(data_dir or settings.data_dir)
    timeout_s = timeout_s if timeout_s is not None else settings.download_timeout_s
    target = cached_path(name, data_dir)

    if no_fetch:
        if not target.is_file():
            raise FileNotFoundError(f"No cached copy of {name} in {data_dir}")
        logger.info("Using cached %s", name)
        return target.read_bytes()

    url = file_url(name, base_url)
    logger.info("Downloading %s", name)
    try:
        response = httpx.get(url, timeout=timeout_s, follow_redirects=True)
        response.raise_for_status()
    except httpx.TimeoutException as exc:
        raise RuleSetDownloadError(f"Timed out after {timeout_s}s fetching {name}") from exc
    except httpx.HTTPStatusError as exc:
        raise RuleSetDownloadError(
            f"Fetch failed {exc.response.status_code} for {name}"
        ) from exc
    except httpx.HTTPError as exc:
        raise RuleSetDownloadError(f"Cannot fetch {name}: {exc}") from exc

    data_dir.mkdir(parents=True, exist_ok=True)
    target.write_bytes(response.content)
    logger.info("Cached %s to %s", name, target)
    return response.content


def build_rule_set(
    files: Iterable[str] = OFCOM_FILES,
    *,
    no_fetch: bool = False,
    diallable_only: bool = True,
    base_url: str | None = None,
    data_dir: str | Path | None = None,
) -> list[PrefixRule]:
    """Fetch and parse every file in *files* into one de-duplicated rule list."""
    rules: list[PrefixRule] = []
    for name in files:
        try:
            content = fetch_file(name, base_url=base_url, data_dir=data_dir, no_fetch=no_fetch)
            parsed = rows_to_rules(
                read_csv_rows(content),
                diallable_only=diallable_only,
                access_codes=name in ACCESS_CODE_FILES,
            )
        except (RuleSetDownloadError, FileNotFoundError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
            logger.warning("Skipping %s: %s", name, exc)
            continue
        logger.info("Parsed %d rules from %s", len(parsed), name)
        rules.extend(parsed)

    unique = dedupe_rules(rules)
    logger.info("Built rule set with %d rules (%d before de-duplication)", len(unique), len(rules))
    return unique

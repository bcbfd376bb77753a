#!/usr/bin/env python3
"""Build prefixes.json from the Ofcom numbering-data CSVs.

Usage:
    python scripts/build_rules.py                 # download, cache under DATA_DIR, write RULES_PATH
    python scripts/build_rules.py --no-fetch      # reuse cached CSVs only
    python scripts/build_rules.py --all-statuses  # keep non-diallable ranges too
"""
from __future__ import annotations

import argparse
import logging
import sys

# Ensure project root is on sys.path
sys.path.insert(0, ".")

from ukvalidator.core.logging import setup_logging  # noqa: E402
from ukvalidator.core.settings import get_settings  # noqa: E402
from ukvalidator.ruleset.download import build_rule_set  # noqa: E402
from ukvalidator.ruleset.store import save_rules  # noqa: E402

logger = logging.getLogger("build_rules")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Build the UK numbering rule set from Ofcom data")
    parser.add_argument(
        "-n",
        "--no-fetch",
        action="store_true",
        help="Use cached CSV files only; do not download.",
    )
    parser.add_argument(
        "--all-statuses",
        action="store_true",
        help="Keep every range, not only Allocated / Allocated(Closed Range).",
    )
    parser.add_argument(
        "--output",
        default=settings.rules_path,
        help="Where to write the rule set (default: RULES_PATH).",
    )
    parser.add_argument(
        "--data-dir",
        default=settings.data_dir,
        help="CSV cache directory (default: DATA_DIR).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    args = parse_args(argv)
    if args.no_fetch:
        logger.info("Running in no-fetch mode - using cached files only")

    rules = build_rule_set(
        no_fetch=args.no_fetch,
        diallable_only=not args.all_statuses,
        data_dir=args.data_dir,
    )
    if not rules:
        logger.error("No rules were produced; leaving %s untouched", args.output)
        return 1

    save_rules(rules, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())

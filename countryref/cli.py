#!/usr/bin/env python3
"""
countryref command line

Usage:
    countryref name "France" "Rep. of Korea" franc
    countryref info SAU USA RUS --attribute Oil
    countryref category "EUROPE-DEU" BRICS
    countryref overlap G20 EU
    countryref difference CTR EU
    countryref categories

Results are printed as JSON on stdout. Diagnostics go to stderr through
logging; --quiet turns them off.
"""

import argparse
import json
import logging
import sys
from typing import Any, List, Optional

from .api import (
    category_difference,
    category_overlap,
    code_to_info,
    expand_category,
    list_categories,
    name_to_code,
)
from .config import get_settings
from .exceptions import get_error_response
from .models import Attribute

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="countryref",
        description="Resolve country names, ISO3 codes and country categories",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress resolution diagnostics"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level for diagnostics (default: COUNTRYREF_LOG_LEVEL or INFO)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    name_parser = subparsers.add_parser("name", help="Country names to ISO3 codes")
    name_parser.add_argument("names", nargs="+", help="Country names")
    name_parser.add_argument(
        "--min-letter",
        type=int,
        default=None,
        help="Minimum normalized length for prefix/substring matching"
    )

    info_parser = subparsers.add_parser("info", help="Information about ISO3 codes")
    info_parser.add_argument("codes", nargs="+", help="ISO3 codes")
    info_parser.add_argument(
        "--attribute", "-a",
        type=str,
        default=Attribute.NAME.value,
        help=f"One of: {', '.join(a.value for a in Attribute)}"
    )

    category_parser = subparsers.add_parser("category", help="Expand category expressions")
    category_parser.add_argument("expressions", nargs="+", help="e.g. EU, EUROPE-DEU-FRA, USA")

    overlap_parser = subparsers.add_parser("overlap", help="Codes in both expressions")
    overlap_parser.add_argument("first")
    overlap_parser.add_argument("second")

    difference_parser = subparsers.add_parser("difference", help="Codes in first but not second")
    difference_parser.add_argument("first")
    difference_parser.add_argument("second")

    subparsers.add_parser("categories", help="List category names")

    return parser


def run(args: argparse.Namespace) -> Any:
    verbose = False if args.quiet else None

    if args.command == "name":
        return name_to_code(args.names, min_letter=args.min_letter, verbose=verbose)
    if args.command == "info":
        return code_to_info(args.codes, args.attribute, verbose=verbose)
    if args.command == "category":
        return expand_category(args.expressions, verbose=verbose)
    if args.command == "overlap":
        return category_overlap(args.first, args.second)
    if args.command == "difference":
        return category_difference(args.first, args.second)
    if args.command == "categories":
        return list(list_categories())
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        level = args.log_level or get_settings().log_level
        logging.basicConfig(
            level=level.upper(),
            format='%(levelname)s - %(name)s - %(message)s',
            stream=sys.stderr,
        )
        result = run(args)
    except Exception as e:
        logger.debug(f"countryref {args.command} failed: {e}")
        print(json.dumps(get_error_response(e)), file=sys.stderr)
        return EXIT_ERROR

    print(json.dumps(result, ensure_ascii=False))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

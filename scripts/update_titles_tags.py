#!/usr/bin/env python3
"""
Update Listing Titles and Tags

Sends Product Title and Tag 1..Tag 13 from a completed template to Etsy.
Rows are independent: a rejected listing is reported and the rest continue.

Usage:
    python3 scripts/update_titles_tags.py output/completed-KeywordResearch.csv

Exit codes:
    0 = every row updated (or skipped)
    1 = at least one row failed, or the file could not be used
"""

import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from listing_refresh.common import (
    add_common_arguments,
    load_settings,
    print_stage_report,
    session_from_args,
    setup_logging,
)
from listing_refresh.errors import ListingRefreshError
from listing_refresh.etsy import EtsyAPIClient, TitleTagUpdater

logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Update Etsy listing titles and tags from a template CSV")
    parser.add_argument("csv", help="Completed listing template CSV")
    add_common_arguments(parser)
    args = parser.parse_args()

    setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    if not os.path.exists(args.csv):
        print(f"ERROR: CSV file not found: {args.csv}")
        sys.exit(1)

    try:
        settings = load_settings(args.settings)
        session = session_from_args(args)
        with EtsyAPIClient.from_settings(session, settings) as client:
            report = TitleTagUpdater(client, session).update_from_csv(args.csv)
    except ListingRefreshError as e:
        logger.error("%s", e)
        sys.exit(1)

    print_stage_report(report)
    sys.exit(0 if report.ok else 1)


if __name__ == "__main__":
    main()

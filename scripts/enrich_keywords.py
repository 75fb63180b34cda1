#!/usr/bin/env python3
"""
Keyword Research Enrichment

Runs eRank keyword explorer searches for every filled Fact/People/Occasion
keyword in a completed template and writes completed-KeywordResearch.csv
with the top results per keyword.

Requires a saved eRank login (database/cookies.json and database/userAgent.txt).

Usage:
    python3 scripts/enrich_keywords.py output/template_listingsData.csv
    python3 scripts/enrich_keywords.py template.csv --headless --output-dir output
"""

import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from listing_refresh.common import add_common_arguments, load_settings, setup_logging
from listing_refresh.errors import ListingRefreshError
from listing_refresh.research import load_browser_state, run_keyword_research

logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Enrich a listing template with eRank keyword results")
    parser.add_argument("csv", help="Completed listing template CSV")
    parser.add_argument("--output-dir", help="Directory for the enriched CSV (default: paths.research_dir)")
    parser.add_argument("--state-dir", help="Directory with cookies.json/userAgent.txt (default: paths.browser_state_dir)")
    parser.add_argument("--headless", action="store_true", help="Run the browser without a window")
    add_common_arguments(parser, credentials=False)
    args = parser.parse_args()

    setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    if not os.path.exists(args.csv):
        print(f"ERROR: CSV file not found: {args.csv}")
        sys.exit(1)

    try:
        settings = load_settings(args.settings)
        if args.headless:
            settings["research"]["headless"] = True

        state = load_browser_state(args.state_dir or settings["paths"]["browser_state_dir"])
        result = run_keyword_research(
            args.csv,
            state,
            settings,
            output_dir=args.output_dir or settings["paths"]["research_dir"],
        )
    except ListingRefreshError as e:
        logger.error("%s", e)
        sys.exit(1)

    print(f"\nKeyword research saved: {result.path}")
    print(f"  Rows:     {result.row_count}")
    print(f"  Searches: {result.searches} ({result.empty_results} without results)")


if __name__ == "__main__":
    main()

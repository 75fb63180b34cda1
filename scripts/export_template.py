#!/usr/bin/env python3
"""
Export Listing Template

Exports every active listing in the shop to a new template CSV
(template_listingsData.csv, template_listingsData1.csv, ...).
Fill in Mockups Folder and the keyword columns, then run
enrich_keywords.py / update_titles_tags.py / upload_images.py.

Usage:
    python3 scripts/export_template.py
    python3 scripts/export_template.py --output-dir output --shop-id 12345678

Credentials: --api-key/--token/--shop-id or ETSY_API_KEY, ETSY_ACCESS_TOKEN,
ETSY_SHOP_ID (a .env file in the working directory is read).
"""

import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from listing_refresh.common import add_common_arguments, load_settings, session_from_args, setup_logging
from listing_refresh.errors import ListingRefreshError
from listing_refresh.etsy import EtsyAPIClient, ListingTemplateExporter

logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Export active Etsy listings to a template CSV")
    parser.add_argument("--output-dir", help="Directory for the template (default: paths.export_dir)")
    add_common_arguments(parser)
    args = parser.parse_args()

    setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    try:
        settings = load_settings(args.settings)
        session = session_from_args(args)
        output_dir = args.output_dir or settings["paths"]["export_dir"]

        with EtsyAPIClient.from_settings(session, settings) as client:
            if not client.test_connection():
                print("ERROR: Could not connect to the Etsy API. Check the API key and token.")
                sys.exit(1)
            result = ListingTemplateExporter(client, session, export_dir=output_dir).export()
    except ListingRefreshError as e:
        logger.error("%s", e)
        sys.exit(1)

    print(f"\nTemplate created: {result.path}")
    print(f"  Listings: {result.row_count}")
    if result.duplicates_skipped:
        print(f"  Duplicates skipped: {result.duplicates_skipped}")


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Upload Listing Images

For each template row with a Mockups Folder, uploads up to 10 .jpg/.png
files from listing_images/<folder>/ in filename-number order (1.jpg, 2.png,
10.jpg, then unnumbered files), replacing the listing's images at ranks 1..N.

Every referenced folder is checked first; if any is missing nothing is
uploaded.

Usage:
    python3 scripts/upload_images.py output/template_listingsData.csv
    python3 scripts/upload_images.py template.csv --images-dir /path/to/listing_images
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
from listing_refresh.etsy import EtsyAPIClient, ListingImageUploader

logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Upload ranked mockup images to Etsy listings")
    parser.add_argument("csv", help="Listing template CSV with a Mockups Folder column")
    parser.add_argument("--images-dir", help="Root folder of mockup folders (default: paths.images_dir)")
    add_common_arguments(parser)
    args = parser.parse_args()

    setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    if not os.path.exists(args.csv):
        print(f"ERROR: CSV file not found: {args.csv}")
        sys.exit(1)

    try:
        settings = load_settings(args.settings)
        session = session_from_args(args)
        images = settings["images"]
        with EtsyAPIClient.from_settings(session, settings) as client:
            uploader = ListingImageUploader(
                client,
                session,
                images_dir=args.images_dir or settings["paths"]["images_dir"],
                max_images=images["max_images"],
                extensions=images["extensions"],
            )
            report = uploader.upload_from_csv(args.csv)
    except ListingRefreshError as e:
        logger.error("%s", e)
        sys.exit(1)

    print_stage_report(report)
    sys.exit(0 if report.ok else 1)


if __name__ == "__main__":
    main()

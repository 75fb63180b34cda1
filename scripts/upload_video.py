#!/usr/bin/env python3
"""
Upload Listing Video

Uploads one video file to a listing. Failed attempts are retried
immediately, --retries times.

Usage:
    python3 scripts/upload_video.py 1234567890 videos/mug.mp4
    python3 scripts/upload_video.py 1234567890 videos/mug.mp4 --retries 5
"""

import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from listing_refresh.common import add_common_arguments, load_settings, session_from_args, setup_logging
from listing_refresh.errors import ListingRefreshError
from listing_refresh.etsy import SUCCESS, EtsyAPIClient

logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Upload a video to an Etsy listing")
    parser.add_argument("listing_id", help="Etsy listing id")
    parser.add_argument("video", help="Video file path")
    parser.add_argument("--retries", type=int, default=3, help="Retries after the first attempt (default: 3)")
    add_common_arguments(parser)
    args = parser.parse_args()

    setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    if not os.path.isfile(args.video):
        print(f"ERROR: Video file not found: {args.video}")
        sys.exit(1)

    try:
        settings = load_settings(args.settings)
        session = session_from_args(args)
        with EtsyAPIClient.from_settings(session, settings) as client:
            status = client.upload_listing_video(session.shop_id, args.listing_id, args.video,
                                                 retries=args.retries)
    except ListingRefreshError as e:
        logger.error("%s", e)
        sys.exit(1)

    print(f"\nVideo upload for listing {args.listing_id}: {status}")
    sys.exit(0 if status == SUCCESS else 1)


if __name__ == "__main__":
    main()

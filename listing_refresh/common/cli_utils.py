"""
CLI Utilities

Argument and output helpers shared by the scripts/ entry points.
Reports go to stdout; logging goes to stderr.
"""

import argparse
from typing import Optional

from dotenv import load_dotenv

from ..models import AppSession, StageReport
from .config_loader import load_app_session


def add_common_arguments(parser: argparse.ArgumentParser, credentials: bool = True) -> None:
    """Add logging, settings and (optionally) credential flags."""
    parser.add_argument("--settings", help="Settings YAML (default: config/settings.yaml)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--quiet", "-q", action="store_true", help="Warnings and errors only")
    parser.add_argument("--log-file", help="Also write log records to this file")
    if credentials:
        parser.add_argument("--api-key", help="Etsy API key (or ETSY_API_KEY)")
        parser.add_argument("--token", help="OAuth access token (or ETSY_ACCESS_TOKEN)")
        parser.add_argument("--shop-id", help="Etsy shop id (or ETSY_SHOP_ID)")


def session_from_args(args: argparse.Namespace, env_file: Optional[str] = None) -> AppSession:
    """
    Build the AppSession from CLI flags, falling back to the environment.

    Raises:
        ConfigError: If a credential is missing everywhere
    """
    load_dotenv(env_file)
    return load_app_session(
        api_key=args.api_key,
        access_token=args.token,
        shop_id=args.shop_id,
    )


def print_stage_report(report: StageReport) -> None:
    """Print a stage outcome summary and every failed row."""
    counts = report.counts()

    print("\n" + "=" * 60)
    print(f"{report.stage.capitalize()} Summary")
    print("=" * 60)

    if report.blocked:
        print("\n  Nothing was uploaded. Fix these rows and try again:")
        for outcome in report.failures:
            print(f"     {outcome}")
        print("=" * 60)
        return

    print(f"\n  Succeeded: {counts['success']}")
    print(f"  Failed:    {counts['failed']}")
    print(f"  Skipped:   {counts['skipped']}")

    if report.failures:
        print("\n  Problems:")
        for outcome in report.failures:
            print(f"     {outcome}")
    else:
        print("\n  All rows processed successfully")
    print("=" * 60)

"""
Listing Template Exporter

Exports a shop's active listings to the listing template spreadsheet.
The template is filled in by hand (mockup folders, keywords) before the
research and reimport stages run.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from ..common.csv_utils import next_available_path, write_csv
from ..errors import RemoteApiError
from ..models import AppSession, ListingRecord, TAG_COLUMNS, TEMPLATE_FIELDNAMES
from ..models.template import PRODUCT_ID, PRODUCT_TITLE, PRODUCT_TYPE
from .api_client import EtsyAPIClient

logger = logging.getLogger(__name__)

TEMPLATE_BASENAME = "template_listingsData"


@dataclass
class ExportResult:
    """Where the template went and how many listings it holds."""
    path: Path
    row_count: int
    duplicates_skipped: int = 0


def listing_to_row(listing: ListingRecord) -> Dict[str, str]:
    """
    Convert a listing to a template row.

    Tags fill Tag 1..Tag N in their Etsy order; mockup folder and keyword
    columns stay empty for the seller to complete.
    """
    row = {field: '' for field in TEMPLATE_FIELDNAMES}
    row[PRODUCT_ID] = str(listing.listing_id)
    row[PRODUCT_TITLE] = listing.title
    row[PRODUCT_TYPE] = listing.category or ''
    for column, tag in zip(TAG_COLUMNS, listing.tags):
        row[column] = tag
    if len(listing.tags) > len(TAG_COLUMNS):
        logger.warning("Listing %s has %d tags, only %d exported",
                       listing.listing_id, len(listing.tags), len(TAG_COLUMNS))
    return row


class ListingTemplateExporter:
    """
    Exports active listings to a new template CSV.

    Usage:
        exporter = ListingTemplateExporter(client, session, export_dir="output")
        result = exporter.export()
    """

    def __init__(self, client: EtsyAPIClient, session: AppSession, export_dir: str | Path = "."):
        """
        Initialize the exporter.

        Args:
            client: Etsy API client
            session: Per-run credentials and shop identity
            export_dir: Directory the template file is written to
        """
        self.client = client
        self.session = session
        self.export_dir = Path(export_dir)
        self.fieldnames = TEMPLATE_FIELDNAMES

    def fetch_categories(self) -> Dict[int, str]:
        """Fetch section names; an unavailable mapping only leaves Product Type empty."""
        try:
            return self.client.list_categories(self.session.shop_id)
        except (RemoteApiError, ValueError) as e:
            logger.error("Could not fetch shop sections, continuing without categories: %s", e)
            return {}

    def collect_rows(self, categories: Optional[Dict[int, str]] = None) -> tuple[List[Dict[str, str]], int]:
        """
        Fetch all active listings and convert them to template rows.

        Returns:
            (rows, duplicates_skipped)
        """
        if categories is None:
            categories = self.fetch_categories()

        rows = []
        seen_ids = set()
        duplicates = 0

        for listing in self.client.list_active_listings(self.session.shop_id):
            if listing.listing_id in seen_ids:
                logger.warning("Listing %s returned twice, keeping the first copy", listing.listing_id)
                duplicates += 1
                continue
            seen_ids.add(listing.listing_id)

            category = categories.get(listing.section_id) if listing.section_id is not None else None
            record = ListingRecord(
                listing_id=listing.listing_id,
                title=listing.title,
                tags=listing.tags,
                section_id=listing.section_id,
                category=category,
            )
            rows.append(listing_to_row(record))

        return rows, duplicates

    def export(self) -> ExportResult:
        """
        Export all active listings to the next free template file name.

        Returns:
            ExportResult with the written path and row count
        """
        categories = self.fetch_categories()
        rows, duplicates = self.collect_rows(categories)

        os.makedirs(self.export_dir, exist_ok=True)
        output_path = next_available_path(self.export_dir, TEMPLATE_BASENAME)
        row_count = write_csv(output_path, rows, fieldnames=self.fieldnames)

        logger.info("Wrote %d listings to %s", row_count, output_path)
        return ExportResult(path=output_path, row_count=row_count, duplicates_skipped=duplicates)

"""
Title and Tag Updater

Applies the titles and tags from a completed template back to Etsy,
one PATCH per row. A rejected row is reported and the batch continues.
"""

import logging
from pathlib import Path
from typing import Dict, List

from ..models import AppSession, RowOutcome, StageReport, TAG_COLUMNS
from ..models.template import PRODUCT_ID, PRODUCT_TITLE, spreadsheet_row
from ..validation import TITLE_TAG_SCHEMA, load_template
from .api_client import EtsyAPIClient

logger = logging.getLogger(__name__)


def collect_tags(row: Dict[str, str]) -> List[str]:
    """Non-empty Tag 1..Tag 13 values in column order; gaps are skipped."""
    tags = []
    for column in TAG_COLUMNS:
        value = (row.get(column) or '').strip()
        if value:
            tags.append(value)
    return tags


class TitleTagUpdater:
    """
    Updates listing titles and tags from template rows.

    Usage:
        updater = TitleTagUpdater(client, session)
        report = updater.update_from_csv("completed-KeywordResearch.csv")
    """

    STAGE = "title/tag update"

    def __init__(self, client: EtsyAPIClient, session: AppSession):
        self.client = client
        self.session = session

    def update_rows(self, rows: List[Dict[str, str]]) -> StageReport:
        """
        Patch every row in order.

        Rows with an empty Product Title are skipped rather than sent,
        since Etsy rejects blank titles.
        """
        report = StageReport(stage=self.STAGE)
        total = len(rows)

        for index, row in enumerate(rows):
            line = spreadsheet_row(index)
            listing_id = row[PRODUCT_ID].strip()
            title = (row.get(PRODUCT_TITLE) or '').strip()

            if not title:
                report.add(RowOutcome.skipped(line, f"listing {listing_id} has no Product Title"))
                continue

            tags = ','.join(collect_tags(row))
            logger.debug("[%d/%d] Patching listing %s", index + 1, total, listing_id)

            if self.client.patch_listing(self.session.shop_id, listing_id, title, tags):
                report.add(RowOutcome.success(line, f"updated listing {listing_id}"))
            else:
                report.add(RowOutcome.failed(line, f"could not update listing {listing_id} ({title[:40]})"))

        counts = report.counts()
        logger.info("Title/tag update finished: %d updated, %d failed, %d skipped",
                    counts["success"], counts["failed"], counts["skipped"])
        return report

    def update_from_csv(self, csv_path: str | Path) -> StageReport:
        """
        Load and validate a template CSV, then patch its rows.

        Raises:
            TemplateSchemaError: If Product ID / Product Title columns or IDs are missing
        """
        _, rows = load_template(csv_path, TITLE_TAG_SCHEMA)
        return self.update_rows(rows)

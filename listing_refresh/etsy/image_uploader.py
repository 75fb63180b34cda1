"""
Listing Image Uploader

Uploads numbered mockup images from local folders to Etsy listings.

Two passes over the template:
1. every referenced mockup folder must exist, otherwise nothing is uploaded;
2. per row, up to 10 images are uploaded in filename-number order, rank 1..N.
"""

import logging
import os
import re
from pathlib import Path
from typing import Dict, List, Sequence

from ..errors import RemoteApiError
from ..models import AppSession, RowOutcome, StageReport
from ..models.template import MOCKUPS_FOLDER, PRODUCT_ID, spreadsheet_row
from ..validation import IMAGE_UPLOAD_SCHEMA, load_template
from .api_client import EtsyAPIClient

logger = logging.getLogger(__name__)

MAX_IMAGES = 10
IMAGE_EXTENSIONS = ('.jpg', '.png')

_LEADING_NUMBER = re.compile(r'^\d+')


def image_sort_key(filename: str) -> tuple:
    """
    Sort key: leading number ascending, unnumbered files after all numbered ones.

    The filename is the final tie-breaker so the order does not depend on
    directory listing order.
    """
    match = _LEADING_NUMBER.match(filename)
    if match:
        return (0, int(match.group()), filename)
    return (1, 0, filename)


def list_mockup_images(folder: str | Path, extensions: Sequence[str] = IMAGE_EXTENSIONS) -> List[str]:
    """Image file names in a folder, in upload order."""
    names = [
        name for name in os.listdir(folder)
        if name.endswith(tuple(extensions)) and os.path.isfile(os.path.join(folder, name))
    ]
    return sorted(names, key=image_sort_key)


class ListingImageUploader:
    """
    Uploads ranked listing images from the images root.

    Usage:
        uploader = ListingImageUploader(client, session, images_dir="listing_images")
        report = uploader.upload_from_csv("template_listingsData.csv")
        if report.blocked:
            ...  # fix the folders listed in report.failures and retry
    """

    STAGE = "image upload"

    def __init__(
        self,
        client: EtsyAPIClient,
        session: AppSession,
        images_dir: str | Path = "listing_images",
        max_images: int = MAX_IMAGES,
        extensions: Sequence[str] = IMAGE_EXTENSIONS,
    ):
        self.client = client
        self.session = session
        self.images_dir = Path(images_dir)
        self.max_images = max_images
        self.extensions = tuple(extensions)

    def folder_for(self, row: Dict[str, str]) -> Path:
        return self.images_dir / row[MOCKUPS_FOLDER].strip()

    def validate_folders(self, rows: List[Dict[str, str]]) -> List[RowOutcome]:
        """Return one failed outcome per row whose mockup folder does not exist."""
        errors = []
        for index, row in enumerate(rows):
            if not row[MOCKUPS_FOLDER].strip():
                continue
            folder = self.folder_for(row)
            if not folder.is_dir():
                logger.warning("Directory %s does not exist", folder)
                errors.append(RowOutcome.failed(
                    spreadsheet_row(index),
                    f"The folder '{row[MOCKUPS_FOLDER].strip()}' does not exist in {self.images_dir}",
                ))
        return errors

    def upload_row(self, row: Dict[str, str]) -> int:
        """
        Upload the images for one row.

        Returns:
            Number of images uploaded

        Raises:
            OSError: If an image cannot be read
            RemoteApiError: If Etsy rejects an upload
        """
        listing_id = row[PRODUCT_ID].strip()
        folder = self.folder_for(row)
        images = list_mockup_images(folder, self.extensions)[:self.max_images]

        for rank, name in enumerate(images, 1):
            image_bytes = (folder / name).read_bytes()
            self.client.upload_listing_image(
                self.session.shop_id, listing_id, image_bytes, name, rank, overwrite=True,
            )
            logger.info("Uploaded image %d of %d for listing %s", rank, len(images), listing_id)

        return len(images)

    def upload_rows(self, rows: List[Dict[str, str]]) -> StageReport:
        """
        Validate all mockup folders, then upload row by row.

        A failure stops the rest of that row's images only; the next row
        is still processed.
        """
        report = StageReport(stage=self.STAGE)

        folder_errors = self.validate_folders(rows)
        if folder_errors:
            logger.error("%d mockup folder(s) missing, no images uploaded", len(folder_errors))
            report.outcomes.extend(folder_errors)
            report.blocked = True
            return report

        for index, row in enumerate(rows):
            line = spreadsheet_row(index)
            listing_id = row[PRODUCT_ID].strip()

            if not row[MOCKUPS_FOLDER].strip():
                report.add(RowOutcome.skipped(line, "no mockups folder"))
                continue

            logger.info("Uploading images for row %d (listing %s)", line, listing_id)
            try:
                uploaded = self.upload_row(row)
            except (OSError, RemoteApiError) as e:
                logger.error("Row %d: image upload failed for listing %s: %s", line, listing_id, e)
                report.add(RowOutcome.failed(line, "There was a problem uploading the images for this row"))
                continue

            report.add(RowOutcome.success(line, f"uploaded {uploaded} image(s) to listing {listing_id}"))

        return report

    def upload_from_csv(self, csv_path: str | Path) -> StageReport:
        """
        Load and validate a template CSV, then run both passes.

        Raises:
            TemplateSchemaError: If Product ID / Mockups Folder columns or IDs are missing
        """
        _, rows = load_template(csv_path, IMAGE_UPLOAD_SCHEMA)
        return self.upload_rows(rows)

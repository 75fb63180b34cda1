"""
Template Validator

Checks a loaded template spreadsheet against the columns a stage reads,
so a renamed or missing column fails up front with its name in the message
instead of surfacing as empty values row by row.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from pathlib import Path

from ..common.csv_utils import read_table
from ..errors import TemplateSchemaError
from ..models.template import (
    FACT_KEYWORD,
    MOCKUPS_FOLDER,
    OCCASION_KEYWORD,
    PEOPLE_KEYWORD,
    PRODUCT_ID,
    PRODUCT_TITLE,
    PRODUCT_TYPE,
    spreadsheet_row,
)


@dataclass(frozen=True)
class TemplateSchema:
    """
    Columns a stage requires.

    Attributes:
        name: Stage name used in error messages
        required: Column titles that must be present in the header
        require_ids: Every row must carry a unique, non-empty Product ID
    """
    name: str
    required: tuple[str, ...]
    require_ids: bool = False

    def validate(self, fieldnames: list[str], rows: list[dict]) -> None:
        """
        Raise TemplateSchemaError if the table does not fit this schema.

        Column titles are compared after trimming surrounding whitespace,
        but otherwise must match exactly.
        """
        present = {name.strip() for name in fieldnames}
        missing = [column for column in self.required if column not in present]
        if missing:
            raise TemplateSchemaError(
                f"{self.name}: missing required column(s): {', '.join(missing)}",
                missing=missing,
            )

        if not self.require_ids:
            return

        blank_rows = [
            spreadsheet_row(i) for i, row in enumerate(rows)
            if not row.get(PRODUCT_ID, '').strip()
        ]
        if blank_rows:
            raise TemplateSchemaError(
                f"{self.name}: '{PRODUCT_ID}' is empty in row(s) "
                f"{', '.join(str(r) for r in blank_rows)}"
            )

        counts = Counter(row[PRODUCT_ID].strip() for row in rows)
        duplicates = sorted(pid for pid, n in counts.items() if n > 1)
        if duplicates:
            raise TemplateSchemaError(
                f"{self.name}: duplicate '{PRODUCT_ID}' value(s): {', '.join(duplicates)}"
            )


ENRICHMENT_SCHEMA = TemplateSchema(
    name="keyword research",
    required=(PRODUCT_ID, PRODUCT_TYPE, FACT_KEYWORD, PEOPLE_KEYWORD, OCCASION_KEYWORD),
    require_ids=True,
)

TITLE_TAG_SCHEMA = TemplateSchema(
    name="title/tag update",
    required=(PRODUCT_ID, PRODUCT_TITLE),
    require_ids=True,
)

IMAGE_UPLOAD_SCHEMA = TemplateSchema(
    name="image upload",
    required=(PRODUCT_ID, MOCKUPS_FOLDER),
    require_ids=True,
)


def _strip_keys(row: dict) -> dict:
    return {key.strip(): value for key, value in row.items()}


def load_template(path: str | Path, schema: TemplateSchema) -> tuple[list[str], list[dict]]:
    """
    Read a template CSV and validate it against a schema.

    Header titles are trimmed so stray spaces added by spreadsheet editors do
    not break lookups; header order is preserved.

    Returns:
        (fieldnames, rows)

    Raises:
        TemplateSchemaError: If required columns or Product IDs are missing
        FileNotFoundError: If the file does not exist
    """
    fieldnames, rows = read_table(path)
    fieldnames = [name.strip() for name in fieldnames]
    rows = [_strip_keys(row) for row in rows]
    schema.validate(fieldnames, rows)
    return fieldnames, rows

"""
Listing template column definitions.

The template spreadsheet is addressed by column title, so these strings are
the contract between the export, enrichment and reimport stages.
"""

from dataclasses import dataclass
from typing import List

MAX_TAGS = 13

PRODUCT_ID = 'Product ID'
MOCKUPS_FOLDER = 'Mockups Folder'
PRODUCT_TITLE = 'Product Title'
PRODUCT_TYPE = 'Product Type'
TAG_COLUMNS: List[str] = [f'Tag {i}' for i in range(1, MAX_TAGS + 1)]

FACT_KEYWORD = 'Fact keyword'
PEOPLE_KEYWORD = 'People keyword'
OCCASION_KEYWORD = 'Occasion keyword'

FACT_RESULTS = 'Fact Results'
PEOPLE_RESULTS = 'People Results'
OCCASION_RESULTS = 'Occasion Results'

# Written when a keyword search returned nothing usable
NO_RESULTS = 'No results'


@dataclass(frozen=True)
class KeywordSlot:
    """One keyword column and the column its research results go to."""
    name: str
    keyword_column: str
    result_column: str


# Processing order within a row
KEYWORD_SLOTS: List[KeywordSlot] = [
    KeywordSlot('fact', FACT_KEYWORD, FACT_RESULTS),
    KeywordSlot('people', PEOPLE_KEYWORD, PEOPLE_RESULTS),
    KeywordSlot('occasion', OCCASION_KEYWORD, OCCASION_RESULTS),
]

# Export template header (fixed 20 columns)
TEMPLATE_FIELDNAMES: List[str] = (
    [PRODUCT_ID, MOCKUPS_FOLDER, PRODUCT_TITLE]
    + TAG_COLUMNS
    + [PRODUCT_TYPE, FACT_KEYWORD, PEOPLE_KEYWORD, OCCASION_KEYWORD]
)

RESULT_FIELDNAMES: List[str] = [slot.result_column for slot in KEYWORD_SLOTS]


def spreadsheet_row(index: int) -> int:
    """Convert a 0-based data row index to its spreadsheet line number."""
    return index + 2

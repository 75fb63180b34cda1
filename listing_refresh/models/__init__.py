"""
Data models for the listing refresh pipeline.

This module contains pure data classes and column definitions with no business logic.
"""

from .listing import ListingRecord
from .outcome import OutcomeStatus, RowOutcome, StageReport
from .session import AppSession
from .template import (
    KEYWORD_SLOTS,
    MAX_TAGS,
    NO_RESULTS,
    RESULT_FIELDNAMES,
    TAG_COLUMNS,
    TEMPLATE_FIELDNAMES,
    KeywordSlot,
)

__all__ = [
    'AppSession',
    'KeywordSlot',
    'KEYWORD_SLOTS',
    'ListingRecord',
    'MAX_TAGS',
    'NO_RESULTS',
    'OutcomeStatus',
    'RESULT_FIELDNAMES',
    'RowOutcome',
    'StageReport',
    'TAG_COLUMNS',
    'TEMPLATE_FIELDNAMES',
]

"""
Keyword Enricher

Runs the keyword research searches for a completed listing template and
writes the enriched spreadsheet.

Rows are processed in file order and, within a row, fact -> people ->
occasion. Each non-empty keyword slot gets one search for
"<Product Type> <keyword>"; its results column holds the joined titles or
the "No results" sentinel. The output is written once, after every row is
done, so a failed run leaves no partial file.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Protocol

from playwright.sync_api import Error as PlaywrightError

from ..common.csv_utils import next_available_path, write_csv
from ..errors import KeywordSessionError
from ..models import KEYWORD_SLOTS, RESULT_FIELDNAMES, KeywordSlot
from ..models.template import PRODUCT_TYPE
from ..validation import ENRICHMENT_SCHEMA, load_template
from .browser_state import BrowserState
from .keyword_session import KeywordResearchSession
from .result_parser import format_results

logger = logging.getLogger(__name__)

RESEARCH_BASENAME = "completed-KeywordResearch"


class KeywordSearcher(Protocol):
    def search(self, query: str) -> List[str]: ...


@dataclass
class EnrichmentResult:
    """Where the enriched table went and how much work it took."""
    path: Path
    row_count: int
    searches: int
    empty_results: int


def build_query(row: Dict[str, str], slot: KeywordSlot) -> str:
    """Search text for one slot: product type, then the keyword."""
    product_type = (row.get(PRODUCT_TYPE) or '').strip()
    keyword = (row.get(slot.keyword_column) or '').strip()
    return f"{product_type} {keyword}".strip()


def enriched_fieldnames(source_fieldnames: List[str]) -> List[str]:
    """Source header in its original order plus any result columns it lacks."""
    return list(source_fieldnames) + [
        name for name in RESULT_FIELDNAMES if name not in source_fieldnames
    ]


class KeywordEnricher:
    """
    Adds keyword research results to template rows.

    Usage:
        with KeywordResearchSession(state) as session:
            enricher = KeywordEnricher(session, output_dir="output")
            result = enricher.run(fieldnames, rows)
    """

    def __init__(self, searcher: KeywordSearcher, output_dir: str | Path = "."):
        self.searcher = searcher
        self.output_dir = Path(output_dir)
        self.searches = 0
        self.empty_results = 0

    def enrich_row(self, row: Dict[str, str]) -> Dict[str, str]:
        """Return a copy of the row with a results value for each filled keyword slot."""
        enriched = dict(row)
        for slot in KEYWORD_SLOTS:
            if not (row.get(slot.keyword_column) or '').strip():
                continue

            query = build_query(row, slot)
            try:
                titles = self.searcher.search(query)
            except KeywordSessionError:
                raise
            except PlaywrightError as e:
                logger.warning("Search %r failed, recording no results: %s", query, e)
                titles = []
            self.searches += 1
            if not titles:
                logger.info("No search results for %s keyword %r", slot.name, row[slot.keyword_column])
                self.empty_results += 1
            enriched[slot.result_column] = format_results(titles)
        return enriched

    def enrich_rows(self, rows: List[Dict[str, str]]) -> List[Dict[str, str]]:
        enriched = []
        total = len(rows)
        for i, row in enumerate(rows, 1):
            logger.info("[%d/%d] Researching keywords...", i, total)
            enriched.append(self.enrich_row(row))
        return enriched

    def run(self, fieldnames: List[str], rows: List[Dict[str, str]]) -> EnrichmentResult:
        """
        Enrich all rows and write them to the next free output file name.

        Raises:
            KeywordSessionError: If the browser session fails; nothing is written
        """
        enriched = self.enrich_rows(rows)

        os.makedirs(self.output_dir, exist_ok=True)
        output_path = next_available_path(self.output_dir, RESEARCH_BASENAME)
        row_count = write_csv(output_path, enriched, fieldnames=enriched_fieldnames(fieldnames))

        logger.info("Keyword research written to %s (%d rows, %d searches)",
                    output_path, row_count, self.searches)
        return EnrichmentResult(
            path=output_path,
            row_count=row_count,
            searches=self.searches,
            empty_results=self.empty_results,
        )


def run_keyword_research(
    input_csv: str | Path,
    state: BrowserState,
    settings: Dict,
    output_dir: str | Path = ".",
    session_factory: Callable | None = None,
) -> EnrichmentResult:
    """
    Validate the template, then research it in one browser session.

    The template is checked before the browser is launched, and the browser
    is closed after the output file is written (or on failure).

    Args:
        input_csv: Completed listing template
        state: Saved browser login state
        settings: Loaded application settings
        output_dir: Directory for the enriched file
        session_factory: Callable(state, settings) returning a session context
                         manager; defaults to KeywordResearchSession.from_settings
    """
    fieldnames, rows = load_template(input_csv, ENRICHMENT_SCHEMA)

    if session_factory is None:
        session_factory = KeywordResearchSession.from_settings

    with session_factory(state, settings) as session:
        return KeywordEnricher(session, output_dir).run(fieldnames, rows)

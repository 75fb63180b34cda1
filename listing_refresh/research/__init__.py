"""
Keyword research enrichment.

Modules:
    browser_state - Saved eRank login state (cookies, user agent)
    keyword_session - Persistent Playwright session for keyword searches
    keyword_enricher - Template rows to enriched spreadsheet
    result_parser - Result table HTML parsing
"""

from .browser_state import BrowserState, load_browser_state, normalize_cookie
from .keyword_enricher import (
    EnrichmentResult,
    KeywordEnricher,
    build_query,
    enriched_fieldnames,
    run_keyword_research,
)
from .keyword_session import KeywordResearchSession
from .result_parser import format_results, parse_result_titles

__all__ = [
    'BrowserState',
    'load_browser_state',
    'normalize_cookie',
    'EnrichmentResult',
    'KeywordEnricher',
    'build_query',
    'enriched_fieldnames',
    'run_keyword_research',
    'KeywordResearchSession',
    'format_results',
    'parse_result_titles',
]

"""
Keyword explorer result parsing.

Pulls the keyword titles out of the explorer's results table HTML.
"""

from typing import List

from bs4 import BeautifulSoup

from ..models import NO_RESULTS

RESULT_SELECTOR = 'tr > td > a[title]'
MAX_RESULTS = 10


def parse_result_titles(html: str, selector: str = RESULT_SELECTOR, limit: int = MAX_RESULTS) -> List[str]:
    """
    Extract the text of the first `limit` result anchors.

    Args:
        html: Page HTML
        selector: CSS selector for the result anchors
        limit: Maximum number of titles

    Returns:
        Anchor texts in page order, blanks removed
    """
    if not html:
        return []

    soup = BeautifulSoup(html, 'lxml')
    titles = []
    for anchor in soup.select(selector):
        text = anchor.get_text(strip=True)
        if text:
            titles.append(text)
        if len(titles) >= limit:
            break
    return titles


def format_results(titles: List[str]) -> str:
    """Join titles for one spreadsheet cell; an empty list becomes the sentinel."""
    return ', '.join(titles) if titles else NO_RESULTS

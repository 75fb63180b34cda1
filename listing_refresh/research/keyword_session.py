"""
Keyword Research Session

One Playwright browser session against eRank's keyword explorer, reused for
every search in a run. The page has a single focused input and a single
results pane, so searches run strictly one after another.

Per search:
    wait for input -> clear and focus -> type and submit -> settle -> extract
"""

import logging
from typing import Dict, List, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright
from playwright_stealth import Stealth

from ..errors import KeywordSessionError
from .browser_state import BrowserState
from .result_parser import MAX_RESULTS, RESULT_SELECTOR, parse_result_titles

logger = logging.getLogger(__name__)

EXPLORER_URL = "https://erank.com/keyword-explorer?country=USA&source=etsy"
INPUT_SELECTOR = 'input[name="keywords"]'

# True once the page holds more than `index` keyword inputs
_INPUT_READY_JS = """
([selector, index]) => document.querySelectorAll(selector).length > index
"""

# True once the results table is non-empty and no longer shows the previous search
_RESULTS_CHANGED_JS = """
([selector, limit, before]) => {
    const titles = Array.from(document.querySelectorAll(selector))
        .slice(0, limit)
        .map(a => a.textContent.trim())
        .filter(t => t.length > 0);
    return titles.length > 0 && titles.join('\\n') !== before;
}
"""


class KeywordResearchSession:
    """
    Persistent automated-browser session for keyword lookups.

    Usage:
        state = load_browser_state("database")
        with KeywordResearchSession(state) as session:
            titles = session.search("mug funny cat")
    """

    def __init__(
        self,
        state: BrowserState,
        explorer_url: str = EXPLORER_URL,
        headless: bool = False,
        executable_path: Optional[str] = None,
        input_selector: str = INPUT_SELECTOR,
        input_index: int = 1,
        result_selector: str = RESULT_SELECTOR,
        max_results: int = MAX_RESULTS,
        input_timeout_ms: int = 20000,
        navigation_timeout_ms: int = 60000,
        initial_settle_ms: int = 10000,
        settle_timeout_ms: int = 10000,
        settle_fallback_ms: int = 2000,
    ):
        """
        Initialize the session (the browser is launched by start()).

        Args:
            state: Saved user agent and cookies from the login flow
            explorer_url: Keyword explorer page
            headless: Run the browser without a window
            executable_path: Specific Chromium binary, if not Playwright's own
            input_selector: CSS selector matching the keyword inputs
            input_index: Which match to type into (the page renders two)
            result_selector: CSS selector for result title anchors
            max_results: Titles kept per search
            input_timeout_ms: Bound on waiting for the keyword input
            navigation_timeout_ms: Bound on the initial page load
            initial_settle_ms: Pause after the first load for scripts to finish
            settle_timeout_ms: Bound on waiting for new results to render
            settle_fallback_ms: Fixed pause used when new results never appear
        """
        self.state = state
        self.explorer_url = explorer_url
        self.headless = headless
        self.executable_path = executable_path
        self.input_selector = input_selector
        self.input_index = input_index
        self.result_selector = result_selector
        self.max_results = max_results
        self.input_timeout_ms = input_timeout_ms
        self.navigation_timeout_ms = navigation_timeout_ms
        self.initial_settle_ms = initial_settle_ms
        self.settle_timeout_ms = settle_timeout_ms
        self.settle_fallback_ms = settle_fallback_ms

        self._playwright = None
        self.browser = None
        self.context = None
        self.page = None
        self.searches_made = 0

    @classmethod
    def from_settings(cls, state: BrowserState, settings: Dict) -> "KeywordResearchSession":
        """Build a session from the 'research' section of the loaded settings."""
        research = settings.get("research", {})
        keys = (
            "explorer_url", "headless", "executable_path", "input_selector", "input_index",
            "result_selector", "max_results", "input_timeout_ms", "navigation_timeout_ms",
            "initial_settle_ms", "settle_timeout_ms", "settle_fallback_ms",
        )
        return cls(state, **{key: research[key] for key in keys if key in research})

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def start(self) -> None:
        """
        Launch the browser, restore the login state and open the explorer.

        Raises:
            KeywordSessionError: If the browser or page cannot be set up
        """
        try:
            self._playwright = sync_playwright().start()
            self.browser = self._playwright.chromium.launch(
                headless=self.headless,
                executable_path=self.executable_path,
            )
            self.context = self.browser.new_context(user_agent=self.state.user_agent)
            if self.state.cookies:
                self.context.add_cookies(self.state.cookies)
            self.page = self.context.new_page()
            Stealth().apply_stealth_sync(self.page)

            logger.info("Opening keyword explorer: %s", self.explorer_url)
            self.page.goto(self.explorer_url, wait_until="networkidle",
                           timeout=self.navigation_timeout_ms)
            self.page.wait_for_timeout(self.initial_settle_ms)
        except PlaywrightError as e:
            self.close()
            raise KeywordSessionError(f"Could not open keyword explorer: {e}") from e

    def close(self) -> None:
        """Close the browser and stop Playwright. Safe to call more than once."""
        for name in ("context", "browser"):
            handle = getattr(self, name)
            if handle is None:
                continue
            try:
                handle.close()
            except PlaywrightError as e:
                logger.warning("Error closing %s: %s", name, e)
            setattr(self, name, None)

        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None
        self.page = None

    # ── Search steps ──────────────────────────────────────────────────────────

    def _require_page(self):
        if self.page is None:
            raise KeywordSessionError("Keyword research session is not started")
        return self.page

    def wait_for_input(self) -> None:
        """Block until the keyword input exists; the run cannot continue without it."""
        page = self._require_page()
        try:
            page.wait_for_function(
                _INPUT_READY_JS,
                arg=[self.input_selector, self.input_index],
                timeout=self.input_timeout_ms,
            )
        except PlaywrightTimeoutError as e:
            raise KeywordSessionError(
                f"Keyword input {self.input_selector!r} not ready after {self.input_timeout_ms} ms"
            ) from e

    def focus_input(self) -> None:
        """Clear and focus the keyword input."""
        page = self._require_page()
        field = page.locator(self.input_selector).nth(self.input_index)
        try:
            field.fill("")
            field.focus()
            field.click()
        except PlaywrightError as e:
            raise KeywordSessionError(f"Could not focus keyword input: {e}") from e

    def submit(self, query: str) -> None:
        page = self._require_page()
        try:
            page.keyboard.type(query)
            page.keyboard.press("Enter")
        except PlaywrightError as e:
            raise KeywordSessionError(f"Could not submit search {query!r}: {e}") from e

    def wait_for_results(self, previous: List[str]) -> None:
        """
        Wait until the results pane shows something other than `previous`.

        Falls back to a fixed pause when that never happens within the
        timeout (a search can legitimately return the same titles, or none).
        """
        page = self._require_page()
        try:
            page.wait_for_function(
                _RESULTS_CHANGED_JS,
                arg=[self.result_selector, self.max_results, "\n".join(previous)],
                timeout=self.settle_timeout_ms,
            )
        except PlaywrightTimeoutError:
            logger.debug("Results did not change within %d ms, waiting %d ms more",
                         self.settle_timeout_ms, self.settle_fallback_ms)
            page.wait_for_timeout(self.settle_fallback_ms)
        except PlaywrightError as e:
            # e.g. the execution context was replaced by a navigation after Enter
            logger.warning("Results wait interrupted (%s), waiting %d ms instead",
                           e, self.settle_fallback_ms)
            page.wait_for_timeout(self.settle_fallback_ms)

    def read_results(self) -> List[str]:
        """Current result titles; an unreadable page yields an empty list."""
        page = self._require_page()
        try:
            html = page.content()
        except PlaywrightError as e:
            logger.warning("Could not read search results: %s", e)
            return []
        return parse_result_titles(html, self.result_selector, self.max_results)

    def search(self, query: str) -> List[str]:
        """
        Run one keyword search and return up to max_results titles.

        Raises:
            KeywordSessionError: If the page stops responding to input
        """
        self.wait_for_input()
        previous = self.read_results()
        self.focus_input()
        self.submit(query)
        self.wait_for_results(previous)
        titles = self.read_results()

        self.searches_made += 1
        logger.debug("Search %r: %d result(s)", query, len(titles))
        return titles

"""
Saved browser login state.

The eRank login happens in a separate, manual browser flow that leaves two
files behind: cookies.json (a DevTools cookie dump) and userAgent.txt.
This module reads them and reshapes the cookies for Playwright.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from ..errors import BrowserStateError

logger = logging.getLogger(__name__)

COOKIES_FILE = "cookies.json"
USER_AGENT_FILE = "userAgent.txt"

_SAME_SITE = {"strict": "Strict", "lax": "Lax", "none": "None"}
_COOKIE_KEYS = ("name", "value", "domain", "path", "expires", "httpOnly", "secure", "sameSite")


@dataclass
class BrowserState:
    """User agent and cookies to restore before the first navigation."""
    user_agent: str
    cookies: List[Dict] = field(default_factory=list)


def normalize_cookie(cookie: Dict) -> Dict:
    """
    Convert a DevTools cookie to the shape Playwright's add_cookies accepts.

    Session cookies (expires < 0) lose their expiry, unknown sameSite values
    are dropped, and browser-only fields (size, session, priority) are removed.
    """
    if not cookie.get("name") or "value" not in cookie:
        raise BrowserStateError(f"Cookie entry without name/value: {cookie!r}")

    result = {key: cookie[key] for key in _COOKIE_KEYS if key in cookie}
    result.setdefault("path", "/")

    expires = result.get("expires")
    if expires is None or float(expires) < 0:
        result.pop("expires", None)

    same_site = result.pop("sameSite", None)
    if isinstance(same_site, str) and same_site.lower() in _SAME_SITE:
        result["sameSite"] = _SAME_SITE[same_site.lower()]

    if "domain" not in result and "url" in cookie:
        result["url"] = cookie["url"]
    if "domain" not in result and "url" not in result:
        raise BrowserStateError(f"Cookie {cookie['name']!r} has neither domain nor url")

    return result


def load_browser_state(state_dir: str | Path) -> BrowserState:
    """
    Load the saved user agent and cookies.

    Args:
        state_dir: Directory holding cookies.json and userAgent.txt

    Raises:
        BrowserStateError: If either file is missing or malformed
    """
    state_dir = Path(state_dir)
    cookies_path = state_dir / COOKIES_FILE
    agent_path = state_dir / USER_AGENT_FILE

    try:
        raw_cookies = json.loads(cookies_path.read_text(encoding="utf-8"))
        user_agent = agent_path.read_text(encoding="utf-8").strip()
    except FileNotFoundError as e:
        raise BrowserStateError(
            f"Browser login state not found ({e.filename}). Log in to eRank first."
        ) from e
    except json.JSONDecodeError as e:
        raise BrowserStateError(f"{cookies_path} is not valid JSON: {e}") from e

    if not isinstance(raw_cookies, list):
        raise BrowserStateError(f"{cookies_path} must contain a list of cookies")
    if not user_agent:
        raise BrowserStateError(f"{agent_path} is empty")

    cookies = [normalize_cookie(c) for c in raw_cookies]
    logger.debug("Loaded %d cookies from %s", len(cookies), cookies_path)
    return BrowserState(user_agent=user_agent, cookies=cookies)

"""Tests for listing_refresh/research/browser_state.py"""

import json

import pytest

from listing_refresh.errors import BrowserStateError
from listing_refresh.research.browser_state import load_browser_state, normalize_cookie

DEVTOOLS_COOKIE = {
    "name": "sid",
    "value": "abc",
    "domain": ".erank.com",
    "path": "/",
    "expires": 1893456000.5,
    "size": 6,
    "httpOnly": True,
    "secure": True,
    "session": False,
    "sameSite": "lax",
    "priority": "Medium",
}


def write_state(directory, cookies, user_agent="Mozilla/5.0 Test"):
    (directory / "cookies.json").write_text(json.dumps(cookies), encoding="utf-8")
    (directory / "userAgent.txt").write_text(user_agent, encoding="utf-8")


class TestNormalizeCookie:
    def test_keeps_playwright_fields_only(self):
        cookie = normalize_cookie(DEVTOOLS_COOKIE)
        assert cookie == {
            "name": "sid",
            "value": "abc",
            "domain": ".erank.com",
            "path": "/",
            "expires": 1893456000.5,
            "httpOnly": True,
            "secure": True,
            "sameSite": "Lax",
        }

    def test_session_cookie_loses_expiry(self):
        cookie = normalize_cookie({**DEVTOOLS_COOKIE, "expires": -1})
        assert "expires" not in cookie

    def test_unknown_same_site_dropped(self):
        cookie = normalize_cookie({**DEVTOOLS_COOKIE, "sameSite": "unspecified"})
        assert "sameSite" not in cookie

    def test_default_path(self):
        raw = {"name": "a", "value": "b", "domain": "erank.com"}
        assert normalize_cookie(raw)["path"] == "/"

    def test_missing_name_raises(self):
        with pytest.raises(BrowserStateError):
            normalize_cookie({"value": "b", "domain": "erank.com"})

    def test_missing_domain_and_url_raises(self):
        with pytest.raises(BrowserStateError, match="neither domain nor url"):
            normalize_cookie({"name": "a", "value": "b"})

    def test_url_accepted_without_domain(self):
        cookie = normalize_cookie({"name": "a", "value": "b", "url": "https://erank.com"})
        assert cookie["url"] == "https://erank.com"


class TestLoadBrowserState:
    def test_loads_both_files(self, tmp_path):
        write_state(tmp_path, [DEVTOOLS_COOKIE], user_agent="  Mozilla/5.0 Test\n")

        state = load_browser_state(tmp_path)

        assert state.user_agent == "Mozilla/5.0 Test"
        assert len(state.cookies) == 1
        assert state.cookies[0]["sameSite"] == "Lax"

    def test_missing_cookies_file(self, tmp_path):
        (tmp_path / "userAgent.txt").write_text("UA")
        with pytest.raises(BrowserStateError, match="cookies.json"):
            load_browser_state(tmp_path)

    def test_missing_user_agent_file(self, tmp_path):
        (tmp_path / "cookies.json").write_text("[]")
        with pytest.raises(BrowserStateError, match="userAgent.txt"):
            load_browser_state(tmp_path)

    def test_invalid_json(self, tmp_path):
        (tmp_path / "cookies.json").write_text("{not json")
        (tmp_path / "userAgent.txt").write_text("UA")
        with pytest.raises(BrowserStateError, match="not valid JSON"):
            load_browser_state(tmp_path)

    def test_cookies_must_be_list(self, tmp_path):
        write_state(tmp_path, {"name": "sid"})
        with pytest.raises(BrowserStateError, match="list"):
            load_browser_state(tmp_path)

    def test_empty_user_agent(self, tmp_path):
        write_state(tmp_path, [], user_agent="   ")
        with pytest.raises(BrowserStateError, match="empty"):
            load_browser_state(tmp_path)

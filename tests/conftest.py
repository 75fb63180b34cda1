"""Shared test fixtures."""

import csv
from unittest.mock import MagicMock

import pytest

from listing_refresh.etsy.api_client import EtsyAPIClient
from listing_refresh.models import AppSession, TEMPLATE_FIELDNAMES


def make_response(status_code=200, json_data=None, text=""):
    """Build a fake requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = json_data if json_data is not None else {}
    response.text = text
    return response


def listing_json(listing_id, title="Listing", tags=None, section_id=None):
    """One entry of the Etsy listings 'results' array."""
    return {
        "listing_id": listing_id,
        "title": title,
        "tags": tags if tags is not None else [],
        "shop_section_id": section_id,
    }


def write_template(path, rows, fieldnames=None):
    """Write template rows to a CSV file; missing cells are left empty."""
    fieldnames = fieldnames or TEMPLATE_FIELDNAMES
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(rows)
    return path


def read_rows(path):
    with open(path, encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        return reader.fieldnames, list(reader)


@pytest.fixture
def app_session():
    return AppSession(api_key="key_test", access_token="123.tok_test", shop_id="55555", first_name="Ada")


@pytest.fixture
def client(app_session):
    """Create a client with rate limiting disabled for fast tests."""
    c = EtsyAPIClient(app_session)
    c.min_request_interval = 0  # Disable rate limiting in tests
    return c


@pytest.fixture
def mock_client(app_session):
    """A MagicMock standing in for EtsyAPIClient in stage tests."""
    c = MagicMock(spec=EtsyAPIClient)
    c.app_session = app_session
    return c


@pytest.fixture
def template_row():
    """Factory for template rows with every column present."""
    def _make(values=None):
        row = {field: "" for field in TEMPLATE_FIELDNAMES}
        row.update(values or {})
        return row
    return _make

"""
Etsy API Client

Shared client for the Etsy Open API v3.
Handles authentication headers, rate limiting, pagination and error handling.
"""

import logging
import time
from pathlib import Path
from typing import Dict, Iterator, Optional

import requests

from ..errors import RemoteApiError
from ..models import AppSession, ListingRecord

logger = logging.getLogger(__name__)

SUCCESS = "Success"
FAILED = "Failed"


class EtsyAPIClient:
    """
    Shared client for the Etsy Open API.

    Handles:
    - Authentication (x-api-key + OAuth bearer token)
    - Rate limiting (10 requests/second by default)
    - Offset pagination of shop listings
    - Multipart uploads, with retries for media posts

    Only post_multipart retries on its own. Every other call reports failure
    once and leaves the decision to skip or abort to the caller.

    Usage:
        client = EtsyAPIClient(session)
        for listing in client.list_active_listings(session.shop_id):
            ...
    """

    BASE_URL = "https://openapi.etsy.com/v3/application"
    PAGE_SIZE = 100

    def __init__(
        self,
        session: AppSession,
        base_url: Optional[str] = None,
        timeout: int = 30,
        min_request_interval: float = 0.1,
    ):
        """
        Initialize the API client.

        Args:
            session: Per-run credentials and shop identity
            base_url: Override for the API root (tests, sandboxes)
            timeout: Request timeout in seconds
            min_request_interval: Minimum seconds between requests
        """
        self.app_session = session
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout

        self.session = requests.Session()
        self.session.headers.update({
            "x-api-key": session.api_key,
            "Authorization": f"Bearer {session.access_token}",
            "Accept": "application/json",
        })

        # Rate limiting
        self.requests_made = 0
        self.last_request_time = 0.0
        self.min_request_interval = min_request_interval

    @classmethod
    def from_settings(cls, session: AppSession, settings: Dict) -> "EtsyAPIClient":
        """Build a client from the 'api' section of the loaded settings."""
        api = settings.get("api", {})
        client = cls(
            session,
            base_url=api.get("base_url"),
            timeout=api.get("timeout", 30),
            min_request_interval=api.get("min_request_interval", 0.1),
        )
        client.PAGE_SIZE = api.get("page_size", cls.PAGE_SIZE)
        return client

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def _rate_limit(self):
        """Space requests at least min_request_interval apart."""
        now = time.time()
        elapsed = now - self.last_request_time

        if elapsed < self.min_request_interval:
            time.sleep(self.min_request_interval - elapsed)

        self.last_request_time = time.time()
        self.requests_made += 1

    @staticmethod
    def _error_body(response: requests.Response):
        try:
            return response.json()
        except ValueError:
            return response.text[:200]

    def request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """
        Make a single API request.

        Args:
            method: HTTP method
            endpoint: Path below the API root, or an absolute URL
            **kwargs: Passed through to requests (params, json, data, files)

        Returns:
            The successful response

        Raises:
            RemoteApiError: On network failure or non-2xx status
        """
        url = endpoint if endpoint.startswith("http") else self.url(endpoint)
        self._rate_limit()

        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise RemoteApiError(None, str(e)) from e

        if not response.ok:
            raise RemoteApiError(response.status_code, self._error_body(response))

        return response

    def test_connection(self) -> bool:
        """
        Test API connection with the ping endpoint.

        Returns:
            True if connection successful
        """
        try:
            result = self.request("GET", "openapi-ping").json()
        except (RemoteApiError, ValueError) as e:
            logger.error("Connection test failed: %s", e)
            return False
        logger.info("Connected to Etsy API (application %s)", result.get("application_id"))
        return True

    # ── Catalog reads ─────────────────────────────────────────────────────────

    def list_categories(self, shop_id: str) -> Dict[int, str]:
        """
        Fetch shop sections as a section id -> title mapping.

        Raises:
            RemoteApiError: If the sections request fails
        """
        data = self.request("GET", f"shops/{shop_id}/sections").json()
        return {
            section["shop_section_id"]: section.get("title", "")
            for section in data.get("results", [])
        }

    def list_active_listings(self, shop_id: str) -> Iterator[ListingRecord]:
        """
        Page through every active listing of a shop.

        The total comes from the 'count' field and is refreshed from each page,
        so listings added or removed during the export move the end point.
        A failed page is logged and its listings are dropped; paging goes on
        with the next offset.

        Raises:
            RemoteApiError: If the first page fails (the total is unknown)
        """
        endpoint = f"shops/{shop_id}/listings"
        offset = 0
        total_count: Optional[int] = None

        while total_count is None or offset < total_count:
            params = {"state": "active", "limit": self.PAGE_SIZE, "offset": offset}
            try:
                data = self.request("GET", endpoint, params=params).json()
            except (RemoteApiError, ValueError) as e:
                if total_count is None:
                    raise RemoteApiError(
                        getattr(e, "status", None), getattr(e, "body", str(e)),
                        message=f"Could not read first listings page: {e}",
                    ) from e
                logger.error("Listings page at offset %d failed, skipping: %s", offset, e)
                offset += self.PAGE_SIZE
                continue

            count = int(data.get("count", 0))
            if total_count is not None and count != total_count:
                logger.warning("Active listing count changed during export: %d -> %d",
                               total_count, count)
            total_count = count

            results = data.get("results", [])
            logger.debug("Listings offset %d: %d results (total %d)", offset, len(results), total_count)
            for item in results:
                yield ListingRecord.from_api(item)

            offset += self.PAGE_SIZE

    # ── Catalog mutations ─────────────────────────────────────────────────────

    def patch_listing(self, shop_id: str, listing_id: str, title: str, tags: str) -> bool:
        """
        Update a listing's title and tags.

        Args:
            shop_id: Etsy shop id
            listing_id: Listing to update
            title: New title
            tags: Comma-joined tag string

        Returns:
            True if Etsy accepted the update
        """
        try:
            self.request(
                "PATCH",
                f"shops/{shop_id}/listings/{listing_id}",
                json={"title": title, "tags": tags},
            )
        except RemoteApiError as e:
            logger.error("Error updating listing %s (%s): %s", listing_id, title[:50], e)
            return False

        logger.info("Updated listing %s: %s", listing_id, title[:50])
        return True

    def upload_listing_image(
        self,
        shop_id: str,
        listing_id: str,
        image_bytes: bytes,
        filename: str,
        rank: int,
        overwrite: bool = True,
    ) -> Dict:
        """
        Upload one image to a listing at the given rank.

        Returns:
            The created ListingImage resource ({} when the body is not JSON)

        Raises:
            RemoteApiError: With Etsy's 'error' message when the upload is rejected
        """
        try:
            response = self.request(
                "POST",
                f"shops/{shop_id}/listings/{listing_id}/images",
                data={"rank": str(rank), "overwrite": "true" if overwrite else "false"},
                files={"image": (filename, image_bytes)},
            )
        except RemoteApiError as e:
            if isinstance(e.body, dict) and "error" in e.body:
                raise RemoteApiError(e.status, e.body, message=str(e.body["error"])) from e
            raise

        try:
            return response.json()
        except ValueError:
            logger.warning("Image %s uploaded to listing %s, but the response was not JSON",
                           filename, listing_id)
            return {}

    def post_multipart(
        self,
        url: str,
        data: Optional[Dict] = None,
        files: Optional[Dict] = None,
        retries: int = 3,
    ) -> str:
        """
        POST a multipart form, retrying immediately on any failure.

        Args:
            url: Endpoint path or absolute URL
            data: Form fields
            files: Files as accepted by requests
            retries: Extra attempts after the first one

        Returns:
            "Success" or, once retries are exhausted, "Failed"
        """
        attempts = retries + 1
        for attempt in range(1, attempts + 1):
            try:
                self.request("POST", url, data=data, files=files)
                return SUCCESS
            except RemoteApiError as e:
                logger.error("Failed API call for %s (attempt %d/%d): %s", url, attempt, attempts, e)

        logger.error("No more retries left for %s", url)
        return FAILED

    def upload_listing_video(
        self,
        shop_id: str,
        listing_id: str,
        video_path: str | Path,
        retries: int = 3,
    ) -> str:
        """
        Upload a video file to a listing through post_multipart.

        Returns:
            "Success" or "Failed"
        """
        video_path = Path(video_path)
        video_bytes = video_path.read_bytes()
        return self.post_multipart(
            f"shops/{shop_id}/listings/{listing_id}/videos",
            data={"name": video_path.name},
            files={"video": (video_path.name, video_bytes)},
            retries=retries,
        )

"""
Per-run session data.

Constructed once by the caller and passed to every component that talks to
Etsy, instead of reading credentials from module-level state.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class AppSession:
    """Credentials and shop identity for one run."""
    api_key: str
    access_token: str
    shop_id: str
    first_name: str = ""

    def __repr__(self) -> str:
        # Keep the bearer token out of logs
        return f"AppSession(shop_id={self.shop_id!r}, first_name={self.first_name!r})"

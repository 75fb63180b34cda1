"""
Listing data model.

Read-only snapshot of an active Etsy listing as returned by the Open API.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class ListingRecord:
    """Active listing snapshot."""
    listing_id: int
    title: str
    tags: List[str] = field(default_factory=list)
    section_id: Optional[int] = None     # Etsy shop_section_id
    category: Optional[str] = None       # Section title, when resolved

    @classmethod
    def from_api(cls, data: dict) -> "ListingRecord":
        """Build a record from one entry of the listings 'results' array."""
        return cls(
            listing_id=data["listing_id"],
            title=data.get("title") or "",
            tags=list(data.get("tags") or []),
            section_id=data.get("shop_section_id"),
        )

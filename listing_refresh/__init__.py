"""
Etsy Listing Refresh Tool

Modules:
    models    - Data models (ListingRecord, template columns, stage outcomes)
    common    - Shared utilities (config loader, CSV utils, logging)
    etsy      - Etsy Open API client, template export and reimport stages
    research  - Keyword research enrichment through an automated browser
"""

__version__ = "0.1.0"

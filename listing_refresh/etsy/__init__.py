"""
Etsy integration modules.

Modules:
    api_client - Shared client for the Etsy Open API v3
    template_exporter - Active listings to template CSV
    title_tag_updater - Title/tag reimport from a completed template
    image_uploader - Ranked mockup image upload
"""

from .api_client import FAILED, SUCCESS, EtsyAPIClient
from .image_uploader import ListingImageUploader, image_sort_key, list_mockup_images
from .template_exporter import ExportResult, ListingTemplateExporter, listing_to_row
from .title_tag_updater import TitleTagUpdater, collect_tags

__all__ = [
    # API Client
    'EtsyAPIClient',
    'SUCCESS',
    'FAILED',
    # Export
    'ExportResult',
    'ListingTemplateExporter',
    'listing_to_row',
    # Reimport
    'TitleTagUpdater',
    'collect_tags',
    'ListingImageUploader',
    'image_sort_key',
    'list_mockup_images',
]

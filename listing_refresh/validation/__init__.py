"""Input validation for template spreadsheets."""

from .template_validator import (
    ENRICHMENT_SCHEMA,
    IMAGE_UPLOAD_SCHEMA,
    TITLE_TAG_SCHEMA,
    TemplateSchema,
    load_template,
)

__all__ = [
    'ENRICHMENT_SCHEMA',
    'IMAGE_UPLOAD_SCHEMA',
    'TITLE_TAG_SCHEMA',
    'TemplateSchema',
    'load_template',
]

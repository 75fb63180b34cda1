"""
Configuration Loader

Loads YAML settings (API endpoint, working directories, browser research
timings) and builds the per-run AppSession from environment credentials.
"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..errors import ConfigError
from ..models.session import AppSession

logger = logging.getLogger(__name__)

SETTINGS_FILE = 'settings.yaml'

DEFAULT_SETTINGS: Dict[str, Any] = {
    'api': {
        'base_url': 'https://openapi.etsy.com/v3/application',
        'timeout': 30,
        'min_request_interval': 0.1,
        'page_size': 100,
    },
    'paths': {
        'export_dir': 'output',
        'research_dir': 'output',
        'images_dir': 'listing_images',
        'browser_state_dir': 'database',
    },
    'research': {
        'explorer_url': 'https://erank.com/keyword-explorer?country=USA&source=etsy',
        'headless': False,
        'executable_path': None,
        'input_selector': 'input[name="keywords"]',
        'input_index': 1,
        'result_selector': 'tr > td > a[title]',
        'max_results': 10,
        'input_timeout_ms': 20000,
        'navigation_timeout_ms': 60000,
        'initial_settle_ms': 10000,
        'settle_timeout_ms': 10000,
        'settle_fallback_ms': 2000,
    },
    'images': {
        'max_images': 10,
        'extensions': ['.jpg', '.png'],
    },
}


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file from the config directory.

    Args:
        filename: Name of the config file (e.g., 'settings.yaml')

    Returns:
        Parsed YAML content as dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(path: Optional[str | Path] = None) -> Dict[str, Any]:
    """
    Load application settings layered over the built-in defaults.

    Args:
        path: Explicit settings file. If None, config/settings.yaml is used
              when present, otherwise the defaults alone.

    Returns:
        Settings dictionary with 'api', 'paths', 'research' and 'images' sections
    """
    if path is not None:
        with open(path, 'r', encoding='utf-8') as f:
            overrides = yaml.safe_load(f) or {}
    else:
        try:
            overrides = load_config(SETTINGS_FILE)
        except FileNotFoundError:
            logger.debug("No %s found, using default settings", SETTINGS_FILE)
            overrides = {}

    return _merge(DEFAULT_SETTINGS, overrides)


def load_app_session(
    api_key: Optional[str] = None,
    access_token: Optional[str] = None,
    shop_id: Optional[str] = None,
    first_name: Optional[str] = None,
) -> AppSession:
    """
    Build the per-run AppSession from explicit values or the environment.

    Explicit arguments win over ETSY_API_KEY, ETSY_ACCESS_TOKEN, ETSY_SHOP_ID
    and ETSY_FIRST_NAME.

    Raises:
        ConfigError: If a required value is missing
    """
    api_key = api_key or os.environ.get('ETSY_API_KEY', '')
    access_token = access_token or os.environ.get('ETSY_ACCESS_TOKEN', '')
    shop_id = shop_id or os.environ.get('ETSY_SHOP_ID', '')
    first_name = first_name or os.environ.get('ETSY_FIRST_NAME', '')

    missing = [
        name for name, value in (
            ('ETSY_API_KEY', api_key),
            ('ETSY_ACCESS_TOKEN', access_token),
            ('ETSY_SHOP_ID', shop_id),
        ) if not value
    ]
    if missing:
        raise ConfigError(f"Missing required credentials: {', '.join(missing)}")

    return AppSession(
        api_key=api_key,
        access_token=access_token,
        shop_id=str(shop_id),
        first_name=first_name,
    )

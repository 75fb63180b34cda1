"""Tests for listing_refresh/common/config_loader.py"""

import pytest

from listing_refresh.common.config_loader import (
    DEFAULT_SETTINGS,
    load_app_session,
    load_config,
    load_settings,
)
from listing_refresh.errors import ConfigError


class TestLoadSettings:
    def test_repo_settings_have_all_sections(self):
        settings = load_settings()
        for section in ("api", "paths", "research", "images"):
            assert section in settings

    def test_repo_settings_values(self):
        settings = load_settings()
        assert settings["api"]["page_size"] == 100
        assert settings["research"]["input_index"] == 1
        assert settings["images"]["max_images"] == 10

    def test_explicit_file_overrides_defaults(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("research:\n  headless: true\n  max_results: 5\n", encoding="utf-8")

        settings = load_settings(path)

        assert settings["research"]["headless"] is True
        assert settings["research"]["max_results"] == 5
        # Untouched keys come from the defaults
        assert settings["research"]["input_timeout_ms"] == 20000
        assert settings["api"]["base_url"] == DEFAULT_SETTINGS["api"]["base_url"]

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("", encoding="utf-8")
        assert load_settings(path) == DEFAULT_SETTINGS

    def test_defaults_not_mutated(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("paths:\n  images_dir: elsewhere\n", encoding="utf-8")
        load_settings(path)
        assert DEFAULT_SETTINGS["paths"]["images_dir"] == "listing_images"

    def test_load_config_missing_file(self):
        with pytest.raises(FileNotFoundError):
            load_config("nonexistent_file.yaml")


class TestLoadAppSession:
    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ("ETSY_API_KEY", "ETSY_ACCESS_TOKEN", "ETSY_SHOP_ID", "ETSY_FIRST_NAME"):
            monkeypatch.delenv(name, raising=False)

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("ETSY_API_KEY", "key")
        monkeypatch.setenv("ETSY_ACCESS_TOKEN", "tok")
        monkeypatch.setenv("ETSY_SHOP_ID", "42")
        monkeypatch.setenv("ETSY_FIRST_NAME", "Ada")

        session = load_app_session()

        assert session.api_key == "key"
        assert session.access_token == "tok"
        assert session.shop_id == "42"
        assert session.first_name == "Ada"

    def test_explicit_values_win(self, monkeypatch):
        monkeypatch.setenv("ETSY_SHOP_ID", "42")
        session = load_app_session(api_key="k", access_token="t", shop_id="7")
        assert session.shop_id == "7"

    def test_missing_values_named_in_error(self, monkeypatch):
        monkeypatch.setenv("ETSY_API_KEY", "key")
        with pytest.raises(ConfigError, match="ETSY_ACCESS_TOKEN, ETSY_SHOP_ID"):
            load_app_session()

    def test_repr_hides_token(self):
        session = load_app_session(api_key="k", access_token="secret-token", shop_id="7")
        assert "secret-token" not in repr(session)

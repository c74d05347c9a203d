# tests/test_repository.py
"""
Tests for configuration loading.
"""

import pytest

from uiauto_appstore.exceptions import ConfigError
from uiauto_appstore.repository import AppConfig, Labels, Repository


def _write(tmp_path, text):
    path = tmp_path / "appstore.yaml"
    path.write_text(text, encoding="utf-8")
    return str(path)


class TestRepository:
    """Tests for Repository."""

    def test_defaults_without_file(self):
        """No file should mean built-in defaults."""
        repo = Repository()
        assert repo.app == AppConfig()
        assert repo.app.bundle_id == "com.apple.appstore"
        assert repo.labels.sign_in_menu == "Sign In…"
        assert repo.timeout_overrides == {}

    def test_empty_file(self, tmp_path):
        """An empty file should load as defaults."""
        repo = Repository(_write(tmp_path, ""))
        assert repo.labels == Labels()

    def test_overrides(self, tmp_path):
        """Values from the file should replace the defaults they name."""
        repo = Repository(_write(tmp_path, """
app:
  timing_preset: ci
labels:
  store_menu: Magasin
  sign_out: Déconnexion
timeouts:
  install_wait:
    timeout: 1200
"""))
        assert repo.app.timing_preset == "ci"
        assert repo.app.name == "App Store"
        assert repo.labels.store_menu == "Magasin"
        assert repo.labels.sign_out == "Déconnexion"
        assert repo.labels.purchases == "Purchases"
        assert repo.timeout_overrides == {"install_wait": {"timeout": 1200}}

    def test_missing_file(self, tmp_path):
        """A missing file should raise ConfigError."""
        with pytest.raises(ConfigError, match="not found"):
            Repository(str(tmp_path / "nope.yaml"))

    def test_invalid_yaml(self, tmp_path):
        """Broken YAML should raise ConfigError."""
        with pytest.raises(ConfigError, match="Invalid YAML"):
            Repository(_write(tmp_path, "app: [unclosed"))

    def test_non_mapping_root(self, tmp_path):
        """A list at the root should raise ConfigError."""
        with pytest.raises(ConfigError, match="mapping"):
            Repository(_write(tmp_path, "- a\n- b\n"))

    def test_unknown_label_rejected(self, tmp_path):
        """Unknown keys should fail schema validation with their path."""
        with pytest.raises(ConfigError) as exc_info:
            Repository(_write(tmp_path, "labels:\n  shop_menu: Store\n"))
        assert "Invalid configuration" in str(exc_info.value)

    def test_bad_preset_rejected(self, tmp_path):
        """Only known timing presets should validate."""
        with pytest.raises(ConfigError) as exc_info:
            Repository(_write(tmp_path, "app:\n  timing_preset: warp\n"))
        assert "app.timing_preset" in str(exc_info.value)

    def test_non_positive_timeout_rejected(self, tmp_path):
        """Timeouts must be positive."""
        with pytest.raises(ConfigError):
            Repository(_write(tmp_path, "timeouts:\n  sign_in:\n    timeout: 0\n"))

    def test_list_labels(self):
        """list_labels should name every configurable label."""
        names = Repository().list_labels()
        assert "account_prefix" in names
        assert "purchases_toolbar_id" in names

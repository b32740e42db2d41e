"""Unit tests for PortalSettings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from student_hub.config import PortalSettings


class TestPortalSettings:
    """Tests for settings loading."""

    def test_defaults(self) -> None:
        """Defaults point at a local backend with 12-item pages."""
        settings = PortalSettings()
        assert settings.base_url == "http://localhost:5000"
        assert settings.api_prefix == "/api"
        assert settings.page_size == 12

    def test_from_yaml_nested(self, tmp_path: Path) -> None:
        """from_yaml reads the api and logging sections."""
        path = tmp_path / "hub.yaml"
        path.write_text(
            """
api:
  base_url: https://hub.example.edu
  timeout: 5
  page_size: 24
logging:
  level: debug
"""
        )
        settings = PortalSettings.from_yaml(path)
        assert settings.base_url == "https://hub.example.edu"
        assert settings.timeout == 5.0
        assert settings.page_size == 24
        assert settings.log_level == "DEBUG"

    def test_from_yaml_flat(self, tmp_path: Path) -> None:
        """from_yaml supports top-level keys."""
        path = tmp_path / "hub.yaml"
        path.write_text("base_url: http://10.0.0.2:5000\nlog_level: info\n")
        settings = PortalSettings.from_yaml(path)
        assert settings.base_url == "http://10.0.0.2:5000"
        assert settings.log_level == "INFO"

    def test_from_env_overrides_yaml(self, tmp_path: Path) -> None:
        """STUDENT_HUB_* variables win over the YAML file named by STUDENT_HUB_CONFIG."""
        path = tmp_path / "hub.yaml"
        path.write_text("api:\n  base_url: https://hub.example.edu\n  page_size: 24\n")
        environ = {
            "STUDENT_HUB_CONFIG": str(path),
            "STUDENT_HUB_PAGE_SIZE": "6",
            "STUDENT_HUB_TIMEOUT": "2.5",
        }
        settings = PortalSettings.from_env(environ=environ)
        assert settings.base_url == "https://hub.example.edu"
        assert settings.page_size == 6
        assert settings.timeout == 2.5

    def test_from_env_without_file(self) -> None:
        """No config file falls back to defaults."""
        settings = PortalSettings.from_env(environ={})
        assert settings == PortalSettings()

    def test_invalid_page_size(self) -> None:
        """page_size must be at least 1."""
        with pytest.raises(ValidationError):
            PortalSettings(page_size=0)

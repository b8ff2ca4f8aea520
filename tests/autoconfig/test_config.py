"""Tests for autoconfig.config module."""

import os
from unittest.mock import patch

import pytest

from autoconfig.config import AutoConfigSettings


class TestAutoConfigSettings:
    """Tests for AutoConfigSettings dataclass."""

    def test_default_values(self):
        """Test default configuration values."""
        settings = AutoConfigSettings()
        assert settings.namespaces == ()
        assert settings.manifest_path is None
        assert settings.strict_imports is True
        assert settings.uses_manifest is False

    def test_immutability(self):
        """Test that settings are frozen (immutable)."""
        settings = AutoConfigSettings()
        with pytest.raises(Exception):  # FrozenInstanceError
            settings.namespaces = ("other",)

    def test_from_env_defaults(self):
        """Test from_env with no environment variables set."""
        with patch.dict(os.environ, {}, clear=True):
            settings = AutoConfigSettings.from_env()
            assert settings.namespaces == ()
            assert settings.manifest_path is None
            assert settings.strict_imports is True

    def test_from_env_custom(self):
        """Test from_env with environment variables."""
        env = {
            "AUTOCONFIG_NAMESPACES": "shop, demo ,,",
            "AUTOCONFIG_MANIFEST": "/etc/service/autoconfig.yaml",
            "AUTOCONFIG_STRICT_IMPORTS": "false",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = AutoConfigSettings.from_env()
            assert settings.namespaces == ("shop", "demo")
            assert settings.manifest_path == "/etc/service/autoconfig.yaml"
            assert settings.strict_imports is False
            assert settings.uses_manifest is True

    def test_empty_manifest_env_ignored(self):
        with patch.dict(os.environ, {"AUTOCONFIG_MANIFEST": ""}, clear=True):
            assert AutoConfigSettings.from_env().manifest_path is None

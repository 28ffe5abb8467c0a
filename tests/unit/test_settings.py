"""Unit tests for settings singleton"""

import pytest
from displaystage.common.settings import Settings, settings


class TestSettingsSingleton:
    """Test Settings singleton pattern"""

    def test_singleton_same_instance(self, reset_settings):
        """Test that Settings() returns same instance"""
        assert Settings() is Settings()

    def test_global_settings_is_singleton(self, reset_settings):
        """Test that global 'settings' is the singleton"""
        assert settings is Settings()


class TestSettingsConstants:
    """Test engine constants"""

    def test_reconciliation_constants(self):
        """Test synthesized video mode constants"""
        assert settings.FULLSCREEN_BIT_DEPTH == 32
        assert settings.MILLIHERTZ_PER_HERTZ == 1000.0


class TestSettingsInitialization:
    """Test settings initialization with config"""

    def test_initialize_with_config(self, reset_settings, sample_config):
        """Test settings can be initialized with config"""
        settings.initialize(sample_config)
        assert settings.config is sample_config

    def test_config_property_before_init_raises(self, reset_settings):
        """Test accessing config before initialization raises error"""
        with pytest.raises(RuntimeError, match="Settings not initialized"):
            _ = settings.config

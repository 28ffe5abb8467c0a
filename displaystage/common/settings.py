"""Application settings singleton - single source of truth for configuration

This module provides a singleton Settings class that consolidates:
1. Reconciliation constants (synthesized video mode parameters)
2. Runtime configuration from config.yml

Usage:
    from displaystage.common.settings import settings

    # Initialize once at startup with loaded config
    config = ConfigLoader.config_load()
    settings.initialize(config)

    # Use anywhere in the application
    VideoMode(width, height, settings.FULLSCREEN_BIT_DEPTH, refresh)
"""

from typing import Optional

from displaystage.common.config import Config


class Settings:
    """Singleton settings manager combining config.yml and engine constants

    This class provides:
    - Constants the reconciliation engine relies on
    - Access to runtime configuration loaded from config.yml

    The singleton pattern ensures all parts of the application use the same
    configuration values.
    """

    _instance: Optional["Settings"] = None

    def __new__(cls) -> "Settings":
        """Ensure only one Settings instance exists"""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize settings singleton (only runs once)"""
        if hasattr(self, "_initialized") and self._initialized:
            return
        self._initialized = True
        self._config: Optional[Config] = None

    def initialize(self, config: Config) -> None:
        """
        Initialize with loaded configuration

        Args:
            config: Parsed application configuration
        """
        self._config = config

    # =========================================================================
    # Reconciliation Constants
    # =========================================================================

    FULLSCREEN_BIT_DEPTH: int = 32
    """Bit depth of a video mode synthesized from a staged resolution

    Monitors do not report which depth a requested resolution would run at,
    so synthesized fullscreen video modes always assume 32-bit color.
    """

    MILLIHERTZ_PER_HERTZ: float = 1000.0
    """Convert refresh rates in millihertz to hertz for read-out text"""

    # =========================================================================
    # Runtime Configuration Access
    # =========================================================================

    @property
    def config(self) -> Config:
        """
        Get loaded configuration object

        Raises:
            RuntimeError: If initialize() has not been called
        """
        if self._config is None:
            raise RuntimeError("Settings not initialized. Call settings.initialize(config) first.")
        return self._config


# Global singleton instance
settings = Settings()
"""Global settings singleton instance

Import this anywhere in the application:
    from displaystage.common.settings import settings
"""

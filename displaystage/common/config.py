"""Configuration file loading and management"""

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from displaystage.common.types import PresentMode


@dataclass
class SurfaceConfig:
    """Initial state of the managed display surface"""
    width: int
    height: int
    scale_factor: float
    present_mode: PresentMode


@dataclass
class PresetsConfig:
    """Values offered as stageable controls"""
    resolutions: List[Tuple[int, int]]
    scale_factors: List[Optional[float]]  # None stands for "reset to automatic"
    present_modes: List[PresentMode]


@dataclass
class StaticMonitorConfig:
    """One monitor of a config-defined topology"""
    name: Optional[str]
    width: int
    height: int
    refresh_rate_millihertz: Optional[int]
    scale_factor: float
    primary: bool
    video_modes: List[Tuple[int, int, int]]  # (width, height, refresh mHz)


@dataclass
class TopologyConfig:
    """Monitor topology source settings"""
    backend: str  # "x11" or "static"
    display: Optional[str]
    monitors: List[StaticMonitorConfig] = field(default_factory=list)


@dataclass
class LoggingConfig:
    """Logging configuration settings"""
    level: str
    file: Optional[str]
    format: str
    engine_level: Optional[str] = None  # None follows the root level
    engine_tags: Optional[List[str]] = None  # None keeps every engine tag


@dataclass
class Config:
    """Complete application configuration"""
    surface: SurfaceConfig
    presets: PresetsConfig
    topology: TopologyConfig
    logging: LoggingConfig


class ConfigLoader:
    """Loads and parses configuration from YAML files"""

    DEFAULT_CONFIG_PATHS = [
        "config.yml",
        "~/.config/displaystage/config.yml",
        "/etc/displaystage/config.yml",
    ]

    TOPOLOGY_BACKENDS = ("x11", "static")
    ENGINE_LOG_TAGS = ("STAGE", "COMMIT", "CANCEL")

    @staticmethod
    def configFile_find() -> Optional[Path]:
        """
        Find configuration file in standard locations

        Returns:
            Path to config file, or None if not found
        """
        for config_path in ConfigLoader.DEFAULT_CONFIG_PATHS:
            path = Path(config_path).expanduser().resolve()
            if path.exists() and path.is_file():
                return path
        return None

    @staticmethod
    def yaml_load(file_path: Path) -> Dict[str, Any]:
        """
        Load YAML configuration file

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed configuration dictionary

        Raises:
            FileNotFoundError: If file does not exist
            yaml.YAMLError: If file is not valid YAML
        """
        with open(file_path, "r") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Config file {file_path} must contain a YAML dictionary")

        return data

    @staticmethod
    def presentMode_parse(token: str) -> PresentMode:
        """
        Parse a present mode token such as `auto_vsync`

        Raises:
            ValueError: If token names no known present mode
        """
        try:
            return PresentMode(str(token).lower())
        except ValueError:
            valid = ", ".join(mode.value for mode in PresentMode)
            raise ValueError(f"Unknown present mode '{token}' (expected one of: {valid})") from None

    @staticmethod
    def config_parse(data: Dict[str, Any]) -> Config:
        """
        Parse configuration dictionary into Config object

        Args:
            data: Raw configuration dictionary

        Returns:
            Parsed Config object

        Raises:
            KeyError: If required configuration keys are missing
            ValueError: If a value is out of range or unknown
        """
        # Parse surface config
        surface_data = data["surface"]
        surface = SurfaceConfig(
            width=surface_data["width"],
            height=surface_data["height"],
            scale_factor=float(surface_data.get("scale_factor", 1.0)),
            present_mode=ConfigLoader.presentMode_parse(
                surface_data.get("present_mode", PresentMode.AUTO_VSYNC.value)
            ),
        )
        if surface.width <= 0 or surface.height <= 0:
            raise ValueError(f"Invalid surface size: {surface.width}x{surface.height}")
        if surface.scale_factor <= 0:
            raise ValueError(f"Invalid surface scale factor: {surface.scale_factor}")

        # Parse presets config
        presets_data = data.get("presets", {})
        presets = PresetsConfig(
            resolutions=[
                (int(width), int(height))
                for width, height in presets_data.get("resolutions", [])
            ],
            scale_factors=[
                None if value is None else float(value)
                for value in presets_data.get("scale_factors", [])
            ],
            present_modes=[
                ConfigLoader.presentMode_parse(token)
                for token in presets_data.get("present_modes", [])
            ],
        )
        for factor in presets.scale_factors:
            if factor is not None and (not math.isfinite(factor) or factor <= 0):
                raise ValueError(f"Invalid preset scale factor: {factor}")

        # Parse topology config
        topology_data = data.get("topology", {})
        backend = topology_data.get("backend", "x11")
        if backend not in ConfigLoader.TOPOLOGY_BACKENDS:
            raise ValueError(
                f"Unknown topology backend '{backend}' "
                f"(expected one of: {', '.join(ConfigLoader.TOPOLOGY_BACKENDS)})"
            )
        monitors = [
            StaticMonitorConfig(
                name=monitor_data.get("name"),
                width=monitor_data["width"],
                height=monitor_data["height"],
                refresh_rate_millihertz=monitor_data.get("refresh_rate_millihertz"),
                scale_factor=float(monitor_data.get("scale_factor", 1.0)),
                primary=bool(monitor_data.get("primary", False)),
                video_modes=[
                    (int(width), int(height), int(refresh))
                    for width, height, refresh in monitor_data.get("video_modes", [])
                ],
            )
            for monitor_data in topology_data.get("monitors", [])
        ]
        topology = TopologyConfig(
            backend=backend,
            display=topology_data.get("display"),
            monitors=monitors,
        )

        # Parse logging config
        logging_data = data["logging"]
        logging = LoggingConfig(
            level=logging_data["level"],
            file=logging_data.get("file"),
            format=logging_data["format"],
            engine_level=logging_data.get("engine_level"),
            engine_tags=logging_data.get("engine_tags"),
        )
        if logging.engine_tags is not None:
            logging.engine_tags = [str(tag).upper() for tag in logging.engine_tags]
            unknown = [tag for tag in logging.engine_tags if tag not in ConfigLoader.ENGINE_LOG_TAGS]
            if unknown:
                raise ValueError(
                    f"Unknown engine log tag(s) {unknown} "
                    f"(expected any of: {', '.join(ConfigLoader.ENGINE_LOG_TAGS)})"
                )

        return Config(
            surface=surface,
            presets=presets,
            topology=topology,
            logging=logging,
        )

    @staticmethod
    def config_load(file_path: Optional[Path] = None) -> Config:
        """
        Load configuration from file

        Args:
            file_path: Optional path to config file. If None, searches standard locations.

        Returns:
            Parsed Config object

        Raises:
            FileNotFoundError: If config file not found
            ValueError: If config file is invalid
        """
        if file_path is None:
            file_path = ConfigLoader.configFile_find()
            if file_path is None:
                raise FileNotFoundError(
                    f"Config file not found in standard locations: "
                    f"{ConfigLoader.DEFAULT_CONFIG_PATHS}"
                )

        data = ConfigLoader.yaml_load(file_path)
        return ConfigLoader.config_parse(data)

    @staticmethod
    def configWithOverrides_load(
        file_path: Optional[Path] = None,
        **overrides: Any
    ) -> Config:
        """
        Load configuration and apply command-line overrides

        Args:
            file_path: Optional path to config file
            **overrides: Key-value pairs to override config values

        Returns:
            Config object with overrides applied

        Example:
            config = ConfigLoader.configWithOverrides_load(
                display=":1",
                topology_backend="static"
            )
        """
        config = ConfigLoader.config_load(file_path)

        if overrides.get("display") is not None:
            config.topology.display = overrides["display"]
        if overrides.get("topology_backend") is not None:
            backend = overrides["topology_backend"]
            if backend not in ConfigLoader.TOPOLOGY_BACKENDS:
                raise ValueError(f"Unknown topology backend '{backend}'")
            config.topology.backend = backend
        if overrides.get("log_level") is not None:
            config.logging.level = overrides["log_level"]

        return config

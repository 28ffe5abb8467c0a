"""displaystage command-line interface"""

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn

from displaystage import __version__
from displaystage.common.config import Config, ConfigLoader
from displaystage.common.logging_setup import logging_setup
from displaystage.common.settings import settings
from displaystage.common.types import Resolution
from displaystage.console import ConsoleApp
from displaystage.session import DisplayConfigSession
from displaystage.staging.controls import defaultControls_build
from displaystage.surface.state import DisplaySurface
from displaystage.topology.base import MonitorTopology, staticTopology_fromConfig

logger = logging.getLogger(__name__)


def arguments_parse(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command line arguments

    Args:
        argv: Argument list, None for sys.argv

    Returns:
        Parsed CLI arguments.
    """
    parser = argparse.ArgumentParser(
        prog="displaystage",
        description="Stage display configuration edits and apply them atomically",
    )

    parser.add_argument("--version", action="version", version=f"displaystage {__version__}")

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to config file (default: search standard locations)",
    )

    parser.add_argument(
        "--display", type=str, default=None, help="X11 display name (overrides config)"
    )

    parser.add_argument(
        "--topology",
        type=str,
        choices=list(ConfigLoader.TOPOLOGY_BACKENDS),
        default=None,
        help="Monitor topology source (overrides config)",
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging (overrides config)"
    )

    parser.add_argument(
        "--info", action="store_true", help="Enable info logging (overrides config)"
    )

    parser.add_argument(
        "--warning", action="store_true", help="Enable warning logging (overrides config)"
    )

    parser.add_argument(
        "--error", action="store_true", help="Enable error logging (overrides config)"
    )

    parser.add_argument(
        "--critical", action="store_true", help="Enable critical logging (overrides config)"
    )

    return parser.parse_args(argv)


def logLevelOverride_get(args: argparse.Namespace) -> str | None:
    """
    Resolve explicit log level override flags.

    Args:
        args: Parsed CLI args.

    Returns:
        Selected log level or None.
    """
    if args.critical:
        return "CRITICAL"
    if args.error:
        return "ERROR"
    if args.warning:
        return "WARNING"
    if args.info:
        return "INFO"
    if args.debug:
        return "DEBUG"
    return None


def topology_create(config: Config) -> MonitorTopology:
    """
    Build the configured monitor topology source.

    Args:
        config: Loaded configuration.

    Returns:
        Connected topology collaborator.
    """
    if config.topology.backend == "static":
        return staticTopology_fromConfig(config.topology.monitors)

    from displaystage.x11.topology import X11MonitorTopology

    topology = X11MonitorTopology(config.topology.display)
    topology.connection_establish()
    return topology


def surface_create(config: Config) -> DisplaySurface:
    """
    Build the live surface record from configured initial state.

    Args:
        config: Loaded configuration.
    """
    return DisplaySurface(
        resolution=Resolution(config.surface.width, config.surface.height),
        base_scale_factor=config.surface.scale_factor,
        present_mode=config.surface.present_mode,
    )


def session_run(args: argparse.Namespace) -> None:
    """
    Load config, wire collaborators and run the console front end.

    Args:
        args: Parsed CLI args.
    """
    config = ConfigLoader.configWithOverrides_load(
        Path(args.config) if args.config else None,
        display=args.display,
        topology_backend=args.topology,
        log_level=logLevelOverride_get(args),
    )
    settings.initialize(config)
    logging_setup(config.logging)

    topology = topology_create(config)
    logger.info("Using %s monitor topology", config.topology.backend)
    try:
        session = DisplayConfigSession(
            surface=surface_create(config),
            topology=topology,
            controls=defaultControls_build(config.presets),
        )
        ConsoleApp(session, sys.stdin, sys.stdout).run()
    finally:
        connection_close = getattr(topology, "connection_close", None)
        if connection_close is not None:
            connection_close()


def main() -> NoReturn:
    """Main entry point for the displaystage command"""
    args = arguments_parse()

    try:
        session_run(args)
        sys.exit(0)

    except KeyboardInterrupt:
        print("\nShutting down...")
        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

"""Monitor topology contract and in-memory implementation."""

from __future__ import annotations

import logging
from typing import Iterable, Protocol

from displaystage.common.config import StaticMonitorConfig
from displaystage.common.types import (
    Monitor,
    MonitorSelection,
    MonitorSelectionKind,
    Position,
    VideoMode,
)
from displaystage.common.settings import settings

logger = logging.getLogger(__name__)

__all__ = [
    "MonitorTopology",
    "StaticMonitorTopology",
    "monitorSelection_isValid",
    "topologyMaxRefreshRate_get",
    "staticTopology_fromConfig",
]


class MonitorTopology(Protocol):
    """Read-only enumeration of attached monitors."""

    def monitors_list(self) -> list[Monitor]:
        """
        Enumerate currently attached monitors.

        Returns:
            Monitors in positional order; indices are not stable identities.
        """
        ...


class StaticMonitorTopology:
    """Topology backed by an in-memory monitor list."""

    def __init__(self, monitors: Iterable[Monitor] = ()) -> None:
        """
        Initialize topology

        Args:
            monitors: Initial monitor list
        """
        self._monitors: list[Monitor] = list(monitors)

    def monitors_list(self) -> list[Monitor]:
        """Return a copy of the current monitor list"""
        return list(self._monitors)

    def monitors_replace(self, monitors: Iterable[Monitor]) -> None:
        """
        Replace the monitor list (hot-plug or unplug)

        Args:
            monitors: New monitor list
        """
        self._monitors = list(monitors)
        logger.debug("Static topology now has %d monitor(s)", len(self._monitors))


def staticTopology_fromConfig(monitor_configs: list[StaticMonitorConfig]) -> StaticMonitorTopology:
    """
    Build a static topology from config.yml monitor entries.

    Args:
        monitor_configs:
            Parsed `topology.monitors` entries.

    Returns:
        Topology listing one monitor per entry, laid out left to right.
    """
    monitors: list[Monitor] = []
    x_offset: int = 0
    for monitor_id, monitor_config in enumerate(monitor_configs):
        video_modes = tuple(
            VideoMode(
                width=width,
                height=height,
                bit_depth=settings.FULLSCREEN_BIT_DEPTH,
                refresh_rate_millihertz=refresh,
            )
            for width, height, refresh in monitor_config.video_modes
        )
        monitors.append(
            Monitor(
                monitor_id=monitor_id,
                name=monitor_config.name,
                physical_width=monitor_config.width,
                physical_height=monitor_config.height,
                refresh_rate_millihertz=monitor_config.refresh_rate_millihertz,
                scale_factor=monitor_config.scale_factor,
                position=Position(x=x_offset, y=0),
                is_primary=monitor_config.primary,
                video_modes=video_modes,
            )
        )
        x_offset += monitor_config.width
    return StaticMonitorTopology(monitors)


def monitorSelection_isValid(selection: MonitorSelection, monitors: list[Monitor]) -> bool:
    """
    Check whether a monitor selector still resolves against the topology.

    Only positional selectors can go stale; PRIMARY and CURRENT always
    resolve to something the windowing backend understands.

    Args:
        selection:
            Selector under evaluation.
        monitors:
            Current topology snapshot.

    Returns:
        `True` when the selector is usable.
    """
    if selection.kind != MonitorSelectionKind.INDEX:
        return True
    assert selection.index is not None
    return selection.index < len(monitors)


def topologyMaxRefreshRate_get(monitors: list[Monitor]) -> int | None:
    """
    Highest refresh rate among all video modes of all monitors.

    Args:
        monitors:
            Current topology snapshot.

    Returns:
        Refresh rate in millihertz, or `None` when no monitor reports any
        video mode.
    """
    rates: list[int] = [
        video_mode.refresh_rate_millihertz
        for monitor in monitors
        for video_mode in monitor.video_modes
    ]
    if not rates:
        return None
    return max(rates)

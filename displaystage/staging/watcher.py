"""Monitor count watcher regenerating move-to-monitor controls"""

from __future__ import annotations

import logging
from typing import Optional

from displaystage.staging.controls import Control, moveToMonitorControls_build
from displaystage.topology.base import MonitorTopology

logger = logging.getLogger(__name__)


class MonitorTopologyWatcher:
    """
    Detects monitor count changes between refresh cycles.

    Only the count is compared: swapping or reordering monitors without
    changing how many there are goes unnoticed.
    """

    def __init__(self) -> None:
        """Start with zero observed monitors and no controls"""
        self._monitor_count: int = 0
        self._controls: list[Control] = []

    @property
    def monitor_count(self) -> int:
        """Monitor count seen at the last poll"""
        return self._monitor_count

    @property
    def controls(self) -> list[Control]:
        """Move-to-monitor controls derived at the last change"""
        return list(self._controls)

    def topology_poll(self, topology: MonitorTopology) -> Optional[list[Control]]:
        """
        Re-check the topology once per refresh cycle

        Args:
            topology: Monitor topology to poll

        Returns:
            Regenerated controls when the count changed, else None
        """
        count = len(topology.monitors_list())
        if count == self._monitor_count:
            return None

        logger.info("Monitor count changed: %d -> %d", self._monitor_count, count)
        self._monitor_count = count
        self._controls = moveToMonitorControls_build(count)
        return self.controls

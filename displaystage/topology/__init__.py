"""Monitor topology collaborators."""

from displaystage.topology.base import (
    MonitorTopology,
    StaticMonitorTopology,
    monitorSelection_isValid,
    staticTopology_fromConfig,
    topologyMaxRefreshRate_get,
)

__all__ = [
    "MonitorTopology",
    "StaticMonitorTopology",
    "monitorSelection_isValid",
    "staticTopology_fromConfig",
    "topologyMaxRefreshRate_get",
]

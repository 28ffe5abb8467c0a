"""Unit tests for topology helpers and static topology"""

from displaystage.common.config import StaticMonitorConfig
from displaystage.common.types import MonitorSelection, Position
from displaystage.topology.base import (
    StaticMonitorTopology,
    monitorSelection_isValid,
    staticTopology_fromConfig,
    topologyMaxRefreshRate_get,
)


class TestMonitorSelectionValidity:
    """Test stale-index detection"""

    def test_index_in_range(self, monitors):
        """Test indices below the count are valid"""
        assert monitorSelection_isValid(MonitorSelection.at(0), monitors) is True
        assert monitorSelection_isValid(MonitorSelection.at(1), monitors) is True

    def test_index_out_of_range(self, monitors):
        """Test indices at or past the count are stale"""
        assert monitorSelection_isValid(MonitorSelection.at(2), monitors) is False

    def test_primary_and_current_always_valid(self):
        """Test non-positional selectors never go stale"""
        assert monitorSelection_isValid(MonitorSelection.primary(), []) is True
        assert monitorSelection_isValid(MonitorSelection.current(), []) is True


class TestMaxRefreshRate:
    """Test topology-wide refresh maximum"""

    def test_max_across_monitors(self, monitors):
        """Test max spans every monitor's video modes"""
        assert topologyMaxRefreshRate_get(monitors) == 144000

    def test_empty_topology(self):
        """Test empty topology has no maximum"""
        assert topologyMaxRefreshRate_get([]) is None


class TestStaticTopology:
    """Test in-memory topology"""

    def test_monitors_list_is_copy(self, monitors):
        """Test callers cannot mutate the topology through the list"""
        topology = StaticMonitorTopology(monitors)
        listed = topology.monitors_list()
        listed.clear()
        assert len(topology.monitors_list()) == 2

    def test_from_config(self):
        """Test config entries become monitors laid out left to right"""
        topology = staticTopology_fromConfig(
            [
                StaticMonitorConfig("A", 2560, 1440, 144000, 1.0, True, [(2560, 1440, 144000)]),
                StaticMonitorConfig(None, 1920, 1080, None, 1.25, False, []),
            ]
        )
        first, second = topology.monitors_list()
        assert first.is_primary is True
        assert first.video_modes[0].bit_depth == 32
        assert second.monitor_id == 1
        assert second.position == Position(2560, 0)
        assert second.video_modes == ()

"""Unit tests for X11 RandR monitor enumeration."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest

from displaystage.common.types import Position, VideoMode
from displaystage.x11 import topology as x11_topology
from displaystage.x11.topology import X11MonitorTopology, modeRefreshRate_get


def _mode(mode_id: int, width: int, height: int, dot_clock: int, h_total: int, v_total: int) -> SimpleNamespace:
    """Build a fake RandR ModeInfo."""
    return SimpleNamespace(
        id=mode_id,
        width=width,
        height=height,
        dot_clock=dot_clock,
        h_total=h_total,
        v_total=v_total,
    )


# 2560x1440@~144Hz and 1920x1080@60Hz mode lines
_MODE_1440 = _mode(10, 2560, 1440, 586_586_000, 2720, 1497)
_MODE_1080 = _mode(11, 1920, 1080, 148_500_000, 2200, 1125)


class _FakeRoot:
    """Fake X11 root window exposing RandR requests."""

    def xrandr_get_screen_resources(self) -> SimpleNamespace:
        """Return outputs, CRTCs and modes."""
        return SimpleNamespace(
            config_timestamp=7,
            outputs=[100, 101, 102],
            modes=[_MODE_1440, _MODE_1080],
        )

    def xrandr_get_output_primary(self) -> SimpleNamespace:
        """Second output is primary."""
        return SimpleNamespace(output=101)


class _FakeDisplay:
    """Fake X11 display object for topology tests."""

    def __init__(self, has_randr: bool = True) -> None:
        """Initialize fake display state."""
        self._root = _FakeRoot()
        self._has_randr = has_randr
        self.closed: bool = False
        self._outputs: dict[int, SimpleNamespace] = {
            100: SimpleNamespace(name="DP-1", connection=0, crtc=50, modes=[10, 11]),
            101: SimpleNamespace(name=b"HDMI-1", connection=0, crtc=51, modes=[11, 99]),
            102: SimpleNamespace(name="VGA-1", connection=1, crtc=0, modes=[]),
        }
        self._crtcs: dict[int, SimpleNamespace] = {
            50: SimpleNamespace(x=0, y=0, width=2560, height=1440, mode=10),
            51: SimpleNamespace(x=2560, y=0, width=1920, height=1080, mode=11),
        }

    def has_extension(self, name: str) -> bool:
        """Report RandR availability."""
        return self._has_randr and name == "RANDR"

    def screen(self) -> SimpleNamespace:
        """Return fake screen with fake root."""
        return SimpleNamespace(root=self._root, root_depth=24)

    def xrandr_get_output_info(self, output: int, _timestamp: int) -> SimpleNamespace:
        """Return fake output info."""
        return self._outputs[output]

    def xrandr_get_crtc_info(self, crtc: int, _timestamp: int) -> SimpleNamespace:
        """Return fake CRTC info."""
        return self._crtcs[crtc]

    def close(self) -> None:
        """Record close."""
        self.closed = True


def _patched_display(monkeypatch, fake: Any) -> None:
    monkeypatch.setattr(x11_topology.xdisplay, "Display", lambda _name: fake)


class TestModeRefreshRate:
    """Tests for refresh derivation from mode lines."""

    def test_sixty_hertz(self) -> None:
        """Standard 1080p60 mode line yields 60000 mHz."""
        assert modeRefreshRate_get(_MODE_1080) == 60000

    def test_zero_totals(self) -> None:
        """Unknown totals yield no refresh rate."""
        assert modeRefreshRate_get(_mode(1, 800, 600, 1000, 0, 0)) is None


class TestX11MonitorTopology:
    """Tests for RandR enumeration."""

    def test_connected_outputs_listed(self, monkeypatch) -> None:
        """Only connected outputs with a CRTC become monitors."""
        _patched_display(monkeypatch, _FakeDisplay())

        with X11MonitorTopology(":0") as topology:
            monitors = topology.monitors_list()

        assert [m.name for m in monitors] == ["DP-1", "HDMI-1"]
        first, second = monitors
        assert first.physical_width == 2560
        assert first.is_primary is False
        assert second.is_primary is True
        assert second.position == Position(2560, 0)
        assert second.refresh_rate_millihertz == 60000
        assert second.video_modes == (VideoMode(1920, 1080, 24, 60000),)
        assert len(first.video_modes) == 2
        assert first.video_modes[0].refresh_rate_millihertz > 143000

    def test_context_manager_closes(self, monkeypatch) -> None:
        """Leaving the context closes the display."""
        fake = _FakeDisplay()
        _patched_display(monkeypatch, fake)

        with X11MonitorTopology():
            pass

        assert fake.closed is True

    def test_missing_randr_raises(self, monkeypatch) -> None:
        """Servers without RandR are rejected at connect time."""
        fake = _FakeDisplay(has_randr=False)
        _patched_display(monkeypatch, fake)

        with pytest.raises(RuntimeError, match="RandR"):
            X11MonitorTopology().connection_establish()
        assert fake.closed is True

    def test_not_connected_raises(self) -> None:
        """Listing before connecting raises RuntimeError."""
        with pytest.raises(RuntimeError, match="Not connected"):
            X11MonitorTopology().monitors_list()

"""Unit tests for control derivation and styling"""

from displaystage.common.config import PresetsConfig
from displaystage.common.types import (
    BorderlessFullscreen,
    Fullscreen,
    MonitorSelection,
    PresentMode,
    Resolution,
    ScaleFactorAutomatic,
    ScaleFactorOverride,
    VideoModeSelection,
    Windowed,
    WindowPosition,
)
from displaystage.staging.controls import (
    Control,
    ControlKind,
    ControlStyle,
    controlIsActive,
    controlStyle_get,
    defaultControls_build,
    moveToMonitorControls_build,
)
from displaystage.staging.draft import ConfigField, PendingChanges


def _presets() -> PresetsConfig:
    return PresetsConfig(
        resolutions=[(800, 600), (1920, 1080)],
        scale_factors=[None, 1.5],
        present_modes=[PresentMode.AUTO_VSYNC, PresentMode.FIFO],
    )


class TestControlIsActive:
    """Test active-state derivation"""

    def test_set_control_active_for_staged_value(self):
        """Test set control is active only for its own value"""
        draft = PendingChanges()
        draft.field_set(ConfigField.RESOLUTION, Resolution(800, 600))

        assert controlIsActive(Control.setField(ConfigField.RESOLUTION, Resolution(800, 600), "a"), draft)
        assert not controlIsActive(Control.setField(ConfigField.RESOLUTION, Resolution(1920, 1080), "b"), draft)

    def test_apply_and_cancel_never_active(self):
        """Test commit controls are never highlighted as staged"""
        draft = PendingChanges()
        draft.field_set(ConfigField.PRESENT_MODE, PresentMode.FIFO)
        assert controlIsActive(Control.apply(), draft) is False
        assert controlIsActive(Control.cancel(), draft) is False


class TestControlStyle:
    """Test style precedence"""

    def test_active_beats_hover(self):
        """Test staged control stays ACTIVE while hovered"""
        draft = PendingChanges()
        control = Control.setField(ConfigField.MODE, Windowed(), "Set Windowed")
        draft.field_set(ConfigField.MODE, Windowed())
        assert controlStyle_get(control, draft, hovering=True) == ControlStyle.ACTIVE

    def test_apply_dimmed_when_draft_empty(self):
        """Test Apply/Cancel are dimmed with nothing staged, even when hovered"""
        draft = PendingChanges()
        assert controlStyle_get(Control.apply(), draft, hovering=True) == ControlStyle.DIMMED
        assert controlStyle_get(Control.cancel(), draft, hovering=False) == ControlStyle.DIMMED

    def test_apply_normal_or_hover_when_draft_staged(self):
        """Test Apply leaves dimmed state once something is staged"""
        draft = PendingChanges()
        draft.field_set(ConfigField.SCALE_FACTOR, ScaleFactorAutomatic())
        assert controlStyle_get(Control.apply(), draft, hovering=False) == ControlStyle.NORMAL
        assert controlStyle_get(Control.apply(), draft, hovering=True) == ControlStyle.HOVER

    def test_unstaged_set_control(self):
        """Test set controls are never dimmed"""
        draft = PendingChanges()
        control = Control.setField(ConfigField.PRESENT_MODE, PresentMode.FIFO, "Set Fifo")
        assert controlStyle_get(control, draft, hovering=False) == ControlStyle.NORMAL
        assert controlStyle_get(control, draft, hovering=True) == ControlStyle.HOVER


class TestDefaultControls:
    """Test preset-driven control set"""

    def test_layout(self):
        """Test controls appear in the expected order with expected labels"""
        labels = [control.label for control in defaultControls_build(_presets())]
        assert labels == [
            "Apply",
            "Cancel",
            "Set Windowed",
            "Set BorderlessFullscreen",
            "Set Fullscreen",
            "Set AutoVsync",
            "Set Fifo",
            "Set 800x600",
            "Set 1920x1080",
            "Reset scaling",
            "Set 1.5x scaling",
        ]

    def test_modes_target_current_monitor(self):
        """Test mode controls stage modes on the current monitor"""
        controls = defaultControls_build(_presets())
        modes = [c.value for c in controls if c.field == ConfigField.MODE]
        current = MonitorSelection.current()
        assert modes == [
            Windowed(),
            BorderlessFullscreen(current),
            Fullscreen(current, VideoModeSelection.current()),
        ]

    def test_scale_values(self):
        """Test None preset maps to automatic scaling"""
        controls = defaultControls_build(_presets())
        scales = [c.value for c in controls if c.field == ConfigField.SCALE_FACTOR]
        assert scales == [ScaleFactorAutomatic(), ScaleFactorOverride(1.5)]


class TestMoveToMonitorControls:
    """Test move-to-monitor generation"""

    def test_primary_then_indices(self):
        """Test one primary control plus one per index"""
        controls = moveToMonitorControls_build(2)
        assert [c.label for c in controls] == [
            "Move to primary monitor",
            "Move to monitor 0",
            "Move to monitor 1",
        ]
        assert controls[2].value == WindowPosition.centered(MonitorSelection.at(1))
        assert all(c.kind == ControlKind.SET_FIELD for c in controls)

    def test_zero_monitors(self):
        """Test only the primary control exists with no monitors"""
        assert len(moveToMonitorControls_build(0)) == 1

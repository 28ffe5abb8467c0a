"""Stageable controls and their derived visual state"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from displaystage.common.config import PresetsConfig
from displaystage.common.types import (
    BorderlessFullscreen,
    Fullscreen,
    MonitorSelection,
    Resolution,
    ScaleFactorAutomatic,
    ScaleFactorOverride,
    VideoModeSelection,
    Windowed,
    WindowPosition,
)
from displaystage.staging.draft import ConfigField, PendingChanges

__all__ = [
    "Control",
    "ControlKind",
    "ControlStyle",
    "controlIsActive",
    "controlStyle_get",
    "defaultControls_build",
    "moveToMonitorControls_build",
]

_PRESENT_MODE_LABELS = {
    "auto_vsync": "AutoVsync",
    "auto_no_vsync": "AutoNoVsync",
    "fifo": "Fifo",
    "fifo_relaxed": "FifoRelaxed",
    "immediate": "Immediate",
    "mailbox": "Mailbox",
}


class ControlKind(Enum):
    """What pressing a control asks for"""
    APPLY = "apply"
    CANCEL = "cancel"
    SET_FIELD = "set_field"


class ControlStyle(Enum):
    """Highlight state a presentation layer renders a control with"""
    ACTIVE = "active"  # Control's value is the staged one
    HOVER = "hover"
    DIMMED = "dimmed"  # Apply/Cancel with nothing staged
    NORMAL = "normal"


@dataclass(frozen=True)
class Control:
    """One user-facing affordance: commit, cancel, or stage a value"""
    kind: ControlKind
    label: str
    field: Optional[ConfigField] = None
    value: Any = None

    @classmethod
    def apply(cls) -> "Control":
        return cls(ControlKind.APPLY, "Apply")

    @classmethod
    def cancel(cls) -> "Control":
        return cls(ControlKind.CANCEL, "Cancel")

    @classmethod
    def setField(cls, field: ConfigField, value: Any, label: str) -> "Control":
        return cls(ControlKind.SET_FIELD, label, field, value)


def controlIsActive(control: Control, draft: PendingChanges) -> bool:
    """
    Check if control represents the currently staged value

    Args:
        control: Control under evaluation
        draft: Current draft

    Returns:
        True when control's field holds control's value in the draft
    """
    if control.kind != ControlKind.SET_FIELD:
        return False
    assert control.field is not None
    return draft.fieldIsActive(control.field, control.value)


def controlStyle_get(control: Control, draft: PendingChanges, hovering: bool) -> ControlStyle:
    """
    Derive a control's visual state

    Active beats everything, then an idle Apply/Cancel is dimmed, then hover.

    Args:
        control: Control under evaluation
        draft: Current draft
        hovering: Whether the pointer is over the control

    Returns:
        Style to render control with
    """
    if controlIsActive(control, draft):
        return ControlStyle.ACTIVE
    if control.kind in (ControlKind.APPLY, ControlKind.CANCEL) and draft.isEmpty():
        return ControlStyle.DIMMED
    if hovering:
        return ControlStyle.HOVER
    return ControlStyle.NORMAL


def defaultControls_build(presets: PresetsConfig) -> list[Control]:
    """
    Build the fixed control set from configured presets

    Display modes all target the current monitor; monitor choice comes from
    the move-to-monitor controls and is folded into the mode on commit.

    Args:
        presets: Configured resolutions, scale factors and present modes

    Returns:
        Apply, Cancel, then one control per stageable preset value
    """
    controls: list[Control] = [Control.apply(), Control.cancel()]

    current = MonitorSelection.current()
    controls.append(Control.setField(ConfigField.MODE, Windowed(), "Set Windowed"))
    controls.append(
        Control.setField(ConfigField.MODE, BorderlessFullscreen(current), "Set BorderlessFullscreen")
    )
    controls.append(
        Control.setField(
            ConfigField.MODE,
            Fullscreen(current, VideoModeSelection.current()),
            "Set Fullscreen",
        )
    )

    for present_mode in presets.present_modes:
        label = _PRESENT_MODE_LABELS.get(present_mode.value, present_mode.name)
        controls.append(Control.setField(ConfigField.PRESENT_MODE, present_mode, f"Set {label}"))

    for width, height in presets.resolutions:
        controls.append(
            Control.setField(ConfigField.RESOLUTION, Resolution(width, height), f"Set {width}x{height}")
        )

    for factor in presets.scale_factors:
        if factor is None:
            controls.append(
                Control.setField(ConfigField.SCALE_FACTOR, ScaleFactorAutomatic(), "Reset scaling")
            )
        else:
            controls.append(
                Control.setField(
                    ConfigField.SCALE_FACTOR, ScaleFactorOverride(factor), f"Set {factor:g}x scaling"
                )
            )

    return controls


def moveToMonitorControls_build(monitor_count: int) -> list[Control]:
    """
    Build one "primary" move control plus one per monitor index

    Args:
        monitor_count: Number of monitors currently enumerated

    Returns:
        Move-to-monitor controls staging centered positions
    """
    controls: list[Control] = [
        Control.setField(
            ConfigField.POSITION,
            WindowPosition.centered(MonitorSelection.primary()),
            "Move to primary monitor",
        )
    ]
    for index in range(monitor_count):
        controls.append(
            Control.setField(
                ConfigField.POSITION,
                WindowPosition.centered(MonitorSelection.at(index)),
                f"Move to monitor {index}",
            )
        )
    return controls

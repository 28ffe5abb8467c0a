"""
Staged-configuration reconciliation.

This module owns the commit pipeline that turns a draft of pending edits
into one consistent surface state. Commit runs an ordered sequence of
guarded steps; each step may consume draft fields, and a consumed field is
never applied again by a later, more generic step. Sub-changes that can no
longer be honoured (stale monitor index, empty topology) are dropped and the
rest of the commit proceeds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from displaystage.common.settings import settings
from displaystage.common.types import (
    BorderlessFullscreen,
    DisplayMode,
    Fullscreen,
    Monitor,
    MonitorSelection,
    PresentMode,
    Resolution,
    ScaleFactorOverride,
    SizedFullscreen,
    VideoMode,
    VideoModeSelection,
    WindowPosition,
)
from displaystage.staging.draft import ConfigField, PendingChanges
from displaystage.surface.state import SurfaceBackend, SurfaceSnapshot
from displaystage.topology.base import (
    MonitorTopology,
    monitorSelection_isValid,
    topologyMaxRefreshRate_get,
)

logger = logging.getLogger(__name__)

__all__ = [
    "COMMIT_PIPELINE",
    "CommitContext",
    "CommitResult",
    "draft_cancel",
    "draft_commit",
    "draft_edit",
]


@dataclass
class CommitContext:
    """Working state threaded through the commit pipeline."""

    draft: PendingChanges
    surface: SurfaceBackend
    monitors: list[Monitor]
    mode: DisplayMode
    mode_changed: bool = False
    applied: list[ConfigField] = field(default_factory=list)
    dropped: list[ConfigField] = field(default_factory=list)

    def field_drop(self, config_field: ConfigField, reason: str) -> None:
        """Record a staged sub-change that will not take effect."""
        logger.warning("[COMMIT] Dropping staged %s: %s", config_field.value, reason)
        self.dropped.append(config_field)


@dataclass(frozen=True)
class CommitResult:
    """Outcome of one commit."""

    snapshot: SurfaceSnapshot
    applied: tuple[ConfigField, ...]
    dropped: tuple[ConfigField, ...]


CommitStep = Callable[[CommitContext], bool]


def draft_edit(draft: PendingChanges, config_field: ConfigField, value: Any) -> None:
    """
    Stage one field value. No interaction with live state.

    Args:
        draft:
            Draft to mutate.
        config_field:
            Field being edited.
        value:
            Proposed value, replacing any earlier proposal.
    """
    draft.field_set(config_field, value)
    logger.debug("[STAGE] %s = %r", config_field.value, value)


def draft_cancel(draft: PendingChanges) -> None:
    """
    Discard every staged edit. Cancelling an empty draft is a no-op.

    Args:
        draft:
            Draft to clear.
    """
    if not draft.isEmpty():
        logger.info("[CANCEL] Discarding staged %s", [f.value for f in draft.fields_staged()])
    draft.clear()


def draft_commit(
    draft: PendingChanges,
    surface: SurfaceBackend,
    topology: MonitorTopology,
) -> CommitResult:
    """
    Apply the draft to the live surface and clear it.

    Args:
        draft:
            Staged edits. Empty on return, whatever was consumed.
        surface:
            Live surface; only its setters are used to mutate it.
        topology:
            Monitor topology read once for the whole commit.

    Returns:
        Resulting surface snapshot plus applied/dropped field record.
    """
    if draft.isEmpty():
        return CommitResult(snapshot=surface.snapshot_get(), applied=(), dropped=())

    context = CommitContext(
        draft=draft,
        surface=surface,
        monitors=topology.monitors_list(),
        mode=surface.mode_get(),
    )
    logger.info("[COMMIT] Applying staged %s", [f.value for f in draft.fields_staged()])

    try:
        for step_name, step in COMMIT_PIPELINE:
            if step(context):
                logger.debug("[COMMIT] step %s consumed", step_name)
    finally:
        draft.clear()

    return CommitResult(
        snapshot=surface.snapshot_get(),
        applied=tuple(context.applied),
        dropped=tuple(context.dropped),
    )


def modeMonitor_get(mode: DisplayMode) -> MonitorSelection | None:
    """Monitor selector embedded in a mode, if the mode carries one."""
    if isinstance(mode, (BorderlessFullscreen, Fullscreen, SizedFullscreen)):
        return mode.monitor
    return None


def _pendingMode_install(context: CommitContext) -> bool:
    """Install a staged mode as the tentative mode."""
    mode: DisplayMode | None = context.draft.field_take(ConfigField.MODE)
    if mode is None:
        return False

    monitor = modeMonitor_get(mode)
    if monitor is not None and not monitorSelection_isValid(monitor, context.monitors):
        context.field_drop(ConfigField.MODE, f"monitor {monitor.describe()} is no longer attached")
        return True

    context.mode = mode
    context.mode_changed = True
    context.applied.append(ConfigField.MODE)
    return True


def _centeredPosition_take(context: CommitContext) -> MonitorSelection | None:
    """
    Consume a staged centered position for absorption into the mode.

    Returns:
        Monitor to fold into the mode, or None when no usable centered
        position is staged. A stale one is consumed and dropped.
    """
    position: WindowPosition | None = context.draft.field_get(ConfigField.POSITION)
    if position is None or not position.isCentered():
        return None

    context.draft.field_take(ConfigField.POSITION)
    assert position.monitor is not None
    if not monitorSelection_isValid(position.monitor, context.monitors):
        context.field_drop(
            ConfigField.POSITION, f"monitor {position.monitor.describe()} is no longer attached"
        )
        return None

    context.applied.append(ConfigField.POSITION)
    return position.monitor


def _borderlessMonitor_absorb(context: CommitContext) -> bool:
    """Fold a staged centered position into a borderless mode's monitor."""
    if not isinstance(context.mode, BorderlessFullscreen):
        return False
    position: WindowPosition | None = context.draft.field_get(ConfigField.POSITION)
    if position is None or not position.isCentered():
        return False

    monitor = _centeredPosition_take(context)
    if monitor is not None:
        context.mode = BorderlessFullscreen(monitor)
        context.mode_changed = True
    return True


def _fullscreenSelection_absorb(context: CommitContext) -> bool:
    """
    Fold staged centered position and resolution into a fullscreen mode.

    A staged resolution becomes a synthesized video mode whose refresh rate
    is the highest any attached monitor reports, not the rate of the target
    monitor alone.
    """
    if not isinstance(context.mode, Fullscreen):
        return False

    consumed: bool = False
    monitor: MonitorSelection = context.mode.monitor
    video_mode: VideoModeSelection = context.mode.video_mode

    position: WindowPosition | None = context.draft.field_get(ConfigField.POSITION)
    if position is not None and position.isCentered():
        consumed = True
        absorbed_monitor = _centeredPosition_take(context)
        if absorbed_monitor is not None:
            monitor = absorbed_monitor

    resolution: Resolution | None = context.draft.field_take(ConfigField.RESOLUTION)
    if resolution is not None:
        consumed = True
        refresh_rate = topologyMaxRefreshRate_get(context.monitors)
        if refresh_rate is None:
            context.field_drop(ConfigField.RESOLUTION, "no monitor reports any video mode")
        else:
            video_mode = VideoModeSelection.specific(
                VideoMode(
                    width=resolution.width,
                    height=resolution.height,
                    bit_depth=settings.FULLSCREEN_BIT_DEPTH,
                    refresh_rate_millihertz=refresh_rate,
                )
            )
            context.applied.append(ConfigField.RESOLUTION)

    if consumed:
        context.mode = Fullscreen(monitor, video_mode)
        context.mode_changed = True
    return consumed


def _mode_write(context: CommitContext) -> bool:
    """Write the final mode, only if a mode was staged or absorbed into."""
    if not context.mode_changed:
        return False
    context.surface.mode_set(context.mode)
    return True


def _presentMode_apply(context: CommitContext) -> bool:
    present_mode: PresentMode | None = context.draft.field_take(ConfigField.PRESENT_MODE)
    if present_mode is None:
        return False
    context.surface.presentMode_set(present_mode)
    context.applied.append(ConfigField.PRESENT_MODE)
    return True


def _resolution_apply(context: CommitContext) -> bool:
    resolution: Resolution | None = context.draft.field_take(ConfigField.RESOLUTION)
    if resolution is None:
        return False
    context.surface.physicalResolution_set(resolution)
    context.applied.append(ConfigField.RESOLUTION)
    return True


def _scaleFactor_apply(context: CommitContext) -> bool:
    change = context.draft.field_take(ConfigField.SCALE_FACTOR)
    if change is None:
        return False
    if isinstance(change, ScaleFactorOverride):
        context.surface.scaleFactorOverride_set(change.value)
    else:
        context.surface.scaleFactorOverride_set(None)
    context.applied.append(ConfigField.SCALE_FACTOR)
    return True


def _position_apply(context: CommitContext) -> bool:
    """
    Apply a position no earlier step absorbed.

    An explicit position staged alongside a fullscreen-family mode lands
    here too and is written to the fullscreen surface as-is.
    """
    position: WindowPosition | None = context.draft.field_take(ConfigField.POSITION)
    if position is None:
        return False
    if position.isCentered():
        assert position.monitor is not None
        if not monitorSelection_isValid(position.monitor, context.monitors):
            context.field_drop(
                ConfigField.POSITION, f"monitor {position.monitor.describe()} is no longer attached"
            )
            return True
    context.surface.position_set(position)
    context.applied.append(ConfigField.POSITION)
    return True


COMMIT_PIPELINE: tuple[tuple[str, CommitStep], ...] = (
    ("pending_mode", _pendingMode_install),
    ("borderless_monitor", _borderlessMonitor_absorb),
    ("fullscreen_selection", _fullscreenSelection_absorb),
    ("mode_write", _mode_write),
    ("present_mode", _presentMode_apply),
    ("resolution", _resolution_apply),
    ("scale_factor", _scaleFactor_apply),
    ("position", _position_apply),
)
"""Ordered commit steps; absorption must run before generic writes."""

"""
Display configuration session.

This module owns the single draft and wires presentation intents (edit,
commit, cancel, control press) to the reconciliation engine. A presentation
layer calls `topology_refresh()` once per refresh cycle, then reads
`snapshot_get()` to render staged and live state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from displaystage.common.types import Monitor
from displaystage.staging.controls import (
    Control,
    ControlKind,
    ControlStyle,
    controlStyle_get,
)
from displaystage.staging.draft import ConfigField, PendingChanges
from displaystage.staging.reconcile import CommitResult, draft_cancel, draft_commit, draft_edit
from displaystage.staging.watcher import MonitorTopologyWatcher
from displaystage.surface.state import SurfaceBackend, SurfaceSnapshot
from displaystage.topology.base import MonitorTopology

logger = logging.getLogger(__name__)

__all__ = [
    "ControlView",
    "DisplayConfigSession",
    "SessionSnapshot",
]


@dataclass(frozen=True)
class ControlView:
    """Control paired with its derived style."""

    control: Control
    style: ControlStyle


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything a presentation layer needs for one refresh."""

    draft: PendingChanges
    live: SurfaceSnapshot
    monitors: tuple[Monitor, ...]
    controls: tuple[ControlView, ...]
    commit_dimmed: bool


class DisplayConfigSession:
    """Single-writer owner of the draft for one display surface."""

    def __init__(
        self,
        surface: SurfaceBackend,
        topology: MonitorTopology,
        controls: list[Control] | None = None,
    ) -> None:
        """
        Initialize session with an empty draft

        Args:
            surface: Live surface the commit writes to
            topology: Monitor topology collaborator
            controls: Fixed controls (move-to-monitor ones are added by polling)
        """
        self._surface: SurfaceBackend = surface
        self._topology: MonitorTopology = topology
        self._draft: PendingChanges = PendingChanges()
        self._watcher: MonitorTopologyWatcher = MonitorTopologyWatcher()
        self._controls: list[Control] = list(controls or [])

    @property
    def draft(self) -> PendingChanges:
        """The live draft (mutate only through session intents)."""
        return self._draft

    def edit(self, config_field: ConfigField, value: Any) -> None:
        """Stage one field value."""
        draft_edit(self._draft, config_field, value)

    def cancel(self) -> None:
        """Discard the draft."""
        draft_cancel(self._draft)

    def commit(self) -> CommitResult:
        """Apply the draft to the surface and clear it."""
        result = draft_commit(self._draft, self._surface, self._topology)
        if result.dropped:
            logger.info(
                "[COMMIT] Done; applied %s, dropped %s",
                [f.value for f in result.applied],
                [f.value for f in result.dropped],
            )
        return result

    def control_press(self, control: Control) -> CommitResult | None:
        """
        Dispatch a pressed control to the matching intent

        Args:
            control: Pressed control

        Returns:
            Commit result for Apply, otherwise None
        """
        if control.kind == ControlKind.APPLY:
            return self.commit()
        if control.kind == ControlKind.CANCEL:
            self.cancel()
            return None
        assert control.field is not None
        self.edit(control.field, control.value)
        return None

    def topology_refresh(self) -> bool:
        """
        Poll monitor topology for count changes

        Returns:
            True when move-to-monitor controls were regenerated
        """
        return self._watcher.topology_poll(self._topology) is not None

    def controls_list(self) -> list[Control]:
        """Fixed controls followed by current move-to-monitor controls."""
        return self._controls + self._watcher.controls

    def snapshot_get(self, hovered: Control | None = None) -> SessionSnapshot:
        """
        Capture draft, live state and derived control styles

        Args:
            hovered: Control under the pointer, if any
        """
        views = tuple(
            ControlView(control, controlStyle_get(control, self._draft, control == hovered))
            for control in self.controls_list()
        )
        return SessionSnapshot(
            draft=self._draft.copy(),
            live=self._surface.snapshot_get(),
            monitors=tuple(self._topology.monitors_list()),
            controls=views,
            commit_dimmed=self._draft.isEmpty(),
        )

"""Draft staging, reconciliation and control derivation."""

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
from displaystage.staging.reconcile import CommitResult, draft_cancel, draft_commit, draft_edit
from displaystage.staging.watcher import MonitorTopologyWatcher

__all__ = [
    "CommitResult",
    "ConfigField",
    "Control",
    "ControlKind",
    "ControlStyle",
    "MonitorTopologyWatcher",
    "PendingChanges",
    "controlIsActive",
    "controlStyle_get",
    "defaultControls_build",
    "draft_cancel",
    "draft_commit",
    "draft_edit",
    "moveToMonitorControls_build",
]

"""Live read-out text for the surface and attached monitors"""

from typing import Iterable, List

from displaystage.common.settings import settings
from displaystage.common.types import Monitor
from displaystage.surface.state import SurfaceSnapshot


def monitor_describe(monitor: Monitor) -> str:
    """One monitor as `name WxH@Hz scalex`"""
    refresh_hz = (monitor.refresh_rate_millihertz or 0) / settings.MILLIHERTZ_PER_HERTZ
    return (
        f"{monitor.name or 'No name'} "
        f"{monitor.physical_width}x{monitor.physical_height}@{refresh_hz:g} "
        f"{monitor.scale_factor:g}x"
    )


def scaleFactor_describe(snapshot: SurfaceSnapshot) -> str:
    """Scale factor line, with the override when one is set"""
    if snapshot.scale_factor_override is None:
        return f"Scale factor: {snapshot.base_scale_factor:g}"
    return (
        f"Scale factor: {snapshot.base_scale_factor:g} "
        f"(Override: {snapshot.scale_factor_override:g})"
    )


def readoutLines_build(snapshot: SurfaceSnapshot, monitors: Iterable[Monitor]) -> List[str]:
    """
    Build the live read-out shown under the controls

    Args:
        snapshot: Live surface state (never the draft)
        monitors: Current topology

    Returns:
        Read-out lines; the monitor line spans one tab-indented row per monitor
    """
    monitor_rows = "".join(f"\n\t{monitor_describe(monitor)}" for monitor in monitors)
    resolution = snapshot.physical_resolution
    return [
        f"Window mode: {snapshot.mode.describe()}",
        f"Present mode: {snapshot.present_mode.name}",
        f"Physical Resolution: {resolution.width}x{resolution.height}",
        f"Logical resolution: {snapshot.logical_width:g}x{snapshot.logical_height:g}",
        scaleFactor_describe(snapshot),
        f"Window position: {snapshot.position.describe()}",
        f"Monitors: {monitor_rows}",
    ]

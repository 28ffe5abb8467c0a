"""
Live display surface state.

The surface record is the single authority for what the managed window is
doing right now. The reconciliation engine reads it and requests mutations
through the setters on commit; nothing else writes to it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from displaystage.common.types import (
    DisplayMode,
    PresentMode,
    Resolution,
    Windowed,
    WindowPosition,
)

logger = logging.getLogger(__name__)

__all__ = [
    "DisplaySurface",
    "SurfaceBackend",
    "SurfaceSnapshot",
]


@dataclass(frozen=True)
class SurfaceSnapshot:
    """Read-only copy of every live surface property."""

    mode: DisplayMode
    present_mode: PresentMode
    physical_resolution: Resolution
    logical_width: float
    logical_height: float
    base_scale_factor: float
    scale_factor_override: float | None
    position: WindowPosition

    @property
    def scale_factor(self) -> float:
        """Effective scale factor (override wins over base)."""
        if self.scale_factor_override is not None:
            return self.scale_factor_override
        return self.base_scale_factor


class SurfaceBackend(Protocol):
    """Read/write contract of the managed display surface."""

    def mode_get(self) -> DisplayMode:
        """Get current display mode."""
        ...

    def mode_set(self, mode: DisplayMode) -> None:
        """Set display mode."""
        ...

    def presentMode_get(self) -> PresentMode:
        """Get current present mode."""
        ...

    def presentMode_set(self, present_mode: PresentMode) -> None:
        """Set present mode."""
        ...

    def physicalResolution_get(self) -> Resolution:
        """Get physical resolution."""
        ...

    def physicalResolution_set(self, resolution: Resolution) -> None:
        """Set physical resolution."""
        ...

    def logicalResolution_get(self) -> tuple[float, float]:
        """Get logical (scaled) size."""
        ...

    def baseScaleFactor_get(self) -> float:
        """Get OS/monitor derived scale factor."""
        ...

    def scaleFactorOverride_get(self) -> float | None:
        """Get explicit scale factor override, if any."""
        ...

    def scaleFactorOverride_set(self, override: float | None) -> None:
        """Set or clear (None) the scale factor override."""
        ...

    def position_get(self) -> WindowPosition:
        """Get window position."""
        ...

    def position_set(self, position: WindowPosition) -> None:
        """Set window position."""
        ...

    def snapshot_get(self) -> SurfaceSnapshot:
        """Capture every live property."""
        ...


class DisplaySurface:
    """In-process authoritative record of the one managed display surface."""

    def __init__(
        self,
        resolution: Resolution,
        base_scale_factor: float = 1.0,
        present_mode: PresentMode = PresentMode.AUTO_VSYNC,
        mode: DisplayMode | None = None,
        position: WindowPosition | None = None,
    ) -> None:
        """
        Initialize surface state

        Args:
            resolution: Initial physical resolution
            base_scale_factor: Scale factor reported by the OS/monitor
            present_mode: Initial present mode
            mode: Initial display mode (windowed by default)
            position: Initial position (automatic by default)
        """
        if base_scale_factor <= 0:
            raise ValueError(f"Base scale factor must be positive, got {base_scale_factor}")
        self._mode: DisplayMode = mode if mode is not None else Windowed()
        self._present_mode: PresentMode = present_mode
        self._resolution: Resolution = resolution
        self._base_scale_factor: float = base_scale_factor
        self._scale_factor_override: float | None = None
        self._position: WindowPosition = position if position is not None else WindowPosition.automatic()

    def mode_get(self) -> DisplayMode:
        return self._mode

    def mode_set(self, mode: DisplayMode) -> None:
        logger.debug("Surface mode -> %s", mode.describe())
        self._mode = mode

    def presentMode_get(self) -> PresentMode:
        return self._present_mode

    def presentMode_set(self, present_mode: PresentMode) -> None:
        logger.debug("Surface present mode -> %s", present_mode.name)
        self._present_mode = present_mode

    def physicalResolution_get(self) -> Resolution:
        return self._resolution

    def physicalResolution_set(self, resolution: Resolution) -> None:
        logger.debug("Surface physical resolution -> %sx%s", resolution.width, resolution.height)
        self._resolution = resolution

    def baseScaleFactor_get(self) -> float:
        return self._base_scale_factor

    def scaleFactorOverride_get(self) -> float | None:
        return self._scale_factor_override

    def scaleFactorOverride_set(self, override: float | None) -> None:
        logger.debug("Surface scale factor override -> %s", override)
        self._scale_factor_override = override

    def scaleFactor_get(self) -> float:
        """Effective scale factor (override wins over base)"""
        if self._scale_factor_override is not None:
            return self._scale_factor_override
        return self._base_scale_factor

    def logicalResolution_get(self) -> tuple[float, float]:
        """
        Logical size of the surface

        Returns:
            Physical size divided by the effective scale factor
        """
        scale = self.scaleFactor_get()
        return (self._resolution.width / scale, self._resolution.height / scale)

    def position_get(self) -> WindowPosition:
        return self._position

    def position_set(self, position: WindowPosition) -> None:
        logger.debug("Surface position -> %s", position.describe())
        self._position = position

    def snapshot_get(self) -> SurfaceSnapshot:
        """Capture every live property"""
        logical_width, logical_height = self.logicalResolution_get()
        return SurfaceSnapshot(
            mode=self._mode,
            present_mode=self._present_mode,
            physical_resolution=self._resolution,
            logical_width=logical_width,
            logical_height=logical_height,
            base_scale_factor=self._base_scale_factor,
            scale_factor_override=self._scale_factor_override,
            position=self._position,
        )

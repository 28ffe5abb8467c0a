"""Common types and data structures for displaystage"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


def _isStrictInt(value: object) -> bool:
    """Check for a real int, refusing bool"""
    return isinstance(value, int) and not isinstance(value, bool)


class PresentMode(Enum):
    """Frame presentation strategies a surface can run with"""
    AUTO_VSYNC = "auto_vsync"
    AUTO_NO_VSYNC = "auto_no_vsync"
    FIFO = "fifo"
    FIFO_RELAXED = "fifo_relaxed"
    IMMEDIATE = "immediate"
    MAILBOX = "mailbox"


class MonitorSelectionKind(Enum):
    """How a monitor is picked out of the live topology"""
    PRIMARY = "primary"
    CURRENT = "current"  # Whichever monitor hosts the surface right now
    INDEX = "index"      # Positional, not a stable identity


@dataclass(frozen=True)
class MonitorSelection:
    """Monitor selector: primary, current, or positional index"""
    kind: MonitorSelectionKind
    index: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate that only INDEX selectors carry an index"""
        if self.kind == MonitorSelectionKind.INDEX:
            if not _isStrictInt(self.index):
                raise TypeError(f"Monitor index must be an int, got {self.index!r}")
            if self.index < 0:
                raise ValueError(f"Monitor index must be >= 0, got {self.index}")
        elif self.index is not None:
            raise ValueError(f"{self.kind.value} selector takes no index")

    @classmethod
    def primary(cls) -> "MonitorSelection":
        """Select the primary monitor"""
        return cls(MonitorSelectionKind.PRIMARY)

    @classmethod
    def current(cls) -> "MonitorSelection":
        """Select the monitor currently hosting the surface"""
        return cls(MonitorSelectionKind.CURRENT)

    @classmethod
    def at(cls, index: int) -> "MonitorSelection":
        """Select a monitor by its position in the topology"""
        return cls(MonitorSelectionKind.INDEX, index)

    def describe(self) -> str:
        """Short human-readable form"""
        if self.kind == MonitorSelectionKind.INDEX:
            return f"Index({self.index})"
        return self.kind.value.capitalize()


@dataclass(frozen=True)
class VideoMode:
    """Monitor capability tuple used for exclusive fullscreen"""
    width: int
    height: int
    bit_depth: int
    refresh_rate_millihertz: int


@dataclass(frozen=True)
class VideoModeSelection:
    """Either keep the current video mode or switch to a specific one"""
    video_mode: Optional[VideoMode] = None

    @classmethod
    def current(cls) -> "VideoModeSelection":
        """Keep whatever video mode the monitor is running"""
        return cls()

    @classmethod
    def specific(cls, video_mode: VideoMode) -> "VideoModeSelection":
        """Switch to an explicit video mode"""
        return cls(video_mode)

    def isCurrent(self) -> bool:
        """Check if this selection defers to the current video mode"""
        return self.video_mode is None


@dataclass(frozen=True)
class Windowed:
    """Plain decorated window"""

    def describe(self) -> str:
        return "Windowed"


@dataclass(frozen=True)
class BorderlessFullscreen:
    """Undecorated window covering one monitor"""
    monitor: MonitorSelection

    def describe(self) -> str:
        return f"BorderlessFullscreen({self.monitor.describe()})"


@dataclass(frozen=True)
class Fullscreen:
    """Exclusive fullscreen on one monitor with a video mode"""
    monitor: MonitorSelection
    video_mode: VideoModeSelection

    def describe(self) -> str:
        if self.video_mode.video_mode is None:
            mode_text = "Current"
        else:
            vm = self.video_mode.video_mode
            mode_text = f"{vm.width}x{vm.height}@{vm.refresh_rate_millihertz}mHz/{vm.bit_depth}bit"
        return f"Fullscreen({self.monitor.describe()}, {mode_text})"


@dataclass(frozen=True)
class SizedFullscreen:
    """Fullscreen sized to the window's own resolution, monitor left to the backend when unset"""
    monitor: Optional[MonitorSelection] = None

    def describe(self) -> str:
        if self.monitor is None:
            return "SizedFullscreen"
        return f"SizedFullscreen({self.monitor.describe()})"


DisplayMode = Union[Windowed, BorderlessFullscreen, Fullscreen, SizedFullscreen]
DISPLAY_MODE_TYPES = (Windowed, BorderlessFullscreen, Fullscreen, SizedFullscreen)


@dataclass(frozen=True)
class Resolution:
    """Physical pixel dimensions"""
    width: int
    height: int

    def __post_init__(self) -> None:
        """Reject non-integer, empty or negative dimensions"""
        if not (_isStrictInt(self.width) and _isStrictInt(self.height)):
            raise TypeError(f"Resolution must be integer pixels, got {self.width!r}x{self.height!r}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Invalid resolution: {self.width}x{self.height}")


@dataclass(frozen=True)
class ScaleFactorAutomatic:
    """Scale factor change back to the OS/monitor derived value"""

    def describe(self) -> str:
        return "automatic"


@dataclass(frozen=True)
class ScaleFactorOverride:
    """Scale factor change to an explicit override"""
    value: float

    def __post_init__(self) -> None:
        """Override must be a finite positive factor"""
        if not math.isfinite(self.value) or self.value <= 0:
            raise ValueError(f"Scale factor override must be positive, got {self.value}")

    def describe(self) -> str:
        return f"{self.value}x"


ScaleFactorChange = Union[ScaleFactorAutomatic, ScaleFactorOverride]


@dataclass(frozen=True)
class Position:
    """2D position coordinates"""
    x: int
    y: int


class WindowPositionKind(Enum):
    """How the surface is placed on the desktop"""
    AUTOMATIC = "automatic"
    AT = "at"
    CENTERED = "centered"


@dataclass(frozen=True)
class WindowPosition:
    """Explicit coordinates, centered on a monitor, or left to the backend"""
    kind: WindowPositionKind
    position: Optional[Position] = None
    monitor: Optional[MonitorSelection] = None

    def __post_init__(self) -> None:
        """Each kind carries exactly its own payload"""
        if self.kind == WindowPositionKind.AT and (self.position is None or self.monitor is not None):
            raise ValueError("AT position requires coordinates only")
        if self.kind == WindowPositionKind.CENTERED and (self.monitor is None or self.position is not None):
            raise ValueError("CENTERED position requires a monitor selection only")
        if self.kind == WindowPositionKind.AUTOMATIC and (self.monitor is not None or self.position is not None):
            raise ValueError("AUTOMATIC position takes no payload")

    @classmethod
    def automatic(cls) -> "WindowPosition":
        """Let the windowing backend place the surface"""
        return cls(WindowPositionKind.AUTOMATIC)

    @classmethod
    def at(cls, position: Position) -> "WindowPosition":
        """Place the surface at explicit coordinates"""
        return cls(WindowPositionKind.AT, position=position)

    @classmethod
    def centered(cls, monitor: MonitorSelection) -> "WindowPosition":
        """Center the surface on a monitor"""
        return cls(WindowPositionKind.CENTERED, monitor=monitor)

    def isCentered(self) -> bool:
        """Check if this position names a monitor to center on"""
        return self.kind == WindowPositionKind.CENTERED

    def describe(self) -> str:
        """Short human-readable form"""
        if self.kind == WindowPositionKind.AT:
            assert self.position is not None
            return f"At({self.position.x}, {self.position.y})"
        if self.kind == WindowPositionKind.CENTERED:
            assert self.monitor is not None
            return f"Centered({self.monitor.describe()})"
        return "Automatic"


@dataclass(frozen=True)
class Monitor:
    """One attached physical monitor as reported by the topology"""
    monitor_id: int
    name: Optional[str]
    physical_width: int
    physical_height: int
    refresh_rate_millihertz: Optional[int]
    scale_factor: float
    position: Position = Position(0, 0)
    is_primary: bool = False
    video_modes: tuple[VideoMode, ...] = ()

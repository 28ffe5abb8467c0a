"""X11 monitor topology via the RandR extension"""

import logging
from typing import Any, Dict, List, Optional

from Xlib import display as xdisplay
from Xlib.display import Display

from displaystage.common.types import Monitor, Position, VideoMode

logger = logging.getLogger(__name__)

_RR_CONNECTED: int = 0
_X11_SCALE_FACTOR: float = 1.0  # RandR exposes no per-output scale factor


def modeRefreshRate_get(mode_info: Any) -> Optional[int]:
    """
    Derive refresh rate from a RandR mode line

    Args:
        mode_info: RandR ModeInfo (dot_clock, h_total, v_total)

    Returns:
        Refresh rate in millihertz, or None if totals are unknown
    """
    if not mode_info.h_total or not mode_info.v_total:
        return None
    return (mode_info.dot_clock * 1000) // (mode_info.h_total * mode_info.v_total)


class X11MonitorTopology:
    """Enumerates connected X11 outputs as monitors"""

    def __init__(self, display_name: Optional[str] = None) -> None:
        """
        Initialize topology reader

        Args:
            display_name: X11 display name (e.g., ':0'), None for default
        """
        self._display: Optional[Display] = None
        self._display_name: Optional[str] = display_name

    def connection_establish(self) -> None:
        """
        Establish connection to X11 display

        Raises:
            RuntimeError: If the server lacks the RandR extension
        """
        self._display = xdisplay.Display(self._display_name)
        if not self._display.has_extension("RANDR"):
            self.connection_close()
            raise RuntimeError("X11 display does not support the RandR extension")

    def connection_close(self) -> None:
        """Close X11 display connection"""
        if self._display is not None:
            self._display.close()
            self._display = None

    def display_get(self) -> Display:
        """
        Get X11 display object

        Raises:
            RuntimeError: If not connected to display
        """
        if self._display is None:
            raise RuntimeError("Not connected to X11 display")
        return self._display

    def __enter__(self) -> "X11MonitorTopology":
        """Context manager entry"""
        self.connection_establish()
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        """Context manager exit"""
        self.connection_close()

    def monitors_list(self) -> List[Monitor]:
        """
        Enumerate connected outputs that drive a CRTC

        Returns:
            Monitors in RandR output order
        """
        display = self.display_get()
        screen = display.screen()
        root = screen.root
        bit_depth: int = screen.root_depth

        resources = root.xrandr_get_screen_resources()
        config_timestamp = resources.config_timestamp
        modes_by_id: Dict[int, Any] = {mode.id: mode for mode in resources.modes}

        primary_output: int = root.xrandr_get_output_primary().output

        monitors: List[Monitor] = []
        for output in resources.outputs:
            output_info = display.xrandr_get_output_info(output, config_timestamp)
            if output_info.connection != _RR_CONNECTED or not output_info.crtc:
                continue

            crtc_info = display.xrandr_get_crtc_info(output_info.crtc, config_timestamp)
            current_mode = modes_by_id.get(crtc_info.mode)

            video_modes: List[VideoMode] = []
            for mode_id in output_info.modes:
                mode_info = modes_by_id.get(mode_id)
                if mode_info is None:
                    continue
                refresh = modeRefreshRate_get(mode_info)
                if refresh is None:
                    continue
                video_modes.append(
                    VideoMode(
                        width=mode_info.width,
                        height=mode_info.height,
                        bit_depth=bit_depth,
                        refresh_rate_millihertz=refresh,
                    )
                )

            name = output_info.name
            if isinstance(name, bytes):
                name = name.decode("utf-8", errors="replace")

            monitors.append(
                Monitor(
                    monitor_id=output,
                    name=name or None,
                    physical_width=crtc_info.width,
                    physical_height=crtc_info.height,
                    refresh_rate_millihertz=(
                        modeRefreshRate_get(current_mode) if current_mode is not None else None
                    ),
                    scale_factor=_X11_SCALE_FACTOR,
                    position=Position(x=crtc_info.x, y=crtc_info.y),
                    is_primary=(output == primary_output),
                    video_modes=tuple(video_modes),
                )
            )

        logger.debug("RandR reports %d connected monitor(s)", len(monitors))
        return monitors

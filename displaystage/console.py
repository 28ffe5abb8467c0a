"""
Line-oriented console presentation layer.

Renders numbered controls with their derived style plus the live read-out,
and turns typed commands into session intents. The topology is polled before
every command so monitor changes are seen before the next commit.
"""

from __future__ import annotations

import logging
from typing import TextIO

from displaystage.readout import readoutLines_build
from displaystage.session import DisplayConfigSession, SessionSnapshot
from displaystage.staging.controls import ControlStyle

logger = logging.getLogger(__name__)

__all__ = ["ConsoleApp"]

_STYLE_MARKERS: dict[ControlStyle, str] = {
    ControlStyle.ACTIVE: "*",
    ControlStyle.HOVER: ">",
    ControlStyle.DIMMED: "-",
    ControlStyle.NORMAL: " ",
}

HELP_TEXT: str = (
    "Commands: <n> | press <n> | apply | cancel | show | help | quit"
)


class ConsoleApp:
    """Text front end driving one display configuration session."""

    def __init__(self, session: DisplayConfigSession, stdin: TextIO, stdout: TextIO) -> None:
        """
        Initialize console front end

        Args:
            session: Session receiving intents
            stdin: Command input stream
            stdout: Render output stream
        """
        self._session = session
        self._stdin = stdin
        self._stdout = stdout

    def render(self, snapshot: SessionSnapshot) -> None:
        """Write controls and read-out for one refresh cycle."""
        for index, view in enumerate(snapshot.controls):
            marker = _STYLE_MARKERS[view.style]
            self._stdout.write(f"[{marker}] {index:2d}  {view.control.label}\n")
        for line in readoutLines_build(snapshot.live, snapshot.monitors):
            self._stdout.write(f"{line}\n")
        self._stdout.flush()

    def command_handle(self, command: str) -> bool:
        """
        Handle one typed command

        Args:
            command: Raw input line

        Returns:
            False when the user asked to quit
        """
        tokens = command.strip().lower().split()
        if not tokens:
            return True

        verb = tokens[0]
        if verb in ("quit", "exit", "q"):
            return False
        if verb == "help":
            self._stdout.write(f"{HELP_TEXT}\n")
            return True
        if verb == "show":
            self.render(self._session.snapshot_get())
            return True

        if verb == "apply":
            self._session.commit()
            self.render(self._session.snapshot_get())
            return True
        if verb == "cancel":
            self._session.cancel()
            self.render(self._session.snapshot_get())
            return True

        controls = self._session.controls_list()
        if verb == "press" and len(tokens) == 2:
            verb = tokens[1]
        try:
            index = int(verb)
        except ValueError:
            self._stdout.write(f"Unknown command: {command.strip()}\n{HELP_TEXT}\n")
            return True

        if not 0 <= index < len(controls):
            self._stdout.write(f"No control {index}\n")
            return True

        self._session.control_press(controls[index])
        self.render(self._session.snapshot_get())
        return True

    def run(self) -> None:
        """Read commands until quit or end of input."""
        self._session.topology_refresh()
        self.render(self._session.snapshot_get())
        self._stdout.write(f"{HELP_TEXT}\n")
        for line in self._stdin:
            if self._session.topology_refresh():
                logger.info("Monitor controls regenerated")
            if not self.command_handle(line):
                break

"""
displaystage: staged display configuration

Edits to a display surface's mode, present mode, resolution, scale factor
and position are staged in a draft, then reconciled against the live
surface and monitor topology in a single commit.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("displaystage")
except PackageNotFoundError:
    # Source checkout that was never installed
    __version__ = "0.4.0+source"

__author__ = "displaystage contributors"

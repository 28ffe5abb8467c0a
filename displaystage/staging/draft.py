"""Staged configuration store: one pending value per configurable field"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from displaystage.common.types import (
    DISPLAY_MODE_TYPES,
    PresentMode,
    Resolution,
    ScaleFactorAutomatic,
    ScaleFactorOverride,
    WindowPosition,
)

__all__ = [
    "ConfigField",
    "PendingChanges",
]


class ConfigField(Enum):
    """Configurable surface fields that can hold a staged edit"""
    MODE = "mode"
    PRESENT_MODE = "present_mode"
    RESOLUTION = "resolution"
    SCALE_FACTOR = "scale_factor"
    POSITION = "position"


_FIELD_VALUE_TYPES: dict[ConfigField, tuple[type, ...]] = {
    ConfigField.MODE: DISPLAY_MODE_TYPES,
    ConfigField.PRESENT_MODE: (PresentMode,),
    ConfigField.RESOLUTION: (Resolution,),
    ConfigField.SCALE_FACTOR: (ScaleFactorAutomatic, ScaleFactorOverride),
    ConfigField.POSITION: (WindowPosition,),
}


class PendingChanges:
    """
    The draft: at most one proposed value per field.

    A slot is either absent (no edit staged) or holds exactly one value.
    Setting a slot replaces any earlier proposal; there is no history.
    """

    def __init__(self) -> None:
        """Create an empty draft"""
        self._slots: dict[ConfigField, Any] = {}

    def field_set(self, field: ConfigField, value: Any) -> None:
        """
        Stage a value, replacing whatever the field held

        Args:
            field: Field to stage
            value: Proposed value; its type must belong to the field

        Raises:
            TypeError: If value is not a valid type for field
        """
        accepted = _FIELD_VALUE_TYPES[field]
        if not isinstance(value, accepted):
            names = ", ".join(t.__name__ for t in accepted)
            raise TypeError(
                f"{field.value} expects {names}, got {type(value).__name__}"
            )
        self._slots[field] = value

    def field_get(self, field: ConfigField) -> Optional[Any]:
        """Pending value for field, or None if nothing is staged"""
        return self._slots.get(field)

    def field_take(self, field: ConfigField) -> Optional[Any]:
        """Remove and return the pending value for field"""
        return self._slots.pop(field, None)

    def field_isStaged(self, field: ConfigField) -> bool:
        """Check whether field holds a pending value"""
        return field in self._slots

    def fieldIsActive(self, field: ConfigField, value: Any) -> bool:
        """
        Check if field's pending value equals value

        Used to highlight the option that is currently staged.
        """
        if field not in self._slots:
            return False
        return bool(self._slots[field] == value)

    def clear(self) -> None:
        """Drop every pending value"""
        self._slots.clear()

    def isEmpty(self) -> bool:
        """True iff no field holds a pending value"""
        return not self._slots

    def fields_staged(self) -> list[ConfigField]:
        """Staged fields in declaration order"""
        return [field for field in ConfigField if field in self._slots]

    def copy(self) -> "PendingChanges":
        """Independent copy of this draft"""
        duplicate = PendingChanges()
        duplicate._slots = dict(self._slots)
        return duplicate

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PendingChanges):
            return NotImplemented
        return self._slots == other._slots

    def __repr__(self) -> str:
        staged = ", ".join(f"{field.value}={self._slots[field]!r}" for field in self.fields_staged())
        return f"PendingChanges({staged})"

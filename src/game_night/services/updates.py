"""Tagged values for partial updates.

A PATCH body distinguishes three intents per field: leave it alone, set a
new value, or clear it. ``FieldUpdate`` carries that intent explicitly so
services never have to guess from sentinel literals.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class UpdateKind(StrEnum):
    UNCHANGED = "unchanged"
    SET = "set"
    CLEARED = "cleared"


@dataclass(frozen=True)
class FieldUpdate(Generic[T]):
    """One field's update intent."""

    kind: UpdateKind
    value: T | None = None

    @classmethod
    def unchanged(cls) -> FieldUpdate[Any]:
        return cls(UpdateKind.UNCHANGED)

    @classmethod
    def set(cls, value: T) -> FieldUpdate[T]:
        return cls(UpdateKind.SET, value)

    @classmethod
    def cleared(cls) -> FieldUpdate[Any]:
        return cls(UpdateKind.CLEARED)

    @property
    def is_set(self) -> bool:
        return self.kind is UpdateKind.SET

    @property
    def is_unchanged(self) -> bool:
        return self.kind is UpdateKind.UNCHANGED

    def apply(self, current: T | None) -> T | None:
        """Return the field value after this update."""
        if self.kind is UpdateKind.UNCHANGED:
            return current
        if self.kind is UpdateKind.CLEARED:
            return None
        return self.value


Updates = Mapping[str, FieldUpdate[Any]]


def get_update(updates: Updates, name: str) -> FieldUpdate[Any]:
    """Return the update for ``name``, treating missing keys as unchanged."""
    return updates.get(name) or FieldUpdate.unchanged()


def apply_updates(target: object, updates: Updates) -> list[str]:
    """Apply every non-unchanged update onto ``target`` attributes.

    Returns the names of the attributes that were written.
    """
    written: list[str] = []
    for name, update in updates.items():
        if update.is_unchanged:
            continue
        setattr(target, name, update.apply(getattr(target, name)))
        written.append(name)
    return written

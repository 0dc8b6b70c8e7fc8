"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, model_validator

from game_night.services.updates import FieldUpdate


class ActionResult(BaseModel):
    """Outcome of a mutation that reports a human-readable message."""

    success: bool
    message: str


class PatchModel(BaseModel):
    """Base for partial-update bodies.

    An absent field is left unchanged. An explicit ``null`` clears the field,
    which is only accepted for names listed in ``clearable_fields``.
    """

    clearable_fields: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_null_for_required(self) -> PatchModel:
        for name in self.model_fields_set:
            if getattr(self, name) is None and name not in self.clearable_fields:
                raise ValueError(f"{name} cannot be cleared")
        return self

    def to_updates(self) -> dict[str, FieldUpdate[Any]]:
        """Translate the body into tagged per-field updates."""
        updates: dict[str, FieldUpdate[Any]] = {}
        for name in type(self).model_fields:
            if name not in self.model_fields_set:
                updates[name] = FieldUpdate.unchanged()
                continue
            value = getattr(self, name)
            updates[name] = FieldUpdate.cleared() if value is None else FieldUpdate.set(value)
        return updates

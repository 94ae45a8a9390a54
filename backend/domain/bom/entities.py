"""
BOM Domain - Entities.

Part is a single node of the Bill of Materials tree.
"""

from __future__ import annotations
import re
from dataclasses import dataclass, replace
from typing import Optional

from domain.shared.base_entity import Entity
from domain.shared.exceptions import ValidationException


NAME_MAX_LENGTH = 255
NUMBER_MAX_LENGTH = 255

# Line breaks and other control characters; a label renders on one line.
CONTROL_CHARACTERS = re.compile(r"[\x00-\x1f\x7f-\x9f\u2028\u2029]")


def validate_label(field_name: str, value: str, max_length: int) -> None:
    """Check that a required text attribute is non-empty and within bounds."""
    if not isinstance(value, str):
        raise ValidationException(f"{field_name} must be a string", field_name, value)
    if not value.strip():
        raise ValidationException(f"{field_name} is required", field_name, value)
    if CONTROL_CHARACTERS.search(value):
        raise ValidationException(
            f"{field_name} must not contain line breaks or control characters",
            field_name,
            value
        )
    if len(value) > max_length:
        raise ValidationException(
            f"{field_name} must be at most {max_length} characters",
            field_name,
            value
        )


@dataclass(eq=False)
class Part(Entity):
    """
    A single part in the BOM.

    The tree structure is kept by ``parent_id`` only; children are never
    stored on the part itself. A materialized tree derives them from the
    parent pointers (see ``PartTree``).
    """

    name: str = ""
    number: str = ""
    parent_id: Optional[int] = None  # None for root parts

    def __post_init__(self):
        validate_label("name", self.name, NAME_MAX_LENGTH)
        validate_label("number", self.number, NUMBER_MAX_LENGTH)
        if self.id is not None and self.parent_id == self.id:
            raise ValidationException("Part cannot be its own parent", "parent_id", self.parent_id)

    @classmethod
    def restore(
        cls,
        id: int,
        name: str,
        number: str,
        parent_id: Optional[int] = None,
    ) -> Part:
        """
        Rebuild a part that is already stored.

        Input validation is skipped: a row edited outside the API must still
        load. Any change made through ``with_labels`` is validated again.
        """
        part = cls.__new__(cls)
        part.id = id
        part.name = name
        part.number = number
        part.parent_id = parent_id
        return part

    @property
    def is_root(self) -> bool:
        """Check if this part has no parent."""
        return self.parent_id is None

    def with_labels(self, name: str, number: str) -> Part:
        """Return a copy with new name/number; id and parent stay fixed."""
        return replace(self, name=name, number=number)

    def sibling_copy(self) -> Part:
        """Return an unsaved part with the same labels under the same parent."""
        return Part(name=self.name, number=self.number, parent_id=self.parent_id)

    def __str__(self) -> str:
        return f"{self.name} ({self.number})"

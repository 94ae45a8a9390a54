"""
Base Entity class for all domain entities.

Entities have identity and lifecycle.
Two entities are equal if they have the same ID.
"""

from __future__ import annotations
from abc import ABC
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(eq=False)
class Entity(ABC):
    """
    Base class for all domain entities.

    Entities are objects that have a distinct identity that runs through time
    and different representations. They are defined by their identity, not their attributes.

    The identity is assigned by the store on creation; an entity that has not
    been persisted yet has ``id=None`` and is only equal to itself.
    """

    id: Optional[int] = None

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Entity):
            return False
        if self.id is None or other.id is None:
            return self is other
        return type(self) is type(other) and self.id == other.id

    def __hash__(self) -> int:
        if self.id is None:
            return id(self)
        return hash((type(self).__name__, self.id))

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} id={self.id}>"

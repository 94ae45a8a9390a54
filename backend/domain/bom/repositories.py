"""
BOM Domain - Repository Interfaces.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from .entities import Part


class PartRepository(ABC):
    """
    Repository interface for parts (the flat store).

    Knows nothing about trees beyond the parent reference. Every method is a
    self-contained unit of work: it acquires its own store scope and releases
    it before returning.
    """

    # Stores that can evaluate a recursive query server-side set this and
    # implement count_descendants().
    supports_recursive_queries: bool = False

    @abstractmethod
    async def get_by_id(self, part_id: int) -> Optional[Part]:
        """Get part by ID, None when absent."""
        pass

    @abstractmethod
    async def get_all(self) -> List[Part]:
        """Get every part ordered by ID."""
        pass

    @abstractmethod
    async def get_by_ids(self, part_ids: Iterable[int]) -> Dict[int, Optional[Part]]:
        """Get parts for a set of IDs; missing IDs map to None."""
        pass

    @abstractmethod
    async def get_children(self, parent_ids: Iterable[int]) -> Dict[int, List[Part]]:
        """
        Get the immediate children of several parts in one round-trip.

        Every requested ID is a key of the result; children are ordered by ID.
        """
        pass

    @abstractmethod
    async def create(self, part: Part) -> int:
        """Persist a new part and return its assigned ID."""
        pass

    @abstractmethod
    async def create_child(self, parent_id: int, part: Part) -> int:
        """
        Atomically check that the parent exists and insert the part below it.

        Raises EntityNotFoundException without writing anything when the
        parent is missing.
        """
        pass

    @abstractmethod
    async def update(self, part: Part) -> None:
        """Overwrite name and number of an existing part."""
        pass

    @abstractmethod
    async def delete(self, part_id: int) -> bool:
        """Delete a part together with all of its descendants."""
        pass

    async def count_descendants(self, part_id: int) -> int:
        """Count all descendants of a part with a single recursive query."""
        raise NotImplementedError(
            f"{type(self).__name__} does not support recursive queries"
        )

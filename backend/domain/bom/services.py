"""
BOM Domain - Services.

Tree-level operations composed from the flat part store:

- TreeMaterializer loads a part and its whole subtree level by level
- DescendantCounter counts a subtree without loading it
- TreeMutator attaches, copies and deletes parts
"""

from __future__ import annotations
import logging
from typing import List, Optional, Set

from domain.shared.exceptions import (
    CircularReferenceException,
    EntityNotFoundException,
    TreeLimitExceededException,
    ValidationException,
)

from .aggregates import PartTree
from .entities import Part
from .repositories import PartRepository

logger = logging.getLogger(__name__)


class TreeMaterializer:
    """
    Breadth-first loader of a BOM subtree.

    Each level of the tree costs one batched ``get_children`` call, so the
    number of store round-trips equals the height of the subtree plus one.
    Levels are read one after another without a shared transaction; a
    concurrent writer may therefore produce a snapshot that mixes states.
    """

    def __init__(
        self,
        repository: PartRepository,
        max_depth: Optional[int] = None,
        max_nodes: Optional[int] = None,
    ):
        if max_depth is not None and max_depth < 0:
            raise ValidationException("max_depth must not be negative", "max_depth", max_depth)
        if max_nodes is not None and max_nodes < 1:
            raise ValidationException("max_nodes must be positive", "max_nodes", max_nodes)
        self.repository = repository
        self.max_depth = max_depth
        self.max_nodes = max_nodes

    async def materialize(self, root_id: int) -> Optional[PartTree]:
        """Load the part ``root_id`` with all descendants; None if it does not exist."""
        root = await self.repository.get_by_id(root_id)
        if root is None:
            return None

        tree = PartTree(root)
        frontier: List[int] = [root.id]
        depth = 0

        while frontier:
            children_by_parent = await self.repository.get_children(frontier)
            next_frontier: List[int] = []

            for parent_id in frontier:
                children = children_by_parent.get(parent_id, [])
                if not children:
                    continue
                if self.max_depth is not None and depth + 1 > self.max_depth:
                    logger.warning("BOM %s deeper than max_depth=%s", root_id, self.max_depth)
                    raise TreeLimitExceededException(root_id, "max_depth", self.max_depth)
                if self.max_nodes is not None and len(tree) + len(children) > self.max_nodes:
                    logger.warning("BOM %s larger than max_nodes=%s", root_id, self.max_nodes)
                    raise TreeLimitExceededException(root_id, "max_nodes", self.max_nodes)

                tree.attach(parent_id, children)
                next_frontier.extend(child.id for child in children)

            frontier = next_frontier
            depth += 1

        logger.debug("Materialized BOM %s: %d parts, height %d", root_id, len(tree), depth - 1)
        return tree


class DescendantCounter:
    """
    Counts all descendants of a part (the part itself excluded).

    Stores with recursive query support answer in one round-trip. Other
    stores fall back to expanding the tree level by level in process, which
    costs one round-trip per level.
    """

    def __init__(self, repository: PartRepository):
        self.repository = repository

    async def count(self, part_id: int) -> int:
        """Return the number of descendants; 0 for an unknown ID."""
        if self.repository.supports_recursive_queries:
            total = await self.repository.count_descendants(part_id)
        else:
            total = await self._count_by_levels(part_id)
        logger.debug("Part %s has %d descendants", part_id, total)
        return total

    async def _count_by_levels(self, part_id: int) -> int:
        seen: Set[int] = {part_id}
        frontier = [part_id]
        total = 0

        while frontier:
            children_by_parent = await self.repository.get_children(frontier)
            next_frontier = []
            for children in children_by_parent.values():
                for child in children:
                    if child.id in seen:
                        raise CircularReferenceException([part_id, child.id])
                    seen.add(child.id)
                    next_frontier.append(child.id)
            total += len(next_frontier)
            frontier = next_frontier

        return total


class TreeMutator:
    """
    Structural changes of the BOM tree.

    None of the operations can move an existing part to another parent, so
    no cycle can ever be introduced through this class.
    """

    def __init__(self, repository: PartRepository):
        self.repository = repository

    async def add_sub_part(self, parent_id: int, name: str, number: str) -> int:
        """
        Create a new part below ``parent_id`` and return its ID.

        Validation happens before touching the store; the existence check of
        the parent and the insert run as one atomic store call.
        """
        part = Part(name=name, number=number, parent_id=parent_id)
        new_id = await self.repository.create_child(parent_id, part)
        logger.info("Added sub part %s below part %s", new_id, parent_id)
        return new_id

    async def copy(self, source: Part) -> Part:
        """
        Create a sibling copy of ``source`` (same name, number and parent).

        Children of the source are not copied.
        """
        duplicate = source.sibling_copy()
        if duplicate.parent_id is None:
            new_id = await self.repository.create(duplicate)
        else:
            new_id = await self.repository.create_child(duplicate.parent_id, duplicate)
        duplicate.id = new_id
        logger.info("Copied part %s to %s", source.id, new_id)
        return duplicate

    async def copy_by_id(self, part_id: int) -> Part:
        """Load a part and create a sibling copy of it."""
        source = await self.repository.get_by_id(part_id)
        if source is None:
            raise EntityNotFoundException("Part", part_id)
        return await self.copy(source)

    async def delete(self, part_id: int) -> bool:
        """Delete a part together with its entire subtree."""
        deleted = await self.repository.delete(part_id)
        if deleted:
            logger.info("Deleted part %s with its subtree", part_id)
        return deleted

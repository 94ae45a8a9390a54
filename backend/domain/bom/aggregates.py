"""
BOM Domain - Aggregates.

PartTree is the in-memory snapshot of a part and its whole subtree.
"""

from __future__ import annotations
from collections import deque
from typing import Dict, Iterator, List, Optional, Tuple

from domain.shared.exceptions import (
    CircularReferenceException,
    EntityNotFoundException,
    ValidationException,
)

from .entities import Part


class PartTree:
    """
    Materialized subtree of the BOM.

    Parts live in a flat arena keyed by ID. The tree shape is kept as a
    reverse index ``parent_id -> [child_id, ...]`` built while loading, so no
    part ever holds a reference to another part object.

    The tree is a caller-owned snapshot: changing it does not touch the
    store, and it does not follow later changes in the store.
    """

    def __init__(self, root: Part):
        if root.id is None:
            raise ValidationException("Tree root must be a persisted part", "id")
        self._root_id = root.id
        self._parts: Dict[int, Part] = {root.id: root}
        self._children: Dict[int, List[int]] = {root.id: []}

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def root_id(self) -> int:
        return self._root_id

    @property
    def root(self) -> Part:
        return self._parts[self._root_id]

    @property
    def parts(self) -> List[Part]:
        """All parts in breadth-first order."""
        return [part for part, _ in self._breadth_first()]

    @property
    def height(self) -> int:
        """Depth of the deepest node (root only = 0)."""
        return max(depth for _, depth in self._breadth_first())

    def __len__(self) -> int:
        return len(self._parts)

    def __contains__(self, part_id: object) -> bool:
        return part_id in self._parts

    def __repr__(self) -> str:
        return f"<PartTree root={self._root_id} size={len(self)}>"

    # =========================================================================
    # BUILDING
    # =========================================================================

    def attach(self, parent_id: int, children: List[Part]) -> None:
        """
        Attach loaded children below a node already in the tree.

        A child that is already part of the tree means the stored parent
        pointers loop back on themselves.
        """
        if parent_id not in self._parts:
            raise EntityNotFoundException("Part", parent_id)

        siblings = self._children[parent_id]
        for child in children:
            if child.id in self._parts:
                raise CircularReferenceException(
                    [part.id for part in self.get_path_to_root(parent_id)] + [child.id]
                )
            if child.parent_id != parent_id:
                raise ValidationException(
                    f"Part {child.id} is not a child of part {parent_id}",
                    "parent_id",
                    child.parent_id
                )
            self._parts[child.id] = child
            self._children[child.id] = []
            siblings.append(child.id)

    # =========================================================================
    # TREE NAVIGATION
    # =========================================================================

    def get(self, part_id: int) -> Optional[Part]:
        return self._parts.get(part_id)

    def get_children(self, part_id: int) -> List[Part]:
        """Get the direct children of a node, in load order."""
        if part_id not in self._parts:
            raise EntityNotFoundException("Part", part_id)
        return [self._parts[child_id] for child_id in self._children[part_id]]

    def get_parent(self, part_id: int) -> Optional[Part]:
        """Get the parent of a node; None for the tree root."""
        part = self._parts.get(part_id)
        if part is None:
            raise EntityNotFoundException("Part", part_id)
        if part_id == self._root_id:
            return None
        return self._parts[part.parent_id]

    def get_all_descendants(self, part_id: int) -> List[Part]:
        """Get all descendants (children, grandchildren, etc.) of a node."""
        return [part for part, _ in self._breadth_first(part_id)][1:]

    def get_path_to_root(self, part_id: int) -> List[Part]:
        """Get the path from a node up to the tree root (node first)."""
        path = []
        current = self._parts.get(part_id)
        while current is not None:
            path.append(current)
            if current.id == self._root_id:
                break
            current = self._parts.get(current.parent_id)
        return path

    def depth_of(self, part_id: int) -> int:
        """Get the depth of a node in the tree (root = 0)."""
        if part_id not in self._parts:
            raise EntityNotFoundException("Part", part_id)
        return len(self.get_path_to_root(part_id)) - 1

    def walk(self) -> Iterator[Tuple[Part, int]]:
        """
        Yield ``(part, depth)`` pairs in pre-order.

        Uses an explicit stack so arbitrarily deep trees do not hit the
        interpreter recursion limit.
        """
        stack = [(self._root_id, 0)]
        while stack:
            part_id, depth = stack.pop()
            yield self._parts[part_id], depth
            # reversed so the first child is popped first
            for child_id in reversed(self._children[part_id]):
                stack.append((child_id, depth + 1))

    def _breadth_first(self, start_id: Optional[int] = None) -> Iterator[Tuple[Part, int]]:
        start_id = self._root_id if start_id is None else start_id
        if start_id not in self._parts:
            raise EntityNotFoundException("Part", start_id)
        queue = deque([(start_id, 0)])
        while queue:
            part_id, depth = queue.popleft()
            yield self._parts[part_id], depth
            queue.extend((child_id, depth + 1) for child_id in self._children[part_id])

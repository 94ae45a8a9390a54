"""
Pytest fixtures for BOM tests.

Provides an in-memory part store so the domain services can be tested
without a database, plus a prebuilt demo BOM:

    Car (C-100)
        Engine (E-10)
            Piston (P-1)
        Wheel (W-20)
"""

from dataclasses import replace
from typing import Dict, Iterable, List, Optional

import pytest

from domain.bom.entities import Part
from domain.bom.repositories import PartRepository
from domain.shared.exceptions import EntityNotFoundException


class InMemoryPartRepository(PartRepository):
    """Part store kept in a dict; records every call for round-trip checks."""

    def __init__(self):
        self.rows: Dict[int, Part] = {}
        self.calls: List[str] = []
        self._next_id = 1

    def _copy(self, part: Optional[Part]) -> Optional[Part]:
        return replace(part) if part is not None else None

    def _insert(self, part: Part) -> int:
        new_id = self._next_id
        self._next_id += 1
        self.rows[new_id] = replace(part, id=new_id)
        return new_id

    async def get_by_id(self, part_id: int) -> Optional[Part]:
        self.calls.append('get_by_id')
        return self._copy(self.rows.get(part_id))

    async def get_all(self) -> List[Part]:
        self.calls.append('get_all')
        return [self._copy(self.rows[part_id]) for part_id in sorted(self.rows)]

    async def get_by_ids(self, part_ids: Iterable[int]) -> Dict[int, Optional[Part]]:
        self.calls.append('get_by_ids')
        return {part_id: self._copy(self.rows.get(part_id)) for part_id in part_ids}

    async def get_children(self, parent_ids: Iterable[int]) -> Dict[int, List[Part]]:
        self.calls.append('get_children')
        ids = list(dict.fromkeys(parent_ids))
        children: Dict[int, List[Part]] = {part_id: [] for part_id in ids}
        for part_id in sorted(self.rows):
            part = self.rows[part_id]
            if part.parent_id in children:
                children[part.parent_id].append(self._copy(part))
        return children

    async def create(self, part: Part) -> int:
        self.calls.append('create')
        if part.parent_id is not None and part.parent_id not in self.rows:
            raise EntityNotFoundException("Part", part.parent_id)
        return self._insert(part)

    async def create_child(self, parent_id: int, part: Part) -> int:
        self.calls.append('create_child')
        if parent_id not in self.rows:
            raise EntityNotFoundException("Part", parent_id)
        return self._insert(replace(part, parent_id=parent_id))

    async def update(self, part: Part) -> None:
        self.calls.append('update')
        current = self.rows.get(part.id)
        if current is None:
            raise EntityNotFoundException("Part", part.id)
        self.rows[part.id] = current.with_labels(part.name, part.number)

    async def delete(self, part_id: int) -> bool:
        self.calls.append('delete')
        if part_id not in self.rows:
            return False
        doomed = {part_id}
        frontier = [part_id]
        while frontier:
            frontier = [
                child_id for child_id, child in self.rows.items()
                if child.parent_id in frontier
            ]
            doomed.update(frontier)
        for doomed_id in doomed:
            del self.rows[doomed_id]
        return True


class RecursiveInMemoryPartRepository(InMemoryPartRepository):
    """In-memory store that claims server-side recursive query support."""

    supports_recursive_queries = True

    async def count_descendants(self, part_id: int) -> int:
        self.calls.append('count_descendants')
        total = 0
        frontier = [part_id]
        while frontier:
            frontier = [
                child_id for child_id, child in self.rows.items()
                if child.parent_id in frontier
            ]
            total += len(frontier)
        return total


def seed_car(repository: InMemoryPartRepository) -> Dict[str, int]:
    """Insert the demo BOM directly into the store; returns ids by name."""
    ids = {}
    ids['Car'] = repository._insert(Part(name='Car', number='C-100'))
    ids['Engine'] = repository._insert(Part(name='Engine', number='E-10', parent_id=ids['Car']))
    ids['Wheel'] = repository._insert(Part(name='Wheel', number='W-20', parent_id=ids['Car']))
    ids['Piston'] = repository._insert(Part(name='Piston', number='P-1', parent_id=ids['Engine']))
    return ids


@pytest.fixture
def repository():
    return InMemoryPartRepository()


@pytest.fixture
def car(repository):
    """Ids of the demo BOM inserted into ``repository``."""
    return seed_car(repository)

"""
BOM Repository - Django ORM implementation of the part store.

Reads go through Django's async ORM. Writes that need more than one
statement run in a ``transaction.atomic()`` block executed as a single
``sync_to_async`` call, so cancelling the awaiting task never leaves half
of such a write behind.

Subtree deletion and descendant counting use recursive SQL, so neither
depends on the depth of the tree.
"""

from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Dict, Iterable, List, Optional

from asgiref.sync import sync_to_async
from django.db import DatabaseError, IntegrityError, connection, transaction
from django.utils import timezone

from domain.bom.entities import Part
from domain.bom.repositories import PartRepository
from domain.shared.exceptions import EntityNotFoundException, ValidationException, StoreException
from infrastructure.persistence.models import PartModel

logger = logging.getLogger(__name__)

# Keeps IN (...) lists below SQLite's bound parameter limit.
IN_CLAUSE_BATCH_SIZE = 500

# Upper bound of BigAutoField; no stored part can have a larger ID.
MAX_PART_ID = 9223372036854775807

COUNT_DESCENDANTS_SQL = """
    WITH RECURSIVE descendants (id) AS (
        SELECT id FROM {table} WHERE parent_id = %s
        UNION
        SELECT child.id FROM {table} AS child
        INNER JOIN descendants ON child.parent_id = descendants.id
    )
    SELECT COUNT(*) FROM descendants
"""

DELETE_SUBTREE_SQL = """
    DELETE FROM {table} WHERE id IN (
        WITH RECURSIVE subtree (id) AS (
            SELECT id FROM {table} WHERE id = %s
            UNION
            SELECT child.id FROM {table} AS child
            INNER JOIN subtree ON child.parent_id = subtree.id
        )
        SELECT id FROM subtree
    )
"""


@contextmanager
def store_errors(operation: str):
    """
    Translate database failures into StoreException.

    Integrity violations are passed through unchanged; the API answers them
    with 409 Conflict.
    """
    try:
        yield
    except IntegrityError:
        raise
    except DatabaseError as exc:
        logger.error("Store failure during %s: %s", operation, exc)
        raise StoreException(operation, str(exc)) from exc


def is_storable_id(part_id: int) -> bool:
    """Check that an ID fits the primary key column."""
    return 0 < part_id <= MAX_PART_ID


def _batched(ids: List[int]) -> Iterable[List[int]]:
    for start in range(0, len(ids), IN_CLAUSE_BATCH_SIZE):
        yield ids[start:start + IN_CLAUSE_BATCH_SIZE]


def _parts_table() -> str:
    return connection.ops.quote_name(PartModel._meta.db_table)


def _create_child(parent_id: int, part: Part) -> int:
    with transaction.atomic():
        parent = (
            PartModel.objects.select_for_update()
            .filter(pk=parent_id)
            .values_list('pk', flat=True)
            .first()
        )
        if parent is None:
            raise EntityNotFoundException("Part", parent_id)
        row = PartModel.objects.create(
            name=part.name,
            number=part.number,
            parent_id=parent_id,
        )
    return row.id


def _delete_subtree(part_id: int) -> int:
    with transaction.atomic():
        with connection.cursor() as cursor:
            cursor.execute(DELETE_SUBTREE_SQL.format(table=_parts_table()), [part_id])
            return cursor.rowcount


def _count_descendants(part_id: int) -> int:
    with connection.cursor() as cursor:
        cursor.execute(COUNT_DESCENDANTS_SQL.format(table=_parts_table()), [part_id])
        (total,) = cursor.fetchone()
    return total


class DjangoPartRepository(PartRepository):
    """
    Part store backed by the ``bom_parts`` table.

    IDs outside the primary key range are treated as absent without
    querying the database.
    """

    supports_recursive_queries = True

    async def get_by_id(self, part_id: int) -> Optional[Part]:
        if not is_storable_id(part_id):
            return None
        with store_errors("get_by_id"):
            row = await PartModel.objects.filter(pk=part_id).afirst()
        return row.to_entity() if row is not None else None

    async def get_all(self) -> List[Part]:
        with store_errors("get_all"):
            return [row.to_entity() async for row in PartModel.objects.order_by('id')]

    async def get_by_ids(self, part_ids: Iterable[int]) -> Dict[int, Optional[Part]]:
        ids = list(dict.fromkeys(part_ids))
        with store_errors("get_by_ids"):
            rows = await PartModel.objects.ain_bulk([part_id for part_id in ids if is_storable_id(part_id)])
        return {
            part_id: rows[part_id].to_entity() if part_id in rows else None
            for part_id in ids
        }

    async def get_children(self, parent_ids: Iterable[int]) -> Dict[int, List[Part]]:
        ids = list(dict.fromkeys(parent_ids))
        children: Dict[int, List[Part]] = {part_id: [] for part_id in ids}
        with store_errors("get_children"):
            for batch in _batched([part_id for part_id in ids if is_storable_id(part_id)]):
                queryset = PartModel.objects.filter(parent_id__in=batch).order_by('parent_id', 'id')
                async for row in queryset:
                    children[row.parent_id].append(row.to_entity())
        return children

    async def create(self, part: Part) -> int:
        if part.parent_id is not None:
            return await self.create_child(part.parent_id, part)
        with store_errors("create"):
            row = await PartModel.objects.acreate(name=part.name, number=part.number)
        logger.info("Created part %s (%s)", row.id, part)
        return row.id

    async def create_child(self, parent_id: int, part: Part) -> int:
        if not is_storable_id(parent_id):
            raise EntityNotFoundException("Part", parent_id)
        with store_errors("create_child"):
            new_id = await sync_to_async(_create_child)(parent_id, part)
        logger.info("Created part %s (%s) below part %s", new_id, part, parent_id)
        return new_id

    async def update(self, part: Part) -> None:
        if part.id is None:
            raise ValidationException("Part ID is required for update", "id")
        if not is_storable_id(part.id):
            raise EntityNotFoundException("Part", part.id)
        with store_errors("update"):
            updated = await PartModel.objects.filter(pk=part.id).aupdate(
                name=part.name,
                number=part.number,
                updated_at=timezone.now(),
            )
        if not updated:
            raise EntityNotFoundException("Part", part.id)
        logger.info("Updated part %s (%s)", part.id, part)

    async def delete(self, part_id: int) -> bool:
        if not is_storable_id(part_id):
            return False
        with store_errors("delete"):
            deleted = await sync_to_async(_delete_subtree)(part_id)
        if deleted:
            logger.info("Deleted part %s and %d dependent rows", part_id, deleted - 1)
        return deleted > 0

    async def count_descendants(self, part_id: int) -> int:
        if not is_storable_id(part_id):
            return 0
        with store_errors("count_descendants"):
            return await sync_to_async(_count_descendants)(part_id)

"""
BOM (Bill of Materials) ORM Models.

Models for product structure - the hierarchical tree of parts.
"""

from django.db import models

from domain.bom.entities import NAME_MAX_LENGTH, NUMBER_MAX_LENGTH, Part

from .base import BaseModel


class PartModel(BaseModel):
    """
    Single part of the BOM tree.

    The tree is stored as a self-referencing foreign key. Deleting a part
    deletes its whole subtree (CASCADE).
    """

    name = models.CharField(
        max_length=NAME_MAX_LENGTH,
        verbose_name="Наименование"
    )
    number = models.CharField(
        max_length=NUMBER_MAX_LENGTH,
        verbose_name="Номер детали"
    )

    # Parent part (null for root)
    parent = models.ForeignKey(
        'self',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='children',
        verbose_name="Родительская деталь"
    )

    class Meta:
        db_table = 'bom_parts'
        verbose_name = 'Деталь'
        verbose_name_plural = 'Детали'
        ordering = ['id']
        indexes = [
            models.Index(fields=['parent', 'id'], name='bom_parts_parent_id_idx'),
        ]

    def __str__(self):
        return f"{self.number} {self.name}"

    def to_entity(self) -> Part:
        """Convert the row into a domain entity."""
        return Part.restore(
            id=self.id,
            name=self.name,
            number=self.number,
            parent_id=self.parent_id,
        )

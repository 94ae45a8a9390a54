"""
Base ORM Models and Mixins.

Provides common functionality for all models:
- Autoincrement integer primary keys
- Timestamps (created_at, updated_at)
"""

from django.db import models


class TimeStampedMixin(models.Model):
    """Mixin for created_at and updated_at timestamps."""

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name="Дата создания"
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name="Дата обновления"
    )

    class Meta:
        abstract = True


class BaseModel(TimeStampedMixin):
    """
    Base model with all common functionality.

    Includes:
    - Integer primary key assigned by the database
    - Timestamps (created_at, updated_at)
    """

    id = models.BigAutoField(
        primary_key=True,
        verbose_name="ID"
    )

    class Meta:
        abstract = True

    def __str__(self):
        return str(self.id)

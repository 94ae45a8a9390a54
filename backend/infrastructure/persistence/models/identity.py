"""
Identity ORM Models.

API keys accepted by the REST authentication gate.
"""

import hashlib
import secrets

from django.db import models

from .base import BaseModel


def hash_api_key(raw_key: str) -> str:
    return hashlib.sha256(raw_key.encode('utf-8')).hexdigest()


class ApiKeyManager(models.Manager):
    """Manager with helpers for issuing and checking keys."""

    def issue(self, name: str = ''):
        """Create a new key; returns ``(api_key, raw_key)``."""
        raw_key = secrets.token_urlsafe(32)
        api_key = self.create(name=name, key_hash=hash_api_key(raw_key))
        return api_key, raw_key

    def is_valid(self, raw_key: str) -> bool:
        return self.filter(key_hash=hash_api_key(raw_key), is_active=True).exists()


class ApiKey(BaseModel):
    """
    API key of a client allowed to call the BOM API.

    Only the SHA-256 digest of the key is stored.
    """

    name = models.CharField(
        max_length=255,
        blank=True,
        verbose_name="Название"
    )
    key_hash = models.CharField(
        max_length=64,
        unique=True,
        verbose_name="Хэш ключа"
    )
    is_active = models.BooleanField(
        default=True,
        db_index=True,
        verbose_name="Активен"
    )

    objects = ApiKeyManager()

    class Meta:
        db_table = 'api_keys'
        verbose_name = 'API ключ'
        verbose_name_plural = 'API ключи'
        ordering = ['id']

    def __str__(self):
        return self.name or f"API key {self.id}"

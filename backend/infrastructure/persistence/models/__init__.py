"""
Persistence Models Package.

All Django ORM models for the BOM service.
"""

# Base mixins
from .base import (
    TimeStampedMixin,
    BaseModel,
)

# BOM models
from .bom import (
    PartModel,
)

# Identity models
from .identity import (
    ApiKey,
    hash_api_key,
)

__all__ = [
    # Base
    'TimeStampedMixin',
    'BaseModel',
    # BOM
    'PartModel',
    # Identity
    'ApiKey',
    'hash_api_key',
]

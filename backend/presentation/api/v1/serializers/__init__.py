"""
Serializers Package.

All API serializers for the BOM service.
"""

from .bom import (
    PartSerializer,
    PartIdSerializer,
    PartCountSerializer,
    PartDeleteSerializer,
    PartTreeSerializer,
)

__all__ = [
    'PartSerializer',
    'PartIdSerializer',
    'PartCountSerializer',
    'PartDeleteSerializer',
    'PartTreeSerializer',
]

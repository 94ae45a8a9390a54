"""
Repository implementations backed by the Django ORM.
"""

from .bom import DjangoPartRepository, store_errors


def get_part_repository() -> DjangoPartRepository:
    return DjangoPartRepository()


__all__ = [
    'DjangoPartRepository',
    'get_part_repository',
    'store_errors',
]

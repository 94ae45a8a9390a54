"""
Base Views.

Common view mixins and base classes.
"""

from asgiref.sync import async_to_sync
from django.conf import settings
from rest_framework import viewsets

from domain.bom.repositories import PartRepository
from domain.bom.services import DescendantCounter, TreeMaterializer, TreeMutator
from infrastructure.persistence.repositories import get_part_repository


class BOMServiceMixin:
    """
    Mixin that wires the BOM services to a part store.

    A fresh repository is created per request and handed explicitly to
    every service.
    """

    repository_factory = staticmethod(get_part_repository)

    def get_repository(self) -> PartRepository:
        return self.repository_factory()

    def get_materializer(self, repository: PartRepository) -> TreeMaterializer:
        return TreeMaterializer(
            repository,
            max_depth=settings.BOM_TREE_MAX_DEPTH,
            max_nodes=settings.BOM_TREE_MAX_NODES,
        )

    def get_counter(self, repository: PartRepository) -> DescendantCounter:
        return DescendantCounter(repository)

    def get_mutator(self, repository: PartRepository) -> TreeMutator:
        return TreeMutator(repository)

    @staticmethod
    def run(coroutine_function, *args, **kwargs):
        """Run a BOM coroutine from synchronous view code."""
        return async_to_sync(coroutine_function)(*args, **kwargs)


class BaseServiceViewSet(BOMServiceMixin, viewsets.ViewSet):
    """
    Base viewset for resources served through domain services
    instead of querysets.
    """

    lookup_value_regex = r'\d+'

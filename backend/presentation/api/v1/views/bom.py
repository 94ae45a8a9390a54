"""
BOM Views.

API views for parts and part trees.
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response

from domain.bom.entities import Part
from domain.bom.rendering import render
from domain.shared.exceptions import EntityNotFoundException
from ...renderers import PlainTextRenderer
from ..serializers.bom import (
    PartSerializer,
    PartIdSerializer,
    PartCountSerializer,
    PartDeleteSerializer,
    PartTreeSerializer,
)
from .base import BaseServiceViewSet


class PartViewSet(BaseServiceViewSet):
    """
    ViewSet for BOM parts.

    Endpoints:
    - GET /bom/ - list all parts
    - POST /bom/ - create root part
    - GET /bom/{id}/ - get part
    - PUT/PATCH /bom/{id}/ - update name/number
    - DELETE /bom/{id}/ - delete part with its whole subtree
    - POST/PATCH /bom/{id}/addsubpart/ - create part below {id}
    - GET /bom/{id}/showbom/ - BOM below {id} as indented text
    - GET /bom/{id}/tree/ - BOM below {id} as nested JSON
    - GET /bom/{id}/count/ - number of parts below {id}
    - POST /bom/{id}/copy/ - copy part next to itself
    """

    def _get_part(self, repository, pk) -> Part:
        part = self.run(repository.get_by_id, int(pk))
        if part is None:
            raise EntityNotFoundException("Part", pk)
        return part

    @extend_schema(responses=PartSerializer(many=True))
    def list(self, request):
        parts = self.run(self.get_repository().get_all)
        return Response(PartSerializer(parts, many=True).data)

    @extend_schema(responses=PartSerializer)
    def retrieve(self, request, pk=None):
        part = self._get_part(self.get_repository(), pk)
        return Response(PartSerializer(part).data)

    @extend_schema(request=PartSerializer, responses={201: PartIdSerializer})
    def create(self, request):
        serializer = PartSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        part = Part(**serializer.validated_data)
        new_id = self.run(self.get_repository().create, part)

        return Response({'id': new_id}, status=status.HTTP_201_CREATED)

    @extend_schema(request=PartSerializer, responses=PartSerializer)
    def update(self, request, pk=None, partial=False):
        repository = self.get_repository()
        current = self._get_part(repository, pk)

        serializer = PartSerializer(current, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        part = current.with_labels(
            name=serializer.validated_data.get('name', current.name),
            number=serializer.validated_data.get('number', current.number),
        )
        self.run(repository.update, part)

        return Response(PartSerializer(part).data)

    @extend_schema(request=PartSerializer, responses=PartSerializer)
    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk, partial=True)

    @extend_schema(responses={200: PartDeleteSerializer, 404: PartDeleteSerializer})
    def destroy(self, request, pk=None):
        repository = self.get_repository()
        deleted = self.run(self.get_mutator(repository).delete, int(pk))
        return Response(
            {'deleted': deleted},
            status=status.HTTP_200_OK if deleted else status.HTTP_404_NOT_FOUND
        )

    @extend_schema(request=PartSerializer, responses={201: PartIdSerializer})
    @action(detail=True, methods=['post', 'patch'], url_path='addsubpart')
    def add_sub_part(self, request, pk=None):
        """Add a new part below this part."""
        serializer = PartSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        repository = self.get_repository()
        new_id = self.run(
            self.get_mutator(repository).add_sub_part,
            int(pk),
            serializer.validated_data['name'],
            serializer.validated_data['number'],
        )

        return Response({'id': new_id}, status=status.HTTP_201_CREATED)

    @extend_schema(responses={(200, 'text/plain'): str})
    @action(
        detail=True,
        methods=['get'],
        url_path='showbom',
        renderer_classes=[PlainTextRenderer],
    )
    def show_bom(self, request, pk=None):
        """Get the BOM below this part as indented text (empty if unknown)."""
        repository = self.get_repository()
        tree = self.run(self.get_materializer(repository).materialize, int(pk))
        return Response(render(tree), content_type='text/plain; charset=utf-8')

    @action(detail=True, methods=['get'])
    def tree(self, request, pk=None):
        """Get the BOM below this part as nested JSON."""
        repository = self.get_repository()
        tree = self.run(self.get_materializer(repository).materialize, int(pk))
        if tree is None:
            raise EntityNotFoundException("Part", pk)
        return Response(PartTreeSerializer(tree).data)

    @extend_schema(responses=PartCountSerializer)
    @action(detail=True, methods=['get'])
    def count(self, request, pk=None):
        """Count all parts below this part."""
        repository = self.get_repository()
        total = self.run(self.get_counter(repository).count, int(pk))
        return Response({'count': total})

    @extend_schema(request=None, responses={201: PartSerializer})
    @action(detail=True, methods=['post'])
    def copy(self, request, pk=None):
        """Create a copy of this part under the same parent (children are not copied)."""
        repository = self.get_repository()
        duplicate = self.run(self.get_mutator(repository).copy_by_id, int(pk))
        return Response(PartSerializer(duplicate).data, status=status.HTTP_201_CREATED)

"""
BOM Serializers.

Serializers for parts and materialized part trees. They work on domain
entities (``Part``, ``PartTree``) rather than ORM rows.
"""

from rest_framework import serializers

from domain.bom.entities import NAME_MAX_LENGTH, NUMBER_MAX_LENGTH


class PartSerializer(serializers.Serializer):
    """Serializer for a single part; also validates create/update payloads."""

    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(max_length=NAME_MAX_LENGTH, trim_whitespace=False)
    number = serializers.CharField(max_length=NUMBER_MAX_LENGTH, trim_whitespace=False)
    parent_id = serializers.IntegerField(read_only=True, allow_null=True)


class PartIdSerializer(serializers.Serializer):
    """Response of create and add-sub-part."""

    id = serializers.IntegerField()


class PartCountSerializer(serializers.Serializer):
    """Response of count-descendants."""

    count = serializers.IntegerField()


class PartDeleteSerializer(serializers.Serializer):
    """Response of delete."""

    deleted = serializers.BooleanField()


class PartTreeSerializer(serializers.BaseSerializer):
    """
    Serializer for a materialized BOM as nested dicts.

    Each node is a serialized part with a ``children`` list. Built from the
    tree's pre-order walk, so no recursion is involved.
    """

    def to_representation(self, tree):
        nodes = {}
        for part, _depth in tree.walk():
            node = dict(PartSerializer(part).data)
            node['children'] = []
            nodes[part.id] = node
            if part.id != tree.root_id:
                nodes[part.parent_id]['children'].append(node)
        return nodes[tree.root_id]

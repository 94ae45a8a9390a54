"""\
Setup Demo Data Command.

Purpose:
- Optionally clear all parts.
- Seed a small demo BOM: a car with engine and wheel, the engine with a piston.

This command is intended for local demo environments.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand

from domain.bom.entities import Part
from domain.bom.rendering import render
from domain.bom.services import TreeMaterializer, TreeMutator


@dataclass(frozen=True)
class DemoPart:
    name: str
    number: str
    children: List[DemoPart] = field(default_factory=list)


DEMO_BOM = DemoPart('Car', 'C-100', [
    DemoPart('Engine', 'E-10', [
        DemoPart('Piston', 'P-1'),
    ]),
    DemoPart('Wheel', 'W-20'),
])


class Command(BaseCommand):
    help = 'Seed the demo BOM (Car / Engine / Wheel / Piston)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Delete all existing parts before seeding'
        )

    def handle(self, *args, **options):
        from infrastructure.persistence.models import PartModel
        from infrastructure.persistence.repositories import get_part_repository

        repository = get_part_repository()

        if options['clear']:
            # Deleting the roots cascades to everything else
            root_ids = list(PartModel.objects.filter(parent__isnull=True).values_list('pk', flat=True))
            for part_id in root_ids:
                async_to_sync(repository.delete)(part_id)
            self.stdout.write(f"Deleted {len(root_ids)} BOM trees")

        root_id = async_to_sync(self._seed)(repository, DEMO_BOM)

        tree = async_to_sync(TreeMaterializer(repository).materialize)(root_id)
        self.stdout.write(render(tree))
        self.stdout.write(self.style.SUCCESS(f'Demo BOM created with root part {root_id}'))

    async def _seed(self, repository, template: DemoPart) -> int:
        mutator = TreeMutator(repository)
        root_id = await repository.create(Part(name=template.name, number=template.number))

        pending = [(root_id, child) for child in template.children]
        while pending:
            parent_id, child = pending.pop(0)
            child_id = await mutator.add_sub_part(parent_id, child.name, child.number)
            pending.extend((child_id, grandchild) for grandchild in child.children)

        return root_id

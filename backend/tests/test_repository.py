"""
Tests for the Django part store.
"""

from asgiref.sync import async_to_sync
from django.db import IntegrityError, OperationalError
from django.test import SimpleTestCase, TestCase

from domain.bom.entities import Part
from domain.bom.rendering import render
from domain.bom.services import DescendantCounter, TreeMaterializer, TreeMutator
from domain.shared.exceptions import EntityNotFoundException, StoreException, ValidationException
from infrastructure.persistence.models import PartModel
from infrastructure.persistence.repositories import DjangoPartRepository, get_part_repository, store_errors


class DjangoPartRepositoryTests(TestCase):

    def setUp(self):
        self.repository = DjangoPartRepository()

    async def _seed_car(self):
        mutator = TreeMutator(self.repository)
        ids = {'Car': await self.repository.create(Part(name='Car', number='C-100'))}
        ids['Engine'] = await mutator.add_sub_part(ids['Car'], 'Engine', 'E-10')
        ids['Wheel'] = await mutator.add_sub_part(ids['Car'], 'Wheel', 'W-20')
        ids['Piston'] = await mutator.add_sub_part(ids['Engine'], 'Piston', 'P-1')
        return ids

    async def _build_chain(self, depth):
        root_id = await self.repository.create(Part(name='Level 0', number='L-0'))
        parent_id = root_id
        for level in range(1, depth + 1):
            parent_id = await self.repository.create_child(
                parent_id, Part(name=f'Level {level}', number=f'L-{level}')
            )
        return root_id

    def test_factory_returns_django_store(self):
        self.assertIsInstance(get_part_repository(), DjangoPartRepository)

    async def test_create_and_get(self):
        part_id = await self.repository.create(Part(name='Car', number='C-100'))

        part = await self.repository.get_by_id(part_id)
        self.assertEqual(part.id, part_id)
        self.assertEqual((part.name, part.number), ('Car', 'C-100'))
        self.assertIsNone(part.parent_id)

    async def test_get_missing_part(self):
        self.assertIsNone(await self.repository.get_by_id(999))

    async def test_ids_are_unique(self):
        first = await self.repository.create(Part(name='Car', number='C-100'))
        second = await self.repository.create(Part(name='Car', number='C-100'))
        self.assertNotEqual(first, second)

    async def test_create_with_parent_goes_through_create_child(self):
        root_id = await self.repository.create(Part(name='Car', number='C-100'))
        child_id = await self.repository.create(Part(name='Engine', number='E-10', parent_id=root_id))

        child = await self.repository.get_by_id(child_id)
        self.assertEqual(child.parent_id, root_id)

    async def test_update_round_trip(self):
        part_id = await self.repository.create(Part(name='Car', number='C-100'))
        part = await self.repository.get_by_id(part_id)

        await self.repository.update(part.with_labels('Auto', 'A-1'))

        updated = await self.repository.get_by_id(part_id)
        self.assertEqual((updated.name, updated.number), ('Auto', 'A-1'))

    async def test_update_missing_part(self):
        with self.assertRaises(EntityNotFoundException):
            await self.repository.update(Part(id=999, name='Car', number='C-100'))

    async def test_update_requires_id(self):
        with self.assertRaises(ValidationException):
            await self.repository.update(Part(name='Car', number='C-100'))

    async def test_get_all_is_ordered_by_id(self):
        ids = await self._seed_car()
        parts = await self.repository.get_all()
        self.assertEqual([part.id for part in parts], sorted(ids.values()))

    async def test_get_by_ids_keeps_missing_ids(self):
        ids = await self._seed_car()
        found = await self.repository.get_by_ids([ids['Wheel'], 999, ids['Car']])

        self.assertEqual(list(found), [ids['Wheel'], 999, ids['Car']])
        self.assertEqual(found[ids['Wheel']].name, 'Wheel')
        self.assertIsNone(found[999])

    async def test_get_children_by_level(self):
        ids = await self._seed_car()
        children = await self.repository.get_children([ids['Car'], ids['Engine'], ids['Wheel']])

        self.assertEqual([part.name for part in children[ids['Car']]], ['Engine', 'Wheel'])
        self.assertEqual([part.name for part in children[ids['Engine']]], ['Piston'])
        self.assertEqual(children[ids['Wheel']], [])

    async def test_create_child_of_missing_parent_inserts_nothing(self):
        await self._seed_car()
        before = await PartModel.objects.acount()

        with self.assertRaises(EntityNotFoundException):
            await TreeMutator(self.repository).add_sub_part(999, 'Tire', 'T-1')

        self.assertEqual(await PartModel.objects.acount(), before)

    async def test_delete_cascades_to_subtree(self):
        ids = await self._seed_car()
        before = await PartModel.objects.acount()
        descendants = await DescendantCounter(self.repository).count(ids['Engine'])

        self.assertTrue(await self.repository.delete(ids['Engine']))

        self.assertEqual(await PartModel.objects.acount(), before - (descendants + 1))
        self.assertIsNone(await self.repository.get_by_id(ids['Piston']))
        self.assertIsNotNone(await self.repository.get_by_id(ids['Wheel']))

    async def test_delete_missing_part(self):
        self.assertFalse(await self.repository.delete(999))

    async def test_recursive_count_matches_materialized_tree(self):
        for depth in range(0, 11):
            with self.subTest(depth=depth):
                root_id = await self._build_chain(depth)
                await self.repository.create_child(root_id, Part(name='Bolt', number='B-1'))

                tree = await TreeMaterializer(self.repository).materialize(root_id)
                count = await self.repository.count_descendants(root_id)

                self.assertEqual(count, len(tree) - 1)
                self.assertEqual(count, depth + 1)

    async def test_count_missing_part_is_zero(self):
        self.assertEqual(await self.repository.count_descendants(999), 0)

    async def test_car_scenario(self):
        ids = await self._seed_car()

        self.assertEqual(await DescendantCounter(self.repository).count(ids['Car']), 3)
        tree = await TreeMaterializer(self.repository).materialize(ids['Car'])
        self.assertEqual(render(tree), '\n'.join([
            f"Part Id: {ids['Car']}, Name: Car, Number: C-100",
            f"    Part Id: {ids['Engine']}, Name: Engine, Number: E-10",
            f"        Part Id: {ids['Piston']}, Name: Piston, Number: P-1",
            f"    Part Id: {ids['Wheel']}, Name: Wheel, Number: W-20",
        ]))

    async def test_copy_creates_sibling(self):
        ids = await self._seed_car()
        duplicate = await TreeMutator(self.repository).copy_by_id(ids['Engine'])

        stored = await self.repository.get_by_id(duplicate.id)
        self.assertEqual(stored.parent_id, ids['Car'])
        self.assertEqual(await self.repository.count_descendants(duplicate.id), 0)
        self.assertEqual(await self.repository.count_descendants(ids['Car']), 4)

    def test_delete_deep_chain(self):
        depth = 1500
        root = parent = PartModel.objects.create(name='Level 0', number='L-0')
        for level in range(1, depth):
            parent = PartModel.objects.create(name=f'Level {level}', number=f'L-{level}', parent=parent)
        PartModel.objects.create(name='Bus', number='B-1')

        self.assertEqual(async_to_sync(self.repository.count_descendants)(root.id), depth - 1)
        self.assertTrue(async_to_sync(self.repository.delete)(root.id))

        self.assertEqual(list(PartModel.objects.values_list('name', flat=True)), ['Bus'])

    async def test_out_of_range_ids_are_absent(self):
        ids = await self._seed_car()
        huge_id = 99999999999999999999

        self.assertIsNone(await self.repository.get_by_id(huge_id))
        self.assertEqual(await self.repository.count_descendants(huge_id), 0)
        self.assertEqual(await DescendantCounter(self.repository).count(huge_id), 0)
        self.assertFalse(await self.repository.delete(huge_id))
        self.assertEqual((await self.repository.get_by_ids([huge_id]))[huge_id], None)
        self.assertEqual((await self.repository.get_children([huge_id, ids['Car']]))[huge_id], [])
        with self.assertRaises(EntityNotFoundException):
            await self.repository.create_child(huge_id, Part(name='Tire', number='T-1'))
        with self.assertRaises(EntityNotFoundException):
            await self.repository.update(Part(id=huge_id, name='Car', number='C-100'))
        self.assertEqual(await PartModel.objects.acount(), 4)

    def test_row_edited_outside_api_still_loads(self):
        car = PartModel.objects.create(name='Car', number='C-100')
        PartModel.objects.create(name='   ', number='W-20', parent=car)

        parts = async_to_sync(self.repository.get_all)()
        tree = async_to_sync(TreeMaterializer(self.repository).materialize)(car.id)

        self.assertEqual([part.name for part in parts], ['Car', '   '])
        self.assertEqual(len(tree), 2)


class StoreErrorsTests(SimpleTestCase):

    def test_database_error_becomes_store_exception(self):
        with self.assertRaises(StoreException) as ctx:
            with store_errors('get_by_id'):
                raise OperationalError('database is locked')

        self.assertEqual(ctx.exception.code, 'STORE_ERROR')
        self.assertIsInstance(ctx.exception.__cause__, OperationalError)

    def test_integrity_error_passes_through(self):
        with self.assertRaises(IntegrityError):
            with store_errors('create_child'):
                raise IntegrityError('FOREIGN KEY constraint failed')

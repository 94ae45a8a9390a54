"""
Tests for the materialized PartTree.
"""

import pytest

from domain.bom.aggregates import PartTree
from domain.bom.entities import Part
from domain.shared.exceptions import (
    CircularReferenceException,
    EntityNotFoundException,
    ValidationException,
)


@pytest.fixture
def tree():
    tree = PartTree(Part(id=1, name="Car", number="C-100"))
    tree.attach(1, [
        Part(id=2, name="Engine", number="E-10", parent_id=1),
        Part(id=3, name="Wheel", number="W-20", parent_id=1),
    ])
    tree.attach(2, [Part(id=4, name="Piston", number="P-1", parent_id=2)])
    return tree


def test_root_must_be_persisted():
    with pytest.raises(ValidationException):
        PartTree(Part(name="Car", number="C-100"))


def test_size_and_membership(tree):
    assert len(tree) == 4
    assert 4 in tree
    assert 99 not in tree
    assert tree.root.name == "Car"
    assert tree.root_id == 1


def test_children_keep_load_order(tree):
    assert [part.id for part in tree.get_children(1)] == [2, 3]
    assert [part.id for part in tree.get_children(2)] == [4]
    assert tree.get_children(3) == []


def test_parent_lookup(tree):
    assert tree.get_parent(1) is None
    assert tree.get_parent(4).id == 2


def test_walk_is_pre_order_with_depth(tree):
    assert [(part.name, depth) for part, depth in tree.walk()] == [
        ("Car", 0),
        ("Engine", 1),
        ("Piston", 2),
        ("Wheel", 1),
    ]


def test_parts_are_breadth_first(tree):
    assert [part.id for part in tree.parts] == [1, 2, 3, 4]


def test_depth_height_and_path(tree):
    assert tree.depth_of(1) == 0
    assert tree.depth_of(4) == 2
    assert tree.height == 2
    assert [part.id for part in tree.get_path_to_root(4)] == [4, 2, 1]


def test_descendants(tree):
    assert {part.id for part in tree.get_all_descendants(1)} == {2, 3, 4}
    assert [part.id for part in tree.get_all_descendants(2)] == [4]
    assert tree.get_all_descendants(3) == []


def test_unknown_node_raises(tree):
    with pytest.raises(EntityNotFoundException):
        tree.get_children(99)
    with pytest.raises(EntityNotFoundException):
        tree.depth_of(99)
    with pytest.raises(EntityNotFoundException):
        tree.attach(99, [])


def test_attaching_a_loaded_part_again_is_a_cycle(tree):
    with pytest.raises(CircularReferenceException):
        tree.attach(4, [Part(id=1, name="Car", number="C-100", parent_id=4)])


def test_attaching_child_of_another_parent_is_rejected(tree):
    with pytest.raises(ValidationException):
        tree.attach(3, [Part(id=5, name="Bolt", number="B-1", parent_id=2)])


def test_walk_handles_deep_chains_without_recursion():
    depth = 5000
    tree = PartTree(Part(id=1, name="Level 0", number="L-0"))
    for part_id in range(2, depth + 2):
        tree.attach(part_id - 1, [
            Part(id=part_id, name=f"Level {part_id - 1}", number=f"L-{part_id - 1}", parent_id=part_id - 1)
        ])

    walked = list(tree.walk())
    assert len(walked) == depth + 1
    assert walked[-1][1] == depth

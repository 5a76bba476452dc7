"""
Unit tests for molecule connectivity and fragment splitting.

Tests:
- Adjacency and breadth-first traversal
- Deleting bonds and atoms splits detached fragments
- Rings stay whole
- Merging and then splitting restores the original atom sets
"""

import pytest

from models import (
    AtomId, Bond, BondId, BondType, Molecule, Point, build_adjacency,
    connected_component, unique_fragments,
)


def all_atom_ids(molecules):
    ids = []
    for molecule in molecules:
        ids.extend(molecule.atoms)
    return ids


def assert_connected(molecule: Molecule):
    """Every atom is reachable from any other over the bonds."""
    if len(molecule.atoms) < 2:
        return
    start = next(iter(molecule.atoms))
    component = connected_component(build_adjacency(molecule.bonds), start)
    assert set(component) == set(molecule.atoms)


def assert_bonds_local(molecule: Molecule):
    """Every bond references atoms of its own molecule."""
    for bond in molecule.bonds.values():
        assert bond.start in molecule.atoms
        assert bond.end in molecule.atoms


class TestTraversal:
    """Tests for adjacency and component discovery."""

    def test_build_adjacency(self, two_atoms):
        molecule, a1, a2, _ = two_atoms
        adjacency = build_adjacency(molecule.bonds)
        assert adjacency == {a1: {a2}, a2: {a1}}

    def test_component_order_is_breadth_first(self, chain_factory):
        """Test the start atom comes first and neighbours follow."""
        molecule, atom_ids, _ = chain_factory(4)
        component = connected_component(build_adjacency(molecule.bonds), atom_ids[1])

        assert component[0] == atom_ids[1]
        assert set(component[1:3]) == {atom_ids[0], atom_ids[2]}
        assert component[3] == atom_ids[3]

    def test_isolated_atom(self):
        """Test an atom with no bonds is its own component."""
        atom_id = AtomId()
        assert connected_component({}, atom_id) == [atom_id]

    def test_unique_fragments_dedupes(self, chain_factory):
        """Test seeds in the same component yield it once."""
        molecule, atom_ids, _ = chain_factory(3)
        fragments = unique_fragments(build_adjacency(molecule.bonds), atom_ids)
        assert len(fragments) == 1
        assert set(fragments[0]) == set(atom_ids)

    def test_long_chain(self):
        """Test traversal does not recurse on long chains."""
        atom_ids = [AtomId() for _ in range(5000)]
        bonds = {BondId(): Bond(a, b) for a, b in zip(atom_ids, atom_ids[1:])}
        component = connected_component(build_adjacency(bonds), atom_ids[0])
        assert len(component) == 5000


class TestSplitting:
    """Tests for splitting molecules after deletions."""

    def test_delete_bond_of_pair(self, two_atoms):
        """Test deleting the only bond leaves two single-atom molecules."""
        molecule, a1, a2, bond_id = two_atoms
        detached = molecule.delete_bond(bond_id)

        assert list(molecule.atoms) == [a1]
        assert len(detached) == 1
        assert list(detached[0].atoms) == [a2]
        assert detached[0].position == molecule.position
        assert detached[0].atom_position(a2) == Point(30, 0)

    @pytest.mark.parametrize("length,bridge", [(2, 0), (3, 0), (3, 1), (5, 2), (6, 4)])
    def test_delete_bridge_in_chain(self, chain_factory, length, bridge):
        """Test deleting a chain bond splits it at that bond."""
        molecule, atom_ids, bond_ids = chain_factory(length)
        detached = molecule.delete_bond(bond_ids[bridge])

        assert len(detached) == 1
        pieces = [molecule] + detached
        assert sorted(len(piece.atoms) for piece in pieces) == sorted(
            [bridge + 1, length - bridge - 1]
        )
        assert sorted(all_atom_ids(pieces)) == sorted(atom_ids)
        assert sum(len(piece.bonds) for piece in pieces) == length - 2
        for piece in pieces:
            assert_connected(piece)
            assert_bonds_local(piece)

    def test_first_fragment_stays(self, chain_factory):
        """Test the fragment of the bond's start atom keeps the molecule."""
        molecule, atom_ids, bond_ids = chain_factory(4)
        detached = molecule.delete_bond(bond_ids[1])

        assert set(molecule.atoms) == set(atom_ids[:2])
        assert set(detached[0].atoms) == set(atom_ids[2:])

    def test_ring_does_not_split(self, square_ring):
        """Test deleting one bond of a ring keeps the molecule whole."""
        molecule, atom_ids, bond_ids = square_ring
        detached = molecule.delete_bond(bond_ids[0])

        assert detached == []
        assert set(molecule.atoms) == set(atom_ids)
        assert len(molecule.bonds) == 3
        assert_connected(molecule)

    def test_delete_middle_atom(self, chain_factory):
        """Test deleting a middle atom splits the chain around it."""
        molecule, atom_ids, _ = chain_factory(5)
        detached = molecule.delete_atom(atom_ids[2])

        assert set(molecule.atoms) == set(atom_ids[:2])
        assert len(detached) == 1
        assert set(detached[0].atoms) == set(atom_ids[3:])
        assert len(molecule.bonds) == 1
        assert len(detached[0].bonds) == 1

    def test_delete_hub_atom(self):
        """Test deleting a branch point yields one fragment per branch."""
        hub = AtomId()
        arms = [AtomId() for _ in range(3)]
        molecule = Molecule.with_atom(Point(0, 0), hub, "")
        for arm, position in zip(arms, [Point(30, 0), Point(-30, 0), Point(0, 30)]):
            molecule.add_atom(arm, "", position)
            molecule.add_bond(hub, arm, BondType())

        detached = molecule.delete_atom(hub)

        assert len(detached) == 2
        pieces = [molecule] + detached
        assert sorted(all_atom_ids(pieces)) == sorted(arms)
        assert all(len(piece.atoms) == 1 for piece in pieces)
        assert all(not piece.bonds for piece in pieces)

    def test_delete_ring_atom(self, square_ring):
        """Test deleting a ring atom leaves an open chain."""
        molecule, atom_ids, _ = square_ring
        assert molecule.delete_atom(atom_ids[0]) == []
        assert set(molecule.atoms) == set(atom_ids[1:])
        assert len(molecule.bonds) == 2

    def test_detached_bounds_are_recomputed(self, chain_factory):
        """Test both halves get bounds that fit their own atoms."""
        molecule, _, bond_ids = chain_factory(4)
        detached = molecule.delete_bond(bond_ids[1])

        assert molecule.local_bounds.size.width == pytest.approx(42)
        assert detached[0].local_bounds.offset.x == pytest.approx(54)


class TestMergeThenSplit:
    """Tests for connecting two molecules and splitting them again."""

    def test_round_trip(self, chain_factory):
        """Test deleting the connecting bond restores both atom sets."""
        left, left_ids, _ = chain_factory(3, Point(0, 0))
        right, right_ids, _ = chain_factory(2, Point(200, 50))

        left.extend(right)
        bridge = left.add_bond(left_ids[-1], right_ids[0], BondType())
        assert_connected(left)

        detached = left.delete_bond(bridge)

        assert set(left.atoms) == set(left_ids)
        assert len(detached) == 1
        assert set(detached[0].atoms) == set(right_ids)
        assert detached[0].atom_position(right_ids[0]) == Point(200, 50)
        assert detached[0].atom_position(right_ids[1]) == Point(230, 50)

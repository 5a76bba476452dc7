"""
Unit tests for selection, hit-testing and the document.

Tests:
- Hover resolution (parts beat wholes, offsets)
- Rubber-band selection
- Selection set operations
- Document edits and their effect on the selection
"""

import pytest

from models import (
    AtomId, AtomSelection, BondId, BondSelection, BondType, Document,
    HoverSelection, Molecule, MoleculeCollisionError, MoleculeId,
    MoleculeMissingError, MoleculeSelection, Point, Rectangle, Selection,
    Vector, resolve_hover, resolve_rectangle,
)


class TestResolveHover:
    """Tests for finding the entity under the pointer."""

    def test_empty_canvas(self):
        hover = resolve_hover({}, Point(0, 0))
        assert hover.is_empty()
        assert hover.offset == Vector()

    def test_atom_beats_molecule(self, document_with_pair):
        """Test an atom under the pointer wins over its molecule."""
        document, molecule_id, a1, _, _ = document_with_pair
        hover = resolve_hover(document.molecules, Point(0, 0))

        assert hover.target == AtomSelection(molecule_id, a1)
        assert hover.offset == Vector(0, 0)

    def test_bond_under_pointer(self, document_with_pair):
        """Test the middle of a bond resolves to the bond."""
        document, molecule_id, _, _, bond_id = document_with_pair
        hover = resolve_hover(document.molecules, Point(15, 1))

        assert hover.target == BondSelection(molecule_id, bond_id)
        assert hover.offset.x == pytest.approx(0)
        assert hover.offset.y == pytest.approx(-1)

    def test_molecule_body(self, document_with_pair):
        """Test empty space inside a molecule resolves to the molecule."""
        document, molecule_id, _, _, _ = document_with_pair
        hover = resolve_hover(document.molecules, Point(30, 5))

        assert hover.target == MoleculeSelection(molecule_id)
        assert hover.offset == Vector(-30, -5)

    def test_outside_everything(self, document_with_pair):
        document, *_ = document_with_pair
        assert resolve_hover(document.molecules, Point(100, 100)).is_empty()

    def test_part_of_other_molecule_beats_molecule(self):
        """Test an atom of a later molecule wins over an earlier molecule body."""
        first_id, second_id = MoleculeId(), MoleculeId()
        a, b, c = AtomId(), AtomId(), AtomId()
        first = Molecule.with_atom(Point(0, 0), a, "")
        first.add_atom(c, "", Point(0, 30))
        first.add_bond(a, c, BondType())
        second = Molecule.with_atom(Point(4, 20), b, "")

        hover = resolve_hover({first_id: first, second_id: second}, Point(5, 20))
        assert hover.target == AtomSelection(second_id, b)

    def test_hover_bounds(self, document_with_pair):
        document, molecule_id, a1, _, _ = document_with_pair
        hover = HoverSelection(AtomSelection(molecule_id, a1))
        assert hover.bounds(document.molecules).contains(Point(0, 0))
        assert HoverSelection().bounds(document.molecules) is None


class TestResolveRectangle:
    """Tests for rubber-band selection."""

    def test_whole_molecule(self, document_with_pair):
        """Test a molecule inside the rectangle is selected whole."""
        document, molecule_id, *_ = document_with_pair
        selection = resolve_rectangle(document.molecules, Rectangle(-50, -50, 100, 100))
        assert selection.items == [MoleculeSelection(molecule_id)]

    def test_partial_molecule_selects_atoms(self, document_with_pair):
        """Test a crossed molecule contributes only its enclosed atoms."""
        document, molecule_id, a1, _, _ = document_with_pair
        selection = resolve_rectangle(document.molecules, Rectangle(-10, -10, 20, 20))
        assert selection.items == [AtomSelection(molecule_id, a1)]

    def test_nothing(self, document_with_pair):
        document, *_ = document_with_pair
        assert resolve_rectangle(document.molecules, Rectangle(100, 100, 5, 5)).is_empty()


class TestSelection:
    """Tests for the Selection set."""

    def test_add_is_unique(self):
        molecule_id = MoleculeId()
        selection = Selection()
        selection.add(MoleculeSelection(molecule_id))
        selection.add(MoleculeSelection(molecule_id))
        assert len(selection) == 1

    def test_from_hover(self):
        molecule_id = MoleculeId()
        assert Selection.from_hover(HoverSelection()).is_empty()
        assert Selection.from_hover(
            HoverSelection(MoleculeSelection(molecule_id))
        ).items == [MoleculeSelection(molecule_id)]

    def test_contains_through_molecule(self):
        """Test a part counts as selected when its molecule is."""
        molecule_id = MoleculeId()
        selection = Selection([MoleculeSelection(molecule_id)])

        assert selection.contains(HoverSelection(AtomSelection(molecule_id, AtomId())))
        assert selection.contains(HoverSelection(BondSelection(molecule_id, BondId())))
        assert not selection.contains(HoverSelection(MoleculeSelection(MoleculeId())))
        assert not selection.contains(HoverSelection())

    def test_molecule_not_contained_through_part(self):
        """Test selecting an atom does not select its molecule."""
        molecule_id = MoleculeId()
        selection = Selection([AtomSelection(molecule_id, AtomId())])
        assert not selection.contains(HoverSelection(MoleculeSelection(molecule_id)))

    def test_remove_molecule_drops_parts(self):
        """Test removing a molecule also removes its selected atoms and bonds."""
        molecule_id, other_id = MoleculeId(), MoleculeId()
        kept = AtomSelection(other_id, AtomId())
        selection = Selection([
            AtomSelection(molecule_id, AtomId()),
            BondSelection(molecule_id, BondId()),
            kept,
        ])

        selection.remove(MoleculeSelection(molecule_id))
        assert selection.items == [kept]

    def test_remove_atom(self):
        molecule_id = MoleculeId()
        atom = AtomSelection(molecule_id, AtomId())
        selection = Selection([MoleculeSelection(molecule_id), atom])
        selection.remove(atom)
        assert selection.items == [MoleculeSelection(molecule_id)]

    def test_iteration_survives_mutation(self):
        """Test iterating while clearing does not skip or fail."""
        selection = Selection([MoleculeSelection(MoleculeId()) for _ in range(3)])
        seen = 0
        for _ in selection:
            selection.clear()
            seen += 1
        assert seen == 3


class TestDocument:
    """Tests for Document."""

    def test_add_molecule_with_atom(self):
        document = Document()
        molecule_id, atom_id = MoleculeId(), AtomId()
        document.add_molecule_with_atom(molecule_id, atom_id, "O", Point(10, 10))

        assert document.get_atom(molecule_id, atom_id).text == "O"
        assert document.atom_count() == 1

    def test_add_molecule_collision(self):
        document = Document()
        molecule_id = MoleculeId()
        document.add_molecule_with_atom(molecule_id, AtomId(), "C", Point())
        with pytest.raises(MoleculeCollisionError):
            document.add_molecule_with_atom(molecule_id, AtomId(), "C", Point())

    def test_missing_molecule(self):
        with pytest.raises(MoleculeMissingError) as exc_info:
            Document().get_molecule(MoleculeId())
        assert isinstance(exc_info.value, LookupError)

    def test_delete_bond_splits(self, document_with_pair):
        """Test deleting a bond adds the detached molecule to the document."""
        document, molecule_id, a1, a2, bond_id = document_with_pair
        new_ids = document.delete_bond(molecule_id, bond_id)

        assert len(new_ids) == 1
        assert len(document.molecules) == 2
        assert list(document.get_molecule(molecule_id).atoms) == [a1]
        assert list(document.get_molecule(new_ids[0]).atoms) == [a2]

    def test_delete_last_atom_removes_molecule(self):
        document = Document()
        molecule_id, atom_id = MoleculeId(), AtomId()
        document.add_molecule_with_atom(molecule_id, atom_id, "C", Point())

        assert document.delete_atom(molecule_id, atom_id) == []
        assert document.molecules == {}

    def test_delete_clears_selection(self, document_with_pair):
        """Test structural deletions clear the selection."""
        document, molecule_id, a1, _, _ = document_with_pair
        document.new_selection(Selection([MoleculeSelection(molecule_id)]))
        document.delete_atom(molecule_id, a1)
        assert document.selection.is_empty()

    def test_connect_within_molecule(self, square_ring):
        """Test connecting two atoms of one molecule adds a bond."""
        molecule, atom_ids, _ = square_ring
        document = Document()
        molecule_id = document.insert_molecule(molecule)

        document.connect_molecules(molecule_id, atom_ids[0], molecule_id, atom_ids[2], BondType())
        assert len(molecule.bonds) == 5
        assert len(document.molecules) == 1

    def test_connect_merges_molecules(self):
        """Test connecting atoms of two molecules merges them."""
        document = Document()
        first_id, second_id = MoleculeId(), MoleculeId()
        a, b = AtomId(), AtomId()
        document.add_molecule_with_atom(first_id, a, "C", Point(0, 0))
        document.add_molecule_with_atom(second_id, b, "O", Point(40, 0))

        document.connect_molecules(first_id, a, second_id, b, BondType.normal(2))

        assert list(document.molecules) == [first_id]
        merged = document.get_molecule(first_id)
        assert set(merged.atoms) == {a, b}
        assert merged.atom_position(b) == Point(40, 0)
        assert list(merged.bonds.values())[0].bond_type == BondType.normal(2)

    def test_molecules_at(self, document_with_pair):
        document, molecule_id, *_ = document_with_pair
        assert [mid for mid, _ in document.molecules_at(Point(15, 0))] == [molecule_id]
        assert list(document.molecules_at(Point(200, 0))) == []

    def test_move_selection(self, document_with_pair):
        """Test moving each kind of selected entity."""
        document, molecule_id, a1, a2, bond_id = document_with_pair
        molecule = document.get_molecule(molecule_id)

        document.new_selection(Selection([MoleculeSelection(molecule_id)]))
        document.move_selection(Vector(10, 0))
        assert molecule.position == Point(10, 0)

        document.new_selection(Selection([AtomSelection(molecule_id, a2)]))
        document.move_selection(Vector(0, 10))
        assert molecule.get_atom(a2).position == Point(30, 10)

        document.new_selection(Selection([BondSelection(molecule_id, bond_id)]))
        document.move_selection(Vector(1, 1))
        assert molecule.get_atom(a1).position == Point(1, 1)
        assert molecule.get_atom(a2).position == Point(31, 11)

"""
Pytest configuration and shared fixtures for MolCanvas tests.
"""

import pytest
from pathlib import Path

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from models import AtomId, BondType, Document, Molecule, MoleculeId, Point
from services import Editor, EditorSettings


# ============== Molecule Fixtures ==============

@pytest.fixture
def two_atoms():
    """
    Molecule at the origin with unlabelled atoms at (0, 0) and (30, 0)
    joined by one single bond.

    Returns (molecule, a1, a2, bond_id).
    """
    a1 = AtomId()
    a2 = AtomId()
    molecule = Molecule.with_atom(Point(0, 0), a1, "")
    molecule.add_atom(a2, "", Point(30, 0))
    bond_id = molecule.add_bond(a1, a2, BondType.normal(1))
    return molecule, a1, a2, bond_id


@pytest.fixture
def chain_factory():
    """
    Build a straight chain of n unlabelled atoms along +x, 30 apart.

    Returns (molecule, atom_ids, bond_ids) with bond i joining atoms i, i+1.
    """
    def make_chain(n: int, origin: Point = Point(0, 0)):
        atom_ids = [AtomId() for _ in range(n)]
        molecule = Molecule.with_atom(origin, atom_ids[0], "")
        for i, atom_id in enumerate(atom_ids[1:], start=1):
            molecule.add_atom(atom_id, "", Point(origin.x + 30 * i, origin.y))
        bond_ids = [
            molecule.add_bond(atom_ids[i], atom_ids[i + 1], BondType.normal(1))
            for i in range(n - 1)
        ]
        return molecule, atom_ids, bond_ids

    return make_chain


@pytest.fixture
def square_ring():
    """
    Four atoms on the corners of a 30x30 square, bonded in a cycle.

    Returns (molecule, atom_ids, bond_ids).
    """
    atom_ids = [AtomId() for _ in range(4)]
    corners = [Point(0, 0), Point(30, 0), Point(30, 30), Point(0, 30)]
    molecule = Molecule.with_atom(corners[0], atom_ids[0], "")
    for atom_id, corner in zip(atom_ids[1:], corners[1:]):
        molecule.add_atom(atom_id, "", corner)
    bond_ids = [
        molecule.add_bond(atom_ids[i], atom_ids[(i + 1) % 4], BondType.normal(1))
        for i in range(4)
    ]
    return molecule, atom_ids, bond_ids


@pytest.fixture
def document_with_pair(two_atoms):
    """Document holding the two-atom molecule. Returns (document, molecule_id, a1, a2, bond_id)."""
    molecule, a1, a2, bond_id = two_atoms
    document = Document()
    molecule_id = MoleculeId()
    document.molecules[molecule_id] = molecule
    return document, molecule_id, a1, a2, bond_id


# ============== Editor Fixtures ==============

@pytest.fixture
def editor() -> Editor:
    """
    Editor with a zero-size viewport at scale 1, so screen and world
    coordinates coincide.
    """
    return Editor(EditorSettings())


# ============== Settings Fixtures ==============

@pytest.fixture
def settings_path(tmp_path: Path) -> Path:
    """Settings file location inside a temporary directory."""
    return tmp_path / "config" / "settings.json"

"""
Document model.

The document is every molecule on the canvas plus the current selection.
It is owned by exactly one editor and mutated only through it.
"""

from dataclasses import dataclass, field
from typing import Iterator
import logging

from .atom import Atom
from .bond import Bond, BondType
from .errors import MoleculeCollisionError, MoleculeMissingError
from .geometry import Point, Rectangle, Vector
from .identifiers import AtomId, BondId, MoleculeId
from .molecule import Molecule
from .selection import (
    AtomSelection, BondSelection, HoverSelection, MoleculeSelection, Selection,
    resolve_hover, resolve_rectangle,
)


logger = logging.getLogger(__name__)


@dataclass
class Document:
    """All molecules on the canvas and the current selection."""
    molecules: dict[MoleculeId, Molecule] = field(default_factory=dict)
    selection: Selection = field(default_factory=Selection)

    # ---- Lookup -------------------------------------------------------------

    def get_molecule(self, molecule_id: MoleculeId) -> Molecule:
        molecule = self.molecules.get(molecule_id)
        if molecule is None:
            raise MoleculeMissingError(molecule_id)
        return molecule

    def get_atom(self, molecule_id: MoleculeId, atom_id: AtomId) -> Atom:
        return self.get_molecule(molecule_id).get_atom(atom_id)

    def get_bond(self, molecule_id: MoleculeId, bond_id: BondId) -> Bond:
        return self.get_molecule(molecule_id).get_bond(bond_id)

    def molecules_at(self, point: Point) -> Iterator[tuple[MoleculeId, Molecule]]:
        for molecule_id, molecule in self.molecules.items():
            if molecule.bounds().contains(point):
                yield molecule_id, molecule

    def atom_count(self) -> int:
        return sum(len(molecule.atoms) for molecule in self.molecules.values())

    def hovered(self, point: Point) -> HoverSelection:
        return resolve_hover(self.molecules, point)

    def select_in_rect(self, rect: Rectangle) -> Selection:
        return resolve_rectangle(self.molecules, rect)

    # ---- Structural edits ---------------------------------------------------

    def add_molecule_with_atom(self, molecule_id: MoleculeId, atom_id: AtomId,
                               label: str, position: Point) -> Molecule:
        if molecule_id in self.molecules:
            raise MoleculeCollisionError(molecule_id)
        molecule = Molecule.with_atom(position, atom_id, label)
        self.molecules[molecule_id] = molecule
        logger.debug(f"Created {molecule_id} at ({position.x:.1f}, {position.y:.1f})")
        return molecule

    def insert_molecule(self, molecule: Molecule) -> MoleculeId:
        """Store a molecule under a fresh id."""
        molecule_id = MoleculeId()
        if molecule_id in self.molecules:
            raise MoleculeCollisionError(molecule_id)
        self.molecules[molecule_id] = molecule
        return molecule_id

    def remove_molecule(self, molecule_id: MoleculeId) -> Molecule:
        self.selection.clear()
        molecule = self.molecules.pop(molecule_id, None)
        if molecule is None:
            raise MoleculeMissingError(molecule_id)
        logger.debug(f"Removed {molecule_id}")
        return molecule

    def delete_atom(self, molecule_id: MoleculeId, atom_id: AtomId) -> list[MoleculeId]:
        """Delete an atom; returns the ids of molecules split off by it."""
        self.selection.clear()
        molecule = self.get_molecule(molecule_id)
        detached = molecule.delete_atom(atom_id)

        if molecule.is_empty():
            self.remove_molecule(molecule_id)

        new_ids = [self.insert_molecule(fragment) for fragment in detached]
        logger.debug(f"Deleted {atom_id} from {molecule_id}, {len(new_ids)} fragment(s) detached")
        return new_ids

    def delete_bond(self, molecule_id: MoleculeId, bond_id: BondId) -> list[MoleculeId]:
        """Delete a bond; returns the ids of molecules split off by it."""
        self.selection.clear()
        molecule = self.get_molecule(molecule_id)
        detached = molecule.delete_bond(bond_id)

        new_ids = [self.insert_molecule(fragment) for fragment in detached]
        logger.debug(f"Deleted {bond_id} from {molecule_id}, {len(new_ids)} fragment(s) detached")
        return new_ids

    def connect_molecules(self, molecule_id: MoleculeId, atom_id: AtomId,
                          other_id: MoleculeId, other_atom_id: AtomId,
                          bond_type: BondType) -> BondId:
        """Merge `other_id` into `molecule_id` and bond the two atoms."""
        if molecule_id == other_id:
            return self.get_molecule(molecule_id).add_bond(atom_id, other_atom_id, bond_type)

        target = self.get_molecule(molecule_id)
        source = self.remove_molecule(other_id)
        target.extend(source)
        logger.debug(f"Merged {other_id} into {molecule_id}")
        return target.add_bond(atom_id, other_atom_id, bond_type)

    # ---- Selection ----------------------------------------------------------

    def new_selection(self, selection: Selection) -> None:
        self.selection = selection

    def move_selection(self, translation: Vector) -> None:
        """Translate every selected molecule, atom and bond."""
        for item in self.selection:
            molecule = self.get_molecule(item.molecule_id)
            if isinstance(item, MoleculeSelection):
                molecule.move_molecule(translation)
            elif isinstance(item, AtomSelection):
                molecule.move_atom(item.atom_id, translation)
            elif isinstance(item, BondSelection):
                molecule.move_bond(item.bond_id, translation)

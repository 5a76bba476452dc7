"""
Molecule model.

A molecule owns its atoms and bonds, a canvas-space position and a cached
local bounding box. Atom positions are stored relative to the molecule
position, so moving a molecule only touches that one offset.

Invariant: the bond graph over the molecule's atoms is connected. Every
deletion re-checks connectivity and moves any detached fragment out into
a new molecule, which is returned to the caller.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator
import logging

from .atom import Atom, choose_label_direction
from .bond import Bond, BondType
from .connectivity import build_adjacency, unique_fragments
from .constants import MOLECULE_PADDING
from .errors import (
    AtomCollisionError, AtomMissingError, BondCollisionError, BondMissingError,
)
from .geometry import Bounds, Point, Vector
from .identifiers import AtomId, BondId


logger = logging.getLogger(__name__)


@dataclass
class Molecule:
    """Connected graph of atoms and bonds placed on the canvas."""
    position: Point = field(default_factory=Point)
    atoms: dict[AtomId, Atom] = field(default_factory=dict)
    bonds: dict[BondId, Bond] = field(default_factory=dict)
    local_bounds: Bounds = field(default_factory=Bounds)

    @classmethod
    def with_atom(cls, canvas_position: Point, atom_id: AtomId, label: str) -> "Molecule":
        """New molecule holding a single atom at its origin."""
        molecule = cls(position=canvas_position)
        molecule.atoms[atom_id] = Atom.create(label, Point())
        molecule.compute_bounds()
        return molecule

    # ---- Lookup -------------------------------------------------------------

    def get_atom(self, atom_id: AtomId) -> Atom:
        atom = self.atoms.get(atom_id)
        if atom is None:
            raise AtomMissingError(atom_id)
        return atom

    def get_bond(self, bond_id: BondId) -> Bond:
        bond = self.bonds.get(bond_id)
        if bond is None:
            raise BondMissingError(bond_id)
        return bond

    def is_empty(self) -> bool:
        return not self.atoms

    def attached_bonds(self, atom_id: AtomId) -> Iterator[tuple[BondId, Bond]]:
        for bond_id, bond in self.bonds.items():
            if bond.touches(atom_id):
                yield bond_id, bond

    def directly_connected(self, atom_id: AtomId) -> list[AtomId]:
        """Atoms sharing a bond with `atom_id`."""
        return [bond.other(atom_id) for _, bond in self.attached_bonds(atom_id)]

    # ---- Geometry -----------------------------------------------------------

    def compute_bounds(self) -> None:
        """Recompute the cached local bounds from scratch."""
        bounds = None
        for atom in self.atoms.values():
            atom_bounds = atom.bounds()
            bounds = atom_bounds if bounds is None else bounds.union(atom_bounds)

        self.local_bounds = bounds if bounds is not None else Bounds()
        self.local_bounds.add_padding(MOLECULE_PADDING)

    def bounds(self) -> Bounds:
        """Cached bounds in canvas space."""
        return self.local_bounds + self.position.to_vector()

    def atom_position(self, atom_id: AtomId) -> Point:
        return self.get_atom(atom_id).position + self.position.to_vector()

    def bond_position(self, bond_id: BondId) -> Point:
        """Canvas-space centre of the bond."""
        return self.get_bond(bond_id).center(self.atoms) + self.position.to_vector()

    def get_atom_bounds(self, atom_id: AtomId) -> Bounds:
        return self.get_atom(atom_id).bounds() + self.position.to_vector()

    def get_bond_bounds(self, bond_id: BondId) -> Bounds:
        return self.get_bond(bond_id).bounds(self.atoms) + self.position.to_vector()

    def atoms_at(self, canvas_position: Point) -> Iterator[tuple[AtomId, Atom, Bounds]]:
        """Atoms whose padded label box contains the point, with that box."""
        offset = self.position.to_vector()
        for atom_id, atom in self.atoms.items():
            bounds = atom.bounds() + offset
            if bounds.contains(canvas_position):
                yield atom_id, atom, bounds

    def bonds_at(self, canvas_position: Point) -> Iterator[tuple[BondId, Bond, Bounds]]:
        """Bonds whose padded hit box contains the point, with that box."""
        offset = self.position.to_vector()
        for bond_id, bond in self.bonds.items():
            bounds = bond.bounds(self.atoms) + offset
            if bounds.contains(canvas_position):
                yield bond_id, bond, bounds

    # ---- Structural edits ---------------------------------------------------

    def add_atom(self, atom_id: AtomId, label: str, canvas_position: Point) -> None:
        if atom_id in self.atoms:
            raise AtomCollisionError(atom_id)
        local = canvas_position - self.position.to_vector()
        self.atoms[atom_id] = Atom.create(label, local)
        self.compute_bounds()

    def add_bond(self, start: AtomId, end: AtomId, bond_type: BondType) -> BondId:
        for atom_id in (start, end):
            if atom_id not in self.atoms:
                raise AtomMissingError(atom_id)

        bond_id = BondId()
        if bond_id in self.bonds:
            raise BondCollisionError(bond_id)
        self.bonds[bond_id] = Bond(start, end, bond_type)

        self.update_atom_label_direction(start)
        self.update_atom_label_direction(end)
        self.compute_bounds()
        return bond_id

    def rename_atom(self, atom_id: AtomId, text: str) -> None:
        self.get_atom(atom_id).rename(text)
        self.compute_bounds()

    def change_bond_type(self, bond_id: BondId, bond_type: BondType) -> None:
        self.get_bond(bond_id).change_type(bond_type)

    def flip_bond(self, bond_id: BondId) -> None:
        self.get_bond(bond_id).flip()

    def extend(self, other: "Molecule") -> None:
        """
        Absorb every atom and bond of `other`, leaving it empty.

        Atom positions are re-expressed relative to this molecule's origin.
        """
        offset = other.position - self.position
        for atom_id in other.atoms:
            if atom_id in self.atoms:
                raise AtomCollisionError(atom_id)
        for bond_id in other.bonds:
            if bond_id in self.bonds:
                raise BondCollisionError(bond_id)

        for atom_id, atom in other.atoms.items():
            atom.translate(offset)
            self.atoms[atom_id] = atom
        self.bonds.update(other.bonds)

        self.local_bounds = self.local_bounds.union(other.local_bounds + offset)

        other.atoms = {}
        other.bonds = {}

    def delete_atom(self, atom_id: AtomId) -> list["Molecule"]:
        """Remove an atom and its bonds; returns molecules that became detached."""
        if atom_id not in self.atoms:
            raise AtomMissingError(atom_id)
        del self.atoms[atom_id]

        attached = [bond_id for bond_id, _ in self.attached_bonds(atom_id)]
        neighbors = self.directly_connected(atom_id)
        for bond_id in attached:
            del self.bonds[bond_id]

        for neighbor in neighbors:
            self.update_atom_label_direction(neighbor)

        return self.split_fragments(neighbors)

    def delete_bond(self, bond_id: BondId) -> list["Molecule"]:
        """Remove a bond; returns molecules that became detached."""
        bond = self.bonds.pop(bond_id, None)
        if bond is None:
            raise BondMissingError(bond_id)

        for atom_id in bond.atom_ids():
            self.update_atom_label_direction(atom_id)

        return self.split_fragments(bond.atom_ids())

    def split_fragments(self, touched: Iterable[AtomId]) -> list["Molecule"]:
        """
        Move every disconnected fragment out into its own molecule.

        The fragment found first from `touched` stays here; the others are
        returned as new molecules sharing this molecule's position.
        """
        fragments = unique_fragments(build_adjacency(self.bonds), touched)

        if len(fragments) < 2:
            self.compute_bounds()
            return []

        detached = []
        for fragment in fragments[1:]:
            molecule = Molecule(position=self.position)
            for atom_id in fragment:
                atom = self.atoms.pop(atom_id, None)
                if atom is None:
                    raise AtomMissingError(atom_id)
                molecule.atoms[atom_id] = atom

            for bond_id in [bond_id for bond_id, bond in self.bonds.items()
                            if bond.start in molecule.atoms or bond.end in molecule.atoms]:
                molecule.bonds[bond_id] = self.bonds.pop(bond_id)

            molecule.compute_bounds()
            detached.append(molecule)

        self.compute_bounds()
        logger.debug(f"Split off {len(detached)} fragment(s), {len(self.atoms)} atoms remain")
        return detached

    # ---- Movement -----------------------------------------------------------

    def move_molecule(self, translation: Vector) -> None:
        self.position = self.position + translation

    def move_atom(self, atom_id: AtomId, translation: Vector) -> None:
        self.get_atom(atom_id).translate(translation)

        self.update_atom_label_direction(atom_id)
        for neighbor in self.directly_connected(atom_id):
            self.update_atom_label_direction(neighbor)

        self.compute_bounds()

    def move_bond(self, bond_id: BondId, translation: Vector) -> None:
        bond = self.get_bond(bond_id)

        affected = set()
        for atom_id in bond.atom_ids():
            self.get_atom(atom_id).translate(translation)
            affected.add(atom_id)
            affected.update(self.directly_connected(atom_id))

        for atom_id in affected:
            self.update_atom_label_direction(atom_id)

        self.compute_bounds()

    def update_atom_label_direction(self, atom_id: AtomId) -> None:
        """Turn the atom's label towards the first side free of bonds."""
        atom = self.get_atom(atom_id)

        unit_vectors = []
        for neighbor_id in self.directly_connected(atom_id):
            direction = self.get_atom(neighbor_id).position - atom.position
            # Coincident atoms block nothing
            if direction.magnitude > 0.0:
                unit_vectors.append(direction.normalized())

        atom.update_label_direction(choose_label_direction(unit_vectors))

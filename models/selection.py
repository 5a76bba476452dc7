"""
Selection models and spatial hit-testing.

A SingleSelection names one molecule, atom or bond. The persistent
Selection is an ordered set of them; the HoverSelection is whatever sits
under the pointer right now, plus the offset from the pointer to its
reference point.
"""

from dataclasses import dataclass, field
from typing import Iterator, Mapping, Optional, Union
import math

from .errors import MoleculeMissingError
from .geometry import Bounds, Point, Rectangle, Vector
from .identifiers import AtomId, BondId, MoleculeId
from .molecule import Molecule


@dataclass(frozen=True)
class MoleculeSelection:
    molecule_id: MoleculeId

    def bounds(self, molecules: Mapping[MoleculeId, Molecule]) -> Bounds:
        return _molecule(molecules, self.molecule_id).bounds()


@dataclass(frozen=True)
class AtomSelection:
    molecule_id: MoleculeId
    atom_id: AtomId

    def bounds(self, molecules: Mapping[MoleculeId, Molecule]) -> Bounds:
        return _molecule(molecules, self.molecule_id).get_atom_bounds(self.atom_id)


@dataclass(frozen=True)
class BondSelection:
    molecule_id: MoleculeId
    bond_id: BondId

    def bounds(self, molecules: Mapping[MoleculeId, Molecule]) -> Bounds:
        return _molecule(molecules, self.molecule_id).get_bond_bounds(self.bond_id)


SingleSelection = Union[MoleculeSelection, AtomSelection, BondSelection]


def _molecule(molecules: Mapping[MoleculeId, Molecule], molecule_id: MoleculeId) -> Molecule:
    molecule = molecules.get(molecule_id)
    if molecule is None:
        raise MoleculeMissingError(molecule_id)
    return molecule


@dataclass(frozen=True)
class HoverSelection:
    """The entity under the pointer, if any, and the offset pointer -> entity."""
    target: Optional[SingleSelection] = None
    offset: Vector = field(default_factory=Vector)

    def is_empty(self) -> bool:
        return self.target is None

    def bounds(self, molecules: Mapping[MoleculeId, Molecule]) -> Optional[Bounds]:
        if self.target is None:
            return None
        return self.target.bounds(molecules)


@dataclass
class Selection:
    """Ordered set of selected entities."""
    items: list = field(default_factory=list)

    @classmethod
    def from_hover(cls, hover: HoverSelection) -> "Selection":
        return cls([hover.target] if hover.target is not None else [])

    def __iter__(self) -> Iterator[SingleSelection]:
        return iter(list(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def is_empty(self) -> bool:
        return not self.items

    def add(self, item: SingleSelection) -> None:
        if item not in self.items:
            self.items.append(item)

    def clear(self) -> None:
        self.items.clear()

    def contains(self, hover: HoverSelection) -> bool:
        """
        True when the hovered entity is selected, either directly or, for
        atoms and bonds, because its whole molecule is.
        """
        target = hover.target
        if target is None:
            return False
        if target in self.items:
            return True
        if isinstance(target, MoleculeSelection):
            return False
        return MoleculeSelection(target.molecule_id) in self.items

    def remove(self, item: SingleSelection) -> None:
        """Drop an item; dropping a molecule also drops its atoms and bonds."""
        if isinstance(item, MoleculeSelection):
            self.items = [i for i in self.items if i.molecule_id != item.molecule_id]
        else:
            self.items = [i for i in self.items if i != item]

    def bounds(self, molecules: Mapping[MoleculeId, Molecule]) -> list[Bounds]:
        return [item.bounds(molecules) for item in self.items]


def resolve_hover(molecules: Mapping[MoleculeId, Molecule], point: Point) -> HoverSelection:
    """
    Most specific entity under `point`.

    Candidates are rated by the distance from the point to the centre of
    their bounds; the lowest rating wins. A molecule body only wins while
    no atom or bond has been chosen, so parts beat wholes.
    """
    best: Optional[SingleSelection] = None
    best_offset = Vector()
    best_rating = math.inf

    for molecule_id, molecule in molecules.items():
        molecule_bounds = molecule.bounds()
        if not molecule_bounds.contains(point):
            continue

        for atom_id, _, bounds in molecule.atoms_at(point):
            rating = bounds.center().distance(point)
            if rating < best_rating:
                best_rating = rating
                best = AtomSelection(molecule_id, atom_id)
                best_offset = molecule.atom_position(atom_id) - point

        for bond_id, _, bounds in molecule.bonds_at(point):
            rating = bounds.center().distance(point)
            if rating < best_rating:
                best_rating = rating
                best = BondSelection(molecule_id, bond_id)
                best_offset = molecule.bond_position(bond_id) - point

        rating = molecule_bounds.center().distance(point)
        if rating < best_rating and (best is None or isinstance(best, MoleculeSelection)):
            best_rating = rating
            best = MoleculeSelection(molecule_id)
            best_offset = molecule.position - point

    return HoverSelection(best, best_offset)


def resolve_rectangle(molecules: Mapping[MoleculeId, Molecule], rect: Rectangle) -> Selection:
    """
    Rubber-band selection.

    Molecules fully inside `rect` are selected whole; of those merely
    crossing it, each atom fully inside is selected on its own.
    """
    selection = Selection()
    for molecule_id, molecule in molecules.items():
        bounds = molecule.bounds()
        if bounds.is_contained(rect):
            selection.add(MoleculeSelection(molecule_id))
        elif bounds.intersects(rect):
            for atom_id in molecule.atoms:
                if molecule.get_atom_bounds(atom_id).is_contained(rect):
                    selection.add(AtomSelection(molecule_id, atom_id))
    return selection

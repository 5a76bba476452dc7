"""
Bond model.

A bond joins two atoms of the same molecule. Its geometry (endpoints,
hit box, centre) is derived from the atoms it references, so every
geometric query takes the owning molecule's atom map.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Mapping
import math

from .atom import Atom
from .constants import (
    BOND_OFFSETS, BOND_PADDING, BOND_WIDTH, DASH_END_WIDTH, H_BOND_WIDTH,
    WEDGE_END_WIDTH,
)
from .errors import AtomMissingError
from .geometry import Bounds, Point, Size, Vector
from .identifiers import AtomId


# Directions shorter than this are treated as having no direction
_MIN_DIRECTION = 0.0001


class BondKind(Enum):
    """How a bond is drawn."""
    NORMAL = auto()     # One or more parallel lines
    WEDGE = auto()      # Filled wedge, stereo bond towards the viewer
    DASH = auto()       # Hashed wedge, stereo bond away from the viewer
    HYDROGEN = auto()   # Evenly hatched line


@dataclass(frozen=True)
class BondType:
    """Bond kind plus, for normal bonds, the bond order (1-255)."""
    kind: BondKind = BondKind.NORMAL
    order: int = 1

    def __post_init__(self):
        if self.kind == BondKind.NORMAL:
            if not 1 <= self.order <= 255:
                raise ValueError(f"bond order must be between 1 and 255, got {self.order}")
        elif self.order != 1:
            raise ValueError(f"{self.kind.name} bonds carry no order")

    @classmethod
    def normal(cls, order: int = 1) -> "BondType":
        return cls(BondKind.NORMAL, order)

    @classmethod
    def wedge(cls) -> "BondType":
        return cls(BondKind.WEDGE)

    @classmethod
    def dash(cls) -> "BondType":
        return cls(BondKind.DASH)

    @classmethod
    def hydrogen(cls) -> "BondType":
        return cls(BondKind.HYDROGEN)

    @property
    def is_stereo(self) -> bool:
        return self.kind in (BondKind.WEDGE, BondKind.DASH)

    @property
    def width(self) -> float:
        """Width of the bond's hit box, before padding."""
        if self.kind == BondKind.NORMAL:
            return (self.order - 1) * BOND_OFFSETS + BOND_WIDTH
        if self.kind == BondKind.HYDROGEN:
            return H_BOND_WIDTH
        if self.kind == BondKind.WEDGE:
            return WEDGE_END_WIDTH
        return DASH_END_WIDTH

    def __str__(self) -> str:
        if self.kind == BondKind.NORMAL:
            return f"Normal({self.order})"
        return self.kind.name.title()


def stroke_offsets(order: int) -> list[int]:
    """
    Line offsets of a multiple bond, in units of half the line spacing.

    Odd orders are centred on the bond axis (0, 2, -2, 4, -4, ...), even
    orders straddle it (1, -1, 3, -3, ...).
    """
    offsets = []
    offset = 0 if order % 2 else 1
    while offset <= order:
        if offset == 0:
            offsets.append(0)
        else:
            offsets.extend((offset, -offset))
        offset += 2
    return offsets


def fixed_length(start: Point, direction: Vector, length: float) -> Point:
    """
    Point `length` away from `start` towards `direction`.

    A (near) zero direction falls back to pointing along +x.
    """
    magnitude = direction.magnitude
    if magnitude > _MIN_DIRECTION:
        return start + direction * (length / magnitude)
    return start + Vector(length, 0.0)


@dataclass
class Bond:
    """Typed connection between two atoms of one molecule."""
    start: AtomId
    end: AtomId
    bond_type: BondType = BondType()

    def change_type(self, bond_type: BondType) -> None:
        self.bond_type = bond_type

    def flip(self) -> None:
        """Swap the endpoints; reverses the stereo sense of wedge and dash bonds."""
        self.start, self.end = self.end, self.start

    def atom_ids(self) -> tuple[AtomId, AtomId]:
        return (self.start, self.end)

    def touches(self, atom_id: AtomId) -> bool:
        return self.start == atom_id or self.end == atom_id

    def other(self, atom_id: AtomId) -> AtomId:
        return self.end if atom_id == self.start else self.start

    def endpoints(self, atoms: Mapping[AtomId, Atom]) -> tuple[Point, Point]:
        """Start and end points, clipped to the atoms' labels (molecule-local)."""
        start_atom = atoms.get(self.start)
        if start_atom is None:
            raise AtomMissingError(self.start)
        end_atom = atoms.get(self.end)
        if end_atom is None:
            raise AtomMissingError(self.end)

        return (start_atom.bond_start(end_atom.position),
                end_atom.bond_start(start_atom.position))

    def bounds(self, atoms: Mapping[AtomId, Atom]) -> Bounds:
        """Padded rectangle along the bond line (molecule-local)."""
        start, end = self.endpoints(atoms)
        direction = end - start
        length = direction.magnitude
        width = self.bond_type.width

        if length > _MIN_DIRECTION:
            unit_normal = Vector(direction.y, -direction.x) / length
            angle = math.atan2(direction.y, direction.x)
        else:
            # Coincident atoms: a flat box centred on the shared point
            unit_normal = Vector(0.0, -1.0)
            angle = 0.0

        offset = start + unit_normal * (width / 2.0)
        bounds = Bounds.at(offset, Size(length, width), angle)
        bounds.add_padding(BOND_PADDING)
        return bounds

    def center(self, atoms: Mapping[AtomId, Atom]) -> Point:
        start, end = self.endpoints(atoms)
        return start + (end - start) * 0.5

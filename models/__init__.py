"""
Models package.

This package contains the data models of the molecule editor.

- Identifiers and errors (AtomId, BondId, MoleculeId, MoleculeError, ...)
- Geometry (Vector, Point, Rectangle, Bounds)
- Graph model (Atom, Label, Bond, BondType, Molecule)
- Selection and hit-testing (Selection, HoverSelection, resolve_hover)
- Document (all molecules plus the selection)
"""

from .identifiers import AtomId, BondId, MoleculeId
from .errors import (
    MoleculeError,
    NotFoundError,
    AtomMissingError,
    BondMissingError,
    MoleculeMissingError,
    CollisionError,
    AtomCollisionError,
    BondCollisionError,
    MoleculeCollisionError,
    InvalidGeometryError,
)
from .geometry import Vector, Point, Size, Rectangle, Transform, Bounds
from .atom import Direction, Token, Label, Atom, tokenize, choose_label_direction
from .bond import BondKind, BondType, Bond, stroke_offsets, fixed_length
from .connectivity import build_adjacency, connected_component, unique_fragments
from .molecule import Molecule
from .selection import (
    MoleculeSelection,
    AtomSelection,
    BondSelection,
    SingleSelection,
    HoverSelection,
    Selection,
    resolve_hover,
    resolve_rectangle,
)
from .document import Document


__all__ = [
    # Identifiers
    "AtomId",
    "BondId",
    "MoleculeId",
    # Errors
    "MoleculeError",
    "NotFoundError",
    "AtomMissingError",
    "BondMissingError",
    "MoleculeMissingError",
    "CollisionError",
    "AtomCollisionError",
    "BondCollisionError",
    "MoleculeCollisionError",
    "InvalidGeometryError",
    # Geometry
    "Vector",
    "Point",
    "Size",
    "Rectangle",
    "Transform",
    "Bounds",
    # Graph model
    "Direction",
    "Token",
    "Label",
    "Atom",
    "tokenize",
    "choose_label_direction",
    "BondKind",
    "BondType",
    "Bond",
    "stroke_offsets",
    "fixed_length",
    "build_adjacency",
    "connected_component",
    "unique_fragments",
    "Molecule",
    # Selection
    "MoleculeSelection",
    "AtomSelection",
    "BondSelection",
    "SingleSelection",
    "HoverSelection",
    "Selection",
    "resolve_hover",
    "resolve_rectangle",
    # Document
    "Document",
]

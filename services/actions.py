"""
In-progress actions and editor messages.

An Action is the gesture currently under way (panning, dragging out a
bond, ...). A Message is one structural or view-state change; the event
interpreter produces a list of them and the editor applies them in order.
"""

from dataclasses import dataclass
from typing import Optional, Union

from models import AtomId, BondId, BondType, MoleculeId, Point, Selection, Vector

from .tools import Tool


# ============== Actions ==============

@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Panning:
    translation: Vector     # Viewport translation when the pan began
    start: Point            # Screen position where the pan began


@dataclass(frozen=True)
class MovingSelection:
    last: Point             # World position of the previous move step


@dataclass(frozen=True)
class DrawingSelection:
    start: Point


@dataclass(frozen=True)
class Erasing:
    pass


@dataclass(frozen=True)
class DrawingBond:
    molecule_id: MoleculeId
    atom_id: AtomId
    start: Point
    bond_type: BondType


Action = Union[Idle, Panning, MovingSelection, DrawingSelection, Erasing, DrawingBond]


# ============== Structural messages ==============

@dataclass(frozen=True)
class AddMoleculeWithAtom:
    molecule_id: MoleculeId
    atom_id: AtomId
    label: str
    position: Point


@dataclass(frozen=True)
class FinishBond:
    """Create an unlabelled atom at `position` and bond it to `atom_id`."""
    molecule_id: MoleculeId
    atom_id: AtomId
    position: Point
    bond_type: BondType


@dataclass(frozen=True)
class NewBond:
    molecule_id: MoleculeId
    start: AtomId
    end: AtomId
    bond_type: BondType


@dataclass(frozen=True)
class ChangeBondType:
    molecule_id: MoleculeId
    bond_id: BondId
    bond_type: BondType


@dataclass(frozen=True)
class FlipBond:
    molecule_id: MoleculeId
    bond_id: BondId


@dataclass(frozen=True)
class ConnectMolecules:
    molecule_id: MoleculeId
    atom_id: AtomId
    other_molecule_id: MoleculeId
    other_atom_id: AtomId
    bond_type: BondType


@dataclass(frozen=True)
class RelabelAtom:
    molecule_id: MoleculeId
    atom_id: AtomId
    label: str


@dataclass(frozen=True)
class DeleteMolecule:
    molecule_id: MoleculeId


@dataclass(frozen=True)
class DeleteAtom:
    molecule_id: MoleculeId
    atom_id: AtomId


@dataclass(frozen=True)
class DeleteBond:
    molecule_id: MoleculeId
    bond_id: BondId


@dataclass(frozen=True)
class MoveSelection:
    position: Point


@dataclass(frozen=True)
class NewSelection:
    selection: Selection


# ============== View-state messages ==============

@dataclass(frozen=True)
class ToolChanged:
    tool: Tool


@dataclass(frozen=True)
class ActionChanged:
    action: Action


@dataclass(frozen=True)
class Translated:
    translation: Vector


@dataclass(frozen=True)
class Scaled:
    scale: float
    translation: Optional[Vector] = None


# ============== Text input messages ==============

@dataclass(frozen=True)
class SpawnTextInput:
    """Open the rename overlay on an atom."""
    molecule_id: MoleculeId
    atom_id: AtomId


@dataclass(frozen=True)
class SubmitTextInput:
    pass


@dataclass(frozen=True)
class CancelTextInput:
    pass


Message = Union[
    AddMoleculeWithAtom, FinishBond, NewBond, ChangeBondType, FlipBond,
    ConnectMolecules, RelabelAtom, DeleteMolecule, DeleteAtom, DeleteBond,
    MoveSelection, NewSelection, ToolChanged, ActionChanged, Translated, Scaled,
    SpawnTextInput, SubmitTextInput, CancelTextInput,
]

"""
Editing tools.

A tool turns a pointer interaction phase into a ToolAction, given the
current selection and what is under the pointer. The mapping is a pure
function; applying the action is the interpreter's job.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from models import BondType, HoverSelection, Selection


class MouseInteraction(Enum):
    """Pointer interaction phase derived from raw button and move events."""
    NONE = auto()
    MOUSE_DOWN = auto()
    MOUSE_DRAGGED = auto()      # Moved while the button is held
    MOUSE_RELEASED = auto()     # Released after dragging
    MOUSE_TAPPED = auto()       # Released without moving


class ToolKind(Enum):
    CURSOR = auto()
    SELECT = auto()
    PAN = auto()
    ERASE = auto()
    BOND = auto()
    RENAME = auto()
    ATOM_STAMP = auto()


class ToolActionKind(Enum):
    NONE = auto()
    CURSOR_DRAGGED = auto()
    CLICK_SELECT = auto()
    DRAG_SELECT_START = auto()
    DRAG_SELECT_FINISH = auto()
    START_PAN = auto()
    START_MOVE = auto()
    ERASE = auto()
    BOND_START = auto()
    BOND_FINISH = auto()
    RENAME = auto()
    ATOM_DRAW = auto()


@dataclass(frozen=True)
class ToolAction:
    """What a tool wants done; bond starts carry a type, atom draws a label."""
    kind: ToolActionKind = ToolActionKind.NONE
    bond_type: Optional[BondType] = None
    label: Optional[str] = None

    @classmethod
    def none(cls) -> "ToolAction":
        return cls(ToolActionKind.NONE)

    @classmethod
    def bond_start(cls, bond_type: BondType) -> "ToolAction":
        return cls(ToolActionKind.BOND_START, bond_type=bond_type)

    @classmethod
    def atom_draw(cls, label: str) -> "ToolAction":
        return cls(ToolActionKind.ATOM_DRAW, label=label)


@dataclass(frozen=True)
class Tool:
    """The user's editing mode."""
    kind: ToolKind = ToolKind.CURSOR
    bond_type: BondType = field(default_factory=BondType)
    label: str = "C"

    @classmethod
    def cursor(cls) -> "Tool":
        return cls(ToolKind.CURSOR)

    @classmethod
    def select(cls) -> "Tool":
        return cls(ToolKind.SELECT)

    @classmethod
    def pan(cls) -> "Tool":
        return cls(ToolKind.PAN)

    @classmethod
    def erase(cls) -> "Tool":
        return cls(ToolKind.ERASE)

    @classmethod
    def bond(cls, bond_type: BondType) -> "Tool":
        return cls(ToolKind.BOND, bond_type=bond_type)

    @classmethod
    def rename(cls) -> "Tool":
        return cls(ToolKind.RENAME)

    @classmethod
    def atom_stamp(cls, label: str) -> "Tool":
        return cls(ToolKind.ATOM_STAMP, label=label)

    def __str__(self) -> str:
        if self.kind == ToolKind.BOND:
            return f"Bond({self.bond_type})"
        if self.kind == ToolKind.ATOM_STAMP:
            return f"AtomStamp({self.label})"
        return self.kind.name.title()

    def action(self, interaction: MouseInteraction, selection: Selection,
               hover: HoverSelection) -> ToolAction:
        """Map an interaction phase to a ToolAction for this tool."""
        if interaction == MouseInteraction.MOUSE_DRAGGED:
            return ToolAction(ToolActionKind.CURSOR_DRAGGED)

        down = interaction == MouseInteraction.MOUSE_DOWN
        tapped = interaction == MouseInteraction.MOUSE_TAPPED
        released = interaction == MouseInteraction.MOUSE_RELEASED

        if self.kind == ToolKind.CURSOR:
            if down:
                if hover.is_empty():
                    return ToolAction(ToolActionKind.START_PAN)
                return ToolAction(ToolActionKind.CLICK_SELECT)
            if tapped:
                return ToolAction(ToolActionKind.CLICK_SELECT)

        elif self.kind == ToolKind.SELECT:
            if down:
                if selection.contains(hover):
                    return ToolAction(ToolActionKind.START_MOVE)
                return ToolAction(ToolActionKind.DRAG_SELECT_START)
            if released:
                return ToolAction(ToolActionKind.DRAG_SELECT_FINISH)
            if tapped:
                return ToolAction(ToolActionKind.CLICK_SELECT)

        elif self.kind == ToolKind.PAN:
            if down:
                return ToolAction(ToolActionKind.START_PAN)

        elif self.kind == ToolKind.ERASE:
            if down:
                return ToolAction(ToolActionKind.ERASE)

        elif self.kind == ToolKind.BOND:
            if down:
                return ToolAction.bond_start(self.bond_type)
            if released or tapped:
                return ToolAction(ToolActionKind.BOND_FINISH)

        elif self.kind == ToolKind.RENAME:
            if tapped:
                return ToolAction(ToolActionKind.RENAME)
            if down:
                return ToolAction(ToolActionKind.START_PAN)

        elif self.kind == ToolKind.ATOM_STAMP:
            if tapped:
                return ToolAction.atom_draw(self.label)
            if down:
                return ToolAction(ToolActionKind.START_PAN)

        return ToolAction.none()

"""
Event interpreter.

Turns raw pointer and key events into editor messages:

    raw event -> interaction phase -> ToolAction (via the tool) -> messages

Nothing here mutates the document. The interpreter only reads the
editor's state (document, tool, live action, viewport) and the returned
messages are applied by the editor afterwards.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional

from models import (
    AtomId, AtomSelection, BondKind, BondSelection, BondType, HoverSelection,
    MoleculeId, MoleculeSelection, Point, Rectangle, Selection, fixed_length,
)

from .actions import (
    ActionChanged, AddMoleculeWithAtom, CancelTextInput, ChangeBondType,
    ConnectMolecules, DeleteAtom, DeleteBond, DeleteMolecule, DrawingBond,
    DrawingSelection, Erasing, FinishBond, FlipBond, Idle, Message,
    MoveSelection, MovingSelection, NewBond, NewSelection, Panning, RelabelAtom,
    Scaled, SpawnTextInput, SubmitTextInput, Translated,
)
from .tools import MouseInteraction, ToolAction, ToolActionKind

if TYPE_CHECKING:
    from .editor import Editor
    from .viewport import Viewport


class PointerEventKind(Enum):
    BUTTON_DOWN = auto()
    BUTTON_UP = auto()
    MOVED = auto()
    SCROLLED = auto()


class Key(Enum):
    ENTER = auto()
    DELETE = auto()
    ESCAPE = auto()
    OTHER = auto()


@dataclass(frozen=True)
class PointerEvent:
    """
    Left-button or wheel event.

    `position` is in widget coordinates, None when the pointer is outside
    the widget. `delta_y` is only meaningful for SCROLLED.
    """
    kind: PointerEventKind
    position: Optional[Point] = None
    delta_y: float = 0.0


@dataclass(frozen=True)
class KeyEvent:
    key: Key
    position: Optional[Point] = None


class InteractionTracker:
    """Derives the interaction phase from the raw button/move sequence."""

    def __init__(self):
        self.previous = MouseInteraction.NONE

    def update(self, kind: PointerEventKind) -> MouseInteraction:
        if kind == PointerEventKind.BUTTON_DOWN:
            self.previous = MouseInteraction.MOUSE_DOWN
            return self.previous

        if kind == PointerEventKind.MOVED:
            if self.previous in (MouseInteraction.MOUSE_DOWN, MouseInteraction.MOUSE_DRAGGED):
                self.previous = MouseInteraction.MOUSE_DRAGGED
                return self.previous
            return MouseInteraction.NONE

        if kind == PointerEventKind.BUTTON_UP:
            if self.previous == MouseInteraction.MOUSE_DOWN:
                self.previous = MouseInteraction.MOUSE_TAPPED
            elif self.previous == MouseInteraction.MOUSE_DRAGGED:
                self.previous = MouseInteraction.MOUSE_RELEASED
            else:
                self.previous = MouseInteraction.NONE
            return self.previous

        return MouseInteraction.NONE


def handle_event(editor: "Editor", tracker: InteractionTracker, event) -> list[Message]:
    """Messages produced by one raw event."""
    if isinstance(event, PointerEvent) and event.kind == PointerEventKind.SCROLLED:
        return handle_scrolling(editor.viewport, event.delta_y, event.position)

    if isinstance(event, KeyEvent) and event.key == Key.ESCAPE:
        return [CancelTextInput(), ActionChanged(Idle())]

    if event.position is None:
        return []

    point = editor.viewport.to_world(event.position)
    hover = editor.document.hovered(point)
    tool_action = tool_action_from_event(editor, tracker, event, hover)

    return message_from_tool_action(editor, tool_action, event.position, point, hover)


def handle_scrolling(viewport: "Viewport", delta_y: float,
                     cursor: Optional[Point]) -> list[Message]:
    step = viewport.zoom_step(delta_y, cursor)
    if step is None:
        return []
    scale, translation = step
    return [Scaled(scale, translation)]


def tool_action_from_event(editor: "Editor", tracker: InteractionTracker, event,
                           hover: HoverSelection) -> ToolAction:
    if isinstance(event, PointerEvent):
        interaction = tracker.update(event.kind)
        return editor.tool.action(interaction, editor.document.selection, hover)

    if event.key == Key.ENTER:
        return ToolAction(ToolActionKind.RENAME)
    if event.key == Key.DELETE:
        return ToolAction(ToolActionKind.ERASE)
    return ToolAction.none()


def cursor_dragged(editor: "Editor", cursor: Point, point: Point) -> list[Message]:
    """Continue whichever gesture is live."""
    action = editor.action

    if isinstance(action, Panning):
        return [Translated(action.translation + (cursor - action.start) / editor.viewport.scale)]
    if isinstance(action, MovingSelection):
        return [MoveSelection(point)]
    if isinstance(action, DrawingSelection):
        rect = Rectangle.from_corners(action.start, point)
        return [NewSelection(editor.document.select_in_rect(rect))]
    return []


def message_from_tool_action(editor: "Editor", tool_action: ToolAction, cursor: Point,
                             point: Point, hover: HoverSelection) -> list[Message]:
    """
    Expand a ToolAction into messages.

    `cursor` is the pointer in widget coordinates, `point` the same
    position in world coordinates.
    """
    kind = tool_action.kind
    target = hover.target

    if kind == ToolActionKind.NONE:
        return [ActionChanged(Idle())]

    if kind == ToolActionKind.CURSOR_DRAGGED:
        return cursor_dragged(editor, cursor, point)

    if kind == ToolActionKind.CLICK_SELECT:
        messages = [ActionChanged(MovingSelection(point))]
        if not editor.document.selection.contains(hover):
            messages.append(NewSelection(Selection.from_hover(hover)))
        return messages

    if kind == ToolActionKind.DRAG_SELECT_START:
        return [ActionChanged(DrawingSelection(point))]

    if kind == ToolActionKind.DRAG_SELECT_FINISH:
        if isinstance(editor.action, DrawingSelection):
            return [ActionChanged(Idle())]
        return []

    if kind == ToolActionKind.START_PAN:
        return [ActionChanged(Panning(editor.viewport.translation, cursor))]

    if kind == ToolActionKind.START_MOVE:
        return [ActionChanged(MovingSelection(point))]

    if kind == ToolActionKind.ERASE:
        messages = [ActionChanged(Erasing())]
        if isinstance(target, AtomSelection):
            messages.append(DeleteAtom(target.molecule_id, target.atom_id))
        elif isinstance(target, BondSelection):
            messages.append(DeleteBond(target.molecule_id, target.bond_id))
        elif isinstance(target, MoleculeSelection):
            messages.append(DeleteMolecule(target.molecule_id))
        return messages

    if kind == ToolActionKind.BOND_START:
        return _bond_start(editor, tool_action.bond_type, point, target)

    if kind == ToolActionKind.BOND_FINISH:
        return _bond_finish(editor, point, target)

    if kind == ToolActionKind.RENAME:
        if isinstance(target, AtomSelection):
            return [SpawnTextInput(target.molecule_id, target.atom_id)]
        return [SubmitTextInput()]

    if kind == ToolActionKind.ATOM_DRAW:
        if isinstance(target, AtomSelection):
            return [RelabelAtom(target.molecule_id, target.atom_id, tool_action.label)]
        return [AddMoleculeWithAtom(MoleculeId(), AtomId(), tool_action.label, point)]

    raise ValueError(f"Unhandled tool action: {tool_action}")


def _bond_start(editor: "Editor", bond_type: BondType, point: Point, target) -> list[Message]:
    if isinstance(target, AtomSelection):
        molecule = editor.document.get_molecule(target.molecule_id)
        start = molecule.atom_position(target.atom_id)
        return [ActionChanged(DrawingBond(target.molecule_id, target.atom_id, start, bond_type))]

    if isinstance(target, BondSelection):
        bond = editor.document.get_bond(target.molecule_id, target.bond_id)
        current = bond.bond_type
        if current == BondType.normal(1) and bond_type == BondType.normal(1):
            return [ChangeBondType(target.molecule_id, target.bond_id, BondType.normal(2))]
        if current.kind in (BondKind.WEDGE, BondKind.DASH) and current == bond_type:
            return [FlipBond(target.molecule_id, target.bond_id)]
        return [ChangeBondType(target.molecule_id, target.bond_id, bond_type)]

    # Empty space or a molecule body: start a new molecule here
    molecule_id = MoleculeId()
    atom_id = AtomId()
    return [
        ActionChanged(DrawingBond(molecule_id, atom_id, point, bond_type)),
        AddMoleculeWithAtom(molecule_id, atom_id, "", point),
    ]


def _bond_finish(editor: "Editor", point: Point, target) -> list[Message]:
    action = editor.action
    if not isinstance(action, DrawingBond):
        return []

    if isinstance(target, AtomSelection) and target.atom_id != action.atom_id:
        if target.molecule_id == action.molecule_id:
            message = NewBond(action.molecule_id, action.atom_id, target.atom_id, action.bond_type)
        else:
            message = ConnectMolecules(action.molecule_id, action.atom_id,
                                       target.molecule_id, target.atom_id, action.bond_type)
    else:
        end = fixed_length(action.start, point - action.start, editor.settings.bond_length)
        message = FinishBond(action.molecule_id, action.atom_id, end, action.bond_type)

    return [message, ActionChanged(Idle())]

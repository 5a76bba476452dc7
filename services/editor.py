"""
Editor orchestrator.

The Editor owns the document, the active tool, the live action, the
viewport and the render cache. Raw events go in through `handle_event`,
are interpreted into messages, and every message is applied here, in
order, before control returns to the caller.

Model errors (missing or colliding ids) are not caught: they mean the
editor state is inconsistent and are surfaced to the caller.
"""

from dataclasses import dataclass
from typing import Iterator, Optional
import logging

from models import (
    AtomId, AtomSelection, BondType, Document, HoverSelection, Molecule,
    MoleculeId, Point, Vector, fixed_length,
)

from .actions import (
    Action, ActionChanged, AddMoleculeWithAtom, CancelTextInput,
    ChangeBondType, ConnectMolecules, DeleteAtom, DeleteBond, DeleteMolecule,
    DrawingBond, FinishBond, FlipBond, Idle, Message, MoveSelection,
    MovingSelection, NewBond, NewSelection, RelabelAtom, Scaled, SpawnTextInput,
    SubmitTextInput, ToolChanged, Translated,
)
from .interpreter import InteractionTracker, handle_event
from .settings_manager import EditorSettings
from .tools import Tool
from .viewport import Viewport


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenameAtom:
    """Target of the text overlay: the label of one atom."""
    molecule_id: MoleculeId
    atom_id: AtomId


class RenderCache:
    """
    Validity flag for the view's cached molecule layer.

    Every geometry change clears it; the view redraws when it is invalid
    and then marks it drawn.
    """

    def __init__(self):
        self.generation = 0
        self._valid = False

    def clear(self):
        self.generation += 1
        self._valid = False

    def is_valid(self) -> bool:
        return self._valid

    def mark_drawn(self):
        self._valid = True


class Editor:
    """Single owner of the document and all editing state."""

    def __init__(self, settings: Optional[EditorSettings] = None):
        self.settings = settings or EditorSettings()
        self.document = Document()
        self.tool = Tool.cursor()
        self.action: Action = Idle()
        self.viewport = Viewport(
            min_scale=self.settings.min_scale,
            max_scale=self.settings.max_scale,
            scroll_sensitivity=self.settings.scroll_sensitivity,
        )
        self.cache = RenderCache()
        self.tracker = InteractionTracker()

        self.text_target: Optional[RenameAtom] = None
        self._original_label = ""

    # ---- Event entry point --------------------------------------------------

    def handle_event(self, event) -> list[Message]:
        """Interpret one raw event and apply the resulting messages."""
        messages = handle_event(self, self.tracker, event)
        self.update(messages)
        return messages

    def hovered(self, screen: Point) -> HoverSelection:
        return self.document.hovered(self.viewport.to_world(screen))

    def set_tool(self, tool: Tool):
        self.update([ToolChanged(tool)])

    def reset_view(self):
        """Back to unit scale with the world origin centred."""
        self.update([Scaled(1.0, Vector())])

    # ---- Message application ------------------------------------------------

    def update(self, messages: list[Message]):
        for message in messages:
            self.apply(message)

    def apply(self, message: Message):
        document = self.document

        if isinstance(message, AddMoleculeWithAtom):
            document.add_molecule_with_atom(message.molecule_id, message.atom_id,
                                            message.label, message.position)
            self.cache.clear()

        elif isinstance(message, FinishBond):
            molecule = document.get_molecule(message.molecule_id)
            end_atom_id = AtomId()
            molecule.add_atom(end_atom_id, "", message.position)
            molecule.add_bond(message.atom_id, end_atom_id, message.bond_type)
            self.cache.clear()

        elif isinstance(message, NewBond):
            document.get_molecule(message.molecule_id).add_bond(
                message.start, message.end, message.bond_type)
            self.cache.clear()

        elif isinstance(message, ChangeBondType):
            document.get_molecule(message.molecule_id).change_bond_type(
                message.bond_id, message.bond_type)
            self.cache.clear()

        elif isinstance(message, FlipBond):
            document.get_molecule(message.molecule_id).flip_bond(message.bond_id)
            self.cache.clear()

        elif isinstance(message, ConnectMolecules):
            self.commit_rename()
            document.connect_molecules(message.molecule_id, message.atom_id,
                                       message.other_molecule_id, message.other_atom_id,
                                       message.bond_type)
            self.cache.clear()

        elif isinstance(message, RelabelAtom):
            document.get_molecule(message.molecule_id).rename_atom(message.atom_id, message.label)
            self.cache.clear()

        elif isinstance(message, DeleteMolecule):
            self.commit_rename()
            document.remove_molecule(message.molecule_id)
            self.cache.clear()

        elif isinstance(message, DeleteAtom):
            self.commit_rename()
            document.delete_atom(message.molecule_id, message.atom_id)
            self.cache.clear()

        elif isinstance(message, DeleteBond):
            self.commit_rename()
            document.delete_bond(message.molecule_id, message.bond_id)
            self.cache.clear()

        elif isinstance(message, MoveSelection):
            if isinstance(self.action, MovingSelection):
                document.move_selection(message.position - self.action.last)
                self.action = MovingSelection(message.position)
                self.cache.clear()

        elif isinstance(message, NewSelection):
            document.new_selection(message.selection)

        elif isinstance(message, ToolChanged):
            logger.debug(f"Tool changed to {message.tool}")
            self.tool = message.tool

        elif isinstance(message, ActionChanged):
            self.action = message.action

        elif isinstance(message, Translated):
            self.viewport.translation = message.translation
            self.cache.clear()

        elif isinstance(message, Scaled):
            self.viewport.apply_zoom(message.scale, message.translation)
            self.cache.clear()

        elif isinstance(message, SpawnTextInput):
            self.begin_rename(message.molecule_id, message.atom_id)

        elif isinstance(message, SubmitTextInput):
            self.commit_rename()

        elif isinstance(message, CancelTextInput):
            self.cancel_rename()

        else:
            raise TypeError(f"Unknown message: {message!r}")

    # ---- Rename overlay hooks -----------------------------------------------

    def begin_rename(self, molecule_id: MoleculeId, atom_id: AtomId) -> str:
        """Open a rename on an atom; returns the text the overlay starts with."""
        if self.text_target is not None:
            self.commit_rename()

        text = self.document.get_atom(molecule_id, atom_id).text
        self.text_target = RenameAtom(molecule_id, atom_id)
        self._original_label = text
        return text

    def update_rename(self, text: str):
        if self.text_target is None:
            return
        target = self.text_target
        self.document.get_molecule(target.molecule_id).rename_atom(target.atom_id, text)
        self.cache.clear()

    def commit_rename(self):
        self.text_target = None
        self._original_label = ""

    def cancel_rename(self):
        if self.text_target is not None:
            self.update_rename(self._original_label)
        self.commit_rename()

    @property
    def rename_text(self) -> Optional[str]:
        """Current label of the atom being renamed."""
        if self.text_target is None:
            return None
        return self.document.get_atom(self.text_target.molecule_id, self.text_target.atom_id).text

    # ---- Rendering queries --------------------------------------------------

    def visible_molecules(self) -> Iterator[tuple[MoleculeId, Molecule]]:
        """Molecules whose bounds overlap the visible world region."""
        region = self.viewport.visible_rect()
        for molecule_id, molecule in self.document.molecules.items():
            if molecule.bounds().intersects(region):
                yield molecule_id, molecule

    def pending_bond(self, cursor: Point) -> Optional[tuple[Point, Point, BondType]]:
        """
        Preview segment (start, end, type) of the bond being drawn.

        `cursor` is in world coordinates. The end snaps to a hovered atom
        other than the start atom.
        """
        action = self.action
        if not isinstance(action, DrawingBond):
            return None

        molecule = self.document.get_molecule(action.molecule_id)
        atom = molecule.get_atom(action.atom_id)
        origin = molecule.position.to_vector()

        hover = self.document.hovered(cursor).target
        if isinstance(hover, AtomSelection) and hover.atom_id != action.atom_id:
            hovered_molecule = self.document.get_molecule(hover.molecule_id)
            hovered_atom = hovered_molecule.get_atom(hover.atom_id)
            hovered_origin = hovered_molecule.position.to_vector()
            end = hovered_atom.bond_start(action.start - hovered_origin) + hovered_origin
        else:
            end = fixed_length(atom.position + origin, cursor - action.start,
                               self.settings.bond_length)

        start = atom.bond_start(end - origin) + origin
        return start, end, action.bond_type

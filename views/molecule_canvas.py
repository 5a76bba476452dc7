"""
Molecule canvas widget.

Translates Qt mouse, wheel and key events into editor events and paints
the document. All structural logic lives in the Editor; this widget only
forwards input and draws what the editor exposes.
"""

import logging
from typing import Optional
from PyQt6.QtCore import Qt, QPointF, QRectF, pyqtSignal
from PyQt6.QtGui import (
    QPainter, QPen, QBrush, QColor, QFont, QPixmap, QPolygonF, QCursor,
    QMouseEvent, QWheelEvent, QKeyEvent,
)
from PyQt6.QtWidgets import QWidget, QLineEdit

from models import (
    BondKind, BondType, Bounds, Molecule, MoleculeError, Point, Rectangle,
    Vector, stroke_offsets,
)
from models.constants import (
    BOND_OFFSETS, BOND_WIDTH, DASH_BOND_OFFSETS, DASH_END_WIDTH, DASH_START_WIDTH,
    GLYPH_HEIGHT, H_BOND_OFFSETS, H_BOND_WIDTH, WEDGE_END_WIDTH, WEDGE_START_WIDTH,
)
from services import (
    DrawingSelection, Editor, Key, KeyEvent, PointerEvent, PointerEventKind,
    RenameAtom,
)
from services.settings_manager import UISettings

# Setup logger for this module
logger = logging.getLogger(__name__)


# Color schemes
THEMES = {
    "dark": {
        "background": QColor("#1F2937"),
        "text": QColor("#F9FAFB"),
        "selection": QColor("#3B82F6"),     # Bright blue
        "hover": QColor("#60A5FA"),         # Light blue
        "rubber_band": QColor("#9CA3AF"),   # Gray
    },
    "light": {
        "background": QColor("#FAFAFA"),
        "text": QColor("#111827"),
        "selection": QColor("#3B82F6"),
        "hover": QColor("#93C5FD"),
        "rubber_band": QColor("#6B7280"),
    },
}


def _qpoint(point: Point) -> QPointF:
    return QPointF(point.x, point.y)


class RenameOverlay(QLineEdit):
    """Floating line edit used to relabel an atom."""

    cancelled = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setFixedWidth(80)
        self.setStyleSheet("""
            QLineEdit {
                background: white;
                border: 2px solid #3B82F6;
                border-radius: 4px;
                padding: 2px 4px;
                font-size: 12px;
            }
        """)
        self.hide()

    def keyPressEvent(self, event: QKeyEvent):
        if event.key() == Qt.Key.Key_Escape:
            self.cancelled.emit()
            event.accept()
            return
        super().keyPressEvent(event)


class MoleculeCanvas(QWidget):
    """
    Canvas that draws molecules and feeds user input to the editor.

    Signals:
        errorOccurred(str): the editor hit an inconsistent state; editing
            cannot continue.
        viewChanged(): tool, scale or document changed (status bar refresh).
    """

    errorOccurred = pyqtSignal(str)
    viewChanged = pyqtSignal()

    def __init__(self, editor: Editor, ui_settings: Optional[UISettings] = None, parent=None):
        super().__init__(parent)
        self.editor = editor
        self.ui_settings = ui_settings or UISettings()
        self.colors = THEMES.get(self.ui_settings.theme, THEMES["dark"])

        self._cursor: Optional[Point] = None
        self._molecule_layer: Optional[QPixmap] = None
        self._failed = False

        self._font = QFont("Helvetica Neue")
        self._font.setPixelSize(int(GLYPH_HEIGHT))

        self._overlay = RenameOverlay(self)
        self._overlay_target: Optional[RenameAtom] = None
        self._overlay.textEdited.connect(self._on_rename_edited)
        self._overlay.returnPressed.connect(self._on_rename_submitted)
        self._overlay.cancelled.connect(self._on_rename_cancelled)

        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setMinimumSize(400, 300)

    # ---- Event dispatch -----------------------------------------------------

    def dispatch(self, event) -> None:
        """Forward an event to the editor and refresh the view."""
        if self._run(self.editor.handle_event, event):
            self.viewChanged.emit()

    def reset_view(self):
        if self._run(self.editor.reset_view):
            self.viewChanged.emit()

    def _position(self, event) -> Point:
        pos = event.position()
        return Point(pos.x(), pos.y())

    def _cursor_position(self) -> Optional[Point]:
        pos = self.mapFromGlobal(QCursor.pos())
        if not self.rect().contains(pos):
            return None
        return Point(float(pos.x()), float(pos.y()))

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() == Qt.MouseButton.LeftButton:
            self.setFocus()
            self._cursor = self._position(event)
            self.dispatch(PointerEvent(PointerEventKind.BUTTON_DOWN, self._cursor))
            event.accept()
        else:
            super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent):
        self._cursor = self._position(event)
        self.dispatch(PointerEvent(PointerEventKind.MOVED, self._cursor))

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() == Qt.MouseButton.LeftButton:
            self._cursor = self._position(event)
            self.dispatch(PointerEvent(PointerEventKind.BUTTON_UP, self._cursor))
            event.accept()
        else:
            super().mouseReleaseEvent(event)

    def wheelEvent(self, event: QWheelEvent):
        """Zoom around the cursor; one wheel notch is one line."""
        lines = event.angleDelta().y() / 120.0
        self.dispatch(PointerEvent(PointerEventKind.SCROLLED, self._position(event), lines))
        event.accept()

    def keyPressEvent(self, event: QKeyEvent):
        """Handle keyboard shortcuts."""
        if event.key() in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            key = Key.ENTER
        elif event.key() in (Qt.Key.Key_Delete, Qt.Key.Key_Backspace):
            key = Key.DELETE
        elif event.key() == Qt.Key.Key_Escape:
            key = Key.ESCAPE
        else:
            super().keyPressEvent(event)
            return
        self.dispatch(KeyEvent(key, self._cursor_position()))
        event.accept()

    def leaveEvent(self, event):
        self._cursor = None
        self.update()
        super().leaveEvent(event)

    def resizeEvent(self, event):
        size = event.size()
        self.editor.viewport.resize(size.width(), size.height())
        self.editor.cache.clear()
        super().resizeEvent(event)

    # ---- Rename overlay -----------------------------------------------------

    def _sync_overlay(self):
        """Show the overlay on the atom the editor is renaming."""
        target = self.editor.text_target
        if target is None:
            if self._overlay_target is not None:
                self._overlay_target = None
                self._overlay.hide()
                self.setFocus()
            return
        if target == self._overlay_target:
            return

        # A new target replaces the text and position of the previous one
        self._overlay_target = target
        molecule = self.editor.document.get_molecule(target.molecule_id)
        screen = self.editor.viewport.to_screen(molecule.atom_position(target.atom_id))
        self._overlay.setText(self.editor.rename_text or "")
        self._overlay.move(int(screen.x), int(screen.y - self._overlay.height() / 2))
        self._overlay.show()
        self._overlay.setFocus()
        self._overlay.selectAll()

    def _run(self, operation, *args) -> bool:
        """Call into the editor; a model error ends editing."""
        if self._failed:
            return False
        try:
            operation(*args)
            self._sync_overlay()
        except MoleculeError as e:
            self._failed = True
            logger.exception("Editor state is inconsistent")
            self.errorOccurred.emit(str(e))
            return False
        self.update()
        return True

    def _on_rename_edited(self, text: str):
        self._run(self.editor.update_rename, text)

    def _on_rename_submitted(self):
        self._run(self.editor.commit_rename)

    def _on_rename_cancelled(self):
        self._run(self.editor.cancel_rename)

    # ---- Painting -----------------------------------------------------------

    def _world_transform(self, painter: QPainter):
        viewport = self.editor.viewport
        center = viewport.center()
        painter.translate(center.x, center.y)
        painter.scale(viewport.scale, viewport.scale)
        painter.translate(viewport.translation.x, viewport.translation.y)

    def _pen(self, color: QColor, width: float = BOND_WIDTH) -> QPen:
        pen = QPen(color, width)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        return pen

    def paintEvent(self, event):
        painter = QPainter(self)
        if self._needs_layer_redraw():
            self._redraw_molecule_layer()
        painter.drawPixmap(0, 0, self._molecule_layer)

        if self.ui_settings.antialiasing:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        self._world_transform(painter)

        if self._failed:
            painter.end()
            return

        document = self.editor.document
        for bounds in document.selection.bounds(document.molecules):
            self._draw_bounds(painter, bounds, self.colors["selection"])

        if self._cursor is not None:
            world = self.editor.viewport.to_world(self._cursor)
            if self.ui_settings.show_hover_outline:
                hover_bounds = document.hovered(world).bounds(document.molecules)
                if hover_bounds is not None:
                    self._draw_bounds(painter, hover_bounds, self.colors["hover"])
            self._draw_pending_bond(painter, world)
            self._draw_rubber_band(painter, world)

        painter.end()

    def _needs_layer_redraw(self) -> bool:
        layer = self._molecule_layer
        return (layer is None or not self.editor.cache.is_valid()
                or layer.width() != self.width() or layer.height() != self.height())

    def _redraw_molecule_layer(self):
        layer = QPixmap(self.width(), self.height())
        layer.fill(self.colors["background"])

        painter = QPainter(layer)
        if self.ui_settings.antialiasing:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        self._world_transform(painter)
        painter.setFont(self._font)

        for _, molecule in self.editor.visible_molecules():
            self._draw_molecule(painter, molecule)

        painter.end()
        self._molecule_layer = layer
        self.editor.cache.mark_drawn()

    def _draw_molecule(self, painter: QPainter, molecule: Molecule):
        origin = molecule.position.to_vector()
        color = self.colors["text"]

        for bond in molecule.bonds.values():
            start, end = bond.endpoints(molecule.atoms)
            self._draw_bond(painter, start + origin, end + origin, bond.bond_type, color)

        painter.setPen(self._pen(color))
        for atom in molecule.atoms.values():
            base = atom.position + origin
            for token, rect in atom.label.layout():
                box = QRectF(base.x + rect.x, base.y + rect.y, rect.width, rect.height)
                painter.drawText(box, Qt.AlignmentFlag.AlignCenter, token.text)

    def _draw_bond(self, painter: QPainter, start: Point, end: Point,
                   bond_type: BondType, color: QColor):
        direction = end - start
        length = direction.magnitude
        if length == 0.0:
            return
        normal = Vector(direction.y, -direction.x) / length

        if bond_type.kind == BondKind.NORMAL:
            painter.setPen(self._pen(color))
            for offset in stroke_offsets(bond_type.order):
                shift = normal * (offset * BOND_OFFSETS / 2.0)
                painter.drawLine(_qpoint(start + shift), _qpoint(end + shift))

        elif bond_type.kind == BondKind.WEDGE:
            polygon = QPolygonF([
                _qpoint(start + normal * (WEDGE_START_WIDTH / 2.0)),
                _qpoint(end + normal * (WEDGE_END_WIDTH / 2.0)),
                _qpoint(end - normal * (WEDGE_END_WIDTH / 2.0)),
                _qpoint(start - normal * (WEDGE_START_WIDTH / 2.0)),
            ])
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(QBrush(color))
            painter.drawPolygon(polygon)
            painter.setBrush(Qt.BrushStyle.NoBrush)

        elif bond_type.kind == BondKind.DASH:
            painter.setPen(self._pen(color))
            count = round(length / DASH_BOND_OFFSETS + 0.01)
            for i in range(count + 1):
                t = i / count if count else 0.0
                half = (DASH_START_WIDTH + (DASH_END_WIDTH - DASH_START_WIDTH) * t) / 2.0
                center = start + direction * t
                painter.drawLine(_qpoint(center + normal * half), _qpoint(center - normal * half))

        else:
            painter.setPen(self._pen(color))
            count = round(length / H_BOND_OFFSETS + 0.01)
            half = H_BOND_WIDTH / 2.0
            for i in range(count + 1):
                t = i / count if count else 0.0
                center = start + direction * t
                painter.drawLine(_qpoint(center + normal * half), _qpoint(center - normal * half))

    def _draw_bounds(self, painter: QPainter, bounds: Bounds, color: QColor):
        pen = self._pen(color, 1.0 / self.editor.viewport.scale)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPolygon(QPolygonF([_qpoint(corner) for corner in bounds.corners()]))

    def _draw_pending_bond(self, painter: QPainter, world: Point):
        pending = self.editor.pending_bond(world)
        if pending is None:
            return
        start, end, bond_type = pending
        self._draw_bond(painter, start, end, bond_type, self.colors["text"])

    def _draw_rubber_band(self, painter: QPainter, world: Point):
        action = self.editor.action
        if not isinstance(action, DrawingSelection):
            return
        rect = Rectangle.from_corners(action.start, world)
        pen = self._pen(self.colors["rubber_band"], 1.0 / self.editor.viewport.scale)
        pen.setStyle(Qt.PenStyle.DashLine)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawRect(QRectF(rect.x, rect.y, rect.width, rect.height))

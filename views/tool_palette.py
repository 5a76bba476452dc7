"""
Tool palette for choosing the active editing tool.

One checkable button per tool, grouped into navigation, bond and atom
sections.
"""

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QPushButton, QButtonGroup,
)

from models import BondType
from services import Tool


class ToolButton(QPushButton):
    """A checkable button representing one tool."""

    clicked_with_tool = pyqtSignal(object)

    def __init__(self, tool: Tool, icon: str, description: str, parent=None):
        super().__init__(icon, parent)
        self.tool = tool
        self.setCheckable(True)
        self.setToolTip(f"{tool}: {description}")
        self.setFixedSize(44, 36)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setStyleSheet("""
            QPushButton {
                background: #374151;
                color: #F9FAFB;
                border: 2px solid #4B5563;
                border-radius: 6px;
                font-size: 14px;
                font-weight: bold;
            }
            QPushButton:hover {
                border-color: #60A5FA;
            }
            QPushButton:checked {
                background: #3B82F6;
                border-color: #3B82F6;
            }
        """)

        self.clicked.connect(lambda: self.clicked_with_tool.emit(self.tool))


class ToolPalette(QWidget):
    """
    Palette panel containing every editing tool.
    """

    toolSelected = pyqtSignal(object)

    def __init__(self, atom_label: str = "C", parent=None):
        super().__init__(parent)
        self._atom_label = atom_label
        self._buttons: list[ToolButton] = []
        self._group = QButtonGroup(self)
        self._group.setExclusive(True)
        self._setup_ui()

    def _tool_specs(self) -> list[tuple[str, list[tuple[Tool, str, str]]]]:
        return [
            ("Edit", [
                (Tool.cursor(), "↖", "select or pan"),
                (Tool.select(), "⬚", "drag-select, move selection"),
                (Tool.pan(), "✥", "pan the view"),
                (Tool.erase(), "⌫", "delete atom, bond or molecule"),
            ]),
            ("Bonds", [
                (Tool.bond(BondType.normal(1)), "—", "single bond"),
                (Tool.bond(BondType.normal(2)), "═", "double bond"),
                (Tool.bond(BondType.normal(3)), "≡", "triple bond"),
                (Tool.bond(BondType.wedge()), "◀", "wedge bond"),
                (Tool.bond(BondType.dash()), "⋯", "dash bond"),
                (Tool.bond(BondType.hydrogen()), "┄", "hydrogen bond"),
            ]),
            ("Atoms", [
                (Tool.rename(), "Aa", "rename atom"),
                (Tool.atom_stamp(self._atom_label), self._atom_label, "place atom"),
            ]),
        ]

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(6)

        for title, tools in self._tool_specs():
            header = QLabel(title.upper())
            header.setStyleSheet("""
                color: #9CA3AF;
                font-size: 10px;
                font-weight: 600;
                letter-spacing: 1px;
            """)
            layout.addWidget(header)

            for tool, icon, description in tools:
                button = ToolButton(tool, icon, description)
                button.clicked_with_tool.connect(self.toolSelected.emit)
                self._group.addButton(button)
                self._buttons.append(button)
                layout.addWidget(button)

        layout.addStretch()

        if self._buttons:
            self._buttons[0].setChecked(True)

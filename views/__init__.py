"""Views package."""

from .molecule_canvas import MoleculeCanvas, RenameOverlay, THEMES
from .tool_palette import ToolPalette, ToolButton
from .main_window import MainWindow

__all__ = [
    "MoleculeCanvas",
    "RenameOverlay",
    "THEMES",
    "ToolPalette",
    "ToolButton",
    "MainWindow",
]

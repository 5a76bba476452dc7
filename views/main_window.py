"""
Main application window.

Assembles the tool palette and the molecule canvas and reports editor
state in the status bar.
"""

import logging
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QLabel, QStatusBar, QMessageBox, QFrame,
)

from services import Editor, SettingsManager
from views.molecule_canvas import MoleculeCanvas
from views.tool_palette import ToolPalette


logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, settings_manager: SettingsManager):
        super().__init__()
        self.settings_manager = settings_manager
        self.editor = Editor(settings_manager.editor)

        self._setup_window()
        self._setup_menu()
        self._setup_central_widget()
        self._setup_status_bar()
        self._connect_signals()
        self._update_status()

    def _setup_window(self):
        """Configure window properties."""
        self.setWindowTitle("MolCanvas")
        self.setMinimumSize(800, 600)
        ui = self.settings_manager.ui
        self.resize(ui.window_width, ui.window_height)

        self.setStyleSheet("""
            QMainWindow {
                background: #111827;
            }
            QStatusBar {
                background: #1F2937;
                color: #D1D5DB;
            }
        """)

    def _setup_menu(self):
        """Create menu bar."""
        menubar = self.menuBar()

        file_menu = menubar.addMenu("&File")

        exit_action = QAction("E&xit", self)
        exit_action.setShortcut(QKeySequence.StandardKey.Quit)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        view_menu = menubar.addMenu("&View")

        reset_view_action = QAction("&Reset View", self)
        reset_view_action.setShortcut("Ctrl+0")
        reset_view_action.triggered.connect(self._on_reset_view)
        view_menu.addAction(reset_view_action)

    def _setup_central_widget(self):
        central = QWidget()
        layout = QHBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.tool_palette = ToolPalette(self.settings_manager.editor.default_atom_label)
        palette_frame = QFrame()
        palette_frame.setStyleSheet("QFrame { background: #1F2937; border-right: 1px solid #374151; }")
        palette_layout = QHBoxLayout(palette_frame)
        palette_layout.setContentsMargins(0, 0, 0, 0)
        palette_layout.addWidget(self.tool_palette)
        layout.addWidget(palette_frame)

        self.canvas = MoleculeCanvas(self.editor, self.settings_manager.ui)
        layout.addWidget(self.canvas, 1)

        self.setCentralWidget(central)

    def _setup_status_bar(self):
        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)

        self._tool_label = QLabel()
        self._zoom_label = QLabel()
        self._count_label = QLabel()
        self.status_bar.addWidget(self._tool_label)
        self.status_bar.addPermanentWidget(self._count_label)
        self.status_bar.addPermanentWidget(self._zoom_label)

    def _connect_signals(self):
        self.tool_palette.toolSelected.connect(self._on_tool_selected)
        self.canvas.viewChanged.connect(self._update_status)
        self.canvas.errorOccurred.connect(self._on_editor_error)

    def _update_status(self):
        document = self.editor.document
        self._tool_label.setText(f"Tool: {self.editor.tool}")
        self._zoom_label.setText(f"{self.editor.viewport.scale * 100:.0f}%")
        self._count_label.setText(
            f"{len(document.molecules)} molecules, {document.atom_count()} atoms"
        )

    def _on_tool_selected(self, tool):
        self.editor.set_tool(tool)
        self.canvas.setFocus()
        self._update_status()

    def _on_reset_view(self):
        self.canvas.reset_view()

    def _on_editor_error(self, message: str):
        logger.error(f"Closing after editor error: {message}")
        QMessageBox.critical(self, "Editor Error",
                             f"The editor reached an inconsistent state and will close:\n{message}")
        self.close()

    def closeEvent(self, event):
        """Handle window close - save settings."""
        self.settings_manager.save_window_size(self.width(), self.height())
        super().closeEvent(event)

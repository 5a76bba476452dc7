#!/usr/bin/env python3
"""
MolCanvas - Main Entry Point

An interactive editor for 2D structural diagrams of molecules: atoms,
bonds and the molecules they form.

Usage:
    python main.py
    python main.py --debug                # Enable debug logging
    python main.py --config settings.json # Use a specific settings file
"""

import sys
import logging
import argparse
from typing import Optional
from PyQt6.QtWidgets import QApplication
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont, QPalette, QColor

from services import SettingsManager
from views import MainWindow


PALETTES = {
    "dark": {
        QPalette.ColorRole.Window: "#111827",
        QPalette.ColorRole.WindowText: "#F9FAFB",
        QPalette.ColorRole.Base: "#1F2937",
        QPalette.ColorRole.AlternateBase: "#374151",
        QPalette.ColorRole.Text: "#F3F4F6",
        QPalette.ColorRole.Button: "#374151",
        QPalette.ColorRole.ButtonText: "#F9FAFB",
        QPalette.ColorRole.Highlight: "#3B82F6",
        QPalette.ColorRole.HighlightedText: "#FFFFFF",
    },
    "light": {
        QPalette.ColorRole.Window: "#F3F4F6",
        QPalette.ColorRole.WindowText: "#111827",
        QPalette.ColorRole.Base: "#FFFFFF",
        QPalette.ColorRole.AlternateBase: "#F9FAFB",
        QPalette.ColorRole.Text: "#374151",
        QPalette.ColorRole.Button: "#FFFFFF",
        QPalette.ColorRole.ButtonText: "#374151",
        QPalette.ColorRole.Highlight: "#3B82F6",
        QPalette.ColorRole.HighlightedText: "#FFFFFF",
    },
}


def setup_logging(debug: bool = False):
    """Configure logging for the application."""
    level = logging.DEBUG if debug else logging.INFO

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    # Log startup message
    logger = logging.getLogger(__name__)
    logger.info(f"Logging initialized at {'DEBUG' if debug else 'INFO'} level")


def setup_application(theme: str = "dark") -> QApplication:
    """Configure the Qt application."""
    # High DPI support
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv)
    app.setApplicationName("MolCanvas")
    app.setApplicationVersion("0.1.0")
    app.setOrganizationName("molcanvas")

    # Set default font
    font = QFont("SF Pro Display", 10)
    if not font.exactMatch():
        font = QFont("Segoe UI", 10)
    if not font.exactMatch():
        font = QFont("Helvetica Neue", 10)
    app.setFont(font)

    # Set up palette for consistent look
    palette = QPalette()
    for role, color in PALETTES.get(theme, PALETTES["dark"]).items():
        palette.setColor(role, QColor(color))
    app.setPalette(palette)

    return app


def main(argv: Optional[list] = None):
    """Main entry point."""
    # Parse command line arguments
    parser = argparse.ArgumentParser(description='MolCanvas molecule editor')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--config', metavar='PATH', help='Settings file to use')
    args = parser.parse_args(argv)

    # Setup logging
    setup_logging(debug=args.debug)

    settings_manager = SettingsManager(args.config)
    app = setup_application(settings_manager.ui.theme)

    # Create and show main window
    window = MainWindow(settings_manager)
    window.show()

    # Run event loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()

"""
Main Application Window

This module implements the main application window with menu bar, status
bar and a central area that hosts the frame view.

Inputs:
    - User interactions (menu selections)
    - Application configuration

Outputs:
    - Main application interface
    - open_folder_requested signal

Requirements:
    - PySide6 for GUI components
    - ConfigManager for settings
"""

from typing import Optional
from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QFileDialog, QLabel, QMainWindow, QWidget

from utils.config_manager import ConfigManager

WINDOW_TITLE = "DICOM Loop Viewer"


class MainWindow(QMainWindow):
    """
    Main application window for the DICOM loop viewer.

    Provides:
    - File menu with Open Folder and Exit
    - Status bar for load results and errors
    - Central widget area for the frame view
    """

    # Signals
    open_folder_requested = Signal(str)  # Emitted with the chosen folder path

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        """
        Initialize the main window.

        Args:
            config_manager: Optional ConfigManager instance
        """
        super().__init__()

        self.config_manager = config_manager or ConfigManager()

        self.setWindowTitle(WINDOW_TITLE)
        width, height = self.config_manager.get_window_size()
        self.resize(width, height)

        self._create_menu_bar()
        self._create_status_bar()

    def _create_menu_bar(self) -> None:
        """Create the application menu bar."""
        menubar = self.menuBar()

        file_menu = menubar.addMenu("&File")

        open_folder_action = QAction("Open &Folder...", self)
        open_folder_action.setShortcut(QKeySequence("Ctrl+Shift+O"))
        open_folder_action.triggered.connect(self._choose_folder)
        file_menu.addAction(open_folder_action)

        file_menu.addSeparator()

        exit_action = QAction("E&xit", self)
        exit_action.setShortcut(QKeySequence.StandardKey.Quit)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

    def _create_status_bar(self) -> None:
        """Create the status bar."""
        self.status_label = QLabel("Ready")
        self.status_label.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter)
        self.statusBar().addPermanentWidget(self.status_label, stretch=1)

    def _choose_folder(self) -> None:
        """Ask for a folder of DICOM files and emit open_folder_requested."""
        folder = QFileDialog.getExistingDirectory(
            self, "Open DICOM Folder", self.config_manager.get_last_path()
        )
        if folder:
            self.open_folder_requested.emit(folder)

    def set_frame_view(self, widget: QWidget) -> None:
        """
        Install the central frame view.

        Args:
            widget: Widget to show in the central area
        """
        self.setCentralWidget(widget)

    def update_status(self, message: str) -> None:
        """
        Show a message in the status bar.

        Args:
            message: Text to show
        """
        self.status_label.setText(message)

    def closeEvent(self, event) -> None:
        """Remember the window size on close."""
        self.config_manager.set_window_size(self.width(), self.height())
        super().closeEvent(event)

"""
DICOM Loop Viewer - Main Application Entry Point

This module is the main entry point for the DICOM loop viewer. It loads a
folder of DICOM files, creates the main window and loops the frames as a
cine animation with patient metadata underneath.

Inputs:
    - Command line arguments (optional folder path)
    - Last opened folder from the configuration

Outputs:
    - Running DICOM loop viewer application

Requirements:
    - PySide6 for application framework
    - pydicom for DICOM file handling
    - PIL/Pillow for image construction
    - All other application modules
"""

import sys
from pathlib import Path

# Add src directory to path
src_dir = Path(__file__).parent
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from typing import List, Optional
from PySide6.QtCore import QObject
from PySide6.QtWidgets import QApplication, QStyleFactory

from core.dicom_loader import DICOMLoader
from core.playback_session import PlaybackSession
from gui.cine_player import CinePlayer
from gui.frame_view import FrameView
from gui.main_window import MainWindow
from utils.config_manager import ConfigManager


class DICOMLoopViewerApp(QObject):
    """
    Main application class for the DICOM loop viewer.

    Coordinates the loader, playback session, cine player and window.
    """

    def __init__(self, argv: Optional[List[str]] = None):
        """
        Initialize the application.

        Args:
            argv: Command line arguments (defaults to sys.argv)
        """
        super().__init__()
        self.argv = list(sys.argv if argv is None else argv)

        # Create Qt application first (before any widgets)
        self.app = QApplication.instance() or QApplication(self.argv)
        self.app.setApplicationName("DICOM Loop Viewer")
        self.app.setStyle(QStyleFactory.create("Fusion"))

        self.config_manager = ConfigManager()
        self.dicom_loader = DICOMLoader(extension=self.config_manager.get_file_extension())
        self.session = PlaybackSession()
        self.cine_player = CinePlayer(self.session, frame_rate=self.config_manager.get_cine_frame_rate())

        self.main_window = MainWindow(self.config_manager)
        self.frame_view = FrameView(self.session, self.cine_player)
        self.main_window.set_frame_view(self.frame_view)
        self.main_window.open_folder_requested.connect(self.open_folder)

    def _initial_folder(self) -> str:
        """Folder from the command line, else the last opened folder."""
        if len(self.argv) > 1:
            return self.argv[1]
        return self.config_manager.get_last_path()

    def open_folder(self, directory_path: str) -> None:
        """
        Load a folder of DICOM files and start looping it.

        Args:
            directory_path: Folder containing *.dcm files
        """
        self.cine_player.stop_playback()
        frames = self.dicom_loader.load_directory(directory_path)
        self.session.set_frames(frames, self.dicom_loader.error_message)

        if self.dicom_loader.error_message:
            self.main_window.update_status(self.dicom_loader.error_message)
        else:
            self.config_manager.set_last_path(directory_path)
            failed = len(self.dicom_loader.get_failed_files())
            message = f"Loaded {len(frames)} frame(s) from {directory_path}"
            if failed:
                message += f" ({failed} file(s) skipped)"
            self.main_window.update_status(message)

        self.frame_view.refresh()

    def run(self) -> int:
        """
        Show the window and run the event loop.

        Returns:
            Application exit code
        """
        folder = self._initial_folder()
        if folder:
            self.open_folder(folder)
        self.main_window.show()
        return self.app.exec()


def main() -> int:
    """Main entry point."""
    viewer = DICOMLoopViewerApp()
    return viewer.run()


if __name__ == "__main__":
    sys.exit(main())

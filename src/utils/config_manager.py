"""
Configuration Manager

This module handles persistent storage and retrieval of viewer preferences.
Settings are stored in a JSON file in the user's application data directory.

Inputs:
    - User preferences (last opened folder, cine frame rate, window size)

Outputs:
    - Loaded configuration values
    - Saved configuration file

Requirements:
    - json module (standard library)
    - pathlib module (standard library)
    - os module (standard library)
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

# Six frames per second
DEFAULT_CINE_FRAME_RATE = 6.0
DEFAULT_FILE_EXTENSION = ".dcm"


class ConfigManager:
    """
    Manages application configuration and user preferences.

    Handles loading and saving of settings including:
    - Last opened DICOM folder
    - Cine playback frame rate
    - DICOM file extension used when scanning folders
    - Window geometry
    """

    def __init__(self, config_filename: str = "dicom_loop_viewer_config.json",
                 config_dir: Optional[Path] = None):
        """
        Initialize the configuration manager.

        Args:
            config_filename: Name of the configuration file to use
            config_dir: Optional directory override (defaults to the user's config directory)
        """
        if config_dir is not None:
            self.config_dir = Path(config_dir)
        elif os.name == 'nt':  # Windows
            app_data = os.getenv('APPDATA', os.path.expanduser('~'))
            self.config_dir = Path(app_data) / "DICOMLoopViewer"
        else:  # Mac/Linux
            self.config_dir = Path.home() / ".config" / "DICOMLoopViewer"

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.config_path = self.config_dir / config_filename

        self.default_config = {
            "last_path": "",  # Last folder of DICOM files that was opened
            "cine_frame_rate": DEFAULT_CINE_FRAME_RATE,
            "file_extension": DEFAULT_FILE_EXTENSION,
            "window_width": 900,
            "window_height": 700,
        }

        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """
        Load configuration from file, or return defaults if file doesn't exist.

        Returns:
            Dictionary containing configuration values
        """
        if self.config_path.exists():
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    loaded_config = json.load(f)
                if not isinstance(loaded_config, dict):
                    raise ValueError("top-level JSON value is not an object")
                # Merge with defaults to ensure all keys exist
                config = self.default_config.copy()
                config.update(loaded_config)
                return config
            except (json.JSONDecodeError, ValueError, IOError) as e:
                print(f"[CONFIG] Warning: Could not load config file: {e}")
                return self.default_config.copy()
        return self.default_config.copy()

    def save_config(self) -> bool:
        """
        Save current configuration to file.

        Returns:
            True if save was successful, False otherwise
        """
        try:
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(self.config, f, indent=4, ensure_ascii=False)
            return True
        except IOError as e:
            print(f"[CONFIG] Error saving config file: {e}")
            return False

    def get_last_path(self) -> str:
        """
        Get the last opened folder path.

        Returns:
            Path string, empty if not set
        """
        return self.config.get("last_path", "")

    def set_last_path(self, path: str) -> None:
        """
        Set the last opened folder path.

        Args:
            path: Path to save
        """
        self.config["last_path"] = path
        self.save_config()

    def get_cine_frame_rate(self) -> float:
        """
        Get the cine playback frame rate in frames per second.

        Falls back to the default rate when the stored value is not a positive number.

        Returns:
            Frame rate in FPS
        """
        value = self.config.get("cine_frame_rate", DEFAULT_CINE_FRAME_RATE)
        try:
            rate = float(value)
        except (TypeError, ValueError):
            return DEFAULT_CINE_FRAME_RATE
        return rate if rate > 0 else DEFAULT_CINE_FRAME_RATE

    def set_cine_frame_rate(self, frame_rate: float) -> None:
        """
        Set the cine playback frame rate.

        Args:
            frame_rate: Frame rate in FPS (ignored if not positive)
        """
        if frame_rate <= 0:
            return
        self.config["cine_frame_rate"] = float(frame_rate)
        self.save_config()

    def get_file_extension(self) -> str:
        """Get the file extension used to pick DICOM files out of a folder."""
        return self.config.get("file_extension", DEFAULT_FILE_EXTENSION) or DEFAULT_FILE_EXTENSION

    def get_window_size(self) -> tuple:
        """
        Get the main window size.

        Each dimension falls back to its default when the stored value is not a number.

        Returns:
            Tuple of (width, height)
        """
        return (self._get_dimension("window_width"),
                self._get_dimension("window_height"))

    def _get_dimension(self, key: str) -> int:
        value = self.config.get(key, self.default_config[key])
        try:
            return int(value)
        except (TypeError, ValueError):
            return self.default_config[key]

    def set_window_size(self, width: int, height: int) -> None:
        """
        Set the main window size.

        Args:
            width: Window width in pixels
            height: Window height in pixels
        """
        self.config["window_width"] = width
        self.config["window_height"] = height
        self.save_config()

"""
DICOM File Loader

This module loads a folder of DICOM files as an ordered sequence of frames
for looping playback. Files are picked by extension and ordered by the
number in their file name ("series-12.dcm" -> 12).

Inputs:
    - Directory paths
    - Single file paths

Outputs:
    - List of DicomFrame objects in playback order
    - List of files that failed to load (with error messages)
    - Error message when the directory itself cannot be read

Requirements:
    - pydicom library for DICOM file reading
    - os for directory listing
"""

import os
import re
import warnings
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple
import pydicom
from pydicom.dataset import Dataset
from pydicom.errors import InvalidDicomError

from utils.debug_log import debug_log

DICOM_EXTENSION = ".dcm"

# Optional sign followed by ASCII digits only
FILE_NUMBER_PATTERN = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class DicomFrame:
    """One loaded DICOM file: its parsed dataset and the name it was loaded from."""

    dataset: Dataset
    filename: str
    file_path: str = ""


def extract_file_number(filename: str) -> int:
    """
    Extract the sort number from a file name.

    The number is the text after the first "-" up to the next ".",
    e.g. "1-01.dcm" -> 1 and "scan-12.dcm" -> 12.

    Args:
        filename: File name (no directory part)

    Returns:
        Parsed number, or 0 if the name has no "-" or the text is not an
        optionally signed run of ASCII digits
    """
    parts = filename.split("-")
    if len(parts) < 2:
        return 0
    number_text = parts[1].split(".")[0]
    if not FILE_NUMBER_PATTERN.fullmatch(number_text):
        return 0
    return int(number_text)


def sort_dicom_filenames(filenames: Iterable[str], extension: str = DICOM_EXTENSION) -> List[str]:
    """
    Keep DICOM file names and order them by their file number.

    Python's sort is stable, so names with the same number keep their input order.

    Args:
        filenames: File names as listed in a directory
        extension: Suffix a file name must end with to be kept

    Returns:
        Filtered file names in ascending file-number order
    """
    dicom_files = [name for name in filenames if name.endswith(extension)]
    return sorted(dicom_files, key=extract_file_number)


class DICOMLoader:
    """
    Handles loading a folder of DICOM files into playback frames.

    Supports:
    - Extension filtering and file-number ordering
    - Per-file failure tracking (failed files are skipped, not fatal)
    - Directory read errors reported through error_message
    """

    def __init__(self, extension: str = DICOM_EXTENSION):
        """
        Initialize the DICOM loader.

        Args:
            extension: File extension used to pick DICOM files from a directory
        """
        self.extension = extension
        self.loaded_frames: List[DicomFrame] = []
        self.failed_files: List[Tuple[str, str]] = []  # (path, error_message)
        self.error_message: Optional[str] = None

    def list_directory(self, directory_path: str) -> List[str]:
        """
        List the names of regular files in a directory.

        Names are sorted alphabetically so that files sharing a file number
        always come out in the same order for the same folder contents.

        Args:
            directory_path: Path to the directory

        Returns:
            File names (no directory part)

        Raises:
            OSError: If the directory cannot be read
        """
        names = sorted(os.listdir(directory_path))
        return [name for name in names if os.path.isfile(os.path.join(directory_path, name))]

    def load_file(self, file_path: str) -> Optional[Dataset]:
        """
        Load a single DICOM file.

        Args:
            file_path: Path to the DICOM file

        Returns:
            pydicom.Dataset if successful, None otherwise
        """
        filename = os.path.basename(file_path)
        try:
            # Suppress pydicom's informational warnings about non-conformant files
            with warnings.catch_warnings():
                warnings.simplefilter('ignore', category=UserWarning)
                dataset = pydicom.dcmread(file_path)
        except InvalidDicomError as e:
            print(f"[LOADER] Error reading DICOM dataset: {filename}: {e}")
            self.failed_files.append((file_path, f"Invalid DICOM file: {str(e)}"))
            return None
        except OSError as e:
            print(f"[LOADER] Error reading DICOM dataset: {filename}: {e}")
            self.failed_files.append((file_path, f"File system error: {str(e)}"))
            return None
        except Exception as e:
            # pydicom raises a variety of errors on truncated or malformed data
            error_msg = f"{type(e).__name__}: Error reading file: {str(e)}"
            print(f"[LOADER] Error reading DICOM dataset: {filename}: {error_msg}")
            self.failed_files.append((file_path, error_msg))
            return None

        if len(dataset) == 0:
            print(f"[LOADER] Warning: Dataset is empty for file: {filename}")
            self.failed_files.append((file_path, "Dataset is empty"))
            return None

        debug_log("dicom_loader.py:load_file", "Dataset read", {
            "file": filename,
            "rows": dataset.get("Rows"),
            "columns": dataset.get("Columns"),
        })
        return dataset

    def load_single_frame(self, file_path: str) -> Optional[DicomFrame]:
        """
        Load one DICOM file as a frame.

        Args:
            file_path: Path to the DICOM file

        Returns:
            DicomFrame if successful, None otherwise
        """
        dataset = self.load_file(file_path)
        if dataset is None:
            return None
        return DicomFrame(dataset=dataset, filename=os.path.basename(file_path), file_path=file_path)

    def load_directory(self, directory_path: str) -> List[DicomFrame]:
        """
        Load all DICOM files from a directory in file-number order.

        A directory that cannot be read is not fatal: error_message is set and
        an empty list is returned. Files that fail to parse are skipped.

        Args:
            directory_path: Path to the directory

        Returns:
            List of successfully loaded frames
        """
        self.clear()

        try:
            names = self.list_directory(directory_path)
        except OSError as e:
            self.error_message = f"Error reading directory: {e}"
            print(f"[LOADER] {self.error_message}")
            return []

        for filename in sort_dicom_filenames(names, self.extension):
            file_path = os.path.join(directory_path, filename)
            dataset = self.load_file(file_path)
            if dataset is not None:
                self.loaded_frames.append(DicomFrame(dataset=dataset, filename=filename, file_path=file_path))

        debug_log("dicom_loader.py:load_directory", "Directory loaded", {
            "directory": directory_path,
            "loaded": len(self.loaded_frames),
            "failed": len(self.failed_files),
        })
        return list(self.loaded_frames)

    def get_failed_files(self) -> List[Tuple[str, str]]:
        """
        Get list of files that failed to load with error messages.

        Returns:
            List of tuples (file_path, error_message)
        """
        return self.failed_files.copy()

    def clear(self) -> None:
        """Clear loaded frames, failed files and the directory error."""
        self.loaded_frames = []
        self.failed_files = []
        self.error_message = None

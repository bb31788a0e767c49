"""
DICOM Utility Functions

This module provides helper functions for reading the handful of DICOM
tags the viewer displays, and for formatting them as overlay text.

Inputs:
    - pydicom.Dataset objects
    - Tag keywords (e.g. "PatientName")

Outputs:
    - Tag values as strings
    - Formatted metadata text

Requirements:
    - pydicom library
"""

from typing import Optional, Tuple
from pydicom.dataset import Dataset

UNKNOWN_VALUE = "Unknown"

# (label, keyword) pairs shown under the images, in display order
METADATA_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("Patient Name", "PatientName"),
    ("Modality", "Modality"),
    ("Study Date", "StudyDate"),
)


def get_string_tag(dataset: Optional[Dataset], keyword: str) -> Optional[str]:
    """
    Get a tag value as a string.

    Args:
        dataset: pydicom Dataset (may be None)
        keyword: DICOM keyword, e.g. "Modality"

    Returns:
        String value, or None if the tag is missing or empty
    """
    if dataset is None:
        return None
    value = dataset.get(keyword, None)
    if value is None:
        return None
    # PersonName, MultiValue and plain strings all format through str()
    text = str(value).strip()
    return text or None


def get_int_tag(dataset: Optional[Dataset], keyword: str) -> Optional[int]:
    """
    Get a tag value as an integer.

    Args:
        dataset: pydicom Dataset (may be None)
        keyword: DICOM keyword, e.g. "Rows"

    Returns:
        Integer value, or None if the tag is missing or not numeric
    """
    if dataset is None:
        return None
    value = dataset.get(keyword, None)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def format_frame_metadata(dataset: Optional[Dataset]) -> str:
    """
    Format patient name, modality and study date for display.

    Missing tags are shown as "Unknown"; this never fails.

    Args:
        dataset: pydicom Dataset

    Returns:
        Three lines of "Label: value" text
    """
    lines = []
    for label, keyword in METADATA_FIELDS:
        value = get_string_tag(dataset, keyword)
        lines.append(f"{label}: {value if value is not None else UNKNOWN_VALUE}")
    return "\n".join(lines)


def format_file_label(filename: str) -> str:
    """Format the file name line shown above the metadata."""
    return f"File: {filename}"

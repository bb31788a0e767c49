"""
Unit tests for DICOM utility functions (utils.dicom_utils).

Tests tag lookups and metadata text formatting. Does not require DICOM files.
"""

import unittest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from pydicom.dataset import Dataset

from utils.dicom_utils import (
    format_file_label,
    format_frame_metadata,
    get_int_tag,
    get_string_tag,
)


def _full_dataset():
    ds = Dataset()
    ds.PatientName = "Doe^Jane"
    ds.Modality = "MR"
    ds.StudyDate = "20241209"
    return ds


class TestGetStringTag(unittest.TestCase):
    """Tests for get_string_tag."""

    def test_present_values(self):
        ds = _full_dataset()
        self.assertEqual(get_string_tag(ds, "PatientName"), "Doe^Jane")
        self.assertEqual(get_string_tag(ds, "Modality"), "MR")

    def test_missing_tag_returns_none(self):
        self.assertIsNone(get_string_tag(Dataset(), "StudyDate"))

    def test_empty_value_returns_none(self):
        ds = Dataset()
        ds.Modality = ""
        self.assertIsNone(get_string_tag(ds, "Modality"))

    def test_no_dataset_returns_none(self):
        self.assertIsNone(get_string_tag(None, "Modality"))


class TestGetIntTag(unittest.TestCase):
    """Tests for get_int_tag."""

    def test_present_value(self):
        ds = Dataset()
        ds.Rows = 512
        self.assertEqual(get_int_tag(ds, "Rows"), 512)

    def test_missing_value(self):
        self.assertIsNone(get_int_tag(Dataset(), "Columns"))
        self.assertIsNone(get_int_tag(None, "Columns"))


class TestFormatFrameMetadata(unittest.TestCase):
    """Tests for format_frame_metadata."""

    def test_all_fields(self):
        self.assertEqual(
            format_frame_metadata(_full_dataset()),
            "Patient Name: Doe^Jane\nModality: MR\nStudy Date: 20241209",
        )

    def test_missing_study_date(self):
        ds = _full_dataset()
        del ds.StudyDate
        text = format_frame_metadata(ds)
        self.assertIn("Study Date: Unknown", text)
        self.assertIn("Patient Name: Doe^Jane", text)
        self.assertIn("Modality: MR", text)

    def test_empty_dataset(self):
        self.assertEqual(
            format_frame_metadata(Dataset()),
            "Patient Name: Unknown\nModality: Unknown\nStudy Date: Unknown",
        )

    def test_no_dataset(self):
        self.assertIn("Modality: Unknown", format_frame_metadata(None))


class TestFormatFileLabel(unittest.TestCase):

    def test_label(self):
        self.assertEqual(format_file_label("1-01.dcm"), "File: 1-01.dcm")


if __name__ == "__main__":
    unittest.main()

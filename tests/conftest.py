"""
Pytest configuration for DICOM Loop Viewer tests.

Adds project src/ to sys.path so tests can import from core, gui and utils.
Run tests from project root with:
  - pytest
  - python tests/run_tests.py
"""

import sys
import os

import pytest

# Qt widgets are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add src to path so that "from core.xxx" and "from utils.xxx" work
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_src_dir = os.path.join(_project_root, "src")
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)


def pytest_configure(config):
    config.addinivalue_line("markers", "qt: mark test as requiring QApplication (PySide6)")


@pytest.fixture(scope="session")
def qapp():
    """Provide QApplication for tests that need Qt. One per test session."""
    try:
        from PySide6.QtWidgets import QApplication
    except ImportError:
        pytest.skip("PySide6 not installed")
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    return app


@pytest.fixture(autouse=True)
def isolated_debug_log(tmp_path, monkeypatch):
    """Keep debug logging off and pointed at a temp file unless a test enables it."""
    monkeypatch.delenv("DICOMLOOPVIEWER_DEBUG_LOG", raising=False)
    monkeypatch.setenv("DICOMLOOPVIEWER_DEBUG_LOG_PATH", str(tmp_path / "debug.log"))


@pytest.fixture
def make_dicom_file():
    """
    Return a function that writes a small 8-bit grayscale DICOM file.

    Signature: (path, rows=2, columns=4, pixel_data=None, **tags) -> path
    Extra keyword arguments are set as dataset attributes (e.g. PatientName="Doe^Jane").
    """
    from pydicom.dataset import Dataset, FileMetaDataset
    from pydicom.uid import ExplicitVRLittleEndian, SecondaryCaptureImageStorage, generate_uid
    import pydicom

    def _make(path, rows=2, columns=4, pixel_data=None, **tags):
        sop_instance_uid = generate_uid()

        file_meta = FileMetaDataset()
        file_meta.MediaStorageSOPClassUID = SecondaryCaptureImageStorage
        file_meta.MediaStorageSOPInstanceUID = sop_instance_uid
        file_meta.TransferSyntaxUID = ExplicitVRLittleEndian

        ds = Dataset()
        ds.file_meta = file_meta
        ds.SOPClassUID = SecondaryCaptureImageStorage
        ds.SOPInstanceUID = sop_instance_uid
        ds.Rows = rows
        ds.Columns = columns
        ds.SamplesPerPixel = 1
        ds.PhotometricInterpretation = "MONOCHROME2"
        ds.BitsAllocated = 8
        ds.BitsStored = 8
        ds.HighBit = 7
        ds.PixelRepresentation = 0
        for keyword, value in tags.items():
            setattr(ds, keyword, value)
        if pixel_data is None:
            pixel_data = bytes(i % 256 for i in range(rows * columns * 2))
        ds.PixelData = pixel_data

        pydicom.dcmwrite(str(path), ds, enforce_file_format=True)
        return path

    return _make

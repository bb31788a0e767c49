"""
Tests for CinePlayer (gui.cine_player) and its binding to FrameView.

Requires PySide6 and the qapp fixture. Timer tests use short intervals and
loose bounds so they stay stable on slow machines.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from pydicom.dataset import Dataset
from PySide6.QtTest import QTest

from core.dicom_loader import DicomFrame
from core.playback_session import PlaybackSession
from gui.cine_player import CinePlayer, DEFAULT_FRAME_RATE, frame_rate_to_interval_ms

pytestmark = pytest.mark.qt


def _session(count):
    frames = []
    for index in range(count):
        ds = Dataset()
        ds.Rows = 2
        ds.Columns = 4
        ds.PixelData = bytes(range(20))
        ds.Modality = "US"
        frames.append(DicomFrame(dataset=ds, filename=f"frame-{index}.dcm"))
    return PlaybackSession(frames)


def test_interval_for_default_rate():
    assert DEFAULT_FRAME_RATE == 6.0
    assert frame_rate_to_interval_ms(DEFAULT_FRAME_RATE) == 166
    assert frame_rate_to_interval_ms(5000) == 1


def test_advance_wraps_and_emits(qapp):
    session = _session(5)
    player = CinePlayer(session)
    emitted = []
    player.frame_changed.connect(emitted.append)

    for _ in range(7):
        player._advance_frame()

    assert session.cursor == 2
    assert emitted == [1, 2, 3, 4, 0, 1, 2]


def test_advance_on_empty_session_is_noop(qapp):
    session = PlaybackSession()
    player = CinePlayer(session)
    emitted = []
    player.frame_changed.connect(emitted.append)

    for _ in range(3):
        player._advance_frame()

    assert session.cursor == 0
    assert emitted == []


def test_start_twice_keeps_one_timer(qapp):
    session = _session(1000)
    player = CinePlayer(session, frame_rate=20)  # 50 ms interval
    ticks = []
    player.frame_changed.connect(ticks.append)

    assert player.start_playback()
    assert player.start_playback()
    assert player.timer.isActive()
    assert player.timer.interval() == 50

    QTest.qWait(500)
    player.stop_playback()

    # One stream gives about 10 ticks; a duplicate timer would give about 20
    assert 1 <= len(ticks) <= 13
    assert ticks == list(range(1, len(ticks) + 1))


def test_stop_is_idempotent(qapp):
    player = CinePlayer(_session(3))
    states = []
    player.playback_state_changed.connect(states.append)

    player.stop_playback()
    assert states == []

    player.start_playback()
    player.stop_playback()
    player.stop_playback()

    assert states == [True, False]
    assert not player.is_playback_active()
    assert not player.timer.isActive()


def test_no_ticks_after_stop(qapp):
    session = _session(10)
    player = CinePlayer(session, frame_rate=50)
    player.start_playback()
    player.stop_playback()
    cursor = session.cursor

    QTest.qWait(100)

    assert session.cursor == cursor


def test_non_positive_initial_rate_uses_default(qapp):
    player = CinePlayer(_session(2), frame_rate=0)
    assert player.get_current_frame_rate() == DEFAULT_FRAME_RATE
    assert player.start_playback()
    assert player.timer.interval() == frame_rate_to_interval_ms(DEFAULT_FRAME_RATE)
    player.stop_playback()


def test_set_frame_rate_updates_running_timer(qapp):
    player = CinePlayer(_session(3))
    player.start_playback()
    player.set_frame_rate(10)
    assert player.timer.interval() == 100
    player.set_frame_rate(-1)
    assert player.get_current_frame_rate() == 10
    player.stop_playback()


def test_frame_view_binds_playback_to_visibility(qapp):
    from gui.frame_view import FrameView, NO_IMAGE_TEXT

    session = _session(3)
    player = CinePlayer(session)
    view = FrameView(session, player)

    assert not player.is_playback_active()
    view.show()
    qapp.processEvents()
    assert player.is_playback_active()
    assert view.file_label.text() == "File: frame-0.dcm"
    assert "Modality: US" in view.metadata_label.text()
    assert view.stack.currentIndex() == 1

    view.hide()
    qapp.processEvents()
    assert not player.is_playback_active()

    view.show()
    view.show()
    qapp.processEvents()
    assert player.is_playback_active()
    view.hide()
    assert NO_IMAGE_TEXT == view.placeholder_text.text()


def test_frame_view_shows_placeholder_for_bad_geometry(qapp):
    from gui.frame_view import FrameView

    ds = Dataset()
    ds.Rows = 0
    ds.Columns = 4
    ds.PixelData = bytes(16)
    session = PlaybackSession([DicomFrame(dataset=ds, filename="bad-1.dcm")])
    view = FrameView(session, CinePlayer(session))

    assert view.stack.currentIndex() == 2
    assert view.file_label.text() == "File: bad-1.dcm"


def test_frame_view_empty_session(qapp):
    from gui.frame_view import FrameView, NO_FILES_TEXT

    session = PlaybackSession()
    session.set_frames([], "Error reading directory: denied")
    player = CinePlayer(session)
    view = FrameView(session, player)
    view.show()
    qapp.processEvents()

    assert view.stack.currentWidget() is view.empty_label
    assert NO_FILES_TEXT in view.empty_label.text()
    assert "denied" in view.empty_label.text()
    assert not player.is_playback_active()
    view.hide()

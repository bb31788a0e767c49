"""
Cine Player

This module provides looping cine playback over the frames of a playback
session. A single repeating QTimer advances the session cursor at a fixed
frame rate, wrapping from the last frame back to the first.

Inputs:
    - PlaybackSession holding the frames and cursor
    - Playback control requests (start, stop)
    - Frame rate setting

Outputs:
    - frame_changed signal with the new cursor
    - Playback state changes

Requirements:
    - PySide6 for QTimer and signals
    - core.playback_session for cursor state
"""

from PySide6.QtCore import QObject, QTimer, Signal

from core.playback_session import PlaybackSession

DEFAULT_FRAME_RATE = 6.0  # FPS


def frame_rate_to_interval_ms(frame_rate: float) -> int:
    """
    Convert a frame rate to a timer interval.

    Args:
        frame_rate: Frames per second (must be positive)

    Returns:
        Interval in milliseconds, at least 1
    """
    return max(1, int(1000.0 / frame_rate))


class CinePlayer(QObject):
    """
    Handles looping playback of a playback session.

    Features:
    - One repeating QTimer; starting again never creates a second tick stream
    - Configurable frame rate (default 6 FPS)
    - Idempotent stop
    """

    # Signals
    frame_changed = Signal(int)  # Emitted with the new cursor after each advance
    playback_state_changed = Signal(bool)  # True = playing

    def __init__(self, session: PlaybackSession, frame_rate: float = DEFAULT_FRAME_RATE, parent=None):
        """
        Initialize the cine player.

        Args:
            session: PlaybackSession whose cursor is advanced
            frame_rate: Playback rate in FPS
            parent: Optional QObject parent
        """
        super().__init__(parent)

        self.session = session
        self.current_frame_rate = frame_rate if frame_rate > 0 else DEFAULT_FRAME_RATE
        self.is_playing = False

        self.timer = QTimer(self)
        self.timer.setSingleShot(False)
        self.timer.timeout.connect(self._advance_frame)

    def start_playback(self) -> bool:
        """
        Start (or restart) looping playback.

        Any running timer is stopped first, so at most one timer is ever active.

        Returns:
            True once the timer is running
        """
        self.stop_playback()
        self.timer.start(frame_rate_to_interval_ms(self.current_frame_rate))
        self.is_playing = True
        self.playback_state_changed.emit(True)
        return True

    def stop_playback(self) -> None:
        """Stop playback. Does nothing if already stopped."""
        if not self.is_playing and not self.timer.isActive():
            return
        self.timer.stop()
        self.is_playing = False
        self.playback_state_changed.emit(False)

    def set_frame_rate(self, frame_rate: float) -> None:
        """
        Set the playback frame rate.

        Args:
            frame_rate: Frames per second (ignored if not positive)
        """
        if frame_rate <= 0:
            return
        self.current_frame_rate = frame_rate
        if self.is_playing:
            self.timer.setInterval(frame_rate_to_interval_ms(frame_rate))

    def get_current_frame_rate(self) -> float:
        return self.current_frame_rate

    def is_playback_active(self) -> bool:
        return self.is_playing

    def _advance_frame(self) -> None:
        """Advance the session cursor (called by timer)."""
        if self.session.is_empty():
            return
        previous = self.session.cursor
        current = self.session.advance()
        if current != previous:
            self.frame_changed.emit(current)

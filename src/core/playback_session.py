"""
Playback Session

This module holds the state of one viewing session: the ordered frame list,
the playback cursor and the last load error. The cine player advances the
cursor; the frame view pulls what to show for the current index.

Inputs:
    - Frame lists from DICOMLoader
    - Advance / seek requests

Outputs:
    - Current cursor position
    - Display content (bitmaps, file label, metadata text) for a frame index

Requirements:
    - core.frame_renderer for bitmaps
    - utils.dicom_utils for metadata text
"""

from dataclasses import dataclass
from typing import List, Optional
from PIL import Image

from core.dicom_loader import DicomFrame
from core.frame_renderer import render_frame_images
from utils.dicom_utils import format_frame_metadata


@dataclass
class FrameDisplay:
    """Everything the view shows for one frame."""

    filename: str
    metadata_text: str
    left_image: Optional[Image.Image] = None
    right_image: Optional[Image.Image] = None

    @property
    def has_images(self) -> bool:
        """True when both bitmaps could be built."""
        return self.left_image is not None and self.right_image is not None


class PlaybackSession:
    """
    Owns the frame list and playback cursor for one viewer.

    The cursor is always a valid index into the frame list when the list is
    non-empty; with no frames every cursor operation is a no-op.
    """

    def __init__(self, frames: Optional[List[DicomFrame]] = None):
        """
        Initialize the session.

        Args:
            frames: Optional initial frame list
        """
        self._frames: List[DicomFrame] = list(frames) if frames else []
        self._cursor = 0
        self.error_message: Optional[str] = None

    def set_frames(self, frames: List[DicomFrame], error_message: Optional[str] = None) -> None:
        """
        Replace the frame list and rewind to the first frame.

        Args:
            frames: New frame list (in playback order)
            error_message: Load error to surface to the user, if any
        """
        self._frames = list(frames)
        self._cursor = 0
        self.error_message = error_message

    @property
    def frames(self) -> List[DicomFrame]:
        return list(self._frames)

    @property
    def frame_count(self) -> int:
        return len(self._frames)

    @property
    def cursor(self) -> int:
        return self._cursor

    def is_empty(self) -> bool:
        return not self._frames

    def advance(self) -> int:
        """
        Move the cursor to the next frame, wrapping to the first after the last.

        Returns:
            The cursor after advancing (unchanged when there are no frames)
        """
        if self._frames:
            self._cursor = (self._cursor + 1) % len(self._frames)
        return self._cursor

    def set_cursor(self, index: int) -> int:
        """
        Seek to a frame; the index is taken modulo the frame count.

        Args:
            index: Requested frame index

        Returns:
            The resulting cursor
        """
        if self._frames:
            self._cursor = index % len(self._frames)
        return self._cursor

    def reset(self) -> None:
        """Rewind to the first frame."""
        self._cursor = 0

    def frame_at(self, index: int) -> Optional[DicomFrame]:
        """
        Get a frame by index without raising.

        Args:
            index: Frame index

        Returns:
            DicomFrame, or None if the index is out of range
        """
        if 0 <= index < len(self._frames):
            return self._frames[index]
        return None

    def current_frame(self) -> Optional[DicomFrame]:
        return self.frame_at(self._cursor)

    def get_display(self, index: Optional[int] = None) -> Optional[FrameDisplay]:
        """
        Build the display content for a frame.

        Bitmaps and text are derived from the frame's dataset on every call.

        Args:
            index: Frame index (defaults to the cursor)

        Returns:
            FrameDisplay, or None if there is no frame at the index
        """
        frame = self.frame_at(self._cursor if index is None else index)
        if frame is None:
            return None
        left_image, right_image = render_frame_images(frame.dataset)
        return FrameDisplay(
            filename=frame.filename,
            metadata_text=format_frame_metadata(frame.dataset),
            left_image=left_image,
            right_image=right_image,
        )

"""
Frame View

This module provides the central widget of the viewer: the two grayscale
bitmaps of the current frame side by side, the file name and the patient
metadata. Playback runs only while the view is visible.

Inputs:
    - PlaybackSession with loaded frames
    - CinePlayer frame_changed signals

Outputs:
    - Displayed frame bitmaps and text

Requirements:
    - PySide6 for GUI components
    - PIL/Pillow images produced by core.frame_renderer
"""

from typing import Optional
from PIL import Image
from PySide6.QtCore import Qt
from PySide6.QtGui import QImage, QPixmap
from PySide6.QtWidgets import (QHBoxLayout, QLabel, QSizePolicy, QStackedWidget,
                               QStyle, QVBoxLayout, QWidget)

from core.playback_session import FrameDisplay, PlaybackSession
from gui.cine_player import CinePlayer
from utils.dicom_utils import format_file_label

NO_FILES_TEXT = "No DICOM files found"
NO_IMAGE_TEXT = "Unable to display DICOM image"
IMAGE_HEIGHT = 400
PLACEHOLDER_SIZE = 200


def pil_image_to_pixmap(image: Image.Image) -> QPixmap:
    """
    Convert a PIL Image to a QPixmap.

    Args:
        image: PIL Image in mode "L" (other modes are converted to RGB)

    Returns:
        QPixmap owning its own copy of the pixels
    """
    # Keep a reference to the bytes buffer until QImage.copy() has run
    if image.mode == 'L':
        image_bytes = image.tobytes()
        qimage = QImage(image_bytes, image.width, image.height, image.width,
                        QImage.Format.Format_Grayscale8)
    else:
        image = image.convert('RGB')
        image_bytes = image.tobytes()
        qimage = QImage(image_bytes, image.width, image.height, image.width * 3,
                        QImage.Format.Format_RGB888)
    # Deep copy so Qt owns the data
    qimage = qimage.copy()
    return QPixmap.fromImage(qimage)


class FrameView(QWidget):
    """
    Shows the current frame of a playback session.

    Pages:
    - empty: "No DICOM files found" (plus the load error, if any)
    - images: left/right bitmaps side by side
    - placeholder: icon and "Unable to display DICOM image"
    The file name and metadata labels sit under the image area.
    """

    def __init__(self, session: PlaybackSession, cine_player: CinePlayer, parent: Optional[QWidget] = None):
        """
        Initialize the frame view.

        Args:
            session: PlaybackSession to display
            cine_player: CinePlayer driving the session cursor
            parent: Optional parent widget
        """
        super().__init__(parent)
        self.session = session
        self.cine_player = cine_player
        self._create_ui()
        self.cine_player.frame_changed.connect(self.show_frame)
        self.refresh()

    def _create_ui(self) -> None:
        """Create the widget layout."""
        layout = QVBoxLayout(self)

        self.stack = QStackedWidget()

        self.empty_label = QLabel(NO_FILES_TEXT)
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.empty_label.setWordWrap(True)
        self.stack.addWidget(self.empty_label)

        images_page = QWidget()
        images_layout = QHBoxLayout(images_page)
        images_layout.setSpacing(0)
        images_layout.setContentsMargins(0, 0, 0, 0)
        self.left_image_label = self._create_image_label()
        self.right_image_label = self._create_image_label()
        images_layout.addWidget(self.left_image_label)
        images_layout.addWidget(self.right_image_label)
        self.stack.addWidget(images_page)

        placeholder_page = QWidget()
        placeholder_layout = QVBoxLayout(placeholder_page)
        self.placeholder_icon = QLabel()
        self.placeholder_icon.setAlignment(Qt.AlignmentFlag.AlignCenter)
        icon = self.style().standardIcon(QStyle.StandardPixmap.SP_FileIcon)
        self.placeholder_icon.setPixmap(icon.pixmap(PLACEHOLDER_SIZE, PLACEHOLDER_SIZE))
        self.placeholder_text = QLabel(NO_IMAGE_TEXT)
        self.placeholder_text.setAlignment(Qt.AlignmentFlag.AlignCenter)
        placeholder_layout.addWidget(self.placeholder_icon)
        placeholder_layout.addWidget(self.placeholder_text)
        self.stack.addWidget(placeholder_page)

        layout.addWidget(self.stack, 1)

        self.file_label = QLabel()
        self.file_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        font = self.file_label.font()
        font.setBold(True)
        self.file_label.setFont(font)
        layout.addWidget(self.file_label)

        self.metadata_label = QLabel()
        self.metadata_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.metadata_label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        layout.addWidget(self.metadata_label)

    def _create_image_label(self) -> QLabel:
        """Create a label that stretches its pixmap like a resizable image."""
        label = QLabel()
        label.setScaledContents(True)
        label.setMinimumHeight(IMAGE_HEIGHT // 4)
        label.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        return label

    def refresh(self) -> None:
        """Redisplay after the session's frame list changed."""
        if self.session.is_empty():
            text = NO_FILES_TEXT
            if self.session.error_message:
                text = f"{NO_FILES_TEXT}\n{self.session.error_message}"
            self.empty_label.setText(text)
            self.stack.setCurrentWidget(self.empty_label)
            self.file_label.clear()
            self.metadata_label.clear()
            self.cine_player.stop_playback()
            return
        self.show_frame(self.session.cursor)
        if self.isVisible():
            self.cine_player.start_playback()

    def show_frame(self, index: int) -> None:
        """
        Display a frame of the session.

        Args:
            index: Frame index
        """
        display = self.session.get_display(index)
        if display is None:
            return
        self._apply_display(display)

    def _apply_display(self, display: FrameDisplay) -> None:
        if display.has_images:
            self.left_image_label.setPixmap(pil_image_to_pixmap(display.left_image))
            self.right_image_label.setPixmap(pil_image_to_pixmap(display.right_image))
            self.stack.setCurrentIndex(1)
        else:
            self.stack.setCurrentIndex(2)
        self.file_label.setText(format_file_label(display.filename))
        self.metadata_label.setText(display.metadata_text)

    def showEvent(self, event) -> None:
        """Start looping playback when the view becomes visible."""
        super().showEvent(event)
        if not self.session.is_empty():
            self.cine_player.start_playback()

    def hideEvent(self, event) -> None:
        """Stop playback when the view is hidden."""
        self.cine_player.stop_playback()
        super().hideEvent(event)

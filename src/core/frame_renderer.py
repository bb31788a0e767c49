"""
Frame Renderer

This module turns the raw PixelData bytes of a DICOM dataset into the two
8-bit grayscale bitmaps shown side by side by the viewer.

The two bitmaps are deliberately different readings of the same bytes:
- left: the whole buffer, width = Columns, row stride = Columns * 2
- right: the buffer from byte (Columns // 2) * 2 onwards,
  width = (Columns // 2) * 2, row stride = (Columns // 2) * 4

Pixel data is not decoded, rescaled or windowed; each byte is one sample.

Inputs:
    - pydicom.Dataset objects (Rows, Columns, PixelData)
    - Raw pixel bytes and pixel geometry

Outputs:
    - PIL Images in mode "L", or None when no image can be built

Requirements:
    - PIL/Pillow for image construction
    - pydicom for dataset access
"""

from dataclasses import dataclass
from typing import Optional, Tuple
from PIL import Image
from pydicom.dataset import Dataset

from utils.dicom_utils import get_int_tag
from utils.debug_log import debug_log


@dataclass(frozen=True)
class PixelGeometry:
    """Image size as declared by the dataset."""

    rows: int
    columns: int


def get_pixel_geometry(dataset: Optional[Dataset]) -> Optional[PixelGeometry]:
    """
    Read Rows and Columns from a dataset.

    Args:
        dataset: pydicom Dataset

    Returns:
        PixelGeometry, or None if either value is missing or not positive
    """
    rows = get_int_tag(dataset, "Rows")
    columns = get_int_tag(dataset, "Columns")
    if rows is None or columns is None or rows <= 0 or columns <= 0:
        return None
    return PixelGeometry(rows=rows, columns=columns)


def get_pixel_bytes(dataset: Optional[Dataset]) -> Optional[bytes]:
    """
    Get the raw PixelData bytes of a dataset.

    Args:
        dataset: pydicom Dataset

    Returns:
        Raw bytes, or None if the dataset has no (or empty) pixel data
    """
    if dataset is None or "PixelData" not in dataset:
        return None
    data = dataset.PixelData
    if not data:
        return None
    return bytes(data)


def _grayscale_from_buffer(data: bytes, width: int, height: int, stride: int) -> Optional[Image.Image]:
    """
    Build an 8-bit grayscale image from a raw buffer with an explicit row stride.

    The buffer must hold height * stride bytes. The returned image owns a copy
    of the pixels, so the source buffer can be released.

    Args:
        data: Raw pixel bytes
        width: Image width in pixels
        height: Image height in pixels
        stride: Bytes from the start of one row to the next

    Returns:
        PIL Image in mode "L", or None if the buffer does not fit the geometry
    """
    if width <= 0 or height <= 0 or stride < width:
        return None
    required = height * stride
    if len(data) < required:
        debug_log("frame_renderer.py:_grayscale_from_buffer", "Buffer too short", {
            "width": width,
            "height": height,
            "stride": stride,
            "required": required,
            "available": len(data),
        })
        return None
    try:
        image = Image.frombuffer("L", (width, height), data, "raw", "L", stride, 1)
        return image.copy()
    except (ValueError, MemoryError) as e:
        print(f"[RENDER] Error building grayscale image: {e}")
        return None


def render_left(pixel_bytes: Optional[bytes], geometry: Optional[PixelGeometry]) -> Optional[Image.Image]:
    """
    Render the left bitmap: the whole buffer at a row stride of Columns * 2.

    Args:
        pixel_bytes: Raw PixelData bytes
        geometry: Rows/Columns of the dataset

    Returns:
        PIL Image (Columns x Rows), or None
    """
    if not pixel_bytes or geometry is None:
        return None
    columns = geometry.columns
    return _grayscale_from_buffer(pixel_bytes, columns, geometry.rows, columns * 2)


def render_right(pixel_bytes: Optional[bytes], geometry: Optional[PixelGeometry]) -> Optional[Image.Image]:
    """
    Render the right bitmap from the buffer tail.

    Starts (Columns // 2) * 2 bytes into the buffer and reads rows of
    (Columns // 2) * 2 pixels at a stride of (Columns // 2) * 4 bytes.

    Args:
        pixel_bytes: Raw PixelData bytes
        geometry: Rows/Columns of the dataset

    Returns:
        PIL Image ((Columns // 2) * 2 x Rows), or None
    """
    if not pixel_bytes or geometry is None:
        return None
    half_columns = geometry.columns // 2
    offset = half_columns * 2
    # Slicing bytes copies; the source buffer is left untouched
    right_bytes = pixel_bytes[offset:]
    return _grayscale_from_buffer(right_bytes, half_columns * 2, geometry.rows, half_columns * 4)


def render_frame_images(dataset: Optional[Dataset]) -> Tuple[Optional[Image.Image], Optional[Image.Image]]:
    """
    Render both bitmaps for one dataset.

    Missing pixel data or invalid geometry gives (None, None) rather than an error.

    Args:
        dataset: pydicom Dataset

    Returns:
        Tuple of (left_image, right_image); either may be None
    """
    geometry = get_pixel_geometry(dataset)
    if geometry is None:
        debug_log("frame_renderer.py:render_frame_images", "Invalid dimensions", {
            "rows": get_int_tag(dataset, "Rows"),
            "columns": get_int_tag(dataset, "Columns"),
        })
        return None, None
    pixel_bytes = get_pixel_bytes(dataset)
    if pixel_bytes is None:
        return None, None
    return render_left(pixel_bytes, geometry), render_right(pixel_bytes, geometry)

"""
Vertical orientation normalization of read-back pixels.

Render targets are compared in the orientation the backend reads them back
in. Uploaded textures are compared in upload (top-down) order, so on
backends that flip color read-back the rows have to be reversed again.
"""

import logging

import numpy as np

from ..backend.base import DeviceCapabilities, TextureRangeDesc

logger = logging.getLogger(__name__)


def needs_vertical_flip(capabilities: DeviceCapabilities, is_render_target: bool) -> bool:
    """True when read-back rows must be reversed before comparison."""
    if is_render_target:
        return False
    return capabilities.flips_color_readback_on_upload


def flip_rows(pixels: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Reverse the row order of a row-major ``width x height`` buffer.

    Output row ``h`` is input row ``height - 1 - h``; pixels within a row keep
    their order. Always returns a new array.
    """
    pixels = np.asarray(pixels)
    if pixels.size != width * height:
        raise ValueError(f"Buffer holds {pixels.size} pixels, expected {width}x{height}")
    if width == 0 or height == 0:
        return pixels.copy()
    return pixels.reshape(height, width)[::-1].reshape(-1).copy()


def normalize_orientation(
    pixels: np.ndarray,
    range_desc: TextureRangeDesc,
    capabilities: DeviceCapabilities,
    is_render_target: bool,
) -> np.ndarray:
    """Apply the flip policy for this device and usage to read-back pixels."""
    if not needs_vertical_flip(capabilities, is_render_target):
        return pixels
    logger.debug(
        "Flipping %dx%d read-back from %s upload texture",
        range_desc.width,
        range_desc.height,
        capabilities.backend_type.value,
    )
    return flip_rows(pixels, range_desc.width, range_desc.height)

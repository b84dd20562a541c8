"""
Texture validation pipeline: synchronize, read back, normalize, compare.
"""

from .compare import ComparisonResult, PixelMismatch, compare_pixels
from .orientation import flip_rows, needs_vertical_flip, normalize_orientation
from .readback import check_single_slice, ephemeral_framebuffer, read_texture_range
from .sync import wait_for_queue
from .validator import (
    TextureValidator,
    validate_framebuffer_texture,
    validate_framebuffer_texture_range,
    validate_texture_range,
    validate_uploaded_texture,
    validate_uploaded_texture_range,
)

__all__ = [
    "TextureValidator",
    "validate_texture_range",
    "validate_framebuffer_texture_range",
    "validate_framebuffer_texture",
    "validate_uploaded_texture_range",
    "validate_uploaded_texture",
    "ComparisonResult",
    "PixelMismatch",
    "compare_pixels",
    "flip_rows",
    "needs_vertical_flip",
    "normalize_orientation",
    "check_single_slice",
    "ephemeral_framebuffer",
    "read_texture_range",
    "wait_for_queue",
]

"""
texval - read-back verification of GPU texture contents.

Checks that pixel data produced by a rendering backend matches an expected
reference image exactly:
- backend: device contracts and an in-process reference backend
- validation: synchronize, read back, normalize orientation, compare
- config: validator configuration
"""

import texval.backend as backend
import texval.validation as validation
from texval.backend import BackendType, DeviceCapabilities, HostDevice, TextureRangeDesc
from texval.config import ValidatorConfig
from texval.errors import (
    FramebufferCreationError,
    PixelMismatchError,
    RegionPreconditionError,
    SubmissionError,
    TextureValidationError,
)
from texval.validation import (
    ComparisonResult,
    PixelMismatch,
    TextureValidator,
    validate_framebuffer_texture,
    validate_framebuffer_texture_range,
    validate_texture_range,
    validate_uploaded_texture,
    validate_uploaded_texture_range,
)

__version__ = "0.1.0"

__all__ = [
    "BackendType",
    "DeviceCapabilities",
    "HostDevice",
    "TextureRangeDesc",
    "ValidatorConfig",
    "TextureValidator",
    "ComparisonResult",
    "PixelMismatch",
    "validate_texture_range",
    "validate_framebuffer_texture_range",
    "validate_framebuffer_texture",
    "validate_uploaded_texture_range",
    "validate_uploaded_texture",
    "TextureValidationError",
    "SubmissionError",
    "FramebufferCreationError",
    "RegionPreconditionError",
    "PixelMismatchError",
    # Submodules
    "backend",
    "validation",
]

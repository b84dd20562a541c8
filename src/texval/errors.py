"""
Exceptions raised by the texture validation pipeline.

Collaborator failures (command buffer or framebuffer creation) and
malformed ranges are fatal. Pixel mismatches are collected first and only
raised once the whole buffer has been compared.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .backend.base import Result
    from .validation.compare import ComparisonResult


class TextureValidationError(Exception):
    """Base class for all texval errors."""


class SubmissionError(TextureValidationError):
    """The synchronization command buffer could not be created."""

    def __init__(self, message: str, result: Result | None = None):
        super().__init__(message)
        self.result = result


class FramebufferCreationError(TextureValidationError):
    """The ephemeral read-back framebuffer could not be created."""

    def __init__(self, message: str, result: Result | None = None):
        super().__init__(message)
        self.result = result


class RegionPreconditionError(TextureValidationError, AssertionError):
    """A range or expected buffer that cannot describe a single 2D slice."""


class PixelMismatchError(TextureValidationError, AssertionError):
    """Raised after comparison when at least one pixel differs."""

    def __init__(self, comparison: ComparisonResult, limit: int | None = None):
        super().__init__(comparison.format_report(limit=limit))
        self.comparison = comparison

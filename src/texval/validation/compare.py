"""
Exact comparison of packed 32-bit pixels.

Every index is checked. A comparison never stops at the first difference, so
a failing result lists all divergent pixels, which is what distinguishes a
flipped quadrant from a single bad texel.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from ..errors import PixelMismatchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PixelMismatch:
    """One pixel whose actual value differs from the expected one."""

    index: int
    expected: int
    actual: int

    def describe(self, message: str = "") -> str:
        prefix = f"{message}: " if message else ""
        return (
            f"{prefix}Mismatch at index {self.index}: "
            f"Expected: {self.expected:x} Actual: {self.actual:x}"
        )


@dataclass
class ComparisonResult:
    """All mismatches found between two pixel buffers."""

    message: str
    num_pixels: int
    mismatches: list[PixelMismatch] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.mismatches

    @property
    def num_mismatches(self) -> int:
        return len(self.mismatches)

    def __bool__(self) -> bool:
        return self.passed

    def mismatched_indices(self) -> list[int]:
        return [m.index for m in self.mismatches]

    def mismatched_rows(self, width: int) -> list[int]:
        """Sorted row numbers containing at least one mismatch."""
        if width <= 0:
            return []
        return sorted({m.index // width for m in self.mismatches})

    def format_report(self, limit: int | None = None) -> str:
        """
        Human-readable report, one line per mismatch.

        Args:
            limit: Maximum number of mismatch lines; None prints all of them
        """
        if self.passed:
            return f"{self.message}: all {self.num_pixels} pixels match"
        shown = self.mismatches if limit is None else self.mismatches[:limit]
        lines = [
            f"{self.message}: {self.num_mismatches} of {self.num_pixels} pixels differ",
            *(m.describe(self.message) for m in shown),
        ]
        hidden = self.num_mismatches - len(shown)
        if hidden > 0:
            lines.append(f"... {hidden} more mismatches not shown")
        return "\n".join(lines)

    def raise_for_mismatches(self, limit: int | None = None) -> None:
        if not self.passed:
            raise PixelMismatchError(self, limit=limit)


def _as_pixels(values, name: str) -> np.ndarray:
    pixels = np.asarray(values)
    if pixels.dtype != np.uint32:
        if pixels.size:
            if not np.issubdtype(pixels.dtype, np.integer):
                raise TypeError(f"{name} must hold integer pixel values, got {pixels.dtype}")
            low, high = int(pixels.min()), int(pixels.max())
            if low < 0 or high > 0xFFFFFFFF:
                raise ValueError(
                    f"{name} holds values outside the 32-bit pixel range: min {low}, max {high}"
                )
        pixels = pixels.astype(np.uint32)
    return pixels.reshape(-1)


def compare_pixels(actual, expected, message: str = "") -> ComparisonResult:
    """
    Compare two equal-length pixel buffers element by element.

    Args:
        actual: Normalized read-back pixels
        expected: Reference pixels in the same packed format
        message: Tag prefixed to every reported mismatch

    Returns:
        ComparisonResult listing every differing index in ascending order
    """
    actual = _as_pixels(actual, "actual")
    expected = _as_pixels(expected, "expected")
    if actual.size != expected.size:
        raise ValueError(
            f"Cannot compare {actual.size} actual pixels with {expected.size} expected pixels"
        )

    result = ComparisonResult(message=message, num_pixels=int(actual.size))
    for index in np.flatnonzero(actual != expected):
        result.mismatches.append(
            PixelMismatch(
                index=int(index), expected=int(expected[index]), actual=int(actual[index])
            )
        )

    if not result.passed:
        logger.warning(
            "%s: %d of %d pixels differ", message, result.num_mismatches, result.num_pixels
        )
    return result

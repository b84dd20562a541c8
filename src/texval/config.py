"""
Validator configuration.

Defaults can be overridden per process through environment variables:

    TEXVAL_RAISE_ON_MISMATCH=0          return failing results instead of raising
    TEXVAL_MAX_REPORTED_MISMATCHES=N    lines shown in a failure report (0 = all)
"""

import os
from dataclasses import dataclass

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class ValidatorConfig:
    """Configuration for TextureValidator"""

    raise_on_mismatch: bool = True
    # Only truncates the rendered report; every mismatch is still collected.
    max_reported_mismatches: int | None = 64

    def __post_init__(self):
        """Execute post init."""

        if self.max_reported_mismatches is not None and self.max_reported_mismatches < 0:
            raise ValueError(
                f"max_reported_mismatches must be >= 0, got {self.max_reported_mismatches}"
            )
        if self.max_reported_mismatches == 0:
            self.max_reported_mismatches = None

    @classmethod
    def from_env(cls) -> "ValidatorConfig":
        """Build a config from TEXVAL_* environment variables."""
        raise_on_mismatch = (
            os.getenv("TEXVAL_RAISE_ON_MISMATCH", "1").strip().lower() not in _FALSE_VALUES
        )
        limit = os.getenv("TEXVAL_MAX_REPORTED_MISMATCHES")
        if limit is None or not limit.strip():
            return cls(raise_on_mismatch=raise_on_mismatch)
        try:
            max_reported = int(limit)
        except ValueError:
            raise ValueError(
                f"TEXVAL_MAX_REPORTED_MISMATCHES must be an integer, got {limit!r}"
            ) from None
        return cls(raise_on_mismatch=raise_on_mismatch, max_reported_mismatches=max_reported)

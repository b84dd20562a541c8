"""
TextureValidator - checks GPU texture contents against expected pixels.

Pipeline per call: wait for the queue, read the region back through an
ephemeral framebuffer, undo the backend's read-back flip where the usage
calls for it, then compare every pixel.
"""

import logging

import numpy as np

from ..backend.base import (
    CommandQueue,
    Device,
    Framebuffer,
    Texture,
    TextureRangeDesc,
    resolve_capabilities,
)
from ..config import ValidatorConfig
from ..errors import RegionPreconditionError
from .compare import ComparisonResult, compare_pixels
from .orientation import normalize_orientation
from .readback import check_single_slice, read_texture_range
from .sync import wait_for_queue

logger = logging.getLogger(__name__)


class TextureValidator:
    """
    Validates texture regions of one device.

    Capabilities are resolved once here; the flip decision afterwards only
    looks at the resolved flag.

    Args:
        device: Device the textures were created with
        cmd_queue: Queue used for synchronization and read-back
        config: Validator configuration (defaults from the environment)
    """

    def __init__(
        self, device: Device, cmd_queue: CommandQueue, config: ValidatorConfig | None = None
    ):
        """Initialize the instance."""

        self.device = device
        self.cmd_queue = cmd_queue
        self.config = config if config is not None else ValidatorConfig.from_env()
        self.capabilities = resolve_capabilities(device)

    def validate_texture_range(
        self,
        texture: Texture,
        is_render_target: bool,
        range_desc: TextureRangeDesc,
        expected_data,
        message: str = "",
    ) -> ComparisonResult:
        """
        Read back ``range_desc`` of ``texture`` and compare it with ``expected_data``.

        Args:
            texture: Texture to validate
            is_render_target: True if the texture was the target of a render pass
            range_desc: Region to validate; must be a single 2D slice
            expected_data: ``width * height`` packed pixels, row-major, top-down
            message: Tag for every reported mismatch

        Returns:
            The comparison result. With ``config.raise_on_mismatch`` a failing
            result raises PixelMismatchError instead.
        """
        check_single_slice(range_desc)
        expected = np.asarray(expected_data).reshape(-1)
        if expected.size != range_desc.num_pixels:
            raise RegionPreconditionError(
                f"Expected data holds {expected.size} pixels, range "
                f"{range_desc.width}x{range_desc.height} needs {range_desc.num_pixels}"
            )

        wait_for_queue(self.cmd_queue)
        actual = read_texture_range(self.device, self.cmd_queue, texture, range_desc)
        actual = normalize_orientation(actual, range_desc, self.capabilities, is_render_target)
        result = compare_pixels(actual, expected, message)

        if self.config.raise_on_mismatch:
            result.raise_for_mismatches(limit=self.config.max_reported_mismatches)
        return result

    def validate_framebuffer_texture_range(
        self,
        framebuffer: Framebuffer,
        range_desc: TextureRangeDesc,
        expected_data,
        message: str = "",
    ) -> ComparisonResult:
        """Validate a region of color attachment 0, read as a render target."""
        texture = _color_attachment(framebuffer)
        return self.validate_texture_range(texture, True, range_desc, expected_data, message)

    def validate_framebuffer_texture(
        self, framebuffer: Framebuffer, expected_data, message: str = ""
    ) -> ComparisonResult:
        """Validate the full extent of color attachment 0."""
        texture = _color_attachment(framebuffer)
        return self.validate_framebuffer_texture_range(
            framebuffer, texture.get_full_range(), expected_data, message
        )

    def validate_uploaded_texture_range(
        self,
        texture: Texture,
        range_desc: TextureRangeDesc,
        expected_data,
        message: str = "",
    ) -> ComparisonResult:
        """Validate a region of a texture that was only ever written by upload."""
        return self.validate_texture_range(texture, False, range_desc, expected_data, message)

    def validate_uploaded_texture(
        self, texture: Texture, expected_data, message: str = ""
    ) -> ComparisonResult:
        return self.validate_texture_range(
            texture, False, texture.get_full_range(), expected_data, message
        )


def _color_attachment(framebuffer: Framebuffer) -> Texture:
    texture = framebuffer.get_color_attachment(0)
    if texture is None:
        raise ValueError("Framebuffer has no color attachment at index 0")
    return texture


# ── One-shot helpers ──────────────────────────────────────────────────────


def validate_texture_range(
    device, cmd_queue, texture, is_render_target, range_desc, expected_data, message=""
) -> ComparisonResult:
    return TextureValidator(device, cmd_queue).validate_texture_range(
        texture, is_render_target, range_desc, expected_data, message
    )


def validate_framebuffer_texture_range(
    device, cmd_queue, framebuffer, range_desc, expected_data, message=""
) -> ComparisonResult:
    return TextureValidator(device, cmd_queue).validate_framebuffer_texture_range(
        framebuffer, range_desc, expected_data, message
    )


def validate_framebuffer_texture(
    device, cmd_queue, framebuffer, expected_data, message=""
) -> ComparisonResult:
    return TextureValidator(device, cmd_queue).validate_framebuffer_texture(
        framebuffer, expected_data, message
    )


def validate_uploaded_texture_range(
    device, cmd_queue, texture, range_desc, expected_data, message=""
) -> ComparisonResult:
    return TextureValidator(device, cmd_queue).validate_uploaded_texture_range(
        texture, range_desc, expected_data, message
    )


def validate_uploaded_texture(
    device, cmd_queue, texture, expected_data, message=""
) -> ComparisonResult:
    return TextureValidator(device, cmd_queue).validate_uploaded_texture(
        texture, expected_data, message
    )

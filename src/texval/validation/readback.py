"""
Read-back of a single 2D texture region into host memory.

Any texture, render target or not, is read the same way: it is wrapped in a
throwaway framebuffer as color attachment 0 and copied out through that
framebuffer.
"""

import logging
from contextlib import contextmanager

import numpy as np

from ..backend.base import CommandQueue, Device, FramebufferDesc, Texture, TextureRangeDesc
from ..errors import FramebufferCreationError, RegionPreconditionError

logger = logging.getLogger(__name__)


def check_single_slice(range_desc: TextureRangeDesc) -> None:
    """Reject ranges that span more than one layer, mip level or depth slice."""
    if range_desc.num_layers != 1:
        raise RegionPreconditionError(f"Expected num_layers == 1, got {range_desc.num_layers}")
    if range_desc.num_mip_levels != 1:
        raise RegionPreconditionError(
            f"Expected num_mip_levels == 1, got {range_desc.num_mip_levels}"
        )
    if range_desc.depth != 1:
        raise RegionPreconditionError(f"Expected depth == 1, got {range_desc.depth}")


@contextmanager
def ephemeral_framebuffer(device: Device, texture: Texture):
    """
    Framebuffer whose only color attachment is ``texture``.

    Released when the block exits, including on exceptions.

    Raises:
        FramebufferCreationError: device returned a failing result or no handle
    """
    framebuffer, result = device.create_framebuffer(
        FramebufferDesc(color_attachments={0: texture}, debug_name="texval.readback")
    )
    if not result.is_ok():
        if framebuffer is not None:
            framebuffer.release()
        raise FramebufferCreationError(f"Failed to create read-back framebuffer: {result}", result)
    if framebuffer is None:
        raise FramebufferCreationError("Framebuffer creation returned no handle", result)

    try:
        yield framebuffer
    finally:
        framebuffer.release()
        logger.debug("Released read-back framebuffer")


def read_texture_range(
    device: Device, cmd_queue: CommandQueue, texture: Texture, range_desc: TextureRangeDesc
) -> np.ndarray:
    """
    Copy ``range_desc`` of ``texture`` into a new uint32 buffer.

    Rows come back in the order the device returns them; no orientation
    correction is applied here.

    Returns:
        1D array of ``range_desc.width * range_desc.height`` pixels
    """
    check_single_slice(range_desc)

    pixels = np.zeros(range_desc.num_pixels, dtype=np.uint32)
    with ephemeral_framebuffer(device, texture) as framebuffer:
        framebuffer.copy_bytes_color_attachment(cmd_queue, 0, pixels, range_desc)
    return pixels

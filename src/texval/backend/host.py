"""
In-process reference backend.

Implements the collaborator protocols from ``base`` on top of numpy arrays so
the validation pipeline can run without a GPU. It mimics the two behaviours
the validator has to cope with on real devices:

1. Work recorded into a command buffer is deferred. It only lands in texture
   memory once a later command buffer on the same queue has been waited on.
2. On backends in the flipping set, reading a color attachment back returns
   rows bottom-up. Render passes store their output in that native
   orientation, so render targets read back top-down while uploaded textures
   read back flipped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import numpy as np

from .base import (
    BackendType,
    CommandBufferDesc,
    DeviceCapabilities,
    FramebufferDesc,
    Result,
    ResultCode,
    TextureRangeDesc,
)

logger = logging.getLogger(__name__)


class HostTexture:
    """Single-layer, single-mip 2D texture of packed 32-bit pixels."""

    def __init__(self, device: HostDevice, width: int, height: int):
        """Initialize the instance."""

        if width < 0 or height < 0:
            raise ValueError(f"Texture extent must be non-negative, got {width}x{height}")
        self.device = device
        self.width = width
        self.height = height
        # Row 0 is the first row in device memory.
        self.storage = np.zeros((height, width), dtype=np.uint32)
        self.rendered = False

    def get_full_range(self, mip_level: int = 0) -> TextureRangeDesc:
        return TextureRangeDesc.new_2d(0, 0, self.width, self.height, mip_level=mip_level)

    def _check_region(self, range_desc: TextureRangeDesc) -> Result:
        if not range_desc.is_single_slice or range_desc.mip_level != 0 or range_desc.layer != 0:
            return Result(ResultCode.UNSUPPORTED, "host textures have one layer and one mip")
        if (
            range_desc.x < 0
            or range_desc.y < 0
            or range_desc.x + range_desc.width > self.width
            or range_desc.y + range_desc.height > self.height
        ):
            return Result(
                ResultCode.ARGUMENT_OUT_OF_RANGE,
                f"range {range_desc} exceeds {self.width}x{self.height}",
            )
        return Result()

    def upload(self, range_desc: TextureRangeDesc, data) -> Result:
        """Write ``data`` into the region top-down, bypassing the command queue."""
        result = self._check_region(range_desc)
        if not result.is_ok():
            return result
        pixels = np.asarray(data, dtype=np.uint32)
        if pixels.size != range_desc.num_pixels:
            return Result(
                ResultCode.ARGUMENT_INVALID,
                f"expected {range_desc.num_pixels} pixels, got {pixels.size}",
            )
        rows = pixels.reshape(range_desc.height, range_desc.width)
        y, x = range_desc.y, range_desc.x
        self.storage[y : y + range_desc.height, x : x + range_desc.width] = rows
        return Result()

    def _store_rendered(self, pixels: np.ndarray) -> None:
        image = np.asarray(pixels, dtype=np.uint32).reshape(self.height, self.width)
        if self.device.capabilities.flips_color_readback_on_upload:
            image = image[::-1]
        self.storage[...] = image
        self.rendered = True


class HostCommandBuffer:
    """Records deferred work; executed by the owning queue."""

    def __init__(self, queue: HostCommandQueue, desc: CommandBufferDesc):
        """Initialize the instance."""

        self.queue = queue
        self.desc = desc
        self.commands: list[Callable[[], None]] = []
        self.submitted = False
        self.completed = False

    def render(self, texture: HostTexture, pixels) -> None:
        """
        Record a render pass that fills ``texture`` with ``pixels``.

        ``pixels`` is given top-down, the way the rendered image is expected
        to read back.
        """
        pixels = np.array(pixels, dtype=np.uint32).reshape(-1)
        if pixels.size != texture.width * texture.height:
            raise ValueError(
                f"Render target is {texture.width}x{texture.height}, got {pixels.size} pixels"
            )
        self.commands.append(lambda: texture._store_rendered(pixels))

    def execute(self) -> None:
        for command in self.commands:
            command()
        self.completed = True

    def wait_until_completed(self) -> None:
        if not self.submitted:
            raise RuntimeError("Command buffer was never submitted")
        self.queue._drain_through(self)


class HostCommandQueue:
    """In-order queue. Submissions run when a later wait reaches them."""

    def __init__(self, device: HostDevice):
        """Initialize the instance."""

        self.device = device
        self.pending: list[HostCommandBuffer] = []
        self.num_submissions = 0

    def create_command_buffer(
        self, desc: CommandBufferDesc | None = None
    ) -> tuple[HostCommandBuffer | None, Result]:
        return HostCommandBuffer(self, desc or CommandBufferDesc()), Result()

    def submit(self, command_buffer: HostCommandBuffer) -> None:
        if command_buffer.queue is not self:
            raise RuntimeError("Command buffer belongs to a different queue")
        if command_buffer.submitted:
            raise RuntimeError("Command buffer already submitted")
        command_buffer.submitted = True
        self.pending.append(command_buffer)
        self.num_submissions += 1

    def _drain_through(self, command_buffer: HostCommandBuffer) -> None:
        while not command_buffer.completed:
            self.pending.pop(0).execute()


class HostFramebuffer:
    """Framebuffer with color attachments only."""

    def __init__(self, device: HostDevice, desc: FramebufferDesc):
        """Initialize the instance."""

        self.device = device
        self.color_attachments = dict(desc.color_attachments)
        self.released = False

    def get_color_attachment(self, index: int) -> HostTexture | None:
        return self.color_attachments.get(index)

    def copy_bytes_color_attachment(
        self,
        cmd_queue: HostCommandQueue,
        index: int,
        destination: np.ndarray,
        range_desc: TextureRangeDesc,
    ) -> None:
        """
        Copy ``range_desc`` of attachment ``index`` into ``destination``.

        Offsets address device memory rows. On flipping backends the rows of
        the region come back in reverse order.
        """
        if self.released:
            raise RuntimeError("Framebuffer used after release")
        texture = self.get_color_attachment(index)
        if texture is None:
            raise ValueError(f"No color attachment at index {index}")
        result = texture._check_region(range_desc)
        if not result.is_ok():
            raise ValueError(str(result))
        if destination.size < range_desc.num_pixels:
            raise ValueError(
                f"Destination holds {destination.size} pixels, need {range_desc.num_pixels}"
            )

        y, x = range_desc.y, range_desc.x
        region = texture.storage[y : y + range_desc.height, x : x + range_desc.width]
        if self.device.capabilities.flips_color_readback_on_upload:
            region = region[::-1]
        destination[: range_desc.num_pixels] = region.reshape(-1)

    def release(self) -> None:
        if not self.released:
            self.released = True
            self.device.live_framebuffers -= 1


class HostDevice:
    """
    Reference device for a given backend type.

    Args:
        backend_type: Backend this device pretends to be
        flips_color_readback_on_upload: Override for the read-back flip
            capability; None derives it from the backend type
    """

    def __init__(
        self,
        backend_type: BackendType = BackendType.OPENGL,
        flips_color_readback_on_upload: bool | None = None,
    ):
        """Initialize the instance."""

        self.backend_type = backend_type
        self.capabilities = DeviceCapabilities.for_backend(
            backend_type, flips_color_readback_on_upload
        )
        self.live_framebuffers = 0

    def get_backend_type(self) -> BackendType:
        return self.backend_type

    def create_texture(self, width: int, height: int) -> HostTexture:
        return HostTexture(self, width, height)

    def create_command_queue(self) -> HostCommandQueue:
        return HostCommandQueue(self)

    def create_framebuffer(self, desc: FramebufferDesc) -> tuple[HostFramebuffer | None, Result]:
        if not desc.color_attachments:
            return None, Result(ResultCode.ARGUMENT_INVALID, "framebuffer needs an attachment")
        for index, texture in desc.color_attachments.items():
            if not isinstance(texture, HostTexture) or texture.device is not self:
                return None, Result(
                    ResultCode.ARGUMENT_INVALID,
                    f"color attachment {index} was not created by this device",
                )
        self.live_framebuffers += 1
        logger.debug("Created framebuffer (%d live)", self.live_framebuffers)
        return HostFramebuffer(self, desc), Result()

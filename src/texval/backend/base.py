"""
Base types and collaborator contracts for the graphics device abstraction.

texval does not create textures or render anything itself. It only needs a
handful of calls from the device layer, described here as protocols, plus
the range/result value types those calls exchange.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

import numpy as np

logger = logging.getLogger(__name__)


class BackendType(Enum):
    """Rendering backend that produced a texture."""

    OPENGL = "opengl"
    METAL = "metal"
    VULKAN = "vulkan"
    CUSTOM = "custom"


# Backends whose copy_bytes_color_attachment returns rows bottom-up relative
# to the order textures were uploaded in.
FLIPPING_BACKENDS = frozenset({BackendType.METAL, BackendType.VULKAN})


class ResultCode(Enum):
    OK = "ok"
    ARGUMENT_INVALID = "argument_invalid"
    ARGUMENT_OUT_OF_RANGE = "argument_out_of_range"
    INVALID_OPERATION = "invalid_operation"
    UNSUPPORTED = "unsupported"
    UNIMPLEMENTED = "unimplemented"
    RUNTIME_ERROR = "runtime_error"


@dataclass(frozen=True)
class Result:
    """Status returned alongside every handle created by a device."""

    code: ResultCode = ResultCode.OK
    message: str = ""

    def is_ok(self) -> bool:
        return self.code is ResultCode.OK

    def __str__(self) -> str:
        if self.message:
            return f"{self.code.value}: {self.message}"
        return self.code.value


@dataclass(frozen=True)
class TextureRangeDesc:
    """Sub-region of a texture: offsets plus extents in every dimension."""

    x: int = 0
    y: int = 0
    z: int = 0
    width: int = 1
    height: int = 1
    depth: int = 1
    layer: int = 0
    num_layers: int = 1
    mip_level: int = 0
    num_mip_levels: int = 1

    @classmethod
    def new_2d(cls, x: int, y: int, width: int, height: int, mip_level: int = 0):
        """Range covering a single 2D slice."""
        return cls(x=x, y=y, width=width, height=height, mip_level=mip_level)

    @property
    def is_single_slice(self) -> bool:
        return self.depth == 1 and self.num_layers == 1 and self.num_mip_levels == 1

    @property
    def num_pixels(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class DeviceCapabilities:
    """
    Per-device facts the validator depends on.

    Resolved once from the backend type so the orientation logic only ever
    sees a boolean, never the backend enumeration.
    """

    backend_type: BackendType
    flips_color_readback_on_upload: bool

    @classmethod
    def for_backend(
        cls, backend_type: BackendType, flips_color_readback_on_upload: bool | None = None
    ) -> DeviceCapabilities:
        """
        Build capabilities for a backend.

        Args:
            backend_type: Backend reported by the device
            flips_color_readback_on_upload: Explicit override; None uses
                membership in FLIPPING_BACKENDS
        """
        if flips_color_readback_on_upload is None:
            flips_color_readback_on_upload = backend_type in FLIPPING_BACKENDS
        return cls(
            backend_type=backend_type,
            flips_color_readback_on_upload=bool(flips_color_readback_on_upload),
        )


@dataclass
class CommandBufferDesc:
    debug_name: str = ""


@dataclass
class FramebufferDesc:
    """Attachments for a framebuffer, keyed by color attachment index."""

    color_attachments: dict[int, Any] = field(default_factory=dict)
    debug_name: str = ""


# ── Collaborator protocols ────────────────────────────────────────────────


class Texture(Protocol):
    def get_full_range(self, mip_level: int = 0) -> TextureRangeDesc: ...


class CommandBuffer(Protocol):
    def wait_until_completed(self) -> None: ...


class CommandQueue(Protocol):
    def create_command_buffer(
        self, desc: CommandBufferDesc
    ) -> tuple[CommandBuffer | None, Result]: ...

    def submit(self, command_buffer: CommandBuffer) -> None: ...


class Framebuffer(Protocol):
    def get_color_attachment(self, index: int) -> Texture | None: ...

    def copy_bytes_color_attachment(
        self,
        cmd_queue: CommandQueue,
        index: int,
        destination: np.ndarray,
        range_desc: TextureRangeDesc,
    ) -> None: ...

    def release(self) -> None: ...


class Device(Protocol):
    def get_backend_type(self) -> BackendType: ...

    def create_framebuffer(self, desc: FramebufferDesc) -> tuple[Framebuffer | None, Result]: ...


def resolve_capabilities(device: Device) -> DeviceCapabilities:
    """Capabilities computed by the device if it has them, else derived from its backend."""
    caps = getattr(device, "capabilities", None)
    if isinstance(caps, DeviceCapabilities):
        return caps
    caps = DeviceCapabilities.for_backend(device.get_backend_type())
    logger.debug(
        "Resolved capabilities for %s: flips_color_readback_on_upload=%s",
        caps.backend_type.value,
        caps.flips_color_readback_on_upload,
    )
    return caps

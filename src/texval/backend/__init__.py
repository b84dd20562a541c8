"""
Graphics device contracts used by the validator, plus an in-process
reference backend for running the pipeline without a GPU.
"""

from .base import (
    FLIPPING_BACKENDS,
    BackendType,
    CommandBufferDesc,
    DeviceCapabilities,
    FramebufferDesc,
    Result,
    ResultCode,
    TextureRangeDesc,
    resolve_capabilities,
)
from .host import HostCommandBuffer, HostCommandQueue, HostDevice, HostFramebuffer, HostTexture

__all__ = [
    "FLIPPING_BACKENDS",
    "BackendType",
    "CommandBufferDesc",
    "DeviceCapabilities",
    "FramebufferDesc",
    "Result",
    "ResultCode",
    "TextureRangeDesc",
    "resolve_capabilities",
    "HostDevice",
    "HostTexture",
    "HostFramebuffer",
    "HostCommandQueue",
    "HostCommandBuffer",
]

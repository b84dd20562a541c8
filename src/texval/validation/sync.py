"""
Queue synchronization before read-back.
"""

import logging

from ..backend.base import CommandBufferDesc, CommandQueue
from ..errors import SubmissionError

logger = logging.getLogger(__name__)


def wait_for_queue(cmd_queue: CommandQueue) -> None:
    """
    Submit an empty command buffer and block until it completes.

    Queues execute in order, so once the empty buffer is done every command
    submitted before it has finished writing its textures.

    Raises:
        SubmissionError: command buffer creation failed or returned no handle
    """
    cmd_buf, result = cmd_queue.create_command_buffer(
        CommandBufferDesc(debug_name="texval.wait_for_queue")
    )
    if not result.is_ok():
        raise SubmissionError(f"Failed to create command buffer: {result}", result)
    if cmd_buf is None:
        raise SubmissionError("Command buffer creation returned no handle", result)

    cmd_queue.submit(cmd_buf)
    logger.debug("Waiting on synchronization command buffer")
    cmd_buf.wait_until_completed()

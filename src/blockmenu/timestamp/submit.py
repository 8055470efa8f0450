"""Commit of the timestamp session into the right block."""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from .. import scheduling
from ..core.ports import CommandState, EditingContext, EditorOperations
from .session import TimestampController

logger = logging.getLogger(__name__)


class SubmitCoordinator:
    def __init__(
        self,
        controller: TimestampController,
        editor: EditorOperations,
        editing: EditingContext,
        commands: CommandState,
    ):
        self.controller = controller
        self.editor = editor
        self.editing = editing
        self.commands = commands

    def submit(
        self,
        show: Callable[[bool], None] | None = None,
        today: date | None = None,
    ) -> str:
        """
        Write the session's timestamp into its block and close the session.
        
        The editing buffer is rewritten when the target is the block under
        direct editing; any other block gets the timestamp out-of-band.
        Returns the serialized timestamp.
        """
        session = self.controller.require_open()
        value = scheduling.finalize(session.timestamp, today=today)
        text = scheduling.serialize(value)

        target = session.target
        editing_id = self.editing.editing_block_id()
        block_id = (target.block_id if target else None) or editing_id
        command = self.commands.current_command or (target.command if target else None)
        if command is None:
            raise ValueError("No scheduling command for timestamp submit")
        command = command.lower()

        try:
            if editing_id is not None and editing_id == block_id:
                buffer = self.editing.get_buffer()
                self.editing.set_buffer(
                    scheduling.replace_timestamp_marker(buffer, command, text)
                )
                logger.info("Set %s %s on editing block %s", command, text, block_id)
            elif block_id is not None:
                self.editor.set_block_timestamp(block_id, command, text)
                logger.info("Set %s %s on block %s", command, text, block_id)
            else:
                logger.warning("Timestamp submit without a target block; dropped %s", text)

            if show is not None:
                show(False)
        finally:
            self.controller.reset()
            self.commands.restore_state()
        return text

"""Date/time picker opened from the scheduling commands or the date command."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable

from ..core import refs
from ..core.model import COMMANDS, TemporalValue, TimestampTarget
from .. import scheduling
from ..core.ports import BlockStore, CommandState, EditingContext, EditorOperations
from ..core.utils import journal_title
from .session import TimestampController, TimestampSession
from .submit import SubmitCoordinator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PickerView:
    """What the picker shows for the current session."""
    date: date | None
    time_repeater: bool  # the Time/Repeater/Submit panel
    time: str | None = None
    time_visible: bool = False
    repeater: dict[str, Any] | None = None
    repeater_visible: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat() if self.date else None,
            "time_repeater": self.time_repeater,
            "time": self.time,
            "time_visible": self.time_visible,
            "repeater": self.repeater,
            "repeater_visible": self.repeater_visible,
        }


class DatePicker:
    def __init__(
        self,
        controller: TimestampController,
        coordinator: SubmitCoordinator,
        editor: EditorOperations,
        commands: CommandState,
        journal_format: str = "MMM do, yyyy",
        store: BlockStore | None = None,
        editing: EditingContext | None = None,
    ):
        self.controller = controller
        self.coordinator = coordinator
        self.editor = editor
        self.commands = commands
        self.journal_format = journal_format
        self.store = store
        self.editing = editing

    @property
    def deadline_or_schedule(self) -> bool:
        command = self.commands.current_command
        return bool(command) and command.lower() in COMMANDS

    def open_timestamp_editor(
        self,
        block_id: str | None,
        command: str,
        existing: TemporalValue | None = None,
        today: date | None = None,
    ) -> TimestampSession:
        """
        Start a session for a block (None: the block being edited).

        Without ``existing`` the session starts from the block's current
        timestamp line for the command, if it has one.
        """
        target = TimestampTarget(command=command.lower(), block_id=block_id)
        if existing is None and target.command in COMMANDS:
            existing = self._current_timestamp(target)
        return self.controller.open(target, existing=existing, today=today)

    def _current_timestamp(self, target: TimestampTarget) -> TemporalValue | None:
        editing_id = self.editing.editing_block_id() if self.editing else None
        block_id = target.block_id or editing_id
        if block_id is not None and block_id == editing_id:
            content = self.editing.get_buffer()
        else:
            block = self.store.get(block_id) if self.store and block_id else None
            if block is None:
                return None
            content = block.content
        value = scheduling.find_timestamp(content, target.command)
        if value is not None:
            logger.debug("Seeding %s session from %s", target.command, scheduling.serialize(value))
        return value

    def pick_date(self, day: date) -> str | None:
        """
        Calendar selection.
        
        For deadline/scheduled the session date changes and editing goes on.
        Otherwise a reference to the journal page of that date is inserted at
        the cursor and the session ends; the page reference text is returned.
        """
        if self.deadline_or_schedule:
            self.controller.set_date(day)
            return None
        text = refs.page_ref(journal_title(day, self.journal_format))
        self.editor.insert_at_cursor(text, "page-ref")
        self.commands.clear_editor_action()
        self.commands.current_command = None
        self.controller.reset()
        logger.debug("Inserted journal reference %s", text)
        return text

    def submit(self, show: Callable[[bool], None] | None = None, today: date | None = None) -> str:
        return self.coordinator.submit(show=show, today=today)

    def cancel(self) -> None:
        self.controller.cancel()

    def render(self) -> PickerView:
        session = self.controller.session
        if not self.deadline_or_schedule:
            return PickerView(date=session.date, time_repeater=False)
        rep = session.timestamp.repeater
        return PickerView(
            date=session.date,
            time_repeater=True,
            time=session.timestamp.time,
            time_visible=session.time_visible,
            repeater={"num": rep.num, "duration": rep.duration, "kind": rep.kind},
            repeater_visible=session.repeater_visible,
        )

"""In-process UI state: selection, editing buffer, command, notifications, menu host."""

import io
import logging
from typing import Any

import yaml

from ..core.model import BlockId
from ..core.ports import (
    BlockStore,
    CommandState,
    ContextMenuHost,
    DevTools,
    EditingContext,
    Notifier,
    SelectionContext,
)

logger = logging.getLogger(__name__)


class MemorySelection(SelectionContext):
    def __init__(self, ids: list[BlockId] | None = None):
        self.ids: list[BlockId] = list(ids or [])
        self.direction: str | None = None

    def selected_ids(self) -> list[BlockId]:
        return list(self.ids)

    def clear(self) -> None:
        self.ids.clear()
        self.direction = None

    def add(self, id: BlockId, direction: str = "down") -> None:
        if id not in self.ids:
            self.ids.append(id)
        self.direction = direction


class MemoryEditing(EditingContext):
    def __init__(self, block_id: BlockId | None = None, buffer: str = ""):
        self.block_id = block_id
        self.buffer = buffer

    def start(self, block_id: BlockId, buffer: str) -> None:
        self.block_id = block_id
        self.buffer = buffer

    def stop(self) -> None:
        self.block_id = None
        self.buffer = ""

    def editing_block_id(self) -> BlockId | None:
        return self.block_id

    def get_buffer(self) -> str:
        return self.buffer

    def set_buffer(self, text: str) -> None:
        self.buffer = text


class MemoryCommandState(CommandState):
    def __init__(self, current_command: str | None = None):
        self.current_command = current_command
        self.editor_action: str | None = None

    def begin(self, command: str, action: str = "date-picker") -> None:
        self.current_command = command
        self.editor_action = action

    def clear_editor_action(self) -> None:
        self.editor_action = None

    def restore_state(self) -> None:
        self.current_command = None
        self.editor_action = None


class RecordingNotifier(Notifier):
    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def show(self, message: str, status: str = "success") -> None:
        log = logger.warning if status == "error" else logger.info
        log("Notification (%s): %s", status, message)
        self.messages.append((message, status))


class MenuHost(ContextMenuHost):
    """Holds the currently shown context menu."""

    def __init__(self) -> None:
        self.menu: Any = None
        self.position: tuple[int, int] | None = None

    @property
    def visible(self) -> bool:
        return self.menu is not None

    def show(self, event: Any, menu: Any) -> None:
        self.menu = menu
        self.position = (getattr(event, "x", 0), getattr(event, "y", 0))

    def hide(self) -> None:
        self.menu = None
        self.position = None


class YamlDevTools(DevTools):
    """Developer views rendered as YAML into ``output``."""

    def __init__(self, store: BlockStore, output: io.TextIOBase | None = None):
        self.store = store
        self.output = output or io.StringIO()

    def show_entity_data(self, id: BlockId) -> None:
        block = self.store.get(id)
        data: dict[str, Any] = {"block/uuid": id}
        if block is not None:
            data.update({
                "block/content": block.content,
                "block/format": block.format,
                "block/properties": dict(block.properties),
                "block/children": list(block.children),
                "block/page": block.page,
            })
        yaml.safe_dump(data, self.output, sort_keys=False, allow_unicode=True)

    def show_content_ast(self, content: str, format: str) -> None:
        ast = [{"line": i, "text": line} for i, line in enumerate(content.split("\n"), 1)]
        yaml.safe_dump({"format": format, "lines": ast}, self.output, sort_keys=False, allow_unicode=True)

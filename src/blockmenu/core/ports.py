from typing import Protocol, Any, Iterable, Sequence
from .model import Block, BlockId, PluginCommand


class EditorOperations(Protocol):
    """
    Mutations on block content. Every method taking ``ids`` must be a no-op
    for an empty sequence.
    """

    def cut_blocks(self, ids: Sequence[BlockId]) -> None:
        pass

    def copy_blocks(self, ids: Sequence[BlockId]) -> None:
        pass

    def delete_blocks(self, ids: Sequence[BlockId]) -> None:
        pass

    def export_blocks(self, ids: Sequence[BlockId]) -> None:
        pass

    def copy_block_ref(self, id: BlockId, text: str) -> None:
        pass

    def copy_block_refs(self, ids: Sequence[BlockId], style: str) -> None:
        pass

    def set_property(self, ids: Sequence[BlockId], key: str, value: Any) -> None:
        pass

    def remove_property(self, ids: Sequence[BlockId], key: str) -> None:
        pass

    def set_heading(self, ids: Sequence[BlockId], heading: int | bool) -> None:
        pass

    def remove_heading(self, ids: Sequence[BlockId]) -> None:
        pass

    def cycle_todos(self, ids: Sequence[BlockId]) -> None:
        pass

    def expand_all(self, ids: Sequence[BlockId]) -> None:
        pass

    def collapse_all(self, ids: Sequence[BlockId]) -> None:
        pass

    def open_in_sidebar(self, id: BlockId, kind: str = "block") -> None:
        pass

    def copy_ref(self, ref_id: BlockId) -> None:
        pass

    def delete_ref(self, owner: BlockId, ref_id: BlockId) -> None:
        pass

    def replace_ref_with_text(self, owner: BlockId, ref_id: BlockId) -> None:
        pass

    def replace_ref_with_embed(self, owner: BlockId, ref_id: BlockId) -> None:
        pass

    def set_block_timestamp(self, id: BlockId, command: str, text: str) -> None:
        pass

    def insert_at_cursor(self, text: str, command: str) -> None:
        pass


class BlockStore(Protocol):
    """
    Read side of the block graph. Persistence and querying live elsewhere.
    """

    def get(self, id: BlockId) -> Block | None:
        pass

    def template_exists(self, name: str) -> bool:
        pass


class SelectionContext(Protocol):
    def selected_ids(self) -> list[BlockId]:
        pass

    def clear(self) -> None:
        pass

    def add(self, id: BlockId, direction: str = "down") -> None:
        pass


class EditingContext(Protocol):
    """
    The block under direct text editing, if any, and its in-progress buffer.
    """

    def editing_block_id(self) -> BlockId | None:
        pass

    def get_buffer(self) -> str:
        pass

    def set_buffer(self, text: str) -> None:
        pass


class CommandState(Protocol):
    """
    Which slash/scheduling command invoked the current editor action.
    """

    current_command: str | None

    def clear_editor_action(self) -> None:
        pass

    def restore_state(self) -> None:
        pass


class FeatureFlags(Protocol):
    def flashcards_enabled(self) -> bool:
        pass

    def developer_mode(self) -> bool:
        pass

    def desktop_runtime(self) -> bool:
        pass


class Flashcards(Protocol):
    def is_card(self, block: Block) -> bool:
        pass

    def preview(self, id: BlockId) -> None:
        pass

    def make_cards(self, ids: Sequence[BlockId]) -> None:
        pass


class PluginRegistry(Protocol):
    """
    Commands contributed by plugins, keyed by menu extension point.
    """

    def commands(self, extension_point: str) -> list[PluginCommand]:
        pass

    def execute(self, command: PluginCommand, payload: dict[str, Any]) -> None:
        pass


class PageMenuProvider(Protocol):
    def page_menu(self, page: str) -> Iterable[dict[str, Any]]:
        pass


class Notifier(Protocol):
    def show(self, message: str, status: str = "success") -> None:
        pass


class ContextMenuHost(Protocol):
    def show(self, event: Any, menu: Any) -> None:
        pass

    def hide(self) -> None:
        pass


class DevTools(Protocol):
    def show_entity_data(self, id: BlockId) -> None:
        pass

    def show_content_ast(self, content: str, format: str) -> None:
        pass


class ShortcutLookup(Protocol):
    def shortcut_for(self, action_id: str) -> str | None:
        pass

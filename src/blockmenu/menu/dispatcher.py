"""Contextual action sets for each kind of resolved target."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..core import refs
from ..core.model import (
    BlockId,
    BlockReference,
    ContextMenuEvent,
    MultiBlockSelection,
    PageTitle,
    ResolvedTarget,
    SingleBlock,
)
from ..core.ports import (
    BlockStore,
    ContextMenuHost,
    DevTools,
    EditorOperations,
    FeatureFlags,
    Flashcards,
    Notifier,
    PageMenuProvider,
    PluginRegistry,
    ShortcutLookup,
)
from .model import Entry, Menu, MenuGroup, MenuItem, Separator, visible
from .resolver import TargetResolver
from .widgets import BACKGROUND_COLOR, ColorPicker, HeadingPicker, TemplateForm

logger = logging.getLogger(__name__)

BLOCK_MENU_EXTENSION = "block-context-menu-item"
OPEN_IN_SIDEBAR_SHORTCUT = "shift+click"


@dataclass
class MenuServices:
    """Collaborators the menus call into."""
    editor: EditorOperations
    store: BlockStore
    flags: FeatureFlags
    flashcards: Flashcards
    plugins: PluginRegistry
    page_menu: PageMenuProvider
    notifier: Notifier
    host: ContextMenuHost
    devtools: DevTools
    shortcuts: ShortcutLookup
    colors: tuple[str, ...] = ("yellow", "red", "pink", "green", "blue", "purple", "gray")
    heading_levels: int = 6
    graph: str = "default"


class MenuDispatcher:
    def __init__(self, resolver: TargetResolver, services: MenuServices):
        self.resolver = resolver
        self.services = services

    def resolve_and_dispatch(self, event: ContextMenuEvent) -> Menu | None:
        """
        Entry point for the global context-menu event.
        
        Returns the menu shown, or None when the event is left to the native
        context menu.
        """
        target = self.resolver.resolve(event)
        if target is None:
            return None
        menu = self.build_menu(target)
        event.prevent_default()
        self.services.host.show(event, menu)
        return menu

    def build_menu(self, target: ResolvedTarget) -> Menu:
        if isinstance(target, PageTitle):
            entries = self._page_title_entries(target)
        elif isinstance(target, BlockReference):
            entries = self._block_ref_entries(target)
        elif isinstance(target, MultiBlockSelection):
            entries = self._selection_entries(target)
        elif isinstance(target, SingleBlock):
            entries = self._block_entries(target)
        else:
            raise TypeError(f"Unknown menu target: {target!r}")
        return Menu(target=target, entries=visible(entries))

    def _item(
        self,
        key: str,
        label: str,
        handler: Any,
        shortcut_id: str | None = None,
        shortcut: str | None = None,
        visible_if: Any = None,
    ) -> MenuItem:
        if shortcut is None and shortcut_id:
            shortcut = self.services.shortcuts.shortcut_for(shortcut_id)
        return MenuItem(key=key, label=label, handler=handler, shortcut=shortcut, visible_if=visible_if)

    def _pickers(self, ids: tuple[BlockId, ...]) -> list[Entry]:
        s = self.services
        first = s.store.get(ids[0]) if ids else None
        props = first.properties if first else {}
        return [
            ColorPicker(
                ids=ids,
                editor=s.editor,
                colors=tuple(s.colors),
                current=props.get(BACKGROUND_COLOR),
            ),
            HeadingPicker(
                ids=ids,
                editor=s.editor,
                levels=s.heading_levels,
                current=props.get("heading", False),
            ),
        ]

    def _selection_entries(self, target: MultiBlockSelection) -> list[Entry]:
        s = self.services
        ids = list(target.block_ids)

        def delete() -> None:
            s.editor.delete_blocks(ids)
            s.host.hide()

        return [
            *self._pickers(target.block_ids),
            Separator(),
            self._item("cut", "editor/cut", lambda: s.editor.cut_blocks(ids), "editor/cut"),
            self._item("delete", "editor/delete-selection", delete, "editor/delete"),
            self._item("copy", "editor/copy", lambda: s.editor.copy_blocks(ids), "editor/copy"),
            self._item("copy-as", "content/copy-export-as", lambda: s.editor.export_blocks(ids)),
            self._item(
                "copy-block-refs", "content/copy-block-ref",
                lambda: s.editor.copy_block_refs(ids, "ref"),
            ),
            self._item(
                "copy-block-embeds", "content/copy-block-emebed",
                lambda: s.editor.copy_block_refs(ids, "embed"),
            ),
            Separator(),
            self._item(
                "make-flashcard", "context-menu/make-a-flashcard",
                lambda: s.flashcards.make_cards(ids),
                visible_if=s.flags.flashcards_enabled,
            ),
            self._item(
                "cycle-todos", "editor/cycle-todo",
                lambda: s.editor.cycle_todos(ids), "editor/cycle-todo",
            ),
            Separator(),
            self._item(
                "expand-all", "editor/expand-block-children",
                lambda: s.editor.expand_all(ids), "editor/expand-block-children",
            ),
            self._item(
                "collapse-all", "editor/collapse-block-children",
                lambda: s.editor.collapse_all(ids), "editor/collapse-block-children",
            ),
        ]

    def _block_entries(self, target: SingleBlock) -> list[Entry]:
        s = self.services
        bid = target.block_id
        block = s.store.get(bid)
        is_card = block is not None and s.flashcards.is_card(block)

        entries: list[Entry] = [
            *self._pickers((bid,)),
            Separator(),
            self._item(
                "open-in-sidebar", "content/open-in-sidebar",
                lambda: s.editor.open_in_sidebar(bid), shortcut=OPEN_IN_SIDEBAR_SHORTCUT,
            ),
            Separator(),
            self._item(
                "copy-block-ref", "content/copy-block-ref",
                lambda: s.editor.copy_block_ref(bid, refs.block_ref(bid)),
            ),
            self._item(
                "copy-block-embed", "content/copy-block-emebed",
                lambda: s.editor.copy_block_ref(bid, refs.block_embed(bid)),
            ),
            self._item(
                "copy-block-url", "content/copy-block-url",
                lambda: s.editor.copy_block_ref(bid, refs.block_url(s.graph, bid)),
                visible_if=s.flags.desktop_runtime,
            ),
            self._item("copy-as", "content/copy-export-as", lambda: s.editor.export_blocks([bid])),
            self._item("cut", "editor/cut", lambda: s.editor.cut_blocks([bid]), "editor/cut"),
            self._item(
                "delete", "editor/delete-selection",
                lambda: s.editor.delete_blocks([bid]), "editor/delete",
            ),
            Separator(),
        ]
        if block is not None:
            entries.append(TemplateForm(
                block=block,
                store=s.store,
                editor=s.editor,
                notifier=s.notifier,
                host=s.host,
            ))
        entries += [
            self._item(
                "preview-flashcard", "context-menu/preview-flashcard",
                lambda: s.flashcards.preview(bid),
                visible_if=lambda: is_card,
            ),
            self._item(
                "make-flashcard", "context-menu/make-a-flashcard",
                lambda: s.flashcards.make_cards([bid]),
                visible_if=lambda: s.flags.flashcards_enabled() and not is_card,
            ),
            Separator(),
            self._item(
                "expand-all", "editor/expand-block-children",
                lambda: s.editor.expand_all([bid]), "editor/expand-block-children",
            ),
            self._item(
                "collapse-all", "editor/collapse-block-children",
                lambda: s.editor.collapse_all([bid]), "editor/collapse-block-children",
            ),
        ]
        entries += self._plugin_entries(bid)
        if s.flags.developer_mode():
            entries += [
                self._item(
                    "dev/show-block-data", "dev/show-block-data",
                    lambda: s.devtools.show_entity_data(bid),
                ),
                self._item(
                    "dev/show-block-ast", "dev/show-block-ast",
                    lambda: s.devtools.show_content_ast(
                        block.content if block else "",
                        block.format if block else "markdown",
                    ),
                ),
            ]
        return entries

    def _plugin_entries(self, bid: BlockId) -> list[Entry]:
        s = self.services
        out: list[Entry] = []
        for cmd in s.plugins.commands(BLOCK_MENU_EXTENSION):
            # bind cmd now; the lambda outlives the loop
            out.append(self._item(
                cmd.key, cmd.label,
                lambda cmd=cmd: s.plugins.execute(cmd, {"uuid": bid}),
            ))
        return out

    def _block_ref_entries(self, target: BlockReference) -> list[Entry]:
        s = self.services
        owner, ref = target.owner_block, target.ref_id
        return [
            self._item(
                "open-in-sidebar", "content/open-in-sidebar",
                lambda: s.editor.open_in_sidebar(ref, "block-ref"),
                shortcut=OPEN_IN_SIDEBAR_SHORTCUT,
            ),
            self._item("copy-ref", "content/copy-ref", lambda: s.editor.copy_ref(ref)),
            self._item("delete-ref", "content/delete-ref", lambda: s.editor.delete_ref(owner, ref)),
            self._item(
                "replace-with-text", "content/replace-with-text",
                lambda: s.editor.replace_ref_with_text(owner, ref),
            ),
            self._item(
                "replace-with-embed", "content/replace-with-embed",
                lambda: s.editor.replace_ref_with_embed(owner, ref),
            ),
        ]

    def _page_title_entries(self, target: PageTitle) -> list[Entry]:
        groups = self.services.page_menu.page_menu(target.page)
        return [MenuGroup(title=g["title"], options=list(g.get("options", []))) for g in groups]

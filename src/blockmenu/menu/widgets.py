"""Shared sub-widgets of the block context menus."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..core.model import Block, BlockId
from ..core.ports import BlockStore, ContextMenuHost, EditorOperations, Notifier

logger = logging.getLogger(__name__)

BACKGROUND_COLOR = "background-color"
TEMPLATE = "template"
TEMPLATE_INCLUDING_PARENT = "template-including-parent"
TEMPLATE_EXISTS_WARNING = "context-menu/template-exists-warning"


@dataclass
class ColorPicker:
    """Background color palette applied to every block of the target."""
    ids: tuple[BlockId, ...]
    editor: EditorOperations
    colors: tuple[str, ...]
    current: Any = None
    key: str = "background-color"
    label: str = "content/background-color"

    def choose(self, color: str) -> None:
        if color not in self.colors:
            raise ValueError(f"Color {color!r} is not in the palette")
        self.editor.set_property(list(self.ids), BACKGROUND_COLOR, color)

    def remove(self) -> None:
        self.editor.remove_property(list(self.ids), BACKGROUND_COLOR)


@dataclass
class HeadingPicker:
    """Heading level 1..N, the default heading, or none."""
    ids: tuple[BlockId, ...]
    editor: EditorOperations
    levels: int = 6
    current: Any = None
    key: str = "heading"
    label: str = "content/heading"

    @property
    def options(self) -> list[int]:
        return list(range(1, self.levels + 1))

    def choose(self, level: int) -> None:
        if level not in self.options:
            raise ValueError(f"Heading level {level!r} out of range 1..{self.levels}")
        self.editor.set_heading(list(self.ids), level)

    def set_default(self) -> None:
        self.editor.set_heading(list(self.ids), True)

    def remove(self) -> None:
        self.editor.remove_heading(list(self.ids))


@dataclass
class TemplateForm:
    """
    "Make a template" entry: a link that turns into an inline form.
    
    The include-parent toggle only exists for blocks with children and
    starts switched on.
    """
    block: Block
    store: BlockStore
    editor: EditorOperations
    notifier: Notifier
    host: ContextMenuHost
    editing: bool = False
    name: str = ""
    include_parent: bool | None = None
    key: str = "template"
    label: str = "context-menu/make-a-template"

    def __post_init__(self) -> None:
        if self.include_parent is None and self.block.has_children:
            self.include_parent = True

    @property
    def show_include_parent(self) -> bool:
        return self.block.has_children

    def open(self) -> None:
        self.editing = True

    def set_name(self, value: str) -> None:
        self.name = value

    def toggle_include_parent(self, value: bool) -> None:
        if not self.show_include_parent:
            raise ValueError("Block has no children to include")
        self.include_parent = value

    def submit(self) -> bool:
        """Returns True when the template was created."""
        title = self.name.strip()
        if not title:
            return False
        if self.store.template_exists(title):
            logger.info("Template %r already exists", title)
            self.notifier.show(TEMPLATE_EXISTS_WARNING, "error")
            return False
        self.editor.set_property([self.block.id], TEMPLATE, title)
        if self.include_parent is False:
            self.editor.set_property([self.block.id], TEMPLATE_INCLUDING_PARENT, False)
        self.editing = False
        self.host.hide()
        return True

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date as Date
from typing import Union

from .meta import PropertyBag

BlockId = str  # canonical lowercase UUID string

DURATIONS = ("h", "d", "w", "m", "y")
KINDS = (".+", "++")
COMMANDS = ("deadline", "scheduled")


@dataclass
class Block:
    id: BlockId
    content: str = ""
    format: str = "markdown"  # "markdown" | "org"
    properties: PropertyBag = field(default_factory=PropertyBag)
    children: list[BlockId] = field(default_factory=list)
    page: str | None = None

    @property
    def has_children(self) -> bool:
        return bool(self.children)


@dataclass(frozen=True)
class Repeater:
    num: int | None = None
    duration: str | None = None  # one of DURATIONS
    kind: str | None = None  # one of KINDS

    @property
    def complete(self) -> bool:
        return self.num is not None and bool(self.duration) and bool(self.kind)

    @property
    def empty(self) -> bool:
        return self.num is None and not self.duration and not self.kind


@dataclass(frozen=True)
class TemporalValue:
    time: str | None = None  # "HH:mm"
    repeater: Repeater = field(default_factory=Repeater)
    date: Date | None = None


@dataclass(frozen=True)
class Element:
    """A node of the rendered document the pointer event landed on."""
    classes: frozenset[str] = frozenset()
    attrs: dict[str, str] = field(default_factory=dict, hash=False)
    parent: Element | None = None

    def attr(self, name: str) -> str | None:
        return self.attrs.get(name)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def closest(self, class_name: str) -> Element | None:
        node: Element | None = self
        while node is not None:
            if node.has_class(class_name):
                return node
            node = node.parent
        return None


@dataclass
class ContextMenuEvent:
    target: Element
    x: int = 0
    y: int = 0
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


# Ambient contexts set by page title / block ref widgets on pointer down
@dataclass(frozen=True)
class PageTitleContext:
    page: str


@dataclass(frozen=True)
class BlockRefContext:
    block: BlockId  # block whose content holds the reference
    block_ref: BlockId


# Resolved targets
@dataclass(frozen=True)
class PageTitle:
    page: str


@dataclass(frozen=True)
class BlockReference:
    owner_block: BlockId
    ref_id: BlockId


@dataclass(frozen=True)
class MultiBlockSelection:
    block_ids: tuple[BlockId, ...]


@dataclass(frozen=True)
class SingleBlock:
    block_id: BlockId


ResolvedTarget = Union[PageTitle, BlockReference, MultiBlockSelection, SingleBlock]


@dataclass(frozen=True)
class TimestampTarget:
    command: str  # "deadline" | "scheduled"
    block_id: BlockId | None = None  # None: the block under direct editing


@dataclass(frozen=True)
class PluginCommand:
    key: str
    label: str
    action: str
    plugin_id: str

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Union

from ..core.model import ResolvedTarget


@dataclass
class MenuItem:
    key: str
    label: str  # i18n key
    handler: Callable[[], Any]
    shortcut: str | None = None
    visible_if: Callable[[], bool] | None = None

    def invoke(self) -> Any:
        return self.handler()


@dataclass(frozen=True)
class Separator:
    key: str = "separator"


@dataclass
class MenuGroup:
    """A titled group supplied by the page menu."""
    title: str
    options: list[Any] = field(default_factory=list)

    @property
    def key(self) -> str:
        return self.title


Entry = Union[MenuItem, Separator, MenuGroup, Any]  # Any: picker/template widgets


@dataclass
class Menu:
    target: ResolvedTarget
    entries: list[Entry] = field(default_factory=list)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def keys(self) -> list[str]:
        return [e.key for e in self.entries]

    def get(self, key: str) -> Entry | None:
        for e in self.entries:
            if e.key == key:
                return e
        return None

    def invoke(self, key: str) -> Any:
        entry = self.get(key)
        if not isinstance(entry, MenuItem):
            raise KeyError(f"No menu action {key!r}")
        return entry.invoke()


def visible(entries: list[Entry]) -> list[Entry]:
    """Drop gated items whose condition does not hold."""
    out = []
    for e in entries:
        gate = getattr(e, "visible_if", None)
        if gate is None or gate():
            out.append(e)
    return out

"""Plain renderings of a built menu: text for the terminal, dicts for JSON."""

from __future__ import annotations

from typing import Any, Callable

from .model import Menu, MenuGroup, MenuItem, Separator
from .widgets import ColorPicker, HeadingPicker, TemplateForm

Translate = Callable[[str], str]


def _identity(key: str) -> str:
    return key


def entry_to_dict(entry: Any) -> dict[str, Any]:
    if isinstance(entry, Separator):
        return {"type": "separator"}
    if isinstance(entry, MenuItem):
        return {"type": "item", "key": entry.key, "label": entry.label, "shortcut": entry.shortcut}
    if isinstance(entry, ColorPicker):
        return {"type": "colors", "key": entry.key, "options": list(entry.colors), "current": entry.current}
    if isinstance(entry, HeadingPicker):
        return {"type": "headings", "key": entry.key, "options": entry.options, "current": entry.current}
    if isinstance(entry, TemplateForm):
        return {
            "type": "template",
            "key": entry.key,
            "editing": entry.editing,
            "include_parent": entry.include_parent if entry.show_include_parent else None,
        }
    if isinstance(entry, MenuGroup):
        return {
            "type": "group",
            "title": entry.title,
            "options": [o.get("label", str(o)) if isinstance(o, dict) else str(o) for o in entry.options],
        }
    raise TypeError(f"Cannot render menu entry {entry!r}")


def menu_to_dict(menu: Menu) -> dict[str, Any]:
    return {
        "target": type(menu.target).__name__,
        "entries": [entry_to_dict(e) for e in menu],
    }


def render_text(menu: Menu, translate: Translate = _identity) -> str:
    lines: list[str] = []
    for entry in menu:
        d = entry_to_dict(entry)
        kind = d["type"]
        if kind == "separator":
            lines.append("-" * 24)
        elif kind == "item":
            line = translate(d["label"])
            if d["shortcut"]:
                line = f"{line:<32} {d['shortcut']}"
            lines.append(line)
        elif kind in ("colors", "headings"):
            opts = " ".join(str(o) for o in d["options"])
            extra = " default" if kind == "headings" else ""
            lines.append(f"{translate(entry.label)}: {opts}{extra} x")
        elif kind == "template":
            lines.append(translate(entry.label))
        elif kind == "group":
            lines.append(f"[{d['title']}]")
            lines.extend(f"  {o}" for o in d["options"])
    return "\n".join(lines)

from collections import defaultdict
from typing import Any, Callable, Iterable

from ..core.model import PluginCommand
from ..core.ports import PageMenuProvider, PluginRegistry

Handler = Callable[[dict[str, Any]], None]


class MemoryPluginRegistry(PluginRegistry):
    """Plugin commands per extension point, kept in registration order."""

    def __init__(self) -> None:
        self._commands: dict[str, list[PluginCommand]] = defaultdict(list)
        self._handlers: dict[tuple[str, str], Handler] = {}

    def register(
        self,
        extension_point: str,
        plugin_id: str,
        key: str,
        label: str,
        handler: Handler,
    ) -> PluginCommand:
        cmd = PluginCommand(key=key, label=label, action=f"{plugin_id}/{key}", plugin_id=plugin_id)
        existing = [c for c in self._commands[extension_point] if c.action == cmd.action]
        if existing:
            raise ValueError(f"Command {cmd.action} already registered for {extension_point}")
        self._commands[extension_point].append(cmd)
        self._handlers[(plugin_id, cmd.action)] = handler
        return cmd

    def unregister_plugin(self, plugin_id: str) -> None:
        for point, cmds in self._commands.items():
            self._commands[point] = [c for c in cmds if c.plugin_id != plugin_id]
        self._handlers = {k: v for k, v in self._handlers.items() if k[0] != plugin_id}

    def commands(self, extension_point: str) -> list[PluginCommand]:
        return list(self._commands.get(extension_point, []))

    def execute(self, command: PluginCommand, payload: dict[str, Any]) -> None:
        handler = self._handlers.get((command.plugin_id, command.action))
        if handler is None:
            raise KeyError(f"No handler for {command.action}")
        handler(payload)


class StaticPageMenu(PageMenuProvider):
    """Page menu groups built from a fixed list of option labels."""

    DEFAULT_GROUPS = (
        ("page/actions", ("page/add-to-favorites", "page/open-in-sidebar", "page/copy-page-url")),
        ("page/danger", ("page/delete",)),
    )

    def __init__(self, groups: Iterable[tuple[str, Iterable[str]]] | None = None):
        self.groups = [(t, list(opts)) for t, opts in (groups or self.DEFAULT_GROUPS)]

    def page_menu(self, page: str) -> list[dict[str, Any]]:
        return [
            {"title": title, "options": [{"key": o, "label": o, "page": page} for o in options]}
            for title, options in self.groups
        ]

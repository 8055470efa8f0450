"""Runtime wiring helper for the CLI and API."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable

from .adapters.flags import ConfigFlags, ConfigShortcuts, TagFlashcards
from .adapters.memory_graph import InMemoryGraph
from .adapters.plugins import MemoryPluginRegistry, StaticPageMenu
from .adapters.ui_state import (
    MemoryCommandState,
    MemoryEditing,
    MemorySelection,
    MenuHost,
    RecordingNotifier,
    YamlDevTools,
)
from .adapters.yaml_graph import load_graph
from .config import BlockmenuConfig, load_config
from .menu.dispatcher import MenuDispatcher, MenuServices
from .menu.resolver import InteractionContext, TargetResolver
from .timestamp.picker import DatePicker
from .timestamp.session import TimestampController
from .timestamp.submit import SubmitCoordinator


@dataclass
class Runtime:
    """Container for all wired components."""
    config: BlockmenuConfig
    graph: InMemoryGraph
    selection: MemorySelection
    editing: MemoryEditing
    commands: MemoryCommandState
    context: InteractionContext
    plugins: MemoryPluginRegistry
    notifier: RecordingNotifier
    host: MenuHost
    devtools: YamlDevTools
    dispatcher: MenuDispatcher
    timestamps: TimestampController
    picker: DatePicker


def build_runtime(
    graph_path: Path | None = None,
    config_path: Path | None = None,
    config: BlockmenuConfig | None = None,
    graph: InMemoryGraph | None = None,
    clock: Callable[[], datetime] | None = None,
) -> Runtime:
    """Build and wire all components for a graph."""
    if config is None:
        config = load_config(
            config_path=config_path,
            graph_dir=graph_path.parent if graph_path else None,
        )
    
    # Use config values if CLI args not provided
    if graph is None:
        graph_path = graph_path or config.graph.path
        graph = load_graph(graph_path) if graph_path else InMemoryGraph(name=config.graph.name)
    
    selection = MemorySelection()
    editing = MemoryEditing()
    commands = MemoryCommandState()
    context = InteractionContext()
    plugins = MemoryPluginRegistry()
    notifier = RecordingNotifier()
    host = MenuHost()
    devtools = YamlDevTools(graph)
    
    services = MenuServices(
        editor=graph,
        store=graph,
        flags=ConfigFlags(config.features),
        flashcards=TagFlashcards(graph),
        plugins=plugins,
        page_menu=StaticPageMenu(),
        notifier=notifier,
        host=host,
        devtools=devtools,
        shortcuts=ConfigShortcuts(config.shortcuts),
        colors=config.ui.colors,
        heading_levels=config.ui.heading_levels,
        graph=graph.name,
    )
    dispatcher = MenuDispatcher(TargetResolver(context, selection), services)
    
    timestamps = TimestampController(clock=clock)
    coordinator = SubmitCoordinator(timestamps, graph, editing, commands)
    picker = DatePicker(
        timestamps,
        coordinator,
        graph,
        commands,
        journal_format=config.journal.title_format,
        store=graph,
        editing=editing,
    )
    
    return Runtime(
        config=config,
        graph=graph,
        selection=selection,
        editing=editing,
        commands=commands,
        context=context,
        plugins=plugins,
        notifier=notifier,
        host=host,
        devtools=devtools,
        dispatcher=dispatcher,
        timestamps=timestamps,
        picker=picker,
    )

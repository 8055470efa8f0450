"""Configuration loader for blockmenu.toml."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

CONFIG_NAME = "blockmenu.toml"

DEFAULT_COLORS = ("yellow", "red", "pink", "green", "blue", "purple", "gray")

DEFAULT_SHORTCUTS = {
    "editor/cut": "mod+x",
    "editor/copy": "mod+c",
    "editor/delete": "backspace",
    "editor/cycle-todo": "mod+enter",
    "editor/expand-block-children": "mod+down",
    "editor/collapse-block-children": "mod+up",
}


@dataclass
class GraphConfig:
    """Graph snapshot configuration."""
    path: Path | None = None
    name: str = "default"


@dataclass
class FeaturesConfig:
    """Feature switches consulted by the menus."""
    flashcards: bool = True
    developer_mode: bool = False
    desktop: bool = False


@dataclass
class UIConfig:
    """Menu palette and heading range."""
    colors: tuple[str, ...] = DEFAULT_COLORS
    heading_levels: int = 6


@dataclass
class JournalConfig:
    """Journal page naming."""
    title_format: str = "MMM do, yyyy"


@dataclass
class LoggingConfig:
    level: str | None = None
    file: str | None = None


@dataclass
class BlockmenuConfig:
    """Complete blockmenu configuration."""
    graph: GraphConfig
    features: FeaturesConfig
    ui: UIConfig
    journal: JournalConfig
    logging: LoggingConfig
    shortcuts: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_SHORTCUTS))


def load_config(config_path: Path | None = None, graph_dir: Path | None = None) -> BlockmenuConfig:
    """
    Load configuration from blockmenu.toml.
    
    Search order:
    1. config_path (if provided)
    2. cwd/blockmenu.toml
    3. graph_dir/blockmenu.toml
    
    Args:
        config_path: Explicit path to config file
        graph_dir: Graph directory for fallback search
    
    Returns:
        BlockmenuConfig with resolved settings
    """
    toml_data: dict[str, Any] = {}
    
    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / CONFIG_NAME)
    if graph_dir:
        search_paths.append(graph_dir / CONFIG_NAME)
    
    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            break
    
    graph_data = toml_data.get("graph", {})
    graph_path = graph_data.get("path")
    graph_config = GraphConfig(
        path=Path(graph_path) if graph_path else None,
        name=graph_data.get("name", "default"),
    )
    
    features_data = toml_data.get("features", {})
    features_config = FeaturesConfig(
        flashcards=bool(features_data.get("flashcards", True)),
        developer_mode=bool(features_data.get("developer_mode", False)),
        desktop=bool(features_data.get("desktop", False)),
    )
    
    ui_data = toml_data.get("ui", {})
    levels = int(ui_data.get("heading_levels", 6))
    if not 1 <= levels <= 6:
        raise ValueError(f"ui.heading_levels must be between 1 and 6, got {levels}")
    ui_config = UIConfig(
        colors=tuple(ui_data.get("colors", DEFAULT_COLORS)),
        heading_levels=levels,
    )
    
    journal_data = toml_data.get("journal", {})
    journal_config = JournalConfig(
        title_format=journal_data.get("title_format", "MMM do, yyyy"),
    )
    
    logging_data = toml_data.get("logging", {})
    logging_config = LoggingConfig(
        level=logging_data.get("level"),
        file=logging_data.get("file"),
    )
    
    # User bindings override the defaults key by key
    shortcuts = dict(DEFAULT_SHORTCUTS)
    shortcuts.update({str(k): str(v) for k, v in toml_data.get("shortcuts", {}).items()})
    
    return BlockmenuConfig(
        graph=graph_config,
        features=features_config,
        ui=ui_config,
        journal=journal_config,
        logging=logging_config,
        shortcuts=shortcuts,
    )

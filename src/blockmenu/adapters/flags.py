from typing import Sequence

from ..config import FeaturesConfig
from ..core.model import Block, BlockId
from ..core.ports import FeatureFlags, Flashcards, ShortcutLookup
from .memory_graph import InMemoryGraph

CARD_TAG = "#card"


class ConfigFlags(FeatureFlags):
    def __init__(self, features: FeaturesConfig):
        self.features = features

    def flashcards_enabled(self) -> bool:
        return self.features.flashcards

    def developer_mode(self) -> bool:
        return self.features.developer_mode

    def desktop_runtime(self) -> bool:
        return self.features.desktop


class ConfigShortcuts(ShortcutLookup):
    def __init__(self, bindings: dict[str, str]):
        self.bindings = dict(bindings)

    def shortcut_for(self, action_id: str) -> str | None:
        return self.bindings.get(action_id)


class TagFlashcards(Flashcards):
    """A block is a card when its content carries the #card tag."""

    def __init__(self, graph: InMemoryGraph):
        self.graph = graph
        self.previewed: list[BlockId] = []

    def is_card(self, block: Block) -> bool:
        return CARD_TAG in block.content.split()

    def preview(self, id: BlockId) -> None:
        self.previewed.append(id)

    def make_cards(self, ids: Sequence[BlockId]) -> None:
        for i in ids:
            block = self.graph.get(i)
            if block is not None and not self.is_card(block):
                block.content = f"{block.content} {CARD_TAG}".strip()

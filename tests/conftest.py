"""Shared fixtures: a small graph wired into a runtime."""

from datetime import datetime

import pytest

from blockmenu.adapters.memory_graph import InMemoryGraph, new_block
from blockmenu.config import (
    BlockmenuConfig,
    FeaturesConfig,
    GraphConfig,
    JournalConfig,
    LoggingConfig,
    UIConfig,
)
from blockmenu.runtime import build_runtime

PARENT = "6566f0b4-8d2a-4b0b-9c8b-2f0e6c1d9a10"
CHILD_1 = "6566f0b4-8d2a-4b0b-9c8b-2f0e6c1d9a11"
CHILD_2 = "6566f0b4-8d2a-4b0b-9c8b-2f0e6c1d9a12"
CARD = "6566f0b4-8d2a-4b0b-9c8b-2f0e6c1d9a13"
LONE = "6566f0b4-8d2a-4b0b-9c8b-2f0e6c1d9a14"

NOW = datetime(2024, 3, 5, 8, 15)


def make_graph() -> InMemoryGraph:
    parent = new_block(PARENT, "Weekly review")
    parent.children = [CHILD_1, CHILD_2]
    blocks = [
        parent,
        new_block(CHILD_1, "TODO Inbox zero"),
        new_block(CHILD_2, "Plan next week"),
        new_block(CARD, "What is a repeater? #card"),
        new_block(LONE, "Call the dentist"),
    ]
    return InMemoryGraph(blocks, name="demo")


def make_config(**features) -> BlockmenuConfig:
    return BlockmenuConfig(
        graph=GraphConfig(name="demo"),
        features=FeaturesConfig(**features),
        ui=UIConfig(),
        journal=JournalConfig(),
        logging=LoggingConfig(),
    )


@pytest.fixture
def rt():
    """Runtime with flashcards on, developer mode off, web runtime."""
    return build_runtime(config=make_config(), graph=make_graph(), clock=lambda: NOW)


@pytest.fixture
def make_rt():
    """Factory for runtimes with custom feature switches."""
    def factory(**features):
        return build_runtime(config=make_config(**features), graph=make_graph(), clock=lambda: NOW)
    return factory

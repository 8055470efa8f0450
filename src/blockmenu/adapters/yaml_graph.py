"""Load and save block graph snapshots as YAML.

    graph: demo
    blocks:
      - id: 6566f0b4-8d2a-4b0b-9c8b-2f0e6c1d9a10
        content: Weekly review
        page: Projects
        properties:
          heading: 2
        children:
          - id: ...
            content: Inbox zero
"""

import io
from pathlib import Path
from typing import Any

import yaml

from ..core.meta import PropertyBag
from ..core.model import Block
from ..core.utils import parse_uuid
from .memory_graph import InMemoryGraph


def _collect(items: list[dict[str, Any]], page: str | None, out: list[Block]) -> list[str]:
    ids = []
    for item in items or []:
        raw_id = str(item.get("id", ""))
        bid = parse_uuid(raw_id)
        if bid is None:
            raise ValueError(f"Invalid block id in graph: {raw_id!r}")
        block_page = item.get("page", page)
        block = Block(
            id=bid,
            content=str(item.get("content", "")),
            format=item.get("format", "markdown"),
            properties=PropertyBag(item.get("properties") or {}),
            page=block_page,
        )
        out.append(block)
        block.children = _collect(item.get("children") or [], block_page, out)
        ids.append(bid)
    return ids


def loads_graph(text: str) -> InMemoryGraph:
    data = yaml.safe_load(io.StringIO(text)) or {}
    if not isinstance(data, dict):
        raise ValueError("Graph file must be a mapping with a 'blocks' list")
    blocks: list[Block] = []
    _collect(data.get("blocks") or [], None, blocks)
    return InMemoryGraph(blocks, name=str(data.get("graph", "default")))


def load_graph(path: Path) -> InMemoryGraph:
    return loads_graph(path.read_text(encoding="utf-8"))


def _dump_block(graph: InMemoryGraph, block: Block) -> dict[str, Any]:
    item: dict[str, Any] = {"id": block.id, "content": block.content}
    if block.format != "markdown":
        item["format"] = block.format
    if block.page:
        item["page"] = block.page
    if block.properties:
        item["properties"] = dict(block.properties)
    children = [graph.blocks[c] for c in block.children if c in graph.blocks]
    if children:
        item["children"] = [_dump_block(graph, c) for c in children]
    return item


def dumps_graph(graph: InMemoryGraph) -> str:
    child_ids = {c for b in graph.blocks.values() for c in b.children}
    roots = [b for b in graph.blocks.values() if b.id not in child_ids]
    data = {"graph": graph.name, "blocks": [_dump_block(graph, b) for b in roots]}
    buf = io.StringIO()
    yaml.safe_dump(data, buf, sort_keys=False, allow_unicode=True)
    return buf.getvalue()


def save_graph(graph: InMemoryGraph, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_graph(graph), encoding="utf-8")

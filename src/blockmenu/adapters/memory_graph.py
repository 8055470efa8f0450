from collections.abc import Iterable
from typing import Any, Sequence

from .. import scheduling
from ..core import refs
from ..core.meta import PropertyBag
from ..core.model import Block, BlockId
from ..core.ports import BlockStore, EditorOperations


class InMemoryGraph(BlockStore, EditorOperations):
    """
    Blocks held in a dict. Property, heading and timestamp edits are applied
    to the blocks; clipboard/sidebar style operations are only recorded in
    ``calls`` for whoever hosts the graph to act on.
    """

    def __init__(self, blocks: Iterable[Block] = (), name: str = "default"):
        self.name = name
        self.blocks: dict[BlockId, Block] = {b.id: b for b in blocks}
        self.calls: list[tuple[str, Any]] = []
        self.clipboard: str | None = None

    def add(self, block: Block) -> Block:
        self.blocks[block.id] = block
        return block

    def _record(self, op: str, *args: Any) -> None:
        self.calls.append((op, *args))

    def _each(self, ids: Sequence[BlockId]) -> list[Block]:
        return [self.blocks[i] for i in ids if i in self.blocks]

    # BlockStore

    def get(self, id: BlockId) -> Block | None:
        return self.blocks.get(id)

    def template_exists(self, name: str) -> bool:
        wanted = name.strip().lower()
        for block in self.blocks.values():
            value = block.properties.template
            if value is not None and value.strip().lower() == wanted:
                return True
        return False

    # EditorOperations

    def cut_blocks(self, ids: Sequence[BlockId]) -> None:
        if not ids:
            return
        self.copy_blocks(ids)
        self.delete_blocks(ids)

    def copy_blocks(self, ids: Sequence[BlockId]) -> None:
        if not ids:
            return
        self.clipboard = "\n".join(b.content for b in self._each(ids))
        self._record("copy", list(ids))

    def delete_blocks(self, ids: Sequence[BlockId]) -> None:
        for i in ids:
            if self.blocks.pop(i, None) is not None:
                for block in self.blocks.values():
                    if i in block.children:
                        block.children.remove(i)
        if ids:
            self._record("delete", list(ids))

    def export_blocks(self, ids: Sequence[BlockId]) -> None:
        if ids:
            self._record("export", list(ids))

    def copy_block_ref(self, id: BlockId, text: str) -> None:
        block = self.blocks.get(id)
        if block is not None and "id" not in block.properties:
            # a referenced block keeps its id in content
            block.properties["id"] = id
        self.clipboard = text
        self._record("copy-block-ref", id, text)

    def copy_block_refs(self, ids: Sequence[BlockId], style: str) -> None:
        if not ids:
            return
        fmt = refs.block_ref if style == "ref" else refs.block_embed
        self.clipboard = "\n".join(fmt(i) for i in ids)
        self._record("copy-block-refs", list(ids), style)

    def set_property(self, ids: Sequence[BlockId], key: str, value: Any) -> None:
        for block in self._each(ids):
            block.properties[key] = value

    def remove_property(self, ids: Sequence[BlockId], key: str) -> None:
        for block in self._each(ids):
            block.properties.pop(key, None)

    def set_heading(self, ids: Sequence[BlockId], heading: int | bool) -> None:
        self.set_property(ids, "heading", heading)

    def remove_heading(self, ids: Sequence[BlockId]) -> None:
        self.remove_property(ids, "heading")

    def cycle_todos(self, ids: Sequence[BlockId]) -> None:
        cycle = {"TODO": "DOING", "DOING": "DONE", "DONE": ""}
        for block in self._each(ids):
            head, _, rest = block.content.partition(" ")
            if head in cycle:
                nxt = cycle[head]
                block.content = f"{nxt} {rest}" if nxt else rest
            else:
                block.content = f"TODO {block.content}"

    def expand_all(self, ids: Sequence[BlockId]) -> None:
        self.remove_property(ids, "collapsed")

    def collapse_all(self, ids: Sequence[BlockId]) -> None:
        for block in self._each(ids):
            if block.has_children:
                block.properties["collapsed"] = True

    def open_in_sidebar(self, id: BlockId, kind: str = "block") -> None:
        self._record("sidebar", id, kind)

    def copy_ref(self, ref_id: BlockId) -> None:
        self.clipboard = refs.block_ref(ref_id)
        self._record("copy-ref", ref_id)

    def delete_ref(self, owner: BlockId, ref_id: BlockId) -> None:
        block = self.blocks.get(owner)
        if block is not None:
            block.content = block.content.replace(refs.block_ref(ref_id), "")

    def replace_ref_with_text(self, owner: BlockId, ref_id: BlockId) -> None:
        block = self.blocks.get(owner)
        ref = self.blocks.get(ref_id)
        if block is not None and ref is not None:
            block.content = block.content.replace(refs.block_ref(ref_id), ref.content)

    def replace_ref_with_embed(self, owner: BlockId, ref_id: BlockId) -> None:
        block = self.blocks.get(owner)
        if block is not None:
            block.content = block.content.replace(
                refs.block_ref(ref_id), refs.block_embed(ref_id)
            )

    def set_block_timestamp(self, id: BlockId, command: str, text: str) -> None:
        block = self.blocks.get(id)
        if block is None:
            return
        block.content = scheduling.replace_timestamp_marker(block.content, command, text)
        self._record("timestamp", id, command, text)

    def insert_at_cursor(self, text: str, command: str) -> None:
        self._record("insert", text, command)


def new_block(id: BlockId, content: str = "", **properties: Any) -> Block:
    return Block(id=id, content=content, properties=PropertyBag(properties))

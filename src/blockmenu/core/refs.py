"""Reference text for blocks and pages as it appears in block content."""

from .model import BlockId


def block_ref(id: BlockId) -> str:
    return f"(({id}))"


def block_embed(id: BlockId) -> str:
    return f"{{{{embed (({id}))}}}}"


def page_ref(name: str) -> str:
    return f"[[{name}]]"


def block_url(graph: str, id: BlockId) -> str:
    """Deep link that opens the block in the desktop app."""
    return f"logseq://graph/{graph}?block-id={id}"

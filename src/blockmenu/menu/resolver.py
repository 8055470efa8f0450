"""Decide which entity a context-menu event is about."""

from __future__ import annotations

import logging
from typing import Callable

from ..core.model import (
    BlockReference,
    BlockRefContext,
    ContextMenuEvent,
    MultiBlockSelection,
    PageTitle,
    PageTitleContext,
    ResolvedTarget,
    SingleBlock,
)
from ..core.ports import SelectionContext
from ..core.utils import parse_uuid

logger = logging.getLogger(__name__)

BLOCK_ID_ATTR = "blockid"
BLOCK_CLASS = "ls-block"
BULLET_CLASS = "bullet"

Rule = Callable[[ContextMenuEvent], "ResolvedTarget | None"]


class InteractionContext:
    """
    Short-lived contexts recorded by page titles and block references when the
    pointer goes down on them. Each is consumed by the next resolution.
    """

    def __init__(self) -> None:
        self.page_title: PageTitleContext | None = None
        self.block_ref: BlockRefContext | None = None

    def set_page_title(self, page: str) -> None:
        self.page_title = PageTitleContext(page)

    def set_block_ref(self, block: str, block_ref: str) -> None:
        self.block_ref = BlockRefContext(block=block, block_ref=block_ref)

    def clear(self) -> None:
        self.page_title = None
        self.block_ref = None


class TargetResolver:
    def __init__(self, context: InteractionContext, selection: SelectionContext):
        self.context = context
        self.selection = selection
        # Priority order; the first rule returning a target wins
        self.rules: list[tuple[str, Rule]] = [
            ("page-title", self._page_title),
            ("block-ref", self._block_ref),
            ("selection", self._selection),
            ("block", self._block),
        ]

    def resolve(self, event: ContextMenuEvent) -> ResolvedTarget | None:
        for name, rule in self.rules:
            target = rule(event)
            if target is not None:
                logger.debug("Context menu target via %s rule: %r", name, target)
                return target
        return None

    def _page_title(self, event: ContextMenuEvent) -> ResolvedTarget | None:
        ctx = self.context.page_title
        if ctx is None:
            return None
        # a page title wins over everything, so nothing pending survives it
        self.context.clear()
        return PageTitle(page=ctx.page)

    def _block_ref(self, event: ContextMenuEvent) -> ResolvedTarget | None:
        ctx = self.context.block_ref
        if ctx is None:
            return None
        self.context.block_ref = None
        return BlockReference(owner_block=ctx.block, ref_id=ctx.block_ref)

    def _selection(self, event: ContextMenuEvent) -> ResolvedTarget | None:
        ids = self.selection.selected_ids()
        if not ids or event.target.has_class(BULLET_CLASS):
            return None
        return MultiBlockSelection(block_ids=tuple(ids))

    def _block(self, event: ContextMenuEvent) -> ResolvedTarget | None:
        raw = event.target.attr(BLOCK_ID_ATTR)
        block_id = parse_uuid(raw)
        if block_id is None:
            if raw:
                logger.debug("Ignoring unparseable block id %r", raw)
            return None
        if event.target.closest(BLOCK_CLASS) is not None:
            self.selection.clear()
            self.selection.add(block_id, "down")
        return SingleBlock(block_id=block_id)

"""FastAPI application exposing the context menus and timestamp editor as local JSON."""

import secrets
from datetime import date
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Security
from fastapi.middleware.cors import CORSMiddleware
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, Field

from .. import __version__, scheduling
from ..core.model import COMMANDS, ContextMenuEvent, Element
from ..core.utils import parse_uuid
from ..menu.model import MenuItem
from ..menu.render import menu_to_dict
from ..menu.widgets import ColorPicker, HeadingPicker, TemplateForm
from ..timestamp.session import SessionClosed


class ElementIn(BaseModel):
    classes: list[str] = Field(default_factory=list)
    attrs: dict[str, str] = Field(default_factory=dict)
    parent: "ElementIn | None" = None

    def to_element(self) -> Element:
        return Element(
            classes=frozenset(self.classes),
            attrs=dict(self.attrs),
            parent=self.parent.to_element() if self.parent else None,
        )


ElementIn.model_rebuild()


class BlockRefIn(BaseModel):
    block: str
    ref: str


class ContextMenuIn(BaseModel):
    target: ElementIn
    x: int = 0
    y: int = 0
    page_title: str | None = None
    block_ref: BlockRefIn | None = None
    selection: list[str] | None = None


class InvokeIn(BaseModel):
    key: str
    op: str | None = None  # widget operation, e.g. "choose" or "remove"
    value: Any = None


class TimestampOpenIn(BaseModel):
    command: str
    block_id: str | None = None
    existing: str | None = None  # timestamp text already on the block


class TimestampUpdateIn(BaseModel):
    day: date | None = None
    pick: bool = False  # treat the day as a calendar click
    time: str | None = None
    show_time: bool = False
    clear_time: bool = False
    repeater_num: int | str | None = None
    repeater_duration: str | None = None
    show_repeater: bool = False
    clear_repeater: bool = False


def _require_id(raw: str) -> str:
    bid = parse_uuid(raw)
    if bid is None:
        raise HTTPException(status_code=400, detail=f"Invalid block id {raw}")
    return bid


def _heading_level(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid heading level {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid heading level {value!r}")


def _invoke_widget(entry: Any, op: str | None, value: Any) -> Any:
    if isinstance(entry, ColorPicker):
        if op == "choose":
            return entry.choose(value)
        if op == "remove":
            return entry.remove()
    elif isinstance(entry, HeadingPicker):
        if op == "choose":
            return entry.choose(_heading_level(value))
        if op == "default":
            return entry.set_default()
        if op == "remove":
            return entry.remove()
    elif isinstance(entry, TemplateForm):
        if op == "open":
            return entry.open()
        if op == "include_parent":
            return entry.toggle_include_parent(bool(value))
        if op == "submit":
            entry.set_name(str(value or ""))
            return entry.submit()
    raise ValueError(f"Unsupported operation {op!r} for {entry.key}")


def create_app(runtime: Any, token: str | None = None, enable_cors: bool = False) -> FastAPI:
    """
    Create FastAPI application with runtime injected.

    Args:
        runtime: Runtime instance with dispatcher and timestamp picker
        token: Bearer token for authentication (None to disable auth)
        enable_cors: Enable CORS middleware

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="blockmenu API",
        description="Local JSON API for block context menus and timestamps",
        version=__version__,
        docs_url="/docs" if token is None else None,
        redoc_url="/redoc" if token is None else None,
    )

    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    if token:
        security_scheme = HTTPBearer(auto_error=False)

        async def verify_token(
            credentials: HTTPAuthorizationCredentials | None = Security(security_scheme),  # noqa: B008
        ) -> None:
            """Verify bearer token."""
            if credentials is None or credentials.credentials != token:
                raise HTTPException(status_code=401, detail="Invalid or missing token")
    else:

        async def verify_token() -> None:
            """No-op when auth is disabled."""
            return None

    def picker_view() -> dict[str, Any]:
        return runtime.picker.render().to_dict()

    @app.get("/health")
    async def health(auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok", "version": __version__}

    @app.get("/blocks/{block_id}")
    async def get_block(block_id: str, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Block content and properties."""
        bid = parse_uuid(block_id)
        block = runtime.graph.get(bid) if bid else None
        if block is None:
            raise HTTPException(status_code=404, detail=f"Block {block_id} not found")
        return {
            "id": block.id,
            "content": block.content,
            "format": block.format,
            "properties": dict(block.properties),
            "children": list(block.children),
            "page": block.page,
        }

    @app.post("/contextmenu")
    async def contextmenu(body: ContextMenuIn, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Resolve a context-menu event and return the menu shown, if any."""
        # Validate everything first; a rejected request leaves no state behind
        block_ref = None
        if body.block_ref:
            block_ref = (_require_id(body.block_ref.block), _require_id(body.block_ref.ref))
        selection = None
        if body.selection is not None:
            selection = [_require_id(raw) for raw in body.selection]

        if body.page_title:
            runtime.context.set_page_title(body.page_title)
        if block_ref:
            runtime.context.set_block_ref(*block_ref)
        if selection is not None:
            runtime.selection.clear()
            for bid in selection:
                runtime.selection.add(bid)

        event = ContextMenuEvent(target=body.target.to_element(), x=body.x, y=body.y)
        menu = runtime.dispatcher.resolve_and_dispatch(event)
        return {
            "default_prevented": event.default_prevented,
            "menu": menu_to_dict(menu) if menu else None,
        }

    @app.post("/contextmenu/invoke")
    async def invoke(body: InvokeIn, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Run an action of the menu currently shown."""
        menu = runtime.host.menu
        if menu is None:
            raise HTTPException(status_code=409, detail="No context menu is shown")
        entry = menu.get(body.key)
        if entry is None:
            raise HTTPException(status_code=404, detail=f"No menu entry {body.key}")
        try:
            if isinstance(entry, MenuItem):
                entry.invoke()
                result = None
            else:
                result = _invoke_widget(entry, body.op, body.value)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {
            "result": result,
            "menu_visible": runtime.host.visible,
            "notifications": [{"message": m, "status": s} for m, s in runtime.notifier.messages],
        }

    @app.post("/timestamp/open")
    async def timestamp_open(body: TimestampOpenIn, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Open the date picker session for a block."""
        command = body.command.lower()
        if command not in COMMANDS:
            raise HTTPException(
                status_code=400,
                detail=f"Unknown command {body.command} (expected one of {', '.join(COMMANDS)})",
            )
        existing = None
        if body.existing:
            existing = scheduling.parse_timestamp(body.existing)
            if existing is None:
                raise HTTPException(status_code=400, detail=f"Invalid timestamp {body.existing}")
        block_id = _require_id(body.block_id) if body.block_id else None
        runtime.commands.begin(command)
        runtime.picker.open_timestamp_editor(block_id, command, existing)
        return picker_view()

    @app.post("/timestamp/update")
    async def timestamp_update(body: TimestampUpdateIn, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Apply edits to the open session."""
        ctl = runtime.timestamps
        inserted = None
        try:
            if body.day is not None:
                if body.pick:
                    inserted = runtime.picker.pick_date(body.day)
                else:
                    ctl.set_date(body.day)
            if body.show_time:
                ctl.show_time_input()
            if body.time is not None:
                ctl.set_time(body.time)
            if body.clear_time:
                ctl.clear_time()
            if body.show_repeater:
                ctl.show_repeater_input()
            if body.repeater_num is not None:
                ctl.set_repeater_num(body.repeater_num)
            if body.repeater_duration is not None:
                ctl.set_repeater_duration(body.repeater_duration)
            if body.clear_repeater:
                ctl.clear_repeater()
        except SessionClosed as e:
            raise HTTPException(status_code=409, detail=str(e))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        view = picker_view()
        if inserted:
            view["inserted"] = inserted
        return view

    @app.post("/timestamp/submit")
    async def timestamp_submit(auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Commit the session."""
        try:
            text = runtime.picker.submit()
        except SessionClosed as e:
            raise HTTPException(status_code=409, detail=str(e))
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {"text": text}

    @app.post("/timestamp/cancel")
    async def timestamp_cancel(auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Drop the session without writing."""
        runtime.picker.cancel()
        return {"status": "cancelled"}

    return app


def generate_token() -> str:
    """Generate a random bearer token."""
    return secrets.token_urlsafe(32)

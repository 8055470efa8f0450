"""CLI for blockmenu - context menus and scheduling timestamps for a block outliner."""

import argparse
import json
import platform
import re
import sys
from datetime import date
from pathlib import Path
from typing import Any

from . import __version__, scheduling
from .adapters.yaml_graph import save_graph
from .core.model import ContextMenuEvent, Element, TemporalValue
from .core.utils import parse_uuid
from .logging_config import configure_logging
from .menu.render import menu_to_dict, render_text
from .runtime import build_runtime

EVERY_RE = re.compile(r"^(\d+)([hdwmy])$")


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date: {value} (expected YYYY-MM-DD)")


def _block_id(value: str) -> str:
    bid = parse_uuid(value)
    if bid is None:
        raise argparse.ArgumentTypeError(f"Invalid block id: {value}")
    return bid


def _event_for(args: argparse.Namespace, rt: Any) -> ContextMenuEvent:
    """Build the pointer event the selected options describe."""
    if args.page:
        rt.context.set_page_title(args.page)
    if args.ref:
        owner, ref = args.ref
        rt.context.set_block_ref(owner, ref)
    for bid in args.select or []:
        rt.selection.add(bid)

    if args.block:
        block_el = Element(classes=frozenset({"ls-block"}), attrs={"blockid": args.block})
        classes = frozenset({"bullet"}) if args.bullet else frozenset({"block-content"})
        target = Element(classes=classes, attrs={"blockid": args.block}, parent=block_el)
    else:
        target = Element(classes=frozenset({"block-content"}))
    return ContextMenuEvent(target=target)


def cmd_menu(args: argparse.Namespace, rt: Any) -> int:
    """Print the context menu an event resolves to."""
    event = _event_for(args, rt)
    menu = rt.dispatcher.resolve_and_dispatch(event)
    if menu is None:
        if not args.quiet:
            print("No custom context menu (native menu shown)", file=sys.stderr)
        return 1

    if args.format == "json":
        print(json.dumps(menu_to_dict(menu), indent=2))
    else:
        print(render_text(menu))
    return 0


def cmd_timestamp(args: argparse.Namespace, rt: Any) -> int:
    """Encode a timestamp, optionally writing it to a block."""
    rt.commands.begin(args.command)
    rt.picker.open_timestamp_editor(args.block, args.command, today=args.date)
    rt.picker.pick_date(args.date)

    if args.time:
        rt.timestamps.set_time(args.time)
    if args.every:
        m = EVERY_RE.match(args.every)
        if not m:
            print(f"Invalid repeater: {args.every} (expected e.g. 2d, 1w)", file=sys.stderr)
            rt.timestamps.cancel()
            return 1
        rt.timestamps.set_repeater_num(int(m.group(1)))
        rt.timestamps.set_repeater_duration(m.group(2))

    if args.block and rt.graph.get(args.block) is None:
        print(f"Block {args.block} not found", file=sys.stderr)
        rt.timestamps.cancel()
        return 1

    if args.block:
        text = rt.picker.submit()
    else:
        # nothing to write into; encode only
        text = scheduling.serialize(scheduling.finalize(rt.timestamps.session.timestamp))
        rt.timestamps.cancel()

    print(text)

    if args.block and args.save:
        graph_path = args.graph or rt.config.graph.path
        if graph_path is None:
            print("Error: --save needs a graph file", file=sys.stderr)
            return 1
        save_graph(rt.graph, Path(graph_path))
        if not args.quiet:
            print(f"Saved {graph_path}", file=sys.stderr)
    return 0


def cmd_date(args: argparse.Namespace, rt: Any) -> int:
    """Print the journal page reference a plain date pick inserts."""
    rt.picker.open_timestamp_editor(None, "scheduled", today=args.date)
    text = rt.picker.pick_date(args.date)
    print(text)
    return 0


def cmd_parse(args: argparse.Namespace, rt: Any) -> int:
    """Parse timestamp text and print its fields as JSON."""
    value: TemporalValue | None = scheduling.parse_timestamp(args.text)
    if value is None:
        print(f"Not a timestamp: {args.text}", file=sys.stderr)
        return 1
    rep = value.repeater
    print(json.dumps({
        "date": value.date.isoformat() if value.date else None,
        "time": value.time,
        "repeater": None if rep.empty else {"num": rep.num, "duration": rep.duration, "kind": rep.kind},
    }, indent=2))
    return 0


def cmd_serve(args: argparse.Namespace, rt: Any) -> int:
    """Start the local JSON API server."""
    import uvicorn

    from .api.app import create_app, generate_token

    token = None
    if not args.no_token:
        token = args.token or generate_token()
        if not args.quiet:
            print(f"API token: {token}")

    app = create_app(rt, token=token, enable_cors=args.cors)
    uvicorn.run(app, host=args.host, port=args.port, log_level="warning")
    return 0


def _version_string() -> str:
    return (
        f"blockmenu {__version__}\n"
        f"python {platform.python_version()}\n"
        f"platform {platform.platform()}"
    )


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="blockmenu",
        description="Context menus and scheduling timestamps for a block outliner",
    )
    parser.add_argument("--version", action="version", version=_version_string())
    parser.add_argument("--graph", type=Path, help="Graph snapshot (YAML)")
    parser.add_argument("--config", type=Path, help="Path to blockmenu.toml")
    parser.add_argument("--log-level", help="Log level (default: LOG_LEVEL or WARNING)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Less output")
    
    subparsers = parser.add_subparsers(dest="cmd", required=True)
    
    # menu command
    parser_menu = subparsers.add_parser("menu", help="Show the context menu for a target")
    parser_menu.add_argument("--block", type=_block_id, help="Block under the pointer")
    parser_menu.add_argument("--bullet", action="store_true", help="Pointer is on the block bullet")
    parser_menu.add_argument("--select", nargs="+", type=_block_id, help="Selected blocks")
    parser_menu.add_argument(
        "--ref", nargs=2, type=_block_id, metavar=("OWNER", "REF"),
        help="Block reference under the pointer"
    )
    parser_menu.add_argument("--page", help="Page title under the pointer")
    parser_menu.add_argument("--format", choices=["text", "json"], default="text")
    
    # timestamp command
    parser_ts = subparsers.add_parser("timestamp", help="Encode a scheduling timestamp")
    parser_ts.add_argument("date", type=_parse_date, help="YYYY-MM-DD")
    parser_ts.add_argument("--time", help="HH:mm")
    parser_ts.add_argument("--every", help="Repeat interval, e.g. 2d or 1w")
    parser_ts.add_argument("--command", choices=["scheduled", "deadline"], default="scheduled")
    parser_ts.add_argument("--block", type=_block_id, help="Write the timestamp to this block")
    parser_ts.add_argument("--save", action="store_true", help="Save the graph after writing")
    
    # date command
    parser_date = subparsers.add_parser("date", help="Journal page reference for a date")
    parser_date.add_argument("date", type=_parse_date, help="YYYY-MM-DD")
    
    # parse command
    parser_parse = subparsers.add_parser("parse", help="Parse timestamp text")
    parser_parse.add_argument("text", help="e.g. '<2024-03-05 Tue 09:30 .+2d>'")
    
    # serve command
    parser_serve = subparsers.add_parser("serve", help="Start local JSON API server")
    parser_serve.add_argument("--host", default="127.0.0.1")
    parser_serve.add_argument("--port", type=int, default=8765)
    parser_serve.add_argument("--token", help="Bearer token (generated if omitted)")
    parser_serve.add_argument("--no-token", action="store_true", help="Disable authentication")
    parser_serve.add_argument("--cors", action="store_true", help="Enable CORS")
    
    args = parser.parse_args()
    
    try:
        rt = build_runtime(graph_path=args.graph, config_path=args.config)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    
    configure_logging(
        level=args.log_level or rt.config.logging.level,
        log_file=rt.config.logging.file,
    )
    
    handlers = {
        "menu": cmd_menu,
        "timestamp": cmd_timestamp,
        "date": cmd_date,
        "parse": cmd_parse,
        "serve": cmd_serve,
    }
    
    handler = handlers.get(args.cmd)
    if handler:
        try:
            exit_code = handler(args, rt)
            sys.exit(exit_code)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

"""Entry point for the directory-bookmarks CLI."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from . import __version__, open_channel
from .channel import BookmarkChannel, MethodResult
from .config import Settings, default_config_path, load_settings
from .log import configure_logging, logger


def _emit(result: MethodResult, *, raw: bool = False) -> int:
    """Print *result* and return the process exit code."""
    if not result.ok:
        print(f"{result.code}: {result.message}", file=sys.stderr)
        return 1
    if raw:
        return 0
    value = result.value
    if isinstance(value, list):
        for item in value:
            print(item)
    elif isinstance(value, dict) or value is None:
        print(json.dumps(value, indent=2))
    elif isinstance(value, bool):
        print("yes" if value else "no")
    else:
        print(value)
    return 0


def _run_doctor(settings: Settings, config_path: Path) -> int:
    """Print an environment report and return the exit code."""
    print("Directory Bookmarks -- Environment Doctor\n")
    print(f"  Python:   {sys.executable} ({sys.version.split()[0]})")
    print(f"  Config:   {config_path}")
    print(f"  Store:    {settings.store.resolved_path}")
    print()

    all_ok = True
    for mod_name, pkg_name in (("yaml", "pyyaml"), ("fastapi", "fastapi"), ("uvicorn", "uvicorn")):
        try:
            mod = __import__(mod_name)
            ver = getattr(mod, "__version__", "installed")
            print(f"  [ok] {pkg_name:20s}  {ver}")
        except ImportError:
            marker = "!!" if mod_name == "yaml" else "--"
            print(f"  [{marker}] {pkg_name:20s}  NOT IMPORTABLE")
            all_ok = all_ok and mod_name != "yaml"

    channel = open_channel(settings)
    resolved = channel.gate.resolve_bookmark()
    print()
    if resolved is None:
        print(f"  [--] {'Bookmark':20s}  none (or stale)")
    else:
        writable = channel.gate.has_write_permission()
        print(f"  [ok] {'Bookmark':20s}  {resolved.path}")
        print(f"  [{'ok' if writable else '!!'}] {'Writable':20s}  {writable}")

    print()
    print("  All checks passed." if all_ok else "  Some checks failed.")
    return 0 if all_ok else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="directory-bookmarks",
        description="Bookmark a directory and read/write files inside it",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"directory-bookmarks {__version__}",
    )
    parser.add_argument("--config", type=Path, help="Settings file (YAML)")
    parser.add_argument("--store", type=Path, help="Preference store file (JSON)")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log at DEBUG level"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("save", help="Bookmark a directory")
    p.add_argument("path")
    sub.add_parser("resolve", help="Show the bookmarked directory")
    p = sub.add_parser("write", help="Write a file into the bookmark")
    p.add_argument("name")
    p.add_argument("source", nargs="?", default="-", help="Input file (default: stdin)")
    p = sub.add_parser("read", help="Read a file from the bookmark")
    p.add_argument("name")
    p.add_argument("--output", "-o", type=Path, help="Write to file instead of stdout")
    sub.add_parser("ls", help="List files in the bookmark")
    sub.add_parser("can-write", help="Check write permission")
    sub.add_parser("request-write", help="Request write permission")
    p = sub.add_parser("serve", help="Run the HTTP bridge")
    p.add_argument("--host", type=str, default=None)
    p.add_argument("--port", type=int, default=None)
    sub.add_parser("doctor", help="Check environment health and exit")
    return parser


def run(argv: list[str] | None = None, channel: BookmarkChannel | None = None) -> int:
    """Parse *argv* and execute one command. Returns the exit code."""
    args = build_parser().parse_args(argv)

    config_path = args.config or default_config_path()
    settings = load_settings(config_path)
    if args.store:
        settings.store.path = str(args.store)
    configure_logging("DEBUG" if args.verbose else settings.logging.level)

    if args.command == "doctor":
        return _run_doctor(settings, config_path)

    if args.command == "serve":
        try:
            from directory_bookmarks.web import main as web_main

            web_main(port=args.port, host=args.host, settings=settings)
        except ImportError as exc:
            print(
                f"Web dependencies not installed: {exc}\n"
                "Install with:  pip install directory-bookmarks[web]",
                file=sys.stderr,
            )
            return 1
        except KeyboardInterrupt:
            pass
        return 0

    channel = channel or open_channel(settings)

    if args.command == "save":
        return _emit(channel.handle("saveDirectoryBookmark", {"path": args.path}))
    if args.command == "resolve":
        return _emit(channel.handle("resolveDirectoryBookmark"))
    if args.command == "write":
        if args.source == "-":
            data = sys.stdin.buffer.read()
        else:
            try:
                data = Path(args.source).read_bytes()
            except OSError as exc:
                print(f"cannot read {args.source}: {exc}", file=sys.stderr)
                return 1
        return _emit(channel.handle("saveFile", {"fileName": args.name, "data": data}))
    if args.command == "read":
        result = channel.handle("readFile", {"fileName": args.name})
        if result.ok:
            if args.output:
                try:
                    args.output.write_bytes(result.value)
                except OSError as exc:
                    print(f"cannot write {args.output}: {exc}", file=sys.stderr)
                    return 1
            else:
                sys.stdout.buffer.write(result.value)
                sys.stdout.buffer.flush()
        return _emit(result, raw=True)
    if args.command == "ls":
        return _emit(channel.handle("listFiles"))
    if args.command == "can-write":
        return _emit(channel.handle("hasWritePermission"))
    if args.command == "request-write":
        return _emit(channel.handle("requestWritePermission"))

    logger.debug("unhandled command %s", args.command)
    return 2


def main() -> None:
    """Run the directory-bookmarks CLI."""
    sys.exit(run())


if __name__ == "__main__":
    main()

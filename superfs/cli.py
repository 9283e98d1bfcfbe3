# superfs/cli.py

"""
Command line interface: ls, copy, delete and watch over the public API
"""
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .fs import Directory, Entry, SuperFSError
from .utils.config import Config, load_config, set_config
from .utils.logger import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="superfs", description="Directory tree operations")
    parser.add_argument("--config", help="Config file (YAML or JSON)")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR")
    parser.add_argument("--log-format", choices=["text", "color", "json"])

    sub = parser.add_subparsers(dest="command", required=True)

    ls = sub.add_parser("ls", help="List directory entries")
    ls.add_argument("path")
    ls.add_argument("-r", "--recursive", action="store_true")
    kind = ls.add_mutually_exclusive_group()
    kind.add_argument("--files-only", action="store_true")
    kind.add_argument("--dirs-only", action="store_true")
    ls.add_argument("--filter", action="append", help="Inclusion pattern (repeatable)")
    ls.add_argument("--ignore", action="append", help="Ignore pattern (repeatable)")
    ls.add_argument("--json", action="store_true", help="Print entries as JSON")

    copy = sub.add_parser("copy", help="Copy a directory tree")
    copy.add_argument("src")
    copy.add_argument("dest")
    copy.add_argument("--overwrite", action="store_true")

    delete = sub.add_parser("delete", help="Delete directory contents")
    delete.add_argument("path")

    watch = sub.add_parser("watch", help="Print changes below a directory")
    watch.add_argument("path")
    watch.add_argument("--ignore", action="append")
    watch.add_argument("--quiet-period", type=float)
    watch.add_argument("--polling", action="store_true")
    watch.add_argument("--poll-interval", type=float, help="Seconds between polls (with --polling)")

    return parser


def _directory(path: str, config: Config) -> Directory:
    # Command line paths are relative to where the user runs the command
    return Directory(path, base_dir=Path.cwd(), config=config)


def _format_entry(entry: Entry) -> str:
    marker = "d" if entry.is_dir else "l" if entry.is_link else "-"
    return f"{marker} {entry.size:>10} {entry.relative or entry.path}"


async def _ls(args, config: Config) -> int:
    entries = await _directory(args.path, config).read(
        recursive=args.recursive,
        skip_files=args.dirs_only,
        skip_dirs=args.files_only,
        filter=args.filter,
        ignore=args.ignore,
    )
    if args.json:
        print(json.dumps([entry.to_dict() for entry in entries], indent=2, default=str))
    else:
        for entry in entries:
            print(_format_entry(entry))
    return 0


async def _copy(args, config: Config) -> int:
    overrides = {"overwrite": True} if args.overwrite else {}
    entries = await _directory(args.src, config).copy(args.dest, **overrides)
    skipped = [e for e in entries if e.file_exists and not e.file_overwritten]
    for entry in skipped:
        logger.info(f"Skipped existing file: {entry.relative}")
    return 0


async def _delete(args, config: Config) -> int:
    await _directory(args.path, config).delete()
    return 0


async def _watch(args, config: Config) -> int:
    def on_change(entry: Entry):
        print(f"{entry.change_mode}: {entry.path / entry.changed_file if entry.changed_file else entry.path}")

    session = await _directory(args.path, config).watch(
        on_change,
        ignore=args.ignore,
        quiet_period=args.quiet_period,
        use_polling=args.polling or None,
        poll_interval=args.poll_interval,
    )
    print(f"Watching {len(session)} directories. Press Ctrl+C to stop.")
    try:
        while True:
            await asyncio.sleep(1)
    finally:
        session.stop()


COMMANDS = {
    "ls": _ls,
    "copy": _copy,
    "delete": _delete,
    "watch": _watch,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    set_config(config)
    setup_logging(
        log_level=args.log_level or config.log_level,
        log_file=config.log_file,
        log_format=args.log_format or config.log_format,
    )

    try:
        return asyncio.run(COMMANDS[args.command](args, config))
    except KeyboardInterrupt:
        print("\nShutting down...")
        return 0
    except SuperFSError as e:
        logger.error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

"""Command line interface for emitting and inspecting log records."""

from __future__ import annotations

import argparse
from typing import Dict, List

from pipelog.core.config import get_settings
from pipelog.core.levels import LEVELS
from pipelog.core.logging import configure_logging
from pipelog.facade.handlers import ConsoleHandler
from pipelog.facade.logger import Logger
from pipelog.render.renderer import FormatRenderer


def _parse_meta(pairs: List[str]) -> Dict[str, str]:
    meta: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"Metadata must look like key=value, got {pair!r}")
        meta[key] = value
    return meta


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Leveled multi-format logger")
    parser.add_argument("--log-level", default=None, help="Level of pipelog's own diagnostics")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True

    emit = subparsers.add_parser("emit", help="Render one record to the console")
    emit.add_argument("message", nargs="*", help="Arguments of the log call")
    emit.add_argument("--level", choices=LEVELS, default="info")
    emit.add_argument("--name", default=None, help="Dotted logger name")
    emit.add_argument(
        "--format",
        dest="formats",
        action="append",
        default=None,
        help="Template, or 'json'; repeat for several outputs",
    )
    emit.add_argument("--meta", action="append", default=[], help="Metadata entry as key=value")
    emit.add_argument("--width", type=int, default=None, help="Viewport width used for separator wrapping")
    emit.add_argument("--strict", action="store_true", help="Fail on formats that cannot be rendered")

    subparsers.add_parser("levels", help="List the level vocabulary")
    return parser


def main(argv: List[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()
    configure_logging(args.log_level or settings.log_level)
    if args.command == "levels":
        for level in LEVELS:
            print(level)
    elif args.command == "emit":
        try:
            meta = _parse_meta(args.meta)
        except argparse.ArgumentTypeError as exc:
            parser.error(str(exc))
        renderer = FormatRenderer(
            separator=settings.separator,
            line_width=args.width if args.width is not None else settings.line_width,
        )
        emitter = Logger(
            name=args.name,
            meta=meta,
            formats=tuple(args.formats) if args.formats else None,
            handler=ConsoleHandler(renderer, strict=args.strict),
        )
        emit_record(emitter, args.level, args.message)


def emit_record(emitter: Logger, level: str, message: List[str]) -> None:
    # "debug" goes through the alias so the --debug option is not needed.
    method = "log" if level == "debug" else level
    getattr(emitter, method)(*message)


def run() -> None:
    main()

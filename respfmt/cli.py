"""CLI entrypoints for respfmt commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .formatting import ResponseFormatter
from .logging import configure_logging, get_logger

logger = get_logger("cli")


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="respfmt",
        description="Normalize raw model replies into chat-ready markdown.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .respfmt.yml or its directory (defaults to current directory).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    format_parser = subparsers.add_parser(
        "format",
        help="Format a reply read from a file or standard input.",
    )
    _add_verbose_option(format_parser, suppress_default=True)
    format_parser.add_argument(
        "path",
        nargs="?",
        default="-",
        help="File containing the raw reply ('-' or omitted reads stdin).",
    )
    format_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the formatted reply to this file instead of stdout.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP formatting service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default=None, help="Bind address (overrides config).")
    serve_parser.add_argument(
        "--port", type=int, default=None, help="Bind port (overrides config)."
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for respfmt commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    try:
        configure_logging(config.logging, verbose=bool(args.verbose))
    except OSError as exc:
        parser.exit(1, f"Cannot open log file: {exc}\n")

    if args.command == "format":
        try:
            raw = _read_input(args.path)
        except (OSError, UnicodeDecodeError) as exc:
            parser.exit(1, f"Cannot read {args.path}: {exc}\n")
        logger.debug("Read %d characters from %s", len(raw), args.path)
        formatted = ResponseFormatter().format(raw)
        if args.output:
            try:
                Path(args.output).write_text(formatted + "\n", encoding="utf-8")
            except OSError as exc:
                parser.exit(1, f"Cannot write {args.output}: {exc}\n")
            logger.info("Formatted reply written to %s", args.output)
        else:
            print(formatted)
    elif args.command == "serve":
        from .service import load_generator, run_service

        generator = None
        if config.service.generator:
            try:
                generator = load_generator(config.service.generator)
            except ConfigError as exc:
                parser.exit(1, f"{exc}\n")
        host = args.host or config.service.host
        port = args.port if args.port is not None else config.service.port
        run_service(host=host, port=port, generator=generator)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


if __name__ == "__main__":
    main(sys.argv[1:])

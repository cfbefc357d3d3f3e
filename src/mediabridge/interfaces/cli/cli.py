from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Iterable
from dataclasses import asdict
from pathlib import Path
from typing import Any

import structlog

from mediabridge.domain.entities.extraction import (
    ExtractionRequest,
    ExtractorCategory,
    MediaType,
)
from mediabridge.domain.extensions import ExtensionError
from mediabridge.infrastructure.composition import Container
from mediabridge.infrastructure.config import AppConfig, load_config
from mediabridge.infrastructure.logging.setup import configure_logging

log = structlog.get_logger(__name__)


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="mediabridge")

    # Config wiring flags (no business logic)
    parser.add_argument("--config", default=None, help="Path to YAML config file.")
    parser.add_argument("--dotenv", default=None, help="Path to .env file.")
    parser.add_argument(
        "--extension-dir",
        default=None,
        help="Override extensions directory.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level.",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "console"],
        help="Override log format.",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    extract = commands.add_parser("extract", help="Resolve an embed URL to streams.")
    extract.add_argument("url")
    extract.add_argument(
        "--category",
        default=ExtractorCategory.VIDEO.value,
        choices=[c.value for c in ExtractorCategory],
    )
    extract.add_argument(
        "--media-type",
        default=None,
        choices=[m.value for m in MediaType],
    )
    extract.add_argument("--referer", default=None)

    extractors = commands.add_parser("extractors", help="List catalog entry ids.")
    extractors.add_argument(
        "--category",
        default=None,
        choices=[c.value for c in ExtractorCategory],
    )

    call = commands.add_parser("call", help="Invoke an extension function.")
    call.add_argument("extension_id")
    call.add_argument("function")
    call.add_argument(
        "args",
        nargs="*",
        help="Positional arguments, each parsed as JSON.",
    )

    return parser.parse_args(argv)


def _parse_json_args(raw_args: list[str]) -> list[Any]:
    try:
        return [json.loads(raw) for raw in raw_args]
    except json.JSONDecodeError as e:
        raise SystemExit(f"Invalid JSON argument: {e}") from e


def _print_json(payload: Any) -> None:
    sys.stdout.write(json.dumps(payload, indent=2, ensure_ascii=False, default=str))
    sys.stdout.write("\n")


async def _run(args: argparse.Namespace, config: AppConfig) -> int:
    async with Container(config) as container:
        if args.command == "extractors":
            if args.category is None:
                ids = container.registry.ids
            else:
                category = ExtractorCategory(args.category)
                ids = [info.id for info in container.registry.by_category(category)]
            _print_json(ids)
            return 0

        if args.command == "extract":
            request = ExtractionRequest(
                url=args.url,
                category=ExtractorCategory(args.category),
                media_type=MediaType(args.media_type) if args.media_type else None,
                referer=args.referer,
            )
            streams = await container.dispatcher.extract(request)
            _print_json([asdict(stream) for stream in streams])
            return 0 if streams else 1

        call_args = _parse_json_args(args.args)
        try:
            result = await container.runtime.call_function(
                args.extension_id, args.function, call_args
            )
        except ExtensionError as e:
            log.error("extension_call_failed", error=str(e))
            return 1
        _print_json(result)
        return 0


def start(argv: Iterable[str] | None = None) -> int:
    """
    Process entrypoint.

    Load config exactly once here, then hand it to the container.
    """
    if argv is None:
        argv = sys.argv[1:]

    args = _parse_args(argv)

    config_path = Path(args.config) if args.config else None
    dotenv_path = Path(args.dotenv) if args.dotenv else None

    cli_overrides: dict[str, Any] = {}
    if args.extension_dir:
        cli_overrides["extension_dir"] = args.extension_dir
    if args.log_level:
        cli_overrides["log_level"] = args.log_level
    if args.log_format:
        cli_overrides["log_format"] = args.log_format

    config = load_config(
        config_path=config_path,
        dotenv_path=dotenv_path,
        cli_overrides=cli_overrides,
    )

    configure_logging(config)

    return asyncio.run(_run(args, config))


if __name__ == "__main__":
    raise SystemExit(start())

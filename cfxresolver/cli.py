"""Console adapter: argument parsing, report printing and exit codes."""
from __future__ import annotations

import argparse
import asyncio
import json
import sys
from dataclasses import replace

from .config import Settings, load_settings
from .domain.errors import ResolverError
from .domain.models import ResolutionResult
from .logging_conf import get_logger, setup_logging
from .report import render_lines
from .service.resolver import resolve

logger = get_logger("cli")

EXIT_OK = 0
EXIT_RESOLVE_ERROR = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cfx-resolve",
        description="Resolve a cfx.re join link or token to server endpoints and info",
    )
    parser.add_argument("input", help="cfx.re/join/<token>, a servers/detail URL, or a bare token")
    parser.add_argument("--json", action="store_true", help="print the result as JSON")
    parser.add_argument("--directory-url", default=None)
    parser.add_argument("--lookup-timeout", type=float, default=None)
    parser.add_argument("--probe-timeout", type=float, default=None)
    parser.add_argument("--log-level", default=None)
    return parser


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse CLI arguments for the resolver."""
    return build_parser().parse_args(argv)


def settings_from_args(args: argparse.Namespace, base: Settings) -> Settings:
    """Overlay explicit CLI flags on top of the environment settings.

    Raises:
        ValueError: if --probe-timeout is not positive.
    """
    overrides: dict = {}
    if args.directory_url:
        overrides["directory_url"] = args.directory_url.rstrip("/")
    if args.lookup_timeout is not None:
        overrides["lookup_timeout"] = args.lookup_timeout if args.lookup_timeout > 0 else None
    if args.probe_timeout is not None:
        if args.probe_timeout <= 0:
            raise ValueError("--probe-timeout must be positive")
        overrides["probe_timeout"] = args.probe_timeout
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()
    return replace(base, **overrides)


def to_json(result: ResolutionResult) -> str:
    """Serialize a result, with the status document exactly as the server sent it."""
    data = result.model_dump(mode="json")
    if result.status is not None:
        data["status"] = result.status.raw
    return json.dumps(data, indent=2, ensure_ascii=False)


def run(args: argparse.Namespace, settings: Settings) -> int:
    try:
        result = asyncio.run(resolve(args.input, settings=settings))
    except ResolverError as e:
        logger.error("resolve.error", extra={"event": "resolve_error", "error_code": e.code})
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RESOLVE_ERROR

    print(to_json(result) if args.json else "\n".join(render_lines(result)))
    return EXIT_OK


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    try:
        settings = settings_from_args(args, load_settings())
    except ValueError as e:
        parser.error(str(e))
    setup_logging(settings.log_level, stream=sys.stderr)
    raise SystemExit(run(args, settings))


if __name__ == "__main__":
    main()

"""CLI entrypoints for componentmap commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Dict

from .builder import ManifestBuilder
from .config import ComponentMapConfig, ConfigError, load_config
from .errors import ComponentMapError, FileSystemError, RouteConfigError
from .logging import configure_logging, get_logger
from .models import manifest_payload
from .routes import RouteConfigLoader, RouteEntry


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


def _add_project_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the application root (defaults to current directory).",
    )
    parser.add_argument(
        "--app-dir",
        default=None,
        help="Source directory below the root to analyze (defaults to `app`).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="componentmap",
        description="Build a component manifest for a file-routed React application.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Analyze the application and print the manifest as JSON.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    _add_project_options(build_parser)
    build_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the manifest JSON to this file instead of stdout.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Analyze the application and serve the manifest to inspection clients.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_project_options(serve_parser)
    serve_parser.add_argument("--mode", default=None, help="Framework mode label for route loading.")
    serve_parser.add_argument("--host", default=None, help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=None, help="Port to listen on.")

    return parser


def _resolve_config(args: argparse.Namespace) -> ComponentMapConfig:
    root = Path(args.path).expanduser().resolve()
    if not root.is_dir():
        raise FileSystemError(f"Application root not found: {root}")
    config = load_config(root)
    if args.app_dir:
        config.app_directory = args.app_dir
    if getattr(args, "mode", None):
        config.mode = args.mode
    if getattr(args, "host", None):
        config.server.host = args.host
    if getattr(args, "port", None) is not None:
        config.server.port = args.port
    return config


def _load_routes(config: ComponentMapConfig) -> Dict[str, RouteEntry]:
    logger = get_logger("cli")
    try:
        return RouteConfigLoader().load(
            config.root,
            config.mode,
            routes_file=config.routes.file,
            command=config.routes.command,
        )
    except RouteConfigError as exc:
        logger.warning("Route table unavailable, continuing without it: %s", exc)
        return {}


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for componentmap commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    server_loggers = ("uvicorn.error",) if args.command == "serve" else ()
    configure_logging(verbose=bool(args.verbose), also=server_loggers)

    try:
        config = _resolve_config(args)
        manifest = ManifestBuilder().build(config.root.as_posix(), config.app_directory)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")
    except ComponentMapError as exc:
        parser.exit(1, f"componentmap {args.command} failed: {exc}\n")

    if args.command == "build":
        output = json.dumps(manifest_payload(manifest), indent=2)
        if args.output:
            try:
                Path(args.output).write_text(output + "\n", encoding="utf-8")
            except OSError as exc:
                parser.exit(1, f"componentmap build failed: cannot write {args.output}: {exc}\n")
            print(f"Manifest with {len(manifest)} components written to {args.output}")
        else:
            print(output)
    elif args.command == "serve":
        from .service import run_service

        routes = _load_routes(config)
        run_service(manifest, routes, host=config.server.host, port=config.server.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])

from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
import uvicorn

from animeav1.domain.entities import SearchQuery
from animeav1.domain.exceptions import ProviderError
from animeav1.infrastructure.config import AppConfig, load_config
from animeav1.infrastructure.http.client import create_http_client
from animeav1.infrastructure.logging.setup import configure_logging
from animeav1.interfaces.api.catalog.presenter import (
    render_episode,
    render_episode_server,
    render_error,
    render_search_result,
)
from animeav1.interfaces.composition import build_provider
from animeav1.interfaces.main import build_app

log = structlog.get_logger(__name__)


def _add_config_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", default=None, help="Path to YAML config file.")
    parser.add_argument("--dotenv", default=None, help="Path to .env file.")
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


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="animeav1")
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Run the HTTP API (default).")
    serve.add_argument("--host", default=None, help="Bind host (overrides HOST env).")
    serve.add_argument(
        "--port", default=None, type=int, help="Bind port (overrides PORT env)."
    )
    _add_config_flags(serve)

    search = sub.add_parser("search", help="Search the catalog.")
    search.add_argument("text", nargs="?", default=None, help="Title filter.")
    search.add_argument("--dub", action="store_true", help="Request the dub variant.")
    _add_config_flags(search)

    episodes = sub.add_parser("episodes", help="List episodes of an anime id or slug.")
    episodes.add_argument("anime_id")
    _add_config_flags(episodes)

    server = sub.add_parser("server", help="Resolve the HLS stream of an episode id.")
    server.add_argument("episode_id")
    _add_config_flags(server)

    argv = list(argv) if argv is not None else sys.argv[1:]
    # Bare flags (or nothing) mean "serve".
    if not argv or (argv[0].startswith("-") and argv[0] not in ("-h", "--help")):
        argv = ["serve", *argv]
    return parser.parse_args(argv)


def _load(args: argparse.Namespace) -> AppConfig:
    cli_overrides: dict[str, Any] = {}
    if args.log_level:
        cli_overrides["log_level"] = args.log_level
    if args.log_format:
        cli_overrides["log_format"] = args.log_format

    return load_config(
        config_path=Path(args.config) if args.config else None,
        dotenv_path=Path(args.dotenv) if args.dotenv else None,
        cli_overrides=cli_overrides,
    )


async def _run_stage(args: argparse.Namespace, config: AppConfig) -> Any:
    async with create_http_client(config) as client:
        provider = build_provider(config, client)
        if args.command == "search":
            results = await provider.search(
                SearchQuery.from_dub_flag(args.text, args.dub)
            )
            return [render_search_result(r) for r in results]
        if args.command == "episodes":
            episodes = await provider.find_episodes(args.anime_id)
            return [render_episode(e) for e in episodes]
        episode_server = await provider.find_episode_server(args.episode_id)
        return render_episode_server(episode_server)


def _serve(args: argparse.Namespace, config: AppConfig, log_config: dict) -> None:
    host = args.host or os.getenv("HOST", "0.0.0.0")
    port = int(args.port or os.getenv("PORT", "7980"))
    uvicorn.run(build_app(config), host=host, port=port, log_config=log_config)


def start(argv: Iterable[str] | None = None) -> int:
    """
    Process entrypoint.

    Loads config exactly once, configures logging, then either serves the
    API or runs a single pipeline stage and prints its JSON.
    """
    if argv is None:
        argv = sys.argv[1:]

    args = _parse_args(argv)
    config = _load(args)
    log_config = configure_logging(config)

    if args.command == "serve":
        _serve(args, config, log_config)
        return 0

    try:
        output = asyncio.run(_run_stage(args, config))
    except ProviderError as exc:
        log.error("cli_stage_failed", command=args.command, kind=exc.kind)
        print(json.dumps(render_error(exc), ensure_ascii=False), file=sys.stderr)
        return 1

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(start())

"""CLI entry point for sitestage."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from sitestage.config import DEFAULT_STATE_DB
from sitestage.errors import SiteStageError
from sitestage.models import FileInfo
from sitestage.registry import RecentFiles
from sitestage.storage import StateStore
from sitestage.workspace import Workspace

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)
logger = logging.getLogger(__name__)


def open_site(
    source: str,
    output: str | None = None,
    template: bool = False,
    state: str | None = None,
    templates: str | None = None,
) -> None:
    """Load a site document into a workspace, optionally saving it elsewhere.

    Args:
        source: Path of the document (or template url with ``template``)
        output: Where to save the cleaned document
        template: Open ``source`` as a template instead of a project file
        state: Path of the state database holding recent files
        templates: Directory relative template urls resolve in
    """

    async def run() -> None:
        workspace = Workspace(
            state=StateStore(state or DEFAULT_STATE_DB),
            templates_dir=templates,
        )
        if template:
            await workspace.open_template_async(source)
        else:
            await workspace.open_async(FileInfo.from_path(source))

        status = workspace.status()
        logger.info(f"Loaded {source}")
        logger.info(f"  Title: {status['title'] or '-'}")
        logger.info(f"  Pages: {', '.join(status['pages']) or '-'}")
        logger.info(f"  Template: {status['template']}")

        if output:
            await workspace.save_as_async(FileInfo.from_path(output))
            logger.info(f"Saved -> {output}")

    try:
        asyncio.run(run())
    except (SiteStageError, OSError, ValueError) as e:
        logger.error(f"Cannot open {source}: {e}")
        sys.exit(1)


def recent(clear: bool = False, state: str | None = None) -> None:
    """List or clear the recently opened documents."""
    recent_files = RecentFiles(StateStore(state or DEFAULT_STATE_DB))
    if clear:
        recent_files.clear()
        logger.info("Recent files cleared")
        return

    files = recent_files.list()
    if not files:
        print("No recent files")
        return
    for i, file_info in enumerate(files, 1):
        print(f"{i}. {file_info.name:<30} {file_info.url}")


def deck(state: str | None = None) -> None:
    """Launch the Stage Deck TUI."""
    from sitestage.deck import main as deck_main

    deck_main(state_path=Path(state) if state else None)


def serve(transport: str = "stdio", state: str | None = None) -> None:
    """Start the MCP server for an editing session."""
    # Import here to avoid loading MCP unless needed
    from sitestage.server import create_mcp_server

    from typing import cast, Literal

    logger.info(f"Serving sitestage via {transport}")
    mcp = create_mcp_server(Path(state) if state else DEFAULT_STATE_DB)
    mcp.run(transport=cast(Literal["stdio", "sse", "streamable-http"], transport))


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="sitestage",
        description="sitestage - load, check and save live site documents",
    )
    parser.add_argument(
        "--state",
        help=f"State database path (default: {DEFAULT_STATE_DB})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # open command
    open_parser = subparsers.add_parser(
        "open",
        help="Open a site document and optionally save a cleaned copy",
    )
    open_parser.add_argument("source", help="Site document path or template url")
    open_parser.add_argument("-o", "--output", help="Save the document to this path")
    open_parser.add_argument(
        "--template",
        action="store_true",
        help="Open the source as a template (must be saved with --output)",
    )
    open_parser.add_argument(
        "--templates",
        help="Directory relative template urls resolve in",
    )

    # recent command
    recent_parser = subparsers.add_parser(
        "recent",
        help="List recently opened documents",
    )
    recent_parser.add_argument(
        "--clear",
        action="store_true",
        help="Forget the recently opened documents",
    )

    # deck command
    subparsers.add_parser(
        "deck",
        help="Launch the Stage Deck TUI",
    )

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Start an MCP server exposing an editing session",
    )
    serve_parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default="stdio",
        help="Transport protocol (default: stdio)",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.command == "open":
        open_site(args.source, args.output, args.template, args.state, args.templates)
    elif args.command == "recent":
        recent(args.clear, args.state)
    elif args.command == "deck":
        deck(args.state)
    elif args.command == "serve":
        serve(args.transport, args.state)


if __name__ == "__main__":
    main()

# src/main.py - v1
"""CLI entry point: info, export, search commands on project files.

Usage:
    osintgraph info <project.json>
    osintgraph export <project.json> -f graphml -o graph.graphml
    osintgraph export <project.json> -f all
    osintgraph search <project.json> <query>
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from osintgraph.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    from osintgraph.core.errors import GraphStoreError

    try:
        return args.func(args)
    except GraphStoreError as exc:
        logger.error("%s: %s", exc.kind, exc.message)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


def cli() -> None:
    """Console-script wrapper."""
    sys.exit(main())


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="osintgraph",
        description=f"osintgraph v{__version__} - investigation graph tools",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- info ---
    p_info = subparsers.add_parser("info", help="Summarize a project file")
    p_info.add_argument("project", type=Path, help="Path to project file")
    p_info.set_defaults(func=_cmd_info)

    # --- export ---
    p_export = subparsers.add_parser("export", help="Export a project file")
    p_export.add_argument("project", type=Path, help="Path to project file")
    p_export.add_argument(
        "-f", "--format", dest="fmt", default="graphml",
        choices=["json", "csv", "graphml", "all"],
        help="Export format, or 'all' for every configured format (default: graphml)",
    )
    p_export.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Output path (default: <project>_export.<ext> next to the project; ignored with -f all)",
    )
    p_export.set_defaults(func=_cmd_export)

    # --- search ---
    p_search = subparsers.add_parser("search", help="Search entities in a project")
    p_search.add_argument("project", type=Path, help="Path to project file")
    p_search.add_argument("query", help="Case-insensitive substring")
    p_search.set_defaults(func=_cmd_search)

    return parser


def _setup_logging(verbose: bool) -> None:
    from osintgraph.config.settings import load_settings
    from osintgraph.logging.logger import setup_logging

    settings = load_settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format="text",
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


def _open_project(path: Path):
    """Load a project into a fresh store; returns (store, metadata)."""
    from osintgraph.config.settings import load_settings
    from osintgraph.logging.context import set_project_context
    from osintgraph.project.snapshot import ProjectSnapshot
    from osintgraph.store.graph_store import GraphStore

    store = GraphStore(load_settings())
    meta = ProjectSnapshot(store).load(path)
    set_project_context(meta.project_name)
    return store, meta


def _cmd_info(args: argparse.Namespace) -> int:
    _, meta = _open_project(args.project)
    saved = meta.saved_at.isoformat() if meta.saved_at else "unknown"
    print(f"Project       : {meta.project_name}")
    print(f"Saved at      : {saved}")
    print(f"Format        : {meta.format_version}")
    print(f"Entities      : {meta.entity_count}")
    print(f"Relationships : {meta.relationship_count}")
    print(f"Attachments   : {meta.attachment_count}")
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    from osintgraph.graph.exporter_factory import create_exporters, get_exporter

    store, _ = _open_project(args.project)
    snapshot = store.snapshot()

    if args.fmt == "all":
        exporters = create_exporters(store.settings)
    else:
        exporters = [get_exporter(args.fmt, store.settings)]

    for exporter in exporters:
        output = None if args.fmt == "all" else args.output
        output = output or args.project.with_name(
            f"{args.project.stem}_export{exporter.file_extension}"
        )
        print(exporter.export(snapshot, output))
    return 0


def _cmd_search(args: argparse.Namespace) -> int:
    store, _ = _open_project(args.project)
    matches = store.search_entities(args.query)
    for entity in matches:
        print(f"{entity.id}\t{entity.entity_type.value}\t{entity.label}")
    logger.info("%d entities match %r", len(matches), args.query)
    return 0


if __name__ == "__main__":
    sys.exit(main())

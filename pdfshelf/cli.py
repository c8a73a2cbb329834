"""
Command line interface for pdfshelf.

Usage:
    pdfshelf add PATH...                 # Index PDFs, walking directories
    pdfshelf search [-n N] [-t] QUERY    # Full-text search (FTS5 syntax)
    pdfshelf list EXPR...                # List PDFs whose path is LIKE EXPR
    pdfshelf cover [-v VIEWER] ID        # Open the stored first page
    pdfshelf title FILE...               # Print the inferred title of files
    pdfshelf stats                       # Show index statistics
"""

import argparse
import shutil
import subprocess
import sys
import tempfile
from pathlib import Path
from typing import List

from .core import (
    Config,
    ConfigurationError,
    PDFShelfError,
    ExtractionError,
    get_config,
    reload_config,
    set_config,
    setup_logging
)
from .database import PDFRepository, configure_database, get_statistics, init_schema
from .extraction import FileScanner, PDFExtractor
from .indexer import IndexBuilder
from .search import SearchEngine
from .title import TitleEngine


PROG_NAME = "pdfshelf"

ANSI_BOLD = "\033[1m"
ANSI_RESET = "\033[0m"


def parse_args(argv: List[str] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog=PROG_NAME,
        description=(
            "Index PDF files into a full-text search database. "
            "The first page of each PDF is stored and can be displayed."
        )
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to custom config.json file"
    )

    parser.add_argument(
        "--db",
        type=str,
        help="Database name, created in the user config directory, "
             "or a path such as ./test.db"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug messages"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser(
        "add",
        help="Add the PDFs at paths to the index, walking directories"
    )
    add_parser.add_argument("paths", nargs="+", help="Files or directories")
    add_parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop existing index and rebuild from scratch"
    )
    add_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output"
    )

    search_parser = subparsers.add_parser(
        "search",
        help="Search PDFs for terms, see https://www.sqlite.org/fts5.html"
    )
    search_parser.add_argument("query", help="FTS5 query")
    search_parser.add_argument(
        "-n",
        dest="limit",
        type=int,
        default=None,
        help="Fetch at most n documents"
    )
    search_parser.add_argument(
        "-t", "--names-only",
        action="store_true",
        help="Show PDF paths only"
    )
    search_parser.add_argument(
        "--no-bold",
        action="store_true",
        help="Do not show matches in bold (ANSI terminals)"
    )

    list_parser = subparsers.add_parser(
        "list",
        help="List PDFs whose path matches SQL LIKE expressions"
    )
    list_parser.add_argument("exprs", nargs="+", help="LIKE expressions, e.g. %%papers%%")

    cover_parser = subparsers.add_parser("cover", help="Show the cover of a PDF by id")
    cover_parser.add_argument("id", type=int, help="Document id")
    cover_parser.add_argument(
        "-v", "--viewer",
        default="evince",
        help="PDF viewer to use, must be on PATH"
    )

    title_parser = subparsers.add_parser(
        "title",
        help="Print the title inferred from the first page of files"
    )
    title_parser.add_argument("files", nargs="+", help="PDF files or directories")

    subparsers.add_parser("stats", help="Show index statistics")

    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> Config:
    """Load configuration, falling back to defaults when no file exists."""
    if args.config:
        config = reload_config(Path(args.config))
    else:
        try:
            config = get_config()
        except ConfigurationError:
            config = set_config(Config.defaults())

    setup_logging(
        log_level="DEBUG" if args.verbose else config.logging.level,
        log_format=config.logging.format,
        logs_directory=config.paths.logs_directory,
        max_file_size_mb=config.logging.max_file_size_mb,
        backup_count=config.logging.backup_count,
        force=True
    )

    configure_database(args.db, Path.cwd())

    return config


def progress_callback(current: int, total: int, filename: str) -> None:
    """Print progress to stderr."""
    percent = (current / total) * 100 if total > 0 else 0
    bar_width = 30
    filled = int(bar_width * current / total) if total > 0 else 0
    bar = "=" * filled + "-" * (bar_width - filled)

    print(
        f"\r[{bar}] {percent:5.1f}% ({current}/{total}) {filename[:40]:<40}",
        end="",
        flush=True,
        file=sys.stderr
    )


def cmd_add(args: argparse.Namespace) -> int:
    """Index the given paths."""
    if args.reset:
        response = input("This will DELETE all existing index data. Continue? [y/N] ")
        if response.lower() != "y":
            print("Aborted.")
            return 0

    callback = None if args.quiet else progress_callback
    builder = IndexBuilder(reset=args.reset, progress_callback=callback)

    stats = builder.add_paths(args.paths)

    if not args.quiet:
        print(file=sys.stderr)

    print(f"Files scanned:     {stats.files_scanned:,}")
    print(f"Files indexed:     {stats.files_indexed:,}")
    print(f"Duplicates:        {stats.files_duplicate:,}")
    print(f"Files failed:      {stats.files_failed:,}")
    print(f"Titles found:      {stats.titles_found:,}")

    if stats.errors:
        print(f"\nErrors ({len(stats.errors)}):")
        for error in stats.errors[:20]:
            print(f"  - {error}")
        if len(stats.errors) > 20:
            print(f"  ... and {len(stats.errors) - 20} more errors")

    return 1 if stats.files_failed > 0 else 0


def cmd_search(args: argparse.Namespace) -> int:
    """Search the index and print matching documents."""
    init_schema()
    results = SearchEngine().search(args.query, args.limit)

    for result in results:
        header = f"[{result.id}] {result.path} (#{result.pages})"

        if args.names_only:
            print(header)
            continue

        if args.no_bold:
            snippet = result.highlighted("", "")
        else:
            snippet = result.highlighted(ANSI_BOLD, ANSI_RESET)

        print(f"{header}\nTitle: {result.title}\n{snippet}\n")

    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """List documents whose path matches LIKE expressions."""
    init_schema()
    repository = PDFRepository()

    for expr in args.exprs:
        for record in repository.list_like(expr):
            print(f"[{record.id}] {record.path} (#{record.pages})\nTitle: {record.title}")

    return 0


def cmd_cover(args: argparse.Namespace) -> int:
    """Write the cover of a document to a temp file and open it."""
    init_schema()
    cover = PDFRepository().get_cover(args.id)

    if cover is None:
        print(f"pdf with id {args.id} not found", file=sys.stderr)
        return 1

    viewer = shutil.which(args.viewer)
    if viewer is None:
        print(f"viewer not found on PATH: {args.viewer}", file=sys.stderr)
        return 1

    with tempfile.TemporaryDirectory(prefix=f"{PROG_NAME}-") as tmpdir:
        cover_path = Path(tmpdir) / f"cover-{args.id}.pdf"
        cover_path.write_bytes(cover)
        completed = subprocess.run([viewer, str(cover_path)])

    return completed.returncode


def cmd_title(args: argparse.Namespace) -> int:
    """Print the inferred title of each file."""
    config = get_config()
    extractor = PDFExtractor()
    engine = TitleEngine(settings=config.title)
    scanner = FileScanner()
    status = 0

    for path in args.files:
        found = False

        for filepath in scanner.scan([path]):
            found = True
            try:
                title = extractor.extract_title(filepath, engine)
            except ExtractionError as e:
                print(f"{filepath}: error: {e.message}", file=sys.stderr)
                status = 1
                continue

            print(f"{filepath}: {title}")

        if not found:
            print(f"{path}: error: no PDF file found", file=sys.stderr)
            status = 1

    return status


def cmd_stats(args: argparse.Namespace) -> int:
    """Print index statistics."""
    init_schema()
    stats = get_statistics()

    print(f"Documents:         {stats['total_documents']:,}")
    print(f"Pages:             {stats['total_pages']:,}")
    print(f"With title:        {stats['documents_with_title']:,}")
    print(f"Oldest entry:      {stats['oldest_entry'] or '-'}")
    print(f"Newest entry:      {stats['newest_entry'] or '-'}")

    return 0


COMMANDS = {
    "add": cmd_add,
    "search": cmd_search,
    "list": cmd_list,
    "cover": cmd_cover,
    "title": cmd_title,
    "stats": cmd_stats
}


def main(argv: List[str] = None) -> int:
    """Main entry point for the pdfshelf CLI."""
    args = parse_args(argv)

    try:
        load_config(args)
        return COMMANDS[args.command](args)
    except PDFShelfError as e:
        print(f"{PROG_NAME}: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

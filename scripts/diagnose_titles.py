"""
Diagnostic script to analyze title inference on PDFs.

Shows the phrases built from the first page, the ranked candidate and its
dictionary score, to tune the title settings on a real collection.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dataclasses import dataclass, field
from typing import List

from pdfshelf.core import Config, ConfigurationError, ExtractionError, get_config, set_config
from pdfshelf.extraction import FileScanner, PDFPlumberBackend
from pdfshelf.title import Phrase, TitleEngine


@dataclass
class TitleDiagnostic:
    """Title inference details for a single PDF."""
    filepath: Path
    run_count: int = 0
    phrases: List[Phrase] = field(default_factory=list)
    candidate: str = ""
    hits: int = 0
    tokens: int = 0
    accepted: bool = False
    error: str = ""


def diagnose_pdf(filepath: Path, engine: TitleEngine, backend: PDFPlumberBackend) -> TitleDiagnostic:
    """
    Run title inference step by step on a single PDF.

    Args:
        filepath: Path to the PDF file.
        engine: Title engine to diagnose.
        backend: Reader backend providing the first-page runs.

    Returns:
        TitleDiagnostic with the intermediate results.
    """
    result = TitleDiagnostic(filepath=filepath)

    try:
        runs = backend.first_page_runs(filepath)
    except ExtractionError as e:
        result.error = f"{e.__class__.__name__}: {e.message}"
        return result

    result.run_count = len(runs)
    result.phrases = engine.phrases(runs)
    result.candidate = engine.ranker.rank(result.phrases)
    result.hits, result.tokens = engine.validator.score(result.candidate)
    result.accepted = engine.validator.accept(result.candidate)

    return result


def print_report(results: List[TitleDiagnostic]) -> None:
    """Print summary report of diagnostics."""
    total = len(results)
    accepted = [r for r in results if r.accepted]
    rejected = [r for r in results if r.candidate and not r.accepted]
    no_text = [r for r in results if not r.error and r.run_count == 0]
    has_errors = [r for r in results if r.error]

    print("=" * 70)
    print("TITLE DIAGNOSTIC REPORT")
    print("=" * 70)
    print(f"\nTotal PDFs analyzed: {total}")
    print(f"  - Title accepted:              {len(accepted)}")
    print(f"  - Candidate rejected:          {len(rejected)}")
    print(f"  - No text on first page:       {len(no_text)}")
    print(f"  - Reader errors:               {len(has_errors)}")

    if rejected:
        print("\n" + "-" * 70)
        print("REJECTED CANDIDATES (showing first 20):")
        print("-" * 70)
        for r in rejected[:20]:
            print(f"  - {r.filepath.name}: {r.candidate!r} ({r.hits}/{r.tokens})")

    if has_errors:
        print("\n" + "-" * 70)
        print("FILES WITH READER ERRORS (showing first 10):")
        print("-" * 70)
        for r in has_errors[:10]:
            print(f"  - {r.filepath.name}: {r.error[:80]}")


def analyze_single_file(filepath: Path, engine: TitleEngine, backend: PDFPlumberBackend) -> None:
    """Detailed analysis of a single PDF file."""
    print(f"Detailed analysis of: {filepath.name}")
    print("=" * 70)

    diag = diagnose_pdf(filepath, engine, backend)

    if diag.error:
        print(f"Error:              {diag.error}")
        return

    print(f"Runs:               {diag.run_count}")
    print(f"Phrases:            {len(diag.phrases)}")
    print(f"Candidate:          {diag.candidate!r}")
    print(f"Dictionary hits:    {diag.hits}/{diag.tokens}")
    print(f"Accepted:           {diag.accepted}")

    print("\n" + "-" * 70)
    print("PHRASES BY FONT SIZE (first 15):")
    print("-" * 70)

    for phrase in engine.ranker.order(diag.phrases)[:15]:
        print(f"  {phrase.font_size:6.2f} {phrase.font[:24]:<24} {engine.ranker.render(phrase)!r}")


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Diagnose PDF title inference")
    parser.add_argument("paths", nargs="+", help="PDF files or directories")
    parser.add_argument("--limit", type=int, default=100, help="Limit number of files to scan")
    parser.add_argument("--all", action="store_true", help="Scan all files (no limit)")

    args = parser.parse_args()

    try:
        config = get_config()
    except ConfigurationError:
        config = set_config(Config.defaults())

    engine = TitleEngine(settings=config.title)
    backend = PDFPlumberBackend()

    if len(args.paths) == 1 and Path(args.paths[0]).is_file():
        analyze_single_file(Path(args.paths[0]), engine, backend)
        return

    pdf_files = list(FileScanner().scan(args.paths))
    if not args.all:
        pdf_files = pdf_files[:args.limit]

    total = len(pdf_files)
    print(f"Analyzing {total} PDF files...\n")

    results = []
    for i, filepath in enumerate(pdf_files, 1):
        print(f"\r[{i}/{total}] Analyzing: {filepath.name[:50]:<50}", end="", flush=True)
        results.append(diagnose_pdf(filepath, engine, backend))

    print("\n")
    print_report(results)


if __name__ == "__main__":
    main()

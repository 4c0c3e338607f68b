"""Check that Javadoc comments document method signatures.

Usage:
    jdcheck [-c CONFIG] [-j JOBS] [-v] PATH...

Prints one `path:line:column: message` line per problem. Exits 0 when
clean, 1 when problems were found, 2 on configuration or input errors.
"""

from __future__ import annotations

import argparse
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable

from jdcheck.base import JdcheckError
from jdcheck.config import Suppression, is_suppressed, load_config
from jdcheck.java import load_java
from jdcheck.javadoc import Diagnostic, HierarchyResolver, VerificationEngine
from jdcheck.javadoc.messages import format_diagnostic

__version__ = "1.0.0"

log = logging.getLogger(__name__)


def find_sources(paths: Iterable[str]) -> list[Path]:
    """Expand directories into the .java files below them, keeping order."""
    sources: list[Path] = []
    for name in paths:
        path = Path(name)
        if path.is_dir():
            sources.extend(sorted(path.rglob("*.java")))
        else:
            sources.append(path)
    return sources


def check_file(
    path: Path,
    engine: VerificationEngine,
    suppressions: list[Suppression],
) -> list[Diagnostic]:
    """Verify every declaration in one file."""
    java_file = load_java(path)
    base = engine.resolver
    resolver = java_file.resolver(base) if isinstance(base, HierarchyResolver) else base

    diagnostics: list[Diagnostic] = []
    for decl in java_file.declarations():
        for diagnostic in engine.verify(decl.signature, decl.comment, resolver):
            if not is_suppressed(suppressions, str(path), diagnostic.kind):
                diagnostics.append(diagnostic)
    log.debug("%s: %d problem(s)", path, len(diagnostics))
    return diagnostics


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="jdcheck",
        description="Check that Javadoc comments document method signatures.",
    )
    parser.add_argument("paths", nargs="+", help="Java files or directories")
    parser.add_argument("-c", "--config", type=Path, help="YAML configuration file")
    parser.add_argument(
        "-j", "--jobs", type=int, default=4, help="Files checked in parallel (default 4)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings, suppressions = load_config(args.config)
    except JdcheckError as e:
        print(f"jdcheck: {e}", file=sys.stderr)
        return 2

    engine = VerificationEngine(settings)
    sources = find_sources(args.paths)

    with ThreadPoolExecutor(max_workers=max(1, args.jobs)) as pool:
        futures = [
            pool.submit(check_file, path, engine, suppressions) for path in sources
        ]

        found = failed = False
        for path, future in zip(sources, futures):
            try:
                diagnostics = future.result()
            except JdcheckError as e:
                print(f"jdcheck: {e}", file=sys.stderr)
                failed = True
                continue
            for diagnostic in diagnostics:
                print(format_diagnostic(str(path), diagnostic))
                found = True

    if failed:
        return 2
    return 1 if found else 0


if __name__ == "__main__":
    sys.exit(main())

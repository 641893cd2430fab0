#!/usr/bin/env python3
"""
Command line interface for mustgen.

Usage:
    python -m mustgen [-o <file>] <path> [<path> ...]
    # Or use the CLI entrypoint:
    mustgen [-o <file>] <path> [<path> ...]

The CLI loads the Go package named by the paths, finds every function whose body
starts with a //@gen_must comment and writes a file of Must* wrappers for them.

Examples:
    # Print wrappers for the package in the current directory
    mustgen .

    # Typical go:generate line, writing must_gen.go next to the sources
    //go:generate mustgen -o must_gen.go .
"""

import argparse
import logging
import sys

from .codegen.compile import compile_package
from .codegen.gofmt import go_fmt
from .codegen.writer import STDOUT, resolve_output_path, write_output
from .exceptions import MustgenError
from .loader import load_package
from .scanner import DEFAULT_TAG


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mustgen",
        description="Generate Must* wrappers that panic instead of returning an error",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print wrappers for one package to stdout
  mustgen ./pkg

  # Write pkg/must_gen.go
  mustgen -o must_gen.go ./pkg

  # Only generate wrappers for some functions
  mustgen --only Divide --only Server.Start ./pkg

  # Use a different marker comment (//@must instead of //@gen_must)
  mustgen --tag @must ./pkg
        """,
    )
    parser.add_argument(
        "paths",
        nargs="+",
        help="Go source files or a package directory",
    )
    parser.add_argument(
        "-o",
        "--out",
        default=STDOUT,
        help="Output file, relative to the package directory (default: stdout)",
    )
    parser.add_argument(
        "--tag",
        default=DEFAULT_TAG,
        help=f"Marker that opts a function in, without the leading // (default: {DEFAULT_TAG})",
    )
    parser.add_argument(
        "--only",
        action="append",
        metavar="NAME",
        help="Only generate the wrapper for this function or Type.Method (can be specified multiple times)",
    )
    parser.add_argument(
        "--no-fmt",
        action="store_true",
        help="Skip running gofmt on the generated code",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not print progress to stderr",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def run(args: argparse.Namespace) -> None:
    def progress(message: str) -> None:
        if not args.quiet:
            print(message, file=sys.stderr)

    package = load_package(args.paths)
    progress(f"Loaded package {package.name} ({len(package.files)} file(s))")

    code = compile_package(package, tag=args.tag, only=args.only)
    if not args.no_fmt:
        code = go_fmt(code)

    out_path = resolve_output_path(args.out, args.paths)
    write_output(code, out_path, sys.stdout)
    if out_path is not None:
        progress(f"  Wrote: {out_path}")


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        run(args)
    except (MustgenError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
CLI for rendering build-tree documents.

Usage:
    python -m landau render FILE.yaml [--output FILE.stl] [--cache-dir DIR] [-v]
    python -m landau check FILE.yaml
    python -m landau list

Examples:
    # Render a bracket and write it as binary STL
    python -m landau render examples/bracket.yaml -o bracket.stl

    # Resolve every node type without evaluating anything
    python -m landau check examples/bracket.yaml

    # Show the available operations and how their props are passed
    python -m landau list
"""

import argparse
import logging
import sys
from pathlib import Path

from .errors import RendererError, UnrecognizedTypeError


def cmd_render(args):
    """Render a document and optionally write STL."""
    from .host import Container
    from .loader import load_document
    from .render import Renderer

    source_path = Path(args.file)
    if not source_path.exists():
        print(f"Error: File not found: {source_path}", file=sys.stderr)
        return 1

    try:
        document = load_document(source_path)
        container = Container(
            path=args.output or document.output,
            cache_dir=args.cache_dir or document.cache_dir,
        )
        Renderer().render(document.tree, container)
    except RendererError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    csg = container.csg
    summary = type(csg).__name__
    if hasattr(csg, 'volume'):
        summary += f" volume={csg.volume:.6g} bounds={csg.bounds.tolist()}"
    print(f"OK: {source_path.name} -> {summary}")
    if container.path:
        print(f"Exported to: {container.path}")
    return 0


def cmd_check(args):
    """Resolve every node type in a document without evaluating it."""
    from .loader import iter_types, load_document
    from .registry import default_registry

    source_path = Path(args.file)
    if not source_path.exists():
        print(f"Error: File not found: {source_path}", file=sys.stderr)
        return 1

    try:
        document = load_document(source_path)
    except RendererError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    registry = default_registry()
    types = list(iter_types(document.tree))
    unknown = [t for t in types if t not in registry]
    if unknown:
        for type_name in unknown:
            print(f"Error: {UnrecognizedTypeError(type_name)}", file=sys.stderr)
        return 1

    print(f"OK: {source_path.name} - {len(types)} node(s), no errors")
    return 0


def cmd_list(args):
    """List registered operations by category."""
    from .registry import default_registry

    registry = default_registry()
    for category in registry.categories:
        entries = [e for e in registry.entries() if e.category == category]
        if not entries:
            continue
        print(f"{category}:")
        for entry in entries:
            print(f"  {entry.describe()}")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='python -m landau',
        description='Render declarative solid-modeling trees to STL',
    )
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Increase log output (-vv for debug tracing)')
    parser.add_argument('--log-file', metavar='FILE', help='Also write logs to FILE')

    subparsers = parser.add_subparsers(dest='action', required=True)

    render_parser = subparsers.add_parser('render', help='Render a build-tree document')
    render_parser.add_argument('file', help='YAML or JSON build-tree document')
    render_parser.add_argument('-o', '--output', metavar='FILE',
                               help='STL output file (overrides the document)')
    render_parser.add_argument('--cache-dir', metavar='DIR',
                               help='Cache directory (accepted, currently unused)')

    check_parser = subparsers.add_parser('check', help='Check a document for unknown types')
    check_parser.add_argument('file', help='YAML or JSON build-tree document')

    subparsers.add_parser('list', help='List available operations')

    args = parser.parse_args(argv)

    if args.verbose or args.log_file:
        from .logging_config import setup_logging
        level = logging.DEBUG if args.verbose > 1 else logging.INFO
        setup_logging(level, args.log_file)

    if args.action == 'render':
        return cmd_render(args)
    elif args.action == 'check':
        return cmd_check(args)
    elif args.action == 'list':
        return cmd_list(args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())

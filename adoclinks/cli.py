#!/usr/bin/env python
"""
Command line interface for cross-reference graph extraction.

Usage:
    python -m adoclinks.cli build <root> -o graph.dot
    python -m adoclinks.cli build <root> --format json -o graph.json
    python -m adoclinks.cli resolve <root> <name>
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from adoclinks.config import GraphConfig
from adoclinks.extractors.graph_builder import GraphBuilder
from adoclinks.extractors.graph_store import EXPORT_FORMATS


def _load_config(args) -> GraphConfig:
    """Combine an optional config file with command line overrides."""
    config = GraphConfig.load(args.config) if args.config else GraphConfig()
    data = config.to_dict()
    if args.file_types:
        data['file_types'] = args.file_types
    if args.title_max_length is not None:
        data['title_max_length'] = args.title_max_length
    return GraphConfig.from_dict(data)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        type=Path,
        help="Corpus root directory"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON configuration file (file_types, title_max_length)"
    )
    parser.add_argument(
        "--file-types",
        nargs="+",
        default=None,
        help="Document extensions to scan (default: adoc asciidoc)"
    )
    parser.add_argument(
        "--title-max-length",
        type=int,
        default=None,
        help="Truncate node labels to this many characters (<= 0 disables)"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of worker threads for the scan"
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Only log warnings and errors"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="adoc-links",
        description="Extract the cross-reference graph of an AsciiDoc corpus",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="Command")

    build_cmd = subparsers.add_parser(
        "build",
        help="Build and export the graph",
        description="Scan a directory and write its reference graph"
    )
    _add_common_arguments(build_cmd)
    build_cmd.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output path (default: stdout)"
    )
    build_cmd.add_argument(
        "--format",
        choices=EXPORT_FORMATS,
        default="dot",
        help="Export format"
    )

    resolve_cmd = subparsers.add_parser(
        "resolve",
        help="Find a document by bare file name",
        description="Print the path a bare file name (with or without extension) resolves to"
    )
    _add_common_arguments(resolve_cmd)
    resolve_cmd.add_argument(
        "name",
        help="Bare file name, e.g. 'intro' or 'intro.adoc'"
    )

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    log_level = logging.WARNING if args.quiet else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(levelname)s: %(message)s'
    )

    if not args.root.is_dir():
        logging.error(f"Input directory does not exist: {args.root}")
        return 1

    try:
        config = _load_config(args)
        builder = GraphBuilder(
            root=args.root,
            config=config,
            max_workers=args.workers,
            show_progress=not args.quiet,
        )

        if args.command == "build":
            result = builder.build()
            if result.failures:
                logging.warning(f"{len(result.failures)} files could not be parsed")

            snapshot = builder.snapshot()
            if args.output is None:
                if args.format == "dot":
                    sys.stdout.write(snapshot.to_dot())
                else:
                    json.dump(snapshot.to_dict(), sys.stdout, indent=2)
                    sys.stdout.write("\n")
            else:
                snapshot.write(args.output, args.format)
            logging.info(
                f"Built graph with {len(snapshot.nodes)} nodes and {len(snapshot.edges)} edges"
            )

        elif args.command == "resolve":
            builder.walker.scan(builder.store, builder.learn_file, max_workers=args.workers)
            path = builder.resolve(args.name)
            if path is None:
                logging.error(f"No document named {args.name!r} under {args.root}")
                return 1
            print(path)

    except Exception as e:
        logging.error(f"Graph building failed: {e}", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

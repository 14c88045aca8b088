"""
Command line interface.

Usage:
    python -m grammar_keywords extract GRAMMAR SCRATCH_DIR [-o OUTPUT]
    python -m grammar_keywords check GRAMMAR SCRATCH_DIR --expected FILE
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import load_config
from .errors import ConfigError, GrammarSyntaxError, LoadError
from .extractor import KeywordExtractor


def read_expected(path: Path) -> List[str]:
    """Read an expectation list: one label per line, '#' starts a comment."""
    try:
        lines = path.read_text().splitlines()
    except OSError as e:
        raise LoadError(f"cannot read expectation list {path}: {e}") from e
    labels = []
    for line in lines:
        label = line.split("#", 1)[0].strip()
        if label:
            labels.append(label)
    return labels


def cmd_extract(extractor: KeywordExtractor, args) -> int:
    classification = extractor.initialize()
    document = json.dumps(classification.to_dict(), indent=2) + "\n"
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(document)
        print(f"  Keywords:    {len(classification.keywords())}")
        print(f"  Whitelists:  {len(classification.whitelist())}")
        print(f"  Restricted:  {len(classification.restricted_keywords())}")
        print(f"✅ Written to {args.output}")
    else:
        sys.stdout.write(document)
    return 0


def cmd_check(extractor: KeywordExtractor, args) -> int:
    expected = read_expected(args.expected)
    classification = extractor.initialize()
    diff = classification.compare_restricted(expected)
    if diff.ok:
        print(f"✅ {len(expected)} restricted keywords match {args.expected}")
        return 0

    print("❌ Restricted keywords differ from the expectation list")
    for label in diff.missing:
        print(f"  - {label} (expected restricted, but whitelisted or not a keyword)")
    for label in diff.unexpected:
        print(f"  + {label} (restricted, but not in the expectation list)")
    return 1


def build_arg_parser() -> argparse.ArgumentParser:
    # Shared by every subcommand so the options may follow the command name
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", type=Path, help="Path to config.json", default=None)
    common.add_argument(
        "-v", "--verbose", action="store_true", help="Log per-entry diagnostics"
    )

    parser = argparse.ArgumentParser(
        prog="grammar-keywords",
        description="Extract keywords and identifier whitelists from a lark grammar",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    extract = commands.add_parser(
        "extract",
        parents=[common],
        help="Write keywords, whitelists and restricted keywords as JSON",
    )
    extract.add_argument("grammar", type=Path, help="Grammar file (.lark)")
    extract.add_argument("scratch_dir", type=Path, help="Directory for generated artifacts")
    extract.add_argument("-o", "--output", type=Path, help="Output file (default: stdout)")
    extract.set_defaults(func=cmd_extract)

    check = commands.add_parser(
        "check",
        parents=[common],
        help="Compare restricted keywords with an expectation list",
    )
    check.add_argument("grammar", type=Path, help="Grammar file (.lark)")
    check.add_argument("scratch_dir", type=Path, help="Directory for generated artifacts")
    check.add_argument(
        "--expected", type=Path, required=True, help="File with one restricted label per line"
    )
    check.set_defaults(func=cmd_check)
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(args.config).with_paths(args.grammar, args.scratch_dir)
        status = args.func(KeywordExtractor(config), args)
    except (ConfigError, LoadError, GrammarSyntaxError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(status)


if __name__ == "__main__":
    main()

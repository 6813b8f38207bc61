"""
Command line front end.

    textmatch filter -i '*.log' -e 'debug*' --wildcards files.txt
    textmatch filter --config textmatch.yml --set logs < names.txt
    textmatch match report_2024.pdf 'report_####.pdf'

``filter`` exits 0 when at least one line passed, 1 otherwise.
``match`` exits 0 on a match, 1 on no match and 2 on an invalid pattern.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, TextIO

from .config import MatcherConfig, load_config
from .exceptions import TextMatchError
from .lists import load_pattern_list
from .logging import configure_logging, get_logger
from .pattern_set import PatternSet
from .patterns import match_text
from .resolvers import template_resolver
from .version import get_version
from .wildcard import has_wildcards

__all__ = ["build_parser", "main"]

logger = get_logger("cli")

EXIT_MATCH = 0
EXIT_NO_MATCH = 1
EXIT_ERROR = 2


def _parse_variables(assignments: Sequence[str]) -> Dict[str, str]:
    variables = {}
    for assignment in assignments:
        name, sep, value = assignment.partition("=")
        if not sep or not name:
            raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got '{assignment}'")
        variables[name] = value
    return variables


def _iter_lines(paths: Sequence[Path], stdin: TextIO) -> Iterator[str]:
    if not paths:
        for line in stdin:
            yield line.rstrip("\r\n")
        return
    for path in paths:
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                yield line.rstrip("\r\n")


def _build_pattern_set(args: argparse.Namespace, config: Optional[MatcherConfig]) -> PatternSet:
    if config is not None:
        if args.set is None:
            raise TextMatchError("--set is required with --config")
        pattern_set = config.pattern_set(args.set)
    else:
        pattern_set = PatternSet()

    for list_path in args.list:
        pattern_set.merge(load_pattern_list(list_path).pattern_set)

    for pattern in args.include:
        pattern_set.add_positive(pattern)
    for pattern in args.exclude:
        pattern_set.add_negative(pattern)

    if args.wildcards:
        pattern_set.use_wildcards = True
    elif not pattern_set.use_wildcards and any(has_wildcards(p) for p in args.include + args.exclude):
        logger.warning("Patterns contain wildcard characters but --wildcards is off; "
                       "they are matched as plain substrings")
    if args.any:
        pattern_set.match_all = False
    return pattern_set


def _run_filter(args: argparse.Namespace, stdin: TextIO, stdout: TextIO) -> int:
    config = None
    if args.config is not None:
        config = load_config(args.config)
        if not args.verbose:
            configure_logging(
                config.logging.level,
                log_dir=config.logging.log_dir,
                max_bytes=config.logging.max_mb * 1024 * 1024,
                backup_count=config.logging.backup_count,
            )

    pattern_set = _build_pattern_set(args, config)
    resolver = template_resolver(_parse_variables(args.var)) if args.var else None
    logger.info(f"Filtering with {pattern_set!r}")

    passed = 0
    total = 0
    for line in _iter_lines(args.files, stdin):
        total += 1
        if pattern_set.matches(line, resolver):
            stdout.write(f"{line}\n")
            passed += 1

    logger.info(f"{passed}/{total} lines passed")
    return EXIT_MATCH if passed else EXIT_NO_MATCH


def _run_match(args: argparse.Namespace, stdout: TextIO) -> int:
    matched = match_text(args.text, args.pattern)
    if args.print:
        stdout.write(f"{'match' if matched else 'no match'}\n")
    return EXIT_MATCH if matched else EXIT_NO_MATCH


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="textmatch",
        description="Match text against exact, wildcard and regex patterns.")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")
    subcommands = parser.add_subparsers(required=True, dest="command")

    flt = subcommands.add_parser("filter", help="Print the input lines that pass a pattern set.")
    flt.add_argument("-c", "--config", type=Path, help="YAML config file with named pattern sets.")
    flt.add_argument("-s", "--set", help="Name of the pattern set to use from --config.")
    flt.add_argument("-i", "--include", action="append", default=[], metavar="PATTERN",
                     help="Positive pattern (repeatable).")
    flt.add_argument("-e", "--exclude", action="append", default=[], metavar="PATTERN",
                     help="Negative pattern (repeatable).")
    flt.add_argument("-l", "--list", action="append", default=[], type=Path, metavar="LISTFILE",
                     help="Pattern list file (repeatable).")
    flt.add_argument("-w", "--wildcards", action="store_true",
                     help="Treat patterns as wildcards instead of substrings.")
    flt.add_argument("--any", action="store_true",
                     help="Pass lines matching any positive pattern instead of all.")
    flt.add_argument("--var", action="append", default=[], metavar="NAME=VALUE",
                     help="Substitute $NAME in patterns (repeatable).")
    flt.add_argument("files", nargs="*", type=Path, help="Input files (default: stdin).")

    mt = subcommands.add_parser("match", help="Match one text against one pattern.")
    mt.add_argument("text")
    mt.add_argument("pattern", help="Pattern with optional exact:/regexp:/regexpi:/glob: prefix.")
    mt.add_argument("-p", "--print", action="store_true", help="Print the verdict.")

    return parser


def main(
    argv: Optional[List[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    level = logging.DEBUG
    if args.verbose == 0:
        level = logging.WARNING
    elif args.verbose == 1:
        level = logging.INFO
    configure_logging(level)

    try:
        match args.command:
            case "filter":
                return _run_filter(args, stdin, stdout)
            case _:
                return _run_match(args, stdout)
    except (TextMatchError, FileNotFoundError, KeyError, argparse.ArgumentTypeError) as e:
        stderr.write(f"textmatch: {e}\n")
        return EXIT_ERROR

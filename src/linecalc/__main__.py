#!/usr/bin/env python3
"""
CLI for the linecalc interpreter.

Usage:
    python -m linecalc run FILE [--json] [--config FILE] [--decimal] [--strict]
    python -m linecalc check FILE
    python -m linecalc parse EXPRESSION
    python -m linecalc repl

Examples:
    # Evaluate a document and show one result per line
    python -m linecalc run budget.calc

    # Same, as JSON for other tools
    python -m linecalc run budget.calc --json

    # Report every failing line with its diagnostic
    python -m linecalc check budget.calc

    # Show how a single line parses
    python -m linecalc parse "x = 1 + 2 * #3"
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import CalcConfig, ConfigError, config_from_env, load_config
from .errors import CalcError
from .runtime import LineOrchestrator, PassResult, split_lines

REPL_HELP = """\
Enter a line to append it to the document. Commands:
  :list      show the document with results
  :vars      show assigned variables
  :del N     delete line N
  :clear     start an empty document
  :quit      leave"""


def read_document(file_arg: str) -> List[str]:
    """Read a document from a path, or stdin for '-'."""
    if file_arg == "-":
        text = sys.stdin.read()
    else:
        source_path = Path(file_arg)
        if not source_path.exists():
            raise FileNotFoundError(f"File not found: {source_path}")
        text = source_path.read_text(encoding="utf-8")
    # A final newline terminates the last line rather than starting a new one
    if text.endswith("\n"):
        text = text[:-1]
    return split_lines(text)


def build_config(args) -> CalcConfig:
    """Config file (or environment) plus command-line overrides."""
    config = load_config(args.config) if args.config else config_from_env()
    return config.with_overrides(
        numeric="decimal" if args.decimal else None,
        strict_characters=True if args.strict else None,
        group_thousands=True if args.group else None,
    )


def format_results(lines: List[str], result: PassResult) -> str:
    """Render the document with a result column."""
    if not lines:
        return ""
    width = max(len(line) for line in lines)
    rows = []
    for line, outcome in zip(lines, result.outcomes):
        rows.append(f"{outcome.line_number:>3} | {line:<{width}} | {outcome.display}")
    return "\n".join(rows)


def format_variables(result: PassResult) -> str:
    if not result.scope:
        return "variables: (none)"
    return "variables: " + ", ".join(result.scope)


def cmd_run(args) -> int:
    """Evaluate a document and print the results."""
    lines = read_document(args.file)
    result = LineOrchestrator(build_config(args)).run(lines)

    if args.json:
        print(json.dumps(result.to_json(), indent=2))
    else:
        print(format_results(lines, result))
        print(format_variables(result))
    return 0


def cmd_check(args) -> int:
    """Report errors in a document."""
    lines = read_document(args.file)
    result = LineOrchestrator(build_config(args)).run(lines)

    if result.has_errors:
        for outcome in result.errors:
            print(outcome.diagnostic.format())
            print()
        print(f"{len(result.errors)} error(s) in {len(lines)} line(s)")
        return 1

    print(f"OK: {args.file} - {len(lines)} line(s), no errors")
    return 0


def cmd_parse(args) -> int:
    """Print the parenthesised AST of one line."""
    from . import tokenize, parse, format_ast

    config = build_config(args)
    try:
        tokens = tokenize(args.expression, config.numeric_model(), config.strict_characters)
        node = parse(tokens)
    except CalcError as e:
        print(f"Error: [{e.code}] {e}", file=sys.stderr)
        return 1

    print(format_ast(node) if node is not None else "(empty)")
    return 0


def cmd_repl(args) -> int:
    """Interactive document: every edit triggers a new pass."""
    orchestrator = LineOrchestrator(build_config(args))
    lines: List[str] = []
    result = orchestrator.run(lines)

    print(REPL_HELP)
    while True:
        try:
            entry = input("> ")
        except EOFError:
            print()
            return 0

        command = entry.strip()
        if command in (":quit", ":q"):
            return 0
        if command == ":list":
            print(format_results(lines, result))
            continue
        if command == ":vars":
            print(format_variables(result))
            continue
        if command == ":clear":
            lines = []
        elif command.startswith(":del"):
            target = command[len(":del"):].strip()
            if not target.isdigit() or not 1 <= int(target) <= len(lines):
                print(f"Error: no line {target or '?'}")
                continue
            del lines[int(target) - 1]
        elif command.startswith(":"):
            print(f"Error: unknown command {command}")
            continue
        else:
            lines.append(entry)

        result = orchestrator.run(lines, result.scope)
        if not command.startswith(":"):
            last = result.outcomes[-1]
            detail = f"  ({last.error_message})" if last.is_error else ""
            print(f"#{last.line_number} = {last.display}{detail}")
        else:
            print(format_results(lines, result))


def add_config_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('-c', '--config', metavar='FILE',
                        help='YAML configuration file (default: $LINECALC_CONFIG)')
    parser.add_argument('--decimal', action='store_true',
                        help='Use decimal arithmetic instead of binary floats')
    parser.add_argument('--strict', action='store_true',
                        help='Treat unrecognized characters as errors')
    parser.add_argument('--group', action='store_true',
                        help='Group thousands in displayed results')


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog='python -m linecalc',
        description='Line-oriented expression interpreter',
    )
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='action', required=True)

    # run command
    run_parser = subparsers.add_parser('run', help='Evaluate a document')
    run_parser.add_argument('file', help="Document file ('-' for stdin)")
    run_parser.add_argument('--json', action='store_true', help='Print results as JSON')
    add_config_options(run_parser)

    # check command
    check_parser = subparsers.add_parser('check', help='Report errors in a document')
    check_parser.add_argument('file', help="Document file ('-' for stdin)")
    add_config_options(check_parser)

    # parse command
    parse_parser = subparsers.add_parser('parse', help='Show the AST of one line')
    parse_parser.add_argument('expression', help='Line to parse')
    add_config_options(parse_parser)

    # repl command
    repl_parser = subparsers.add_parser('repl', help='Edit a document interactively')
    add_config_options(repl_parser)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handlers = {
        'run': cmd_run,
        'check': cmd_check,
        'parse': cmd_parse,
        'repl': cmd_repl,
    }
    try:
        return handlers[args.action](args)
    except (FileNotFoundError, UnicodeDecodeError, ConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())

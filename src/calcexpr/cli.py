"""Command-line interface for calcexpr."""

from __future__ import annotations

import argparse
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from calcexpr.calculator import Calculator, LineResult
from calcexpr.errors import ErrorKind

logger = logging.getLogger(__name__)

DEFAULT_PRECISION = 12


class ConfigError(Exception):
    """Raised when the config file has invalid values."""


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    expressions: list[str]
    input_file: Path | None
    precision: int
    comments: bool
    debug: bool
    verbose: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="calcexpr",
        description="Evaluate arithmetic expressions",
    )
    p.add_argument("expressions", nargs="*", metavar="EXPR", help="Expression to evaluate")
    p.add_argument(
        "-f",
        "--file",
        metavar="FILE",
        help="Evaluate each line of FILE ('-' for stdin)",
    )
    p.add_argument(
        "-p",
        "--precision",
        type=int,
        default=None,
        metavar="DIGITS",
        help=f"Significant digits in printed results (default: {DEFAULT_PRECISION})",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover calcexpr.toml)",
    )
    p.add_argument("--debug", action="store_true", help="Dump tokens and tree to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / "calcexpr.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace, cwd: Path | None = None) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, cwd if cwd is not None else Path("."))

    precision = DEFAULT_PRECISION
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        cfg_precision = cfg_output.get("precision")
        if cfg_precision is not None:
            if not isinstance(cfg_precision, int) or isinstance(cfg_precision, bool):
                raise ConfigError(f"output.precision must be an integer, got {cfg_precision!r}")
            precision = cfg_precision
    if args.precision is not None:
        precision = args.precision
    if precision < 1:
        raise ConfigError(f"precision must be at least 1, got {precision}")

    comments = True
    cfg_input = config.get("input")
    if isinstance(cfg_input, dict):
        cfg_comments = cfg_input.get("comments")
        if isinstance(cfg_comments, bool):
            comments = cfg_comments

    return CliOptions(
        expressions=list(args.expressions),
        input_file=Path(args.file) if args.file else None,
        precision=precision,
        comments=comments,
        debug=args.debug,
        verbose=args.verbose,
    )


def format_result(value: float, precision: int) -> str:
    """Format a result with up to ``precision`` significant digits."""
    return f"{value:.{precision}g}"


def _debug_dump(calc: Calculator, result: LineResult, err: TextIO) -> None:
    from calcexpr.debug import dump_tokens, dump_tree

    if result.error is not None and result.error.kind == ErrorKind.UNKNOWN_SYMBOL:
        return
    dump_tokens(calc.tokenize(result.text), file=err)
    if result.ok:
        dump_tree(calc.parse(result.text), file=err)


def run(
    options: CliOptions,
    stdin: TextIO | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Evaluate everything requested by ``options``. Returns the exit code."""
    stdin = stdin if stdin is not None else sys.stdin
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr

    calc = Calculator()

    results: list[LineResult]
    if options.expressions:
        filename = "<arg>"
        results = [calc.eval_line(expr) for expr in options.expressions]
    else:
        if options.input_file is None or str(options.input_file) == "-":
            source = stdin.read()
            filename = "<stdin>"
        else:
            source = options.input_file.read_text(encoding="utf-8")
            filename = str(options.input_file)
        results = calc.eval_lines(source, options.comments)

    failed = False
    for result in results:
        if options.debug:
            _debug_dump(calc, result, err)
        if result.error is not None:
            failed = True
            print(result.error.format(filename, result.line), file=err)
        elif result.value is not None:
            print(format_result(result.value, options.precision), file=out)

    logger.debug("evaluated %d expression(s), failed=%s", len(results), failed)
    return 1 if failed else 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        options = resolve_options(args)
    except (ConfigError, tomllib.TOMLDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        return run(options)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

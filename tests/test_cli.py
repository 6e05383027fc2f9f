"""Tests for the CLI module: arg parsing, exit codes, file and stdin input."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from calcexpr.cli import CliOptions, build_parser, format_result, main, run


def _options(**overrides) -> CliOptions:
    values = dict(
        expressions=[],
        input_file=None,
        precision=12,
        comments=True,
        debug=False,
        verbose=False,
    )
    values.update(overrides)
    return CliOptions(**values)


def _run(options: CliOptions, stdin: str = "") -> tuple[int, str, str]:
    out = io.StringIO()
    err = io.StringIO()
    code = run(options, stdin=io.StringIO(stdin), out=out, err=err)
    return code, out.getvalue(), err.getvalue()


# ---------------------------------------------------------------------------
# Arg parsing via build_parser
# ---------------------------------------------------------------------------


class TestArgParsing:
    def test_expressions(self) -> None:
        ns = build_parser().parse_args(["1+2", "3*4"])
        assert ns.expressions == ["1+2", "3*4"]
        assert ns.file is None

    def test_no_arguments(self) -> None:
        ns = build_parser().parse_args([])
        assert ns.expressions == []
        assert ns.precision is None

    def test_file_and_precision(self) -> None:
        ns = build_parser().parse_args(["-f", "sums.calc", "-p", "4"])
        assert ns.file == "sums.calc"
        assert ns.precision == 4

    def test_debug_and_verbose(self) -> None:
        ns = build_parser().parse_args(["--debug", "-v", "1"])
        assert ns.debug is True
        assert ns.verbose is True


# ---------------------------------------------------------------------------
# Output formatting
# ---------------------------------------------------------------------------


class TestFormatResult:
    def test_integral_value(self) -> None:
        assert format_result(14.0, 12) == "14"

    def test_fraction(self) -> None:
        assert format_result(2.5, 12) == "2.5"

    def test_precision(self) -> None:
        assert format_result(1 / 3, 4) == "0.3333"

    def test_infinity(self) -> None:
        assert format_result(float("inf"), 12) == "inf"


# ---------------------------------------------------------------------------
# run()
# ---------------------------------------------------------------------------


class TestRun:
    def test_expressions_printed_in_order(self) -> None:
        code, out, err = _run(_options(expressions=["1+2", "2^3^2"]))
        assert code == 0
        assert out == "3\n64\n"
        assert err == ""

    def test_error_goes_to_stderr(self) -> None:
        code, out, err = _run(_options(expressions=["1+2", "1+)"]))
        assert code == 1
        assert out == "3\n"
        assert "error: cannot have an operator before a closing parenthesis" in err
        assert "<arg>:1:3" in err

    def test_file_input(self, tmp_path: Path) -> None:
        src = tmp_path / "sums.calc"
        src.write_text("# totals\n1+2\n\n2(3+4)\n")
        code, out, _ = _run(_options(input_file=src))
        assert code == 0
        assert out == "3\n14\n"

    def test_file_error_reports_line(self, tmp_path: Path) -> None:
        src = tmp_path / "bad.calc"
        src.write_text("1+2\n5+&\n")
        code, _, err = _run(_options(input_file=src))
        assert code == 1
        assert f"{src}:2:3" in err

    def test_stdin_input(self) -> None:
        code, out, _ = _run(_options(), stdin="10/4\n")
        assert code == 0
        assert out == "2.5\n"

    def test_dash_reads_stdin(self) -> None:
        code, out, _ = _run(_options(input_file=Path("-")), stdin="6*7\n")
        assert code == 0
        assert out == "42\n"

    def test_debug_dumps_to_stderr(self) -> None:
        code, _, err = _run(_options(expressions=["1+2"], debug=True))
        assert code == 0
        assert "NUMBER" in err
        assert "Add" in err

    def test_debug_skips_tree_for_invalid_expression(self) -> None:
        code, _, err = _run(_options(expressions=["1+"], debug=True))
        assert code == 1
        assert "ADD" in err
        assert "Add\n" not in err

    def test_debug_with_unknown_symbol(self) -> None:
        code, _, err = _run(_options(expressions=["1$"], debug=True))
        assert code == 1
        assert "unknown symbol '$'" in err


# ---------------------------------------------------------------------------
# Exit codes via main()
# ---------------------------------------------------------------------------


class TestExitCodes:
    def test_success(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["2*(3+4)"]) == 0
        assert capsys.readouterr().out == "14\n"

    def test_eval_error_returns_1(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["(5"]) == 1
        assert "unbalanced parentheses" in capsys.readouterr().err

    def test_missing_file_returns_2(self, tmp_path: Path) -> None:
        assert main(["-f", str(tmp_path / "nope.calc")]) == 2

    def test_non_utf8_file_returns_2(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "latin.calc"
        path.write_bytes(b"\xff\xfe1+2\n")
        assert main(["-f", str(path)]) == 2
        assert capsys.readouterr().err.startswith("error:")

    def test_bad_precision_returns_2(self) -> None:
        assert main(["-p", "0", "1"]) == 2

from pathlib import Path

from click.testing import CliRunner

from astcalc.cli import main, run_lines
from astcalc.store import VariableStore

runner = CliRunner()


def test_stdin_lines() -> None:
    result = runner.invoke(main, [], input="1 + 2\nx\npi\n8 - 4 - 2\n")
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "evaluate() = 3",
        "evaluate() = 42",
        "evaluate() = 3.14159",
        "evaluate() = 6",
    ]


def test_state_persists_between_lines() -> None:
    result = runner.invoke(main, [], input="w += 3\nw += 3\ny = x / 2\ny\n")
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "evaluate() = 3",
        "evaluate() = 6",
        "evaluate() = 21",
        "evaluate() = 21",
    ]


def test_parse_failure_does_not_stop_processing() -> None:
    result = runner.invoke(main, [], input="1 + + 2\n\n2 * 3\n")
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        'Unparseable: "+ + 2"',
        "1 + + 2",
        "  ^",
        "Parse error",
        "evaluate() = 6",
    ]


def test_ieee_results_are_printed() -> None:
    result = runner.invoke(main, ["-e", "1 / 0", "-e", "0 - 1 / 0", "-e", "0 / 0"])
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "evaluate() = inf",
        "evaluate() = -inf",
        "evaluate() = nan",
    ]


def test_input_file(tmp_path: Path) -> None:
    input_file = tmp_path / "lines.txt"
    input_file.write_text("a = 2\r\n\r\na ^ 10\n")
    result = runner.invoke(main, ["--input-file", str(input_file)])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["evaluate() = 2", "evaluate() = 1024"]


def test_define_and_no_defaults() -> None:
    result = runner.invoke(main, ["--no-defaults", "-D", "k=2.5", "-e", "k * 2", "-e", "x"])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["evaluate() = 5", "evaluate() = 0"]


def test_define_overrides_default() -> None:
    result = runner.invoke(main, ["--define", "x = 1", "-e", "x + pi"])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["evaluate() = 4.14159"]


def test_bad_define() -> None:
    result = runner.invoke(main, ["-D", "k", "-e", "1"])
    assert result.exit_code == 2
    assert "expected NAME=VALUE" in result.output

    result = runner.invoke(main, ["-D", "k=abc", "-e", "1"])
    assert result.exit_code == 2
    assert "is not a number" in result.output

    result = runner.invoke(main, ["-D", "1k=1", "-e", "1"])
    assert result.exit_code == 2


def test_expression_and_input_file_are_exclusive(tmp_path: Path) -> None:
    input_file = tmp_path / "lines.txt"
    input_file.write_text("1\n")
    result = runner.invoke(main, ["-e", "1", "-f", str(input_file)])
    assert result.exit_code == 2
    assert "mutually exclusive" in result.output


def test_run_lines_counts_failures() -> None:
    variables = VariableStore()
    assert run_lines(["1", "1 +", "", "(", "a = 1"], variables) == 2
    assert variables == {"a": 1.0}


def test_parser_error_is_reported() -> None:
    deep = "(" * 2000 + "1" + ")" * 2000
    result = runner.invoke(main, ["-e", deep, "-e", "1"])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0].startswith("Parser error:")
    assert lines[-1] == "evaluate() = 1"


def test_long_chain() -> None:
    result = runner.invoke(main, ["-e", " - ".join(["1"] * 1500)])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["evaluate() = 0"]


def test_non_ascii_whitespace_only_line_is_not_skipped() -> None:
    result = runner.invoke(main, ["-e", "\u00a0", "-e", "2"])
    assert result.exit_code == 0
    assert result.output.splitlines() == ['Unparseable: "\u00a0"', "\u00a0", "^", "Parse error", "evaluate() = 2"]

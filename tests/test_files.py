import pytest

from gauss import (
    InputFormatError,
    OutputFile,
    OutputMessages,
    SolveResult,
    SolveStatus,
    check_input,
    format_value,
    parse_input,
    read_golden,
    read_input,
    write_in_file,
    written_outcome,
)
from gauss.files import OUTCOME_NO_SOLUTION, OUTCOME_SOLVED, OUTCOME_WRONG_INPUT, golden_outcome

VALID_INPUT = "2\n1 2 3\n4 5 6\n"


class RecordingOutput(OutputFile):
    """OutputFile that records calls instead of touching the disk."""

    def __init__(self):
        self.writes = []
        self.appends = []

    def write(self, text):
        self.writes.append(text)

    def append(self, text):
        self.appends.append(text)


def test_read_input_parses_matrix(tmp_path):
    path = tmp_path / "input.txt"
    path.write_text(VALID_INPUT, encoding="utf-8")
    matrix = read_input(path)
    assert matrix.rows() == 2
    assert matrix.cols() == 3
    assert matrix.to_list() == [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]


def test_parse_input_ignores_blank_lines_and_extra_spaces():
    matrix = parse_input("\n 2 \n1   2 3\n\n4\t5 6\n\n")
    assert matrix.to_list() == [[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]
    assert not matrix.exists_wrong_row()


def test_parse_input_accepts_decimal_and_exponent_tokens():
    matrix = parse_input("1\n2.5e1 -0.5\n")
    assert matrix.to_list() == [[25.0, -0.5]]


def test_parse_input_keeps_wrong_token_counts_detectable():
    matrix = parse_input("2\n1 2 3\n4 5\n")
    assert matrix.rows() == 2
    assert matrix.exists_wrong_row()

    matrix = parse_input("3\n1 2 3 4\n")
    assert matrix.exists_wrong_row()


@pytest.mark.parametrize("text", ["", "   \n", "1 2 3\n4 5 6\n", "two\n1 2 3\n", "-1\n", "2.5\n1 2 3\n"])
def test_parse_input_rejects_bad_header(text):
    with pytest.raises(InputFormatError):
        parse_input(text)


def test_parse_input_rejects_non_numeric_tokens():
    with pytest.raises(InputFormatError, match="Line 2"):
        parse_input("1\n1 x\n")


def test_check_input():
    assert check_input(VALID_INPUT)
    assert check_input("0\n")
    assert not check_input("1 2 3\n4 5 6\n")
    assert not check_input("2\n1 2 3\n")


def test_read_golden_returns_raw_tokens(tmp_path):
    path = tmp_path / "golden.txt"
    path.write_text("-1 2", encoding="utf-8")
    assert read_golden(path) == ["-1", "2"]


def test_read_golden_empty_file(tmp_path):
    path = tmp_path / "golden.txt"
    path.write_text("", encoding="utf-8")
    assert read_golden(path) == []


@pytest.mark.parametrize("value, expected", [
    (1.0, "1"),
    (-7.0, "-7"),
    (-0.0, "0"),
    (0.5, "0.5"),
    (-0.1, "-0.1"),
    (1e21, "1000000000000000000000"),
    (float("nan"), "NaN"),
    (float("inf"), "Infinity"),
    (float("-inf"), "-Infinity"),
])
def test_format_value(value, expected):
    assert format_value(value) == expected


def test_write_none_writes_no_solution_once():
    output = RecordingOutput()
    write_in_file(None, output, VALID_INPUT)
    assert output.writes == ["no solution"]
    assert output.appends == []


def test_write_against_invalid_input_writes_wrong_input_once():
    output = RecordingOutput()
    write_in_file([1, 2, 3], output, "1 2 3\n4 5 6\n")
    assert output.writes == ["wrong input"]
    assert output.appends == []


def test_write_legacy_wrong_input_text():
    output = RecordingOutput()
    write_in_file([1, 2, 3], output, "1 2 3\n4 5 6\n", OutputMessages.legacy())
    assert output.writes == ["wrong imput"]


def test_write_solution_truncates_then_appends_each_value():
    output = RecordingOutput()
    outcome = write_in_file([1.0, 2.0, 3.0], output, VALID_INPUT)
    assert outcome == OUTCOME_SOLVED
    assert output.writes == [""]
    assert output.appends == ["1 ", "2 ", "3 "]


@pytest.mark.parametrize("status, text", [
    (SolveStatus.INCONSISTENT, "no solution"),
    (SolveStatus.SINGULAR, "no solution"),
    (SolveStatus.MALFORMED, "wrong input"),
])
def test_write_failed_results(status, text):
    output = RecordingOutput()
    write_in_file(SolveResult.failed(status), output, VALID_INPUT)
    assert output.writes == [text]
    assert output.appends == []


def test_write_solved_result_to_disk(tmp_path):
    path = tmp_path / "output.txt"
    path.write_text("stale", encoding="utf-8")
    write_in_file(SolveResult.solved([-1.0, 2.0]), OutputFile(path), VALID_INPUT)
    assert path.read_text(encoding="utf-8") == "-1 2 "


def test_write_failure_overwrites_file(tmp_path):
    path = tmp_path / "output.txt"
    path.write_text("-1 2 ", encoding="utf-8")
    write_in_file(None, OutputFile(path), VALID_INPUT)
    assert path.read_text(encoding="utf-8") == "no solution"


def test_written_outcome_follows_writer_precedence():
    assert written_outcome(None, "not a matrix") == OUTCOME_NO_SOLUTION
    assert written_outcome(SolveResult.failed(SolveStatus.SINGULAR), VALID_INPUT) == OUTCOME_NO_SOLUTION
    assert written_outcome(SolveResult.failed(SolveStatus.MALFORMED), VALID_INPUT) == OUTCOME_WRONG_INPUT
    assert written_outcome(SolveResult.solved([-1.0, 2.0]), "1 2 3\n") == OUTCOME_WRONG_INPUT
    assert written_outcome([-1.0, 2.0], VALID_INPUT) == OUTCOME_SOLVED


def test_write_returns_failure_outcome():
    output = RecordingOutput()
    assert write_in_file(None, output, VALID_INPUT) == OUTCOME_NO_SOLUTION
    assert write_in_file([1.0], output, "x\n") == OUTCOME_WRONG_INPUT


def test_golden_outcome():
    assert golden_outcome(["-1", "2.5e-3"]) == OUTCOME_SOLVED
    assert golden_outcome(["No", "Solution"]) == OUTCOME_NO_SOLUTION
    assert golden_outcome(["wrong", "imput"]) == OUTCOME_WRONG_INPUT
    assert golden_outcome(["1", "x"]) is None
    assert golden_outcome([]) is None

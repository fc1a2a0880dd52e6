from pathlib import Path

import pytest

from gauss import OutputFile, OutputMessages, write_in_file
from verification import TestLoader, TestRunner, compare_results, expected_outcome, validate_golden
from verification.cli import main, run_verification
from verification.comparator import compare_field
from verification.loader import create_sample_case
from verification.reporter import VerificationReporter, generate_markdown_summary, solution_frame
from verification.runner import MemoryOutput
from verification.schemas import OUTCOME_NO_SOLUTION, OUTCOME_SOLVED, OUTCOME_WRONG_INPUT

SAMPLE_DIR = Path(__file__).resolve().parent.parent / "test_values"


def _case(tmp_path, case_id, input_text, golden_text):
    (tmp_path / f"{case_id}_input.txt").write_text(input_text, encoding="utf-8")
    if golden_text is not None:
        (tmp_path / f"{case_id}_golden.txt").write_text(golden_text, encoding="utf-8")
    return TestLoader(str(tmp_path)).load_single(case_id)


def test_expected_outcome_classification():
    assert expected_outcome(["-1", "2"]) == OUTCOME_SOLVED
    assert expected_outcome(["no", "solution"]) == OUTCOME_NO_SOLUTION
    assert expected_outcome(["wrong", "input"]) == OUTCOME_WRONG_INPUT
    assert expected_outcome(["wrong", "imput"]) == OUTCOME_WRONG_INPUT
    assert expected_outcome(["banana"]) is None
    assert expected_outcome([]) is None


def test_validate_golden_errors():
    assert validate_golden(["1", "2.5e-3"]) == []
    assert validate_golden([])[0].message == "Golden file is empty"
    assert validate_golden(["1", "x"])


def test_loader_pairs_input_with_golden(tmp_path):
    case = _case(tmp_path, "c1", "2\n1 2 3\n4 5 6\n", "-1 2\n")
    assert case.is_valid
    assert case.golden == ["-1", "2"]
    assert case.expected_values == [-1.0, 2.0]


def test_loader_reports_missing_golden(tmp_path):
    case = _case(tmp_path, "c1", "2\n1 2 3\n4 5 6\n", None)
    assert not case.is_valid
    assert "Golden file not found" in case.errors[0].message


def test_loader_rejects_unparseable_input_unless_expected(tmp_path):
    assert not _case(tmp_path, "bad", "x\n", "1\n").is_valid
    assert _case(tmp_path, "ok", "x\n", "wrong input\n").is_valid


def test_discover_sample_cases():
    cases = TestLoader(str(SAMPLE_DIR)).discover()
    ids = [c.case_id for c in cases]
    assert "simple_2x2" in ids
    assert ids == sorted(ids)
    assert all(c.is_valid for c in cases)


def test_runner_and_comparator_pass_on_sample_cases():
    cases = TestLoader(str(SAMPLE_DIR)).discover()
    runner = TestRunner()
    for case in cases:
        result = runner.run_case(case)
        comparison = compare_results(case, result)
        assert comparison.overall_pass, (case.case_id, comparison.notes)


def test_runner_renders_output_text(tmp_path):
    runner = TestRunner()
    solved = runner.run_case(_case(tmp_path, "a", "2\n1 2 3\n4 5 6\n", "-1 2"))
    assert solved.output_text == "-1 2 "
    assert solved.residual_norm == pytest.approx(0.0, abs=1e-12)

    malformed = runner.run_case(_case(tmp_path, "b", "1 2 3\n", "wrong input"))
    assert malformed.outcome == OUTCOME_WRONG_INPUT
    assert malformed.output_text == "wrong input"


def test_runner_output_text_matches_written_file(tmp_path):
    case = _case(tmp_path, "a", "3\n1 1 1 6\n0 2 5 -4\n2 5 -1 27\n", "5 3 -2")
    result = TestRunner().run_case(case)

    path = tmp_path / "output.txt"
    write_in_file(result.result, OutputFile(path), case.input_text)
    assert result.output_text == path.read_text(encoding="utf-8")


def test_runner_uses_configured_messages(tmp_path):
    runner = TestRunner(messages=OutputMessages.legacy())
    result = runner.run_case(_case(tmp_path, "b", "3\n1 2 3 4\n", "wrong imput"))
    assert result.outcome == OUTCOME_WRONG_INPUT
    assert result.output_text == "wrong imput"


def test_memory_output_truncates_on_write():
    output = MemoryOutput()
    output.append("stale ")
    output.write("")
    output.append("1 ")
    assert output.text == "1 "


def test_comparator_flags_wrong_values(tmp_path):
    case = _case(tmp_path, "c1", "2\n1 2 3\n4 5 6\n", "-1 3\n")
    comparison = compare_results(case, TestRunner().run_case(case))
    assert not comparison.overall_pass
    assert comparison.solution.max_abs == pytest.approx(1.0)
    assert comparison.overall_max_rel_error == pytest.approx(100.0 / 3.0)


def test_comparator_flags_outcome_mismatch(tmp_path):
    case = _case(tmp_path, "c1", "2\n1 1 2\n2 2 4\n", "1 1\n")
    comparison = compare_results(case, TestRunner().run_case(case))
    assert not comparison.overall_pass
    assert comparison.actual_outcome == OUTCOME_NO_SOLUTION
    assert comparison.solution is None


def test_comparator_flags_length_mismatch(tmp_path):
    case = _case(tmp_path, "c1", "2\n1 2 3\n4 5 6\n", "-1 2 0\n")
    comparison = compare_results(case, TestRunner().run_case(case))
    assert comparison.length_mismatch
    assert not comparison.overall_pass


def test_compare_field_keeps_sign():
    field = compare_field("solution", [-1.0], [1.0])
    assert field.abs_errors == [2.0]
    assert field.rel_errors == [200.0]
    assert field.signs == ["-"]


def test_reporter_writes_workbook(tmp_path):
    cases = TestLoader(str(SAMPLE_DIR)).discover()
    runner = TestRunner()
    reporter = VerificationReporter()
    for case in cases:
        result = runner.run_case(case)
        reporter.add_case_comparison(compare_results(case, result), result)

    path = tmp_path / "reports" / "report.xlsx"
    data = reporter.generate(str(path))

    assert data[:2] == b"PK"
    assert path.read_bytes() == data


def test_solution_frame_and_markdown(tmp_path):
    case = _case(tmp_path, "c1", "2\n1 2 3\n4 5 6\n", "-1 2\n")
    comparison = compare_results(case, TestRunner().run_case(case))

    df = solution_frame(comparison)
    assert list(df["Unknown"]) == ["x0", "x1"]
    assert list(df["Golden"]) == [-1.0, 2.0]

    markdown = generate_markdown_summary([comparison])
    assert "| c1 |" in markdown
    assert "**Overall:** 1/1 passed" in markdown


def test_run_verification_without_report(tmp_path, capsys):
    _case(tmp_path, "c1", "2\n1 2 3\n4 5 6\n", "-1 2\n")
    comparisons = run_verification(test_dir=str(tmp_path), output_path=None)
    assert len(comparisons) == 1
    assert "Summary: 1/1 passed" in capsys.readouterr().out


def test_cli_exit_codes(tmp_path):
    _case(tmp_path, "good", "1\n2 4\n", "2\n")
    assert main(["-d", str(tmp_path), "--no-report"]) == 0

    _case(tmp_path, "bad", "1\n2 4\n", "3\n")
    assert main(["-d", str(tmp_path), "--no-report"]) == 1
    assert main(["-d", str(tmp_path), "--no-report", "-c", "good"]) == 0


def test_cli_create_sample_and_list(tmp_path, capsys):
    assert main(["-d", str(tmp_path), "--create-sample", "c07"]) == 0
    assert (tmp_path / "c07_input.txt").exists()
    assert main(["-d", str(tmp_path), "--list"]) == 0
    assert "c07" in capsys.readouterr().out


def test_create_sample_case_is_solvable(tmp_path):
    create_sample_case("s", tmp_path)
    case = TestLoader(str(tmp_path)).load_single("s")
    assert compare_results(case, TestRunner().run_case(case)).overall_pass

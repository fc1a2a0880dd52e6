import io
import json

import pytest

from gauss import DEFAULT_PIVOT_TOLERANCE, OutputMessages, SolverConfig


def test_defaults():
    config = SolverConfig()
    assert config.input_path == "input.txt"
    assert config.golden_path == "golden.txt"
    assert config.output_path == "output.txt"
    assert config.tolerance == DEFAULT_PIVOT_TOLERANCE
    assert config.messages == OutputMessages()
    assert config.messages.wrong_input == "wrong input"


def test_round_trip_through_file(tmp_path):
    config = SolverConfig(
        input_path="systems/a.txt",
        output_path="out/a.txt",
        tolerance=1e-10,
        messages=OutputMessages.legacy(),
    )
    path = tmp_path / "solver.json"
    config.save(path)

    loaded = SolverConfig.from_json(path)
    assert loaded == config


def test_legacy_flag_and_message_override():
    config = SolverConfig.from_dict({"legacy_messages": True})
    assert config.messages.wrong_input == "wrong imput"

    config = SolverConfig.from_dict({"legacy_messages": True, "messages": {"no_solution": "none"}})
    assert config.messages == OutputMessages(no_solution="none", wrong_input="wrong imput")


def test_unknown_keys_are_ignored():
    config = SolverConfig.from_dict({"input_path": "x.txt", "colour": "blue"})
    assert config.input_path == "x.txt"
    assert config.output_path == "output.txt"


def test_non_object_json_is_rejected():
    with pytest.raises(ValueError):
        SolverConfig.from_json(io.StringIO(json.dumps([1, 2, 3])))


def test_messages_must_be_an_object():
    with pytest.raises(ValueError):
        SolverConfig.from_dict({"messages": "no solution"})


def test_with_base_dir_resolves_relative_paths(tmp_path):
    absolute = str(tmp_path / "abs_output.txt")
    config = SolverConfig(output_path=absolute).with_base_dir(tmp_path / "cases")
    assert config.input_path == str(tmp_path / "cases" / "input.txt")
    assert config.output_path == absolute

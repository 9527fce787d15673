"""
Tests for the generation pipeline
=================================
"""

from svfsm.config import GeneratorConfig
from svfsm.generator import generate_advanced, generate_fast, generate_inline
from svfsm.models import Flavor
from svfsm.utils.result import (
    DuplicateStateError,
    IndexOutOfRangeError,
    InsufficientStatesError,
    InvalidIdentifierError,
    SourceIndexMismatchError,
)


class TestGenerateFast:
    def test_ring_output(self):
        result = generate_fast("IDLE;RUN;DONE")
        assert result.is_ok()
        generation = result.unwrap()
        assert generation.definition.flavor is Flavor.CYCLIC
        assert generation.definition.transitions.pairs() == [
            ("IDLE", "RUN"), ("RUN", "DONE"), ("DONE", "IDLE"),
        ]
        assert "logic done2idle;" in generation.code
        assert "// State transition logic (combinational)" in generation.code

    def test_bad_states_produce_no_code(self):
        result = generate_fast("1BAD;OK")
        assert result.is_err()
        assert isinstance(result.unwrap_err(), InvalidIdentifierError)

    def test_repeated_state_ring_has_single_branches(self):
        code = generate_fast("A;B;A").unwrap().code
        assert "else if" not in code
        assert code.count("if (trans_flags.a2a)") == 1
        assert code.count("if (trans_flags.a2b)") == 1

    def test_identical_inputs_identical_output(self):
        first = generate_fast("A;B;C").unwrap().code
        second = generate_fast("A;B;C").unwrap().code
        assert first == second


class TestGenerateAdvanced:
    def test_index_transitions(self):
        generation = generate_advanced("A;B;C", "1-2;2-3;2-1").unwrap()
        assert generation.definition.flavor is Flavor.EXPLICIT
        assert generation.definition.transitions.pairs() == [("A", "B"), ("B", "C"), ("B", "A")]
        code = generation.code
        assert code.index("if (trans_flags.b2c)") < code.index("else if (trans_flags.b2a)")
        assert "State C has no outgoing transitions" in generation.warnings

    def test_state_errors_come_first(self):
        error = generate_advanced("ONLY", "1-2").unwrap_err()
        assert isinstance(error, InsufficientStatesError)

    def test_transition_errors(self):
        error = generate_advanced("A;B;C", "0-1").unwrap_err()
        assert isinstance(error, IndexOutOfRangeError)
        assert "1-3" in error.message

    def test_strict_mode_rejects_duplicates(self):
        config = GeneratorConfig(strict=True)
        error = generate_advanced("A;B;A", "1-2;2-3", config).unwrap_err()
        assert isinstance(error, DuplicateStateError)

    def test_permissive_mode_renders_duplicates(self):
        generation = generate_advanced("A;B;A", "1-2;2-3").unwrap()
        assert "Duplicate state names: A" in generation.warnings
        assert generation.code.count("logic a2b;") == 1
        assert generation.code.count("logic b2a;") == 1

    def test_repeated_state_arms_follow_positions(self):
        """The second A declares no edges of its own, so its arm stays empty."""
        generation = generate_advanced("A;B;A", "1-2;2-3").unwrap()
        next_state = generation.code.split("begin : state_transition")[1]
        assert next_state.count("if (trans_flags.a2b)") == 1
        assert next_state.count("// No transitions defined for this state") == 1
        assert "State A has no outgoing transitions" in generation.warnings

    def test_state_mapping(self):
        assert generate_advanced("IDLE;RUN", "1-2").unwrap().state_mapping == "1 = IDLE, 2 = RUN"

    def test_state_map_option(self):
        config = GeneratorConfig(include_state_map=True)
        code = generate_advanced("A;B", "1-2", config).unwrap().code
        assert code.startswith("// State mapping\n// 1: A\n// 2: B\n")


class TestGenerateInline:
    def test_inline_declarations(self):
        generation = generate_inline("IDLE;1-2\nRUN;2-1").unwrap()
        assert generation.definition.states.to_list() == ["IDLE", "RUN"]
        assert generation.definition.transitions.pairs() == [("IDLE", "RUN"), ("RUN", "IDLE")]
        assert generation.warnings == []

    def test_inline_errors(self):
        error = generate_inline("IDLE;2-1\nRUN;2-1").unwrap_err()
        assert isinstance(error, SourceIndexMismatchError)


class TestGenerationResult:
    def test_to_dict(self):
        data = generate_advanced("A;B", "1-2;2-1").unwrap().to_dict()
        assert data == {
            "flavor": "explicit",
            "states": ["A", "B"],
            "reset_state": "A",
            "transitions": [
                {"source": "A", "target": "B"},
                {"source": "B", "target": "A"},
            ],
            "flags": ["a2b", "b2a"],
            "warnings": [],
        }

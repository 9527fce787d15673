"""
Tests for transition flag naming
================================
"""

from svfsm.generator import flag_name, flag_name_for, flag_names
from svfsm.models import Transition, TransitionSet


class TestFlagName:
    def test_lowercases_both_sides(self):
        assert flag_name(Transition("A", "B")) == "a2b"
        assert flag_name(Transition("IDLE", "Run_1")) == "idle2run_1"

    def test_case_insensitive(self):
        assert flag_name(Transition("A", "B")) == flag_name(Transition("a", "B"))

    def test_self_loop(self):
        assert flag_name(Transition("WAIT", "WAIT")) == "wait2wait"

    def test_raw_pair_helper(self):
        assert flag_name_for("FETCH", "DECODE") == "fetch2decode"


class TestFlagNames:
    def test_order_and_duplicates_are_kept(self):
        transitions = TransitionSet((Transition("A", "B"), Transition("a", "b"), Transition("B", "A")))
        assert flag_names(transitions) == ["a2b", "a2b", "b2a"]

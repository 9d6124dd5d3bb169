"""
Unit tests for action string helpers and the profiler.
"""

import pytest

from plantree import utils


class TestActionStrings:
    def test_parse_action_with_time(self):
        assert utils.parse_action("(move robot1 room1 room2):5") == ("move robot1 room1 room2", 5)

    def test_parse_action_without_time(self):
        assert utils.parse_action("(move robot1 room1 room2)") == ("move robot1 room1 room2", -1)

    def test_extra_whitespace(self):
        action = "  ( move\trobot1   room1\n room2 ) :12"
        assert utils.get_action_expression(action) == "move robot1 room1 room2"
        assert utils.get_action_time(action) == 12

    def test_name_and_params(self):
        action = "(move robot1 room1 room2):3"
        assert utils.get_action_name(action) == "move"
        assert utils.get_action_params(action) == ["robot1", "room1", "room2"]

    def test_action_without_params(self):
        assert utils.get_action_name("(wait)") == "wait"
        assert utils.get_action_params("(wait)") == []

    @pytest.mark.parametrize("action", ["move robot1", "(move robot1):soon"])
    def test_malformed(self, action):
        with pytest.raises(ValueError):
            utils.parse_action(action)


class TestProfiler:
    def test_profile_records_intervals(self):
        profiler = utils.Profiler()
        with profiler.profile("call"):
            pass
        with profiler.profile("call"):
            pass
        assert profiler.count("call") == 2
        assert profiler.compute_sum("call") >= 0.0
        assert profiler.compute_average("call", reset=True) >= 0.0
        assert profiler.count("call") == 0

    def test_disabled(self):
        profiler = utils.Profiler(disabled=True)
        with profiler.profile("call"):
            pass
        assert profiler.tic("call") == 0.0
        assert profiler.counts() == {}
        profiler.enable()
        profiler.tic("call")
        assert profiler.toc("call") >= 0.0
        assert profiler.count("call") == 1

    def test_average_of_unknown_key(self):
        assert utils.Profiler().compute_average("missing") == 0.0

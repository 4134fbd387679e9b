# ABOUTME: Tests for validate_layout_or_none
# ABOUTME: Each structural failure is reported with a readable reason; consistent layouts pass

import pytest

from layout_validator import validate_layout_or_none


class TestValidateLayout:
    def test_consistent_layout_is_valid(self):
        rooms = [["a"], ["b", "c"], ["d"]]
        layout = [[[0, 1]], [[0], [0]], [[]]]
        assert validate_layout_or_none(rooms, layout) is None

    @pytest.mark.parametrize("rooms, layout", [(None, []), ([], None), (None, None)])
    def test_missing_inputs(self, rooms, layout):
        assert validate_layout_or_none(rooms, layout) == "No Sanctum layout available."

    def test_layout_with_fewer_layers(self):
        assert (
            validate_layout_or_none([["a"], ["b"]], [[[0]]])
            == "Layout layer count 1 < rooms 2."
        )

    def test_null_room_list(self):
        assert validate_layout_or_none([["a"], None], [[[]], []]) == "Layer 1 has null room list."

    def test_null_layout_layer(self):
        assert validate_layout_or_none([["a"]], [None]) == "Layout for layer 0 is null."

    def test_layout_layer_shorter_than_listing(self):
        assert (
            validate_layout_or_none([["a", "b"]], [[[]]])
            == "Layout rooms 1 < UI rooms 2 at layer 0."
        )

    def test_edge_past_next_layer_is_reported(self):
        rooms = [["a"], ["b", "c"]]
        layout = [[[0, 2]], [[], []]]
        assert validate_layout_or_none(rooms, layout) == (
            "Invalid edge 0:0->1:2 (next layer has 2 rooms)."
        )

    def test_first_failure_wins(self):
        rooms = [["a"], ["b"], ["c"]]
        layout = [[[3]], [[7]], [[]]]
        assert validate_layout_or_none(rooms, layout).startswith("Invalid edge 0:0->1:3")

    def test_null_edge_lists_are_ignored(self):
        assert validate_layout_or_none([["a"], ["b"]], [[None], [None]]) is None

    def test_final_layer_edges_are_not_checked(self):
        assert validate_layout_or_none([["a"]], [[[9]]]) is None

    def test_empty_next_layer_rejects_any_edge(self):
        assert validate_layout_or_none([["a"], []], [[[0]], []]) == (
            "Invalid edge 0:0->1:0 (next layer has 0 rooms)."
        )

    def test_does_not_mutate_inputs(self):
        rooms = [["a"], ["b"]]
        layout = [[[0]], [[]]]
        validate_layout_or_none(rooms, layout)
        assert rooms == [["a"], ["b"]]
        assert layout == [[[0]], [[]]]

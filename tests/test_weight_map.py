# ABOUTME: Tests for WeightMap and build_weight_map
# ABOUTME: Covers grid sizing, holes, single calculator query per room and absent listings

import math
import unittest
from unittest.mock import Mock

from tests.conftest import FakeRoom, FakeWeightCalculator
from weight_calculator import TableWeightCalculator, WeightCalculator
from weight_map import RoomCoordinate, WeightMap, build_weight_map, room_counts_for


class TestRoomCoordinate(unittest.TestCase):
    def test_ordering_is_layer_then_room(self):
        coords = [RoomCoordinate(1, 0), RoomCoordinate(0, 2), RoomCoordinate(0, 1)]
        self.assertEqual(
            sorted(coords),
            [RoomCoordinate(0, 1), RoomCoordinate(0, 2), RoomCoordinate(1, 0)],
        )

    def test_equals_plain_tuple(self):
        self.assertEqual(RoomCoordinate(2, 3), (2, 3))
        self.assertEqual(str(RoomCoordinate(2, 3)), "2:3")


class TestWeightMap(unittest.TestCase):
    def test_padded_to_widest_layer(self):
        weights = WeightMap([1, 3, 2])
        self.assertEqual(weights.shape, (3, 3))
        self.assertEqual(weights[1, 2], 0.0)

    def test_cells_past_room_count_are_not_valid(self):
        weights = WeightMap([1, 3])
        self.assertTrue(weights.is_valid((1, 2)))
        self.assertFalse(weights.is_valid((0, 1)))
        self.assertFalse(weights.is_valid((2, 0)))
        self.assertFalse(weights.is_valid((-1, 0)))
        self.assertFalse(weights.is_valid((0, -1)))

    def test_path_weight_and_to_list(self):
        weights = WeightMap([1, 2])
        weights[0, 0] = 10
        weights[1, 1] = 7.5
        self.assertEqual(weights.path_weight([(0, 0), (1, 1)]), 17.5)
        self.assertEqual(weights.to_list(), [[10.0], [0.0, 7.5]])

    def test_room_counts_treat_missing_layers_as_empty(self):
        self.assertEqual(room_counts_for([[1, 2], None, []]), [2, 0, 0])
        self.assertEqual(room_counts_for(None), [])


class TestBuildWeightMap(unittest.TestCase):
    def test_absent_or_empty_listing_clears_map(self):
        calculator = FakeWeightCalculator({})
        self.assertEqual(build_weight_map(None, calculator), (None, {}))
        self.assertEqual(build_weight_map([], calculator), (None, {}))
        self.assertEqual(calculator.calls, [])

    def test_each_present_room_queried_once(self):
        rooms = [[FakeRoom("a")], [FakeRoom("b"), None, FakeRoom("c")]]
        calculator = FakeWeightCalculator({"a": 1.0, "b": 2.0, "c": 3.0})

        weights, debug_texts = build_weight_map(rooms, calculator)

        self.assertEqual(sorted(calculator.calls), ["a", "b", "c"])
        self.assertEqual(weights.shape, (2, 3))
        self.assertEqual(weights.to_list(), [[1.0], [2.0, 0.0, 3.0]])
        self.assertNotIn((1, 1), debug_texts)
        self.assertEqual(debug_texts[(1, 2)], "notes for c")

    def test_negative_and_infinite_weights_pass_through(self):
        rooms = [[FakeRoom("a"), FakeRoom("b")]]
        calculator = FakeWeightCalculator({"a": -5.0, "b": -math.inf})

        weights, _ = build_weight_map(rooms, calculator)

        self.assertEqual(weights[0, 0], -5.0)
        self.assertEqual(weights[0, 1], -math.inf)

    def test_get_room_lookup_is_used(self):
        rooms = [["ui-handle"]]
        calculator = FakeWeightCalculator({"tracked": 4.0})
        get_room = Mock(return_value=FakeRoom("tracked"))

        weights, _ = build_weight_map(rooms, calculator, get_room=get_room)

        get_room.assert_called_once_with(0, 0)
        self.assertEqual(weights[0, 0], 4.0)

    def test_logs_when_logger_given(self):
        logger = Mock()
        build_weight_map([[FakeRoom("a")]], FakeWeightCalculator({"a": 1.0}), logger=logger)
        extra = logger.debug.call_args.kwargs["extra"]
        self.assertEqual(extra["event_type"], "weight_map_built")
        self.assertEqual(extra["rooms_weighted"], 1)


class TestTableWeightCalculator(unittest.TestCase):
    def test_known_and_default_types(self):
        calculator = TableWeightCalculator({"Boss": 50.0}, default_weight=-1.0)
        self.assertIsInstance(calculator, WeightCalculator)
        self.assertEqual(
            calculator.calculate_room_weight(FakeRoom("x", room_type="Boss")), (50.0, "Boss")
        )
        self.assertEqual(
            calculator.calculate_room_weight(FakeRoom("y", room_type="Trap")),
            (-1.0, "Trap (default)"),
        )


if __name__ == "__main__":
    unittest.main()

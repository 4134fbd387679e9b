# ABOUTME: Global pytest configuration for path finder tests
# ABOUTME: Provides fake rooms, a fake weight calculator and common Sanctum layouts

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import pytest

from path_finder import PathFinder
from session.pathfind_configuration import PathfindConfiguration
from session.sanctum_state import SanctumState


@dataclass(frozen=True)
class FakeRoom:
    """Stand-in for a host room handle."""

    name: str
    room_type: str = "Room"

    @property
    def position(self) -> Tuple[int, int]:
        return (len(self.name), 0)

    def get_client_rect(self) -> str:
        return f"rect:{self.name}"


class FakeWeightCalculator:
    """Looks weights up by room name and counts how often it was asked."""

    def __init__(self, weights: Dict[str, float]):
        self.weights = weights
        self.calls: List[str] = []

    def calculate_room_weight(self, room: FakeRoom) -> Tuple[float, str]:
        self.calls.append(room.name)
        return self.weights.get(room.name, 0.0), f"notes for {room.name}"


def make_state(
    weights: List[List[Optional[float]]],
    layout: List[List[List[int]]],
    player: Optional[Tuple[int, int]] = None,
) -> Tuple[SanctumState, FakeWeightCalculator]:
    """
    Build a state from a weight grid; None entries become holes.

    Rooms are named "L{layer}R{room}".
    """
    rooms_by_layer = []
    weight_table = {}
    for layer, row in enumerate(weights):
        layer_rooms = []
        for room, weight in enumerate(row):
            if weight is None:
                layer_rooms.append(None)
                continue
            name = f"L{layer}R{room}"
            layer_rooms.append(FakeRoom(name))
            weight_table[name] = weight
        rooms_by_layer.append(layer_rooms)

    state = SanctumState(rooms_by_layer=rooms_by_layer, room_layout=layout)
    if player is not None:
        state.set_player_position(*player)
    return state, FakeWeightCalculator(weight_table)


def make_path_finder(weights, layout, player=None) -> PathFinder:
    """PathFinder with its weight map already built."""
    state, calculator = make_state(weights, layout, player)
    finder = PathFinder(state, calculator)
    finder.create_room_weight_map()
    return finder


@pytest.fixture
def diamond_layout():
    """Three layers [1, 2, 1]; both middle rooms lead to the single exit."""
    weights = [[10], [3, 7], [5]]
    layout = [[[0, 1]], [[0], [0]], [[]]]
    return weights, layout


@pytest.fixture
def test_config():
    return PathfindConfiguration(debug_enable=True)

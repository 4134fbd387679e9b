"""
ABOUTME: Per-room weight grid for the Sanctum path finder
ABOUTME: Builds a fresh layer x room weight map from a room listing each cycle
"""

from typing import Any, Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from weight_calculator import WeightCalculator


class RoomCoordinate(NamedTuple):
    """(layer, room) pair identifying a node. Orders by layer, then room."""

    layer: int
    room: int

    def __str__(self) -> str:
        return f"{self.layer}:{self.room}"


def room_counts_for(rooms_by_layer: Optional[Sequence[Optional[Sequence[Any]]]]) -> List[int]:
    """Number of rooms in each layer; a missing layer list counts as empty."""
    if not rooms_by_layer:
        return []
    return [len(layer_rooms) if layer_rooms is not None else 0 for layer_rooms in rooms_by_layer]


class WeightMap:
    """
    Rectangular grid of room weights, one row per layer.

    Rows are padded to the widest layer. Cells past a layer's real room
    count exist in the grid but are never valid coordinates.
    """

    def __init__(self, room_counts: Sequence[int]):
        self.room_counts: List[int] = list(room_counts)
        width = max(self.room_counts) if self.room_counts else 0
        self.grid = np.zeros((len(self.room_counts), width), dtype=np.float64)

    @property
    def layer_count(self) -> int:
        return self.grid.shape[0]

    @property
    def column_count(self) -> int:
        return self.grid.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.layer_count, self.column_count

    def is_empty(self) -> bool:
        return self.grid.size == 0

    def is_valid(self, coord: Tuple[int, int]) -> bool:
        """True when coord names a real room inside the grid."""
        layer, room = coord
        if layer < 0 or layer >= self.layer_count:
            return False
        return 0 <= room < self.room_counts[layer] and room < self.column_count

    def __getitem__(self, coord: Tuple[int, int]) -> float:
        return float(self.grid[coord[0], coord[1]])

    def __setitem__(self, coord: Tuple[int, int], weight: float) -> None:
        self.grid[coord[0], coord[1]] = weight

    def path_weight(self, path: Sequence[Tuple[int, int]]) -> float:
        """Cumulative weight of every room on the path."""
        return float(sum(self[coord] for coord in path))

    def to_list(self) -> List[List[float]]:
        """Rows trimmed to each layer's real room count."""
        return [
            [float(value) for value in self.grid[layer, : self.room_counts[layer]]]
            for layer in range(self.layer_count)
        ]

    def __repr__(self) -> str:
        return f"WeightMap(shape={self.shape}, room_counts={self.room_counts})"


def build_weight_map(
    rooms_by_layer: Optional[Sequence[Optional[Sequence[Any]]]],
    weight_calculator: WeightCalculator,
    get_room: Optional[Callable[[int, int], Any]] = None,
    logger=None,
) -> Tuple[Optional[WeightMap], Dict[RoomCoordinate, str]]:
    """
    Query the calculator once per present room and collect the results.

    Args:
        rooms_by_layer: Layer-ordered room listing; entries may be None (holes)
        weight_calculator: Returns (weight, annotation) for a room handle
        get_room: Optional lookup handing the calculator a richer room object
            than the listing entry (defaults to the listing entry itself)
        logger: Optional logger for diagnostics

    Returns:
        (weight_map, debug_texts). weight_map is None when the listing is
        absent or has no layers. Holes keep weight 0 and get no annotation.
    """
    debug_texts: Dict[RoomCoordinate, str] = {}
    if not rooms_by_layer:
        if logger:
            logger.debug(
                "No room listing available, weight map cleared",
                extra={"event_type": "weight_map_cleared"},
            )
        return None, debug_texts

    weight_map = WeightMap(room_counts_for(rooms_by_layer))

    for layer, layer_rooms in enumerate(rooms_by_layer):
        if layer_rooms is None:
            continue
        for room, listed_room in enumerate(layer_rooms):
            if listed_room is None:
                continue

            handle = get_room(layer, room) if get_room else listed_room
            weight, annotation = weight_calculator.calculate_room_weight(handle)
            coord = RoomCoordinate(layer, room)
            weight_map[coord] = weight
            debug_texts[coord] = annotation

    if logger:
        logger.debug(
            f"Weight map built with {len(debug_texts)} rooms across {weight_map.layer_count} layers",
            extra={
                "event_type": "weight_map_built",
                "shape": list(weight_map.shape),
                "rooms_weighted": len(debug_texts),
            },
        )

    return weight_map, debug_texts

"""
Room handle and weight calculator interfaces for the Sanctum path finder.

The host application owns the real room objects and the scoring rules.
This module only describes the shape the path finder and overlay expect,
plus a small table-driven calculator for hosts that score rooms by type.
"""

from typing import Any, Callable, Dict, Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class RoomHandle(Protocol):
    """A room as seen by the overlay: somewhere to draw text and a frame."""

    @property
    def position(self) -> Any:
        ...

    def get_client_rect(self) -> Any:
        ...


@runtime_checkable
class WeightCalculator(Protocol):
    """
    Scores a single room.

    Must be a pure query from the caller's point of view: the weight and
    annotation are returned together and nothing else changes.
    """

    def calculate_room_weight(self, room: Any) -> Tuple[float, str]:
        ...


class TableWeightCalculator:
    """
    Looks room weights up in a table keyed by room type.

    Args:
        weights: Mapping from room type to weight
        default_weight: Weight for types missing from the table
        key: Extracts the room type from a room handle (defaults to ``room.room_type``)
    """

    def __init__(
        self,
        weights: Dict[str, float],
        default_weight: float = 0.0,
        key: Optional[Callable[[Any], str]] = None,
    ):
        self.weights = dict(weights)
        self.default_weight = default_weight
        self.key = key or (lambda room: getattr(room, "room_type", ""))

    def calculate_room_weight(self, room: Any) -> Tuple[float, str]:
        room_type = self.key(room)
        if room_type in self.weights:
            return self.weights[room_type], room_type
        return self.default_weight, f"{room_type} (default)"

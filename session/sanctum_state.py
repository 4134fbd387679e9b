"""
SanctumState dataclass for the Sanctum path finder.

Holds the per-cycle snapshot handed over by the host: the room listing,
the forward-edge layout and the player's position. The path finder and
overlay read it; only the host (or PathManager's counters) writes it.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from weight_map import RoomCoordinate


@dataclass
class SanctumState:
    """
    Snapshot of the Sanctum layout for one recomputation cycle.

    rooms_by_layer[layer][room] is a room handle or None for a hole.
    room_layout[layer][room] lists the room indices in layer + 1 reachable
    by a forward edge; a missing or empty list is a dead end.
    """

    rooms_by_layer: Optional[List[Optional[List[Any]]]] = None
    room_layout: Optional[List[Optional[List[Optional[Sequence[int]]]]]] = None
    player_position: Optional[RoomCoordinate] = None

    run_id: str = ""
    cycle_count: int = 0
    layout_warnings: List[str] = field(default_factory=list)

    @property
    def layer_count(self) -> int:
        return len(self.rooms_by_layer) if self.rooms_by_layer else 0

    def room_count(self, layer: int) -> int:
        """Rooms listed in a layer; 0 for missing or out-of-range layers."""
        if layer < 0 or layer >= self.layer_count:
            return 0
        layer_rooms = self.rooms_by_layer[layer]
        return len(layer_rooms) if layer_rooms is not None else 0

    def get_room(self, layer: int, room: int) -> Optional[Any]:
        """Room handle at (layer, room), or None if absent or out of range."""
        if room < 0 or room >= self.room_count(layer):
            return None
        return self.rooms_by_layer[layer][room]

    def set_player_position(self, layer: int, room: int) -> None:
        """Store the host's player indices; negative values mean unknown."""
        if layer is None or room is None or layer < 0 or room < 0:
            self.player_position = None
        else:
            self.player_position = RoomCoordinate(layer, room)

    def is_player_at(self, coord: Sequence[int]) -> bool:
        return self.player_position is not None and tuple(coord) == tuple(
            self.player_position
        )

    def update_layout(
        self,
        rooms_by_layer: Optional[List[Optional[List[Any]]]],
        room_layout: Optional[List[Optional[List[Optional[Sequence[int]]]]]],
    ) -> None:
        """Replace the listing and layout wholesale."""
        self.rooms_by_layer = rooms_by_layer
        self.room_layout = room_layout

    def snapshot(self) -> "SanctumState":
        """Copy with per-layer lists duplicated so host mutation can't leak in."""
        rooms = (
            [list(layer) if layer is not None else None for layer in self.rooms_by_layer]
            if self.rooms_by_layer is not None
            else None
        )
        layout = (
            [
                [list(edges) if edges is not None else None for edges in layer]
                if layer is not None
                else None
                for layer in self.room_layout
            ]
            if self.room_layout is not None
            else None
        )
        return SanctumState(
            rooms_by_layer=rooms,
            room_layout=layout,
            player_position=self.player_position,
            run_id=self.run_id,
            cycle_count=self.cycle_count,
            layout_warnings=list(self.layout_warnings),
        )

    def reset_run(self, run_id: str = "") -> None:
        """Forget everything from the previous Sanctum run."""
        self.rooms_by_layer = None
        self.room_layout = None
        self.player_position = None
        self.run_id = run_id
        self.cycle_count = 0
        self.layout_warnings.clear()

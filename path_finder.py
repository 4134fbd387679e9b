"""
Best-path search for the Sanctum layout.

Finds the path from the player's room (or the first room of the top-most
layer when the player is unknown) that reaches the deepest layer with the
highest cumulative room weight. Edges only run from layer L to layer L+1,
so the graph is a DAG and a single relaxation pass in layer order gives
the same longest-path costs as a priority-queue search.
"""

from typing import Any, Dict, Iterator, List, Optional, Sequence

import numpy as np

from layout_validator import validate_layout_or_none
from session.sanctum_state import SanctumState
from weight_calculator import WeightCalculator
from weight_map import RoomCoordinate, WeightMap, build_weight_map


def get_forward_neighbors(
    current_room: RoomCoordinate,
    connections: Optional[Sequence[Optional[Sequence[Optional[Sequence[int]]]]]],
) -> Iterator[RoomCoordinate]:
    """Yield the next-layer rooms joined to current_room by a forward edge."""
    if connections is None:
        return

    layer, room = current_room
    if layer < 0 or layer >= len(connections):
        return

    current_layer = connections[layer]
    if current_layer is None or room < 0 or room >= len(current_layer):
        return

    forward_targets = current_layer[room]
    if not forward_targets:
        return

    for next_index in forward_targets:
        yield RoomCoordinate(layer + 1, int(next_index))


class PathFinder:
    """
    Owns the weight map, debug annotations and best path for one Sanctum run.

    Each cycle the caller runs create_room_weight_map() then find_best_path();
    both replace their previous results wholesale.
    """

    def __init__(self, state: SanctumState, weight_calculator: WeightCalculator, logger=None):
        self.state = state
        self.weight_calculator = weight_calculator
        self.logger = logger

        self.room_weights: Optional[WeightMap] = None
        self.debug_texts: Dict[RoomCoordinate, str] = {}
        self.found_best_path: List[RoomCoordinate] = []

    # ------------------------------------------------------------------
    # Path calculation
    # ------------------------------------------------------------------

    def create_room_weight_map(self) -> Optional[WeightMap]:
        """Rebuild the weight map and annotations from the current listing."""
        self.room_weights, self.debug_texts = build_weight_map(
            self.state.rooms_by_layer,
            self.weight_calculator,
            get_room=self.state.get_room,
            logger=self.logger,
        )
        return self.room_weights

    def resolve_start_room(self) -> Optional[RoomCoordinate]:
        """
        Pick the search start: the player's room if it is a valid room,
        otherwise room 0 of the first layer that has any rooms.
        """
        weights = self.room_weights
        if weights is None or weights.is_empty():
            return None

        player = self.state.player_position
        if player is not None:
            layer, room = player
            if (
                0 <= layer < self.state.layer_count
                and layer < weights.layer_count
                and self.state.rooms_by_layer[layer] is not None
                and 0 <= room < self.state.room_count(layer)
                and room < weights.column_count
            ):
                return RoomCoordinate(layer, room)

            self._log_debug(
                f"Player position {player} is out of range, using fallback start",
                event_type="start_room_fallback",
            )

        for layer in range(min(self.state.layer_count, weights.layer_count)):
            if self.state.room_count(layer) > 0:
                return RoomCoordinate(layer, 0)

        return None

    def find_best_path(self) -> List[RoomCoordinate]:
        """
        Search for the deepest, then heaviest, path from the start room.

        Returns:
            Ordered room coordinates starting at the start room; empty when
            inputs are missing or no start room exists.
        """
        self.found_best_path = []

        weights = self.room_weights
        if weights is None or weights.is_empty() or self.state.room_layout is None:
            self._log_debug("Best path skipped: no weight map or layout", event_type="best_path_skipped")
            return self.found_best_path

        if not self.state.rooms_by_layer:
            self._log_debug("Best path skipped: no room listing", event_type="best_path_skipped")
            return self.found_best_path

        start = self.resolve_start_room()
        if start is None:
            self._log_debug("Best path skipped: no start room", event_type="best_path_skipped")
            return self.found_best_path

        max_cost, best_path = self._relax_from(start, weights)

        # Deepest layer first, then heaviest, then lowest room index.
        winner = max(
            best_path,
            key=lambda coord: (
                len(best_path[coord]),
                max_cost[coord.layer, coord.room],
                -coord.room,
            ),
        )
        self.found_best_path = best_path[winner]

        if self.logger:
            self.logger.debug(
                f"Best path from {start} to {winner}: {len(self.found_best_path)} rooms",
                extra={
                    "event_type": "best_path_found",
                    "start": str(start),
                    "end": str(winner),
                    "path_length": len(self.found_best_path),
                    "path_weight": float(max_cost[winner.layer, winner.room]),
                },
            )

        return self.found_best_path

    def _relax_from(self, start: RoomCoordinate, weights: WeightMap):
        """
        Longest-path relaxation over the layered DAG.

        Layers are processed in ascending order, so every predecessor of a
        room is final before the room itself is expanded. An update needs a
        strictly larger cost; ties keep the lowest-index predecessor.
        """
        max_cost = np.full(weights.shape, -np.inf, dtype=np.float64)
        max_cost[start.layer, start.room] = weights[start]
        best_path: Dict[RoomCoordinate, List[RoomCoordinate]] = {start: [start]}

        for layer in range(start.layer, weights.layer_count):
            for room in range(weights.room_counts[layer]):
                current = RoomCoordinate(layer, room)
                if current not in best_path:
                    continue

                for neighbor in get_forward_neighbors(current, self.state.room_layout):
                    if not weights.is_valid(neighbor):
                        self._log_debug(
                            f"Skipping edge {current}->{neighbor}: target is not a room",
                            event_type="edge_skipped",
                        )
                        continue

                    candidate = max_cost[current.layer, current.room] + weights[neighbor]
                    if candidate > max_cost[neighbor.layer, neighbor.room]:
                        max_cost[neighbor.layer, neighbor.room] = candidate
                        best_path[neighbor] = best_path[current] + [neighbor]

        return max_cost, best_path

    def get_best_path_weight(self) -> float:
        """Cumulative weight of the last best path (0.0 when there is none)."""
        if not self.found_best_path or self.room_weights is None:
            return 0.0
        return self.room_weights.path_weight(self.found_best_path)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_layout_or_none(self) -> Optional[str]:
        return validate_layout_or_none(self.state.rooms_by_layer, self.state.room_layout)

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def reset(self) -> None:
        self.room_weights = None
        self.debug_texts = {}
        self.found_best_path = []

    def to_dict(self) -> Dict[str, Any]:
        """
        JSON-friendly snapshot of the last cycle's results.

        Coordinates in annotation keys are rendered as "layer:room".
        """
        return {
            "room_weights": self.room_weights.to_list() if self.room_weights is not None else None,
            "debug_texts": {str(coord): text for coord, text in sorted(self.debug_texts.items())},
            "best_path": [[coord.layer, coord.room] for coord in self.found_best_path],
            "best_path_weight": self.get_best_path_weight(),
            "player_position": (
                list(self.state.player_position) if self.state.player_position is not None else None
            ),
        }

    def render_path_report(self) -> str:
        """Human-readable summary of the weight map and chosen path."""
        if self.room_weights is None:
            return "No Sanctum weight map available."

        lines = ["Sanctum path report", "=" * 19]
        for layer, row in enumerate(self.room_weights.to_list()):
            cells = []
            for room, weight in enumerate(row):
                marker = "*" if (layer, room) in self.found_best_path else " "
                cells.append(f"{marker}{weight:.0f}")
            lines.append(f"Layer {layer}: " + " ".join(cells))

        if self.found_best_path:
            route = " -> ".join(str(coord) for coord in self.found_best_path)
            lines.append(f"Best path: {route} (weight {self.get_best_path_weight():.0f})")
        else:
            lines.append("Best path: none")
        return "\n".join(lines)

    def _log_debug(self, message: str, event_type: str) -> None:
        if self.logger:
            self.logger.debug(message, extra={"event_type": event_type})

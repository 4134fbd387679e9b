"""
ABOUTME: Overlay drawing for the Sanctum path finder
ABOUTME: Renders per-room weight text and frames the rooms on the best path
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, ContextManager, Protocol

from path_finder import PathFinder
from session.pathfind_configuration import PathfindConfiguration
from weight_calculator import RoomHandle


class Graphics(Protocol):
    """Drawing surface provided by the host application."""

    def draw_text_with_background(
        self, text: str, position: Any, text_color: str, background_color: str
    ) -> None:
        ...

    def draw_frame(self, rect: Any, color: str, thickness: int) -> None:
        ...

    def set_text_scale(self, scale: float) -> ContextManager:
        ...


def format_debug_text(weight: float, annotation: str) -> str:
    """Overlay text for one room: weight rounded half away from zero, then the calculator's notes."""
    if math.isfinite(weight):
        rounded = Decimal(weight).quantize(Decimal(1), rounding=ROUND_HALF_UP)
        return f"Weight: {rounded:f}\n{annotation}"
    return f"Weight: {weight:.0f}\n{annotation}"


class OverlayRenderer:
    """Draws the path finder's results onto the host's graphics surface."""

    def __init__(self, graphics: Graphics, config: PathfindConfiguration, path_finder: PathFinder):
        self.graphics = graphics
        self.config = config
        self.path_finder = path_finder

    @property
    def state(self):
        return self.path_finder.state

    def draw_debug_info(self) -> int:
        """
        Draw weight text on every present room when debug is enabled.

        Returns:
            Number of rooms labelled
        """
        if not self.config.debug_enable:
            return 0

        weights = self.path_finder.room_weights
        if weights is None:
            return 0

        drawn = 0
        for layer in range(self.state.layer_count):
            for room in range(self.state.room_count(layer)):
                if not weights.is_valid((layer, room)):
                    continue
                room_handle: RoomHandle = self.state.get_room(layer, room)
                if room_handle is None:
                    continue

                annotation = self.path_finder.debug_texts.get((layer, room), "")
                display_text = format_debug_text(weights[layer, room], annotation)

                with self.graphics.set_text_scale(self.config.debug_font_size_multiplier):
                    self.graphics.draw_text_with_background(
                        display_text,
                        room_handle.position,
                        self.config.text_color,
                        self.config.background_color,
                    )
                drawn += 1

        return drawn

    def draw_best_path(self) -> int:
        """
        Frame each room on the best path except the one the player is in.

        Returns:
            Number of frames drawn
        """
        if not self.path_finder.found_best_path or self.state.rooms_by_layer is None:
            return 0

        drawn = 0
        for coord in self.path_finder.found_best_path:
            if self.state.is_player_at(coord):
                continue

            room_handle = self.state.get_room(coord.layer, coord.room)
            if room_handle is None:
                continue

            self.graphics.draw_frame(
                room_handle.get_client_rect(),
                self.config.best_path_color,
                self.config.frame_thickness,
            )
            drawn += 1

        return drawn

    def render(self) -> None:
        self.draw_debug_info()
        self.draw_best_path()

"""
ABOUTME: Structural consistency check between the room listing and the edge layout
ABOUTME: Returns a readable reason for the first problem found, or None when valid
"""

from typing import Any, Optional, Sequence


def validate_layout_or_none(
    rooms_by_layer: Optional[Sequence[Optional[Sequence[Any]]]],
    room_layout: Optional[Sequence[Optional[Sequence[Optional[Sequence[int]]]]]],
) -> Optional[str]:
    """
    Cross-check the room listing against the forward-edge layout.

    Checks run in order and stop at the first failure:
    listing/layout missing, layout shorter than the listing, per-layer
    missing lists or short layout rows, then edges pointing past the
    next layer's room count.

    Read-only; never raises for malformed input.

    Returns:
        None if the layout is consistent, otherwise a diagnostic string
    """
    if rooms_by_layer is None or room_layout is None:
        return "No Sanctum layout available."

    layers = len(rooms_by_layer)
    if len(room_layout) < layers:
        return f"Layout layer count {len(room_layout)} < rooms {layers}."

    for layer in range(layers):
        layer_rooms = rooms_by_layer[layer]
        layout_layer = room_layout[layer]
        if layer_rooms is None:
            return f"Layer {layer} has null room list."
        if layout_layer is None:
            return f"Layout for layer {layer} is null."
        if len(layout_layer) < len(layer_rooms):
            return (
                f"Layout rooms {len(layout_layer)} < UI rooms {len(layer_rooms)} "
                f"at layer {layer}."
            )

        if layer + 1 >= layers:
            continue

        next_layer = rooms_by_layer[layer + 1]
        next_layer_rooms = len(next_layer) if next_layer is not None else 0
        for room in range(len(layer_rooms)):
            edges = layout_layer[room]
            if edges is None:
                continue
            for target in edges:
                if target >= next_layer_rooms:
                    return (
                        f"Invalid edge {layer}:{room}->{layer + 1}:{target} "
                        f"(next layer has {next_layer_rooms} rooms)."
                    )

    return None

"""
PathManager for the Sanctum path finder.

Runs one recomputation cycle: rebuild the weight map, optionally check the
layout, search the best path, then hand the results to the overlay.
"""

from typing import Any, Dict, List, Optional

from managers.base_manager import BaseManager
from overlay import Graphics, OverlayRenderer
from path_finder import PathFinder
from session.pathfind_configuration import PathfindConfiguration
from session.sanctum_state import SanctumState
from weight_calculator import WeightCalculator
from weight_map import RoomCoordinate


class PathManager(BaseManager):
    """
    Drives the PathFinder once per host refresh.

    The host must not mutate the SanctumState while process_cycle() runs;
    use SanctumState.snapshot() when the live data can change underneath.
    """

    def __init__(
        self,
        logger,
        config: PathfindConfiguration,
        state: SanctumState,
        weight_calculator: WeightCalculator,
        graphics: Optional[Graphics] = None,
    ):
        super().__init__(logger, config, state, "path_manager")

        self.path_finder = PathFinder(state, weight_calculator, logger=logger)
        self.renderer = (
            OverlayRenderer(graphics, config, self.path_finder) if graphics is not None else None
        )
        self.last_layout_error: Optional[str] = None

    def reset_run(self, run_id: str = "") -> None:
        """Drop the previous run's layout and results."""
        self.state.reset_run(run_id)
        self.path_finder.reset()
        self.last_layout_error = None
        self.log_info(
            f"Sanctum run started: {run_id or 'unnamed'}",
            event_type="run_started",
            run_id=run_id,
        )

    def process_cycle(self) -> List[RoomCoordinate]:
        """Rebuild weights, search, and draw. Returns the new best path."""
        self.state.cycle_count += 1

        self.path_finder.create_room_weight_map()

        if self.config.validate_layout:
            self.check_layout()

        best_path = self.path_finder.find_best_path()

        if self.renderer is not None:
            self.renderer.render()

        self.log_info(
            f"Cycle {self.state.cycle_count} complete",
            event_type="cycle_completed",
            path_length=len(best_path),
            path_weight=self.path_finder.get_best_path_weight(),
            path=" -> ".join(str(coord) for coord in best_path),
        )
        return best_path

    def check_layout(self) -> Optional[str]:
        """Validate the layout; warn when the reason changes, remember each reason once."""
        reason = self.path_finder.validate_layout_or_none()
        if reason and reason not in self.state.layout_warnings:
            self.state.layout_warnings.append(reason)
        if reason and reason != self.last_layout_error:
            self.log_warning(
                f"Sanctum layout inconsistent: {reason}",
                event_type="layout_invalid",
                reason=reason,
            )
        self.last_layout_error = reason
        return reason

    def get_status(self) -> Dict[str, Any]:
        status = super().get_status()
        status.update(
            {
                "layout_error": self.last_layout_error,
                **self.path_finder.to_dict(),
            }
        )
        return status

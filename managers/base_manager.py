"""
Base manager protocol and interface for the Sanctum path finder.

Managers share a logger, the configuration and the SanctumState snapshot,
and tag every log record with their component name and the cycle number.
"""

from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable, Any, Dict
import logging

from session.sanctum_state import SanctumState
from session.pathfind_configuration import PathfindConfiguration


@runtime_checkable
class ManagerProtocol(Protocol):
    """Interface the host's refresh loop drives once per cycle."""

    def reset_run(self) -> None:
        """Reset manager state for a new Sanctum run."""
        ...

    def process_cycle(self) -> None:
        """Process manager-specific logic for the current cycle."""
        ...

    def should_process_cycle(self) -> bool:
        """Check if this manager needs to process the current cycle."""
        ...


class BaseManager(ABC):
    """
    Abstract base class providing common functionality for all managers.

    Handles common dependencies (logger, config, state) and structured
    logging helpers.
    """

    def __init__(
        self,
        logger: logging.Logger,
        config: PathfindConfiguration,
        state: SanctumState,
        component_name: str,
    ):
        """
        Initialize base manager with common dependencies.

        Args:
            logger: Shared logger instance for structured logging
            config: Path finder configuration
            state: Shared Sanctum snapshot
            component_name: Name for logging component field (e.g., "path_manager")
        """
        self.logger = logger
        self.config = config
        self.state = state
        self.component_name = component_name

    def _log(self, level: int, message: str, event_type: str, **kwargs) -> None:
        if self.logger:
            self.logger.log(level, message, extra={
                "event_type": event_type,
                "component": self.component_name,
                "cycle": self.state.cycle_count,
                **kwargs
            })

    def log_info(self, message: str, **kwargs) -> None:
        self._log(logging.INFO, message, kwargs.pop("event_type", "info"), **kwargs)

    def log_warning(self, message: str, **kwargs) -> None:
        self._log(logging.WARNING, message, kwargs.pop("event_type", "warning"), **kwargs)

    @abstractmethod
    def reset_run(self) -> None:
        """
        Reset manager state for a new Sanctum run.

        Called when the player enters a new Sanctum so nothing from the
        previous layout is drawn.
        """
        pass

    @abstractmethod
    def process_cycle(self) -> None:
        """Main entry point called by the host once per refresh."""
        pass

    def should_process_cycle(self) -> bool:
        """
        Check if this manager needs to process the current cycle.

        Default implementation always returns True.
        """
        return True

    def get_status(self) -> Dict[str, Any]:
        """Current manager status for debugging and monitoring."""
        return {
            "component": self.component_name,
            "cycle": self.state.cycle_count,
            "run_id": self.state.run_id,
        }

"""Manager classes package for the Sanctum path finder."""

from .base_manager import BaseManager, ManagerProtocol
from .path_manager import PathManager

__all__ = [
    "BaseManager",
    "ManagerProtocol",
    "PathManager",
]

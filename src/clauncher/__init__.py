"""CLauncher core package."""

from .config import LauncherSettings, SearchConfig
from .engine import LauncherEngine, create_engine
from .errors import ActivationError
from .types import SearchResult

__all__ = [
    "ActivationError",
    "LauncherEngine",
    "LauncherSettings",
    "SearchConfig",
    "SearchResult",
    "create_engine",
]

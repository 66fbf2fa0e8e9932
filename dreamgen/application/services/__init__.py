"""Service orchestrators."""

from .generation_service import GenerationService
from .history_recorder import HistoryRecorder
from .history_service import HistoryService
from .library_service import LibraryService

__all__ = [
    "GenerationService",
    "HistoryRecorder",
    "HistoryService",
    "LibraryService",
]

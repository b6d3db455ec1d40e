from .base import StorageBackend, BackendUnavailableError, file_counters
from .memory import MemoryStorage
from .database import DatabaseStorage
from .resilient import ResilientStorage

__all__ = [
    "StorageBackend",
    "BackendUnavailableError",
    "file_counters",
    "MemoryStorage",
    "DatabaseStorage",
    "ResilientStorage",
]

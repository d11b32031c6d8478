"""Library storage adapter exports."""

from .in_memory import InMemoryLibraryStorage
from .json_file import JsonFileLibraryStorage

__all__ = ["InMemoryLibraryStorage", "JsonFileLibraryStorage"]

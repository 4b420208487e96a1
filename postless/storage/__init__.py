"""Workspace storage: file access, config/secret files and request collections."""

from .file_store import FileStore
from .config_store import ConfigStore, WorkspacePaths
from .repository import CollectionRepository, find_request, parse_request

__all__ = [
    "FileStore",
    "ConfigStore",
    "WorkspacePaths",
    "CollectionRepository",
    "find_request",
    "parse_request",
]

"""
Filesystem access for the workspace.

Every read and write made by postless goes through :class:`FileStore`, which
turns ``OSError`` into :class:`~postless.exceptions.StorageError`.
"""

from pathlib import Path
from typing import List, Union

from postless.exceptions import StorageError
from postless.logger import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


class FileStore:
    """Thin wrapper over pathlib with uniform error handling."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def exists(self, path: PathLike) -> bool:
        return Path(path).exists()

    def is_dir(self, path: PathLike) -> bool:
        return Path(path).is_dir()

    def read_text(self, path: PathLike) -> str:
        """
        Read a whole file.

        Args:
            path: File to read

        Returns:
            str: File contents

        Raises:
            StorageError: If the file cannot be read
        """
        try:
            return Path(path).read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def write_text(self, path: PathLike, content: str) -> None:
        """
        Replace the contents of a file.

        Raises:
            StorageError: If the file cannot be written
        """
        try:
            Path(path).write_text(content, encoding=self.encoding)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e
        logger.debug(f"Wrote {len(content)} characters to {path}")

    def make_dirs(self, path: PathLike) -> None:
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to create directory {path}: {e}") from e

    def list_dirs(self, path: PathLike) -> List[str]:
        """
        Names of the subdirectories of ``path``, sorted.

        Raises:
            StorageError: If the directory cannot be listed
        """
        return sorted(entry.name for entry in self._iterdir(path) if entry.is_dir())

    def list_files(self, path: PathLike, suffix: str) -> List[str]:
        """Names of the regular files in ``path`` ending with ``suffix``, sorted."""
        return sorted(
            entry.name for entry in self._iterdir(path)
            if entry.is_file() and entry.suffix == suffix
        )

    def _iterdir(self, path: PathLike) -> List[Path]:
        try:
            return list(Path(path).iterdir())
        except OSError as e:
            raise StorageError(f"Failed to list {path}: {e}") from e

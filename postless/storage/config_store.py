"""
Loading and saving of the workspace config and secret files.

The store resolves the workspace layout from :mod:`postless.config` settings
and validates it before anything is loaded.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from postless.config import Settings, settings as default_settings
from postless.exceptions import ConfigError, StorageError, WorkspaceError
from postless.logger import get_logger
from postless.models import Config, Secret
from postless.storage.file_store import FileStore
from postless.utils.helpers import format_json_pretty

logger = get_logger(__name__)


def to_json(data: Any) -> str:
    """Serialize data the way workspace files are written (two-space indent)."""
    return format_json_pretty(data, indent=2)


class WorkspacePaths:
    """Absolute locations of the workspace files under a base directory."""

    def __init__(self, base_dir: Path, app_settings: Optional[Settings] = None):
        app_settings = app_settings or default_settings
        self.base_dir = Path(base_dir)
        self.root = self.base_dir / app_settings.root_dir
        self.config_path = self.root / app_settings.config_file
        self.secret_path = self.root / app_settings.secret_file
        self.requests_dir = self.root / app_settings.requests_dir
        self.request_file_suffix = app_settings.request_file_suffix


class ConfigStore:
    """Reads and writes ``config.json`` and ``secret.json``."""

    def __init__(self, paths: WorkspacePaths, file_store: Optional[FileStore] = None):
        self.paths = paths
        self.file_store = file_store or FileStore()

    def check_workspace(self) -> None:
        """
        Verify that the workspace directory and its config file exist.

        Raises:
            WorkspaceError: If the workspace directory is missing
            ConfigError: If the config file is missing
        """
        root_name = self.paths.root.name
        if not self.file_store.exists(self.paths.root):
            raise WorkspaceError(f"'{root_name}' directory not found in {self.paths.base_dir}")
        if not self.file_store.is_dir(self.paths.root):
            raise WorkspaceError(f"'{root_name}' exists but is not a directory")
        if not self.file_store.exists(self.paths.config_path):
            raise ConfigError(f"{self.paths.config_path.name} not found in '{root_name}' directory")

    def load_config(self) -> Config:
        """
        Load and validate ``config.json``.

        Returns:
            Config: Parsed configuration

        Raises:
            ConfigError: If the file is missing, malformed, or lacks a base URL
        """
        data = self._read_json(self.paths.config_path)
        try:
            config = Config.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid {self.paths.config_path.name}: {_first_error(e)}") from e
        logger.debug(f"Loaded config with base URL {config.base_url}")
        return config

    def load_secret(self) -> Secret:
        """
        Load ``secret.json``, creating it with an empty token if it does not exist.

        Raises:
            ConfigError: If the file exists but cannot be parsed, or the default cannot be written
        """
        if not self.file_store.exists(self.paths.secret_path):
            secret = Secret()
            try:
                self.save_secret(secret)
            except StorageError as e:
                raise ConfigError(f"Failed to create {self.paths.secret_path.name}: {e}") from e
            logger.info(f"Created default {self.paths.secret_path}")
            return secret

        data = self._read_json(self.paths.secret_path)
        try:
            return Secret.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid {self.paths.secret_path.name}: {_first_error(e)}") from e

    def save_config(self, config: Config) -> None:
        """Persist ``config``. Raises StorageError on failure."""
        self.file_store.write_text(self.paths.config_path, to_json(config.to_file_dict()))

    def save_secret(self, secret: Secret) -> None:
        """Persist ``secret``. Raises StorageError on failure."""
        self.file_store.write_text(self.paths.secret_path, to_json(secret.to_file_dict()))

    def init_workspace(self) -> bool:
        """
        Create a workspace skeleton with default files, keeping anything that exists.

        Returns:
            bool: True if any file or directory was created
        """
        created = False
        if not self.file_store.exists(self.paths.requests_dir):
            self.file_store.make_dirs(self.paths.requests_dir)
            created = True
        if not self.file_store.exists(self.paths.config_path):
            self.save_config(Config.default())
            created = True
        if not self.file_store.exists(self.paths.secret_path):
            self.save_secret(Secret())
            created = True
        return created

    def _read_json(self, path: Path) -> Dict[str, Any]:
        try:
            content = self.file_store.read_text(path)
        except StorageError as e:
            raise ConfigError(str(e)) from e
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Failed to parse {path.name}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{path.name} must contain a JSON object")
        return data


def _first_error(error: ValidationError) -> str:
    details = error.errors()
    if not details:
        return str(error)
    first = details[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    message = first.get("msg", "invalid value")
    return f"{location}: {message}" if location else message

"""
Collection repository.

Builds the collection tree from the requests directory: one collection per
subdirectory, one request per file. A file that cannot be read or parsed is
skipped so that a single broken definition does not hide the rest of its
collection.
"""

import json
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from postless.exceptions import RequestFileError, StorageError, WorkspaceError
from postless.logger import get_logger
from postless.models import Collection, RequestDefinition, RequestItem
from postless.storage.config_store import WorkspacePaths, to_json
from postless.storage.file_store import FileStore

logger = get_logger(__name__)


def parse_request(content: str) -> RequestDefinition:
    """
    Parse the text of a request file.

    Raises:
        RequestFileError: If the text is not a valid request definition
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise RequestFileError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise RequestFileError("Request file must contain a JSON object")
    try:
        return RequestDefinition.model_validate(data)
    except ValidationError as e:
        raise RequestFileError(f"Invalid request definition: {e}") from e


class CollectionRepository:
    """Loads and saves request definitions under the requests directory."""

    def __init__(self, paths: WorkspacePaths, file_store: Optional[FileStore] = None):
        self.paths = paths
        self.file_store = file_store or FileStore()

    def check_requests_dir(self) -> None:
        """
        Raises:
            WorkspaceError: If the requests directory is missing
        """
        if not self.file_store.is_dir(self.paths.requests_dir):
            raise WorkspaceError("No requests directory found")

    def load_collections(self) -> List[Collection]:
        """
        Load every collection and its requests.

        Returns:
            List[Collection]: Collections in directory listing order; empty
            collections are included

        Raises:
            StorageError: If the requests directory or a collection directory cannot be listed
        """
        collections: List[Collection] = []
        for collection_name in self.file_store.list_dirs(self.paths.requests_dir):
            collection_path = self.paths.requests_dir / collection_name
            collection = Collection(name=collection_name, path=str(collection_path))

            for file_name in self.file_store.list_files(collection_path, self.paths.request_file_suffix):
                file_path = collection_path / file_name
                try:
                    request = self._read_request(file_path)
                except (StorageError, RequestFileError) as e:
                    logger.warning(f"Skipping request file {file_path}: {e}")
                    continue

                collection.requests.append(RequestItem(
                    name=request.name,
                    file_name=file_name,
                    file_path=str(file_path),
                    request=request,
                ))

            logger.debug(f"Loaded collection '{collection_name}' with {len(collection.requests)} requests")
            collections.append(collection)

        return collections

    def save_request(self, item: RequestItem, request: RequestDefinition) -> None:
        """
        Write ``request`` to the file backing ``item``.

        Raises:
            StorageError: If the file cannot be written
        """
        self.file_store.write_text(item.file_path, to_json(request.to_file_dict()))
        logger.info(f"Saved request '{request.name}' to {item.file_path}")

    def reload_request(self, item: RequestItem) -> RequestDefinition:
        """
        Re-read the file backing ``item`` and make it the item's request.

        Raises:
            StorageError: If the file cannot be read
            RequestFileError: If the file cannot be parsed
        """
        request = self._read_request(Path(item.file_path))
        item.request = request
        item.name = request.name
        return request

    def _read_request(self, file_path: Path) -> RequestDefinition:
        return parse_request(self.file_store.read_text(file_path))


def find_request(collections: List[Collection], collection_name: str, request_name: str) -> Optional[RequestItem]:
    """Return the first request named ``request_name`` in ``collection_name``."""
    for collection in collections:
        if collection.name != collection_name:
            continue
        for item in collection.requests:
            if item.name == request_name:
                return item
        return None
    return None

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest
from rich.console import Console

from postless.models import Collection, Config, RequestDefinition, RequestItem, Secret


LOGIN_REQUEST = {
    "name": "login",
    "method": "POST",
    "url": "{{baseUrl}}/login",
    "skipAuth": False,
    "body": {"user": "a"},
}


def write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def make_workspace(
    base: Path,
    config: Optional[Dict[str, Any]] = None,
    collections: Optional[Dict[str, Dict[str, Any]]] = None,
    secret: Optional[Dict[str, Any]] = None,
) -> Path:
    """Create a workspace under ``base`` and return the workspace directory."""
    root = base / "postless"
    (root / "requests").mkdir(parents=True, exist_ok=True)
    write_json(root / "config.json", config if config is not None else {"baseUrl": "http://x", "timeout": 30})
    if secret is not None:
        write_json(root / "secret.json", secret)
    for collection_name, files in (collections or {}).items():
        collection_dir = root / "requests" / collection_name
        collection_dir.mkdir(parents=True, exist_ok=True)
        for file_name, content in files.items():
            if isinstance(content, str):
                (collection_dir / file_name).write_text(content, encoding="utf-8")
            else:
                write_json(collection_dir / file_name, content)
    return root


def make_item(name: str, url: str = "{{baseUrl}}/x", method: str = "GET", body: Any = None) -> RequestItem:
    request = RequestDefinition(name=name, method=method, url=url, body=body)
    return RequestItem(name=name, file_name=f"{name}.json", file_path=f"/tmp/{name}.json", request=request)


def make_collection(name: str, request_names: List[str]) -> Collection:
    return Collection(name=name, path=f"/tmp/{name}", requests=[make_item(n) for n in request_names])


class FakeTerminal:
    """Scripted key source that records every frame."""

    def __init__(self, key_presses: List[str]):
        self.keys = list(key_presses)
        self.frames: List[str] = []
        self.printed: List[str] = []
        self.console = Console(width=120, record=True, color_system=None)

    def _plain(self, renderable) -> str:
        with self.console.capture() as capture:
            self.console.print(renderable)
        return capture.get()

    def read_key(self) -> str:
        if not self.keys:
            raise AssertionError("FakeTerminal ran out of scripted keys")
        return self.keys.pop(0)

    def render(self, renderable) -> None:
        self.frames.append(self._plain(renderable))

    def print(self, renderable) -> None:
        self.printed.append(self._plain(renderable))


def type_text(text: str) -> List[str]:
    return list(text)


@pytest.fixture
def config() -> Config:
    return Config(base_url="http://x", timeout=30)


@pytest.fixture
def secret() -> Secret:
    return Secret(jwt="token-123")

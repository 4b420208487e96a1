import json

import pytest

from postless.exceptions import RequestFileError, WorkspaceError
from postless.models import RequestDefinition
from postless.storage.config_store import WorkspacePaths
from postless.storage.repository import CollectionRepository, find_request, parse_request

from tests.conftest import LOGIN_REQUEST, make_workspace


def _repository(tmp_path):
    return CollectionRepository(WorkspacePaths(tmp_path))


def test_load_collections_builds_tree(tmp_path):
    make_workspace(tmp_path, collections={
        "users": {"list.json": {"name": "list users", "method": "GET", "url": "{{baseUrl}}/users", "skipAuth": False}},
        "auth": {"login.json": LOGIN_REQUEST},
    })
    collections = _repository(tmp_path).load_collections()

    assert [c.name for c in collections] == ["auth", "users"]
    login = collections[0].requests[0]
    assert login.name == "login"
    assert login.file_name == "login.json"
    assert login.request.body == {"user": "a"}
    assert login.request.skip_auth is False


def test_broken_files_are_skipped(tmp_path):
    make_workspace(tmp_path, collections={
        "auth": {
            "login.json": LOGIN_REQUEST,
            "broken.json": "{oops",
            "list.json": "[1, 2]",
            "notes.txt": "ignored",
        },
    })
    collections = _repository(tmp_path).load_collections()
    assert [item.name for item in collections[0].requests] == ["login"]


def test_empty_collections_are_kept(tmp_path):
    root = make_workspace(tmp_path, collections={"auth": {"login.json": LOGIN_REQUEST}})
    (root / "requests" / "empty").mkdir()
    collections = _repository(tmp_path).load_collections()
    assert [c.name for c in collections] == ["auth", "empty"]
    assert collections[1].requests == []


def test_check_requests_dir_missing(tmp_path):
    root = make_workspace(tmp_path)
    (root / "requests").rmdir()
    with pytest.raises(WorkspaceError):
        _repository(tmp_path).check_requests_dir()


def test_save_and_reload_request(tmp_path):
    make_workspace(tmp_path, collections={"auth": {"login.json": LOGIN_REQUEST}})
    repository = _repository(tmp_path)
    item = repository.load_collections()[0].requests[0]

    edited = item.request.model_copy(update={"body": {"user": "b", "remember": True}})
    repository.save_request(item, edited)
    on_disk = json.loads(open(item.file_path, encoding="utf-8").read())
    assert on_disk == {
        "name": "login",
        "method": "POST",
        "url": "{{baseUrl}}/login",
        "skipAuth": False,
        "body": {"user": "b", "remember": True},
    }

    reloaded = repository.reload_request(item)
    assert item.request is reloaded
    assert reloaded.body == {"user": "b", "remember": True}


def test_parse_request_defaults():
    request = parse_request('{"name": "ping", "method": "GET", "url": "/ping"}')
    assert request == RequestDefinition(name="ping", method="GET", url="/ping")
    assert request.headers is None
    assert not request.has_body


def test_parse_request_rejects_bad_types():
    with pytest.raises(RequestFileError):
        parse_request('{"name": "x", "headers": "nope"}')


def test_find_request(tmp_path):
    make_workspace(tmp_path, collections={"auth": {"login.json": LOGIN_REQUEST}})
    collections = _repository(tmp_path).load_collections()
    assert find_request(collections, "auth", "login") is collections[0].requests[0]
    assert find_request(collections, "auth", "logout") is None
    assert find_request(collections, "other", "login") is None

import json

import pytest

from postless.exceptions import ConfigError, WorkspaceError
from postless.models import Config, Secret
from postless.storage.config_store import ConfigStore, WorkspacePaths

from tests.conftest import make_workspace, write_json


def _store(tmp_path):
    return ConfigStore(WorkspacePaths(tmp_path))


def test_load_config_reads_fields(tmp_path):
    make_workspace(tmp_path, config={
        "baseUrl": "http://api.local",
        "timeout": 12,
        "globalHeaders": {"X-Team": "core"},
    })
    config = _store(tmp_path).load_config()
    assert config.base_url == "http://api.local"
    assert config.timeout == 12
    assert config.global_headers == {"X-Team": "core"}


@pytest.mark.parametrize("data", [{}, {"baseUrl": ""}, {"timeout": 5}])
def test_load_config_requires_base_url(tmp_path, data):
    make_workspace(tmp_path, config=data)
    with pytest.raises(ConfigError):
        _store(tmp_path).load_config()


def test_load_config_rejects_malformed_json(tmp_path):
    root = make_workspace(tmp_path)
    (root / "config.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        _store(tmp_path).load_config()


def test_check_workspace_missing_root(tmp_path):
    with pytest.raises(WorkspaceError):
        _store(tmp_path).check_workspace()


def test_check_workspace_missing_config(tmp_path):
    root = make_workspace(tmp_path)
    (root / "config.json").unlink()
    with pytest.raises(ConfigError):
        _store(tmp_path).check_workspace()


def test_load_secret_creates_default_file(tmp_path):
    root = make_workspace(tmp_path)
    secret_path = root / "secret.json"
    assert not secret_path.exists()

    secret = _store(tmp_path).load_secret()

    assert secret.jwt == ""
    assert json.loads(secret_path.read_text(encoding="utf-8")) == {"jwt": ""}


def test_load_secret_reads_existing(tmp_path):
    make_workspace(tmp_path, secret={"jwt": "  abc  "})
    secret = _store(tmp_path).load_secret()
    assert secret.jwt == "  abc  "
    assert secret.token == "abc"


def test_save_config_round_trips(tmp_path):
    make_workspace(tmp_path)
    store = _store(tmp_path)
    store.save_config(Config(base_url="http://y", timeout=45, global_headers={"A": "1"}))
    assert store.load_config() == Config(base_url="http://y", timeout=45, global_headers={"A": "1"})


def test_save_config_omits_unset_fields(tmp_path):
    root = make_workspace(tmp_path)
    _store(tmp_path).save_config(Config(base_url="http://y"))
    assert json.loads((root / "config.json").read_text(encoding="utf-8")) == {"baseUrl": "http://y"}


@pytest.mark.parametrize("timeout, expected", [(None, 30), (0, 30), (-5, 30), (1, 1), (90, 90)])
def test_resolve_timeout(timeout, expected):
    assert Config(base_url="http://x", timeout=timeout).resolve_timeout() == expected


def test_interpolate_replaces_every_base_url_token():
    config = Config(base_url="http://x")
    assert config.interpolate("{{baseUrl}}/a?next={{baseUrl}}/b") == "http://x/a?next=http://x/b"


def test_interpolate_leaves_unknown_tokens():
    config = Config(base_url="http://x")
    assert config.interpolate("{{host}}/{{baseUrl}}") == "{{host}}/http://x"


def test_interpolate_is_not_recursive():
    config = Config(base_url="{{baseUrl}}/v1")
    assert config.interpolate("{{baseUrl}}/users") == "{{baseUrl}}/v1/users"


def test_init_workspace_keeps_existing_files(tmp_path):
    root = tmp_path / "postless"
    write_json(root / "config.json", {"baseUrl": "http://keep"})
    store = _store(tmp_path)

    assert store.init_workspace() is True
    assert store.load_config().base_url == "http://keep"
    assert (root / "requests").is_dir()
    assert store.load_secret() == Secret()
    assert store.init_workspace() is False

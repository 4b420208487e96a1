import json
from unittest.mock import Mock

import pytest

from postless.constants import SettingsKey
from postless.exceptions import StorageError
from postless.models import Config, Secret
from postless.storage.config_store import ConfigStore, WorkspacePaths
from postless.views import keys
from postless.views.settings_editor import SettingsEditor, settings_items
from postless.views.text_input import TextInput

from tests.conftest import make_workspace


@pytest.fixture
def workspace(tmp_path):
    root = make_workspace(tmp_path, config={"baseUrl": "http://x", "timeout": 30}, secret={"jwt": "old"})
    return root


@pytest.fixture
def editor(tmp_path, workspace):
    return SettingsEditor(ConfigStore(WorkspacePaths(tmp_path)))


def _read(path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_settings_items(config, secret):
    items = settings_items(config, secret)
    assert [(i.key, i.label, i.value) for i in items] == [
        (SettingsKey.BASE_URL, "Base URL", "http://x"),
        (SettingsKey.JWT, "JWT Token", "token-123"),
        (SettingsKey.TIMEOUT, "Timeout (seconds)", "30"),
    ]


def test_prompt_for_timeout(editor, config, secret):
    title, current = editor.prompt_for(SettingsKey.TIMEOUT, config, secret)
    assert current == "30"
    assert "Current Timeout: 30 seconds" in title


def test_prompt_for_unknown_key(editor, config, secret):
    with pytest.raises(KeyError):
        editor.prompt_for("colour", config, secret)


def test_update_base_url_persists_config_only(editor, workspace, config, secret):
    secret_before = (workspace / "secret.json").read_text(encoding="utf-8")
    update = editor.apply(SettingsKey.BASE_URL, "http://y", config, secret)

    assert update.changed
    assert update.config.base_url == "http://y"
    assert config.base_url == "http://x"
    assert _read(workspace / "config.json")["baseUrl"] == "http://y"
    assert (workspace / "secret.json").read_text(encoding="utf-8") == secret_before


def test_update_jwt_is_trimmed_and_persists_secret(editor, workspace, config, secret):
    update = editor.apply(SettingsKey.JWT, "  new-token \n", config, secret)
    assert update.secret.jwt == "new-token"
    assert _read(workspace / "secret.json") == {"jwt": "new-token"}
    assert update.config is config


def test_update_timeout(editor, workspace, config, secret):
    update = editor.apply(SettingsKey.TIMEOUT, "45", config, secret)
    assert update.config.timeout == 45
    assert _read(workspace / "config.json")["timeout"] == 45


@pytest.mark.parametrize("raw", ["not-a-number", "0", "-5", "2.5"])
def test_invalid_timeout_is_ignored_and_nothing_persisted(editor, workspace, config, secret, raw):
    before = (workspace / "config.json").read_text(encoding="utf-8")
    update = editor.apply(SettingsKey.TIMEOUT, raw, config, secret)

    assert not update.changed
    assert update.config.resolve_timeout() == 30
    assert update.message
    assert not update.is_error
    assert (workspace / "config.json").read_text(encoding="utf-8") == before


@pytest.mark.parametrize("raw", [None, ""])
def test_cancel_or_empty_is_a_no_op(raw, config, secret):
    store = Mock(spec=ConfigStore)
    update = SettingsEditor(store).apply(SettingsKey.BASE_URL, raw, config, secret)
    assert not update.changed
    assert update.message == ""
    store.save_config.assert_not_called()
    store.save_secret.assert_not_called()


def test_save_failure_keeps_previous_values(config, secret):
    store = Mock(spec=ConfigStore)
    store.save_config.side_effect = StorageError("disk full")
    update = SettingsEditor(store).apply(SettingsKey.BASE_URL, "http://y", config, secret)
    assert not update.changed
    assert update.is_error
    assert "disk full" in update.message
    assert update.config is config


@pytest.mark.parametrize("key, raw", [
    (SettingsKey.BASE_URL, "http://x"),
    (SettingsKey.JWT, "token-123"),
    (SettingsKey.TIMEOUT, "30"),
])
def test_submitting_current_value_writes_nothing(key, raw, config, secret):
    store = Mock(spec=ConfigStore)
    update = SettingsEditor(store).apply(key, raw, config, secret)
    assert not update.changed
    assert update.message == ""
    store.save_config.assert_not_called()
    store.save_secret.assert_not_called()


def test_prompt_keeps_initial_value_longer_than_the_limit():
    text_input = TextInput("JWT", "t" * 800, char_limit=500)
    assert text_input.handle_key("x") is False
    assert text_input.buffer == "t" * 800
    assert text_input.handle_key(keys.ENTER) is True
    assert text_input.value == "t" * 800


def test_prompt_limits_typed_text():
    text_input = TextInput("Base URL", "", char_limit=3)
    for key in "abcd":
        text_input.handle_key(key)
    text_input.handle_key(keys.ENTER)
    assert text_input.value == "abc"

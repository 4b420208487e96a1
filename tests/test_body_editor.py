import pytest

from postless.views import keys
from postless.views.body_editor import (
    BodyEditor,
    FieldSelected,
    apply_field_edits,
    infer_value,
    render_body_editor,
    stringify_value,
)
from postless.views.results import Cancelled, FieldEdits

from tests.conftest import FakeTerminal


@pytest.mark.parametrize("value, expected", [
    ("hello", "hello"),
    (3, "3"),
    (2.0, "2"),
    (2.4, "2"),
    (True, "true"),
    (False, "false"),
    (None, "null"),
    ({"a": 1, "b": [1, 2]}, '{"a":1,"b":[1,2]}'),
    ([1, "x"], '[1,"x"]'),
])
def test_stringify_value(value, expected):
    assert stringify_value(value) == expected


@pytest.mark.parametrize("text, expected", [
    ("5", 5),
    ("-2", -2),
    ("2.5", 2.5),
    ("1e3", 1000),
    ("true", True),
    ("false", False),
    ("hello", "hello"),
    ("True", "True"),
    ("", ""),
    ("nan", "nan"),
    ("12345678901234567890", 12345678901234567890),
])
def test_infer_value(text, expected):
    value = infer_value(text)
    assert value == expected
    assert type(value) is type(expected)


def test_fields_follow_body_key_order():
    editor = BodyEditor({"b": 1, "a": "x", "c": {"k": True}})
    assert [(f.key, f.value) for f in editor.fields] == [("b", "1"), ("a", "x"), ("c", '{"k":true}')]


@pytest.mark.parametrize("body", [None, [1, 2], "text", 42, {}])
def test_non_object_body_has_nothing_to_edit(body):
    assert not BodyEditor(body).has_fields


def test_count_edit_round_trip():
    body = {"count": 3, "name": "bob"}
    editor = BodyEditor(body)
    editor.submit("count", "5")
    edits = editor.edits()
    assert edits.pairs == [("count", "5")]

    new_body = apply_field_edits(body, edits.pairs)
    assert new_body == {"count": 5, "name": "bob"}
    assert isinstance(new_body["count"], int)


def test_edit_to_boolean_and_string():
    body = {"flag": "no", "count": 1}
    new_body = apply_field_edits(body, [("flag", "true"), ("count", "hello")])
    assert new_body == {"flag": True, "count": "hello"}


def test_untouched_fields_keep_original_types():
    body = {"price": 3.7, "code": "007", "tags": ["a"], "nested": {"x": None}, "n": 1}
    editor = BodyEditor(body)
    editor.submit("n", "2")
    new_body = apply_field_edits(body, editor.edits().pairs)
    assert new_body == {"price": 3.7, "code": "007", "tags": ["a"], "nested": {"x": None}, "n": 2}


def test_apply_field_edits_builds_new_mapping():
    body = {"a": 1}
    new_body = apply_field_edits(body, [("a", "2")])
    assert body == {"a": 1}
    assert new_body is not body


def test_resubmitting_original_text_is_not_an_edit():
    editor = BodyEditor({"price": 3.7})
    editor.submit("price", "9")
    editor.submit("price", "4")
    assert editor.edits().pairs == []


def test_cancelled_prompt_keeps_value():
    editor = BodyEditor({"a": "x"})
    editor.submit("a", None)
    assert editor.fields[0].value == "x"
    assert not editor.fields[0].edited


def test_keys():
    editor = BodyEditor({"a": "x", "b": "y"})
    assert editor.handle_key(keys.DOWN) is None
    assert editor.handle_key(keys.ENTER) == FieldSelected(key="b", value="y")
    assert editor.handle_key("e") == FieldSelected(key="b", value="y")
    assert editor.handle_key(keys.DOWN) is None
    assert editor.cursor == 0
    assert editor.handle_key(keys.ESC) == FieldEdits(pairs=[])
    assert editor.handle_key("q") == Cancelled()
    assert editor.handle_key(keys.CTRL_C) == Cancelled()


def test_navigation_scrolls_like_the_browser():
    editor = BodyEditor({f"k{i}": i for i in range(15)}, max_visible=10)
    editor.handle_key(keys.UP)
    assert (editor.cursor, editor.viewport_start) == (14, 5)


def test_render_marks_current_field():
    editor = BodyEditor({"user": "a", "age": 3})
    terminal = FakeTerminal([])
    terminal.render(render_body_editor(editor))
    assert "► user: a" in terminal.frames[0]
    assert "  age: 3" in terminal.frames[0]

# tests/test_models.py

from __future__ import annotations

import pytest

from todo.models import Filter, Task, TaskView, filter_matches, is_blank


def test_new_task_is_viewing_and_active() -> None:
    task = Task(1, "buy milk")
    assert task.completed is False
    assert task.editing is False
    assert task.draft is None


def test_begin_edit_snapshots_text() -> None:
    task = Task(1, "buy milk")
    assert task.begin_edit() is True
    assert task.editing
    assert task.edit.draft == "buy milk"
    assert task.edit.stash == "buy milk"

    # already editing: nothing happens
    task.update_draft("oat milk")
    assert task.begin_edit() is False
    assert task.draft == "oat milk"


def test_update_draft_leaves_text_alone() -> None:
    task = Task(1, "buy milk")
    task.begin_edit()
    assert task.update_draft("buy bread") is True
    assert task.text == "buy milk"
    assert task.update_draft("buy bread") is False


def test_update_draft_when_viewing_is_noop() -> None:
    task = Task(1, "buy milk")
    assert task.update_draft("x") is False
    assert task.text == "buy milk"


def test_commit_applies_draft() -> None:
    task = Task(1, "buy milk")
    task.begin_edit()
    task.update_draft("buy bread")
    assert task.commit_edit() is True
    assert task.text == "buy bread"
    assert not task.editing


@pytest.mark.parametrize("draft", ["", "   "])
def test_commit_with_blank_draft_stays_editing(draft: str) -> None:
    task = Task(1, "buy milk")
    task.begin_edit()
    task.update_draft(draft)
    assert task.commit_edit() is False
    assert task.editing
    assert task.text == "buy milk"


def test_cancel_restores_stash() -> None:
    task = Task(1, "buy milk")
    task.begin_edit()
    task.update_draft("X")
    assert task.cancel_edit() is True
    assert task.text == "buy milk"
    assert not task.editing
    assert task.cancel_edit() is False


def test_display_text_strikes_completed() -> None:
    task = Task(1, "buy milk")
    assert task.display_text == "buy milk"
    task.completed = True
    assert task.display_text == "~buy milk~"
    assert TaskView.of(task).display_text == "~buy milk~"


def test_filter_predicates() -> None:
    assert filter_matches("all", True) and filter_matches("all", False)
    assert filter_matches("active", False) and not filter_matches("active", True)
    assert filter_matches("completed", True) and not filter_matches("completed", False)


def test_is_blank() -> None:
    assert is_blank(None)
    assert is_blank("")
    assert is_blank(" \t\n")
    assert not is_blank(" a ")


@pytest.mark.parametrize("value, expected", [
    (Filter.COMPLETED, Filter.COMPLETED),
    ("active", Filter.ACTIVE),
    ("  ALL ", Filter.ALL),
    ("done", None),
    (["active"], None),
    (None, None),
    (2, None),
])
def test_filter_parse(value, expected) -> None:
    assert Filter.parse(value) is expected


def test_filter_members_compare_equal_to_names() -> None:
    assert Filter.ACTIVE == "active"
    assert filter_matches(Filter.ACTIVE, False)

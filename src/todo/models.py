"""Task entity, per-task edit session and the read-only render projection."""

from enum import Enum
from typing import NamedTuple


class Filter(str, Enum):
    """View filter. Members compare equal to their lowercase names."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, value) -> "Filter | None":
        """Filter for a member or a case-insensitive name, None if unrecognised."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


# View filters: filter -> predicate on a task's completed flag
FILTERS = {
    Filter.ALL:       lambda completed: True,
    Filter.ACTIVE:    lambda completed: not completed,
    Filter.COMPLETED: lambda completed: completed,
}
FILTER_LIST = list(Filter)
DEFAULT_FILTER = Filter.ALL


def filter_matches(filter_name, completed: bool) -> bool:
    return FILTERS[Filter(filter_name)](completed)


def is_blank(text: str | None) -> bool:
    return text is None or not text.strip()


class EditSession:
    """Open inline edit on a task.

    ``stash`` is the text the task had when editing began, ``draft`` is
    what the user has typed so far. The task's own text stays untouched
    until the session is committed.
    """

    __slots__ = ("draft", "stash")

    def __init__(self, text: str):
        self.draft = text
        self.stash = text


class Task:
    """A single to-do entry."""

    __slots__ = ("id", "text", "completed", "edit")

    def __init__(self, task_id: int, text: str):
        self.id = task_id
        self.text = text
        self.completed = False
        self.edit: EditSession | None = None  # None while viewing

    def __repr__(self) -> str:
        return (f"Task(id={self.id}, text={self.text!r}, "
                f"completed={self.completed}, editing={self.editing})")

    @property
    def editing(self) -> bool:
        return self.edit is not None

    @property
    def draft(self) -> str | None:
        return self.edit.draft if self.edit else None

    @property
    def display_text(self) -> str:
        """Text as list views show it; completed tasks are struck through."""
        return f"~{self.text}~" if self.completed else self.text

    # --- Edit session transitions ---

    def begin_edit(self) -> bool:
        """Viewing -> Editing. The draft starts as the current text."""
        if self.edit is not None:
            return False
        self.edit = EditSession(self.text)
        return True

    def update_draft(self, text: str) -> bool:
        if self.edit is None or self.edit.draft == text:
            return False
        self.edit.draft = text
        return True

    def commit_edit(self) -> bool:
        """Editing -> Viewing with the draft as new text.

        A blank draft is refused and the session stays open.
        """
        if self.edit is None or is_blank(self.edit.draft):
            return False
        self.text = self.edit.draft
        self.edit = None
        return True

    def cancel_edit(self) -> bool:
        """Editing -> Viewing, restoring the text from before the edit."""
        if self.edit is None:
            return False
        self.text = self.edit.stash
        self.edit = None
        return True


class TaskView(NamedTuple):
    """Immutable copy of a task for rendering."""

    id: int
    text: str
    completed: bool
    editing: bool
    draft: str | None
    display_text: str

    @classmethod
    def of(cls, task: Task) -> "TaskView":
        return cls(task.id, task.text, task.completed, task.editing,
                   task.draft, task.display_text)


class StoreSnapshot(NamedTuple):
    """Everything a front-end needs to draw one frame."""

    revision: int
    filter: Filter
    new_task_text: str
    tasks: tuple[TaskView, ...]
    visible_ids: tuple[int, ...]
    active_count: int
    completed_count: int
    items_left_label: str

    @property
    def has_completed(self) -> bool:
        return self.completed_count > 0

    @property
    def all_completed(self) -> bool:
        return bool(self.tasks) and self.active_count == 0

    def visible_tasks(self) -> list[TaskView]:
        by_id = {t.id: t for t in self.tasks}
        return [by_id[i] for i in self.visible_ids]

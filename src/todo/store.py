"""Task store.

Owns the ordered task list, the active view filter and the new-task
draft. Front-ends call the mutation methods in response to user input and
re-read the derived values (or a ``snapshot()``) afterwards.

Every mutation returns True if it changed state and False for a no-op.
Unknown ids and blank text are no-ops, never errors: a front-end may
queue an event for a task another event has already deleted.
"""

import itertools
import logging

from core.state_manager import StateManager
from todo.models import (
    DEFAULT_FILTER,
    Filter,
    StoreSnapshot,
    Task,
    TaskView,
    filter_matches,
    is_blank,
)

log = logging.getLogger("todostate.todo.store")

INSERT_POSITIONS = ("append", "prepend")


class TaskStore:
    """In-process store for a single to-do list."""

    def __init__(self, event_bus=None, exclusive_edit: bool = False,
                 insert_position: str = "append",
                 default_filter: Filter | str = DEFAULT_FILTER):
        if insert_position not in INSERT_POSITIONS:
            raise ValueError(f"insert_position must be one of {INSERT_POSITIONS}")
        start_filter = Filter.parse(default_filter)
        if start_filter is None:
            raise ValueError(f"default_filter must be one of {[f.value for f in Filter]}")

        self.exclusive_edit = exclusive_edit
        self.insert_position = insert_position
        self._state = StateManager(event_bus)
        self._tasks: list[Task] = []
        self._filter = start_filter
        self._new_task_text = ""
        self._ids = itertools.count(1)

    @classmethod
    def from_config(cls, config: dict, event_bus=None) -> "TaskStore":
        store_cfg = config.get("store", {})
        return cls(
            event_bus=event_bus,
            exclusive_edit=store_cfg.get("exclusive_edit", False),
            insert_position=store_cfg.get("insert_position", "append"),
            default_filter=store_cfg.get("default_filter", DEFAULT_FILTER),
        )

    # --- Read accessors ---

    @property
    def revision(self) -> int:
        return self._state.revision

    @property
    def filter(self) -> Filter:
        return self._filter

    @property
    def new_task_text(self) -> str:
        return self._new_task_text

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def get(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def consume_dirty(self) -> bool:
        return self._state.consume_dirty()

    # --- Derived view ---

    def visible_ids(self) -> list[int]:
        return [t.id for t in self._tasks if filter_matches(self._filter, t.completed)]

    def active_count(self) -> int:
        return sum(1 for t in self._tasks if not t.completed)

    def completed_count(self) -> int:
        return sum(1 for t in self._tasks if t.completed)

    def has_completed(self) -> bool:
        return any(t.completed for t in self._tasks)

    def all_completed(self) -> bool:
        """State of the "toggle all" checkbox."""
        return bool(self._tasks) and self.active_count() == 0

    def is_empty(self) -> bool:
        return not self._tasks

    def editing_ids(self) -> list[int]:
        return [t.id for t in self._tasks if t.editing]

    def items_left_label(self) -> str:
        count = self.active_count()
        return f"{count} {'task' if count == 1 else 'tasks'}"

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            revision=self.revision,
            filter=self._filter,
            new_task_text=self._new_task_text,
            tasks=tuple(TaskView.of(t) for t in self._tasks),
            visible_ids=tuple(self.visible_ids()),
            active_count=self.active_count(),
            completed_count=self.completed_count(),
            items_left_label=self.items_left_label(),
        )

    # --- Task list mutations ---

    def set_new_task_text(self, text: str) -> bool:
        if text == self._new_task_text:
            return False
        self._new_task_text = text
        self._state.mark_changed("new_task_text")
        return True

    def add_task(self, text: str = None) -> int | None:
        """Create a task. Returns its id, or None if the text is blank.

        Without an argument the store-owned new-task draft is submitted
        and cleared.
        """
        from_draft = text is None
        if from_draft:
            text = self._new_task_text
        if is_blank(text):
            log.debug("add_task ignored: blank text")
            return None

        task = Task(next(self._ids), text)
        if self.insert_position == "prepend":
            self._tasks.insert(0, task)
        else:
            self._tasks.append(task)
        if from_draft:
            self._new_task_text = ""

        log.debug("Added task %d: %r", task.id, text)
        self._state.mark_changed("add", task.id)
        return task.id

    def toggle(self, task_id: int) -> bool:
        task = self._lookup(task_id, "toggle")
        if task is None:
            return False
        task.completed = not task.completed
        self._state.mark_changed("toggle", task_id)
        return True

    def set_completed(self, task_id: int, completed: bool) -> bool:
        task = self._lookup(task_id, "set_completed")
        if task is None or task.completed == bool(completed):
            return False
        task.completed = bool(completed)
        self._state.mark_changed("toggle", task_id)
        return True

    def toggle_all(self) -> bool:
        """Complete everything if anything is active, else un-complete everything."""
        if not self._tasks:
            return False
        check = self.active_count() > 0
        for task in self._tasks:
            task.completed = check
        log.debug("toggle_all -> completed=%s", check)
        self._state.mark_changed("toggle_all")
        return True

    def delete_task(self, task_id: int) -> bool:
        task = self._lookup(task_id, "delete_task")
        if task is None:
            return False
        self._tasks.remove(task)
        self._state.mark_changed("delete", task_id)
        return True

    def clear_completed(self) -> bool:
        survivors = [t for t in self._tasks if not t.completed]
        removed = len(self._tasks) - len(survivors)
        if not removed:
            return False
        self._tasks = survivors
        log.debug("Cleared %d completed task(s)", removed)
        self._state.mark_changed("clear_completed")
        return True

    def set_filter(self, filter_name: Filter | str) -> bool:
        """Accepts a Filter or its name; anything else is logged and ignored."""
        new_filter = Filter.parse(filter_name)
        if new_filter is None:
            log.warning("Unknown filter %r ignored", filter_name)
            return False
        if new_filter is self._filter:
            return False
        self._filter = new_filter
        self._state.mark_changed("filter")
        return True

    def rename(self, task_id: int, text: str) -> bool:
        task = self._lookup(task_id, "rename")
        if task is None or is_blank(text) or task.text == text:
            return False
        task.text = text
        if task.edit is not None:
            # A later cancel must not bring the old text back
            task.edit.draft = text
            task.edit.stash = text
        self._state.mark_changed("rename", task_id)
        return True

    # --- Edit sessions ---

    def begin_edit(self, task_id: int) -> bool:
        task = self._lookup(task_id, "begin_edit")
        if task is None or task.editing:
            return False
        if self.exclusive_edit:
            self._close_other_sessions(task_id)
        task.begin_edit()
        self._state.mark_changed("begin_edit", task_id)
        return True

    def update_draft(self, task_id: int, text: str) -> bool:
        task = self._lookup(task_id, "update_draft")
        if task is None or not task.update_draft(text):
            return False
        self._state.mark_changed("draft", task_id)
        return True

    def commit_edit(self, task_id: int) -> bool:
        task = self._lookup(task_id, "commit_edit")
        if task is None:
            return False
        if not task.commit_edit():
            log.debug("commit_edit %d ignored (not editing or blank draft)", task_id)
            return False
        self._state.mark_changed("commit_edit", task_id)
        return True

    def cancel_edit(self, task_id: int) -> bool:
        task = self._lookup(task_id, "cancel_edit")
        if task is None or not task.cancel_edit():
            return False
        self._state.mark_changed("cancel_edit", task_id)
        return True

    # --- Internals ---

    def _lookup(self, task_id: int, op: str) -> Task | None:
        task = self.get(task_id)
        if task is None:
            log.debug("%s ignored: unknown task id %r", op, task_id)
        return task

    def _close_other_sessions(self, keep_id: int) -> None:
        # Losing the edit focus keeps what was typed, unless that would blank the task
        for task in self._tasks:
            if task.id == keep_id or not task.editing:
                continue
            if task.commit_edit():
                log.debug("Task %d edit committed (exclusive edit)", task.id)
            else:
                task.cancel_edit()
                log.debug("Task %d edit cancelled (exclusive edit)", task.id)

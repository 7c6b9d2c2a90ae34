#!/usr/bin/env python3
"""todostate console front-end — main entry point.

Reads one command per line from stdin, applies it to the TaskStore and
re-renders the list whenever the store reports a change. Optionally
writes each frame as a PNG through the Pillow list screen.
"""

import logging
import os
import shlex
import sys

# Add src/ to path so imports work when running directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import load_config
from core.logging_config import setup_logging
from core.event_bus import EventBus
from core.state_manager import STATE_CHANGED
from todo.store import TaskStore
from ui import text_view
from ui.list_screen import ListScreen

log = logging.getLogger("todostate.main")

HELP = """commands:
  add TEXT          new task (or 'type TEXT' then 'add')
  type TEXT         set the new-task input
  toggle ID         flip completed
  all               toggle all
  delete ID         remove task
  clear             remove completed tasks
  filter NAME       all | active | completed
  edit ID           start editing
  draft ID TEXT     change the edit draft
  commit ID         finish editing
  cancel ID         abandon edit
  rename ID TEXT    replace text
  help | quit"""


class TodoConsoleApp:
    """Line-command front-end bound to a TaskStore."""

    def __init__(self, config: dict, out=None, frame_path: str = None):
        self.config = config
        self.out = out or sys.stdout
        self.event_bus = EventBus()
        self.store = TaskStore.from_config(config, event_bus=self.event_bus)
        self._running = False
        self._frame_path = frame_path
        self._screen = ListScreen(width=config.get("ui", {}).get("width", 480))

        self._commands = {
            "add":    self._cmd_add,
            "type":   self._cmd_type,
            "toggle": self._cmd_toggle,
            "all":    lambda args: self.store.toggle_all(),
            "delete": self._cmd_delete,
            "clear":  lambda args: self.store.clear_completed(),
            "filter": self._cmd_filter,
            "edit":   self._cmd_edit,
            "draft":  self._cmd_draft,
            "commit": self._cmd_commit,
            "cancel": self._cmd_cancel,
            "rename": self._cmd_rename,
            "help":   self._cmd_help,
            "quit":   self._cmd_quit,
        }

        self.event_bus.subscribe(STATE_CHANGED, self._on_state_changed)

    # --- Rendering ---

    def _on_state_changed(self, data: dict) -> None:
        log.debug("state_changed: %s", data)
        self.render()

    def render(self) -> None:
        snapshot = self.store.snapshot()
        self.store.consume_dirty()
        print(text_view.render(snapshot), file=self.out)
        if self._frame_path:
            self._screen.render(snapshot).save(self._frame_path)

    # --- Command handling ---

    def handle_line(self, line: str) -> None:
        """Parse and dispatch one command line."""
        try:
            parts = shlex.split(line)
        except ValueError as e:
            print(f"error: {e}", file=self.out)
            return
        if not parts:
            return

        name, args = parts[0].lower(), parts[1:]
        handler = self._commands.get(name)
        if handler is None:
            print(f"unknown command: {name} (try 'help')", file=self.out)
            return

        try:
            changed = handler(args)
        except (IndexError, ValueError):
            print(f"usage error: {line.strip()} (try 'help')", file=self.out)
            return
        if changed is False:
            log.debug("No change: %s", line.strip())

    @staticmethod
    def _task_id(args: list[str]) -> int:
        return int(args[0])

    def _cmd_add(self, args):
        if args:
            return self.store.add_task(" ".join(args)) is not None
        return self.store.add_task() is not None

    def _cmd_type(self, args):
        return self.store.set_new_task_text(" ".join(args))

    def _cmd_toggle(self, args):
        return self.store.toggle(self._task_id(args))

    def _cmd_delete(self, args):
        return self.store.delete_task(self._task_id(args))

    def _cmd_filter(self, args):
        return self.store.set_filter(args[0])

    def _cmd_edit(self, args):
        return self.store.begin_edit(self._task_id(args))

    def _cmd_draft(self, args):
        return self.store.update_draft(self._task_id(args), " ".join(args[1:]))

    def _cmd_commit(self, args):
        return self.store.commit_edit(self._task_id(args))

    def _cmd_cancel(self, args):
        return self.store.cancel_edit(self._task_id(args))

    def _cmd_rename(self, args):
        return self.store.rename(self._task_id(args), " ".join(args[1:]))

    def _cmd_help(self, args):
        print(HELP, file=self.out)

    def _cmd_quit(self, args):
        self._running = False

    # --- Main loop ---

    def run(self, lines=None) -> None:
        """Process commands until 'quit' or end of input."""
        self._running = True
        self.render()
        log.info("Ready! %s", self.store.items_left_label())

        source = lines if lines is not None else sys.stdin
        try:
            for line in source:
                self.handle_line(line)
                if not self._running:
                    break
        except KeyboardInterrupt:
            log.info("Interrupted, stopping...")
        finally:
            self.shutdown()

    def shutdown(self) -> None:
        self._running = False
        self.event_bus.unsubscribe(STATE_CHANGED, self._on_state_changed)
        log.info("Shutdown complete (revision %d)", self.store.revision)


def main() -> None:
    setup_logging()
    config = load_config()
    logging_cfg = config.get("logging", {})
    setup_logging(logging_cfg.get("level"), logging_cfg.get("file"))
    log.info("=== todostate ===")

    app = TodoConsoleApp(config, frame_path=os.environ.get("TODO_FRAME_PATH"))
    app.run()


if __name__ == "__main__":
    main()

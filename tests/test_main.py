# tests/test_main.py

from __future__ import annotations

import io
import logging
from pathlib import Path

import pytest

import main as main_module
from main import TodoConsoleApp


def make_app(**store_cfg) -> tuple[TodoConsoleApp, io.StringIO]:
    out = io.StringIO()
    app = TodoConsoleApp({"store": store_cfg, "ui": {"width": 300}}, out=out)
    return app, out


def test_commands_drive_the_store() -> None:
    app, out = make_app()
    app.run([
        "add buy milk\n",
        "add 'walk dog'\n",
        "toggle 1\n",
        "filter active\n",
        "quit\n",
        "add never reached\n",
    ])

    store = app.store
    assert [t.text for t in store.tasks] == ["buy milk", "walk dog"]
    assert store.visible_ids() == [2]
    assert "1 task left" in out.getvalue()


def test_edit_commands() -> None:
    app, _ = make_app()
    app.run(["add draft me", "edit 1", "draft 1 edited text", "commit 1",
             "edit 1", "draft 1 scrapped", "cancel 1", "rename 1 final"])
    task = app.store.get(1)
    assert task.text == "final"
    assert not task.editing


def test_type_then_add_uses_store_input() -> None:
    app, _ = make_app()
    app.run(["type from the input", "add"])
    assert app.store.get(1).text == "from the input"
    assert app.store.new_task_text == ""


def test_bad_commands_are_reported() -> None:
    app, out = make_app()
    app.run(["frobnicate", "toggle", "toggle abc", "add 'unterminated", ""])
    text = out.getvalue()
    assert "unknown command: frobnicate" in text
    assert text.count("usage error") == 2
    assert "error: No closing quotation" in text
    assert app.store.is_empty()


def test_rerenders_only_on_change() -> None:
    app, out = make_app()
    app.run(["add a", "toggle 42", "clear"])
    # initial frame + one for the add
    assert out.getvalue().count("todos") == 2


def test_clear_and_toggle_all() -> None:
    app, _ = make_app()
    app.run(["add a", "add b", "all", "clear"])
    assert app.store.is_empty()


def test_shutdown_unsubscribes() -> None:
    app, _ = make_app()
    app.run([])
    assert app.event_bus.subscriber_count("state_changed") == 0


def test_frame_is_written_when_path_given(tmp_path: Path) -> None:
    frame = tmp_path / "frame.png"
    app = TodoConsoleApp({"store": {}}, out=io.StringIO(), frame_path=str(frame))
    app.run(["add picture this"])
    assert frame.exists()


@pytest.mark.parametrize("line", ["help", "HELP"])
def test_help(line: str) -> None:
    app, out = make_app()
    app.handle_line(line)
    assert "commands:" in out.getvalue()


def test_main_sets_up_logging_before_loading_config(restore_logger,
                                                    monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, object] = {}

    def fake_load_config():
        seen["handlers_ready"] = bool(logging.getLogger("todostate").handlers)
        return {"store": {}, "logging": {"level": "WARNING", "file": None}}

    class FakeApp:
        def __init__(self, config, frame_path=None):
            seen["config"] = config

        def run(self):
            seen["ran"] = True

    monkeypatch.setattr(main_module, "load_config", fake_load_config)
    monkeypatch.setattr(main_module, "TodoConsoleApp", FakeApp)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    main_module.main()

    assert seen["handlers_ready"] is True
    assert seen["ran"] is True
    # the configured level wins over the bootstrap one
    assert restore_logger.level == logging.WARNING
    assert len(restore_logger.handlers) == 1

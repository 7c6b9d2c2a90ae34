"""Plain-text rendering of a store snapshot for the console front-end."""

from todo.models import FILTER_LIST, Filter, StoreSnapshot, TaskView


def render_task(task: TaskView) -> str:
    if task.editing:
        return f"  [{task.id}] edit> {task.draft}"
    mark = "x" if task.completed else " "
    return f"[{mark}] [{task.id}] {task.display_text}"


def render_filters(current: Filter) -> str:
    return " ".join(f"*{f.value}*" if f is current else f.value for f in FILTER_LIST)


def render_lines(snapshot: StoreSnapshot) -> list[str]:
    """Render the list the way the GUI front-ends lay it out."""
    lines = ["todos", f"> {snapshot.new_task_text}"]
    if not snapshot.tasks:
        return lines

    toggle = "[x]" if snapshot.all_completed else "[ ]"
    lines.append(f"{toggle} toggle all")
    lines.extend(render_task(t) for t in snapshot.visible_tasks())

    footer = f"{snapshot.items_left_label} left | {render_filters(snapshot.filter)}"
    if snapshot.has_completed:
        footer += " | clear completed"
    lines.append(footer)
    return lines


def render(snapshot: StoreSnapshot) -> str:
    return "\n".join(render_lines(snapshot))

"""Task list screen.

Renders a store snapshot to a PIL Image: header with the new-task draft,
one row per visible task and a footer with the item count, filter tabs
and the clear-completed affordance.
"""

import logging
from PIL import Image, ImageDraw, ImageFont

from todo.models import FILTER_LIST, StoreSnapshot, TaskView

log = logging.getLogger("todostate.ui.list_screen")

ROW_H = 28
HEADER_H = 56
FOOTER_H = 32
PAD = 10

# Colors
BG = (245, 245, 245)
TEXT = (40, 40, 40)
TEXT_DIM = (150, 150, 150)
ACCENT = (175, 47, 47)
ROW_BG = (255, 255, 255)
EDIT_BG = (255, 250, 225)
SEPARATOR = (225, 225, 225)
CHECK = (90, 180, 150)


class ListScreen:
    """Renders the task list view."""

    def __init__(self, width: int = 480):
        self.width = width
        self._font: ImageFont.ImageFont | None = None
        self._font_small: ImageFont.ImageFont | None = None
        self._load_fonts()

    def _load_fonts(self) -> None:
        try:
            self._font = ImageFont.truetype(
                "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf", 15
            )
            self._font_small = ImageFont.truetype(
                "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf", 11
            )
        except OSError:
            self._font = ImageFont.load_default()
            self._font_small = self._font

    def height_for(self, snapshot: StoreSnapshot) -> int:
        rows = len(snapshot.visible_ids)
        footer = FOOTER_H if snapshot.tasks else 0
        return HEADER_H + rows * ROW_H + footer

    def render(self, snapshot: StoreSnapshot) -> Image.Image:
        """Render the list screen."""
        img = Image.new("RGB", (self.width, self.height_for(snapshot)), BG)
        draw = ImageDraw.Draw(img)

        self._draw_header(draw, snapshot)

        y = HEADER_H
        for task in snapshot.visible_tasks():
            self._draw_row(draw, y, task)
            y += ROW_H

        if snapshot.tasks:
            self._draw_footer(draw, y, snapshot)

        log.debug("Rendered revision %d (%d rows)", snapshot.revision,
                  len(snapshot.visible_ids))
        return img

    def _draw_header(self, draw: ImageDraw.ImageDraw, snapshot: StoreSnapshot) -> None:
        draw.text((PAD, 4), "todos", fill=ACCENT, font=self._font)
        draw.rectangle([PAD, 26, self.width - PAD, HEADER_H - 6], fill=ROW_BG,
                       outline=SEPARATOR)
        if snapshot.new_task_text:
            draw.text((PAD + 30, 31), snapshot.new_task_text, fill=TEXT, font=self._font)
        else:
            draw.text((PAD + 30, 31), "What needs to be done?", fill=TEXT_DIM,
                      font=self._font)
        if snapshot.tasks:
            color = TEXT if snapshot.all_completed else TEXT_DIM
            draw.text((PAD + 8, 31), "x", fill=color, font=self._font)

    def _draw_row(self, draw: ImageDraw.ImageDraw, y: int, task: TaskView) -> None:
        bg = EDIT_BG if task.editing else ROW_BG
        draw.rectangle([PAD, y, self.width - PAD, y + ROW_H - 1], fill=bg)
        draw.line([PAD, y + ROW_H - 1, self.width - PAD, y + ROW_H - 1], fill=SEPARATOR)

        if task.editing:
            draw.text((PAD + 30, y + 6), task.draft or "", fill=TEXT, font=self._font)
            return

        # Checkbox
        box = [PAD + 6, y + 6, PAD + 22, y + 22]
        draw.ellipse(box, outline=CHECK if task.completed else SEPARATOR, width=2)
        if task.completed:
            draw.text((PAD + 9, y + 6), "x", fill=CHECK, font=self._font_small)

        color = TEXT_DIM if task.completed else TEXT
        draw.text((PAD + 30, y + 6), task.text, fill=color, font=self._font)
        if task.completed:
            # Strike-through across the rendered text
            left, top, right, bottom = draw.textbbox((PAD + 30, y + 6), task.text,
                                                     font=self._font)
            mid = (top + bottom) // 2
            draw.line([left, mid, right, mid], fill=TEXT_DIM, width=1)

    def _draw_footer(self, draw: ImageDraw.ImageDraw, y: int,
                     snapshot: StoreSnapshot) -> None:
        draw.text((PAD, y + 9), f"{snapshot.items_left_label} left", fill=TEXT_DIM,
                  font=self._font_small)

        x = self.width // 2 - 80
        for f in FILTER_LIST:
            label = f.value.capitalize()
            if f is snapshot.filter:
                left, top, right, bottom = draw.textbbox((x, y + 9), label,
                                                         font=self._font_small)
                draw.rectangle([left - 3, top - 3, right + 3, bottom + 3],
                               outline=ACCENT)
            draw.text((x, y + 9), label, fill=TEXT, font=self._font_small)
            x += 60

        if snapshot.has_completed:
            draw.text((self.width - PAD - 100, y + 9), "Clear completed",
                      fill=TEXT_DIM, font=self._font_small)

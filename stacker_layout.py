# stacker_layout.py
from dataclasses import dataclass
from typing import Sequence

from stacker_block import Block
from stacker_config import CONFIG


def camera_offset(stack: Sequence[Block]) -> float:
    """Vertical scroll (field units) keeping the top of the stack on screen."""
    if not stack:
        return 0.0
    stack_height = CONFIG["FIELD_HEIGHT"] - stack[-1].y
    window = CONFIG["VISIBLE_ROWS"] * CONFIG["BLOCK_HEIGHT"]
    return max(0.0, stack_height - window)


@dataclass
class Dims:
    scale: float
    margin: int
    panel_w: int
    field_w: int
    field_h: int
    total_w: int
    total_h: int
    field_x: int
    field_y: int
    panel_x: int
    panel_y: int

    def px(self, units: float) -> int:
        return int(round(units * self.scale))


def compute_dims() -> Dims:
    scale = float(CONFIG["SCALE"])
    margin = 16
    panel_w = 220

    field_w = int(CONFIG["FIELD_WIDTH"] * scale)
    field_h = int(CONFIG["FIELD_HEIGHT"] * scale)

    total_w = margin + field_w + margin + panel_w + margin
    total_h = margin + field_h + margin

    field_x = margin
    field_y = margin
    panel_x = field_x + field_w + margin
    panel_y = margin

    return Dims(
        scale=scale, margin=margin, panel_w=panel_w,
        field_w=field_w, field_h=field_h,
        total_w=total_w, total_h=total_h,
        field_x=field_x, field_y=field_y,
        panel_x=panel_x, panel_y=panel_y
    )

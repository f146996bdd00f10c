"""Block model, falling fragments and themed block kinds"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from stacker_config import CONFIG
from stacker_rng import StackRandom

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class Kind:
    name: str
    color: Color
    height: Optional[int] = None  # None => CONFIG["BLOCK_HEIGHT"]

    def block_height(self) -> int:
        return self.height if self.height is not None else CONFIG["BLOCK_HEIGHT"]


@dataclass(frozen=True)
class Block:
    x: float
    y: float
    width: float
    height: float
    kind: Kind

    @property
    def right(self) -> float:
        return self.x + self.width


@dataclass
class FallingFragment:
    x: float
    y: float
    width: float
    height: float
    kind: Kind
    rotation: float = 0.0
    rotation_speed: float = 0.0


@dataclass(frozen=True)
class Theme:
    name: str
    palette: Tuple[Kind, ...]
    base: Optional[Kind] = None
    random_kinds: bool = False

    def kind_for(self, index: int, rng: StackRandom) -> Kind:
        """Kind of the block that will sit at stack index `index`."""
        if index == 0 and self.base is not None:
            return self.base
        if self.random_kinds:
            return rng.choice(self.palette)
        return self.palette[index % len(self.palette)]


BLOCK_COLORS = (
    (102, 224, 255),
    (106, 119, 255),
    (255, 158, 94),
    (255, 224, 102),
    (94, 224, 142),
    (200, 119, 255),
    (255, 102, 119),
)

PATTY_COLORS = (
    (139, 69, 19), (107, 62, 38), (123, 63, 0), (92, 64, 51), (128, 64, 0),
    (101, 67, 33), (139, 90, 43), (111, 78, 55), (123, 85, 68), (93, 58, 26),
)

TOPPINGS = (
    Kind("patty", (110, 62, 30), 18),
    Kind("cheese", (255, 200, 40), 8),
    Kind("lettuce", (90, 180, 60), 10),
    Kind("tomato", (220, 50, 40), 12),
    Kind("onion", (235, 220, 235), 8),
    Kind("bacon", (180, 70, 60), 10),
)

THEMES: Dict[str, Theme] = {
    "blocks": Theme("blocks", tuple(Kind(f"block{i}", c) for i, c in enumerate(BLOCK_COLORS))),
    "patty": Theme("patty", tuple(Kind(f"patty{i}", c) for i, c in enumerate(PATTY_COLORS))),
    "toppings": Theme("toppings", TOPPINGS, base=Kind("bun", (222, 160, 80), 22), random_kinds=True),
}


def theme(name: str) -> Theme:
    return THEMES[name]


def to_fragment(block: Block, spin: float, x: Optional[float] = None,
                width: Optional[float] = None) -> FallingFragment:
    """Detach `block` (or the [x, x+width) slice of it) as a falling piece."""
    return FallingFragment(
        x=block.x if x is None else x,
        y=block.y,
        width=block.width if width is None else width,
        height=block.height,
        kind=block.kind,
        rotation=0.0,
        rotation_speed=spin,
    )

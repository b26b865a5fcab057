from dataclasses import dataclass
from enum import Enum


class GemKind(Enum):
    """Closed tag set of gem variants.

    Only NORMAL gems have behaviour. ROW_CLEAR and COLOR_BOMB ride along through
    swaps and gravity but are matched like any other gem of their type.
    """
    NORMAL = "normal"
    ROW_CLEAR = "row_clear"
    COLOR_BOMB = "color_bomb"


@dataclass(frozen=True, slots=True)
class Cell:
    """Read-only view of one board slot.

    ``type`` is an integer colour in ``[0, color_count)``; ``empty`` marks a slot
    cleared mid-cascade and waiting for gravity or refill.
    """
    type: int
    empty: bool = False
    kind: GemKind = GemKind.NORMAL

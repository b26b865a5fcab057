from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(slots=True)
class Selection:
    """The single cell waiting for a swap partner, if any."""
    position: Optional[Tuple[int, int]] = None

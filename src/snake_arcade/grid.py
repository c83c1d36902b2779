# grid.py
from __future__ import annotations
from typing import Iterable, Optional, Tuple
import random

from .config import GRID_SIZE
from .errors import FieldExhausted

Cell = Tuple[int, int]

# ---------- Geometry ----------
def in_bounds(cell: Cell, size: int = GRID_SIZE) -> bool:
    """Check if a cell is inside the size x size grid."""
    x, y = cell
    return 0 <= x < size and 0 <= y < size

def occupies(cells: Iterable[Cell], cell: Cell) -> bool:
    # linear scan; the actor never exceeds the grid area
    return any(c == cell for c in cells)

# ---------- Food ----------
def place_food(actor, rng: Optional[random.Random] = None, size: int = GRID_SIZE) -> Cell:
    """
    Rejection-sample a uniformly random free cell.

    Raises FieldExhausted when the actor already covers the whole grid,
    since no sample could ever be accepted.
    """
    if len(actor) >= size * size:
        raise FieldExhausted(f"actor of length {len(actor)} fills the {size}x{size} grid")
    rng = rng or random
    while True:
        cand = (rng.randrange(size), rng.randrange(size))
        if not occupies(actor, cand):
            return cand

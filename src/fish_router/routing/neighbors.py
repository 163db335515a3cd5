"""Legal one-step moves through the (row, col, time) search space."""
from __future__ import annotations

from typing import Callable, List, NamedTuple, Optional, Tuple

from fish_router.routing.feasibility import FeasibilityModel, ToleranceSetting


class SearchState(NamedTuple):
    row: int
    col: int
    time: int


Move = Tuple[int, int]
# Staying put is tried first; it is usually the cheapest move.
MOVES: List[Move] = [
    (0, 0),
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
    (1, 1),
    (1, -1),
    (-1, 1),
    (-1, -1),
]

NeighborFunction = Callable[[SearchState], List[SearchState]]


def neighbors(
    state: SearchState,
    model: FeasibilityModel,
    tolerance: ToleranceSetting,
    horizon: Optional[int] = None,
) -> List[SearchState]:
    """All traversable states one time step after ``state``.

    Args:
        horizon: Last time step worth generating; later states are dropped.
    """
    time = state.time + 1
    if horizon is not None and time > horizon:
        return []
    res: List[SearchState] = []
    for dr, dc in MOVES:
        row, col = state.row + dr, state.col + dc
        if model.is_traversable(row, col, time, tolerance):
            res.append(SearchState(row, col, time))
    return res


def make_neighbor_function(
    model: FeasibilityModel,
    tolerance: ToleranceSetting,
    horizon: Optional[int] = None,
) -> NeighborFunction:
    """Bind the model and tolerances into the single-argument callback the search expects."""

    def _neighbors(state: SearchState) -> List[SearchState]:
        return neighbors(state, model, tolerance, horizon)

    return _neighbors

"""Step cost, heuristic and goal test for the time-extended grid search."""
from __future__ import annotations

from typing import Callable

from fish_router.routing.neighbors import SearchState


def chebyshev(a: SearchState, b: SearchState) -> int:
    """Spatial king-move distance between two states."""
    return max(abs(b.row - a.row), abs(b.col - a.col))


def step_cost(a: SearchState, b: SearchState) -> float:
    """Cost of moving from ``a`` to a neighbouring ``b``.

    One unit per time step plus the spatial Chebyshev distance, so every
    legal step costs 1 (stay) or 2 (move).
    """
    return chebyshev(a, b) + abs(b.time - a.time)


def heuristic(a: SearchState, goal: SearchState, goal_tolerance: int = 0) -> float:
    """Lower bound on the remaining cost from ``a`` to ``goal``.

    Any state within ``goal_tolerance`` cells of the goal is accepted, so that
    much spatial distance may never have to be travelled.
    """
    return max(0, chebyshev(a, goal) - goal_tolerance) + abs(goal.time - a.time)


def is_goal(state: SearchState, goal: SearchState, goal_tolerance: int = 0) -> bool:
    """Time must match exactly; position may be off by ``goal_tolerance`` cells."""
    return state.time == goal.time and chebyshev(state, goal) <= goal_tolerance


def make_heuristic(goal_tolerance: int = 0) -> Callable[[SearchState, SearchState], float]:
    def _heuristic(a: SearchState, goal: SearchState) -> float:
        return heuristic(a, goal, goal_tolerance)

    return _heuristic


def make_goal_test(goal_tolerance: int = 0) -> Callable[[SearchState, SearchState], bool]:
    def _is_goal(state: SearchState, goal: SearchState) -> bool:
        return is_goal(state, goal, goal_tolerance)

    return _is_goal

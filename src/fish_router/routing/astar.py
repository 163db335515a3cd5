"""Generic A* search driven by neighbour, cost, heuristic and goal callbacks."""
from __future__ import annotations

import heapq
import itertools
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, Generic, Hashable, Iterable, List, Optional, Tuple, TypeVar

Node = TypeVar("Node", bound=Hashable)

SUCCESS = "success"
NO_PATH = "nopath"
EXPANSION_LIMIT = "expansion_limit"


def reconstruct_path(came_from: Dict[Node, Node], current: Node) -> List[Node]:
    """Walk predecessor links back from ``current``; returns start-first order."""
    path = [current]
    while current in came_from:
        current = came_from[current]
        path.append(current)
    path.reverse()
    return path


@dataclass
class AStarResult(Generic[Node]):
    path: List[Node]
    explored: int
    cost: float
    success: bool
    status: str = field(default=NO_PATH)


def astar(
    neighbors: Callable[[Node], Iterable[Node]],
    start: Node,
    goal: Node,
    *,
    cost: Callable[[Node, Node], float],
    heuristic: Callable[[Node, Node], float],
    is_goal: Callable[[Node, Node], bool],
    max_cost: float = math.inf,
    max_expansions: Optional[int] = None,
) -> AStarResult[Node]:
    """Find a cheapest path from ``start`` to any node accepted by ``is_goal``.

    The open set is ordered by f = g + h with ties broken by insertion order,
    so identical inputs always give identical paths. Expanded nodes are never
    reopened, which is exact for a consistent heuristic. Successors whose f
    exceeds ``max_cost`` are pruned, so an exhausted frontier means no path
    exists within the budget.
    """
    counter = itertools.count()
    open_set: List[Tuple[float, int, Node]] = []
    heapq.heappush(open_set, (heuristic(start, goal), next(counter), start))
    came_from: Dict[Node, Node] = {}
    g_score: Dict[Node, float] = {start: 0.0}
    closed = set()
    explored = 0

    while open_set:
        _, _, current = heapq.heappop(open_set)
        if current in closed:
            continue
        if is_goal(current, goal):
            return AStarResult(
                path=reconstruct_path(came_from, current),
                explored=explored,
                cost=g_score[current],
                success=True,
                status=SUCCESS,
            )
        if max_expansions is not None and explored >= max_expansions:
            return AStarResult(path=[], explored=explored, cost=math.inf, success=False, status=EXPANSION_LIMIT)
        closed.add(current)
        explored += 1

        g_current = g_score[current]
        for neighbor in neighbors(current):
            if neighbor in closed:
                continue
            tentative_g = g_current + cost(current, neighbor)
            if tentative_g >= g_score.get(neighbor, math.inf):
                continue
            f_score = tentative_g + heuristic(neighbor, goal)
            if f_score > max_cost:
                continue
            came_from[neighbor] = current
            g_score[neighbor] = tentative_g
            heapq.heappush(open_set, (f_score, next(counter), neighbor))

    return AStarResult(path=[], explored=explored, cost=math.inf, success=False, status=NO_PATH)

# gridsearch/core/astar.py
#!/usr/bin/env python3
"""
A* on a 4-connected, unit-cost grid.

Heuristic:
- Manhattan distance to the goal, computed once per node when the run is seeded.
- Admissible and consistent for 4-directional unit moves, so the first time the
  goal is finalized its g-score is optimal.

Tie-breaking in the PQ:
- (f, seq, cell): lower f, then FIFO by seq. Same rule as Dijkstra.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import heapq

from gridsearch.core.grid import manhattan, neighbors
from gridsearch.core.search import SearchAlgo
from gridsearch.core.types import AlgorithmKind, Cell, Node


@dataclass
class AStarAlgo(SearchAlgo):
    kind = AlgorithmKind.ASTAR

    open_pq: List[Tuple[float, int, Cell]] = field(default_factory=list)  # (f, seq, cell)
    seq: int = 0

    # -------------------- lifecycle --------------------

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def _seed(self) -> None:
        self.open_pq.clear()
        self.seq = 0
        for n in self.grid:
            n.h_score = manhattan(n.cell, self.end)

        s = self.grid.node(self.start)
        s.g_score = 0
        s.f_score = s.h_score
        heapq.heappush(self.open_pq, (s.f_score, self._bump(), s.cell))

    # -------------------- main stepping logic --------------------

    def _next(self) -> Optional[Node]:
        while self.open_pq:
            _, _, c = heapq.heappop(self.open_pq)
            u = self.grid.node(c)
            if u.visited or u.is_wall:
                continue
            u.visited = True
            return u
        return None

    def _expand(self, node: Node) -> List[Cell]:
        opened: List[Cell] = []
        for v in neighbors(node, self.grid, unvisited_only=True):
            if v.is_wall:
                continue
            alt = node.g_score + 1
            if alt < v.g_score:
                v.g_score = alt
                v.f_score = v.g_score + v.h_score
                v.predecessor = node.cell
                heapq.heappush(self.open_pq, (v.f_score, self._bump(), v.cell))
                opened.append(v.cell)
        return opened

    def _cost(self, node: Node) -> float:
        return node.g_score

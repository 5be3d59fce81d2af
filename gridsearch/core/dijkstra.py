# gridsearch/core/dijkstra.py
#!/usr/bin/env python3

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import heapq

from gridsearch.core.grid import neighbors
from gridsearch.core.search import SearchAlgo
from gridsearch.core.types import AlgorithmKind, Cell, Node


@dataclass
class DijkstraAlgo(SearchAlgo):
    kind = AlgorithmKind.DIJKSTRA

    open_pq: List[Tuple[float, int, Cell]] = field(default_factory=list)   # (distance, seq, cell)
    seq: int = 0  # monotonic counter, equal keys pop in insertion order

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def _seed(self) -> None:
        self.open_pq.clear()
        self.seq = 0
        s = self.grid.node(self.start)
        s.distance = 0
        heapq.heappush(self.open_pq, (s.distance, self._bump(), s.cell))

    def _next(self) -> Optional[Node]:
        while self.open_pq:
            _, _, c = heapq.heappop(self.open_pq)
            u = self.grid.node(c)
            # stale entry or wall: discard
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
            alt = node.distance + 1
            if alt < v.distance:
                v.distance = alt
                v.predecessor = node.cell
                heapq.heappush(self.open_pq, (v.distance, self._bump(), v.cell))
                opened.append(v.cell)
        return opened

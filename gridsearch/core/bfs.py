# gridsearch/core/bfs.py
#!/usr/bin/env python3

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional

from gridsearch.core.grid import neighbors
from gridsearch.core.search import SearchAlgo
from gridsearch.core.types import AlgorithmKind, Cell, Node


@dataclass
class BFSAlgo(SearchAlgo):
    """Breadth-first search: shortest path in hop count.

    Nodes are marked visited when enqueued, never when dequeued, so no node
    enters the queue twice.
    """
    kind = AlgorithmKind.BFS

    queue: Deque[Node] = field(default_factory=deque)

    def _seed(self) -> None:
        self.queue.clear()
        s = self.grid.node(self.start)
        s.distance = 0
        s.visited = True
        self.queue.append(s)

    def _next(self) -> Optional[Node]:
        return self.queue.popleft() if self.queue else None

    def _expand(self, node: Node) -> List[Cell]:
        opened: List[Cell] = []
        for v in neighbors(node, self.grid, unvisited_only=True):
            if v.is_wall:
                continue
            v.visited = True
            v.distance = node.distance + 1
            v.predecessor = node.cell
            self.queue.append(v)
            opened.append(v.cell)
        return opened

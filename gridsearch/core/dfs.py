# gridsearch/core/dfs.py
#!/usr/bin/env python3

from dataclasses import dataclass, field
from typing import List, Optional

from gridsearch.core.grid import neighbors
from gridsearch.core.search import SearchAlgo
from gridsearch.core.types import AlgorithmKind, Cell, Node


@dataclass
class DFSAlgo(SearchAlgo):
    """Stack-based depth-first search. Finds *a* path, not the shortest one."""
    kind = AlgorithmKind.DFS

    stack: List[Node] = field(default_factory=list)

    def _seed(self) -> None:
        self.stack.clear()
        s = self.grid.node(self.start)
        s.distance = 0
        s.visited = True
        self.stack.append(s)

    def _next(self) -> Optional[Node]:
        return self.stack.pop() if self.stack else None

    def _expand(self, node: Node) -> List[Cell]:
        opened: List[Cell] = []
        # pushed in reverse so the first direction (up) is popped first
        for v in reversed(neighbors(node, self.grid, unvisited_only=True)):
            if v.is_wall:
                continue
            v.visited = True
            v.distance = node.distance + 1
            v.predecessor = node.cell
            self.stack.append(v)
            opened.append(v.cell)
        return opened

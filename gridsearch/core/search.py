# gridsearch/core/search.py
#!/usr/bin/env python3
"""
Shared stepping base for the four grid strategies.

Every strategy follows the same API as the viewer expects:
- init(grid, start, end) - reset() - step() -> StepResult
and run() drives step() to completion, returning an AlgorithmResult.

One step() finalizes exactly one node, so a run is bounded by rows*cols steps.
Subclasses provide:
- _seed()          push the start node on the frontier
- _next()          pop the next node to finalize (None when exhausted)
- _expand(node)    push its neighbours, return the cells opened
- _cost(node)      accumulated cost used to validate the reconstructed path
"""

import logging
from dataclasses import dataclass, field
from typing import ClassVar, List, Optional

from gridsearch.core.types import AlgorithmKind, AlgorithmResult, Cell, Grid, Node, StepResult

logger = logging.getLogger(__name__)


@dataclass
class SearchAlgo:
    kind: ClassVar[AlgorithmKind]

    grid: Optional[Grid] = None
    start: Optional[Cell] = None
    end: Optional[Cell] = None
    visited_order: List[Cell] = field(default_factory=list)
    path: List[Cell] = field(default_factory=list)
    done: bool = False
    no_path: bool = False

    @property
    def name(self) -> str:
        return self.kind.label

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid, start: Cell, end: Cell) -> None:
        self.grid = grid
        self.start = start
        self.end = end
        self.reset()

    def reset(self) -> None:
        """Clear run state and seed the frontier; grid scratch must already be reset."""
        if self.grid is None:
            return
        self.visited_order = []
        self.path = []
        self.done = False
        self.no_path = False
        self._seed()

    # -------------------- stepping --------------------

    def step(self) -> StepResult:
        if self.done:
            return StepResult(status="done", current=self.end, path=self.path)
        if self.no_path or self.grid is None:
            return StepResult(status="no_path")

        node = self._next()
        if node is None:
            self.no_path = True
            return StepResult(status="no_path")

        self.visited_order.append(node.cell)
        if node.cell == self.end:
            self.done = True
            self.path = self._reconstruct_path(node)
            if not self.path:
                self.no_path = True
            return StepResult(status="done", current=node.cell, path=self.path)

        opened = self._expand(node)
        return StepResult(status="running", current=node.cell, opened=opened)

    def run(self) -> AlgorithmResult:
        res = self.step()
        while res.status == "running":
            res = self.step()
        return AlgorithmResult(kind=self.kind, visited=list(self.visited_order), path=list(self.path))

    # -------------------- helpers --------------------

    def _reconstruct_path(self, end_node: Node) -> List[Cell]:
        path: List[Cell] = []
        cur: Optional[Node] = end_node
        while cur is not None:
            path.append(cur.cell)
            cur = self.grid.node(cur.predecessor) if cur.predecessor is not None else None
        path.reverse()

        # Only trust a chain that is rooted at the real start with zero cost.
        head = self.grid.node(path[0])
        if path[0] == self.start and self._cost(head) == 0:
            return path
        logger.warning("%s: predecessor chain from %s is not rooted at start %s; dropping path",
                       self.name, end_node.cell, self.start)
        return []

    def _seed(self) -> None:
        raise NotImplementedError

    def _next(self) -> Optional[Node]:
        raise NotImplementedError

    def _expand(self, node: Node) -> List[Cell]:
        raise NotImplementedError

    def _cost(self, node: Node) -> float:
        return node.distance

# gridsearch/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from math import inf
from typing import List, Tuple, Optional, Dict

from gridsearch.core.errors import UnknownAlgorithmError

Cell = Tuple[int, int]  # (row, col)


class AlgorithmKind(Enum):
    BFS = "bfs"
    DFS = "dfs"
    DIJKSTRA = "dijkstra"
    ASTAR = "astar"

    @property
    def label(self) -> str:
        return _KIND_LABELS[self]

    @classmethod
    def parse(cls, text: str) -> "AlgorithmKind":
        """Accept 'astar', 'A*', 'Dijkstra' ... and fail loudly on anything else."""
        if isinstance(text, cls):
            return text
        key = str(text).strip().lower().replace("*", "star").replace("-", "").replace(" ", "")
        for kind in cls:
            if key in (kind.value, kind.label.lower().replace("*", "star").replace(" ", "")):
                return kind
        raise UnknownAlgorithmError(f"Unknown algorithm kind: {text!r}")


_KIND_LABELS = {
    AlgorithmKind.BFS: "BFS",
    AlgorithmKind.DFS: "DFS",
    AlgorithmKind.DIJKSTRA: "Dijkstra",
    AlgorithmKind.ASTAR: "A*",
}


class Role(Enum):
    EMPTY = "empty"
    WALL = "wall"
    START = "start"
    END = "end"


class DisplayTag(Enum):
    EMPTY = "empty"
    WALL = "wall"
    START = "start"
    END = "end"
    VISITED = "visited"
    PATH = "path"
    VISITED_BFS = "visited-bfs"
    VISITED_DFS = "visited-dfs"
    VISITED_DIJKSTRA = "visited-dijkstra"
    VISITED_ASTAR = "visited-astar"
    PATH_BFS = "path-bfs"
    PATH_DFS = "path-dfs"
    PATH_DIJKSTRA = "path-dijkstra"
    PATH_ASTAR = "path-astar"

    @classmethod
    def for_role(cls, role: Role) -> "DisplayTag":
        return cls(role.value)

    @classmethod
    def visited_for(cls, kind: AlgorithmKind) -> "DisplayTag":
        return cls(f"visited-{kind.value}")

    @classmethod
    def path_for(cls, kind: AlgorithmKind) -> "DisplayTag":
        return cls(f"path-{kind.value}")


@dataclass
class Node:
    row: int
    col: int
    role: Role = Role.EMPTY
    # scratch, cleared by reset() before every run
    distance: float = inf
    g_score: float = inf
    h_score: float = inf
    f_score: float = inf
    visited: bool = False
    predecessor: Optional[Cell] = None
    # display channels: primary + one per comparison track
    display: DisplayTag = DisplayTag.EMPTY
    overlays: Dict[str, DisplayTag] = field(default_factory=dict)

    @property
    def cell(self) -> Cell:
        return (self.row, self.col)

    @property
    def is_wall(self) -> bool:
        return self.role is Role.WALL

    @property
    def is_start(self) -> bool:
        return self.role is Role.START

    @property
    def is_end(self) -> bool:
        return self.role is Role.END

    def clear_scratch(self) -> None:
        self.distance = inf
        self.g_score = inf
        self.h_score = inf
        self.f_score = inf
        self.visited = False
        self.predecessor = None


@dataclass
class Grid:
    rows: int
    cols: int
    nodes: List[List[Node]]             # [row][col]
    start: Optional[Cell] = None
    end: Optional[Cell] = None

    @classmethod
    def create(cls, rows: int, cols: int) -> "Grid":
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")
        nodes = [[Node(r, c) for c in range(cols)] for r in range(rows)]
        return cls(rows, cols, nodes)

    def in_bounds(self, c: Cell) -> bool:
        r, col = c
        return 0 <= r < self.rows and 0 <= col < self.cols

    def node(self, c: Cell) -> Node:
        if not self.in_bounds(c):
            raise IndexError(f"Cell {c} outside {self.rows}x{self.cols} grid")
        r, col = c
        return self.nodes[r][col]

    def is_block(self, c: Cell) -> bool:
        return self.node(c).is_wall

    def __iter__(self):
        for row in self.nodes:
            yield from row

    def copy(self) -> "Grid":
        """Same layout and display channels, fresh scratch fields."""
        nodes = [
            [Node(n.row, n.col, role=n.role, display=n.display, overlays=dict(n.overlays)) for n in row]
            for row in self.nodes
        ]
        return Grid(self.rows, self.cols, nodes, self.start, self.end)


@dataclass
class StepResult:
    status: str                   # "running" | "done" | "no_path"
    current: Optional[Cell] = None
    opened: List[Cell] = field(default_factory=list)
    path: Optional[List[Cell]] = None


@dataclass
class AlgorithmResult:
    kind: AlgorithmKind
    visited: List[Cell] = field(default_factory=list)   # finalization order
    path: List[Cell] = field(default_factory=list)      # start..end inclusive, [] if unreachable

    @property
    def path_found(self) -> bool:
        return len(self.path) > 0

# gridsearch/core/grid.py
#!/usr/bin/env python3
"""
Grid model primitives shared by every strategy and by the viewer.

- reset(grid)                        -> clear scratch fields, keep roles
- neighbors(node, grid, unvisited)   -> 4-connected, fixed order UP, DOWN, LEFT, RIGHT
- place_start / place_end / toggle_wall / clear*  -> editing tools
- from_layout / to_layout            -> text rows ('.', '#', 'S', 'E')
"""

import logging
from typing import Iterable, List

from gridsearch.core.errors import GridEditError, LayoutError
from gridsearch.core.types import Cell, DisplayTag, Grid, Node, Role

logger = logging.getLogger(__name__)

# (d_row, d_col): up, down, left, right. Tie-breaks in every strategy depend on it.
DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))

LAYOUT_CHARS = {
    ".": Role.EMPTY,
    "#": Role.WALL,
    "S": Role.START,
    "E": Role.END,
}


def reset(grid: Grid) -> None:
    for node in grid:
        node.clear_scratch()


def neighbors(node: Node, grid: Grid, unvisited_only: bool = False) -> List[Node]:
    out: List[Node] = []
    for dr, dc in DIRECTIONS:
        c = (node.row + dr, node.col + dc)
        if not grid.in_bounds(c):
            continue
        n = grid.node(c)
        if unvisited_only and n.visited:
            continue
        out.append(n)
    return out


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


# -------------------- editing tools --------------------

def _set_role(node: Node, role: Role) -> None:
    node.role = role
    node.display = DisplayTag.for_role(role)
    node.overlays.clear()


def place_start(grid: Grid, cell: Cell) -> None:
    """Move the start marker to ``cell``; a wall there is replaced."""
    node = grid.node(cell)
    if node.is_end:
        raise GridEditError(f"{cell} already holds the end marker")
    if grid.start is not None and grid.start != cell:
        _set_role(grid.node(grid.start), Role.EMPTY)
    _set_role(node, Role.START)
    grid.start = cell


def place_end(grid: Grid, cell: Cell) -> None:
    """Move the end marker to ``cell``; a wall there is replaced."""
    node = grid.node(cell)
    if node.is_start:
        raise GridEditError(f"{cell} already holds the start marker")
    if grid.end is not None and grid.end != cell:
        _set_role(grid.node(grid.end), Role.EMPTY)
    _set_role(node, Role.END)
    grid.end = cell


def toggle_wall(grid: Grid, cell: Cell) -> bool:
    node = grid.node(cell)
    if node.is_start or node.is_end:
        return False
    _set_role(node, Role.EMPTY if node.is_wall else Role.WALL)
    return True


def set_wall(grid: Grid, cell: Cell, wall: bool = True) -> bool:
    """Paint (or erase) a wall without toggling; used for drag painting."""
    node = grid.node(cell)
    if node.is_start or node.is_end or node.is_wall == wall:
        return False
    _set_role(node, Role.WALL if wall else Role.EMPTY)
    return True


def clear_walls(grid: Grid) -> None:
    for node in grid:
        if node.is_wall:
            _set_role(node, Role.EMPTY)


def clear(grid: Grid) -> None:
    for node in grid:
        _set_role(node, Role.EMPTY)
        node.clear_scratch()
    grid.start = None
    grid.end = None


def clear_visualization(grid: Grid) -> None:
    """Drop visited/path tags from every channel; roles stay."""
    for node in grid:
        node.display = DisplayTag.for_role(node.role)
        node.overlays.clear()


# -------------------- text layouts --------------------

def from_layout(lines: Iterable[str]) -> Grid:
    rows = [line.strip() for line in lines if line.strip()]
    if not rows:
        raise LayoutError("Layout has no rows")
    width = len(rows[0])
    if any(len(r) != width for r in rows):
        raise LayoutError("Layout rows have different lengths")

    grid = Grid.create(len(rows), width)
    for r, line in enumerate(rows):
        for c, ch in enumerate(line):
            role = LAYOUT_CHARS.get(ch)
            if role is None:
                raise LayoutError(f"Unknown layout character {ch!r} at {(r, c)}")
            if role is Role.START:
                if grid.start is not None:
                    raise LayoutError("Layout has more than one start")
                place_start(grid, (r, c))
            elif role is Role.END:
                if grid.end is not None:
                    raise LayoutError("Layout has more than one end")
                place_end(grid, (r, c))
            elif role is Role.WALL:
                _set_role(grid.node((r, c)), Role.WALL)
    logger.debug("Built %dx%d grid from layout", grid.rows, grid.cols)
    return grid


def to_layout(grid: Grid) -> List[str]:
    chars = {role: ch for ch, role in LAYOUT_CHARS.items()}
    return ["".join(chars[n.role] for n in row) for row in grid.nodes]

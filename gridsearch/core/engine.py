# gridsearch/core/engine.py
#!/usr/bin/env python3
"""
Engine-facing entry points used by the viewer (or any other collaborator).

    run(kind, grid, start, end)        -> AlgorithmResult
    timed_run(kind, grid, start, end)  -> (AlgorithmResult, elapsed ms)
    compare(kinds, grid, start, end)   -> {kind: Comparison}

Endpoints are validated before the grid is touched. Only scratch fields of the
supplied grid are mutated; display tags are the playback scheduler's business.
"""

import logging
import time
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple, Union

from gridsearch.core.astar import AStarAlgo
from gridsearch.core.bfs import BFSAlgo
from gridsearch.core.dfs import DFSAlgo
from gridsearch.core.dijkstra import DijkstraAlgo
from gridsearch.core.errors import InvalidEndpointsError, UnknownAlgorithmError
from gridsearch.core.grid import neighbors, reset
from gridsearch.core.metrics import AlgorithmMetrics, collect
from gridsearch.core.search import SearchAlgo
from gridsearch.core.types import AlgorithmKind, AlgorithmResult, Cell, Grid

logger = logging.getLogger(__name__)

__all__ = ["run", "timed_run", "compare", "make_algo", "reset", "neighbors", "collect", "Comparison"]

KindLike = Union[AlgorithmKind, str]


@dataclass
class Comparison:
    result: AlgorithmResult
    metrics: AlgorithmMetrics


def make_algo(kind: KindLike) -> SearchAlgo:
    if not isinstance(kind, AlgorithmKind):
        kind = AlgorithmKind.parse(kind)
    if kind is AlgorithmKind.BFS:
        return BFSAlgo()
    elif kind is AlgorithmKind.DFS:
        return DFSAlgo()
    elif kind is AlgorithmKind.DIJKSTRA:
        return DijkstraAlgo()
    elif kind is AlgorithmKind.ASTAR:
        return AStarAlgo()
    raise UnknownAlgorithmError(f"No strategy for {kind!r}")


def _check_endpoints(grid: Grid, start: Optional[Cell], end: Optional[Cell]) -> None:
    if start is None or end is None:
        raise InvalidEndpointsError("Both a start and an end cell are required")
    start, end = tuple(start), tuple(end)
    if start == end:
        raise InvalidEndpointsError(f"Start and end are the same cell {start}")
    for label, c in (("start", start), ("end", end)):
        if not grid.in_bounds(c):
            raise InvalidEndpointsError(f"{label} {c} is outside the {grid.rows}x{grid.cols} grid")
        if grid.is_block(c):
            raise InvalidEndpointsError(f"{label} {c} is a wall")


def run(kind: KindLike, grid: Grid, start: Optional[Cell], end: Optional[Cell]) -> AlgorithmResult:
    # resolve the strategy first so an unknown kind never touches the grid either
    algo = make_algo(kind)
    _check_endpoints(grid, start, end)
    start, end = tuple(start), tuple(end)

    reset(grid)
    algo.init(grid, start, end)
    result = algo.run()
    logger.debug("%s %s -> %s: %d visited, path %d", algo.name, start, end,
                 len(result.visited), len(result.path))
    return result


def timed_run(kind: KindLike, grid: Grid, start: Optional[Cell],
              end: Optional[Cell]) -> Tuple[AlgorithmResult, float]:
    t0 = time.perf_counter()
    result = run(kind, grid, start, end)
    return result, (time.perf_counter() - t0) * 1000.0


def compare(kinds: Iterable[KindLike], grid: Grid, start: Optional[Cell],
            end: Optional[Cell]) -> Dict[AlgorithmKind, Comparison]:
    """Run every kind to completion, one after another, each on its own copy of ``grid``."""
    out: Dict[AlgorithmKind, Comparison] = {}
    for k in kinds:
        kind = k if isinstance(k, AlgorithmKind) else AlgorithmKind.parse(k)
        result, elapsed = timed_run(kind, grid.copy(), start, end)
        out[kind] = Comparison(result=result, metrics=collect(result, elapsed))
    return out

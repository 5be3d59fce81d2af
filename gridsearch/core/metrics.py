# gridsearch/core/metrics.py
#!/usr/bin/env python3
from dataclasses import dataclass, asdict
from typing import Any, Dict

from gridsearch.core.types import AlgorithmResult


@dataclass(frozen=True)
class AlgorithmMetrics:
    execution_time: float   # ms, pure algorithm call only
    nodes_visited: int
    path_length: int
    path_found: bool

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        if not self.path_found:
            return f"No path found! ({self.nodes_visited} nodes visited in {self.execution_time:.2f}ms)"
        return (f"Path length {self.path_length}, {self.nodes_visited} nodes visited "
                f"in {self.execution_time:.2f}ms")


def collect(result: AlgorithmResult, execution_time_ms: float) -> AlgorithmMetrics:
    return AlgorithmMetrics(
        execution_time=float(execution_time_ms),
        nodes_visited=len(result.visited),
        path_length=len(result.path),
        path_found=result.path_found,
    )

# gridsearch/core/errors.py
#!/usr/bin/env python3
"""Exceptions raised by the search engine.

An unreachable goal is *not* an error: it is reported through
``AlgorithmResult.path_found`` / ``AlgorithmMetrics.path_found``.
"""


class GridSearchError(Exception):
    """Base class for everything the engine raises on purpose."""


class InvalidEndpointsError(GridSearchError, ValueError):
    """Start/end missing, equal, out of bounds or sitting on a wall."""


class UnknownAlgorithmError(GridSearchError, ValueError):
    """Algorithm kind tag that no strategy handles."""


class GridEditError(GridSearchError):
    """An edit that would break a grid invariant (e.g. start == end)."""


class LayoutError(GridSearchError, ValueError):
    """Malformed text layout passed to ``from_layout``."""

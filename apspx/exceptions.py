"""Custom exception types used across :mod:`apspx`."""

from __future__ import annotations

from typing import Hashable, Sequence


class APSPXError(Exception):
    """Base class for all package-specific errors."""


class InputError(APSPXError, ValueError):
    """Raised for invalid user input such as malformed edges."""


class InvalidGraphError(InputError):
    """Raised when a graph has no vertices to solve over."""


class GraphFormatError(InputError):
    """Raised when parsing a graph file or an edge weight fails."""


class ConfigError(APSPXError, ValueError):
    """Raised for invalid configuration options."""


class AlgorithmError(APSPXError, RuntimeError):
    """Raised when algorithm invariants are violated at runtime."""


class NegativeCycleError(AlgorithmError):
    """Raised when relaxation leaves a negative entry on the diagonal.

    Attributes:
        vertices: Vertices ``v`` with ``D[v][v] < 0``, in index order.
    """

    def __init__(self, vertices: Sequence[Hashable]) -> None:
        self.vertices = list(vertices)
        shown = ", ".join(repr(v) for v in self.vertices[:10])
        if len(self.vertices) > 10:
            shown += ", ..."
        super().__init__(f"negative cycle through vertices [{shown}]")


class ReconstructionError(AlgorithmError):
    """Raised when a predecessor chain does not lead back to the source."""


__all__ = [
    "APSPXError",
    "InputError",
    "InvalidGraphError",
    "GraphFormatError",
    "ConfigError",
    "AlgorithmError",
    "NegativeCycleError",
    "ReconstructionError",
]

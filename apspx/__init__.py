"""Public package exports for :mod:`apspx`."""

from __future__ import annotations

from .adapter import GraphAdapter, as_adapter
from .exceptions import (
    AlgorithmError,
    APSPXError,
    ConfigError,
    GraphFormatError,
    InputError,
    InvalidGraphError,
    NegativeCycleError,
    ReconstructionError,
)
from .graph import Graph
from .io import read_graph, write_graph
from .logger import Logger, NoopLogger, StdLogger
from .matrix import SquareMatrix, build
from .path import UNREACHABLE, Unreachable, reconstruct_path
from .reference import bellman_ford
from .relax import relax, relax_numpy
from .solver import APSPResult, FloydWarshallSolver, SolverConfig, SolverMetrics, solve

__version__ = "0.1.0"

__all__ = [
    "Graph",
    "GraphAdapter",
    "as_adapter",
    "SquareMatrix",
    "build",
    "relax",
    "relax_numpy",
    "reconstruct_path",
    "UNREACHABLE",
    "Unreachable",
    "solve",
    "FloydWarshallSolver",
    "APSPResult",
    "SolverConfig",
    "SolverMetrics",
    "bellman_ford",
    "Logger",
    "NoopLogger",
    "StdLogger",
    "read_graph",
    "write_graph",
    "APSPXError",
    "InputError",
    "InvalidGraphError",
    "GraphFormatError",
    "ConfigError",
    "AlgorithmError",
    "NegativeCycleError",
    "ReconstructionError",
]

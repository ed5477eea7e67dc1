"""Timing and optional cProfile integration around a solve."""

from __future__ import annotations

import cProfile
import pstats
import time
import tracemalloc
from dataclasses import dataclass
from io import StringIO
from types import TracebackType
from typing import Optional


@dataclass
class ProfileReport:
    """Summary of profiling statistics."""

    profile: cProfile.Profile

    def to_text(self, lines: int = 20, sort: str = "cumulative") -> str:
        """Return the top ``lines`` rows of the profile sorted by ``sort``."""
        buffer = StringIO()
        stats = pstats.Stats(self.profile, stream=buffer)
        stats.strip_dirs().sort_stats(sort).print_stats(lines)
        return buffer.getvalue()


class ProfileSession:
    """Context manager measuring wall time, and optionally cProfile and peak memory.

    Args:
        profile: Record a :mod:`cProfile` profile.
        track_memory: Record peak traced memory with :mod:`tracemalloc`.
        dump_path: Where raw profile stats are dumped on exit, if profiling.

    Attributes:
        wall_ms: Elapsed milliseconds, set on exit.
        peak_mib: Peak traced memory in MiB, set on exit when tracked.
    """

    def __init__(
        self,
        profile: bool = True,
        track_memory: bool = False,
        dump_path: Optional[str] = None,
    ) -> None:
        self.dump_path = dump_path
        self.track_memory = track_memory
        self._prof: Optional[cProfile.Profile] = cProfile.Profile() if profile else None
        self._done = False
        self._t0 = 0.0
        self.wall_ms = 0.0
        self.peak_mib: Optional[float] = None

    def __enter__(self) -> "ProfileSession":
        if self.track_memory:
            tracemalloc.start()
        self._t0 = time.perf_counter()
        if self._prof is not None:
            self._prof.enable()
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if self._prof is not None:
            self._prof.disable()
        self.wall_ms = (time.perf_counter() - self._t0) * 1000.0
        if self.track_memory:
            _, peak = tracemalloc.get_traced_memory()
            tracemalloc.stop()
            self.peak_mib = peak / (1024 * 1024)
        if self._prof is not None and self.dump_path:
            self._prof.dump_stats(self.dump_path)
        self._done = True

    def report(self) -> ProfileReport:
        """Return profiling statistics collected by a finished session."""
        if not self._done:
            raise RuntimeError("profiling session not finished")
        if self._prof is None:
            raise RuntimeError("session was created with profile=False")
        return ProfileReport(self._prof)


__all__: list[str] = ["ProfileReport", "ProfileSession"]

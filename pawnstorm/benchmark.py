"""Timing of engine searches from the starting position at several depths."""

from __future__ import annotations

import time
from collections.abc import Iterable
from dataclasses import dataclass

from .ai import ChessAI
from .board import Board
from .pieces import Color

DEFAULT_DEPTHS = (2, 3, 4, 5)
DEFAULT_MOVE_COUNT = 10


@dataclass(frozen=True)
class BenchmarkResult:
    """Average search time and node count for one depth."""

    depth: int
    avg_seconds: float
    avg_nodes: int


def run_benchmark(
    depths: Iterable[int] = DEFAULT_DEPTHS, move_count: int = DEFAULT_MOVE_COUNT
) -> list[BenchmarkResult]:
    """Search the opening position move_count times for each depth, as white."""
    if move_count < 1:
        raise ValueError(f"move_count must be at least 1, got {move_count}")
    ai = ChessAI()
    results = []
    for depth in depths:
        total_seconds = 0.0
        total_nodes = 0
        for _ in range(move_count):
            board = Board()
            start = time.perf_counter()
            ai.best_move(board, Color.WHITE, depth)
            total_seconds += time.perf_counter() - start
            total_nodes += ai.nodes_explored
        results.append(
            BenchmarkResult(depth, total_seconds / move_count, total_nodes // move_count)
        )
    return results


def format_results(results: Iterable[BenchmarkResult]) -> str:
    """Table of results with a header line, one row per depth."""
    lines = [f"{'Depth':<10}{'Avg Time (s)':<20}{'Avg Nodes Searched':<25}"]
    lines.extend(
        f"{result.depth:<10}{result.avg_seconds:<20g}{result.avg_nodes:<25}"
        for result in results
    )
    return "\n".join(lines)
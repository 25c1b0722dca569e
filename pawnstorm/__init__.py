"""Terminal chess against a minimax alpha-beta engine, with a benchmark of its search."""

__version__ = "0.1.0"
__all__ = ["pieces", "board", "ai", "game", "benchmark"]
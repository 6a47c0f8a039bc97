from __future__ import annotations
from typing import Optional
from .tsp import Board, DistanceMatrix
from .search_base import TourSearch, GameConfig, SolveResult


class BranchAndBound(TourSearch):
    """Tour search that drops a prefix once its cost reaches the best total.

    Weights are non-negative and only strictly lower totals replace the best,
    so the returned tour and length are exactly those of the exhaustive search.
    """
    name = "bnb"

    def __init__(self, matrix: DistanceMatrix, cfg: Optional[GameConfig] = None):
        super().__init__(matrix, cfg)
        for row in matrix.rows():
            if any(w is not None and w < 0 for w in row):
                raise ValueError("BranchAndBound requires non-negative weights.")

    def _should_prune(self, cost: int) -> bool:
        return self.best_length is not None and cost >= self.best_length


def _solver_constructor(name: str):
    if name.lower() == "exhaustive":
        return TourSearch
    if name.lower() == "bnb":
        return BranchAndBound
    raise ValueError(f"Unknown solver {name}")


def solve(board: Board, solver: str = "bnb", cfg: Optional[GameConfig] = None) -> SolveResult:
    cls = _solver_constructor(solver)
    return cls(board.matrix, cfg).run()

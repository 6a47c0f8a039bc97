from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from typing import List, Optional

from .tsp import DistanceMatrix
from .errors import NoFeasibleSolution, SearchBudgetExceeded

logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    n_cities: int = 6
    width: float = 800.0         # canvas size used for sampling
    height: float = 600.0
    margin: float = 50.0         # cities never closer than this to the canvas edge
    edge_probability: float = 0.7
    min_cities: int = 2
    max_cities: int = 10
    max_expansions: Optional[int] = None  # None = search to completion
    seed: Optional[int] = None


@dataclass
class SolveResult:
    best_tour: List[int]
    best_length: int
    history_best_lengths: List[int]
    history_best_tours: List[List[int]]
    expansions: int
    elapsed_sec: float
    config: Optional[GameConfig] = None
    solver: str = ""

    @property
    def tour_closed(self) -> List[int]:
        return self.best_tour + self.best_tour[:1]


class TourSearch:
    """Exact tour search: depth-first over visiting orders rooted at city 0.

    Only finite edges are ever expanded, and children are tried in ascending
    index order, so for a given matrix the returned tour is always the first
    optimal one met in that order. The best is replaced only on a strictly
    lower total.
    """
    name = "exhaustive"

    def __init__(self, matrix: DistanceMatrix, cfg: Optional[GameConfig] = None):
        self.D = matrix
        self.n = matrix.n
        self.cfg = cfg
        self.max_expansions = cfg.max_expansions if cfg is not None else None

        self.best_tour: Optional[List[int]] = None
        self.best_length: Optional[int] = None
        self.expansions = 0
        # one entry per improvement, for visualisation
        self.history_best_lengths: List[int] = []
        self.history_best_tours: List[List[int]] = []

    def _should_prune(self, cost: int) -> bool:
        # Overridden by BranchAndBound
        return False

    def _record(self, path: List[int], total: int):
        self.best_length = total
        self.best_tour = list(path)
        self.history_best_lengths.append(total)
        self.history_best_tours.append(list(path))

    def _expand(self, path: List[int], cost: int, visited: List[bool]):
        self.expansions += 1
        if self.max_expansions is not None and self.expansions > self.max_expansions:
            raise SearchBudgetExceeded(self.max_expansions)

        last = path[-1]
        if len(path) == self.n:
            back = self.D.weight(last, path[0])
            if back is not None:
                total = cost + back
                if self.best_length is None or total < self.best_length:
                    self._record(path, total)
            return

        for nxt in range(self.n):
            if visited[nxt]:
                continue
            w = self.D.weight(last, nxt)
            if w is None or self._should_prune(cost + w):
                continue
            visited[nxt] = True
            path.append(nxt)
            self._expand(path, cost + w, visited)
            path.pop()
            visited[nxt] = False

    def run(self) -> SolveResult:
        start = time.time()
        self.best_tour, self.best_length, self.expansions = None, None, 0
        self.history_best_lengths = []
        self.history_best_tours = []

        if self.n >= 1:
            visited = [False] * self.n
            visited[0] = True
            self._expand([0], 0, visited)

        elapsed = time.time() - start
        if self.best_tour is None:
            raise NoFeasibleSolution(f"no Hamiltonian cycle over {self.n} cities")
        logger.debug("%s: best %s length %d after %d expansions (%.4fs)",
                     self.name, self.best_tour, self.best_length, self.expansions, elapsed)
        return SolveResult(best_tour=self.best_tour, best_length=self.best_length,
                           history_best_lengths=self.history_best_lengths,
                           history_best_tours=self.history_best_tours,
                           expansions=self.expansions, elapsed_sec=elapsed,
                           config=self.cfg, solver=self.name)

"""
game.py

One round of the puzzle: a repaired board, its optimal tour (solved once at
setup), the player's path and the round's scoring state.

Every player action either returns a ``Feedback`` or raises a ``GameError``
subclass; a raised error never leaves the round modified.
"""
from __future__ import annotations
import logging
import random
import time
from dataclasses import dataclass, replace
from typing import Callable, List, Optional

from .errors import (InvalidCityCount, DuplicateCityInPath, NoDirectEdge,
                     CannotCloseCycle, UnknownCity)
from .repair import make_board
from .branch_bound import solve
from .search_base import GameConfig, SolveResult
from .tsp import Board

logger = logging.getLogger(__name__)

POINTS_PER_PATH = 10
UNASSISTED_BONUS = 50

INFO, ERROR, SUCCESS = "info", "error", "success"


@dataclass
class ScoreCard:
    distance: int
    path_points: int
    bonus_points: int
    total_score: int


@dataclass
class Feedback:
    message: str
    level: str = INFO
    card: Optional[ScoreCard] = None
    completed: bool = False


def score_discovery(correct_paths: int, assisted: bool, distance: int) -> ScoreCard:
    """Score for the ``correct_paths``-th improving tour of a round.

    The result replaces the round score rather than adding to it.
    """
    path_points = POINTS_PER_PATH * correct_paths
    bonus_points = 0 if assisted else UNASSISTED_BONUS
    return ScoreCard(distance=distance, path_points=path_points,
                     bonus_points=bonus_points, total_score=path_points + bonus_points)


def format_elapsed(seconds: float) -> str:
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


class GameRound:
    def __init__(self, board: Board, optimal: SolveResult, high_score: int = 0,
                 clock: Callable[[], float] = time.monotonic):
        self.board = board
        self.optimal = optimal
        self.clock = clock

        self.path: List[int] = []
        self.best_tour: Optional[List[int]] = None
        self.best_cost: Optional[int] = None
        self.correct_paths = 0
        self.score = 0
        self.high_score = high_score
        self.used_hint = False
        self.used_optimal = False
        self.completed = False

        self.started_at = clock()
        self.finished_at: Optional[float] = None

    @classmethod
    def start(cls, n_cities: Optional[int] = None, cfg: Optional[GameConfig] = None,
              rng: Optional[random.Random] = None, high_score: int = 0,
              clock: Callable[[], float] = time.monotonic, solver: str = "bnb") -> "GameRound":
        """Generate, repair and solve a board, then open a round on it."""
        cfg = cfg or GameConfig()
        n = cfg.n_cities if n_cities is None else n_cities
        if not cfg.min_cities <= n <= cfg.max_cities:
            raise InvalidCityCount(n, cfg.min_cities, cfg.max_cities)
        cfg = replace(cfg, n_cities=n)
        board = make_board(cfg, rng)
        optimal = solve(board, solver, cfg)
        logger.info("round started: %d cities, optimum %d (%d expansions)",
                    n, optimal.best_length, optimal.expansions)
        return cls(board, optimal, high_score=high_score, clock=clock)

    @property
    def n_cities(self) -> int:
        return self.board.n_cities()

    @property
    def optimal_cost(self) -> int:
        return self.optimal.best_length

    @property
    def assisted(self) -> bool:
        return self.used_hint or self.used_optimal

    def append_city(self, index: int) -> Feedback:
        m = self.board.matrix
        if not 0 <= index < self.n_cities:
            raise UnknownCity(f"No city with index {index}")
        if index in self.path:
            raise DuplicateCityInPath()
        if self.path and not m.has_edge(self.path[-1], index):
            raise NoDirectEdge()
        if len(self.path) + 1 == self.n_cities:
            first = self.path[0] if self.path else index
            if not m.has_edge(index, first):
                raise CannotCloseCycle()

        self.path.append(index)
        if len(self.path) == self.n_cities:
            return self._check_solution()
        return Feedback(f"Added city {self.board.cities[index].label}", INFO)

    def _check_solution(self) -> Feedback:
        total = self.board.matrix.path_cost(self.path)
        if self.best_cost is not None and total >= self.best_cost:
            return Feedback(f"Valid path found! Distance: {total}. Try to find a shorter path!", INFO)

        self.best_cost = total
        self.best_tour = list(self.path)
        self.correct_paths += 1
        card = score_discovery(self.correct_paths, self.assisted, total)
        self.score = card.total_score
        if self.score > self.high_score:
            self.high_score = self.score
        logger.debug("new best %d (optimum %d), score %d", total, self.optimal_cost, self.score)

        if not self.completed and total == self.optimal_cost:
            self.completed = True
            self.finished_at = self.clock()
            header = "Congratulations!" if self.assisted else "Perfect Game!"
            return Feedback(f"{header} Optimal tour found in {self.elapsed_str()}. "
                            f"Distance: {total}, score: {self.score}",
                            SUCCESS, card, completed=True)
        return Feedback(f"New Path Found! Distance: {total}, score: {self.score}", SUCCESS, card)

    def reset_path(self) -> Feedback:
        self.path = []
        return Feedback("Path reset", INFO)

    def hint(self) -> Feedback:
        self.used_hint = True
        if not self.path:
            return Feedback("Start with any city - try city A!", INFO)
        if len(self.path) == self.n_cities:
            return Feedback("Complete! Try a different starting city for a better solution.", INFO)

        last = self.path[-1]
        m = self.board.matrix
        options = sorted((m.weight(last, j), j) for j in m.neighbors(last) if j not in self.path)
        if not options:
            return Feedback("No direct paths available - try a different previous choice.", INFO)
        label = self.board.cities[options[0][1]].label
        return Feedback(f"Try visiting city {label} next - it's the closest connected city.", INFO)

    def reveal_optimal(self) -> Feedback:
        self.used_optimal = True
        self.path = list(self.optimal.best_tour)
        return Feedback(f"Optimal path: {self.board.format_path(self.path, closed=True)}, "
                        f"Distance: {self.optimal_cost}", SUCCESS)

    def elapsed(self) -> float:
        end = self.finished_at if self.finished_at is not None else self.clock()
        return end - self.started_at

    def elapsed_str(self) -> str:
        return format_elapsed(self.elapsed())

    def status(self) -> dict:
        return {
            "time": self.elapsed_str(),
            "score": self.score,
            "paths_found": self.correct_paths,
            "high_score": self.high_score,
            "best_cost": self.best_cost,
            "completed": self.completed,
        }

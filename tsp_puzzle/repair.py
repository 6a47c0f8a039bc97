from __future__ import annotations
import logging
import random
from typing import Set, Optional, List

from .tsp import Board, DistanceMatrix
from .search_base import GameConfig

logger = logging.getLogger(__name__)


def reachable_from(matrix: DistanceMatrix, start: int = 0, seen: Optional[Set[int]] = None) -> Set[int]:
    """Depth-first reachability over finite edges. Extends ``seen`` in place when given."""
    seen = set() if seen is None else seen
    seen.add(start)
    for j in matrix.neighbors(start):
        if j not in seen:
            reachable_from(matrix, j, seen)
    return seen


def connect_components(board: Board) -> List[int]:
    """Join every city unreachable from city 0 straight to city 0.

    The traversal continues from each newly joined city, so whole components
    are absorbed through a single new edge. Returns the cities that got one.
    """
    m = board.matrix
    seen = reachable_from(m, 0)
    joined = []
    for i in range(board.n_cities()):
        if i not in seen:
            m.set_edge(0, i, board.true_weight(0, i))
            joined.append(i)
            reachable_from(m, i, seen)
    return joined


def canonical_cycle(n: int) -> List[int]:
    return list(range(n))


def insert_canonical_cycle(board: Board) -> List[tuple]:
    """Force the edges of 0, 1, ..., N-1, 0 so a Hamiltonian cycle always exists."""
    n = board.n_cities()
    m = board.matrix
    cycle = canonical_cycle(n)
    added = []
    for k in range(n):
        a, b = cycle[k], cycle[(k + 1) % n]
        if a != b and not m.has_edge(a, b):
            m.set_edge(a, b, board.true_weight(a, b))
            added.append((a, b))
    return added


def repair(board: Board) -> Board:
    joined = connect_components(board)
    added = insert_canonical_cycle(board)
    logger.debug("repair %s: joined %s to city 0, added cycle edges %s", board.name, joined, added)
    return board


def make_board(cfg: GameConfig, rng: Optional[random.Random] = None) -> Board:
    """Generate and repair a board as a round would."""
    board = Board.random_sparse(cfg.n_cities, width=cfg.width, height=cfg.height,
                                rng=rng, seed=cfg.seed, edge_probability=cfg.edge_probability,
                                margin=cfg.margin, name=f"board{cfg.n_cities}")
    return repair(board)

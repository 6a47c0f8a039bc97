from __future__ import annotations
import math
import random
from dataclasses import dataclass
from typing import List, Tuple, Optional, Sequence, Iterator

import pandas as pd

NO_EDGE_SYMBOL = "∞"


def distance(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    (x1, y1), (x2, y2) = a, b
    return math.hypot(x1 - x2, y1 - y2)


def round_weight(d: float) -> int:
    """Round half up, so 12.5 -> 13 (not banker's rounding)."""
    return int(math.floor(d + 0.5))


@dataclass(frozen=True)
class City:
    index: int
    label: str
    x: float
    y: float

    @property
    def xy(self) -> Tuple[float, float]:
        return (self.x, self.y)


class DistanceMatrix:
    """N x N edge weights; ``None`` marks a missing edge, the diagonal is 0."""

    def __init__(self, n: int):
        self.n = n
        self._w: List[List[Optional[int]]] = [[None] * n for _ in range(n)]
        for i in range(n):
            self._w[i][i] = 0

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Optional[int]]]) -> "DistanceMatrix":
        """Build from explicit rows. Rows are taken as-is, asymmetry included."""
        n = len(rows)
        m = cls(n)
        for i, row in enumerate(rows):
            if len(row) != n:
                raise ValueError(f"row {i} has {len(row)} entries, expected {n}")
            for j, w in enumerate(row):
                if i != j:
                    m._w[i][j] = w
        return m

    def weight(self, i: int, j: int) -> Optional[int]:
        return self._w[i][j]

    def has_edge(self, i: int, j: int) -> bool:
        return self._w[i][j] is not None

    def set_edge(self, i: int, j: int, w: int):
        if i == j:
            raise ValueError("self-loops are not edges")
        self._w[i][j] = self._w[j][i] = w

    def neighbors(self, i: int) -> Iterator[int]:
        """Cities joined to ``i`` by a finite edge, ascending."""
        for j in range(self.n):
            if j != i and self._w[i][j] is not None:
                yield j

    def rows(self) -> List[List[Optional[int]]]:
        return [list(r) for r in self._w]

    def is_symmetric(self) -> bool:
        return all(self._w[i][j] == self._w[j][i]
                   for i in range(self.n) for j in range(i + 1, self.n))

    def path_cost(self, path: Sequence[int], closed: bool = True) -> Optional[int]:
        """Sum of consecutive weights (plus the closing edge when ``closed``).

        Returns None if any edge on the way is missing.
        """
        total = 0
        legs = len(path) if closed and len(path) > 1 else len(path) - 1
        for k in range(max(0, legs)):
            w = self._w[path[k]][path[(k + 1) % len(path)]]
            if w is None:
                return None
            total += w
        return total

    def __eq__(self, other):
        return isinstance(other, DistanceMatrix) and self._w == other._w

    def __repr__(self):
        return f"DistanceMatrix({self._w!r})"


@dataclass
class Board:
    cities: List[City]
    matrix: DistanceMatrix
    name: str = "tsp_board"

    @staticmethod
    def random_sparse(n: int, width: float = 800.0, height: float = 600.0,
                      rng: Optional[random.Random] = None, seed: Optional[int] = None,
                      edge_probability: float = 0.7, margin: float = 50.0,
                      name: str = "random_board") -> "Board":
        """Sample cities inside the inset canvas and keep each pair as an edge with ``edge_probability``.

        The result is not yet guaranteed to be connected; see ``repair``.
        """
        if width <= 2 * margin or height <= 2 * margin:
            raise ValueError(f"canvas {width}x{height} leaves no room inside a {margin} margin")
        rng = rng if rng is not None else random.Random(seed)
        cities = []
        for i in range(n):
            x = rng.random() * (width - 2 * margin) + margin
            y = rng.random() * (height - 2 * margin) + margin
            cities.append(City(index=i, label=city_label(i), x=x, y=y))

        matrix = DistanceMatrix(n)
        for i in range(n):
            for j in range(i + 1, n):
                if rng.random() < edge_probability:
                    matrix.set_edge(i, j, round_weight(distance(cities[i].xy, cities[j].xy)))
        return Board(cities=cities, matrix=matrix, name=name)

    def n_cities(self) -> int:
        return len(self.cities)

    def true_weight(self, i: int, j: int) -> int:
        """Rounded Euclidean distance, whether or not the edge currently exists."""
        return round_weight(distance(self.cities[i].xy, self.cities[j].xy))

    def labels(self) -> List[str]:
        return [c.label for c in self.cities]

    def format_path(self, path: Sequence[int], closed: bool = False) -> str:
        labels = [self.cities[i].label for i in path]
        if closed and path:
            labels.append(self.cities[path[0]].label)
        return " → ".join(labels)

    def matrix_frame(self) -> pd.DataFrame:
        labels = self.labels()
        table = [[NO_EDGE_SYMBOL if w is None else w for w in row] for row in self.matrix.rows()]
        return pd.DataFrame(table, index=labels, columns=labels)


def city_label(i: int) -> str:
    return chr(ord("A") + i)

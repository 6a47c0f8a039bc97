import random

import pytest

from tsp_puzzle.tsp import Board, City, DistanceMatrix, distance, round_weight, city_label, NO_EDGE_SYMBOL


def test_distance_is_euclidean():
    assert distance((0, 0), (3, 4)) == 5.0
    assert distance((1.5, 2.0), (1.5, 2.0)) == 0.0


def test_round_weight_rounds_half_up():
    assert round_weight(12.5) == 13
    assert round_weight(13.5) == 14
    assert round_weight(12.49) == 12
    assert round_weight(0.0) == 0


def test_labels_are_sequential_letters():
    assert [city_label(i) for i in range(4)] == ["A", "B", "C", "D"]


@pytest.mark.parametrize("seed", range(10))
def test_random_board_respects_margin_and_symmetry(seed):
    board = Board.random_sparse(8, width=400, height=300, seed=seed)
    assert board.labels() == list("ABCDEFGH")
    for c in board.cities:
        assert 50 <= c.x <= 350
        assert 50 <= c.y <= 250
    m = board.matrix
    assert m.is_symmetric()
    for i in range(8):
        assert m.weight(i, i) == 0
        for j in range(8):
            if i != j and m.has_edge(i, j):
                assert m.weight(i, j) == board.true_weight(i, j)


def test_edge_probability_extremes():
    empty = Board.random_sparse(5, seed=1, edge_probability=0.0)
    full = Board.random_sparse(5, seed=1, edge_probability=1.0)
    assert all(list(empty.matrix.neighbors(i)) == [] for i in range(5))
    assert all(len(list(full.matrix.neighbors(i))) == 4 for i in range(5))


def test_same_seed_same_board():
    a = Board.random_sparse(6, seed=42)
    b = Board.random_sparse(6, rng=random.Random(42))
    assert a.cities == b.cities
    assert a.matrix == b.matrix


def test_canvas_smaller_than_margin_is_rejected():
    with pytest.raises(ValueError):
        Board.random_sparse(4, width=90, height=600)


def test_path_cost_open_and_closed():
    m = DistanceMatrix.from_rows([
        [0, 10, 14, 10],
        [10, 0, 10, None],
        [14, 10, 0, 10],
        [10, None, 10, 0],
    ])
    assert m.path_cost([0, 1, 2, 3]) == 40
    assert m.path_cost([0, 1, 2], closed=False) == 20
    assert m.path_cost([0, 1, 3, 2]) is None
    assert m.path_cost([]) == 0
    assert list(m.neighbors(1)) == [0, 2]


def test_from_rows_checks_shape_and_keeps_asymmetry():
    with pytest.raises(ValueError):
        DistanceMatrix.from_rows([[0, 1], [1]])
    m = DistanceMatrix.from_rows([[0, 1], [5, 0]])
    assert m.weight(0, 1) == 1
    assert m.weight(1, 0) == 5
    assert not m.is_symmetric()


def test_set_edge_is_symmetric_and_refuses_loops():
    m = DistanceMatrix(3)
    m.set_edge(0, 2, 7)
    assert m.weight(2, 0) == 7
    with pytest.raises(ValueError):
        m.set_edge(1, 1, 3)


def test_matrix_frame_marks_missing_edges():
    cities = [City(0, "A", 0, 0), City(1, "B", 3, 4), City(2, "C", 6, 8)]
    m = DistanceMatrix(3)
    m.set_edge(0, 1, 5)
    board = Board(cities, m)
    df = board.matrix_frame()
    assert list(df.columns) == ["A", "B", "C"]
    assert df.loc["A", "B"] == 5
    assert df.loc["A", "C"] == NO_EDGE_SYMBOL
    assert board.format_path([0, 1], closed=True) == "A → B → A"

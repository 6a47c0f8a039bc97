import pytest

from tsp_puzzle.tsp import Board, City, DistanceMatrix
from tsp_puzzle.repair import reachable_from, connect_components, insert_canonical_cycle, repair


def line_board(n):
    cities = [City(i, chr(65 + i), 100.0 * i, 0.0) for i in range(n)]
    return Board(cities, DistanceMatrix(n))


def test_empty_triangle_becomes_complete():
    board = Board.random_sparse(3, seed=5, edge_probability=0.0)
    repair(board)
    m = board.matrix
    for i, j in [(0, 1), (1, 2), (0, 2)]:
        assert m.has_edge(i, j)
        assert m.weight(i, j) == board.true_weight(i, j)


def test_components_are_absorbed_through_one_edge():
    board = line_board(4)
    board.matrix.set_edge(0, 1, 100)
    board.matrix.set_edge(2, 3, 100)
    joined = connect_components(board)
    assert joined == [2]
    assert board.matrix.weight(0, 2) == 200
    assert not board.matrix.has_edge(0, 3)
    assert reachable_from(board.matrix, 0) == {0, 1, 2, 3}


def test_canonical_cycle_only_adds_missing_edges():
    board = line_board(4)
    board.matrix.set_edge(0, 1, 1)
    added = insert_canonical_cycle(board)
    assert added == [(1, 2), (2, 3), (3, 0)]
    assert board.matrix.weight(0, 1) == 1
    assert board.matrix.weight(3, 0) == 300


def test_two_cities_get_their_single_edge():
    board = line_board(2)
    repair(board)
    assert board.matrix.weight(0, 1) == 100


@pytest.mark.parametrize("n", range(2, 11))
@pytest.mark.parametrize("seed", range(20))
def test_repaired_boards_are_connected_and_hamiltonian(n, seed):
    board = repair(Board.random_sparse(n, seed=seed, edge_probability=0.3))
    m = board.matrix
    for start in range(n):
        assert reachable_from(m, start) == set(range(n))
    assert m.path_cost(list(range(n))) is not None
    assert m.is_symmetric()


def test_repair_keeps_existing_edges():
    board = Board.random_sparse(7, seed=11)
    before = board.matrix.rows()
    repair(board)
    after = board.matrix.rows()
    for i in range(7):
        for j in range(7):
            if before[i][j] is not None:
                assert after[i][j] == before[i][j]

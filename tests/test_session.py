import pytest

from tsp_puzzle.search_base import GameConfig
from tsp_puzzle.session import Session, HELP
from tsp_puzzle.game import INFO, ERROR, SUCCESS


def new_session(n=5, seed=3, high_score=0):
    session = Session(GameConfig(n_cities=n, seed=seed), high_score=high_score)
    assert session.execute("new").level == INFO
    return session


def test_commands_need_a_round():
    session = Session(GameConfig(seed=1))
    fb = session.execute("hint")
    assert fb.level == ERROR
    assert session.execute("").message == HELP
    assert session.path_text() == "(empty)"


def test_labels_build_the_path():
    session = new_session()
    fb = session.execute("a")
    assert fb.level == INFO
    assert session.round.path == [0]
    assert session.path_text() == "A"
    fb = session.execute("A")
    assert fb.level == ERROR
    assert fb.message == "City already in path"
    assert session.execute("Z").level == ERROR
    assert session.round.path == [0]


def test_bad_new_commands_keep_the_round():
    session = new_session()
    current = session.round
    fb = session.execute("new 11")
    assert fb.level == ERROR
    assert "between 2 and 10" in fb.message
    assert session.execute("new x").level == ERROR
    assert session.round is current
    assert session.execute("new 3").level == INFO
    assert session.round.n_cities == 3


def test_solve_then_replay_optimum():
    session = new_session(n=6, high_score=0)
    fb = session.execute("solve")
    assert fb.level == SUCCESS
    tour = list(session.round.optimal.best_tour)
    assert session.round.path == tour
    session.execute("reset")
    assert session.round.path == []
    labels = " ".join(session.round.board.cities[i].label for i in tour)
    fb = session.execute(labels)
    assert fb.level == SUCCESS
    assert fb.completed
    assert fb.card.bonus_points == 0
    assert session.high_score == 10


def test_matrix_and_status():
    session = new_session(n=4)
    text = session.execute("matrix").message
    for label in "ABCD":
        assert label in text
    status = session.execute("status").message
    assert "Score: 0" in status
    assert "Paths Found: 0" in status
    assert session.execute("help").message == HELP


def test_search_budget_is_reported_and_round_kept():
    session = new_session(n=4)
    current = session.round
    session.cfg.max_expansions = 3
    fb = session.execute("new 9")
    assert fb.level == ERROR
    assert "no exact solution found in budget" in fb.message
    assert session.round is current


def test_budget_on_first_round_leaves_no_round():
    session = Session(GameConfig(n_cities=9, seed=1, max_expansions=3))
    fb = session.execute("new")
    assert fb.level == ERROR
    assert session.round is None
    assert session.execute("hint").level == ERROR


def test_configuration_errors_are_not_swallowed():
    session = Session(GameConfig(n_cities=4, width=90.0, seed=1))
    with pytest.raises(ValueError, match="margin"):
        session.execute("new")
    assert session.execute("new four").message.startswith("Could not understand")

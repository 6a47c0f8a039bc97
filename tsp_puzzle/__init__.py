from .tsp import City, DistanceMatrix, Board, distance, round_weight
from .repair import repair, make_board
from .search_base import GameConfig, SolveResult, TourSearch
from .branch_bound import BranchAndBound, solve
from .game import GameRound, Feedback, ScoreCard, score_discovery, format_elapsed
from .session import Session
from .experiments import run_repeated_trials, run_size_sweep

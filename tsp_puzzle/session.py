from __future__ import annotations
import logging
import random
import time
from typing import Callable, Optional

from .errors import GameError, UnknownCity, SearchBudgetExceeded
from .game import GameRound, Feedback, INFO, ERROR
from .search_base import GameConfig

logger = logging.getLogger(__name__)

HELP = ("Commands: <city label>... (e.g. 'A' or 'A B C'), new [N], hint, solve, "
        "reset, matrix, status, help")


class Session:
    """Text front end hosting one round at a time.

    Rounds are independent objects; a session only swaps its current one.
    """

    def __init__(self, cfg: Optional[GameConfig] = None, high_score: int = 0,
                 clock: Callable[[], float] = time.monotonic, solver: str = "bnb"):
        self.cfg = cfg or GameConfig()
        self.rng = random.Random(self.cfg.seed)
        self.high_score = high_score
        self.clock = clock
        self.solver = solver
        self.round: Optional[GameRound] = None

    def new_round(self, n_cities: Optional[int] = None) -> Feedback:
        self.round = GameRound.start(n_cities, self.cfg, rng=self.rng, high_score=self.high_score,
                                     clock=self.clock, solver=self.solver)
        return Feedback("Enter city labels to build your path. Only directly connected "
                        "cities can be visited consecutively.", INFO)

    def _city_index(self, token: str) -> int:
        labels = self.round.board.labels()
        if token.upper() in labels:
            return labels.index(token.upper())
        raise UnknownCity(f"No city labelled '{token}'")

    def _dispatch(self, command: str) -> Feedback:
        words = command.split()
        head = words[0].lower()
        if head == "help":
            return Feedback(HELP, INFO)
        if head == "new":
            try:
                n = int(words[1]) if len(words) > 1 else None
            except ValueError:
                return Feedback(f"Could not understand '{command}'. {HELP}", ERROR)
            return self.new_round(n)
        if self.round is None:
            return Feedback("No round in progress - type 'new' to start one", ERROR)
        if head == "hint":
            return self.round.hint()
        if head == "solve":
            return self.round.reveal_optimal()
        if head == "reset":
            return self.round.reset_path()
        if head == "matrix":
            return Feedback(self.round.board.matrix_frame().to_string(), INFO)
        if head == "status":
            s = self.round.status()
            return Feedback(f"Time: {s['time']}  Score: {s['score']}  Paths Found: {s['paths_found']}"
                            f"  High Score: {s['high_score']}", INFO)

        fb = None
        for token in words:
            fb = self.round.append_city(self._city_index(token))
        return fb

    def execute(self, command: str) -> Feedback:
        """Run one command line. Rejected moves come back as error feedback."""
        command = command.strip()
        if not command:
            return Feedback(HELP, INFO)
        try:
            fb = self._dispatch(command)
        except GameError as e:
            logger.debug("rejected %r: %s", command, e)
            return Feedback(e.text, ERROR)
        except SearchBudgetExceeded as e:
            logger.warning("setup abandoned: %s", e)
            return Feedback(str(e), ERROR)
        if self.round is not None:
            self.high_score = max(self.high_score, self.round.high_score)
        return fb

    def path_text(self) -> str:
        if self.round is None or not self.round.path:
            return "(empty)"
        return self.round.board.format_path(self.round.path)

from __future__ import annotations


class GameError(ValueError):
    """A rejected player action. Recoverable; nothing was mutated."""
    message = "Invalid move"

    def __init__(self, message=None):
        super().__init__(message or self.message)

    @property
    def text(self) -> str:
        return str(self)


class InvalidCityCount(GameError):

    def __init__(self, n=None, lo: int = 2, hi: int = 10):
        self.n = n
        super().__init__(f"Please choose between {lo} and {hi} cities")


class DuplicateCityInPath(GameError):
    message = "City already in path"


class NoDirectEdge(GameError):
    message = "No direct path to this city exists"


class CannotCloseCycle(GameError):
    message = "Cannot complete the cycle - no path back to start"


class UnknownCity(GameError):
    message = "No such city"


class NoFeasibleSolution(RuntimeError):
    """The search found no Hamiltonian cycle. Repaired boards always have one."""


class SearchBudgetExceeded(RuntimeError):
    """No exact solution found within the configured expansion budget."""

    def __init__(self, budget: int):
        self.budget = budget
        super().__init__(f"no exact solution found in budget ({budget} expansions)")

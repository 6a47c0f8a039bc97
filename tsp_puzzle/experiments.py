from __future__ import annotations
import os, statistics, csv
from typing import List, Optional, Sequence, Tuple
from dataclasses import replace

from .repair import make_board
from .branch_bound import solve
from .search_base import GameConfig


def run_repeated_trials(cfg: GameConfig, solver: str, n_runs: int = 10, base_seed: int = 42):
    """Solve ``n_runs`` fresh boards (seeds ``base_seed + r``) and summarise the effort."""
    lengths = []
    times = []
    expansions = []
    details: List[Tuple[int, float, int, List[int]]] = []
    for r in range(n_runs):
        cfg_r = replace(cfg, seed=base_seed + r)
        board = make_board(cfg_r)
        res = solve(board, solver, cfg_r)
        lengths.append(res.best_length)
        times.append(res.elapsed_sec)
        expansions.append(res.expansions)
        details.append((res.best_length, res.elapsed_sec, res.expansions, res.best_tour))
    stats = {
        "mean_length": statistics.mean(lengths),
        "min_length": min(lengths),
        "max_length": max(lengths),
        "mean_expansions": statistics.mean(expansions),
        "max_expansions": max(expansions),
        "mean_time": statistics.mean(times),
        "std_time": statistics.stdev(times) if len(times) > 1 else 0.0,
        "solver": solver,
        "n_runs": n_runs,
    }
    return stats, details


def run_size_sweep(sizes: Sequence[int], solvers: Sequence[str] = ("exhaustive", "bnb"),
                   base_cfg: Optional[GameConfig] = None, n_runs: int = 5, base_seed: int = 100,
                   csv_path: Optional[str] = None):
    base_cfg = base_cfg or GameConfig()
    rows = []
    for n in sizes:
        for solver in solvers:
            cfg = replace(base_cfg, n_cities=n)
            stats, _ = run_repeated_trials(cfg, solver, n_runs=n_runs, base_seed=base_seed)
            row = {"n_cities": n, "edge_probability": cfg.edge_probability, **stats}
            rows.append(row)
            if csv_path is not None:
                write_header = not os.path.exists(csv_path)
                with open(csv_path, "a", newline="") as f:
                    w = csv.DictWriter(f, fieldnames=row.keys())
                    if write_header:
                        w.writeheader()
                    w.writerow(row)
    return rows

# run_experiments.py
import os, json, argparse
import numpy as np
import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from tsp_puzzle import GameConfig
from tsp_puzzle.experiments import run_repeated_trials, run_size_sweep
from tsp_puzzle.logutil import configure_logging

OUTDIR = os.path.dirname(os.path.abspath(__file__))
SOLVERS = ["exhaustive", "bnb"]


def ensure(path: str) -> str:
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    return path


def plot_expansions(df, save_path):
    plt.figure()
    for solver, grp in df.groupby("solver"):
        grp = grp.sort_values("n_cities")
        plt.semilogy(grp["n_cities"], grp["mean_expansions"], "o-", label=solver)
    ns = np.arange(df["n_cities"].min(), df["n_cities"].max() + 1)
    worst = [float(np.prod(np.arange(1, n))) for n in ns]  # (n-1)!
    plt.semilogy(ns, worst, "k--", lw=1, label="(n-1)!")
    plt.xlabel("Cities")
    plt.ylabel("Mean search expansions")
    plt.title("Exact search effort")
    plt.legend()
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--min-n", type=int, default=3)
    ap.add_argument("--max-n", type=int, default=9)
    ap.add_argument("--runs", type=int, default=5)
    ap.add_argument("--p", type=float, default=0.7, help="edge probability")
    ap.add_argument("--n", type=int, default=8, help="size for the repeated-trials summary")
    ap.add_argument("-v", "--verbose", action="count", default=0)
    args = ap.parse_args()
    configure_logging(args.verbose)

    base = GameConfig(n_cities=args.n, edge_probability=args.p)

    # repeated trials at one size
    records = []
    for name in SOLVERS:
        stats, _ = run_repeated_trials(base, name, n_runs=args.runs)
        print(name, json.dumps(stats, indent=2))
        records.append({"n_cities": args.n, **stats})
    df_summary = pd.DataFrame.from_records(records)
    summary_csv = os.path.join(OUTDIR, "results_summary.csv")
    df_summary.to_csv(summary_csv, index=False)

    # size sweep
    sweep_csv = os.path.join(OUTDIR, "size_sweep.csv")
    rows = run_size_sweep(range(args.min_n, args.max_n + 1), SOLVERS, base_cfg=base,
                          n_runs=args.runs, csv_path=sweep_csv)
    print("Sizes evaluated:", len(rows))
    plot_expansions(pd.DataFrame.from_records(rows), os.path.join(OUTDIR, "expansions_by_size.png"))


if __name__ == "__main__":
    main()

import os, argparse
import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import imageio

from tsp_puzzle import GameConfig, make_board, solve
from tsp_puzzle.logutil import configure_logging


def tour_to_xy(cities, tour, closed=True):
    xs = [cities[i].x for i in tour]
    ys = [cities[i].y for i in tour]
    if closed and tour:
        xs.append(cities[tour[0]].x)
        ys.append(cities[tour[0]].y)
    return xs, ys


def draw_board(ax, board, path=None, title="", closed=True):
    """Edges in grey with their weights, ``path`` highlighted, cities labelled."""
    cities = board.cities
    n = board.n_cities()
    for i in range(n):
        for j in range(i + 1, n):
            w = board.matrix.weight(i, j)
            if w is None:
                continue
            ax.plot([cities[i].x, cities[j].x], [cities[i].y, cities[j].y], "-", color="#4a5568", lw=1)
            ax.text((cities[i].x + cities[j].x) / 2, (cities[i].y + cities[j].y) / 2, str(w),
                    fontsize=7, color="#4a5568")
    if path:
        xs, ys = tour_to_xy(cities, path, closed=closed and len(path) == n)
        ax.plot(xs, ys, "-", color="#20c997", lw=3)
    on_path = set(path or [])
    for c in cities:
        ax.plot(c.x, c.y, "o", ms=16, color="#20c997" if c.index in on_path else "#1e40af", mec="k")
        ax.text(c.x, c.y, c.label, color="w", ha="center", va="center", fontsize=9)
    ax.set_title(title, pad=10)
    ax.set_aspect("equal", adjustable="box")
    ax.invert_yaxis()  # canvas coordinates grow downwards
    ax.set_xticks([])
    ax.set_yticks([])


def figure_to_frame(fig):
    fig.canvas.draw()
    return np.asarray(fig.canvas.buffer_rgba())[..., :3].copy()


def save_board_png(board, path, out_png, title=""):
    fig = plt.figure(figsize=(6, 5))
    draw_board(plt.gca(), board, path, title)
    fig.tight_layout()
    d = os.path.dirname(out_png)
    if d:
        os.makedirs(d, exist_ok=True)
    fig.savefig(out_png, dpi=150, bbox_inches="tight")
    plt.close(fig)


def make_search_gif(board, result, out_gif, duration=0.8):
    """One frame per improvement the search made, ending on the optimum."""
    d = os.path.dirname(out_gif)
    if d:
        os.makedirs(d, exist_ok=True)
    steps = len(result.history_best_tours)
    with imageio.get_writer(out_gif, mode="I", duration=duration) as writer:
        for k, (tour, L) in enumerate(zip(result.history_best_tours, result.history_best_lengths)):
            fig = plt.figure(figsize=(6, 5))
            draw_board(plt.gca(), board, tour, f"{result.solver} improvement {k+1}/{steps}\nlength = {L}")
            fig.tight_layout()
            writer.append_data(figure_to_frame(fig))
            plt.close(fig)


def main():
    p = argparse.ArgumentParser()
    p.add_argument("--cities", type=int, default=8)
    p.add_argument("--width", type=float, default=800.0)
    p.add_argument("--height", type=float, default=600.0)
    p.add_argument("--seed", type=int, default=321)
    p.add_argument("--solver", choices=["exhaustive", "bnb"], default="bnb")
    p.add_argument("--outdir", default="viz")
    p.add_argument("--gif", action="store_true", help="also animate the search improvements")
    p.add_argument("-v", "--verbose", action="count", default=0)
    args = p.parse_args()
    configure_logging(args.verbose)

    cfg = GameConfig(n_cities=args.cities, width=args.width, height=args.height, seed=args.seed)
    board = make_board(cfg)
    res = solve(board, args.solver, cfg)
    print(board.matrix_frame().to_string())
    print(f"Optimal: {board.format_path(res.best_tour, closed=True)}  length={res.best_length}"
          f"  expansions={res.expansions}")

    png_path = os.path.join(args.outdir, f"board_{args.cities}_seed{args.seed}.png")
    save_board_png(board, res.best_tour, png_path, f"optimal length = {res.best_length}")
    print("Saved:", png_path)
    if args.gif:
        gif_path = os.path.join(args.outdir, f"{args.solver}_search_{args.cities}_seed{args.seed}.gif")
        make_search_gif(board, res, gif_path)
        print("Saved:", gif_path)


if __name__ == "__main__":
    main()

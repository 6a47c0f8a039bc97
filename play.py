# play.py
# Terminal version of the puzzle: build a closed tour city by city and try to
# match the exact optimum.
#
# Usage:
#   python play.py --cities 6
#   python play.py --cities 8 --seed 7 -v
import os, json, argparse

from tsp_puzzle import GameConfig, Session
from tsp_puzzle.logutil import configure_logging

LEVEL_PREFIX = {"info": "  ", "error": "! ", "success": "* "}


def load_high_score(path: str) -> int:
    if not os.path.exists(path):
        return 0
    with open(path) as f:
        return int(json.load(f).get("high_score", 0))


def save_high_score(path: str, score: int):
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    with open(path, "w") as f:
        json.dump({"high_score": score}, f, indent=2)


def show(fb):
    prefix = LEVEL_PREFIX.get(fb.level, "  ")
    for line in fb.message.splitlines():
        print(prefix + line)
    if fb.card is not None:
        c = fb.card
        print(f"  distance={c.distance} path_points={c.path_points} "
              f"bonus_points={c.bonus_points} total={c.total_score}")


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--cities", type=int, default=6, help="number of cities (2-10)")
    ap.add_argument("--width", type=float, default=800.0)
    ap.add_argument("--height", type=float, default=600.0)
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--solver", choices=["exhaustive", "bnb"], default="bnb")
    ap.add_argument("--high-score-file", default=os.path.join(os.path.expanduser("~"), ".tsp_puzzle.json"))
    ap.add_argument("-v", "--verbose", action="count", default=0)
    args = ap.parse_args()
    configure_logging(args.verbose)

    cfg = GameConfig(n_cities=args.cities, width=args.width, height=args.height, seed=args.seed)
    session = Session(cfg, high_score=load_high_score(args.high_score_file), solver=args.solver)
    show(session.execute("new"))
    if session.round is not None:
        print(session.round.board.matrix_frame().to_string())

    try:
        while True:
            line = input(f"[{session.path_text()}] > ").strip()
            if line.lower() in ("quit", "exit", "q"):
                break
            before = session.high_score
            show(session.execute(line))
            if session.high_score > before:
                save_high_score(args.high_score_file, session.high_score)
    except (EOFError, KeyboardInterrupt):
        print()
    print("High score:", session.high_score)


if __name__ == "__main__":
    main()

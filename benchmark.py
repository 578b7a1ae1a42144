import argparse
import os
from datetime import datetime

from segtree.benchmark import Benchmark
from segtree.reducer import REDUCERS


def run(args):
    time = datetime.now().strftime("%Y%m%d-%H%M")
    log_dir = os.path.join("logs", args.reducer, f"n{args.num_elements}-seed{args.seed}-{time}")

    benchmark = Benchmark(
        reducer=args.reducer,
        num_elements=args.num_elements,
        num_queries=args.num_queries,
        log_dir=log_dir,
        update_ratio=args.update_ratio,
        seed=args.seed,
    )
    benchmark.run()


if __name__ == "__main__":
    p = argparse.ArgumentParser()
    p.add_argument("--reducer", type=str, default="sum", choices=sorted(REDUCERS))
    p.add_argument("--num_elements", type=int, default=10 ** 5)
    p.add_argument("--num_queries", type=int, nargs="+", default=[10, 1000, 50000])
    p.add_argument("--update_ratio", type=float, default=0.1)
    p.add_argument("--seed", type=int, default=0)
    args = p.parse_args()
    run(args)

import os
from datetime import timedelta
from functools import reduce
from time import perf_counter, time

import numpy as np
import pandas as pd
from tensorboardX import SummaryWriter

from segtree.reducer import CONCAT, GCD, make_reducer
from segtree.segment_tree import OutOfRangeError, SegmentTree


class LinearScan:
    """
    Plain list which reduces a range element by element.
    """

    def __init__(self, values, reducer):
        self._values = list(values)
        self._reducer = reducer

    def query(self, from_, to):
        if not 0 <= from_ <= to < len(self._values):
            raise OutOfRangeError(f"[{from_}, {to}] is out of range for {len(self._values)} elements.")
        return reduce(self._reducer.reduce, self._values[from_ : to + 1], self._reducer.identity())

    def update(self, idx, value):
        if not 0 <= idx < len(self._values):
            raise OutOfRangeError(f"idx={idx} is out of range for {len(self._values)} elements.")
        self._values[idx] = value

    def __len__(self):
        return len(self._values)


class Benchmark:
    """
    Compare a segment tree with a linear scan on random streams of queries and updates.
    """

    def __init__(
        self,
        reducer,
        num_elements,
        num_queries,
        log_dir,
        update_ratio=0.1,
        seed=0,
    ):
        assert num_elements > 0
        assert 0.0 <= update_ratio <= 1.0

        # Reducer.
        if isinstance(reducer, str):
            reducer = make_reducer(reducer)
        self.reducer = reducer

        # Set seed.
        np.random.seed(seed)
        self.values = self._sample_values(num_elements)

        # Log setting.
        self.log = {"num_queries": [], "segment_tree": [], "linear": [], "speedup": []}
        self.csv_path = os.path.join(log_dir, "log.csv")
        self.writer = SummaryWriter(log_dir=os.path.join(log_dir, "summary"))

        # Other parameters.
        self.num_elements = num_elements
        self.num_queries = list(num_queries)
        self.update_ratio = update_ratio

    def _sample_values(self, size):
        if self.reducer is GCD:
            return [int(v) for v in np.random.randint(0, 100, size=size)]
        if self.reducer is CONCAT:
            return [chr(ord("a") + int(v)) for v in np.random.randint(0, 26, size=size)]
        return [float(v) for v in np.random.rand(size)]

    def _sample_operations(self, num_queries):
        is_update = np.random.rand(num_queries) < self.update_ratio
        bounds = np.sort(np.random.randint(0, self.num_elements, size=(num_queries, 2)), axis=1)
        new_values = self._sample_values(num_queries)
        return [
            ("update", int(lo), new_values[k]) if is_update[k] else ("query", int(lo), int(hi))
            for k, (lo, hi) in enumerate(bounds)
        ]

    @staticmethod
    def _replay(container, operations):
        answers = []
        start = perf_counter()
        for op, a, b in operations:
            if op == "update":
                container.update(a, b)
            else:
                answers.append(container.query(a, b))
        return perf_counter() - start, answers

    def run(self):
        # Time to start benchmarking.
        self.start_time = time()

        for step, num_queries in enumerate(self.num_queries):
            operations = self._sample_operations(num_queries)
            tree_time, tree_answers = self._replay(SegmentTree(self.values, self.reducer), operations)
            linear_time, linear_answers = self._replay(LinearScan(self.values, self.reducer), operations)

            assert len(tree_answers) == len(linear_answers)
            for x, y in zip(tree_answers, linear_answers):
                if isinstance(x, float):
                    assert np.isclose(x, y), "Segment tree and linear scan disagree."
                else:
                    assert x == y, "Segment tree and linear scan disagree."

            self.evaluate(step, num_queries, tree_time, linear_time)

        self.writer.close()
        return self.log

    def evaluate(self, step, num_queries, tree_time, linear_time):
        speedup = linear_time / max(tree_time, 1e-9)

        # Log to TensorBoard.
        self.writer.add_scalar("time/segment_tree", tree_time, step)
        self.writer.add_scalar("time/linear", linear_time, step)
        self.writer.add_scalar("time/speedup", speedup, step)
        print(
            f"Num queries: {num_queries:<7}   "
            f"Tree: {tree_time:<8.4f}   "
            f"Linear: {linear_time:<8.4f}   "
            f"Speedup: {speedup:<6.1f}   "
            f"Time: {self.time}"
        )

        # Log to CSV.
        self.log["num_queries"].append(num_queries)
        self.log["segment_tree"].append(tree_time)
        self.log["linear"].append(linear_time)
        self.log["speedup"].append(speedup)
        pd.DataFrame(self.log).to_csv(self.csv_path, index=False)

    @property
    def time(self):
        return str(timedelta(seconds=int(time() - self.start_time)))

import os

import numpy as np
import pandas as pd
import pytest

from segtree.benchmark import Benchmark, LinearScan
from segtree.reducer import GCD, SUM
from segtree.segment_tree import OutOfRangeError


def test_linear_scan():
    scan = LinearScan([2, 3, 7, 1, 9, 0], SUM)
    assert len(scan) == 6
    assert scan.query(0, 5) == 22
    assert scan.query(2, 2) == 7

    scan.update(2, 100)
    assert scan.query(0, 5) == 115

    with pytest.raises(OutOfRangeError):
        scan.query(3, 2)
    with pytest.raises(OutOfRangeError):
        scan.update(6, 1)


@pytest.mark.parametrize("reducer", ["sum", "min", "max", "gcd", "concat"])
def test_benchmark(tmp_path, reducer):
    log_dir = os.path.join(str(tmp_path), reducer)
    benchmark = Benchmark(reducer, num_elements=37, num_queries=[1, 10, 100], log_dir=log_dir, update_ratio=0.3, seed=0)
    log = benchmark.run()

    assert log["num_queries"] == [1, 10, 100]
    assert all(t >= 0.0 for t in log["segment_tree"])
    assert all(t >= 0.0 for t in log["linear"])

    df = pd.read_csv(os.path.join(log_dir, "log.csv"))
    assert list(df.columns) == ["num_queries", "segment_tree", "linear", "speedup"]
    assert df["num_queries"].tolist() == [1, 10, 100]
    assert np.isclose(df["linear"].values, log["linear"]).all()


def test_benchmark_values(tmp_path):
    benchmark = Benchmark(GCD, num_elements=20, num_queries=[5], log_dir=str(tmp_path), seed=1)
    assert len(benchmark.values) == 20
    assert all(isinstance(v, int) and 0 <= v < 100 for v in benchmark.values)

    benchmark = Benchmark("sum", num_elements=20, num_queries=[5], log_dir=str(tmp_path), seed=1)
    assert all(isinstance(v, float) and 0.0 <= v < 1.0 for v in benchmark.values)
    benchmark.writer.close()


def test_sample_operations(tmp_path):
    benchmark = Benchmark(SUM, num_elements=10, num_queries=[50], log_dir=str(tmp_path), update_ratio=0.5, seed=0)
    operations = benchmark._sample_operations(50)
    benchmark.writer.close()

    assert len(operations) == 50
    for op, a, b in operations:
        assert op in ("query", "update")
        assert 0 <= a < 10
        if op == "query":
            assert a <= b < 10

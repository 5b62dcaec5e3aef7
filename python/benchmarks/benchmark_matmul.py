import argparse
import sys
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import numpy as np

# Ensure we can import sparselu from source tree
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from sparselu import coo_matmul, csr_csc_matmul  # noqa: E402
from sparselu.sparse import COO, CSC, CSR  # noqa: E402


# ---------- Timing helpers ----------


def time_op(fn: Callable[[], Any], warmup: int, repeat: int) -> List[float]:
    for _ in range(warmup):
        fn()
    times: List[float] = []
    for _ in range(repeat):
        t0 = time.perf_counter()
        fn()
        t1 = time.perf_counter()
        times.append(t1 - t0)
    return times


def summarize(name: str, times: List[float], nnz_out: int) -> Optional[Dict[str, Any]]:
    if not times:
        return None
    arr = np.array(times, dtype=np.float64)
    return {
        "name": name,
        "min_ms": float(arr.min() * 1e3),
        "median_ms": float(np.median(arr) * 1e3),
        "mean_ms": float(arr.mean() * 1e3),
        "nnz_out": int(nnz_out),
    }


# ---------- scipy reference ----------


def to_scipy(A: Any):
    try:
        import scipy.sparse as sp
    except ImportError:
        return None
    coo = A.tocoo()
    return sp.coo_matrix((coo.data, (coo.row, coo.col)), shape=coo.shape).tocsr()


def main():
    p = argparse.ArgumentParser(description="Sparse-sparse multiplication benchmarks")
    p.add_argument("--n", type=int, default=2000)
    p.add_argument("--density", type=float, default=0.001)
    p.add_argument("--warmup", type=int, default=1)
    p.add_argument("--repeat", type=int, default=3)
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--no_scipy", action="store_true")
    p.add_argument("--validate", action="store_true")
    p.add_argument(
        "--ops",
        type=str,
        default="random,coo,csr_csc",
        help="Comma-separated list of ops: random,coo,csr_csc",
    )
    args = p.parse_args()
    wanted = {s.strip() for s in args.ops.split(",") if s.strip()}

    rng = np.random.default_rng(args.seed)
    n, density = args.n, args.density
    results = []

    if "random" in wanted:
        for cls in (COO, CSR, CSC):
            times = time_op(lambda: cls.random(n, n, density, rng), args.warmup, args.repeat)
            stats = summarize(cls.__name__ + ":random", times, cls.random(n, n, density, rng).nnz)
            if stats:
                results.append(stats)

    A_coo = COO.random(n, n, density, rng)
    B_coo = COO.random(n, n, density, rng)
    reference = None
    if not args.no_scipy:
        A_sp, B_sp = to_scipy(A_coo), to_scipy(B_coo)
        if A_sp is not None:
            times = time_op(lambda: A_sp @ B_sp, args.warmup, args.repeat)
            reference = A_sp @ B_sp
            stats = summarize("scipy:csr@csr", times, reference.nnz)
            if stats:
                results.append(stats)

    if "coo" in wanted:
        out = coo_matmul(A_coo, B_coo)
        times = time_op(lambda: coo_matmul(A_coo, B_coo), args.warmup, args.repeat)
        stats = summarize("sparselu:coo@coo", times, out.nnz)
        if stats:
            results.append(stats)
        if args.validate and reference is not None:
            np.testing.assert_allclose(out.toarray(), reference.toarray(), rtol=1e-5, atol=1e-6)

    if "csr_csc" in wanted:
        A_csr, B_csc = A_coo.tocsr(), B_coo.tocsc()
        out = csr_csc_matmul(A_csr, B_csc)
        times = time_op(lambda: csr_csc_matmul(A_csr, B_csc), args.warmup, args.repeat)
        stats = summarize("sparselu:csr@csc", times, out.nnz)
        if stats:
            results.append(stats)
        if args.validate and reference is not None:
            np.testing.assert_allclose(out.toarray(), reference.toarray(), rtol=1e-5, atol=1e-6)

    # ---- print summary ----
    print(f"Matmul Benchmarks: n={n} density={density} nnz={A_coo.nnz}")
    for r in results:
        print(
            f"{r['name']:>20}: min {r['min_ms']:.3f} ms | median {r['median_ms']:.3f} ms | mean {r['mean_ms']:.3f} ms | nnz {r['nnz_out']}"
        )


if __name__ == "__main__":
    main()

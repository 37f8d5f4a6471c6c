"""Per-vertex numeric kernels over a window [i, i+n) of the vertex range.

All of them write into caller-owned arrays and keep no state between calls.
"""
import numpy as np
import scipy.sparse as sp

from .models import ToleranceNorm


def pagerank_factor(f: np.ndarray, vdata: np.ndarray, i: int, n: int, p: float) -> None:
    """f[v] = p / outDegree(v), and 0 for dangling vertices."""
    d = vdata[i:i+n]
    out = f[i:i+n]
    out[:] = 0
    np.divide(p, d, out=out, where=d > 0, casting="unsafe")


def multiply_values(c: np.ndarray, a: np.ndarray, f: np.ndarray, i: int, n: int) -> None:
    np.multiply(a[i:i+n], f[i:i+n], out=c[i:i+n])


def pull_operator(vfrom: np.ndarray, efrom: np.ndarray, i: int, n: int, N: int, dtype=np.float64) -> sp.csr_matrix:
    """0/1 in-edge matrix of shape (n, N) for window [i, i+n).

    Row k holds the in-neighbors of vertex i+k. Built once per call, so the
    per-iteration pull needs no per-edge temporaries.
    """
    lo, hi = vfrom[i], vfrom[i+n]
    data = np.ones(hi - lo, dtype=dtype)
    return sp.csr_matrix((data, efrom[lo:hi], vfrom[i:i+n+1] - lo), shape=(n, N))


def pagerank_calculate(a: np.ndarray, c: np.ndarray, A: sp.csr_matrix, i: int, n: int, c0: float) -> None:
    """Pull step: a[v] = c0 + sum(c[u] for u in in-edges of v), A from pull_operator()."""
    assert A.shape == (n, len(c))
    np.add(A @ c, c0, out=a[i:i+n], casting="unsafe")


def pagerank_error(x: np.ndarray, y: np.ndarray, i: int, n: int, EF: int) -> float:
    d = np.subtract(x[i:i+n], y[i:i+n], dtype=float)
    np.abs(d, out=d)
    if EF == ToleranceNorm.L1:
        return float(d.sum())
    if EF == ToleranceNorm.L2:
        return float(np.sqrt(np.dot(d, d)))
    if EF == ToleranceNorm.LI:
        return float(d.max()) if n else 0.0
    raise ValueError(f"pagerank_error: unknown tolerance norm {EF!r}.")

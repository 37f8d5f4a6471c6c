"""Sets up buffers for a PageRank loop, times it, and packs the result."""
import logging
import time
from typing import Callable, Optional, Tuple
import numpy as np

from .buffers import RankBuffers
from .graph import TransposeGraph
from .kernels import multiply_values, pagerank_factor, pull_operator
from .models import PagerankOptions, PagerankResult

logger = logging.getLogger(__name__)

PagerankLoop = Callable[..., int]


def csr_in_order(xt: TransposeGraph, ks: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """In-edge CSR of xt with vertices relabelled so that ks[j] becomes j.

    Returns (vfrom, efrom, vdata): offsets, in-neighbor positions and out-degrees,
    all in ks order.
    """
    A = xt.to_csr()[ks][:, ks].tocsr()
    A.sort_indices()
    vfrom = A.indptr.astype(np.int64)
    efrom = A.indices.astype(np.int64)
    vdata = np.asarray(xt.degree)[ks]
    return vfrom, efrom, vdata


def measure_duration_marked(fn: Callable, repeat: int = 1) -> float:
    """Average time (ms) of the sections fn wraps in mark(), over `repeat` runs."""
    total = 0.0

    def mark(section: Callable):
        nonlocal total
        t0 = time.perf_counter()
        out = section()
        total += time.perf_counter() - t0
        return out

    for _ in range(repeat):
        fn(mark)
    return 1000.0 * total / repeat


def pagerank_seq(xt: TransposeGraph, ks: np.ndarray, i: int, n: int, fl: PagerankLoop,
                 q: Optional[np.ndarray] = None, o: Optional[PagerankOptions] = None,
                 dtype=np.float64) -> PagerankResult:
    """Run loop `fl` over window [i, i+n) of the ks ordering of xt's vertices.

    Vertices outside the window keep the seed rank from q (or 1/N).
    """
    o = o or PagerankOptions()
    N = xt.order
    ks = np.asarray(ks, dtype=np.int64)
    if q is not None and len(q) != N:
        raise ValueError(f"pagerank_seq: expected {N} initial ranks, got {len(q)}.")
    p, E, L, EF = o.damping, o.tolerance, o.max_iterations, o.tolerance_norm
    vfrom, efrom, vdata = csr_in_order(xt, ks)
    A = pull_operator(vfrom, efrom, i, n, N, dtype)
    buf = RankBuffers(N, dtype)
    f = np.zeros(N, dtype=dtype)
    qc = np.asarray(q)[ks] if q is not None else None
    l = 0

    def run(mark):
        nonlocal l
        if qc is not None:
            buf.r[:] = qc
        else:
            buf.r.fill(1.0 / N)
        buf.a[:] = buf.r

        def prepare():
            pagerank_factor(f, vdata, 0, N, p)
            multiply_values(buf.c, buf.a, f, 0, N)

        mark(prepare)
        l = mark(lambda: fl(buf, f, A, i, n, N, p, E, L, EF))

    t = measure_duration_marked(run, o.repeat)
    ranks = np.empty(N, dtype=dtype)
    ranks[ks] = buf.a
    logger.debug("pagerank_seq: N=%d window=[%d, %d) iterations=%d time=%.3fms", N, i, i + n, l, t)
    return PagerankResult(ranks=ranks, iterations=l, time=t)

"""Single-threaded pull-based PageRank over CSR, static and dynamic."""
import logging
from typing import Optional
import numpy as np
import scipy.sparse as sp

from .buffers import RankBuffers
from .dynamic import dynamic_vertices
from .graph import Graph, TransposeGraph, transpose_with_degree
from .harness import pagerank_seq
from .kernels import multiply_values, pagerank_calculate, pagerank_error
from .models import PagerankOptions, PagerankResult

logger = logging.getLogger(__name__)


# ---------- loop ----------
def pagerank_monolithic_seq_loop(buf: RankBuffers, f: np.ndarray, A: sp.csr_matrix,
                                 i: int, n: int, N: int, p: float, E: float, L: int, EF: int) -> int:
    """Iterate ranks of window [i, i+n) until error < E or L iterations.

    A is the window's in-edge CSR (kernels.pull_operator). Expects
    contributions (buf.c) to be precalculated. Returns the number of
    iterations run; final ranks are always in buf.a.
    """
    assert n >= 1 and 0 <= i and i + n <= N
    assert L >= 1 and 0.0 <= p < 1.0 and len(buf) == N
    c0 = (1 - p) / N
    l = 0
    while l < L:
        pagerank_calculate(buf.a, buf.c, A, i, n, c0)
        el = pagerank_error(buf.a, buf.r, i, n, EF); l += 1
        if el < E or l >= L: break
        multiply_values(buf.c, buf.a, f, i, n)
        buf.swap()
    return l


# ---------- static ----------
def pagerank_monolithic_seq(x: Graph, xt: Optional[TransposeGraph] = None, q: Optional[np.ndarray] = None,
                            o: Optional[PagerankOptions] = None, dtype=np.float64) -> PagerankResult:
    """PageRank of x from scratch (uniform start) or warm-started from q.

    xt is the transpose of x with out-degrees; built here when not given.
    Returns ranks, iterations and time (ms).
    """
    if xt is None:
        xt = transpose_with_degree(x)
    N = xt.order
    if N == 0:
        return PagerankResult.initial(xt, q, dtype)
    ks = np.arange(N)
    return pagerank_seq(xt, ks, 0, N, pagerank_monolithic_seq_loop, q, o, dtype)


# ---------- dynamic ----------
def pagerank_monolithic_seq_dynamic(x: Graph, y: Graph, xt: Optional[TransposeGraph] = None,
                                    yt: Optional[TransposeGraph] = None, q: Optional[np.ndarray] = None,
                                    o: Optional[PagerankOptions] = None, dtype=np.float64) -> PagerankResult:
    """PageRank of y, recomputing only vertices affected by the edit x -> y.

    q should hold converged ranks of x; unaffected vertices keep them as-is.
    """
    if xt is None:
        xt = transpose_with_degree(x)
    if yt is None:
        yt = transpose_with_degree(y)
    ks, n = dynamic_vertices(x, xt, y, yt)
    if n == 0:
        return PagerankResult.initial(y, q, dtype)
    if q is None and n < y.order:
        logger.warning("pagerank_monolithic_seq_dynamic: no initial ranks given, %d unaffected vertices keep 1/N", y.order - n)
    return pagerank_seq(yt, ks, 0, n, pagerank_monolithic_seq_loop, q, o, dtype)

"""
Tests for RankBuffers and the convergence loop.
"""

import numpy as np
import pytest

from pagerank_seq import Graph, ToleranceNorm, transpose_with_degree
from pagerank_seq.buffers import RankBuffers
from pagerank_seq.harness import csr_in_order
from pagerank_seq.kernels import multiply_values, pagerank_error, pagerank_factor, pull_operator
from pagerank_seq.monolithic import pagerank_monolithic_seq_loop


def prepared(x: Graph, p: float = 0.85, n=None):
    """Uniformly seeded buffers, factors and the pull operator of window [0, n) for x."""
    xt = transpose_with_degree(x)
    N = xt.order
    vfrom, efrom, vdata = csr_in_order(xt, np.arange(N))
    buf = RankBuffers(N)
    f = np.zeros(N)
    buf.r.fill(1.0 / N)
    buf.a[:] = buf.r
    pagerank_factor(f, vdata, 0, N, p)
    multiply_values(buf.c, buf.a, f, 0, N)
    return buf, f, pull_operator(vfrom, efrom, 0, N if n is None else n, N), N


def test_buffers_swap_is_relabel():
    buf = RankBuffers(3, np.float32)
    a, r = buf.a, buf.r

    buf.swap()

    assert buf.a is r
    assert buf.r is a
    assert buf.dtype == np.float32
    assert len(buf) == 3


def test_loop_exhausts_with_unreachable_tolerance():
    x = Graph.from_edges(3, [(0, 1), (1, 2), (2, 0), (0, 2)])
    buf, f, A, N = prepared(x)

    l = pagerank_monolithic_seq_loop(buf, f, A, 0, N, N, 0.85, 0.0, 7, ToleranceNorm.L1)

    assert l == 7


def test_loop_converges_on_strongly_connected_graph():
    x = Graph.from_edges(4, [(0, 1), (1, 2), (2, 3), (3, 0), (0, 2), (3, 1)])
    buf, f, A, N = prepared(x)
    E = 1e-10

    l = pagerank_monolithic_seq_loop(buf, f, A, 0, N, N, 0.85, E, 500, ToleranceNorm.L1)

    assert 1 <= l < 500
    assert pagerank_error(buf.a, buf.r, 0, N, ToleranceNorm.L1) < E
    assert buf.a.sum() == pytest.approx(1.0)


def test_one_iteration_mass():
    # vertex 3 is dangling and pushes nothing forward
    x = Graph.from_edges(4, [(0, 1), (0, 3), (1, 2), (2, 0), (2, 3)])
    p = 0.85
    buf, f, A, N = prepared(x, p)
    r = buf.r.copy()

    l = pagerank_monolithic_seq_loop(buf, f, A, 0, N, N, p, 0.0, 1, ToleranceNorm.L1)

    pushing = x.out_degrees() > 0
    assert l == 1
    assert buf.a.sum() == pytest.approx((1 - p) + p * r[pushing].sum())


def test_dangling_vertex_is_well_defined():
    x = Graph.from_edges(3, [(0, 1), (1, 2)])
    buf, f, A, N = prepared(x)

    with np.errstate(divide="raise", invalid="raise"):
        l = pagerank_monolithic_seq_loop(buf, f, A, 0, N, N, 0.85, 1e-12, 100, ToleranceNorm.L1)

    assert l < 100
    assert np.all(np.isfinite(buf.a))
    assert f[2] == 0.0
    # only the teleport floor reaches vertex 0
    assert buf.a[0] == pytest.approx(0.15 / 3)


def test_loop_leaves_outside_of_window_alone():
    x = Graph.from_edges(4, [(0, 1), (1, 0), (2, 3), (3, 2)])
    buf, f, A, N = prepared(x, n=2)
    before = buf.a[2:].copy()

    pagerank_monolithic_seq_loop(buf, f, A, 0, 2, N, 0.85, 0.0, 5, ToleranceNorm.L2)

    assert np.array_equal(buf.a[2:], before)
    assert np.array_equal(buf.r[2:], before)


def test_loop_refuses_empty_window():
    x = Graph.from_edges(2, [(0, 1)])
    buf, f, A, N = prepared(x, n=0)

    with pytest.raises(AssertionError):
        pagerank_monolithic_seq_loop(buf, f, A, 0, 0, N, 0.85, 1e-6, 10, ToleranceNorm.L1)

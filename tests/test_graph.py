"""
Tests for CSR graphs and transpose-with-degree.
"""

import numpy as np
import pytest
import scipy.sparse as sp

from pagerank_seq import Graph, transpose_with_degree


def test_from_edges_collapses_duplicates_and_sorts():
    x = Graph.from_edges(3, [(0, 2), (0, 1), (0, 1), (1, 2)])

    assert x.order == 3
    assert x.size == 3
    assert x.edges(0).tolist() == [1, 2]
    assert x.edges(2).tolist() == []
    assert x.out_degrees().tolist() == [2, 1, 0]
    assert x.edge_list() == [(0, 1), (0, 2), (1, 2)]


def test_from_edges_rejects_out_of_range():
    with pytest.raises(ValueError):
        Graph.from_edges(2, [(0, 2)])


def test_from_csr_rejects_non_square():
    with pytest.raises(ValueError):
        Graph.from_csr(sp.csr_matrix(np.ones((2, 3))))


def test_from_csr_does_not_touch_input():
    A = sp.csr_matrix((np.ones(3), ([0, 0, 1], [1, 1, 0])), shape=(2, 2))
    before = A.toarray().copy()

    x = Graph.from_csr(A)

    assert x.size == 2
    assert np.array_equal(A.toarray(), before)


def test_graph_arrays_are_read_only():
    x = Graph.from_edges(2, [(0, 1)])

    with pytest.raises(ValueError):
        x.indices[0] = 0


def test_transpose_with_degree():
    x = Graph.from_edges(3, [(0, 1), (0, 2), (2, 1)])

    xt = transpose_with_degree(x)

    assert xt.order == 3
    assert xt.size == 3
    assert xt.edges(1).tolist() == [0, 2]
    assert xt.edges(2).tolist() == [0]
    assert xt.edges(0).tolist() == []
    assert xt.degree.tolist() == [2, 0, 1]


def test_transpose_of_empty_graph():
    xt = transpose_with_degree(Graph.from_edges(0, []))

    assert xt.order == 0
    assert xt.size == 0


def test_to_csr_is_a_copy_of_the_structure():
    x = Graph.from_edges(3, [(0, 1), (2, 0)])

    A = x.to_csr()
    A.indices[0] = 2

    assert A.shape == (3, 3)
    assert A.nnz == 2
    assert x.edges(0).tolist() == [1]

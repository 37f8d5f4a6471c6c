"""CSR graphs: the directed graph itself and its transpose annotated with out-degrees."""
from dataclasses import dataclass
from typing import Iterable, List, Tuple
import numpy as np
import scipy.sparse as sp


def _frozen(a, dtype=np.int64) -> np.ndarray:
    a = np.array(a, dtype=dtype)
    a.setflags(write=False)
    return a


def _canonical(A) -> sp.csr_matrix:
    A = sp.csr_matrix(A, copy=True)
    A.sum_duplicates()  # also sorts indices
    return A


def _structure(indptr: np.ndarray, indices: np.ndarray) -> sp.csr_matrix:
    n = len(indptr) - 1
    data = np.ones(len(indices), dtype=np.int8)
    return sp.csr_matrix((data, indices.copy(), indptr.copy()), shape=(n, n))


@dataclass(frozen=True, eq=False)
class Graph:
    """Directed graph over vertices 0..order-1.

    Out-edges of u are indices[indptr[u]:indptr[u+1]] (sorted, no duplicates).
    """
    indptr: np.ndarray
    indices: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, "indptr", _frozen(self.indptr))
        object.__setattr__(self, "indices", _frozen(self.indices))
        assert len(self.indptr) >= 1 and self.indptr[0] == 0
        assert self.indptr[-1] == len(self.indices)

    @classmethod
    def from_csr(cls, A) -> "Graph":
        A = _canonical(A)
        if A.shape[0] != A.shape[1]:
            raise ValueError(f"Graph.from_csr: adjacency must be square, got {A.shape}.")
        return cls(A.indptr, A.indices)

    @classmethod
    def from_edges(cls, n: int, edges: Iterable[Tuple[int, int]]) -> "Graph":
        edges = np.asarray(list(edges), dtype=np.int64).reshape(-1, 2)
        if edges.size and (edges.min() < 0 or edges.max() >= n):
            raise ValueError(f"Graph.from_edges: edge endpoint outside [0, {n}).")
        data = np.ones(len(edges), dtype=np.int8)
        return cls.from_csr(sp.csr_matrix((data, (edges[:, 0], edges[:, 1])), shape=(n, n)))

    @property
    def order(self) -> int:
        return len(self.indptr) - 1

    @property
    def size(self) -> int:
        return int(self.indptr[-1])

    def edges(self, u: int) -> np.ndarray:
        return self.indices[self.indptr[u]:self.indptr[u + 1]]

    def out_degrees(self) -> np.ndarray:
        return np.diff(self.indptr)

    def edge_list(self) -> List[Tuple[int, int]]:
        rows = np.repeat(np.arange(self.order), self.out_degrees())
        return list(zip(rows.tolist(), self.indices.tolist()))

    def to_csr(self) -> sp.csr_matrix:
        return _structure(self.indptr, self.indices)


@dataclass(frozen=True, eq=False)
class TransposeGraph:
    """Reverse-edge view: in-edges of v are indices[indptr[v]:indptr[v+1]].

    degree[v] is the out-degree of v in the original graph.
    """
    indptr: np.ndarray
    indices: np.ndarray
    degree: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, "indptr", _frozen(self.indptr))
        object.__setattr__(self, "indices", _frozen(self.indices))
        object.__setattr__(self, "degree", _frozen(self.degree))
        assert len(self.degree) == len(self.indptr) - 1

    @property
    def order(self) -> int:
        return len(self.indptr) - 1

    @property
    def size(self) -> int:
        return int(self.indptr[-1])

    def edges(self, v: int) -> np.ndarray:
        return self.indices[self.indptr[v]:self.indptr[v + 1]]

    def to_csr(self) -> sp.csr_matrix:
        return _structure(self.indptr, self.indices)


def transpose_with_degree(x: Graph) -> TransposeGraph:
    At = _canonical(x.to_csr().T)
    return TransposeGraph(At.indptr, At.indices, x.out_degrees())

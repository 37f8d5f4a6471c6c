"""Which vertices need their rank recomputed after a graph edit."""
import logging
from dataclasses import dataclass
import numpy as np

from .graph import Graph, TransposeGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class AffectedVertices:
    """Partition of 0..N-1: order[:count] are affected, order[count:] are not.

    Unpacks like the (ks, n) pair the harness consumes.
    """
    order: np.ndarray
    count: int

    def __post_init__(self):
        order = np.asarray(self.order, dtype=np.int64)
        N = len(order)
        if not 0 <= self.count <= N:
            raise ValueError(f"AffectedVertices: count {self.count} outside [0, {N}].")
        if not np.array_equal(np.sort(order), np.arange(N)):
            raise ValueError("AffectedVertices: order must be a permutation of the vertex range.")
        order.setflags(write=False)
        object.__setattr__(self, "order", order)

    @classmethod
    def from_mask(cls, mask: np.ndarray) -> "AffectedVertices":
        mask = np.asarray(mask, dtype=bool)
        affected, unaffected = np.flatnonzero(mask), np.flatnonzero(~mask)
        return cls(np.concatenate([affected, unaffected]), len(affected))

    @property
    def affected(self) -> np.ndarray:
        return self.order[:self.count]

    @property
    def unaffected(self) -> np.ndarray:
        return self.order[self.count:]

    def __iter__(self):
        return iter((self.order, self.count))


def _rows_differing(A, B) -> np.ndarray:
    """Rows whose sparsity pattern differs between two equally shaped CSR matrices."""
    D = (A != B).tocsr()
    return np.flatnonzero(np.diff(D.indptr))


def changed_vertices(x: Graph, xt: TransposeGraph, y: Graph, yt: TransposeGraph) -> np.ndarray:
    """Mask over the vertices whose in- or out-edges differ between x and y.

    Both snapshots must have the same order; a different order changes every
    vertex's teleport floor and is handled by dynamic_vertices.
    """
    if x.order != y.order:
        raise ValueError(f"changed_vertices: snapshots differ in order ({x.order} vs {y.order}).")
    changed = np.zeros(y.order, dtype=bool)
    changed[_rows_differing(x.to_csr(), y.to_csr())] = True
    changed[_rows_differing(xt.to_csr(), yt.to_csr())] = True
    return changed


def mark_reachable(y: Graph, seeds: np.ndarray) -> np.ndarray:
    """Mask of every vertex reachable in y from a vertex set in `seeds`."""
    visited = np.asarray(seeds, dtype=bool).copy()
    frontier = np.flatnonzero(visited)
    A = y.to_csr()
    while frontier.size:
        reach = np.unique(A[frontier].indices)
        frontier = reach[~visited[reach]]
        visited[frontier] = True
    return visited


def dynamic_vertices(x: Graph, xt: TransposeGraph, y: Graph, yt: TransposeGraph) -> AffectedVertices:
    if x.order != y.order or y.order == 0:
        # teleport floor (1-p)/N moves for everyone
        mask = np.ones(y.order, dtype=bool)
    else:
        mask = mark_reachable(y, changed_vertices(x, xt, y, yt))
    ks = AffectedVertices.from_mask(mask)
    logger.debug("dynamic_vertices: %d of %d vertices affected", ks.count, y.order)
    return ks

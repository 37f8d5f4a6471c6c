"""Random graphs and random edge batches for experiments."""
import numpy as np

from .graph import Graph


def random_graph(n: int, max_edges: int, seed: int = 7) -> Graph:
    """Each vertex gets randrange(max_edges) distinct out-neighbors (self-loops allowed)."""
    rng = np.random.default_rng(seed)
    edges = []
    for u in range(n):
        k = int(rng.integers(max_edges)) if max_edges > 0 else 0
        for v in rng.choice(n, size=min(k, n), replace=False):
            edges.append((u, int(v)))
    return Graph.from_edges(n, edges)


def random_edge_batch(x: Graph, size: int, insert_fraction: float = 0.8, seed: int = 7) -> Graph:
    """New graph with `size` random edge insertions and deletions applied to x.

    Roughly insert_fraction of the batch are insertions; a deletion picks an
    existing edge, an insertion a random (possibly duplicate) pair.
    """
    rng = np.random.default_rng(seed)
    n = x.order
    edges = x.edge_list()
    present = set(edges)
    for _ in range(size):
        if n == 0:
            break
        if edges and rng.random() >= insert_fraction:
            j = int(rng.integers(len(edges)))
            edges[j], edges[-1] = edges[-1], edges[j]
            present.discard(edges.pop())
        else:
            e = (int(rng.integers(n)), int(rng.integers(n)))
            if e not in present:
                present.add(e)
                edges.append(e)
    return Graph.from_edges(n, edges)

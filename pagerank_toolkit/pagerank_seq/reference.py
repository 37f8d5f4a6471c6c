import numpy as np

from .graph import Graph


def pagerank_reference(x: Graph, damping: float = 0.85) -> np.ndarray:
    """Exact ranks by a dense linear solve, used as a basis for comparison.

    Solves (I - p*G) r = (1-p)/N where G[v, u] = 1/outDegree(u) for each edge u->v.
    Dangling vertices push nothing, same as the iterative loop.
    Only meant for small graphs (O(N^2) memory).
    """
    N = x.order
    if N == 0:
        return np.zeros(0)
    deg = x.out_degrees()
    G = np.zeros((N, N), dtype=float)
    for u in range(N):
        if deg[u] == 0:
            continue
        G[x.edges(u), u] = 1.0 / deg[u]
    P = np.full(N, (1.0 - damping) / N)
    return np.linalg.solve(np.eye(N) - damping * G, P)

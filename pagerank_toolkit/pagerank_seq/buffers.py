import numpy as np


class RankBuffers:
    """Double-buffered rank vectors plus the contribution vector.

    `a` is the buffer being written this iteration, `r` the previous estimate.
    swap() only flips which of the two owned arrays plays which role.
    """

    def __init__(self, N: int, dtype=np.float64):
        self._ranks = (np.zeros(N, dtype=dtype), np.zeros(N, dtype=dtype))
        self._current = 0
        self.c = np.zeros(N, dtype=dtype)

    @property
    def a(self) -> np.ndarray:
        return self._ranks[self._current]

    @property
    def r(self) -> np.ndarray:
        return self._ranks[1 - self._current]

    @property
    def dtype(self):
        return self.c.dtype

    def swap(self) -> None:
        self._current ^= 1

    def __len__(self) -> int:
        return len(self.c)

import numbers
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional
import numpy as np


class ToleranceNorm(IntEnum):
    LI = 0  # max |a - r|
    L1 = 1
    L2 = 2


@dataclass(frozen=True)
class PagerankOptions:
    """Knobs for one PageRank call.

    damping        -- probability of following an edge instead of teleporting
    tolerance      -- stop once the error between two iterations drops below this
    max_iterations -- hard cap on iterations (reaching it means "exhausted")
    tolerance_norm -- which norm the error kernel uses
    repeat         -- how many times to repeat the computation for timing
    """
    repeat: int = 1
    tolerance_norm: ToleranceNorm = ToleranceNorm.L1
    damping: float = 0.85
    tolerance: float = 1e-6
    max_iterations: int = 500

    def __post_init__(self):
        if not 0.0 <= self.damping < 1.0:
            raise ValueError(f"PagerankOptions: damping must be in [0, 1), got {self.damping}.")
        if self.tolerance < 0.0:
            raise ValueError(f"PagerankOptions: tolerance must be >= 0, got {self.tolerance}.")
        if not isinstance(self.max_iterations, numbers.Integral) or self.max_iterations < 1:
            raise ValueError(f"PagerankOptions: max_iterations must be an integer >= 1, got {self.max_iterations!r}.")
        if not isinstance(self.repeat, numbers.Integral) or self.repeat < 1:
            raise ValueError(f"PagerankOptions: repeat must be an integer >= 1, got {self.repeat!r}.")
        try:
            norm = ToleranceNorm(self.tolerance_norm)
        except ValueError:
            raise ValueError(f"PagerankOptions: unknown tolerance_norm {self.tolerance_norm!r}.") from None
        object.__setattr__(self, "tolerance_norm", norm)


@dataclass
class PagerankResult:
    ranks: np.ndarray
    iterations: int
    time: float  # ms, averaged over PagerankOptions.repeat

    @classmethod
    def initial(cls, x, q: Optional[np.ndarray] = None, dtype=np.float64) -> "PagerankResult":
        """Result of zero iterations: the seed ranks, or uniform 1/N without one."""
        N = x.order
        if q is not None:
            if len(q) != N:
                raise ValueError(f"PagerankResult.initial: expected {N} initial ranks, got {len(q)}.")
            ranks = np.array(q, dtype=dtype)
        else:
            ranks = np.full(N, 1.0 / N if N else 0.0, dtype=dtype)
        return cls(ranks=ranks, iterations=0, time=0.0)

    def converged(self, o: PagerankOptions) -> bool:
        return self.iterations < o.max_iterations

# convergence.py
#
# Project: Link-file PageRank
#
# Description:
#   Perplexity of a rank distribution and the streak rule that decides
#   when iteration stops.
#
#   perplexity = 2 ** H,  H = -sum(r * log2(r)),  with 0 * log2(0) := 0
#
#   The stop rule only compares the units digit of floor(perplexity)
#   between consecutive passes.  It is a stability heuristic, kept exactly
#   so that traces are reproducible.

import math

import numpy as np

CONVERGENCE_ITER_COUNT_LIMIT = 4


def perplexity(ranks):
    """
    Compute 2 raised to the entropy (base 2) of a rank distribution.

    Args:
        ranks (array-like): Page ranks

    Returns:
        float: perplexity (1.0 for an empty or point-mass distribution)
    """
    r = np.asarray(ranks, dtype=np.float64)
    r = r[r > 0]
    entropy = float(np.sum(r * np.log2(r)))
    return 2.0 ** (-entropy)


class ConvergenceMonitor:
    """Tracks how many consecutive passes agree on floor(perplexity) % 10."""

    def __init__(self, limit=CONVERGENCE_ITER_COUNT_LIMIT):
        self.limit = limit
        self.reset()

    def reset(self):
        self.last_perplexity = 0.0
        self.streak = 1

    def update(self, current_perplexity):
        """
        Record one pass and report whether the run has converged.

        Args:
            current_perplexity (float): Perplexity after the latest pass

        Returns:
            bool: True once the streak reaches the limit (the streak restarts)
        """
        if math.floor(current_perplexity) % 10 == math.floor(self.last_perplexity) % 10:
            self.streak += 1
        else:
            self.streak = 1

        self.last_perplexity = current_perplexity

        if self.streak == self.limit:
            self.streak = 1
            return True
        return False

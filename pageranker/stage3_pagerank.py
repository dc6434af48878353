# stage3_pagerank.py
#
# Project: Link-file PageRank
#
# Description:
#   Stage 3: PageRank via power iteration on a sparse link matrix, stopped
#   by the perplexity streak rule in convergence.py.
#
# References:
#   [1] Page, L., Brin, S., Motwani, R., & Winograd, T. (1999).
#       "The PageRank Citation Ranking: Bringing Order to the Web."
#       http://ilpubs.stanford.edu:8090/422/1/1999-66.pdf
#
# Update rule for every page p (N pages, damping d):
#
#   PR'(p) = (1-d)/N  +  d * S/N  +  d * sum over q in B(p) of PR(q)/C(q)
#
#   B(p)  back-links of p (GraphStore)
#   C(q)  out-link count of q (PageRegistry)
#   S     total rank held by sink pages (C = 0); spreading it over all N
#         pages keeps the total at 1.
#
# Every pass reads only the previous vector and writes a new one
# (Jacobi-style); the registry is updated after the whole pass.

import numpy as np
import scipy.sparse as sp

from pageranker.convergence import ConvergenceMonitor, perplexity
from pageranker.utils import Reporter

DAMPING_FACTOR = 0.85


class RankIterator:
    """
    One compiled view of the graph that performs update passes.

    Args:
        graph (GraphStore): Back-link index
        registry (PageRegistry): Pages with their out-link counts
        damping (float): Damping factor d
    """

    def __init__(self, graph, registry, damping=DAMPING_FACTOR):
        self.damping = damping
        self.page_ids = registry.ids()
        self.n = len(self.page_ids)
        page_to_idx = {page_id: i for i, page_id in enumerate(self.page_ids)}

        # ---------------------------------------------------------------
        # Step 1: Transition matrix
        # ---------------------------------------------------------------
        # A[q][p] = 1/C(q) for every q in B(p), so (x @ A)[p] is
        # sum of PR(q)/C(q) over the back-links of p.
        out_counts = np.array([registry.get(pid).out_link_count for pid in self.page_ids], dtype=np.float64)
        rows, cols, data = [], [], []
        for target, sources in graph.items():
            p_idx = page_to_idx[target]
            for source in sources:
                q_idx = page_to_idx[source]
                rows.append(q_idx)
                cols.append(p_idx)
                # C(q) >= 1 here: q was counted when it was read as a source.
                data.append(1.0 / out_counts[q_idx])

        self.matrix = sp.csr_matrix(
            (np.array(data, dtype=np.float64),
             (np.array(rows, dtype=np.int64), np.array(cols, dtype=np.int64))),
            shape=(self.n, self.n),
        )

        # ---------------------------------------------------------------
        # Step 2: Sink pages
        # ---------------------------------------------------------------
        self.sink_idx = np.where(out_counts == 0)[0]

    def sink_mass(self, x):
        return float(x[self.sink_idx].sum())

    def step(self, x):
        """
        Compute the next rank vector from a frozen previous one.

        Args:
            x (np.ndarray): Previous ranks in registry order (not modified)

        Returns:
            np.ndarray: New ranks in registry order
        """
        n = self.n
        d = self.damping
        teleport = (1 - d) / n
        sink_share = d * self.sink_mass(x) / n
        return teleport + sink_share + d * (x @ self.matrix)


def run_until_converged(iterator, registry, monitor=None, reporter=None, max_iterations=None):
    """
    Run update passes until the convergence monitor says stop.

    After each pass the new ranks are applied to the registry, the
    perplexity is recorded and the monitor is consulted.

    Args:
        iterator (RankIterator): Compiled graph
        registry (PageRegistry): Pages; ranks are overwritten after each pass
        monitor (ConvergenceMonitor|None): Stop rule (fresh one if None)
        reporter (Reporter|None): Progress observer
        max_iterations (int|None): Optional hard cap on the number of passes

    Returns:
        list[float]: Perplexity after each completed pass
    """
    reporter = reporter or Reporter()
    monitor = monitor or ConvergenceMonitor()
    perplexities = []

    x = registry.rank_vector()
    reporter.step(f"Running power iterations over {iterator.n} pages...")

    while True:
        if max_iterations is not None and len(perplexities) >= max_iterations:
            reporter.warning(f"Stopped at the iteration cap ({max_iterations}) before convergence")
            break

        x_next = iterator.step(x)
        registry.apply(x_next)

        current = perplexity(x_next)
        perplexities.append(current)
        if reporter.verbose:
            reporter.debug(
                f"Iteration {len(perplexities)}: perplexity={current} "
                f"sink mass={iterator.sink_mass(x)} total={x_next.sum()}"
            )

        x = x_next
        if monitor.update(current):
            reporter.success(f"Converged after {len(perplexities)} iterations (perplexity={current:.6f})")
            break

    return perplexities

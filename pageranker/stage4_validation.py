# stage4_validation.py
#
# Project: Link-file PageRank
#
# Description:
#   Stage 4: Validate the computed PageRank against NetworkX using standard
#   ranking metrics (Spearman's rho, Kendall's tau, MAE, Precision@5).
#
# References:
#   [1] Spearman, C. (1904).
#       "The Proof and Measurement of Association between Two Things."
#       American Journal of Psychology, 15(1), 72-101.
#   [2] Kendall, M. (1938).
#       "A New Measure of Rank Correlation."
#       Biometrika, 30(1/2), 81-93.
#
# NetworkX License (3-clause BSD):
#   Copyright (c) 2004-2025, NetworkX Developers
#   See full license: https://github.com/networkx/networkx/blob/main/LICENSE.txt
#
#   This file invokes nx.DiGraph() and nx.pagerank() at runtime as a
#   reference implementation.
#
# The perplexity stop rule is a heuristic, so a converged run can still sit
# a little away from the true stationary vector.  The metrics show how far.

import os

import numpy as np
from scipy.stats import spearmanr, kendalltau, rankdata
import matplotlib
matplotlib.use('Agg')  # non-interactive backend for saving to file
import matplotlib.pyplot as plt
import networkx as nx

from pageranker.ranker import sorted_pages
from pageranker.stage3_pagerank import DAMPING_FACTOR
from pageranker.utils import Reporter, Timer

TOP_N = 5


def build_networkx_graph(graph, registry):
    """DiGraph with an edge q -> p for every back-link q of p."""
    G = nx.DiGraph()
    G.add_nodes_from(page.id for page in registry)
    for target, sources in graph.items():
        for source in sources:
            G.add_edge(source, target)
    return G


def _plot_validation(custom_scores, nx_scores, perplexities, out_dir):
    """
    Save two side-by-side plots to out_dir.

    Left  - Rank vs Rank scatter: X = NetworkX rank, Y = custom rank.
            Points on the diagonal mean identical ranking.
    Right - Perplexity after every iteration of the custom run.
    """
    custom_ranks = rankdata(-custom_scores, method='ordinal')
    nx_ranks = rankdata(-nx_scores, method='ordinal')

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(14, 6))

    ax1.scatter(nx_ranks, custom_ranks, s=1, alpha=0.3, c='steelblue')
    rank_max = max(custom_ranks.max(), nx_ranks.max())
    ax1.plot([1, rank_max], [1, rank_max], 'r--', linewidth=1, label='Perfect agreement')
    ax1.set_xlabel('NetworkX Rank')
    ax1.set_ylabel('Custom Rank')
    ax1.set_title('Rank vs Rank')
    ax1.legend(loc='upper left')

    ax2.plot(range(1, len(perplexities) + 1), perplexities, marker='o', c='darkorange')
    ax2.set_xlabel('Iteration')
    ax2.set_ylabel('Perplexity')
    ax2.set_title('Perplexity trace')

    fig.suptitle('Custom PageRank vs NetworkX PageRank', fontsize=14, fontweight='bold')
    fig.tight_layout()

    os.makedirs(out_dir, exist_ok=True)
    path = os.path.join(out_dir, 'validation_rank_correlation.png')
    fig.savefig(path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return path


def verify_with_networkx(graph, registry, perplexities=(), damping=DAMPING_FACTOR,
                         plot_dir=None, reporter=None):
    """
    Compare the registry's final ranks with NetworkX's PageRank.

    Args:
        graph (GraphStore): Back-link index
        registry (PageRegistry): Pages carrying the final ranks
        perplexities (list[float]): Trace of the custom run (for the plot)
        damping (float): Damping factor used by both runs
        plot_dir (str|None): Save figures here; no plot when None
        reporter (Reporter|None): Progress observer

    Returns:
        dict: mae, max_error, max_error_page, spearman, kendall,
              precision_at_5, positional_matches, plot_path
    """
    reporter = reporter or Reporter()
    reporter.stage("Verify", "Comparing with NetworkX PageRank")

    with Timer("NetworkX verification", reporter):
        reporter.step("Building NetworkX DiGraph...")
        G = build_networkx_graph(graph, registry)
        reporter.success(f"Graph: {G.number_of_nodes()} nodes, {G.number_of_edges()} edges")

        reporter.step("Computing NetworkX PageRank...")
        nx_pr = nx.pagerank(G, alpha=damping, tol=1e-10, max_iter=1000)

        pages = list(registry)
        custom_scores = np.array([page.rank for page in pages])
        nx_scores = np.array([nx_pr[page.id] for page in pages])

        # Score-level comparison
        abs_errors = np.abs(custom_scores - nx_scores)
        mae = float(abs_errors.mean())
        max_err = float(abs_errors.max())
        max_err_page = pages[int(abs_errors.argmax())].id

        # Rank-level comparison; undefined when either side is constant.
        rho = tau = None
        if np.ptp(custom_scores) > 0 and np.ptp(nx_scores) > 0:
            rho = float(spearmanr(custom_scores, nx_scores)[0])
            tau = float(kendalltau(custom_scores, nx_scores)[0])

        reporter.summary("Validation Metrics", {
            "MAE (score)": f"{mae:.2e}",
            "Max error": f"{max_err:.2e} (Page {max_err_page})",
            "Spearman rho [1]": "n/a" if rho is None else f"{rho:.6f}",
            "Kendall tau  [2]": "n/a" if tau is None else f"{tau:.6f}",
        })

        # Top-N side-by-side, both ordered by score then id
        custom_top = [(page.id, page.rank) for page in sorted_pages(pages)[:TOP_N]]
        nx_top = sorted(nx_pr.items(), key=lambda item: (-item[1], item[0]))[:TOP_N]

        reporter.side_by_side(
            f"Custom Top {TOP_N}", {f"#{i+1} Page {p}": f"{s:.8f}" for i, (p, s) in enumerate(custom_top)},
            f"NetworkX Top {TOP_N}", {f"#{i+1} Page {p}": f"{s:.8f}" for i, (p, s) in enumerate(nx_top)},
        )

        custom_top_pages = [p for p, _ in custom_top]
        nx_top_pages = [p for p, _ in nx_top]
        rank_matches = sum(1 for a, b in zip(custom_top_pages, nx_top_pages) if a == b)
        overlap = set(custom_top_pages) & set(nx_top_pages)
        top_size = len(custom_top_pages)

        if rank_matches == top_size:
            reporter.success(f"Top {top_size} matches perfectly (same pages, same order)")
        else:
            reporter.step(f"Top {top_size} positional match: {rank_matches}/{top_size}")
            reporter.step(f"Top {top_size} Precision@{TOP_N}:      {len(overlap)}/{top_size}")

        plot_path = None
        if plot_dir is not None:
            plot_path = _plot_validation(custom_scores, nx_scores, list(perplexities), plot_dir)
            reporter.success(f"Plots saved to {plot_path}")

    return {
        "mae": mae,
        "max_error": max_err,
        "max_error_page": max_err_page,
        "spearman": rho,
        "kendall": tau,
        "precision_at_5": len(overlap) / top_size if top_size else 0.0,
        "positional_matches": rank_matches,
        "plot_path": plot_path,
    }

# stage2_stats.py
#
# Project: Link-file PageRank
#
# Description:
#   Stage 2: Summarise the loaded graph (out-link and in-link count
#   distributions, sink pages) before ranking starts.

import numpy as np

from pageranker.utils import Reporter, Timer


def compute_link_stats(link_counts, label, reporter=None):
    """
    Compute and display statistics for a list of link counts.

    Args:
        link_counts (list[int]): Number of links per page
        label (str): Label for display (e.g., "Outgoing" or "Incoming")
        reporter (Reporter|None): Progress observer

    Returns:
        dict: Computed statistics
    """
    reporter = reporter or Reporter()
    values = np.asarray(link_counts, dtype=np.int64)

    if values.size == 0:
        stats = {"Min": 0, "Max": 0, "Average": "0.00", "Median": "0.00"}
    else:
        stats = {
            "Min": int(np.min(values)),
            "Max": int(np.max(values)),
            "Average": f"{np.mean(values):.2f}",
            "Median": f"{np.median(values):.2f}",
            "Q1 (20th)": f"{np.percentile(values, 20):.2f}",
            "Q2 (40th)": f"{np.percentile(values, 40):.2f}",
            "Q3 (60th)": f"{np.percentile(values, 60):.2f}",
            "Q4 (80th)": f"{np.percentile(values, 80):.2f}",
        }

    reporter.summary(f"{label} Link Statistics", stats)
    return stats


def run_stats(graph, registry, reporter=None):
    """
    Compute out-link and in-link statistics for every registered page.

    Args:
        graph (GraphStore): Back-link index
        registry (PageRegistry): Loaded pages
        reporter (Reporter|None): Progress observer

    Returns:
        tuple: (outgoing_stats dict, incoming_stats dict, sink page count)
    """
    reporter = reporter or Reporter()
    reporter.stage("Stats", "Computing link statistics")

    with Timer("Total Stage 2", reporter):
        reporter.step("Computing outgoing link statistics...")
        outgoing_counts = [page.out_link_count for page in registry]
        outgoing_stats = compute_link_stats(outgoing_counts, "Outgoing", reporter)

        reporter.step("Computing incoming link statistics...")
        incoming_counts = [len(graph.backlinks(page.id)) for page in registry]
        incoming_stats = compute_link_stats(incoming_counts, "Incoming", reporter)

        sink_count = sum(1 for page in registry if page.is_sink())
        reporter.stat("Sink pages (no out-links)", sink_count)

    return outgoing_stats, incoming_stats, sink_count

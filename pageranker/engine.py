# engine.py
#
# Project: Link-file PageRank
#
# Description:
#   PageRanker ties the stages together and owns the graph state of a run:
#
#     ranker = PageRanker()
#     ranker.load_data("citeseer.dat")
#     ranker.initialize()
#     ranker.run_page_rank("perplexity.out", "pr_scores.out")
#     top = ranker.get_ranked_pages(100)

from pageranker.convergence import ConvergenceMonitor, perplexity
from pageranker.errors import EmptyGraphError, OutputWriteError
from pageranker.graph import GraphStore, PageRegistry
from pageranker.output import (
    format_perplexities, format_scores, format_sorted_scores, write_lines,
)
from pageranker.ranker import rank_pages, sorted_pages
from pageranker.stage1_load import load_links, read_link_file
from pageranker.stage3_pagerank import DAMPING_FACTOR, RankIterator, run_until_converged
from pageranker.utils import Reporter, Timer


class PageRanker:
    """
    PageRank over a link file, stopped by the perplexity streak rule.

    Args:
        damping (float): Damping factor d
        reporter (Reporter|None): Observer for progress and debug output
        max_iterations (int|None): Optional cap on update passes
    """

    def __init__(self, damping=DAMPING_FACTOR, reporter=None, max_iterations=None):
        self.damping = damping
        self.reporter = reporter or Reporter()
        self.max_iterations = max_iterations
        self.graph = GraphStore()
        self.registry = PageRegistry()
        self.monitor = ConvergenceMonitor()
        self.perplexities = []

    # ---------------------------------------------------------------
    # Loading
    # ---------------------------------------------------------------
    def load_data(self, input_link_filename):
        """Load link records from a file; the old graph survives a failed load."""
        self.graph, self.registry = read_link_file(input_link_filename, self.reporter)
        self.perplexities = []

    def load_lines(self, lines):
        """Load link records from an iterable of strings."""
        self.graph, self.registry = load_links(lines, self.reporter)
        self.perplexities = []

    # ---------------------------------------------------------------
    # Iteration
    # ---------------------------------------------------------------
    def initialize(self):
        """Set every rank to 1/N and restart convergence tracking."""
        if len(self.registry) == 0:
            raise EmptyGraphError("No pages loaded; nothing to initialize")
        self.registry.set_uniform()
        self.monitor.reset()
        self.perplexities = []
        self.reporter.step(f"Initialized {len(self.registry)} pages to rank 1/{len(self.registry)}")

    def get_perplexity(self):
        return perplexity(self.registry.rank_vector())

    def is_converge(self):
        """Feed the current perplexity to the monitor; True once it is stable."""
        return self.monitor.update(self.get_perplexity())

    def run_page_rank(self, perplexity_out_filename=None, pr_out_filename=None):
        """
        Iterate until convergence, then write the trace and score files.

        Both files are attempted even if the first one fails; the ranks stay
        in memory either way.

        Args:
            perplexity_out_filename (str|None): Trace file (skipped if None)
            pr_out_filename (str|None): Score file (skipped if None)

        Returns:
            list[float]: Perplexity after each pass

        Raises:
            EmptyGraphError: if nothing was loaded
            OutputWriteError: if a result file could not be written
        """
        if len(self.registry) == 0:
            raise EmptyGraphError("No pages loaded; run load_data() first")

        self.reporter.stage("PageRank", "Computing PageRank scores")
        with Timer("Total Stage 3", self.reporter):
            iterator = RankIterator(self.graph, self.registry, self.damping)
            self.perplexities = run_until_converged(
                iterator, self.registry, self.monitor, self.reporter, self.max_iterations,
            )

        failures = []
        outputs = [
            (perplexity_out_filename, format_perplexities(self.perplexities)),
            (pr_out_filename, format_scores(self.registry)),
        ]
        for path, lines in outputs:
            if path is None:
                continue
            try:
                write_lines(path, lines)
                self.reporter.success(f"Wrote {len(lines)} lines to {path}")
            except OutputWriteError as e:
                self.reporter.error(str(e))
                failures.append(e)
        if failures:
            raise failures[0]

        return self.perplexities

    # ---------------------------------------------------------------
    # Results
    # ---------------------------------------------------------------
    def scores(self):
        return self.registry.ranks()

    def get_ranked_pages(self, k, sorted_out=None):
        """
        Return the top k page ids, highest rank first (ties by id).

        Args:
            k (int): Maximum number of ids
            sorted_out (str|None): If given, also dump every page in rank order

        Returns:
            list[int]: min(k, N) page ids
        """
        if sorted_out is not None:
            write_lines(sorted_out, format_sorted_scores(sorted_pages(self.registry)))
        return rank_pages(self.registry, k)

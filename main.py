# main.py
#
# Project: Link-file PageRank
#
# Description:
#   Entry point.  Loads a link file, prints link statistics, runs PageRank
#   until the perplexity streak rule fires, writes the perplexity trace and
#   the score file, then prints the top-K page ids and the elapsed time.
#   Optionally validates the result against NetworkX.
#
# References:
#   [1] Page, L., Brin, S., Motwani, R., & Winograd, T. (1999).
#       "The PageRank Citation Ranking: Bringing Order to the Web."
#       http://ilpubs.stanford.edu:8090/422/1/1999-66.pdf

import argparse
import sys
import time

import pageranker.stage2_stats
import pageranker.stage4_validation
import pageranker.utils as utils
from pageranker.engine import PageRanker
from pageranker.errors import OutputWriteError, PageRankError


def build_parser():
    parser = argparse.ArgumentParser(description="PageRank over link records")
    parser.add_argument('--input', default='citeseer.dat', help="Link file path")
    parser.add_argument('--perplexity-out', default='perplexity.out', help="Perplexity trace output path")
    parser.add_argument('--scores-out', default='pr_scores.out', help="Final PageRank scores output path")
    parser.add_argument('--top-k', type=int, default=100, help="Number of top pages to report")
    parser.add_argument('--max-iterations', type=int, default=None,
                        help="Stop after this many iterations even if not converged")
    parser.add_argument('--sorted-scores', default=None, help="Also dump all scores in rank order to this path")
    parser.add_argument('--validate', action='store_true', help="Compare the result with NetworkX PageRank")
    parser.add_argument('--plot-dir', default='docs', help="Where validation plots are saved")
    parser.add_argument('--verbose', action='store_true', help="Print per-iteration detail")
    parser.add_argument('--quiet', action='store_true', help="Only print results and errors")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.top_k < 0:
        parser.error("--top-k must be non-negative")

    start_time = time.time()
    reporter = utils.Reporter(verbose=args.verbose, quiet=args.quiet)
    if not args.quiet:
        utils.print_project_banner(args.input)

    page_ranker = PageRanker(reporter=reporter, max_iterations=args.max_iterations)
    exit_code = 0

    # Stage 1 / 2: load and describe the graph
    try:
        page_ranker.load_data(args.input)
    except PageRankError as e:
        reporter.error(str(e))
        return 1
    pageranker.stage2_stats.run_stats(page_ranker.graph, page_ranker.registry, reporter)

    # Stage 3: iterate and write results
    try:
        page_ranker.initialize()
        page_ranker.run_page_rank(args.perplexity_out, args.scores_out)
    except OutputWriteError:
        exit_code = 1
    except PageRankError as e:
        reporter.error(str(e))
        return 1

    try:
        ranked_pages = page_ranker.get_ranked_pages(args.top_k, sorted_out=args.sorted_scores)
    except OutputWriteError as e:
        reporter.error(str(e))
        ranked_pages = page_ranker.get_ranked_pages(args.top_k)
        exit_code = 1

    # Stage 4: optional validation
    if args.validate:
        pageranker.stage4_validation.verify_with_networkx(
            page_ranker.graph, page_ranker.registry, page_ranker.perplexities,
            damping=page_ranker.damping, plot_dir=args.plot_dir, reporter=reporter,
        )

    estimated_time = time.time() - start_time
    print(f"Top {args.top_k} Pages are:\n{ranked_pages}")
    print(f"Processing time: {estimated_time:.3f} seconds")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())

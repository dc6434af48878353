# utils.py
#
# Project: Link-file PageRank
#
# Description:
#   Terminal display utilities: colored output, summary boxes,
#   side-by-side table rendering, a timing context manager, and the
#   Reporter object that the engine and every stage receive instead of
#   printing on their own.
#
# Components:
#   Colors            - ANSI escape code constants for terminal styling.
#   print_project_banner - Banner printed once by main.py.
#   print_stage / print_step / print_success / print_warning / print_error
#                     - Hierarchical log output with color-coded prefixes.
#   print_summary_box - Single bordered table for key-value statistics.
#   print_side_by_side_boxes
#                     - Two bordered tables rendered on the same lines
#                       (e.g., [Custom Top 5] [NetworkX Top 5]).
#   print_backlink_preview
#                     - Quick preview of a page_id -> back-links mapping.
#   Reporter          - Injectable observer with verbose / quiet switches.
#   Timer             - Context manager that reports elapsed wall time.

import sys
import time


class Colors:
    HEADER = '\033[95m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    RESET = '\033[0m'


def print_project_banner(input_path):
    """Print run info banner at pipeline start."""
    w = 90
    print(f"\n{Colors.BOLD}{Colors.BLUE}{'=' * w}")
    print(f"  PageRank over link records")
    print(f"{'=' * w}{Colors.RESET}")
    print(f"  {Colors.DIM}Input:{Colors.RESET}   {input_path}")
    print(f"  {Colors.DIM}Ref:{Colors.RESET}     Page, Brin, Motwani & Winograd (1999)")
    print(f"           {Colors.DIM}\"The PageRank Citation Ranking\"")
    print(f"           http://ilpubs.stanford.edu:8090/422/1/1999-66.pdf{Colors.RESET}")
    print(f"{Colors.BOLD}{Colors.BLUE}{'=' * w}{Colors.RESET}\n")


def print_stage(name, message):
    """Print a stage header."""
    print(f"{Colors.BOLD}{Colors.CYAN}[{name}]{Colors.RESET} {message}")


def print_step(message):
    """Print a sub-step within a stage."""
    print(f"  {Colors.DIM}->{Colors.RESET} {message}")


def print_success(message):
    """Print a success message."""
    print(f"  {Colors.GREEN}[OK]{Colors.RESET} {message}")


def print_warning(message):
    """Print a warning message."""
    print(f"  {Colors.YELLOW}[WARN]{Colors.RESET} {message}")


def print_error(message):
    """Print an error message to stderr."""
    print(f"  {Colors.RED}[ERR]{Colors.RESET} {message}", file=sys.stderr)


def print_debug(message):
    print(f"    {Colors.DIM}.. {message}{Colors.RESET}")


def print_stat(label, value):
    """Print a statistic line."""
    print(f"  | {label}: {Colors.BOLD}{value}{Colors.RESET}")


def print_summary_box(title, stats):
    """
    Print a single summary box.

    Args:
        title (str): Box title
        stats (dict): Key-value pairs to display
    """
    width = 50
    print(f"\n  +{'-' * width}+")
    padded = title + ' ' * (width - 1 - len(title))
    print(f"  | {Colors.BOLD}{padded}{Colors.RESET}|")
    print(f"  +{'-' * width}+")
    for key, val in stats.items():
        line = f" {key}: {val}"
        print(f"  |{line:<{width}}|")
    print(f"  +{'-' * width}+\n")


def _build_box_lines(title, stats, width):
    """Build a box as a list of strings for side-by-side rendering."""
    lines = []
    sep = f"+{'-' * width}+"
    lines.append(sep)
    padded = title + ' ' * (width - 1 - len(title))
    lines.append(f"| {Colors.BOLD}{padded}{Colors.RESET}|")
    lines.append(sep)
    for key, val in stats.items():
        content = f" {key}: {val}"
        lines.append(f"|{content:<{width}}|")
    lines.append(sep)
    return lines


def print_side_by_side_boxes(title_l, stats_l, title_r, stats_r, col_width=38, gap=3):
    """
    Print two summary boxes side by side.

    Args:
        title_l (str): Left box title
        stats_l (dict): Left box key-value pairs
        title_r (str): Right box title
        stats_r (dict): Right box key-value pairs
        col_width (int): Inner width of each box
        gap (int): Space between the two boxes
    """
    left = _build_box_lines(title_l, stats_l, col_width)
    right = _build_box_lines(title_r, stats_r, col_width)

    # Pad shorter side so both have equal line count
    empty = ' ' * (col_width + 2)
    max_len = max(len(left), len(right))
    left += [empty] * (max_len - len(left))
    right += [empty] * (max_len - len(right))

    spacer = ' ' * gap
    print()
    for l, r in zip(left, right):
        print(f"  {l}{spacer}{r}")
    print()


def print_backlink_preview(backlinks, num_preview=5):
    """
    Print the first few page_id -> back-link sets, sorted by id.

    Args:
        backlinks (dict): page_id (int) -> set of linking page ids
        num_preview (int): Number of pages to preview
    """
    print_step(f"First {num_preview} linked-to pages (sorted by ID):")
    for page_id in sorted(backlinks)[:num_preview]:
        preview = sorted(backlinks[page_id])[:5]
        print(f"      Page {page_id}: {len(backlinks[page_id])} back-links -> {preview}...")
    print()


class Reporter:
    """
    Observer handed to the engine and stages in place of direct printing.

    Args:
        verbose (bool): Also emit debug lines (per-iteration detail).
        quiet (bool): Suppress everything except errors.
    """

    def __init__(self, verbose=False, quiet=False):
        self.verbose = verbose and not quiet
        self.quiet = quiet

    def stage(self, name, message):
        if not self.quiet:
            print_stage(name, message)

    def step(self, message):
        if not self.quiet:
            print_step(message)

    def success(self, message):
        if not self.quiet:
            print_success(message)

    def warning(self, message):
        if not self.quiet:
            print_warning(message)

    def error(self, message):
        print_error(message)

    def debug(self, message):
        if self.verbose:
            print_debug(message)

    def stat(self, label, value):
        if not self.quiet:
            print_stat(label, value)

    def summary(self, title, stats):
        if not self.quiet:
            print_summary_box(title, stats)

    def side_by_side(self, title_l, stats_l, title_r, stats_r):
        if not self.quiet:
            print_side_by_side_boxes(title_l, stats_l, title_r, stats_r)

    def backlink_preview(self, backlinks, num_preview=5):
        if self.verbose:
            print_backlink_preview(backlinks, num_preview)


class Timer:
    """Context manager for timing code blocks."""
    def __init__(self, label="Operation", reporter=None):
        self.label = label
        self.reporter = reporter
        self.start = None
        self.elapsed = None

    def __enter__(self):
        self.start = time.time()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.elapsed = time.time() - self.start
        if exc_type is not None:
            return
        message = f"{self.label} completed in {self.elapsed:.2f}s"
        if self.reporter is not None:
            self.reporter.success(message)
        else:
            print_success(message)

# output.py
#
# Project: Link-file PageRank
#
# Description:
#   Plain-text result files.
#
#   perplexity trace - one perplexity per completed pass, in order
#   score file       - "<page_id> <rank>" per page, registry order
#   sorted dump      - "<page_id>\t<rank>" per page, rank order

import os

from pageranker.errors import OutputWriteError


def write_lines(path, lines):
    """
    Replace the file at path with the given lines (UTF-8, one per line).

    Raises:
        OutputWriteError: if the old file cannot be removed or the new one written
    """
    try:
        if os.path.isfile(path):
            os.remove(path)
        with open(path, 'w', encoding='utf-8') as f:
            for line in lines:
                f.write(f"{line}\n")
    except OSError as e:
        raise OutputWriteError(path, e.strerror) from e


def format_perplexities(perplexities):
    return [str(float(p)) for p in perplexities]


def format_scores(pages):
    return [f"{page.id} {page.rank}" for page in pages]


def format_sorted_scores(pages):
    return [f"{page.id}\t{page.rank}" for page in pages]

# ranker.py
#
# Project: Link-file PageRank
#
# Description:
#   Deterministic ordering of pages: rank descending, then id ascending.


def sorted_pages(pages):
    """Return pages ordered by rank (high first), ties by ascending id."""
    return sorted(pages, key=lambda page: (-page.rank, page.id))


def rank_pages(pages, k):
    """
    Return the ids of the top k pages.

    Args:
        pages (iterable[Page]): Pages to rank
        k (int): Maximum number of ids to return

    Returns:
        list[int]: min(k, len(pages)) page ids, best first
    """
    if k < 0:
        raise ValueError(f"k must be non-negative, got {k}")
    return [page.id for page in sorted_pages(pages)[:k]]

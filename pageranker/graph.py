# graph.py
#
# Project: Link-file PageRank
#
# Description:
#   In-memory graph state owned by one PageRanker run.
#
#   PageRegistry - page_id -> Page (rank, out-link count), kept in the
#                  order pages were first seen.  That order is also the
#                  order of the score file and of every rank vector.
#   GraphStore   - page_id -> frozenset of page ids linking to it.

import numpy as np


class Page:
    """A single page: its id, current rank and number of out-links."""

    __slots__ = ("id", "rank", "out_link_count")

    def __init__(self, page_id, rank=0.0):
        self.id = page_id
        self.rank = rank
        self.out_link_count = 0

    def is_sink(self):
        return self.out_link_count == 0

    def increment_out_link_count(self):
        self.out_link_count += 1

    def __repr__(self):
        return f"Page(id={self.id}, rank={self.rank}, out_links={self.out_link_count})"


class PageRegistry:
    """Insertion-ordered mapping of page id to Page."""

    def __init__(self):
        self._pages = {}

    def __len__(self):
        return len(self._pages)

    def __contains__(self, page_id):
        return page_id in self._pages

    def __iter__(self):
        return iter(self._pages.values())

    def get(self, page_id):
        return self._pages[page_id]

    def ensure(self, page_id):
        """Return the page for page_id, creating it on first reference."""
        page = self._pages.get(page_id)
        if page is None:
            page = Page(page_id)
            self._pages[page_id] = page
        return page

    def ids(self):
        return list(self._pages)

    def ranks(self):
        """Snapshot of page_id -> rank."""
        return {page_id: page.rank for page_id, page in self._pages.items()}

    def rank_vector(self):
        """Ranks as a float64 array in registry order."""
        return np.fromiter((p.rank for p in self._pages.values()), dtype=np.float64, count=len(self._pages))

    def set_uniform(self):
        """Give every page rank 1/N."""
        n = len(self._pages)
        for page in self._pages.values():
            page.rank = 1 / n

    def apply(self, vector):
        """
        Overwrite every rank from a vector aligned with registry order.

        Args:
            vector (np.ndarray): New ranks, one per page, in registry order.
        """
        if len(vector) != len(self._pages):
            raise ValueError(f"Rank vector has {len(vector)} entries for {len(self._pages)} pages")
        for page, rank in zip(self._pages.values(), vector):
            page.rank = float(rank)


class GraphStore:
    """Back-link index: page_id -> set of page ids that link to it."""

    def __init__(self):
        self._backlinks = {}

    def __len__(self):
        return len(self._backlinks)

    def set_backlinks(self, target, sources):
        # One record per target; a later record replaces the earlier set.
        self._backlinks[target] = frozenset(sources)

    def backlinks(self, page_id):
        return self._backlinks.get(page_id, frozenset())

    def items(self):
        return self._backlinks.items()

    def as_dict(self):
        return dict(self._backlinks)

    def edge_count(self):
        return sum(len(sources) for sources in self._backlinks.values())

# stage1_load.py
#
# Project: Link-file PageRank
#
# Description:
#   Stage 1: Read link records and build the GraphStore / PageRegistry.
#
#   Record format (one per line, whitespace separated):
#     <id0> <id1> <id2> ... <idn>
#   id0 is the page being linked to; id1..idn are the pages linking to it.
#
#   Loading always builds into fresh objects and only hands them back once
#   every line parsed, so a failed load never leaves half a graph behind.

import re

from pageranker.errors import InputNotFoundError, LinkParseError
from pageranker.graph import GraphStore, PageRegistry
from pageranker.utils import Reporter, Timer

PAGE_ID_RE = re.compile(r'[+-]?[0-9]+')


def parse_link_line(line, line_no=0):
    """
    Parse one link record into page ids.

    Args:
        line (str): Raw record text
        line_no (int): 1-based line number, used in error messages

    Returns:
        list[int]: [id0, id1, ..., idn], or [] for a blank line

    Raises:
        LinkParseError: if any token is not an integer
    """
    ids = []
    for token in line.split():
        if not PAGE_ID_RE.fullmatch(token):
            raise LinkParseError(line_no, token, line)
        ids.append(int(token))
    return ids


def load_links(lines, reporter=None):
    """
    Build the back-link index and page registry from link records.

    Out-link counters are bumped once per source token, so a source listed
    twice on one line counts twice, while the back-link set keeps it once.

    Args:
        lines (iterable[str]): Link records
        reporter (Reporter|None): Progress observer

    Returns:
        tuple: (GraphStore, PageRegistry)

    Raises:
        LinkParseError: on the first malformed token
    """
    reporter = reporter or Reporter()
    graph = GraphStore()
    registry = PageRegistry()
    records = 0

    for line_no, line in enumerate(lines, start=1):
        ids = parse_link_line(line, line_no)
        if not ids:
            continue
        records += 1

        main_page_id, sources = ids[0], ids[1:]
        registry.ensure(main_page_id)
        for source in sources:
            registry.ensure(source).increment_out_link_count()
        graph.set_backlinks(main_page_id, sources)

    reporter.summary("Stage 1 Summary", {
        "Records": records,
        "Pages": len(registry),
        "Linked-to pages": len(graph),
        "Unique back-links": graph.edge_count(),
    })
    reporter.backlink_preview(graph.as_dict())
    return graph, registry


def read_link_file(path, reporter=None):
    """
    Read a UTF-8 link file from disk and load it.

    Args:
        path (str): Link file path
        reporter (Reporter|None): Progress observer

    Returns:
        tuple: (GraphStore, PageRegistry)

    Raises:
        InputNotFoundError: if the file is missing or unreadable
        LinkParseError: on the first malformed token
    """
    reporter = reporter or Reporter()
    reporter.stage("Load", f"Reading link records from {path}")

    with Timer("Total Stage 1", reporter):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return load_links(f, reporter)
        except OSError as e:
            raise InputNotFoundError(path, e.strerror or str(e)) from e
        except UnicodeDecodeError as e:
            raise InputNotFoundError(path, f"not UTF-8 text: {e.reason}") from e

import pytest

from pageranker.engine import PageRanker
from pageranker.utils import Reporter


@pytest.fixture
def quiet():
    return Reporter(quiet=True)


@pytest.fixture
def make_ranker(quiet):
    """Build a PageRanker loaded from the given link records."""
    def _make(lines, **kwargs):
        ranker = PageRanker(reporter=quiet, **kwargs)
        ranker.load_lines(lines)
        return ranker
    return _make


@pytest.fixture
def link_file(tmp_path):
    """Write link records to a temporary file and return its path."""
    def _write(text, name="links.dat"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write

import random

import numpy as np
import pytest

from pageranker.convergence import ConvergenceMonitor
from pageranker.stage1_load import load_links
from pageranker.stage3_pagerank import DAMPING_FACTOR, RankIterator, run_until_converged
from pageranker.utils import Reporter


def _iterator(lines, quiet):
    graph, registry = load_links(lines, quiet)
    registry.set_uniform()
    return RankIterator(graph, registry), registry


def test_two_cycle_is_a_fixed_point(quiet):
    iterator, registry = _iterator(["1 2", "2 1"], quiet)
    x = registry.rank_vector()

    x_next = iterator.step(x)

    # (1-0.85)/2 + 0.85*0/2 + 0.85*0.5/1
    assert x_next == pytest.approx([0.5, 0.5])


def test_sink_mass_is_redistributed(quiet):
    # 1 -> 2; pages 2 and 3 are sinks
    iterator, registry = _iterator(["2 1", "3"], quiet)
    x = registry.rank_vector()
    assert registry.ids() == [2, 1, 3]

    x_next = iterator.step(x)

    d, n = DAMPING_FACTOR, 3
    base = (1 - d) / n + d * (2 / 3) / n
    assert iterator.sink_mass(x) == pytest.approx(2 / 3)
    assert x_next == pytest.approx([base + d * (1 / 3), base, base])
    assert x_next.sum() == pytest.approx(1.0, abs=1e-12)


def test_update_is_synchronous(quiet):
    # chain 1 -> 2 -> 3
    iterator, registry = _iterator(["2 1", "3 2"], quiet)
    assert registry.ids() == [2, 1, 3]
    x = registry.rank_vector()
    before = x.copy()

    x_next = iterator.step(x)

    d, n = DAMPING_FACTOR, 3
    base = (1 - d) / n + d * (1 / 3) / n
    # page 3 must see page 2's previous rank, not its updated one
    expected = {2: base + d / 3, 1: base, 3: base + d / 3}
    assert x_next == pytest.approx([expected[pid] for pid in registry.ids()])
    np.testing.assert_array_equal(x, before)


def test_rank_sum_stays_one_every_pass(quiet):
    rng = random.Random(528)
    lines = []
    for target in range(1, 40):
        sources = rng.sample(range(1, 60), rng.randint(0, 6))
        lines.append(" ".join(str(i) for i in [target] + sources))
    iterator, registry = _iterator(lines, quiet)

    x = registry.rank_vector()
    assert abs(x.sum() - 1.0) < 1e-9
    for _ in range(30):
        x = iterator.step(x)
        assert abs(x.sum() - 1.0) < 1e-9
        assert (x > 0).all()


def test_run_until_converged_applies_ranks(quiet):
    iterator, registry = _iterator(["1 1"], quiet)

    trace = run_until_converged(iterator, registry, ConvergenceMonitor(), quiet)

    assert registry.get(1).rank == pytest.approx(1.0)
    assert trace == pytest.approx([1.0] * 4)


def test_run_until_converged_respects_cap(quiet):
    iterator, registry = _iterator(["1 2", "2 1"], quiet)

    trace = run_until_converged(iterator, registry, reporter=quiet, max_iterations=2)

    assert len(trace) == 2


class _DebugRecorder(Reporter):
    def __init__(self, verbose):
        super().__init__(verbose=verbose, quiet=not verbose)
        self.debug_lines = []

    def debug(self, message):
        assert self.verbose, "debug line built while not verbose"
        self.debug_lines.append(message)


def test_iteration_debug_only_when_verbose(quiet):
    iterator, registry = _iterator(["1 2", "2 1"], quiet)
    silent = _DebugRecorder(verbose=False)
    run_until_converged(iterator, registry, reporter=silent)
    assert silent.debug_lines == []

    registry.set_uniform()
    chatty = _DebugRecorder(verbose=True)
    trace = run_until_converged(iterator, registry, reporter=chatty)
    assert len(chatty.debug_lines) == len(trace)
    assert chatty.debug_lines[0].startswith("Iteration 1: perplexity=")

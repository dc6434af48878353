import math

import pytest

from pageranker.convergence import CONVERGENCE_ITER_COUNT_LIMIT, ConvergenceMonitor, perplexity


def test_perplexity_of_uniform_distribution():
    assert perplexity([0.25] * 4) == pytest.approx(4.0)
    assert perplexity([0.5, 0.5]) == 2.0


def test_perplexity_treats_zero_rank_as_zero_entropy():
    value = perplexity([1.0, 0.0, 0.0])
    assert not math.isnan(value)
    assert value == 1.0


def test_constant_perplexity_converges_on_fourth_update():
    monitor = ConvergenceMonitor()
    results = [monitor.update(1.0) for _ in range(CONVERGENCE_ITER_COUNT_LIMIT)]
    assert results == [False, False, False, True]
    assert monitor.streak == 1


def test_first_update_compares_against_zero():
    monitor = ConvergenceMonitor()
    # floor(10.5) % 10 == 0 == floor(0) % 10, so the streak starts at 2
    assert monitor.update(10.5) is False
    assert monitor.streak == 2
    assert monitor.update(10.7) is False
    assert monitor.update(20.1) is True


def test_changing_digit_resets_streak():
    monitor = ConvergenceMonitor()
    monitor.update(3.2)
    monitor.update(3.9)
    assert monitor.streak == 2
    monitor.update(4.1)
    assert monitor.streak == 1
    assert monitor.last_perplexity == 4.1


def test_only_units_digit_matters():
    monitor = ConvergenceMonitor()
    monitor.update(183811.0)
    monitor.update(79661.9)
    assert monitor.streak == 2


def test_reset():
    monitor = ConvergenceMonitor()
    monitor.update(5.0)
    monitor.update(5.0)
    monitor.reset()
    assert monitor.streak == 1
    assert monitor.last_perplexity == 0.0

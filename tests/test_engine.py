import pytest

from pageranker.errors import EmptyGraphError, InputNotFoundError, LinkParseError, OutputWriteError


def test_two_cycle_scenario(make_ranker):
    ranker = make_ranker(["1 2", "2 1"])
    ranker.initialize()
    assert ranker.scores() == {1: 0.5, 2: 0.5}

    trace = ranker.run_page_rank()

    assert len(trace) == 4
    assert trace == pytest.approx([2.0] * 4)
    assert ranker.scores()[1] == pytest.approx(0.5)
    assert ranker.scores()[2] == pytest.approx(0.5)


def test_isolated_page_keeps_full_rank(make_ranker):
    ranker = make_ranker(["7"])
    ranker.initialize()

    trace = ranker.run_page_rank()

    assert trace == pytest.approx([1.0] * 4)
    assert ranker.scores() == {7: pytest.approx(1.0)}


def test_self_link_converges_to_one(make_ranker):
    ranker = make_ranker(["1 1"])
    ranker.initialize()
    ranker.run_page_rank()
    assert ranker.scores()[1] == pytest.approx(1.0)


def test_initialize_resets_ranks_after_a_run(make_ranker):
    ranker = make_ranker(["1 2 3 4", "2 1", "3 1", "4 1"])
    ranker.initialize()
    ranker.run_page_rank()
    assert ranker.scores()[1] != pytest.approx(0.25)

    ranker.initialize()

    assert all(rank == 0.25 for rank in ranker.scores().values())
    assert sum(ranker.scores().values()) == pytest.approx(1.0, abs=1e-9)
    assert ranker.perplexities == []
    assert ranker.monitor.streak == 1


def test_hub_is_ranked_first(make_ranker):
    ranker = make_ranker(["1 2 3 4", "2 1", "3 1", "4 1"])
    ranker.initialize()
    ranker.run_page_rank()

    assert ranker.get_ranked_pages(4) == [1, 2, 3, 4]
    assert ranker.get_ranked_pages(1) == [1]
    assert ranker.get_ranked_pages(0) == []
    assert ranker.get_ranked_pages(50) == [1, 2, 3, 4]


def test_ties_broken_by_ascending_id(make_ranker):
    ranker = make_ranker(["9 3", "3 9"])
    ranker.initialize()
    ranker.run_page_rank()
    assert ranker.get_ranked_pages(2) == [3, 9]


def test_is_converge_uses_streak_rule(make_ranker):
    ranker = make_ranker(["1 2", "2 1"])
    ranker.initialize()
    assert ranker.get_perplexity() == 2.0
    assert [ranker.is_converge() for _ in range(4)] == [False, False, False, True]


def test_run_writes_trace_and_scores(make_ranker, tmp_path):
    ranker = make_ranker(["3 1", "1 2", "2 3"])
    ranker.initialize()
    perplexity_out = tmp_path / "perplexity.out"
    scores_out = tmp_path / "pr_scores.out"

    trace = ranker.run_page_rank(str(perplexity_out), str(scores_out))

    trace_lines = perplexity_out.read_text().splitlines()
    assert len(trace_lines) == len(trace)
    assert [float(v) for v in trace_lines] == trace

    score_lines = scores_out.read_text().splitlines()
    assert [line.split(" ")[0] for line in score_lines] == ["3", "1", "2"]
    for line in score_lines:
        page_id, rank = line.split(" ")
        assert float(rank) == ranker.scores()[int(page_id)]


def test_output_files_are_replaced(make_ranker, tmp_path):
    scores_out = tmp_path / "pr_scores.out"
    scores_out.write_text("stale\n" * 10)
    ranker = make_ranker(["1 2", "2 1"])
    ranker.initialize()

    ranker.run_page_rank(None, str(scores_out))

    assert len(scores_out.read_text().splitlines()) == 2


def test_write_failure_keeps_results(make_ranker, tmp_path):
    ranker = make_ranker(["1 2", "2 1"])
    ranker.initialize()
    scores_out = tmp_path / "pr_scores.out"

    with pytest.raises(OutputWriteError):
        ranker.run_page_rank(str(tmp_path / "missing" / "perplexity.out"), str(scores_out))

    assert scores_out.exists()
    assert len(ranker.perplexities) == 4
    assert ranker.get_ranked_pages(2) == [1, 2]


def test_sorted_dump(make_ranker, tmp_path):
    ranker = make_ranker(["1 2 3 4", "2 1", "3 1", "4 1"])
    ranker.initialize()
    ranker.run_page_rank()
    dump = tmp_path / "RawSortedPageRank.txt"

    top = ranker.get_ranked_pages(2, sorted_out=str(dump))

    assert top == [1, 2]
    lines = dump.read_text().splitlines()
    assert [line.split("\t")[0] for line in lines] == ["1", "2", "3", "4"]


def test_empty_graph(make_ranker):
    ranker = make_ranker([])
    with pytest.raises(EmptyGraphError):
        ranker.initialize()
    with pytest.raises(EmptyGraphError):
        ranker.run_page_rank()


def test_failed_load_keeps_previous_graph(make_ranker, tmp_path):
    ranker = make_ranker(["1 2", "2 1"])

    with pytest.raises(LinkParseError):
        ranker.load_lines(["5 6", "6 x"])
    with pytest.raises(InputNotFoundError):
        ranker.load_data(str(tmp_path / "absent.dat"))

    assert ranker.registry.ids() == [1, 2]
    assert ranker.graph.backlinks(1) == {2}


def test_load_data_from_file(make_ranker, link_file):
    ranker = make_ranker([])
    ranker.load_data(link_file("10 20 30\n20 10\n"))
    assert ranker.registry.ids() == [10, 20, 30]
    assert ranker.registry.get(10).out_link_count == 1

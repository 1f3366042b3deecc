"""Tests for top-k relevance ranking."""
import pytest

from docqa import config
from docqa.errors import DegenerateVector, InvalidInput
from docqa.rag.chunker import chunk_text
from docqa.rag.ranker import find_relevant_chunks, rank_chunks

QUERY = [1, 0]
VECTORS = [[1, 0], [0, 1], [0.9, 0.1]]
CHUNKS = ["A", "B", "C"]


def test_selects_top_k_in_rank_order():
    assert find_relevant_chunks(QUERY, VECTORS, CHUNKS, top_k=2) == ["A", "C"]


def test_rank_chunks_exposes_scores_and_indexes():
    ranked = rank_chunks(QUERY, VECTORS, CHUNKS, top_k=3)

    assert [r.index for r in ranked] == [0, 2, 1]
    assert ranked[0].score == pytest.approx(1.0)
    assert ranked[1].score == pytest.approx(0.9939, abs=1e-4)
    assert ranked[2].score == pytest.approx(0.0)


def test_result_is_not_restored_to_document_order():
    vectors = [[0, 1], [0.5, 0.5], [1, 0]]

    assert find_relevant_chunks([1, 0], vectors, ["first", "middle", "last"], top_k=3) == [
        "last",
        "middle",
        "first",
    ]


def test_ties_keep_document_order():
    vectors = [[1, 0], [2, 0], [0, 1], [3, 0]]

    assert find_relevant_chunks([1, 0], vectors, ["w", "x", "y", "z"], top_k=3) == [
        "w",
        "x",
        "z",
    ]


@pytest.mark.parametrize("top_k", [0, -1, 4, 100])
def test_out_of_range_top_k_is_clamped(top_k):
    result = find_relevant_chunks(QUERY, VECTORS, CHUNKS, top_k=top_k)

    assert result == ["A", "C", "B"]


def test_clamp_falls_back_to_default_three():
    vectors = [[1, 0], [0.8, 0.2], [0.6, 0.4], [0.4, 0.6], [0.2, 0.8]]
    chunks = ["a", "b", "c", "d", "e"]

    assert find_relevant_chunks([1, 0], vectors, chunks, top_k=0) == ["a", "b", "c"]
    assert find_relevant_chunks([1, 0], vectors, chunks) == ["a", "b", "c"]


@pytest.mark.parametrize("configured", [0, -2])
def test_clamp_keeps_one_chunk_when_default_is_not_positive(monkeypatch, configured):
    monkeypatch.setattr(config, "RETRIEVAL_TOP_K", configured)

    assert find_relevant_chunks(QUERY, VECTORS, CHUNKS, top_k=0) == ["A"]
    assert find_relevant_chunks(QUERY, VECTORS, CHUNKS) == ["A"]


def test_clamp_with_fewer_chunks_than_default():
    assert find_relevant_chunks([1, 0], [[0, 1], [1, 0]], ["x", "y"], top_k=9) == ["y", "x"]


@pytest.mark.parametrize("top_k", [1, 2, 3, 7])
def test_never_returns_more_than_requested_and_sorted(top_k):
    ranked = rank_chunks(QUERY, VECTORS, CHUNKS, top_k=top_k)
    scores = [r.score for r in ranked]

    assert len(ranked) <= min(top_k, len(CHUNKS))
    assert scores == sorted(scores, reverse=True)


def test_returns_chunk_objects_as_given():
    chunks = chunk_text("alpha beta gamma delta", max_words=2)

    result = find_relevant_chunks([0, 1], [[1, 0], [0, 1]], chunks, top_k=1)

    assert result == [chunks[1]]
    assert result[0] is chunks[1]


@pytest.mark.parametrize(
    "query,vectors,chunks",
    [
        ([], VECTORS, CHUNKS),
        (QUERY, [], CHUNKS),
        (QUERY, VECTORS, []),
        (QUERY, VECTORS, ["A", "B"]),
    ],
)
def test_rejects_invalid_inputs(query, vectors, chunks):
    with pytest.raises(InvalidInput):
        find_relevant_chunks(query, vectors, chunks)


def test_propagates_vector_errors():
    with pytest.raises(DegenerateVector):
        find_relevant_chunks([0, 0], VECTORS, CHUNKS)

    with pytest.raises(InvalidInput):
        find_relevant_chunks([1, 0, 0], VECTORS, CHUNKS)

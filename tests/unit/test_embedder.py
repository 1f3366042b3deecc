"""Tests for batched embedding generation."""
from unittest.mock import AsyncMock

import pytest

from docqa.errors import EmbeddingServiceError, InvalidInput
from docqa.rag import embedder as embedder_module
from docqa.rag.embedder import BatchEmbedder
from tests.conftest import KeywordEmbeddingClient, keyword_vector


@pytest.fixture
def sleep_mock(monkeypatch) -> AsyncMock:
    """Replace the inter-batch pause with a recorder."""
    mock = AsyncMock()
    monkeypatch.setattr(embedder_module.asyncio, "sleep", mock)
    return mock


async def test_batches_preserve_order(embedding_client, sleep_mock):
    texts = [f"text {i} grace" if i % 2 else f"text {i}" for i in range(25)]
    embedder = BatchEmbedder(client=embedding_client, batch_size=10, batch_delay=0.2)

    vectors = await embedder.embed(texts)

    assert [len(b) for b in embedding_client.batches] == [10, 10, 5]
    assert sum(embedding_client.batches, []) == texts
    assert vectors == [keyword_vector(t) for t in texts]


async def test_pauses_between_batches_only(embedding_client, sleep_mock):
    embedder = BatchEmbedder(client=embedding_client, batch_size=10, batch_delay=0.2)

    await embedder.embed([f"t{i}" for i in range(25)])

    assert sleep_mock.await_count == 2
    sleep_mock.assert_awaited_with(0.2)


async def test_single_batch_never_pauses(embedding_client, sleep_mock):
    embedder = BatchEmbedder(client=embedding_client, batch_size=10, batch_delay=0.2)

    await embedder.embed([f"t{i}" for i in range(10)])

    sleep_mock.assert_not_awaited()


async def test_zero_delay_disables_pause(embedding_client, sleep_mock):
    embedder = BatchEmbedder(client=embedding_client, batch_size=2, batch_delay=0)

    await embedder.embed(["a", "b", "c", "d", "e"])

    assert len(embedding_client.batches) == 3
    sleep_mock.assert_not_awaited()


async def test_defaults_from_config(embedding_client):
    embedder = BatchEmbedder(client=embedding_client)

    assert embedder.batch_size == 10
    assert embedder.batch_delay == pytest.approx(0.2)


@pytest.mark.parametrize("texts", [[], None, ""])
async def test_rejects_empty_input(embedding_client, texts):
    with pytest.raises(InvalidInput):
        await BatchEmbedder(client=embedding_client).embed(texts)

    assert embedding_client.batches == []


async def test_service_errors_are_normalized(sleep_mock):
    client = KeywordEmbeddingClient(fail_on="boom")
    embedder = BatchEmbedder(client=client, batch_size=2, batch_delay=0)

    with pytest.raises(EmbeddingServiceError) as exc_info:
        await embedder.embed(["ok", "fine", "boom", "never sent"])

    assert str(exc_info.value) == "Failed to generate embeddings"
    assert "429" not in str(exc_info.value)
    assert exc_info.value.__cause__ is None
    assert len(client.batches) == 2


async def test_count_mismatch_is_a_service_error():
    client = AsyncMock()
    client.embed_batch.return_value = [[0.1, 0.2]]

    with pytest.raises(EmbeddingServiceError):
        await BatchEmbedder(client=client, batch_delay=0).embed(["one", "two"])


async def test_inconsistent_dimensions_are_a_service_error():
    client = AsyncMock()
    client.embed_batch.side_effect = [[[0.1, 0.2]], [[0.1, 0.2, 0.3]]]

    with pytest.raises(EmbeddingServiceError):
        await BatchEmbedder(client=client, batch_size=1, batch_delay=0).embed(["a", "b"])


@pytest.mark.parametrize("batch_size", [0, -1, 2.5, True])
def test_rejects_invalid_batch_size(embedding_client, batch_size):
    with pytest.raises(InvalidInput):
        BatchEmbedder(client=embedding_client, batch_size=batch_size)

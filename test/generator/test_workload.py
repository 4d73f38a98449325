import pytest
from pytest_mock import MockerFixture

from changebench.components.config_parser import GeneratorParams
from changebench.generator import WorkloadGenerator, generate_payload, seed_documents


def test_generate_payload():
    payload = generate_payload(2)

    assert len(payload) == 2048
    assert payload.isalnum()


def test_seed_documents_are_chunked():
    chunks = list(seed_documents(5, "x", chunk_size=2))

    assert [len(chunk) for chunk in chunks] == [2, 2, 1]
    assert [doc["docId"] for chunk in chunks for doc in chunk] == [0, 1, 2, 3, 4]
    assert all(doc["version"] == 0 and doc["payload"] == "x" for chunk in chunks for doc in chunk)


@pytest.fixture
def collection(mocker: MockerFixture):
    collection = mocker.MagicMock()
    collection.drop = mocker.AsyncMock()
    collection.insert_many = mocker.AsyncMock()
    collection.update_one = mocker.AsyncMock(return_value=mocker.MagicMock(modified_count=1))
    return collection


@pytest.fixture
def generator(collection, mocker: MockerFixture) -> WorkloadGenerator:
    store = mocker.MagicMock()
    store.collection = collection
    return WorkloadGenerator(
        store, GeneratorParams({"insert_chunk_size": 4, "update_concurrency": 3})
    )


@pytest.mark.asyncio
async def test_seed_drops_then_inserts(generator: WorkloadGenerator, collection):
    inserted = await generator.seed(10, 1)

    assert inserted == 10
    collection.drop.assert_awaited_once()
    assert collection.insert_many.await_count == 3
    first_chunk = collection.insert_many.await_args_list[0].args[0]
    assert [doc["docId"] for doc in first_chunk] == [0, 1, 2, 3]
    assert len(first_chunk[0]["payload"]) == 1024


@pytest.mark.asyncio
async def test_update_touches_every_document(generator: WorkloadGenerator, collection):
    modified = await generator.update(7)

    assert modified == 7
    filters = sorted(call.args[0]["docId"] for call in collection.update_one.await_args_list)
    assert filters == list(range(7))
    assert all(
        call.args[1] == {"$set": {"version": 1}} for call in collection.update_one.await_args_list
    )


@pytest.mark.asyncio
async def test_run_seeds_before_updating(generator: WorkloadGenerator, collection, mocker):
    manager = mocker.MagicMock()
    manager.attach_mock(collection.insert_many, "insert_many")
    manager.attach_mock(collection.update_one, "update_one")

    await generator.run(2, 0)

    assert [name for name, *_ in manager.mock_calls] == ["insert_many", "update_one", "update_one"]

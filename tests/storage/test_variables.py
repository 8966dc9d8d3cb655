"""Tests for the variable store implementations."""

import json

import pytest

from tianshan import storage
from tianshan.storage import FileVariableStore, MemoryVariableStore, StoreUnavailable


@pytest.mark.asyncio
async def test_file_store_roundtrip():
    store = FileVariableStore(storage.variables_path())
    assert await store.get("gameData") is None
    await store.set("gameData", '{"a": 1}')
    await store.set("lastMessage_jxz", "xin chào")
    assert await store.get("gameData") == '{"a": 1}'
    on_disk = json.loads(storage.variables_path().read_text(encoding="utf-8"))
    assert on_disk == {"gameData": '{"a": 1}', "lastMessage_jxz": "xin chào"}


@pytest.mark.asyncio
async def test_file_store_non_string_value_reads_as_json(tmp_path):
    path = tmp_path / "variables.json"
    path.write_text(json.dumps({"gameData": {"a": 1}}))
    assert await FileVariableStore(path).get("gameData") == '{"a": 1}'


@pytest.mark.asyncio
async def test_file_store_corrupt_file(tmp_path):
    path = tmp_path / "variables.json"
    path.write_text("{broken")
    with pytest.raises(StoreUnavailable):
        await FileVariableStore(path).get("gameData")


@pytest.mark.asyncio
async def test_file_store_not_an_object(tmp_path):
    path = tmp_path / "variables.json"
    path.write_text("[1, 2]")
    with pytest.raises(StoreUnavailable):
        await FileVariableStore(path).set("k", "v")


@pytest.mark.asyncio
async def test_memory_store():
    store = MemoryVariableStore({"k": "v"})
    assert await store.get("k") == "v"
    await store.set("k", "w")
    assert store.values == {"k": "w"}
    assert await store.get("missing") is None

"""
Tests for the in-memory document store
"""

import pytest
from task_api.api.memory_store import InMemoryDocumentStore


@pytest.mark.asyncio
async def test_set_and_get(memory_client):
    """Test storing and reading a document"""
    await memory_client.set("tasks", "a", {"title": "A"})
    assert await memory_client.get("tasks", "a") == {"title": "A"}
    assert await memory_client.get("tasks", "missing") is None
    assert await memory_client.get("other", "a") is None


@pytest.mark.asyncio
async def test_documents_are_copied(memory_client):
    """Test that callers cannot mutate stored documents"""
    document = {"title": "A", "nested": {"x": 1}}
    await memory_client.set("tasks", "a", document)
    document["nested"]["x"] = 2
    
    fetched = await memory_client.get("tasks", "a")
    fetched["title"] = "changed"
    
    assert await memory_client.get("tasks", "a") == {"title": "A", "nested": {"x": 1}}


@pytest.mark.asyncio
async def test_set_overwrites(memory_client):
    """Test that set replaces the whole document"""
    await memory_client.set("tasks", "a", {"title": "A", "assignee": "sam"})
    await memory_client.set("tasks", "a", {"title": "B"})
    assert await memory_client.get("tasks", "a") == {"title": "B"}


@pytest.mark.asyncio
async def test_query_equality():
    """Test equality filtering"""
    store = InMemoryDocumentStore({"tasks": {
        "a": {"status": "PENDING"},
        "b": {"status": "COMPLETED"},
        "c": {},
    }})
    assert await store.query("tasks", "status", "COMPLETED") == [("b", {"status": "COMPLETED"})]
    assert await store.query("tasks", "status", None) == []


@pytest.mark.asyncio
async def test_get_all_and_delete():
    """Test listing and idempotent deletion"""
    store = InMemoryDocumentStore({"tasks": {"a": {"title": "A"}, "b": {"title": "B"}}})
    
    await store.delete("tasks", "a")
    await store.delete("tasks", "a")
    
    assert await store.get_all("tasks") == [("b", {"title": "B"})]
    assert await store.get_all("empty") == []

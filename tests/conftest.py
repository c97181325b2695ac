"""
Pytest configuration and fixtures
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient
from task_api.api.document_store import DocumentStoreClient
from task_api.api.memory_store import InMemoryDocumentStore
from task_api.services.task_store import TaskStore
from task_api.services.task_service import TaskService
from task_api.utils.error_handler import StoreTransportError
from task_api.web.main import create_app
from sample_data import CREATED, UPDATED, DUE, LEGACY_NESTED_DATETIME


@pytest.fixture
def current_document():
    """Document written by the current service version"""
    return {
        "title": "Write report",
        "description": "Quarterly numbers",
        "status": "IN_PROGRESS",
        "assignee": "alex",
        "firestoreCreatedAt": CREATED,
        "firestoreUpdatedAt": UPDATED,
        "firestoreDueDate": DUE,
    }


@pytest.fixture
def legacy_document():
    """Document written by an old service version"""
    return {
        "title": "Legacy task",
        "description": "Imported",
        "status": "COMPLETED",
        "createdAt": LEGACY_NESTED_DATETIME,
        "updatedAt": UPDATED,
    }


@pytest.fixture
def memory_client():
    """Empty in-memory document store"""
    return InMemoryDocumentStore()


@pytest.fixture
def task_store(memory_client):
    """Task store over the in-memory client"""
    return TaskStore(memory_client)


@pytest.fixture
def task_service(task_store):
    """Task service over the in-memory store"""
    return TaskService(task_store)


@pytest.fixture
def failing_client():
    """Document store client whose every call fails at the transport level"""
    client = MagicMock(spec=DocumentStoreClient)
    error = StoreTransportError("connection refused")
    client.get = AsyncMock(side_effect=error)
    client.get_all = AsyncMock(side_effect=error)
    client.query = AsyncMock(side_effect=error)
    client.set = AsyncMock(side_effect=error)
    client.delete = AsyncMock(side_effect=error)
    client.close = AsyncMock(return_value=None)
    return client


@pytest.fixture
def api_client(memory_client):
    """HTTP test client for an app over the in-memory store"""
    return TestClient(create_app(memory_client))

"""
Tests for the task document codec
"""

import pytest
from datetime import datetime, timedelta, timezone
from task_api.models.task import Task, TaskStatus
from task_api.services.task_codec import (
    ABSENT,
    LegacyNestedValue,
    TaskCodec,
    TimestampValue,
    classify_timestamp,
)
from task_api.utils.date_utils import get_current_datetime
from task_api.utils.error_handler import DocumentDecodeError
from sample_data import CREATED, UPDATED, DUE, LEGACY_NESTED_DATETIME


@pytest.fixture
def codec():
    return TaskCodec()


def _is_recent(value: datetime) -> bool:
    return abs(get_current_datetime() - value) < timedelta(seconds=5)


def test_classify_timestamp_variants():
    """Test that raw values map to the right variant"""
    assert classify_timestamp(CREATED) == TimestampValue(CREATED)
    assert classify_timestamp(LEGACY_NESTED_DATETIME) == LegacyNestedValue(LEGACY_NESTED_DATETIME)
    assert classify_timestamp(None) is ABSENT
    assert classify_timestamp("2024-03-01T09:30:00") is ABSENT


def test_classify_naive_timestamp_as_utc():
    """Test that naive datetimes are read as UTC"""
    naive = datetime(2024, 3, 1, 9, 30)
    assert classify_timestamp(naive) == TimestampValue(naive.replace(tzinfo=timezone.utc))


def test_decode_missing_document_returns_none(codec):
    """Test decoding a document that does not exist"""
    assert codec.decode("abc", None) is None


def test_decode_current_document(codec, current_document):
    """Test decoding a document with current field names"""
    task = codec.decode("task-1", current_document)
    
    assert task.id == "task-1"
    assert task.title == "Write report"
    assert task.description == "Quarterly numbers"
    assert task.status == TaskStatus.IN_PROGRESS
    assert task.assignee == "alex"
    assert task.created_at == CREATED
    assert task.updated_at == UPDATED
    assert task.due_date == DUE


def test_decode_prefers_current_field_over_legacy(codec, current_document):
    """Test that the current field wins when both generations are present"""
    current_document["createdAt"] = datetime(2020, 1, 1, tzinfo=timezone.utc)
    task = codec.decode("task-1", current_document)
    assert task.created_at == CREATED


def test_decode_legacy_timestamp_fields(codec):
    """Test that legacy field names are used when current ones are missing"""
    task = codec.decode("old", {
        "title": "Old",
        "createdAt": CREATED,
        "updatedAt": UPDATED,
        "dueDate": DUE,
    })
    assert task.created_at == CREATED
    assert task.updated_at == UPDATED
    assert task.due_date == DUE


def test_decode_legacy_nested_timestamp_does_not_fail(codec, legacy_document):
    """Test that a nested-map timestamp falls back to the current time"""
    legacy_document["dueDate"] = LEGACY_NESTED_DATETIME
    task = codec.decode("legacy", legacy_document)
    
    assert task.created_at is not None
    assert _is_recent(task.created_at)
    assert task.due_date is not None
    assert _is_recent(task.due_date)
    assert task.updated_at >= task.created_at


def test_decode_missing_timestamps(codec):
    """Test defaults when no timestamp fields are stored"""
    task = codec.decode("bare", {"title": "Bare"})
    
    assert _is_recent(task.created_at)
    assert _is_recent(task.updated_at)
    assert task.updated_at >= task.created_at
    assert task.due_date is None


def test_decode_unusable_legacy_value_treated_as_absent(codec):
    """Test that a string in a legacy timestamp field is ignored"""
    task = codec.decode("str", {"title": "Str", "createdAt": "yesterday", "dueDate": "soon"})
    assert _is_recent(task.created_at)
    assert task.due_date is None


@pytest.mark.parametrize("stored", ["bogus", "completed", "", 3, None])
def test_decode_unknown_status_defaults_to_pending(codec, current_document, stored):
    """Test that unrecognized statuses read as PENDING"""
    current_document["status"] = stored
    task = codec.decode("task-1", current_document)
    assert task.status == TaskStatus.PENDING


def test_decode_non_string_title_raises(codec, current_document):
    """Test that structurally broken documents are rejected"""
    current_document["title"] = 42
    with pytest.raises(DocumentDecodeError) as exc_info:
        codec.decode("broken", current_document)
    assert exc_info.value.document_id == "broken"


def test_decode_keeps_updated_at_not_before_created_at(codec):
    """Test that updatedAt is raised to createdAt when stored earlier"""
    task = codec.decode("skewed", {
        "title": "Skewed",
        "firestoreCreatedAt": UPDATED,
        "firestoreUpdatedAt": CREATED,
    })
    assert task.created_at == UPDATED
    assert task.updated_at == UPDATED


def test_encode_writes_current_field_names(codec):
    """Test the stored shape of a task"""
    task = Task(
        id="task-1",
        title="Write report",
        status=TaskStatus.COMPLETED,
        created_at=CREATED,
        updated_at=UPDATED,
    )
    document = codec.encode(task)
    
    assert document == {
        "title": "Write report",
        "description": None,
        "status": "COMPLETED",
        "assignee": None,
        "firestoreCreatedAt": CREATED,
        "firestoreUpdatedAt": UPDATED,
        "firestoreDueDate": None,
    }
    assert "id" not in document
    assert "createdAt" not in document


def test_encode_after_decode_preserves_document(codec, current_document):
    """Test that a current-format document survives decode and encode unchanged"""
    assert codec.encode(codec.decode("task-1", current_document)) == current_document

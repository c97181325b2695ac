"""
Conversion between stored task documents and Task models

The collection holds documents written by several versions of the service.
Timestamps may be stored under the current field names
(firestoreCreatedAt, firestoreUpdatedAt, firestoreDueDate) or under the
legacy names (createdAt, updatedAt, dueDate). Old writers sometimes stored
the legacy fields as a nested map of date parts instead of a timestamp.
Decoding never rejects a document for its timestamps: unusable values fall
back to the current time.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any, Union, Tuple
from task_api.api.document_store import Document
from task_api.config.constants import CREATED_AT_FIELDS, UPDATED_AT_FIELDS, DUE_DATE_FIELDS
from task_api.models.task import Task, TaskStatus
from task_api.utils.date_utils import ensure_utc, get_current_datetime
from task_api.utils.error_handler import DocumentDecodeError
from task_api.utils.logger import logger


@dataclass(frozen=True)
class TimestampValue:
    """A stored value that is a real timestamp"""
    value: datetime


@dataclass(frozen=True)
class LegacyNestedValue:
    """A date-time stored as a nested map by an old writer"""
    value: Mapping


@dataclass(frozen=True)
class Absent:
    """Field missing, null, or of a type that is not a timestamp"""


ABSENT = Absent()

StoredTimestamp = Union[TimestampValue, LegacyNestedValue, Absent]


def classify_timestamp(raw: Any) -> StoredTimestamp:
    """
    Classify a raw stored value
    
    Args:
        raw: Value as read from the document
        
    Returns:
        TimestampValue, LegacyNestedValue or ABSENT
    """
    if isinstance(raw, datetime):
        return TimestampValue(ensure_utc(raw))
    if isinstance(raw, Mapping):
        return LegacyNestedValue(raw)
    return ABSENT


def resolve_timestamp(
    document: Document,
    fields: Tuple[str, str],
    required: bool,
) -> Optional[datetime]:
    """
    Pick a timestamp from a document
    
    Order: current field as timestamp, legacy field as timestamp,
    legacy nested map (current time), then current time when ``required``
    or None otherwise.
    
    Args:
        document: Raw stored document
        fields: (legacy field name, current field name)
        required: Whether a missing value defaults to the current time
        
    Returns:
        Resolved timestamp, or None for a missing optional value
    """
    legacy_field, current_field = fields
    
    current = classify_timestamp(document.get(current_field))
    if isinstance(current, TimestampValue):
        return current.value
    
    legacy = classify_timestamp(document.get(legacy_field))
    if isinstance(legacy, TimestampValue):
        return legacy.value
    if isinstance(legacy, LegacyNestedValue):
        logger.debug(f"[TaskCodec] '{legacy_field}' stored as nested map, using current time")
        return get_current_datetime()
    
    if required:
        return get_current_datetime()
    return None


class TaskCodec:
    """Decodes stored documents to tasks and encodes tasks for storage"""
    
    def __init__(self):
        self.logger = logger
    
    @staticmethod
    def _optional_str(document_id: str, document: Document, field: str) -> Optional[str]:
        value = document.get(field)
        if value is not None and not isinstance(value, str):
            raise DocumentDecodeError(
                document_id, f"field '{field}' is {type(value).__name__}, expected string"
            )
        return value
    
    def decode(self, document_id: str, document: Optional[Document]) -> Optional[Task]:
        """
        Convert a stored document to a Task
        
        Args:
            document_id: Id of the document in its collection
            document: Raw document, or None if it does not exist
            
        Returns:
            Task, or None if the document does not exist
            
        Raises:
            DocumentDecodeError: If a text field holds a non-string value
        """
        if document is None:
            return None
        
        created_at = resolve_timestamp(document, CREATED_AT_FIELDS, required=True)
        updated_at = resolve_timestamp(document, UPDATED_AT_FIELDS, required=True)
        if updated_at < created_at:
            updated_at = created_at
        
        return Task(
            id=document_id,
            title=self._optional_str(document_id, document, "title"),
            description=self._optional_str(document_id, document, "description"),
            assignee=self._optional_str(document_id, document, "assignee"),
            status=TaskStatus.from_stored(document.get("status")),
            created_at=created_at,
            updated_at=updated_at,
            due_date=resolve_timestamp(document, DUE_DATE_FIELDS, required=False),
        )
    
    def encode(self, task: Task) -> Dict[str, Any]:
        """
        Convert a Task to a document for storage
        
        The id is the document key and is not stored as a field. Timestamps
        are written under the current field names only.
        
        Args:
            task: Task to encode
            
        Returns:
            Document fields
        """
        return {
            "title": task.title,
            "description": task.description,
            "status": task.status.value,
            "assignee": task.assignee,
            CREATED_AT_FIELDS[1]: task.created_at,
            UPDATED_AT_FIELDS[1]: task.updated_at,
            DUE_DATE_FIELDS[1]: task.due_date,
        }

"""
Task model
"""

from enum import Enum
from typing import Optional, Any
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict, field_validator
from task_api.config.constants import TITLE_MAX_LENGTH, DESCRIPTION_MAX_LENGTH
from task_api.utils.date_utils import ensure_utc, get_current_datetime, next_timestamp
from task_api.utils.error_handler import InvalidEnumValueError


class TaskStatus(str, Enum):
    """Task status. Any status may move to any other."""
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    
    @classmethod
    def from_stored(cls, value: Any) -> "TaskStatus":
        """
        Read a status as stored in a document
        
        Stored values must match a member name exactly; anything else
        (unknown names, non-strings, missing) reads as PENDING.
        
        Args:
            value: Raw stored value
            
        Returns:
            Task status
        """
        if isinstance(value, str) and value in cls.__members__:
            return cls[value]
        return cls.PENDING
    
    @classmethod
    def from_token(cls, token: str) -> "TaskStatus":
        """
        Parse a client-supplied status token, ignoring case
        
        Args:
            token: Status token, e.g. "in_progress"
            
        Returns:
            Task status
            
        Raises:
            InvalidEnumValueError: If the token names no status
        """
        name = token.strip().upper()
        if name not in cls.__members__:
            raise InvalidEnumValueError("status", token, tuple(cls.__members__))
        return cls[name]


class Task(BaseModel):
    """Task model"""
    
    model_config = ConfigDict(populate_by_name=True)
    
    id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    assignee: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
    due_date: Optional[datetime] = Field(None, alias="dueDate")
    
    @field_validator("created_at", "updated_at", "due_date")
    @classmethod
    def timestamps_in_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None
    
    @classmethod
    def new(cls, title: str, description: Optional[str] = None, **fields: Any) -> "Task":
        """Build a fresh task with createdAt and updatedAt set to the same instant"""
        now = get_current_datetime()
        return cls(
            title=title,
            description=description,
            created_at=now,
            updated_at=now,
            **fields,
        )
    
    def touch(self) -> None:
        """Stamp updatedAt after a mutation; always moves forward"""
        floor = self.updated_at or self.created_at
        self.updated_at = next_timestamp(floor)


class TaskRequest(BaseModel):
    """
    Task payload accepted by POST and PUT
    
    Timestamps other than dueDate are server-managed and ignored if sent.
    """
    
    model_config = ConfigDict(populate_by_name=True)
    
    id: Optional[str] = None
    title: str = Field(..., max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    status: TaskStatus = TaskStatus.PENDING
    assignee: Optional[str] = None
    due_date: Optional[datetime] = Field(None, alias="dueDate")
    
    @field_validator("due_date")
    @classmethod
    def due_date_in_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None
    
    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Title is required")
        return value
    
    def to_task(self) -> Task:
        """Convert to an unsaved task; the store assigns timestamps on save"""
        return Task(
            id=self.id or None,
            title=self.title,
            description=self.description,
            status=self.status,
            assignee=self.assignee,
            due_date=self.due_date,
        )

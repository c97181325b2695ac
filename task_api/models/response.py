"""
Response models for API responses
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error response model"""
    message: str
    error_code: Optional[str] = None
    details: Optional[dict] = None


class HealthResponse(BaseModel):
    """Liveness payload"""
    status: str = "UP"
    timestamp: datetime
    service: str
    version: str


class RootResponse(BaseModel):
    """Welcome payload with links to the main endpoints"""
    message: str
    documentation: str = "/docs"
    health: str = "/health"
    api: str = "/api/tasks"

"""
HTTP interface for the task API
"""

from typing import Optional, List
from fastapi import APIRouter, Depends, FastAPI, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from task_api.api.document_store import DocumentStoreClient
from task_api.api.firestore_client import FirestoreClient
from task_api.api.memory_store import InMemoryDocumentStore
from task_api.config.constants import SERVICE_NAME, SERVICE_VERSION
from task_api.config.settings import settings
from task_api.models.response import ErrorResponse, HealthResponse, RootResponse
from task_api.models.task import Task, TaskRequest, TaskStatus
from task_api.services.task_service import TaskService
from task_api.services.task_store import TaskStore
from task_api.utils.date_utils import get_current_datetime
from task_api.utils.error_handler import NotFoundError, TaskApiError, ValidationError, handle_error
from task_api.utils.logger import logger


router = APIRouter(prefix="/api/tasks", tags=["tasks"])
health_router = APIRouter(tags=["health"])


def build_store_client() -> DocumentStoreClient:
    """Create the document store client selected by settings"""
    settings.validate()
    if settings.STORE_BACKEND == "firestore":
        return FirestoreClient()
    logger.warning("[Startup] Using in-memory document store; data is lost on restart")
    return InMemoryDocumentStore()


def get_task_service(request: Request) -> TaskService:
    """Resolve the service built for this application"""
    return request.app.state.task_service


@router.get("", response_model=List[Task])
async def get_all_tasks(service: TaskService = Depends(get_task_service)):
    """List all tasks"""
    return await service.get_all_tasks()


@router.get("/search", response_model=List[Task])
async def search_tasks(
    keyword: str = Query(...),
    service: TaskService = Depends(get_task_service),
):
    """Case-insensitive search in title and description"""
    return await service.search_tasks(keyword)


@router.get("/status/{status}", response_model=List[Task])
async def get_tasks_by_status(status: str, service: TaskService = Depends(get_task_service)):
    """List tasks with a status (token is case-insensitive)"""
    return await service.get_tasks_by_status(TaskStatus.from_token(status))


@router.get("/{task_id}", response_model=Task)
async def get_task_by_id(task_id: str, service: TaskService = Depends(get_task_service)):
    """Get one task"""
    task = await service.get_task_by_id(task_id)
    if task is None:
        raise NotFoundError(task_id)
    return task


@router.post("", response_model=Task, status_code=201)
async def create_task(payload: TaskRequest, service: TaskService = Depends(get_task_service)):
    """Create a task"""
    return await service.create_task(payload.to_task())


@router.put("/{task_id}", response_model=Task)
async def update_task(
    task_id: str,
    payload: TaskRequest,
    service: TaskService = Depends(get_task_service),
):
    """Update a task"""
    return await service.update_task(task_id, payload.to_task())


@router.delete("/{task_id}", status_code=204)
async def delete_task(task_id: str, service: TaskService = Depends(get_task_service)):
    """Delete a task"""
    await service.delete_task(task_id)
    return Response(status_code=204)


@health_router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint"""
    return HealthResponse(
        timestamp=get_current_datetime(),
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
    )


@health_router.get("/", response_model=RootResponse)
async def index():
    """Welcome page with links"""
    return RootResponse(message=f"Welcome to {SERVICE_NAME}")


def _error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def task_api_error_handler(request: Request, exc: TaskApiError) -> JSONResponse:
    status_code, body = handle_error(exc)
    return _error_response(status_code, body)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]
    status_code, body = handle_error(ValidationError(
        f"Validation failed for {request.method} {request.url.path}",
        {"errors": errors},
    ))
    return _error_response(status_code, body)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    status_code, body = handle_error(exc)
    return _error_response(status_code, body)


def create_app(store_client: Optional[DocumentStoreClient] = None) -> FastAPI:
    """
    Build the application
    
    The store client, store and service are created here and kept on
    app.state; nothing else holds them.
    
    Args:
        store_client: Document store client (default: chosen by settings)
        
    Returns:
        FastAPI application
    """
    client = store_client if store_client is not None else build_store_client()
    
    app = FastAPI(title=SERVICE_NAME, version=SERVICE_VERSION)
    app.state.store_client = client
    app.state.task_service = TaskService(TaskStore(client))
    
    app.add_exception_handler(TaskApiError, task_api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
    
    app.include_router(router)
    app.include_router(health_router)
    
    @app.on_event("startup")
    async def startup():
        """Log the configured backend on startup"""
        logger.info(f"[Startup] {SERVICE_NAME} {SERVICE_VERSION} using {type(client).__name__}")
    
    @app.on_event("shutdown")
    async def shutdown():
        """Release the store client"""
        await client.close()
        logger.info("[Shutdown] Store client closed")
    
    return app


app = create_app()

"""
Task management service
"""

from typing import Optional, List
from task_api.models.task import Task, TaskStatus
from task_api.services.task_store import TaskStore
from task_api.utils.error_handler import NotFoundError
from task_api.utils.logger import logger


def apply_update(task: Task, patch: Task) -> Task:
    """
    Merge an update payload into an existing task, then stamp it
    
    title, description and status are always overwritten, even with None or
    the same value. due_date and assignee are only overwritten when the patch
    carries a value, so omitting them keeps the previous ones.
    
    Args:
        task: Existing task; modified in place
        patch: Update payload
        
    Returns:
        The updated task
    """
    task.title = patch.title
    task.description = patch.description
    task.status = patch.status
    if patch.due_date is not None:
        task.due_date = patch.due_date
    if patch.assignee is not None:
        task.assignee = patch.assignee
    task.touch()
    return task


class TaskService:
    """
    Request-level task operations
    
    Updates read then write with no version check; concurrent updates of the
    same task are last-write-wins.
    """
    
    def __init__(self, store: TaskStore):
        """
        Initialize task service
        
        Args:
            store: Task store
        """
        self.store = store
        self.logger = logger
    
    async def get_all_tasks(self) -> List[Task]:
        return await self.store.find_all()
    
    async def get_task_by_id(self, task_id: str) -> Optional[Task]:
        return await self.store.find_by_id(task_id)
    
    async def create_task(self, task: Task) -> Task:
        """Persist a new task; ids are expected to be left empty by callers"""
        created = await self.store.save(task)
        self.logger.info(f"Created task {created.id}: '{created.title}'")
        return created
    
    async def update_task(self, task_id: str, patch: Task) -> Task:
        """
        Update an existing task
        
        Args:
            task_id: Task ID
            patch: Update payload (see apply_update for merge rules)
            
        Returns:
            Updated task
            
        Raises:
            NotFoundError: If no task has this id; nothing is written
        """
        existing = await self.store.find_by_id(task_id)
        if existing is None:
            raise NotFoundError(task_id)
        
        updated = await self.store.save(apply_update(existing, patch))
        self.logger.info(f"Updated task {task_id} (status={updated.status.value})")
        return updated
    
    async def delete_task(self, task_id: str) -> None:
        """
        Delete an existing task
        
        Raises:
            NotFoundError: If no task has this id; nothing is deleted
        """
        if not await self.store.exists_by_id(task_id):
            raise NotFoundError(task_id)
        await self.store.delete_by_id(task_id)
        self.logger.info(f"Deleted task {task_id}")
    
    async def get_tasks_by_status(self, status: TaskStatus) -> List[Task]:
        return await self.store.find_by_status(status)
    
    async def search_tasks(self, keyword: str) -> List[Task]:
        return await self.store.find_by_title_or_description_containing(keyword)

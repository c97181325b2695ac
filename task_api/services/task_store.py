"""
Task persistence on top of a document store
"""

import uuid
from typing import Optional, List, Tuple
from task_api.api.document_store import DocumentStoreClient, Document
from task_api.config.constants import TASKS_COLLECTION
from task_api.models.task import Task, TaskStatus
from task_api.services.task_codec import TaskCodec
from task_api.utils.date_utils import get_current_datetime
from task_api.utils.error_handler import DocumentDecodeError
from task_api.utils.logger import logger


class TaskStore:
    """
    CRUD and queries for tasks in one document collection
    
    All persistence specifics live behind the DocumentStoreClient passed in.
    Transport failures from the client propagate unchanged as
    StoreTransportError; "not found" is reported as None or False.
    """
    
    def __init__(
        self,
        client: DocumentStoreClient,
        codec: Optional[TaskCodec] = None,
        collection: str = TASKS_COLLECTION,
    ):
        """
        Initialize task store
        
        Args:
            client: Document store client
            codec: Document codec (default TaskCodec)
            collection: Collection holding task documents
        """
        self.client = client
        self.codec = codec or TaskCodec()
        self.collection = collection
        self.logger = logger
    
    def _decode_all(self, documents: List[Tuple[str, Document]]) -> List[Task]:
        """Decode documents, skipping the ones that cannot be decoded"""
        tasks = []
        for document_id, document in documents:
            try:
                task = self.codec.decode(document_id, document)
            except DocumentDecodeError as e:
                self.logger.warning(f"[TaskStore] Skipping document: {e}")
                continue
            if task is not None:
                tasks.append(task)
        return tasks
    
    async def find_all(self) -> List[Task]:
        """Get every task in the collection"""
        documents = await self.client.get_all(self.collection)
        return self._decode_all(documents)
    
    async def find_by_id(self, task_id: str) -> Optional[Task]:
        """
        Get a task by id
        
        Args:
            task_id: Task ID
            
        Returns:
            Task, or None if absent or undecodable
        """
        document = await self.client.get(self.collection, task_id)
        try:
            return self.codec.decode(task_id, document)
        except DocumentDecodeError as e:
            self.logger.error(f"[TaskStore] {e}")
            return None
    
    async def save(self, task: Task) -> Task:
        """
        Insert or overwrite a task
        
        A task without an id gets a new UUID and createdAt. A task that has
        no createdAt yet is treated as new as well, so createdAt and updatedAt
        start out equal. Otherwise updatedAt is moved forward.
        
        Args:
            task: Task to persist; updated in place
            
        Returns:
            The persisted task
        """
        is_new = not task.id or task.created_at is None
        if not task.id:
            task.id = str(uuid.uuid4())
        
        if is_new:
            now = get_current_datetime()
            task.created_at = now
            task.updated_at = now
        else:
            task.touch()
        
        await self.client.set(self.collection, task.id, self.codec.encode(task))
        self.logger.info(f"[TaskStore] Saved task {task.id} ({'created' if is_new else 'updated'})")
        return task
    
    async def delete_by_id(self, task_id: str) -> None:
        """Delete a task; missing ids are ignored"""
        await self.client.delete(self.collection, task_id)
        self.logger.info(f"[TaskStore] Deleted task {task_id}")
    
    async def find_by_status(self, status: TaskStatus) -> List[Task]:
        """Get tasks with the given status (filtered by the store)"""
        documents = await self.client.query(self.collection, "status", status.value)
        return self._decode_all(documents)
    
    async def find_by_title_or_description_containing(self, keyword: str) -> List[Task]:
        """
        Case-insensitive substring search over title and description
        
        The backing store has no case-insensitive text search, so this reads
        the whole collection and filters in memory: O(collection size) per
        call. Fine for small collections only.
        
        Args:
            keyword: Text to look for
            
        Returns:
            Matching tasks
        """
        needle = keyword.lower()
        tasks = await self.find_all()
        return [
            task for task in tasks
            if (task.title and needle in task.title.lower())
            or (task.description and needle in task.description.lower())
        ]
    
    async def exists_by_id(self, task_id: str) -> bool:
        """Check whether a task document exists"""
        return await self.client.get(self.collection, task_id) is not None

"""
In-memory document store for local development and tests
"""

import copy
from typing import Optional, Dict, Any, List, Tuple
from task_api.api.document_store import DocumentStoreClient, Document
from task_api.utils.logger import logger


class InMemoryDocumentStore(DocumentStoreClient):
    """
    Document store kept in a process-local dict
    
    Documents are deep-copied on the way in and out so callers never share
    mutable state with the store. Contents are lost on restart.
    """
    
    def __init__(self, collections: Optional[Dict[str, Dict[str, Document]]] = None):
        """
        Initialize in-memory store
        
        Args:
            collections: Initial contents, collection -> document id -> document
        """
        self._collections: Dict[str, Dict[str, Document]] = copy.deepcopy(collections or {})
        self.logger = logger
    
    def _collection(self, collection: str) -> Dict[str, Document]:
        return self._collections.setdefault(collection, {})
    
    async def get(self, collection: str, document_id: str) -> Optional[Document]:
        document = self._collection(collection).get(document_id)
        return copy.deepcopy(document) if document is not None else None
    
    async def get_all(self, collection: str) -> List[Tuple[str, Document]]:
        return [
            (document_id, copy.deepcopy(document))
            for document_id, document in self._collection(collection).items()
        ]
    
    async def query(self, collection: str, field: str, value: Any) -> List[Tuple[str, Document]]:
        return [
            (document_id, copy.deepcopy(document))
            for document_id, document in self._collection(collection).items()
            if field in document and document[field] == value
        ]
    
    async def set(self, collection: str, document_id: str, document: Document) -> None:
        self.logger.debug(f"[MemoryStore] set {collection}/{document_id}")
        self._collection(collection)[document_id] = copy.deepcopy(document)
    
    async def delete(self, collection: str, document_id: str) -> None:
        self.logger.debug(f"[MemoryStore] delete {collection}/{document_id}")
        self._collection(collection).pop(document_id, None)

"""
Document store client interface
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, List, Tuple

# Raw stored document: field name -> dynamically typed value
Document = Dict[str, Any]


class DocumentStoreClient(ABC):
    """
    Async client for a schema-flexible document store
    
    Documents are addressed by collection name and document id. Every call
    may raise StoreTransportError when the backend cannot be reached.
    """
    
    @abstractmethod
    async def get(self, collection: str, document_id: str) -> Optional[Document]:
        """Fetch one document, or None if it does not exist"""
    
    @abstractmethod
    async def get_all(self, collection: str) -> List[Tuple[str, Document]]:
        """Fetch every document in a collection as (id, document) pairs"""
    
    @abstractmethod
    async def query(self, collection: str, field: str, value: Any) -> List[Tuple[str, Document]]:
        """Fetch documents whose ``field`` equals ``value``"""
    
    @abstractmethod
    async def set(self, collection: str, document_id: str, document: Document) -> None:
        """Create or fully overwrite a document"""
    
    @abstractmethod
    async def delete(self, collection: str, document_id: str) -> None:
        """Delete a document; deleting a missing document is not an error"""
    
    async def close(self) -> None:
        """Release any held resources"""
    
    async def __aenter__(self):
        """Async context manager entry"""
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()

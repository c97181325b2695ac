"""
Firestore REST API client
"""

import base64
from collections.abc import Mapping
from datetime import datetime
from typing import Optional, Dict, Any, List, Tuple
from urllib.parse import quote
import httpx
from task_api.api.base_client import BaseAPIClient
from task_api.api.document_store import DocumentStoreClient, Document
from task_api.config.settings import settings
from task_api.config.constants import (
    FIRESTORE_API_BASE_URL,
    FIRESTORE_API_VERSION,
    FIRESTORE_PAGE_SIZE,
)
from task_api.utils.date_utils import parse_rfc3339, format_rfc3339
from task_api.utils.logger import logger


def decode_value(value: Dict[str, Any]) -> Any:
    """
    Convert a Firestore typed value to a plain Python value
    
    timestampValue becomes an aware UTC datetime, mapValue a dict and
    arrayValue a list. Unknown value kinds decode to None.
    
    Args:
        value: Typed value, e.g. {"stringValue": "abc"}
        
    Returns:
        Python value
    """
    if "nullValue" in value:
        return None
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "timestampValue" in value:
        try:
            return parse_rfc3339(value["timestampValue"])
        except ValueError:
            # Left as a string; the task codec treats it as a missing timestamp
            logger.warning(f"[Firestore] Unparseable timestampValue: {value['timestampValue']!r}")
            return value["timestampValue"]
    if "stringValue" in value:
        return value["stringValue"]
    if "bytesValue" in value:
        return base64.b64decode(value["bytesValue"])
    if "referenceValue" in value:
        return value["referenceValue"]
    if "geoPointValue" in value:
        return dict(value["geoPointValue"])
    if "arrayValue" in value:
        return [decode_value(item) for item in value["arrayValue"].get("values", [])]
    if "mapValue" in value:
        return decode_fields(value["mapValue"].get("fields", {}))
    
    logger.warning(f"[Firestore] Unknown value kind: {list(value)}")
    return None


def decode_fields(fields: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    """Convert a Firestore ``fields`` map to a plain dict"""
    return {name: decode_value(value) for name, value in fields.items()}


def encode_value(value: Any) -> Dict[str, Any]:
    """
    Convert a plain Python value to a Firestore typed value
    
    Args:
        value: Python value
        
    Returns:
        Typed value
        
    Raises:
        TypeError: If the value has no Firestore representation
    """
    if value is None:
        return {"nullValue": None}
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, datetime):
        return {"timestampValue": format_rfc3339(value)}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, bytes):
        return {"bytesValue": base64.b64encode(value).decode()}
    if isinstance(value, Mapping):
        return {"mapValue": {"fields": encode_fields(value)}}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(item) for item in value]}}
    
    raise TypeError(f"Cannot store value of type {type(value).__name__} in Firestore")


def encode_fields(document: Mapping) -> Dict[str, Dict[str, Any]]:
    """Convert a plain dict to a Firestore ``fields`` map"""
    return {str(name): encode_value(value) for name, value in document.items()}


class FirestoreClient(BaseAPIClient, DocumentStoreClient):
    """Client for the Firestore REST API (v1)"""
    
    def __init__(
        self,
        project_id: Optional[str] = None,
        database: Optional[str] = None,
        emulator_host: Optional[str] = None,
        access_token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Firestore client
        
        Arguments left as None fall back to settings.
        
        Args:
            project_id: Google Cloud project id
            database: Firestore database id
            emulator_host: host:port of a Firestore emulator; switches to plain HTTP
            access_token: OAuth2 bearer token
            timeout: Request timeout in seconds
            transport: Optional httpx transport
        """
        emulator_host = emulator_host or settings.FIRESTORE_EMULATOR_HOST
        base_url = f"http://{emulator_host}" if emulator_host else FIRESTORE_API_BASE_URL
        super().__init__(
            base_url,
            timeout=timeout if timeout is not None else settings.STORE_TIMEOUT,
            transport=transport,
        )
        self.project_id = project_id or settings.FIRESTORE_PROJECT_ID
        self.database = database or settings.FIRESTORE_DATABASE
        self.access_token = access_token or settings.FIRESTORE_ACCESS_TOKEN
        self.emulator_host = emulator_host
        self.logger = logger
        self.logger.info(
            f"[Firestore] Using project={self.project_id} database={self.database} "
            f"endpoint={self.base_url}"
        )
    
    def _get_headers(self) -> Dict[str, str]:
        """Get request headers with authentication"""
        headers = {"Content-Type": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers
    
    @property
    def _documents_path(self) -> str:
        return (
            f"/{FIRESTORE_API_VERSION}/projects/{self.project_id}"
            f"/databases/{self.database}/documents"
        )
    
    def _document_path(self, collection: str, document_id: str) -> str:
        return f"{self._documents_path}/{quote(collection, safe='')}/{quote(document_id, safe='')}"
    
    @staticmethod
    def _unpack(document: Dict[str, Any]) -> Tuple[str, Document]:
        """Split a REST document resource into (id, plain fields)"""
        document_id = document["name"].rsplit("/", 1)[-1]
        return document_id, decode_fields(document.get("fields", {}))
    
    async def get(self, collection: str, document_id: str) -> Optional[Document]:
        response = await self._request(
            "GET",
            self._document_path(collection, document_id),
            headers=self._get_headers(),
            allow_not_found=True,
        )
        if response is None:
            return None
        return self._unpack(response)[1]
    
    async def get_all(self, collection: str) -> List[Tuple[str, Document]]:
        documents: List[Tuple[str, Document]] = []
        page_token: Optional[str] = None
        
        while True:
            params: Dict[str, Any] = {"pageSize": FIRESTORE_PAGE_SIZE}
            if page_token:
                params["pageToken"] = page_token
            
            response = await self._request(
                "GET",
                f"{self._documents_path}/{quote(collection, safe='')}",
                headers=self._get_headers(),
                params=params,
            )
            documents.extend(self._unpack(item) for item in response.get("documents", []))
            
            page_token = response.get("nextPageToken")
            if not page_token:
                break
        
        self.logger.debug(f"[Firestore] Listed {len(documents)} documents in '{collection}'")
        return documents
    
    async def query(self, collection: str, field: str, value: Any) -> List[Tuple[str, Document]]:
        body = {
            "structuredQuery": {
                "from": [{"collectionId": collection}],
                "where": {
                    "fieldFilter": {
                        "field": {"fieldPath": field},
                        "op": "EQUAL",
                        "value": encode_value(value),
                    }
                },
            }
        }
        response = await self._request(
            "POST",
            f"{self._documents_path}:runQuery",
            headers=self._get_headers(),
            json_data=body,
        )
        
        # runQuery streams a JSON array; entries without "document" only carry read metadata
        results = response if isinstance(response, list) else []
        return [self._unpack(item["document"]) for item in results if "document" in item]
    
    async def set(self, collection: str, document_id: str, document: Document) -> None:
        # PATCH without an update mask replaces the whole document and creates it if missing
        await self._request(
            "PATCH",
            self._document_path(collection, document_id),
            headers=self._get_headers(),
            json_data={"fields": encode_fields(document)},
        )
    
    async def delete(self, collection: str, document_id: str) -> None:
        await self._request(
            "DELETE",
            self._document_path(collection, document_id),
            headers=self._get_headers(),
            allow_not_found=True,
        )

"""
Base API client with common functionality
"""

from abc import ABC
from typing import Optional, Dict, Any
import httpx
from task_api.utils.logger import logger
from task_api.utils.error_handler import StoreTransportError


class BaseAPIClient(ABC):
    """Base class for HTTP API clients"""
    
    def __init__(
        self,
        base_url: str,
        timeout: float = 30,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize base API client
        
        Args:
            base_url: Base URL for API
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used to stub the network in tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)
        self.logger = logger
    
    async def _request(
        self,
        method: str,
        endpoint: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        json_data: Optional[Dict[str, Any]] = None,
        allow_not_found: bool = False,
    ) -> Optional[Any]:
        """
        Make HTTP request
        
        No retries: a failure surfaces to the caller immediately.
        
        Args:
            method: HTTP method (GET, POST, PATCH, DELETE)
            endpoint: API endpoint
            headers: Request headers
            params: Query parameters
            json_data: JSON body
            allow_not_found: Return None on 404 instead of failing
            
        Returns:
            Decoded JSON body ({} for empty bodies), or None on an allowed 404
            
        Raises:
            StoreTransportError: On connection errors and non-2xx responses
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        self.logger.debug(f"Request: {method} {url}")
        
        request_kwargs = {
            "method": method,
            "url": url,
            "headers": headers,
            "params": params,
        }
        if json_data is not None:
            request_kwargs["json"] = json_data
        
        try:
            response = await self.client.request(**request_kwargs)
        except httpx.RequestError as e:
            self.logger.error(f"Request error: {method} {url}: {e}")
            raise StoreTransportError(f"Request to {url} failed: {e}", cause=e) from e
        
        self.logger.debug(f"Response status: {response.status_code}")
        
        if response.status_code == 404 and allow_not_found:
            return None
        
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self.logger.warning(f"Error response body: {response.text[:1000]}")
            raise StoreTransportError(
                f"{method} {url} returned {response.status_code}", cause=e
            ) from e
        
        # Handle empty response (204 No Content or empty body)
        if response.status_code == 204 or not response.content.strip():
            return {}
        
        try:
            return response.json()
        except ValueError as e:
            raise StoreTransportError(f"{method} {url} returned a non-JSON body", cause=e) from e
    
    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()
    
    async def __aenter__(self):
        """Async context manager entry"""
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()

"""
Async Cloudinary HTTP transport.

Posts url-encoded and multipart forms and hands back the raw status and
body; interpreting them is the job of ResponseHandler.
"""
import json
import asyncio
from dataclasses import dataclass
from typing import Dict, Optional, Any
import aiohttp

from .config import APIConfig
from ..exceptions import TransportError
from ..logging import get_logger


@dataclass(frozen=True)
class HTTPResponse:
    """Status line and body of a finished request."""
    status: int
    reason: str = ''
    body: bytes = b''
    
    @property
    def ok(self) -> bool:
        return self.status == 200
    
    @property
    def status_text(self) -> str:
        """Status code and reason, e.g. ``401 Unauthorized``."""
        return f"{self.status} {self.reason}".strip()
    
    def text(self) -> str:
        return self.body.decode('utf-8', errors='replace')
    
    def json(self) -> Any:
        """Decode the body as JSON (raises ValueError if it is not)."""
        return json.loads(self.body.decode('utf-8'))


class AsyncAPIClient:
    """
    Asynchronous HTTP transport.
    
    Features:
    - Lazily created, reused aiohttp session
    - Configurable proxy, SSL, timeouts
    - Network failures surfaced as TransportError
    
    Example:
        >>> async with AsyncAPIClient() as transport:
        ...     response = await transport.post_form(url, {'public_id': 'x'})
    """
    
    def __init__(self, config: Optional[APIConfig] = None):
        """
        Initialize async transport.
        
        Args:
            config: API configuration (uses defaults if not provided)
        """
        self._config = config or APIConfig.default()
        self._session: Optional[aiohttp.ClientSession] = None
        self._connector: Optional[aiohttp.TCPConnector] = None
        self._logger = get_logger('cloudinpy.api')
    
    @property
    def config(self) -> APIConfig:
        """Get current configuration."""
        return self._config
    
    async def __aenter__(self) -> 'AsyncAPIClient':
        await self._ensure_session()
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
    
    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            self._connector = aiohttp.TCPConnector(
                **self._config.get_connector_kwargs()
            )
            self._session = aiohttp.ClientSession(
                connector=self._connector,
                **self._config.get_session_kwargs()
            )
        return self._session
    
    async def close(self):
        """Close transport and release resources."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None
        
        if self._connector and not self._connector.closed:
            await self._connector.close()
        self._connector = None
    
    async def _post(self, url: str, data: Any) -> HTTPResponse:
        session = await self._ensure_session()
        proxy = self._config.proxy.to_aiohttp_proxy() if self._config.proxy else None
        self._logger.debug(f"POST {url}")
        try:
            async with session.post(url, data=data, proxy=proxy) as resp:
                body = await resp.read()
                self._logger.debug(f"POST {url} -> {resp.status}")
                return HTTPResponse(
                    status=resp.status,
                    reason=resp.reason or '',
                    body=body
                )
        except asyncio.TimeoutError as e:
            raise TransportError(f"Request to {url} timed out") from e
        except aiohttp.ClientError as e:
            raise TransportError(f"Request to {url} failed: {e}") from e
    
    async def post_form(self, url: str, fields: Dict[str, str]) -> HTTPResponse:
        """
        POST url-encoded form fields.
        
        Args:
            url: Endpoint
            fields: Form fields
            
        Returns:
            Response status and body
            
        Raises:
            TransportError: If the service cannot be reached
        """
        return await self._post(url, dict(fields))
    
    async def post_multipart(
        self,
        url: str,
        fields: Dict[str, str],
        file_field: str,
        filename: str,
        content: bytes
    ) -> HTTPResponse:
        """
        POST a multipart form with one file part.
        
        Fields are written in the given order, the file part last.
        
        Raises:
            TransportError: If the service cannot be reached
        """
        form = aiohttp.FormData()
        for name, value in fields.items():
            form.add_field(name, value)
        form.add_field(
            file_field,
            content,
            filename=filename,
            content_type='application/octet-stream'
        )
        return await self._post(url, form)

"""
Protocol definitions for upload module.

Defines the interfaces the coordinator depends on, so tests can swap in
spies and the transport can be replaced.
"""
from typing import Protocol, Dict
from pathlib import Path

from ..api.async_client import HTTPResponse


class TransportProtocol(Protocol):
    """Protocol for the HTTP transport."""
    
    async def post_form(self, url: str, fields: Dict[str, str]) -> HTTPResponse:
        """
        POST url-encoded fields.
        
        Args:
            url: Endpoint
            fields: Form fields
            
        Returns:
            Response status and body
        """
        ...
    
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
        
        Args:
            url: Endpoint
            fields: Form fields, in posting order
            file_field: Name of the file part
            filename: File name sent with the file part
            content: File content
            
        Returns:
            Response status and body
        """
        ...


class FileReaderProtocol(Protocol):
    """Protocol for file reading operations."""
    
    async def read_file(self, file_path: Path) -> bytes:
        """
        Read an entire file.
        
        Raises:
            LocalIOError: If the file cannot be read
        """
        ...


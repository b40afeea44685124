"""
Custom exceptions for Cloudinary operations.

This module defines exception classes specific to uploads, deletions and
renames against the Cloudinary API.
"""
from typing import Optional


class CloudinaryException(Exception):
    """Base exception for all cloudinpy errors."""
    
    def __init__(self, message: str, status: Optional[int] = None) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            status: HTTP status code (if available)
        """
        self.message = message
        self.status = status
        super().__init__(message)


class ConfigurationError(CloudinaryException):
    """Raised for a malformed connection URI or an invalid keep pattern."""
    pass


class TransportError(CloudinaryException):
    """Raised when the remote service cannot be reached."""
    pass


class RemoteRejection(CloudinaryException):
    """Raised when the service answers with an error status or envelope."""
    
    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        body: Optional[str] = None
    ) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message extracted from the response
            status: HTTP status code
            body: Raw response body
        """
        self.body = body
        super().__init__(message, status)


class LocalIOError(CloudinaryException):
    """Raised when a local file or directory cannot be read."""
    
    def __init__(self, message: str, path: Optional[str] = None) -> None:
        self.path = path
        super().__init__(message)


class SigningError(CloudinaryException):
    """Raised when a request lacks a field its signature needs."""
    pass

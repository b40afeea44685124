"""Cloudinary API transport, configuration and response handling."""
from .config import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    Credentials,
    ClientSettings,
    compile_keep_pattern
)
from .async_client import AsyncAPIClient, HTTPResponse
from .request import ResponseHandler
from .errors import extract_error_message

__all__ = [
    # Transport
    'AsyncAPIClient',
    'HTTPResponse',
    'ResponseHandler',
    
    # Configuration
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'Credentials',
    'ClientSettings',
    'compile_keep_pattern',
    
    # Errors
    'extract_error_message',
]

"""Cloudinary API errors."""
from .api_errors import extract_error_message

__all__ = [
    'extract_error_message',
]

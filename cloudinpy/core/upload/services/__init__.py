"""Upload services module."""
from .file_service import FileValidator, AsyncFileReader, read_stream

__all__ = [
    'FileValidator',
    'AsyncFileReader',
    'read_stream',
]

"""
Upload module for Cloudinary uploads.

Single files and whole directory trees go through UploadCoordinator,
which depends only on the protocols declared here.
"""
from .coordinator import UploadCoordinator
from .walker import iter_files, walk
from .protocols import (
    TransportProtocol,
    FileReaderProtocol
)

__all__ = [
    # Main classes
    'UploadCoordinator',
    
    # Traversal
    'iter_files',
    'walk',
    
    # Protocols
    'TransportProtocol',
    'FileReaderProtocol',
]

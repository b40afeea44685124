"""Resource and upload data models."""
from .resource_models import (
    Resource,
    ResourceDetails,
    Derived,
    UploadResult
)

__all__ = [
    'Resource',
    'ResourceDetails',
    'Derived',
    'UploadResult',
]

"""Resource types known to the Cloudinary upload API."""
from enum import Enum
from typing import Dict


IMAGE_WIRE_TYPE = 'image'
VIDEO_WIRE_TYPE = 'video'
PDF_WIRE_TYPE = 'image'
RAW_WIRE_TYPE = 'raw'


class ResourceType(Enum):
    """
    Kind of resource being stored.
    
    PDF uploads go through the image pipeline on the service side, so
    PDF shares the image wire type. It stays a separate member because
    callers use it to pick naming and URL rules.
    """
    IMAGE = 0
    PDF = 1
    VIDEO = 2
    RAW = 3
    
    @property
    def wire_type(self) -> str:
        """Path segment used in upload, admin and delivery URLs."""
        return _WIRE_TYPES[self]
    
    @property
    def keeps_extension(self) -> bool:
        """Raw files keep their extension in the public id."""
        return self is ResourceType.RAW
    
    @classmethod
    def from_name(cls, name: str) -> 'ResourceType':
        """Parse a resource type name such as ``"raw"`` or ``"PDF"``."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            choices = ', '.join(member.name.lower() for member in cls)
            raise ValueError(f"Unknown resource type {name!r} (expected one of: {choices})") from None


_WIRE_TYPES: Dict[ResourceType, str] = {
    ResourceType.IMAGE: IMAGE_WIRE_TYPE,
    ResourceType.PDF: PDF_WIRE_TYPE,
    ResourceType.VIDEO: VIDEO_WIRE_TYPE,
    ResourceType.RAW: RAW_WIRE_TYPE,
}

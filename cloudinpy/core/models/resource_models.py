"""
Data models for resources and uploads.

Uses dataclasses for immutable, type-safe data structures.
"""
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, List


@dataclass(frozen=True)
class Resource:
    """
    A resource stored in the cloud.
    
    Attributes:
        public_id: Public id
        version: Version assigned by the service
        resource_type: ``image``, ``video`` or ``raw``
        bytes: Size in bytes
        url: Remote url
        secure_url: Remote url over https
    """
    public_id: str
    version: int = 0
    resource_type: str = ''
    bytes: int = 0
    url: str = ''
    secure_url: str = ''
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Resource':
        """Create from an API payload."""
        return cls(
            public_id=data['public_id'],
            version=int(data.get('version') or 0),
            resource_type=data.get('resource_type') or '',
            bytes=int(data.get('bytes') or 0),
            url=data.get('url') or '',
            secure_url=data.get('secure_url') or ''
        )


@dataclass(frozen=True)
class Derived:
    """A derived (transformed) version of a resource."""
    transformation: str
    bytes: int = 0
    url: str = ''
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Derived':
        return cls(
            transformation=data.get('transformation') or '',
            bytes=int(data.get('bytes') or 0),
            url=data.get('url') or ''
        )


@dataclass(frozen=True)
class ResourceDetails(Resource):
    """
    A resource with its format, dimensions and derived versions.
    """
    format: str = ''
    width: int = 0
    height: int = 0
    derived: List[Derived] = field(default_factory=list)
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ResourceDetails':
        """Create from an API payload."""
        base = Resource.from_dict(data)
        return cls(
            public_id=base.public_id,
            version=base.version,
            resource_type=base.resource_type,
            bytes=base.bytes,
            url=base.url,
            secure_url=base.secure_url,
            format=data.get('format') or '',
            width=int(data.get('width') or 0),
            height=int(data.get('height') or 0),
            derived=[Derived.from_dict(d) for d in data.get('derived') or []]
        )


@dataclass(frozen=True)
class UploadResult:
    """
    Result of an upload.
    
    Attributes:
        public_id: Public id confirmed by the service (or computed locally
            in simulate mode)
        url: Access URL of the resource
        resource: Details decoded from the response (None when simulated)
        simulated: True if no request was sent
        response: Raw API response
    """
    public_id: str
    url: str = ''
    resource: Optional[ResourceDetails] = None
    simulated: bool = False
    response: Dict[str, Any] = field(default_factory=dict)
    
    @property
    def format(self) -> str:
        return self.resource.format if self.resource else ''
    
    @property
    def version(self) -> int:
        return self.resource.version if self.resource else 0
    
    @property
    def bytes(self) -> int:
        return self.resource.bytes if self.resource else 0

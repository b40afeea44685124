"""Delivery and API URL construction."""
from .resource import ResourceType, IMAGE_WIRE_TYPE

BASE_UPLOAD_URL = 'https://api.cloudinary.com/v1_1'
BASE_RESOURCE_URL = 'https://res.cloudinary.com'


def build_access_url(
    resource_type: ResourceType,
    cloud_name: str,
    public_id: str,
    extension: str = '',
    resource_base: str = BASE_RESOURCE_URL
) -> str:
    """
    Build the public URL of an uploaded resource.
    
    Image-typed resources (images and PDFs) are stored without extension,
    so the format reported by the service is appended. Other resources
    already carry it in their public id.
    
    Args:
        resource_type: Resource type of the upload
        cloud_name: Cloud (account) name
        public_id: Public id returned by the service
        extension: Format returned by the service
        resource_base: Delivery host
        
    Returns:
        Fetchable URL
    """
    token = resource_type.wire_type
    url = f"{resource_base}/{cloud_name}/{token}/upload/{public_id}"
    if token != IMAGE_WIRE_TYPE:
        return url
    return f"{url}.{extension}"


def build_default_url(
    cloud_name: str,
    public_id: str,
    resource_type: ResourceType = ResourceType.IMAGE,
    resource_base: str = BASE_RESOURCE_URL
) -> str:
    """URL of a resource whose format is not known yet (no extension)."""
    return f"{resource_base}/{cloud_name}/{resource_type.wire_type}/upload/{public_id}"


def default_upload_uri(cloud_name: str, upload_base: str = BASE_UPLOAD_URL) -> str:
    """Image upload endpoint of a cloud."""
    return f"{upload_base}/{cloud_name}/{IMAGE_WIRE_TYPE}/upload/"


def upload_uri_for(
    resource_type: ResourceType,
    cloud_name: str,
    upload_base: str = BASE_UPLOAD_URL
) -> str:
    """Upload endpoint for a resource type, derived from the image one."""
    uri = default_upload_uri(cloud_name, upload_base)
    segment = f"/{IMAGE_WIRE_TYPE}/"
    return uri.replace(segment, f"/{resource_type.wire_type}/", 1)


def api_uri(
    cloud_name: str,
    resource_type: ResourceType,
    action: str,
    upload_base: str = BASE_UPLOAD_URL
) -> str:
    """Endpoint of an upload API action such as ``destroy/`` or ``rename``."""
    return f"{upload_base}/{cloud_name}/{resource_type.wire_type}/{action}"

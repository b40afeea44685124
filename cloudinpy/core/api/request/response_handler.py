"""Response handler for API responses."""
from typing import Dict, Any

from ..async_client import HTTPResponse
from ..errors import extract_error_message
from ...exceptions import RemoteRejection
from ...resource import ResourceType
from ...url import build_access_url, BASE_RESOURCE_URL
from ...models import ResourceDetails, UploadResult


class ResponseHandler:
    """Interprets API responses."""
    
    @staticmethod
    def parse_upload(
        response: HTTPResponse,
        resource_type: ResourceType,
        cloud_name: str,
        resource_base: str = BASE_RESOURCE_URL
    ) -> UploadResult:
        """
        Decode a successful upload.
        
        The body looks like
        ``{"public_id":"Downloads/file","version":1369431906,"format":"png","resource_type":"image"}``.
        
        Raises:
            RemoteRejection: On any status but 200 or an unexpected body
        """
        if not response.ok:
            raise RemoteRejection(
                f"Request error: {response.status_text}",
                status=response.status,
                body=response.text()
            )
        try:
            payload = response.json()
            details = ResourceDetails.from_dict(payload)
        except (ValueError, KeyError, TypeError) as e:
            raise RemoteRejection(
                f"Invalid upload response: {e}",
                status=response.status,
                body=response.text()
            ) from e
        
        url = build_access_url(
            resource_type, cloud_name, details.public_id, details.format, resource_base
        )
        return UploadResult(
            public_id=details.public_id,
            url=url,
            resource=details,
            response=payload
        )
    
    @staticmethod
    def handle_json(response: HTTPResponse) -> Dict[str, Any]:
        """
        Decode a JSON response, turning error statuses and error envelopes
        into exceptions.
        
        Raises:
            RemoteRejection: With the envelope message, or the status text
                when the body carries none
        """
        try:
            payload = response.json()
        except ValueError as e:
            if not response.ok:
                raise RemoteRejection(
                    response.status_text, status=response.status, body=response.text()
                ) from e
            raise RemoteRejection(
                f"Invalid JSON response: {e}", status=response.status, body=response.text()
            ) from e
        
        if not isinstance(payload, dict):
            raise RemoteRejection(
                "Unexpected JSON response", status=response.status, body=response.text()
            )
        message = extract_error_message(payload)
        if message or not response.ok:
            raise RemoteRejection(
                message or response.status_text, status=response.status, body=response.text()
            )
        return payload
    
    @staticmethod
    def check_rename(response: HTTPResponse) -> None:
        """
        Raises:
            RemoteRejection: Carrying the raw body on any status but 200
        """
        if not response.ok:
            raise RemoteRejection(response.text(), status=response.status, body=response.text())

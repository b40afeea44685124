"""Cloudinary API error envelopes."""
from typing import Any, Optional


def extract_error_message(payload: Any) -> Optional[str]:
    """
    Extract the message of an error envelope.
    
    The service reports failures as
    ``{"error": {"message": "Missing required parameter - public_id"}}``.
    """
    if not isinstance(payload, dict):
        return None
    error = payload.get('error')
    if isinstance(error, dict):
        message = error.get('message')
        if message is not None:
            return str(message)
    return None

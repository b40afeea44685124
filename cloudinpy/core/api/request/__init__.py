"""Response handling."""
from .response_handler import ResponseHandler

__all__ = ['ResponseHandler']

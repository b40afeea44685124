"""
Signing utilities.
"""
from .signing import (
    Operation,
    RequestSigner,
    SignedRequest,
    canonical_string,
    sign
)

__all__ = [
    'Operation',
    'RequestSigner',
    'SignedRequest',
    'canonical_string',
    'sign',
]

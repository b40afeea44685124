"""
Request signing for the Cloudinary upload API.

The service recomputes the signature from the posted fields, so the
canonical string must match field for field: fixed order per operation,
no separators other than ``&`` and ``=``, secret appended at the end.
"""
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from Crypto.Hash import SHA1

from ..exceptions import SigningError


class Operation(Enum):
    """Signed API operations."""
    UPLOAD = 'upload'
    DELETE = 'destroy'
    RENAME = 'rename'


# Signed fields per operation, in signing order. Upload signs public_id
# only when the caller chose it.
SIGNED_FIELDS: Dict[Operation, Tuple[str, ...]] = {
    Operation.UPLOAD: ('public_id', 'timestamp'),
    Operation.DELETE: ('public_id', 'timestamp'),
    Operation.RENAME: ('from_public_id', 'timestamp', 'to_public_id'),
}

OPTIONAL_FIELDS: Dict[Operation, Tuple[str, ...]] = {
    Operation.UPLOAD: ('public_id',),
}


def canonical_string(operation: Operation, fields: Dict[str, str], secret: str) -> str:
    """
    Build the string that gets hashed.
    
    Args:
        operation: Operation being signed
        fields: Request fields (extra fields such as api_key are ignored)
        secret: API secret
        
    Returns:
        ``key=value&key=value<secret>``
        
    Raises:
        SigningError: If a required field is missing
    """
    parts = []
    optional = OPTIONAL_FIELDS.get(operation, ())
    for name in SIGNED_FIELDS[operation]:
        value = fields.get(name)
        if value is None:
            if name in optional:
                continue
            raise SigningError(f"Missing '{name}' field for {operation.value} signature")
        parts.append(f"{name}={value}")
    return '&'.join(parts) + secret


def sign(operation: Operation, fields: Dict[str, str], secret: str) -> str:
    """Return the lowercase hex SHA-1 digest of the canonical string."""
    payload = canonical_string(operation, fields, secret).encode('utf-8')
    return SHA1.new(payload).hexdigest()


@dataclass(frozen=True)
class SignedRequest:
    """
    Fields of a signed API request.
    
    Attributes:
        operation: Signed operation
        fields: Posted fields, signature excluded
        timestamp: Unix time used in both the fields and the signature
        signature: Hex digest
    """
    operation: Operation
    fields: Dict[str, str] = field(default_factory=dict)
    timestamp: str = ''
    signature: str = ''
    
    @property
    def public_id(self) -> Optional[str]:
        return self.fields.get('public_id')
    
    def to_form(self) -> Dict[str, str]:
        """Fields ready to be posted, signature included."""
        form = dict(self.fields)
        form['signature'] = self.signature
        return form


class RequestSigner:
    """
    Builds signed requests for one set of credentials.
    
    Example:
        >>> signer = RequestSigner("key", "secret")
        >>> request = signer.delete("avatars/logo")
        >>> request.to_form()['signature']  # doctest: +SKIP
    """
    
    def __init__(
        self,
        api_key: str,
        api_secret: str,
        clock: Callable[[], float] = time.time
    ):
        """
        Initialize signer.
        
        Args:
            api_key: API key, posted with every request
            api_secret: API secret, only ever used for hashing
            clock: Source of the current Unix time
        """
        self._api_key = api_key
        self._api_secret = api_secret
        self._clock = clock
    
    def timestamp(self) -> str:
        """Current Unix time in whole seconds."""
        return str(int(self._clock()))
    
    def _build(self, operation: Operation, fields: Dict[str, str]) -> SignedRequest:
        timestamp = self.timestamp()
        fields = dict(fields)
        fields['timestamp'] = timestamp
        signature = sign(operation, fields, self._api_secret)
        fields['api_key'] = self._api_key
        return SignedRequest(
            operation=operation,
            fields=fields,
            timestamp=timestamp,
            signature=signature
        )
    
    def upload(self, public_id: Optional[str] = None) -> SignedRequest:
        """Sign an upload; without public id the service picks one."""
        fields = {}
        if public_id is not None:
            fields['public_id'] = public_id
        return self._build(Operation.UPLOAD, fields)
    
    def delete(self, public_id: str) -> SignedRequest:
        """Sign a destroy request."""
        return self._build(Operation.DELETE, {'public_id': public_id})
    
    def rename(self, from_public_id: str, to_public_id: str) -> SignedRequest:
        """Sign a rename request."""
        return self._build(Operation.RENAME, {
            'from_public_id': from_public_id,
            'to_public_id': to_public_id,
        })

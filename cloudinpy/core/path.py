"""
Public id derivation from local file paths.

A file uploaded from ``/tmp/css/default.css`` with prepend path ``new/``
is stored as ``new/css/default`` when it is an image, and as
``new/css/default.css`` when it is a raw file.
"""
import os
from typing import Optional

from .resource import ResourceType

_SEPARATORS = tuple(sep for sep in (os.sep, os.altsep, '/') if sep)


def ensure_trailing_slash(dirname: str) -> str:
    """Add a missing trailing ``/`` at the end of a directory name."""
    if not dirname.endswith('/'):
        dirname += '/'
    return dirname


def _to_forward_slashes(value: str) -> str:
    for sep in _SEPARATORS:
        value = value.replace(sep, '/')
    return value


def _absolute(path: str) -> str:
    if not path:
        return path
    try:
        return os.path.abspath(path)
    except (OSError, ValueError):
        return path


def _last_two_segments(path: str) -> str:
    """Keep the parent directory name and the file name only."""
    idx = path.rfind(os.sep)
    if idx == -1:
        return path
    idx = path.rfind(os.sep, 0, idx)
    return path[idx + 1:].lstrip(os.sep)


def _relative_to_base(path: str, base_path: str) -> Optional[str]:
    if not path.startswith(base_path):
        return None
    name = path[len(base_path):]
    if name and not base_path.endswith(os.sep) and not name.startswith(os.sep):
        # /tmp/foo is not a base of /tmp/foobar/x
        return None
    if name.startswith(os.sep):
        name = name[1:]
    return name or None


def _strip_extension(name: str, resource_type: ResourceType) -> str:
    if resource_type.keeps_extension:
        return name
    head, tail = os.path.split(name)
    stem = os.path.splitext(tail)[0]
    return os.path.join(head, stem) if head else stem


def _normalize_prepend(prepend_path: str) -> str:
    seps = ''.join(_SEPARATORS)
    prepend_path = prepend_path.strip(seps)
    if not prepend_path:
        return ''
    return ensure_trailing_slash(_to_forward_slashes(prepend_path))


def derive_public_id(
    path: str,
    base_path: str = '',
    prepend_path: str = '',
    resource_type: ResourceType = ResourceType.IMAGE
) -> str:
    """
    Compute the public id of a local file.
    
    With a base directory the id is the path relative to it; without one
    only the parent directory name and the file name are kept, so
    ``/a/b/c/d.png`` becomes ``c/d``.
    
    Args:
        path: Local file path (relative paths are made absolute)
        base_path: Root of a directory upload, or empty
        prepend_path: Remote namespace put in front of the id
        resource_type: Raw files keep their extension, others lose it
        
    Returns:
        Public id using ``/`` as the only separator
    """
    path = _absolute(str(path).strip())
    base_path = str(base_path or '').strip()
    prepend_path = str(prepend_path or '').strip()
    
    name = None
    if base_path:
        name = _relative_to_base(path, _absolute(base_path))
    if name is None:
        name = _last_two_segments(path)
    
    name = _strip_extension(name, resource_type)
    return _to_forward_slashes(_normalize_prepend(prepend_path) + name)


def derive_flat_public_id(
    path: str,
    prepend_path: str = '',
    resource_type: ResourceType = ResourceType.IMAGE
) -> str:
    """Public id of a single uploaded file (parent directory plus name)."""
    return derive_public_id(path, '', prepend_path, resource_type)

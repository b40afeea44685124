"""
Directory tree traversal for bulk uploads.

Files are produced depth-first in pre-order, entries sorted by name in
each directory, so the same tree always yields the same sequence.
"""
import os
from pathlib import Path
from typing import Awaitable, Callable, Iterator, Union

from ..exceptions import LocalIOError

Visitor = Callable[[Path], Awaitable[object]]


def iter_files(root: Union[str, Path]) -> Iterator[Path]:
    """
    Yield every regular file under ``root``.
    
    Directories themselves are never yielded; symlinked directories are
    not followed. A root that is a file yields just that file.
    
    Raises:
        LocalIOError: If a directory cannot be listed
    """
    root = Path(root)
    if root.is_file():
        yield root
        return
    
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        raise LocalIOError(f"Cannot list directory {root}: {e}", path=str(root)) from e
    
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            yield from iter_files(entry.path)
        elif entry.is_file():
            yield Path(entry.path)


async def walk(root: Union[str, Path], visit: Visitor) -> int:
    """
    Await ``visit`` for each file under ``root``, in traversal order.
    
    The first exception raised by ``visit`` or by directory listing stops
    the walk and propagates; files already visited are not rolled back.
    
    Returns:
        Number of files visited
    """
    count = 0
    for path in iter_files(root):
        await visit(path)
        count += 1
    return count

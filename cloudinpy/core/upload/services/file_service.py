"""
File validation and reading services.

Single Responsibility: Each class handles one specific task.
"""
from pathlib import Path
from typing import Tuple, Union, BinaryIO
import logging
import aiofiles

from ...exceptions import LocalIOError


class FileValidator:
    """
    Validates local paths before upload.
    
    Responsibilities:
    - Check path existence
    - Tell files from directories
    """
    
    def validate(self, path: Union[str, Path]) -> Tuple[Path, bool]:
        """
        Validate an upload source.
        
        Args:
            path: File or directory
            
        Returns:
            Tuple of (Path, is_directory)
            
        Raises:
            LocalIOError: If the path doesn't exist or cannot be inspected
        """
        path = Path(path) if isinstance(path, str) else path
        
        try:
            is_dir = path.is_dir()
            exists = is_dir or path.exists()
        except OSError as e:
            raise LocalIOError(f"Cannot access {path}: {e}", path=str(path)) from e
        
        if not exists:
            raise LocalIOError(f"File not found: {path}", path=str(path))
        
        return path, is_dir


class AsyncFileReader:
    """
    Asynchronous file reader.
    
    Uses aiofiles for non-blocking I/O operations.
    """
    
    def __init__(self):
        """Initialize file reader."""
        self._logger = logging.getLogger('cloudinpy.upload.file')
    
    async def read_file(self, file_path: Path) -> bytes:
        """
        Read entire file.
        
        Args:
            file_path: Path to the file
            
        Returns:
            File data
            
        Raises:
            LocalIOError: If the file cannot be read
        """
        try:
            async with aiofiles.open(file_path, 'rb') as f:
                data = await f.read()
        except (IOError, OSError) as e:
            self._logger.error(f"Failed to read {file_path}: {e}")
            raise LocalIOError(f"Cannot read {file_path}: {e}", path=str(file_path)) from e
        self._logger.debug(f"Read {file_path} ({len(data)} bytes)")
        return data


def read_stream(data: Union[bytes, bytearray, BinaryIO]) -> bytes:
    """
    Read caller-supplied content.
    
    Raises:
        LocalIOError: If the stream cannot be read
    """
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    try:
        content = data.read()
    except (IOError, OSError, ValueError) as e:
        raise LocalIOError(f"Cannot read upload data: {e}") from e
    if isinstance(content, str):
        content = content.encode('utf-8')
    return content

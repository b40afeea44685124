"""
Upload coordinator.

Orchestrates uploads using injected dependencies: names each file, signs
the request, hands it to the transport and interprets the answer.
"""
import asyncio
import os
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from .protocols import TransportProtocol, FileReaderProtocol
from .services import FileValidator, AsyncFileReader, read_stream
from .walker import iter_files, walk
from ..api.config import APIConfig, ClientSettings, Credentials
from ..api.request import ResponseHandler
from ..crypto import RequestSigner, SignedRequest
from ..logging import get_logger
from ..models import UploadResult
from ..path import derive_public_id, derive_flat_public_id
from ..resource import ResourceType
from ..url import build_default_url, upload_uri_for

logger = get_logger('cloudinpy.upload')

UploadData = Union[bytes, bytearray, BinaryIO]

FILE_FIELD = 'file'


class UploadCoordinator:
    """
    Coordinates single-file and directory uploads.
    
    Uses dependency injection for all components, making it:
    - Testable (mock the transport)
    - Extensible (swap the file reader or the signer)
    """
    
    def __init__(
        self,
        transport: TransportProtocol,
        credentials: Credentials,
        settings: Optional[ClientSettings] = None,
        config: Optional[APIConfig] = None,
        signer: Optional[RequestSigner] = None,
        file_reader: Optional[FileReaderProtocol] = None
    ):
        """
        Initialize upload coordinator.
        
        Args:
            transport: HTTP transport
            credentials: Account credentials
            settings: Client behaviour switches (simulate, concurrency)
            config: Endpoints configuration
            signer: Request signer (built from credentials if not provided)
            file_reader: File reader implementation
        """
        self._transport = transport
        self._credentials = credentials
        self._settings = settings or ClientSettings()
        self._config = config or APIConfig.default()
        self._signer = signer or RequestSigner(credentials.api_key, credentials.api_secret)
        self._file_reader = file_reader or AsyncFileReader()
        self._validator = FileValidator()
    
    async def upload(
        self,
        path: Union[str, Path],
        data: Optional[UploadData] = None,
        prepend: str = '',
        random_public_id: bool = False,
        resource_type: ResourceType = ResourceType.IMAGE
    ) -> str:
        """
        Upload a file or a whole directory.
        
        ``path`` is always required: it names the resource even when the
        content comes from ``data``. Without ``data`` the file is read from
        disk, or, for a directory, every file below it is uploaded with a
        public id relative to the directory.
        
        Args:
            path: File or directory location
            data: Content to upload instead of reading ``path``
            prepend: Remote namespace
            random_public_id: Let the service pick the public id (ignored
                for directories)
            resource_type: Target resource type
            
        Returns:
            Public id of the uploaded file, or the directory path
        """
        if data is None:
            source, is_dir = self._validator.validate(path)
            if is_dir:
                await self.upload_tree(source, prepend, resource_type)
                return str(path)
        
        result = await self.upload_file(
            path, data, prepend, random_public_id, resource_type
        )
        return result.public_id
    
    async def upload_tree(
        self,
        root: Union[str, Path],
        prepend: str = '',
        resource_type: ResourceType = ResourceType.IMAGE
    ) -> List[UploadResult]:
        """
        Upload every regular file below ``root``.
        
        Public ids are always derived from paths relative to ``root``.
        The first failure stops the upload; files already sent stay.
        
        Returns:
            Results in traversal order
        """
        base_path = str(root)
        concurrency = self._settings.max_concurrent_uploads
        logger.info(f"Uploading directory {base_path} (max {concurrency} parallel uploads)")
        
        if concurrency <= 1:
            results: List[UploadResult] = []
            
            async def visit(file_path: Path) -> None:
                results.append(await self.upload_file(
                    file_path, None, prepend, False, resource_type, base_path
                ))
            
            await walk(root, visit)
            return results
        
        return await self._upload_parallel(
            list(iter_files(root)), prepend, resource_type, base_path, concurrency
        )
    
    async def _upload_parallel(
        self,
        files: List[Path],
        prepend: str,
        resource_type: ResourceType,
        base_path: str,
        concurrency: int
    ) -> List[UploadResult]:
        semaphore = asyncio.Semaphore(concurrency)
        
        async def upload_one(file_path: Path) -> UploadResult:
            async with semaphore:
                return await self.upload_file(
                    file_path, None, prepend, False, resource_type, base_path
                )
        
        tasks = [asyncio.create_task(upload_one(f)) for f in files]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
    
    def _public_id(
        self,
        path: str,
        prepend: str,
        resource_type: ResourceType,
        base_path: str
    ) -> str:
        if base_path:
            return derive_public_id(path, base_path, prepend, resource_type)
        return derive_flat_public_id(path, prepend, resource_type)
    
    @staticmethod
    def _form_fields(request: SignedRequest) -> dict:
        # public_id, api_key, timestamp, signature; file part goes last
        fields = {}
        if request.public_id is not None:
            fields['public_id'] = request.public_id
        fields['api_key'] = request.fields['api_key']
        fields['timestamp'] = request.timestamp
        fields['signature'] = request.signature
        return fields
    
    async def upload_file(
        self,
        path: Union[str, Path],
        data: Optional[UploadData] = None,
        prepend: str = '',
        random_public_id: bool = False,
        resource_type: ResourceType = ResourceType.IMAGE,
        base_path: str = ''
    ) -> UploadResult:
        """
        Upload a single file.
        
        Args:
            path: File location (names the resource)
            data: Content to upload instead of reading ``path``
            prepend: Remote namespace
            random_public_id: Let the service pick the public id
            resource_type: Target resource type
            base_path: Directory upload root, empty for a lone file
            
        Returns:
            Upload result
            
        Raises:
            LocalIOError: If the content cannot be read
            TransportError: If the service cannot be reached
            RemoteRejection: If the service refuses the upload
        """
        full_path = str(path)
        public_id = None
        if not random_public_id:
            public_id = self._public_id(full_path, prepend, resource_type, base_path)
        
        request = self._signer.upload(public_id)
        
        logger.info(f"Uploading: {full_path}")
        if data is not None:
            content = read_stream(data)
        else:
            content = await self._file_reader.read_file(Path(full_path))
        
        cloud_name = self._credentials.cloud_name
        if self._settings.simulate:
            logger.debug(f"Simulated upload of {full_path} as {public_id}")
            local_id = public_id if public_id is not None else full_path
            url = ''
            if public_id is not None:
                url = build_default_url(
                    cloud_name, public_id, resource_type, self._config.resource_base
                )
            return UploadResult(public_id=local_id, url=url, simulated=True)
        
        upload_uri = upload_uri_for(resource_type, cloud_name, self._config.upload_base)
        response = await self._transport.post_multipart(
            upload_uri,
            self._form_fields(request),
            FILE_FIELD,
            os.path.basename(full_path) or FILE_FIELD,
            content
        )
        result = ResponseHandler.parse_upload(
            response, resource_type, cloud_name, self._config.resource_base
        )
        logger.info(f"URL: {result.url}")
        return result

"""Tests for the upload coordinator."""
import hashlib
import io
import pytest

from cloudinpy.core.api import ClientSettings, HTTPResponse
from cloudinpy.core.crypto import RequestSigner
from cloudinpy.core.exceptions import LocalIOError, RemoteRejection
from cloudinpy.core.resource import ResourceType
from cloudinpy.core.upload import UploadCoordinator


def sha1_hex(text: str) -> str:
    return hashlib.sha1(text.encode("utf-8")).hexdigest()


@pytest.fixture
def make_coordinator(transport, credentials, clock):
    def factory(**settings):
        return UploadCoordinator(
            transport,
            credentials,
            settings=ClientSettings(**settings),
            signer=RequestSigner(credentials.api_key, credentials.api_secret, clock=clock)
        )
    return factory


@pytest.fixture
def image_file(tmp_path):
    folder = tmp_path / "images"
    folder.mkdir()
    path = folder / "logo.png"
    path.write_bytes(b"\x89PNG")
    return path


class TestSingleFileUpload:
    """Single-resource mode."""
    
    @pytest.mark.asyncio
    async def test_returns_remote_public_id(self, make_coordinator, image_file):
        coordinator = make_coordinator()
        
        public_id = await coordinator.upload(image_file)
        
        assert public_id == "images/logo"
    
    @pytest.mark.asyncio
    async def test_multipart_fields(self, make_coordinator, transport, image_file):
        coordinator = make_coordinator()
        
        await coordinator.upload(image_file, prepend="brand/")
        
        url, fields, file_field, filename, content = transport.post_multipart.await_args.args
        assert url == "https://api.cloudinary.com/v1_1/demo/image/upload/"
        assert list(fields) == ['public_id', 'api_key', 'timestamp', 'signature']
        assert fields['public_id'] == "brand/images/logo"
        assert fields['api_key'] == "123456"
        assert fields['timestamp'] == "1369431906"
        assert fields['signature'] == sha1_hex(
            "public_id=brand/images/logo&timestamp=1369431906s3cr3t"
        )
        assert file_field == "file"
        assert filename == "logo.png"
        assert content == b"\x89PNG"
    
    @pytest.mark.asyncio
    async def test_random_public_id_omits_field(self, make_coordinator, transport, image_file):
        coordinator = make_coordinator()
        
        await coordinator.upload(image_file, random_public_id=True)
        
        fields = transport.post_multipart.await_args.args[1]
        assert 'public_id' not in fields
        assert fields['signature'] == sha1_hex("timestamp=1369431906s3cr3t")
    
    @pytest.mark.asyncio
    async def test_random_public_id_returns_remote_id(
        self, make_coordinator, transport, make_response, upload_payload, image_file
    ):
        transport.post_multipart.return_value = make_response(
            dict(upload_payload, public_id="x8fk2hd0")
        )
        coordinator = make_coordinator()
        
        public_id = await coordinator.upload(image_file, random_public_id=True)
        
        assert public_id == "x8fk2hd0"
    
    @pytest.mark.asyncio
    @pytest.mark.parametrize("rtype,segment", [
        (ResourceType.PDF, "image"),
        (ResourceType.VIDEO, "video"),
        (ResourceType.RAW, "raw"),
    ])
    async def test_endpoint_per_resource_type(
        self, make_coordinator, transport, image_file, rtype, segment
    ):
        coordinator = make_coordinator()
        
        await coordinator.upload(image_file, resource_type=rtype)
        
        url = transport.post_multipart.await_args.args[0]
        assert url == f"https://api.cloudinary.com/v1_1/demo/{segment}/upload/"
    
    @pytest.mark.asyncio
    async def test_raw_public_id_keeps_extension(self, make_coordinator, transport, tmp_path):
        css = tmp_path / "css" / "default.css"
        css.parent.mkdir()
        css.write_text("body {}")
        coordinator = make_coordinator()
        
        await coordinator.upload(css, resource_type=ResourceType.RAW)
        
        assert transport.post_multipart.await_args.args[1]['public_id'] == "css/default.css"
    
    @pytest.mark.asyncio
    async def test_data_bytes_used_instead_of_file(self, make_coordinator, transport):
        coordinator = make_coordinator()
        
        await coordinator.upload("/nowhere/docs/readme.txt", data=b"hello")
        
        args = transport.post_multipart.await_args.args
        assert args[1]['public_id'] == "docs/readme"
        assert args[4] == b"hello"
    
    @pytest.mark.asyncio
    async def test_data_stream(self, make_coordinator, transport):
        coordinator = make_coordinator()
        
        await coordinator.upload("/x/y/z.bin", data=io.BytesIO(b"stream"))
        
        assert transport.post_multipart.await_args.args[4] == b"stream"
    
    @pytest.mark.asyncio
    async def test_result_url(self, make_coordinator, image_file):
        coordinator = make_coordinator()
        
        result = await coordinator.upload_file(image_file)
        
        assert result.url == "https://res.cloudinary.com/demo/image/upload/images/logo.png"
        assert result.format == "png"
        assert result.version == 1369431906
        assert result.bytes == 2048
        assert result.simulated is False
    
    @pytest.mark.asyncio
    async def test_missing_file(self, make_coordinator, transport, tmp_path):
        coordinator = make_coordinator()
        
        with pytest.raises(LocalIOError):
            await coordinator.upload(tmp_path / "missing.png")
        
        transport.post_multipart.assert_not_awaited()
    
    @pytest.mark.asyncio
    async def test_non_200_is_failure(self, make_coordinator, transport, image_file):
        transport.post_multipart.return_value = HTTPResponse(
            status=401, reason="Unauthorized", body=b'{"error":{"message":"Invalid Signature"}}'
        )
        coordinator = make_coordinator()
        
        with pytest.raises(RemoteRejection, match="Request error: 401 Unauthorized"):
            await coordinator.upload(image_file)
    
    @pytest.mark.asyncio
    async def test_undecodable_body_is_failure(self, make_coordinator, transport, image_file):
        transport.post_multipart.return_value = HTTPResponse(status=200, reason="OK", body=b"<html>")
        coordinator = make_coordinator()
        
        with pytest.raises(RemoteRejection, match="Invalid upload response"):
            await coordinator.upload(image_file)


class TestSimulate:
    """Dry-run uploads."""
    
    @pytest.mark.asyncio
    async def test_returns_local_id_without_transport(self, make_coordinator, transport, image_file):
        coordinator = make_coordinator(simulate=True)
        
        public_id = await coordinator.upload(image_file, prepend="brand")
        
        assert public_id == "brand/images/logo"
        transport.post_multipart.assert_not_awaited()
        transport.post_form.assert_not_awaited()
    
    @pytest.mark.asyncio
    async def test_result_shape(self, make_coordinator, image_file):
        coordinator = make_coordinator(simulate=True)
        
        result = await coordinator.upload_file(image_file)
        
        assert result.simulated is True
        assert result.public_id == "images/logo"
        assert result.url == "https://res.cloudinary.com/demo/image/upload/images/logo"
    
    @pytest.mark.asyncio
    async def test_random_id_returns_path(self, make_coordinator, image_file):
        coordinator = make_coordinator(simulate=True)
        
        public_id = await coordinator.upload(image_file, random_public_id=True)
        
        assert public_id == str(image_file)
    
    @pytest.mark.asyncio
    async def test_still_reads_file(self, make_coordinator, tmp_path):
        coordinator = make_coordinator(simulate=True)
        
        with pytest.raises(LocalIOError):
            await coordinator.upload_file(tmp_path / "missing.png")


class TestDirectoryUpload:
    """Directory mode."""
    
    @pytest.mark.asyncio
    async def test_one_upload_per_file(self, make_coordinator, transport, tree):
        coordinator = make_coordinator()
        
        result = await coordinator.upload(tree)
        
        assert result == str(tree)
        assert transport.post_multipart.await_count == 4
    
    @pytest.mark.asyncio
    async def test_ids_relative_to_root(self, make_coordinator, transport, tree):
        coordinator = make_coordinator()
        
        await coordinator.upload(tree, prepend="site/", resource_type=ResourceType.RAW)
        
        ids = [c.args[1]['public_id'] for c in transport.post_multipart.await_args_list]
        assert ids == [
            "site/b.png",
            "site/css/default.css",
            "site/images/a.png",
            "site/images/nested/c.jpg",
        ]
    
    @pytest.mark.asyncio
    async def test_random_id_ignored(self, make_coordinator, transport, tree):
        coordinator = make_coordinator()
        
        await coordinator.upload(tree, random_public_id=True)
        
        for call in transport.post_multipart.await_args_list:
            assert 'public_id' in call.args[1]
    
    @pytest.mark.asyncio
    async def test_first_failure_aborts(self, make_coordinator, transport, make_response,
                                        upload_payload, tree):
        transport.post_multipart.side_effect = [
            make_response(upload_payload),
            HTTPResponse(status=500, reason="Internal Server Error"),
            make_response(upload_payload),
            make_response(upload_payload),
        ]
        coordinator = make_coordinator()
        
        with pytest.raises(RemoteRejection, match="500"):
            await coordinator.upload(tree)
        
        assert transport.post_multipart.await_count == 2
    
    @pytest.mark.asyncio
    async def test_simulated_tree(self, make_coordinator, transport, tree):
        coordinator = make_coordinator(simulate=True)
        
        results = await coordinator.upload_tree(tree)
        
        assert [r.public_id for r in results] == ["b", "css/default", "images/a", "images/nested/c"]
        transport.post_multipart.assert_not_awaited()
    
    @pytest.mark.asyncio
    async def test_parallel_upload(self, make_coordinator, transport, tree):
        coordinator = make_coordinator(max_concurrent_uploads=3)
        
        results = await coordinator.upload_tree(tree)
        
        assert len(results) == 4
        assert transport.post_multipart.await_count == 4
    
    @pytest.mark.asyncio
    async def test_parallel_failure_propagates(self, make_coordinator, transport, tree):
        transport.post_multipart.return_value = HTTPResponse(status=400, reason="Bad Request")
        coordinator = make_coordinator(max_concurrent_uploads=2)
        
        with pytest.raises(RemoteRejection):
            await coordinator.upload_tree(tree)

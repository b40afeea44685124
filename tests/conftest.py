"""Pytest fixtures for cloudinpy tests."""
import json
import pytest
from unittest.mock import AsyncMock

from cloudinpy.core.api import Credentials, ClientSettings, HTTPResponse


FIXED_TIME = 1369431906


@pytest.fixture
def credentials():
    """Returns test account credentials."""
    return Credentials(cloud_name="demo", api_key="123456", api_secret="s3cr3t")


@pytest.fixture
def clock():
    """Returns a clock frozen at a known Unix time."""
    return lambda: FIXED_TIME


@pytest.fixture
def settings():
    """Returns default client settings."""
    return ClientSettings()


def json_response(payload, status=200, reason="OK"):
    """Builds an HTTPResponse carrying a JSON body."""
    return HTTPResponse(status=status, reason=reason, body=json.dumps(payload).encode())


@pytest.fixture
def upload_payload():
    """Returns a sample upload response body."""
    return {
        'public_id': 'images/logo',
        'version': 1369431906,
        'format': 'png',
        'resource_type': 'image',
        'bytes': 2048,
        'width': 64,
        'height': 32,
        'url': 'http://res.cloudinary.com/demo/image/upload/v1369431906/images/logo.png',
        'secure_url': 'https://res.cloudinary.com/demo/image/upload/v1369431906/images/logo.png'
    }


@pytest.fixture
def transport(upload_payload):
    """Returns a spy transport answering every request with success."""
    spy = AsyncMock()
    spy.post_multipart = AsyncMock(return_value=json_response(upload_payload))
    spy.post_form = AsyncMock(return_value=json_response({'result': 'ok'}))
    return spy


@pytest.fixture
def tree(tmp_path):
    """
    Creates a directory tree with 4 files and 4 subdirectories.
    
    root/
      b.png
      css/default.css
      css/empty/
      images/a.png
      images/nested/c.jpg
    """
    root = tmp_path / "root"
    (root / "css" / "empty").mkdir(parents=True)
    (root / "images" / "nested").mkdir(parents=True)
    (root / "b.png").write_bytes(b"b")
    (root / "css" / "default.css").write_bytes(b"body {}")
    (root / "images" / "a.png").write_bytes(b"a")
    (root / "images" / "nested" / "c.jpg").write_bytes(b"c")
    return root


@pytest.fixture
def make_response():
    """Returns the JSON response builder."""
    return json_response

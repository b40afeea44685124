"""
API configuration module.

Provides configuration for the Cloudinary client: transport settings,
account credentials and per-client behaviour switches.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Pattern
from urllib.parse import urlsplit, unquote
import os
import re
import ssl

from ..exceptions import ConfigurationError
from ..url import BASE_UPLOAD_URL, BASE_RESOURCE_URL

URI_SCHEME = 'cloudinary'
URI_ENV_VAR = 'CLOUDINARY_URL'


@dataclass
class ProxyConfig:
    """
    Proxy configuration.
    
    Supports HTTP and HTTPS proxies.
    """
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    
    def to_aiohttp_proxy(self) -> Optional[str]:
        """Convert to aiohttp proxy format."""
        if not self.url:
            return None
        
        if self.username and self.password:
            if '://' in self.url:
                protocol, rest = self.url.split('://', 1)
                return f"{protocol}://{self.username}:{self.password}@{rest}"
        
        return self.url


@dataclass
class SSLConfig:
    """
    SSL/TLS configuration.
    """
    verify: bool = True
    ca_file: Optional[str] = None
    check_hostname: bool = True
    
    def create_ssl_context(self):
        """Create SSL context from configuration."""
        if not self.verify:
            return False  # Disable SSL verification
        
        context = ssl.create_default_context()
        
        if self.ca_file:
            context.load_verify_locations(self.ca_file)
        
        context.check_hostname = self.check_hostname
        
        return context


@dataclass
class TimeoutConfig:
    """
    Timeout configuration.
    
    Uploads of large videos can take a while, hence the long total.
    """
    total: float = 600.0  # Total request timeout
    connect: float = 30.0  # Connection timeout
    sock_read: float = 120.0  # Socket read timeout
    
    def to_aiohttp_timeout(self):
        """Convert to aiohttp ClientTimeout."""
        import aiohttp
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read
        )


@dataclass
class APIConfig:
    """
    Transport configuration.
    
    Centralizes the endpoints and HTTP options used by the client.
    """
    upload_base: str = BASE_UPLOAD_URL
    resource_base: str = BASE_RESOURCE_URL
    
    user_agent: str = 'cloudinpy/1.0.0'
    
    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    
    extra_headers: Dict[str, str] = field(default_factory=dict)
    
    limit_per_host: int = 10
    
    @classmethod
    def default(cls) -> 'APIConfig':
        """Create default configuration."""
        return cls()
    
    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit_per_host': self.limit_per_host,
            'ssl': self.ssl.create_ssl_context(),
        }
    
    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        headers = {
            'User-Agent': self.user_agent,
            **self.extra_headers
        }
        
        return {
            'headers': headers,
            'timeout': self.timeout.to_aiohttp_timeout(),
        }


@dataclass(frozen=True)
class Credentials:
    """
    Account credentials.
    
    Parsed from a connection URI of the form
    ``cloudinary://<api_key>:<api_secret>@<cloud_name>``.
    """
    cloud_name: str
    api_key: str
    api_secret: str = field(repr=False)
    
    @classmethod
    def from_uri(cls, uri: str) -> 'Credentials':
        """
        Parse a connection URI.
        
        Raises:
            ConfigurationError: On wrong scheme, missing secret or cloud name
        """
        try:
            parts = urlsplit((uri or '').strip())
            cloud_name = parts.hostname
            username = parts.username
            password = parts.password
        except ValueError as e:
            raise ConfigurationError(f"Invalid connection URI: {e}") from e
        
        if parts.scheme != URI_SCHEME:
            raise ConfigurationError(f"Missing {URI_SCHEME}:// scheme in URI")
        if password is None:
            raise ConfigurationError("No API secret provided in URI")
        if not cloud_name:
            raise ConfigurationError("No cloud name provided in URI")
        
        # urlsplit lowercases hostname; cloud names are case sensitive
        cloud_name = parts.netloc.rsplit('@', 1)[-1].split(':', 1)[0]
        return cls(
            cloud_name=cloud_name,
            api_key=unquote(username or ''),
            api_secret=unquote(password)
        )
    
    @classmethod
    def from_env(cls, var: str = URI_ENV_VAR) -> 'Credentials':
        """Parse the connection URI stored in an environment variable."""
        uri = os.environ.get(var)
        if not uri:
            raise ConfigurationError(f"Environment variable {var} is not set")
        return cls.from_uri(uri)


def compile_keep_pattern(pattern: Optional[str]) -> Optional[Pattern]:
    """
    Compile the pattern of public ids protected from deletion.
    
    Blank patterns disable protection.
    
    Raises:
        ConfigurationError: If the pattern is not a valid regular expression
    """
    if pattern is None or not pattern.strip():
        return None
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigurationError(f"Invalid keep pattern {pattern!r}: {e}") from e


@dataclass
class ClientSettings:
    """
    Behaviour switches of a client.
    
    Attributes:
        verbose: Log debugging information
        simulate: Dry run, no request ever leaves the process
        keep_files_pattern: Public ids matching it are never deleted
        max_concurrent_uploads: Parallel uploads in directory mode
    """
    verbose: bool = False
    simulate: bool = False
    keep_files_pattern: Optional[Pattern] = None
    max_concurrent_uploads: int = 1
    
    def __post_init__(self):
        """Validate and normalize settings."""
        if isinstance(self.keep_files_pattern, str):
            self.keep_files_pattern = compile_keep_pattern(self.keep_files_pattern)
        if self.max_concurrent_uploads < 1:
            raise ConfigurationError("max_concurrent_uploads must be at least 1")
    
    def is_protected(self, public_id: str) -> bool:
        """Whether deleting ``public_id`` is forbidden."""
        if self.keep_files_pattern is None:
            return False
        return self.keep_files_pattern.search(public_id) is not None

"""Server configuration.

ServerConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path

DEFAULT_PROTOCOL = "http"
VALID_PROTOCOLS = frozenset({"http", "https"})


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Server configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ServerConfig(port=1234, protocol="https", static_path="public")

    An unknown ``protocol`` silently falls back to ``"http"``.
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8080
    protocol: str = DEFAULT_PROTOCOL

    # Static files (also the root of the ``api`` handler directory)
    static_path: str | Path = "./"
    dynamic_pages: bool = True  # Serve index.html for unmatched extensionless paths
    chunk_size: int = 64 * 1024  # Bytes per streamed body message

    # Development
    reload: bool = False
    log_level: str = "info"

    # TLS (required when protocol="https")
    ssl_certfile: str | None = None
    ssl_keyfile: str | None = None

    def __post_init__(self) -> None:
        if self.protocol not in VALID_PROTOCOLS:
            object.__setattr__(self, "protocol", DEFAULT_PROTOCOL)

    @property
    def static_root(self) -> Path:
        """``static_path`` as a Path."""
        return Path(self.static_path)

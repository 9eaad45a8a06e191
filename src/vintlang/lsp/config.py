"""Runtime configuration of the VintLang language server."""

from dataclasses import dataclass

from vintlang.lsp.analysis.diagnostic_engine import DEFAULT_MAX_PROBLEMS

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 3000


@dataclass
class ServerConfig:
    """
    Settings the server is started with.

    Attributes:
        max_problems: Maximum number of diagnostics published per document
        host: Host to bind to in TCP mode
        port: Port to listen on in TCP mode
        use_tcp: Serve over TCP instead of stdio
        debug: Verbose logging
    """

    max_problems: int = DEFAULT_MAX_PROBLEMS
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    use_tcp: bool = False
    debug: bool = False

    def __post_init__(self):
        if self.max_problems < 0:
            raise ValueError(f"max_problems must be non-negative, got {self.max_problems}")
        if not 0 < self.port < 65536:
            raise ValueError(f"port must be between 1 and 65535, got {self.port}")

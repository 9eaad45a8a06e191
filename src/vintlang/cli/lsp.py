import signal
from typing import Optional

import click

from vintlang.cli.utils import configure_logging, get_env_flag, get_env_int, output_error
from vintlang.lsp.config import DEFAULT_HOST, DEFAULT_PORT, ServerConfig
from vintlang.lsp.server import VintLSPServer


@click.command(name="lsp")
@click.option("--port", type=int, help=f"Port number for LSP server (defaults to {DEFAULT_PORT})")
@click.option("--host", default=DEFAULT_HOST, help="Host to bind to when using TCP mode (defaults to localhost)")
@click.option("--tcp", is_flag=True, help="Use TCP instead of stdio for LSP communication")
@click.option("--max-problems", type=int, help="Maximum number of diagnostics per document (defaults to 1000)")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
@click.option("--log-file", type=click.Path(dir_okay=False), help="Also write logs to this file")
def lsp(
    port: Optional[int], host: str, tcp: bool, max_problems: Optional[int], debug: bool, log_file: Optional[str]
):
    """Start the VintLang LSP server.

    This command starts an LSP (Language Server Protocol) server that provides
    diagnostics, completion, hover, navigation, formatting and the other
    language features for VintLang source files.

    By default, the server uses stdio for communication (suitable for IDE integration).
    Use --tcp flag for testing or when stdio communication is not suitable.

    Examples:
        vintlang lsp                     # Start LSP server using stdio
        vintlang lsp --tcp               # Start LSP server using TCP on localhost:3000
        vintlang lsp --tcp --port 4000   # Start LSP server using TCP on localhost:4000
        vintlang lsp --max-problems 100  # Publish at most 100 diagnostics per file
        vintlang lsp --debug             # Start with detailed debug logging
        vintlang lsp --log-file lsp.log  # Keep a log when the editor hides stderr
    """
    # Get values from environment variables if not set by flags
    if not debug:
        debug = get_env_flag("VINTLANG_DEBUG")

    # Configure logging
    configure_logging(debug, log_file)

    try:
        if max_problems is None:
            max_problems = get_env_int("VINTLANG_MAX_PROBLEMS")

        config_kwargs = {"host": host, "use_tcp": tcp, "debug": debug}
        if port is not None:
            config_kwargs["port"] = port
        if max_problems is not None:
            config_kwargs["max_problems"] = max_problems
        config = ServerConfig(**config_kwargs)

        # Set up signal handler for graceful shutdown
        def signal_handler(signum, frame):
            raise KeyboardInterrupt()

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

        server = VintLSPServer(config)

        if tcp:
            click.echo(f"Starting VintLang LSP server on {config.host}:{config.port}", err=True)
        server.start()

    except KeyboardInterrupt:
        click.echo("\nLSP server stopped", err=True)
    except Exception as e:
        output_error(e, json_output=False, debug=debug)

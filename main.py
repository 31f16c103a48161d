# =============================================================================
# main.py  -  Entry Point for the Blinko MCP server
# =============================================================================
#
# HOW TO RUN:
#   mcp-server-blinko --blinko_domain=blinko.example.com --blinko_api_key=KEY
#   (or set BLINKO_DOMAIN / BLINKO_API_KEY, or put them in a .env file)
#
# WHAT HAPPENS:
#   1. Settings are resolved (core/config.py); missing credentials stop here
#   2. A BlinkoClient is built from the credentials (core/blinko.py)
#   3. The dispatcher and FastMCP server are wired up (tools/)
#   4. The server speaks MCP over stdin/stdout until the host disconnects
# =============================================================================

import logging
import sys
from typing import Optional, Sequence

from core.blinko import BlinkoClient
from core.config import Settings, load_settings
from core.errors import ConfigurationError
from tools.dispatcher import NoteToolDispatcher
from tools.mcp_server import configure_logging, create_server


def build_server(settings: Settings):
    """Wire credentials → client → dispatcher → FastMCP server."""
    client = BlinkoClient(settings.credentials, timeout=settings.timeout)
    return create_server(NoteToolDispatcher(client))


def main(argv: Optional[Sequence[str]] = None) -> None:
    try:
        settings = load_settings(argv)
    except ConfigurationError as e:
        configure_logging()
        logging.error(f"Configuration error: {e}")
        sys.exit(1)

    configure_logging(settings.log_level)
    logging.info(f"Starting Blinko MCP server for {settings.credentials.domain}")

    server = build_server(settings)
    server.run()


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()

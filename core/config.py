# =============================================================================
# core/config.py  -  Startup configuration
# =============================================================================
#
# WHERE SETTINGS COME FROM (first match wins):
#   1. Command-line flags   --blinko_domain=... --blinko_api_key=...
#   2. Environment          BLINKO_DOMAIN, BLINKO_API_KEY
#   3. A .env file          loaded into the environment by python-dotenv
#
# Optional:
#   --blinko_timeout / BLINKO_TIMEOUT    seconds per request (default: none)
#   --log_level      / BLINKO_LOG_LEVEL  logging level name (default: INFO)
#
# Domain and API key are both required.  Missing either one is reported as a
# ConfigurationError before the server starts serving tools.
# =============================================================================

import argparse
import logging
import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from dotenv import load_dotenv

from core.errors import ConfigurationError
from core.models import Credentials


@dataclass(frozen=True)
class Settings:
    credentials: Credentials
    timeout: Optional[float] = None
    log_level: str = "INFO"


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcp-server-blinko",
        description="MCP server exposing Blinko note tools over stdio.",
    )
    parser.add_argument("--blinko_domain", help="Blinko host, e.g. blinko.example.com")
    parser.add_argument("--blinko_api_key", help="Blinko API key")
    parser.add_argument("--blinko_timeout", help="Request timeout in seconds")
    parser.add_argument("--log_level", help="Logging level (DEBUG, INFO, ...)")
    return parser


def load_settings(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Resolve settings from flags, then the environment.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).
        environ: Environment mapping.  When omitted, a .env file is loaded
            and os.environ is used.

    Raises:
        ConfigurationError: domain or API key missing, or an unparsable
            timeout / log level.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    args, _ = build_arg_parser().parse_known_args(argv)

    domain = (args.blinko_domain or environ.get("BLINKO_DOMAIN") or "").strip()
    api_key = (args.blinko_api_key or environ.get("BLINKO_API_KEY") or "").strip()
    if not domain:
        raise ConfigurationError(
            "Blinko domain not set (use --blinko_domain or BLINKO_DOMAIN)"
        )
    if not api_key:
        raise ConfigurationError(
            "Blinko API key not set (use --blinko_api_key or BLINKO_API_KEY)"
        )

    timeout = _parse_timeout(args.blinko_timeout or environ.get("BLINKO_TIMEOUT"))

    log_level = (args.log_level or environ.get("BLINKO_LOG_LEVEL") or "INFO").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError(f"Unknown log level: {log_level}")

    return Settings(
        credentials=Credentials(domain=domain, api_key=api_key),
        timeout=timeout,
        log_level=log_level,
    )


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None or not str(raw).strip():
        return None
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigurationError(f"Invalid timeout: {raw!r}") from None
    if not math.isfinite(timeout) or timeout <= 0:
        raise ConfigurationError(f"Timeout must be positive, got {raw!r}")
    return timeout

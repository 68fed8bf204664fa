# =============================================================================
# core/config.py  -  Connection settings loaded once at process start
# =============================================================================
#
# ENVIRONMENT VARIABLES:
#   MEDIAWIKI_BASE_URL   (required)  e.g. https://wiki.example.org/w
#   MEDIAWIKI_API_TOKEN  (optional)  sent as "Authorization: Bearer <token>"
#   MEDIAWIKI_USERNAME   (optional)  carried, not used for login
#   MEDIAWIKI_PASSWORD   (optional)  carried, not used for login
#   MEDIAWIKI_MCP_HOST   (optional)  bind host for sse/http, default localhost
#   MEDIAWIKI_MCP_PORT   (optional)  bind port for sse/http, default 8009
#   LOG_LEVEL            (optional)  default INFO
#
# A .env file in the working directory is honored (python-dotenv).
#
# Only main.py calls load_config().  Everything below it receives an explicit
# WikiConfig; nothing in core/ or tools/ reads os.environ.
# =============================================================================

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from core.errors import ConfigurationError

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8009


@dataclass(frozen=True)
class WikiConfig:
    """Where the wiki lives and which credential (if any) to send."""

    base_url: str
    api_token: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        base_url = (self.base_url or "").strip().rstrip("/")
        if not base_url:
            raise ConfigurationError("MEDIAWIKI_BASE_URL environment variable is required")
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "base_url", base_url)


@dataclass(frozen=True)
class ServerSettings:
    """Everything main.py needs to start serving."""

    wiki: WikiConfig
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"


def _get_optional(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key)
    return value if value else default


def load_config() -> ServerSettings:
    """Build ServerSettings from the environment (and .env, if present).

    Raises:
        ConfigurationError: MEDIAWIKI_BASE_URL is unset, or the port is not
            an integer.
    """
    load_dotenv()

    wiki = WikiConfig(
        base_url=_get_optional("MEDIAWIKI_BASE_URL", ""),
        api_token=_get_optional("MEDIAWIKI_API_TOKEN"),
        username=_get_optional("MEDIAWIKI_USERNAME"),
        password=_get_optional("MEDIAWIKI_PASSWORD"),
    )

    raw_port = _get_optional("MEDIAWIKI_MCP_PORT", str(DEFAULT_PORT))
    try:
        port = int(raw_port)
    except ValueError as e:
        raise ConfigurationError(f"MEDIAWIKI_MCP_PORT must be an integer, got {raw_port!r}") from e

    return ServerSettings(
        wiki=wiki,
        host=_get_optional("MEDIAWIKI_MCP_HOST", DEFAULT_HOST),
        port=port,
        log_level=_get_optional("LOG_LEVEL", "INFO").upper(),
    )

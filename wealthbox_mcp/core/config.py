"""Configuration loading for the Wealthbox MCP adapter."""

import logging
import os
from pathlib import Path
from typing import Mapping

from .models import DEFAULT_BASE_URL, ConfigError, PaginationPolicy, Settings

logger = logging.getLogger(__name__)

# Checked in order, relative to the search directory
TOKEN_FILES = (
    Path("wealthbox_key.txt"),
    Path(".secrets") / "wealthbox_key.txt",
)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def read_token_file(search_dir: Path | None = None) -> str | None:
    """
    Read the API token from a local secret file.

    The candidates are:
    1. wealthbox_key.txt
    2. .secrets/wealthbox_key.txt

    Args:
        search_dir: Directory to look in (defaults to the current directory)

    Returns:
        The first non-empty token found, or None
    """
    base_dir = Path(search_dir) if search_dir is not None else Path.cwd()

    for candidate in TOKEN_FILES:
        path = base_dir / candidate
        if not path.is_file():
            continue
        try:
            value = path.read_text(encoding="utf-8").strip()
        except OSError as e:
            raise ConfigError(f"Failed to read token file {path}: {e}")
        if value:
            logger.debug(f"Loaded Wealthbox token from {path}")
            return value

    return None


def _parse_bool(name: str, raw: str | None, default: bool) -> bool:
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got '{raw}'")


def _parse_positive_int(name: str, raw: str | None, default: int) -> int:
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got '{raw}'")
    if value < 1:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def load_pagination_policy(environ: Mapping[str, str]) -> PaginationPolicy:
    """Build the default pagination policy from environment variables."""
    return PaginationPolicy(
        apply_default_pagination=_parse_bool(
            "WEALTHBOX_DEFAULT_PAGINATION", environ.get("WEALTHBOX_DEFAULT_PAGINATION"), True
        ),
        default_page=_parse_positive_int(
            "WEALTHBOX_DEFAULT_PAGE", environ.get("WEALTHBOX_DEFAULT_PAGE"), 1
        ),
        default_per_page=_parse_positive_int(
            "WEALTHBOX_DEFAULT_PER_PAGE", environ.get("WEALTHBOX_DEFAULT_PER_PAGE"), 5
        ),
    )


def load_settings(
    environ: Mapping[str, str] | None = None,
    search_dir: Path | None = None,
) -> Settings:
    """
    Load adapter settings.

    The token comes from WEALTHBOX_TOKEN, falling back to a local secret
    file. The base URL comes from WEALTHBOX_API_BASE_URL.

    Args:
        environ: Environment mapping (defaults to os.environ)
        search_dir: Directory searched for token files

    Returns:
        Settings for the process lifetime

    Raises:
        ConfigError: If no token is available or a value is invalid
    """
    if environ is None:
        environ = os.environ

    token = (environ.get("WEALTHBOX_TOKEN") or "").strip() or read_token_file(search_dir)
    if not token:
        raise ConfigError(
            "WEALTHBOX_TOKEN is required. Set the environment variable or "
            "create wealthbox_key.txt or .secrets/wealthbox_key.txt"
        )

    base_url = (environ.get("WEALTHBOX_API_BASE_URL") or "").strip() or DEFAULT_BASE_URL

    settings = Settings(
        token=token,
        base_url=base_url,
        pagination=load_pagination_policy(environ),
    )
    logger.debug(f"Loaded settings for {settings.base_url}")
    return settings

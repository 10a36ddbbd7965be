"""Core components for the Wealthbox MCP adapter."""

from .models import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
    HttpMethod,
    OperationKind,
    OperationDescriptor,
    PaginationPolicy,
    Settings,
    ConfigError,
    ValidationError,
    OperationNotFoundError,
)
from .registry import OperationRegistry
from .config import (
    read_token_file,
    load_pagination_policy,
    load_settings,
)

__all__ = [
    "HttpMethod",
    "OperationKind",
    "OperationDescriptor",
    "PaginationPolicy",
    "Settings",
    "ConfigError",
    "ValidationError",
    "OperationNotFoundError",
    "OperationRegistry",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "read_token_file",
    "load_pagination_policy",
    "load_settings",
]

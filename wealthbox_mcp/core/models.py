"""Core data models for the Wealthbox MCP adapter."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

DEFAULT_BASE_URL = "https://api.crmworkspace.com"
DEFAULT_TIMEOUT_SECONDS = 15.0


class HttpMethod(Enum):
    """HTTP verbs accepted by the Wealthbox API."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class OperationKind(Enum):
    """Category of an operation, which decides how arguments are shaped."""
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    NESTED = "nested"
    ACTION = "action"
    METADATA = "metadata"
    PASSTHROUGH = "passthrough"


@dataclass(frozen=True)
class OperationDescriptor:
    """
    A named, schema-described unit of upstream functionality.

    Descriptors are built once when the catalog is assembled and never
    mutated afterwards.
    """
    name: str
    description: str
    http_method: HttpMethod
    path_template: str
    kind: OperationKind
    input_schema: dict[str, Any] = field(default_factory=dict)
    body_shaper: Callable[[dict[str, Any]], dict[str, Any]] | None = None
    convenience_fields: tuple[str, ...] = ()
    query_fields: tuple[str, ...] = ()
    paginated: bool = False
    result_transform: Callable[[Any], Any] | None = None

    @property
    def accepts_body(self) -> bool:
        """Whether invocations of this operation send a request body."""
        return self.kind in (OperationKind.CREATE, OperationKind.UPDATE, OperationKind.NESTED) \
            and self.http_method is not HttpMethod.DELETE

    def to_dict(self) -> dict[str, Any]:
        """Convert the descriptor to the shape advertised to hosts."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


@dataclass(frozen=True)
class PaginationPolicy:
    """Default page/per_page injection applied to list operations."""
    apply_default_pagination: bool = True
    default_page: int = 1
    default_per_page: int = 5


@dataclass(frozen=True)
class Settings:
    """Client session state shared read-only by every invocation."""
    token: str
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    pagination: PaginationPolicy = field(default_factory=PaginationPolicy)

    def __post_init__(self):
        # frozen dataclass, so bypass __setattr__ to normalise the URL
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))


class ConfigError(Exception):
    """Raised when configuration is missing or invalid."""
    pass


class ValidationError(Exception):
    """Raised when an invocation is rejected before any network call."""
    pass


class OperationNotFoundError(ValidationError):
    """Raised when an invocation names an operation that does not exist."""
    pass

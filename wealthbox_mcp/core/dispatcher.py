"""Dispatch of named invocations onto the HTTP bridge."""

import logging
from string import Formatter
from typing import Any, Mapping, Protocol
from urllib.parse import quote

from wealthbox_mcp.operations.base import body_for, resolve_body

from .models import (
    HttpMethod,
    OperationDescriptor,
    OperationKind,
    PaginationPolicy,
    ValidationError,
)
from .registry import OperationRegistry

logger = logging.getLogger(__name__)


class Executor(Protocol):
    """Anything that can perform one upstream call."""

    def execute(
        self,
        method: str,
        path: str,
        body: Any = None,
        query: Mapping[str, Any] | None = None,
    ) -> Any:
        ...


def coerce_id(name: str, value: Any) -> int:
    """
    Validate a numeric identifier argument.

    Accepts positive integers and strings of ASCII digits; booleans are
    rejected.

    Raises:
        ValidationError: If the value is missing, not numeric or below 1
    """
    if value is None:
        raise ValidationError(f"Missing required argument '{name}'")
    if isinstance(value, bool):
        raise ValidationError(f"'{name}' must be a number")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdecimal():
        value = int(value.strip())
    if not isinstance(value, int):
        raise ValidationError(f"'{name}' must be a number, got {value!r}")
    if value < 1:
        raise ValidationError(f"'{name}' must be a positive id, got {value}")
    return value


def path_parameters(template: str) -> list[str]:
    """Return the placeholder names in a path template, in order."""
    return [name for _, name, _, _ in Formatter().parse(template) if name]


def render_path(operation: OperationDescriptor, arguments: Mapping[str, Any]) -> str:
    """
    Substitute path parameters into an operation's path template.

    Integer parameters are validated as ids; string parameters are
    URL-encoded.

    Raises:
        ValidationError: If a path parameter is missing or malformed
    """
    properties = operation.input_schema.get("properties", {})
    values: dict[str, str] = {}

    for name in path_parameters(operation.path_template):
        param_type = properties.get(name, {}).get("type")
        value = arguments.get(name)
        if param_type == "string":
            if not isinstance(value, str) or not value:
                raise ValidationError(f"Missing required argument '{name}'")
            values[name] = quote(value, safe="")
        else:
            values[name] = str(coerce_id(name, value))

    return operation.path_template.format(**values)


class Dispatcher:
    """
    Translates named invocations into HTTP bridge calls.

    Validation happens before the bridge is touched, so a rejected
    invocation never reaches the network.
    """

    def __init__(
        self,
        registry: OperationRegistry,
        client: Executor,
        pagination: PaginationPolicy | None = None,
    ):
        """
        Initialize the dispatcher.

        Args:
            registry: Catalog of operations
            client: Bridge used for upstream calls
            pagination: Default pagination policy for list operations
        """
        self.registry = registry
        self.client = client
        self.pagination = pagination or PaginationPolicy()

    def list_operations(self) -> list[OperationDescriptor]:
        """Return the catalog advertised to hosts."""
        return self.registry.list_operations()

    def invoke(self, name: str, arguments: Mapping[str, Any] | None = None) -> Any:
        """
        Execute one named operation.

        Args:
            name: Operation name (e.g., "contacts.get")
            arguments: Invocation arguments

        Returns:
            Parsed JSON or raw text from the upstream API

        Raises:
            OperationNotFoundError: If the name is unknown
            ValidationError: If arguments are missing or malformed
            BridgeError: If the upstream call fails
        """
        operation = self.registry.get(name)
        arguments = dict(arguments or {})

        logger.info(f"Invoking {name}")

        if operation.kind is OperationKind.PASSTHROUGH:
            return self._passthrough(arguments)

        path = render_path(operation, arguments)
        query = self._build_query(operation, arguments)

        body = None
        if operation.accepts_body:
            body = body_for(
                resolve_body(arguments, operation.convenience_fields),
                operation.body_shaper,
            )

        result = self.client.execute(
            operation.http_method.value,
            path,
            body=body,
            query=query or None,
        )

        if operation.result_transform is not None:
            return operation.result_transform(result)
        return result

    def _build_query(self, operation: OperationDescriptor, arguments: dict[str, Any]) -> dict[str, Any]:
        if operation.kind is OperationKind.LIST:
            raw = arguments.get("query")
            if raw is None:
                query = {}
            elif isinstance(raw, dict):
                query = dict(raw)
            else:
                raise ValidationError("'query' must be an object")

            if operation.paginated and self.pagination.apply_default_pagination:
                if query.get("page") is None:
                    query["page"] = self.pagination.default_page
                if query.get("per_page") is None:
                    query["per_page"] = self.pagination.default_per_page
            return query

        return {
            field: arguments[field]
            for field in operation.query_fields
            if arguments.get(field) is not None
        }

    def _passthrough(self, arguments: dict[str, Any]) -> Any:
        method = arguments.get("method")
        path = arguments.get("path")
        if not method or not path:
            raise ValidationError("request requires method and path")
        if not isinstance(path, str):
            raise ValidationError("'path' must be a string")

        try:
            method = HttpMethod(str(method).upper()).value
        except ValueError:
            raise ValidationError(f"Unsupported HTTP method: {method}")

        query = arguments.get("query")
        if query is not None and not isinstance(query, dict):
            raise ValidationError("'query' must be an object")

        return self.client.execute(method, path, body=arguments.get("body"), query=query)

"""Building blocks shared by the operation catalog."""

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from wealthbox_mcp.core.models import (
    HttpMethod,
    OperationDescriptor,
    OperationKind,
    ValidationError,
)

API_ROOT = "/v1"

ID_SCHEMA = {"type": "integer", "minimum": 1}

RAW_BODY_SCHEMA = {
    "type": "object",
    "additionalProperties": True,
    "description": "Raw request body. When given, all convenience fields are ignored.",
}

LIST_QUERY_SCHEMA = {
    "type": "object",
    "properties": {
        "page": {"type": "integer", "minimum": 1},
        "per_page": {"type": "integer", "minimum": 1},
    },
    "additionalProperties": True,
    "description": "Query parameters forwarded as-is (filters, page, per_page).",
}


def object_schema(properties: dict[str, Any] | None = None, required: list[str] | None = None) -> dict[str, Any]:
    """Build a JSON Schema object for an operation's arguments."""
    schema: dict[str, Any] = {"type": "object", "properties": dict(properties or {})}
    if required:
        schema["required"] = list(required)
    return schema


@dataclass(frozen=True)
class RawBody:
    """Request body supplied verbatim by the caller."""
    payload: Any


@dataclass(frozen=True)
class ShapedBody:
    """Request body assembled from convenience fields."""
    fields: dict[str, Any]


Body = RawBody | ShapedBody


def resolve_body(arguments: Mapping[str, Any], convenience_fields: tuple[str, ...]) -> Body:
    """
    Decide which body an invocation sends.

    A raw ``body`` argument takes precedence; convenience fields are then
    ignored entirely, never merged.

    Args:
        arguments: Invocation arguments
        convenience_fields: Names of fields that may be assembled into a body

    Returns:
        RawBody or ShapedBody

    Raises:
        ValidationError: If neither a raw body nor any convenience field is given
    """
    raw = arguments.get("body")
    if raw is not None:
        if not isinstance(raw, dict):
            raise ValidationError("'body' must be an object")
        return RawBody(raw)

    fields = {
        name: arguments[name]
        for name in convenience_fields
        if arguments.get(name) is not None
    }
    if not fields:
        expected = ", ".join(convenience_fields) if convenience_fields else "none"
        raise ValidationError(
            f"Provide 'body' or at least one convenience field ({expected})"
        )
    return ShapedBody(fields)


def shape_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    """
    Assemble convenience fields into a Wealthbox request body.

    Most fields pass through unchanged. ``email`` becomes a principal
    entry in ``email_addresses`` and ``contact_id`` becomes a
    ``linked_to`` reference.
    """
    body: dict[str, Any] = {}
    for key, value in fields.items():
        if value is None:
            continue
        if key == "email":
            body["email_addresses"] = [{"address": value, "principal": True}]
        elif key == "contact_id":
            body["linked_to"] = [{"id": value, "type": "Contact"}]
        else:
            body[key] = value
    return body


def body_for(body: Body, shaper: Callable[[dict[str, Any]], dict[str, Any]] | None) -> Any:
    """Turn a resolved body into the payload sent upstream."""
    if isinstance(body, RawBody):
        return body.payload
    if shaper is None:
        return dict(body.fields)
    return shaper(body.fields)


@dataclass(frozen=True)
class Resource:
    """
    A Wealthbox record type exposed through standard CRUD operations.

    Each resource expands into ``<name>.list``, ``<name>.get``,
    ``<name>.create``, ``<name>.update`` and ``<name>.delete`` descriptors,
    restricted to the actions it supports.
    """
    name: str
    api_path: str
    label: str
    fields: dict[str, Any] = field(default_factory=dict)
    actions: tuple[str, ...] = ("list", "get", "create", "update", "delete")

    @property
    def collection_path(self) -> str:
        return f"{API_ROOT}/{self.api_path}"

    @property
    def item_path(self) -> str:
        return f"{API_ROOT}/{self.api_path}/{{id}}"

    def operations(self) -> list[OperationDescriptor]:
        """Expand the resource into operation descriptors."""
        builders = {
            "list": self._list,
            "get": self._get,
            "create": self._create,
            "update": self._update,
            "delete": self._delete,
        }
        return [builders[action]() for action in self.actions]

    def _list(self) -> OperationDescriptor:
        return OperationDescriptor(
            name=f"{self.name}.list",
            description=f"List {self.label}s. Optional query filters are forwarded as query parameters.",
            http_method=HttpMethod.GET,
            path_template=self.collection_path,
            kind=OperationKind.LIST,
            input_schema=object_schema({"query": LIST_QUERY_SCHEMA}),
            paginated=True,
        )

    def _get(self) -> OperationDescriptor:
        return OperationDescriptor(
            name=f"{self.name}.get",
            description=f"Get a {self.label} by id",
            http_method=HttpMethod.GET,
            path_template=self.item_path,
            kind=OperationKind.GET,
            input_schema=object_schema({"id": ID_SCHEMA}, required=["id"]),
        )

    def _create(self) -> OperationDescriptor:
        properties = dict(self.fields)
        properties["body"] = RAW_BODY_SCHEMA
        return OperationDescriptor(
            name=f"{self.name}.create",
            description=f"Create a {self.label} from a raw body or convenience fields",
            http_method=HttpMethod.POST,
            path_template=self.collection_path,
            kind=OperationKind.CREATE,
            input_schema=object_schema(properties),
            body_shaper=shape_fields,
            convenience_fields=tuple(self.fields),
        )

    def _update(self) -> OperationDescriptor:
        properties = {"id": ID_SCHEMA}
        properties.update(self.fields)
        properties["body"] = RAW_BODY_SCHEMA
        return OperationDescriptor(
            name=f"{self.name}.update",
            description=f"Update a {self.label} from a raw body or convenience fields",
            http_method=HttpMethod.PUT,
            path_template=self.item_path,
            kind=OperationKind.UPDATE,
            input_schema=object_schema(properties, required=["id"]),
            body_shaper=shape_fields,
            convenience_fields=tuple(self.fields),
        )

    def _delete(self) -> OperationDescriptor:
        return OperationDescriptor(
            name=f"{self.name}.delete",
            description=f"Delete a {self.label} by id",
            http_method=HttpMethod.DELETE,
            path_template=self.item_path,
            kind=OperationKind.DELETE,
            input_schema=object_schema({"id": ID_SCHEMA}, required=["id"]),
        )

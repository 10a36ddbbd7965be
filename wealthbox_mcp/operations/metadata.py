"""Account, metadata, workflow step and household operations."""

from typing import Any

from wealthbox_mcp.core.models import HttpMethod, OperationDescriptor, OperationKind

from .base import (
    API_ROOT,
    ID_SCHEMA,
    LIST_QUERY_SCHEMA,
    RAW_BODY_SCHEMA,
    object_schema,
    shape_fields,
)


def _health_result(payload: Any) -> dict[str, Any]:
    return {"ok": True, "me": payload}


def _fixed_get(name: str, description: str, path: str, query_fields: dict[str, Any] | None = None) -> OperationDescriptor:
    return OperationDescriptor(
        name=name,
        description=description,
        http_method=HttpMethod.GET,
        path_template=f"{API_ROOT}{path}",
        kind=OperationKind.METADATA,
        input_schema=object_schema(query_fields),
        query_fields=tuple(query_fields or ()),
    )


ACCOUNT_OPERATIONS = [
    OperationDescriptor(
        name="health",
        description="Health check that calls /v1/me to verify the token and connectivity",
        http_method=HttpMethod.GET,
        path_template=f"{API_ROOT}/me",
        kind=OperationKind.METADATA,
        input_schema=object_schema(),
        result_transform=_health_result,
    ),
    _fixed_get("me.get", "Retrieve login profile information for the authenticated user", "/me"),
    _fixed_get("users.list", "List all users accessible to the authenticated account", "/users"),
    _fixed_get("teams.list", "List all teams in the authenticated account", "/teams"),
]

REQUEST_OPERATION = OperationDescriptor(
    name="request",
    description="Generic Wealthbox API request supporting method, path, body and query",
    http_method=HttpMethod.GET,
    path_template="",
    kind=OperationKind.PASSTHROUGH,
    input_schema=object_schema(
        {
            "method": {"type": "string", "enum": [m.value for m in HttpMethod]},
            "path": {"type": "string", "description": "API path beginning with /v1"},
            "body": {"type": ["object", "null"], "additionalProperties": True},
            "query": {"type": "object", "additionalProperties": True},
        },
        required=["method", "path"],
    ),
)

METADATA_OPERATIONS = [
    _fixed_get(
        "comments.list",
        "List comments, optionally filtered by resource",
        "/comments",
        {
            "resource_id": {"type": "integer"},
            "resource_type": {"type": "string"},
            "updated_since": {"type": "string"},
            "updated_before": {"type": "string"},
        },
    ),
    _fixed_get("userGroups.list", "List user groups", "/user_groups"),
    OperationDescriptor(
        name="categories.list",
        description="List members of a customizable category (e.g. tags, contact_sources)",
        http_method=HttpMethod.GET,
        path_template=f"{API_ROOT}/categories/{{type}}",
        kind=OperationKind.METADATA,
        input_schema=object_schema({"type": {"type": "string"}}, required=["type"]),
    ),
    _fixed_get(
        "tags.list",
        "List tags, optionally filtered by document_type",
        "/tags",
        {"document_type": {"type": "string", "enum": ["Contact", "Note"]}},
    ),
    _fixed_get("customFields.list", "List custom fields", "/custom_fields"),
    _fixed_get("contactRoles.list", "List contact roles", "/contact_roles"),
    OperationDescriptor(
        name="activityStream.list",
        description="Retrieve the activity stream",
        http_method=HttpMethod.GET,
        path_template=f"{API_ROOT}/activity_stream",
        kind=OperationKind.LIST,
        input_schema=object_schema({"query": LIST_QUERY_SCHEMA}),
        paginated=True,
    ),
]

WORKFLOW_STEP_OPERATIONS = [
    OperationDescriptor(
        name=f"workflowSteps.{action}",
        description=f"{action.capitalize()} a workflow step",
        http_method=HttpMethod.POST,
        path_template=f"{API_ROOT}/workflow_steps/{{id}}/{action}",
        kind=OperationKind.ACTION,
        input_schema=object_schema({"id": ID_SCHEMA}, required=["id"]),
    )
    for action in ("complete", "revert")
]

HOUSEHOLD_MEMBER_FIELDS = {
    "id": {"type": "integer", "minimum": 1, "description": "Contact id of the new member"},
    "title": {"type": "string", "description": "Household title, e.g. Head, Spouse"},
}

HOUSEHOLD_OPERATIONS = [
    OperationDescriptor(
        name="households.addMember",
        description="Add a member to a household from a raw body or id/title",
        http_method=HttpMethod.POST,
        path_template=f"{API_ROOT}/households/{{household_id}}/members",
        kind=OperationKind.NESTED,
        input_schema=object_schema(
            {"household_id": ID_SCHEMA, **HOUSEHOLD_MEMBER_FIELDS, "body": RAW_BODY_SCHEMA},
            required=["household_id"],
        ),
        body_shaper=shape_fields,
        convenience_fields=tuple(HOUSEHOLD_MEMBER_FIELDS),
    ),
    OperationDescriptor(
        name="households.deleteMember",
        description="Remove a member from a household",
        http_method=HttpMethod.DELETE,
        path_template=f"{API_ROOT}/households/{{household_id}}/members/{{id}}",
        kind=OperationKind.NESTED,
        input_schema=object_schema(
            {"household_id": ID_SCHEMA, "id": ID_SCHEMA},
            required=["household_id", "id"],
        ),
    ),
]

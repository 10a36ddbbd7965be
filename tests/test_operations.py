"""Tests for the operation catalog and body shaping."""

import pytest

from wealthbox_mcp.core.models import HttpMethod, OperationKind, ValidationError
from wealthbox_mcp.operations import (
    RawBody,
    ShapedBody,
    Resource,
    resolve_body,
    shape_fields,
    body_for,
    build_registry,
    default_operations,
)


@pytest.fixture
def registry():
    return build_registry()


# ===== Catalog Tests =====

def test_catalog_names_are_unique():
    """Test that no operation name appears twice."""
    names = [op.name for op in default_operations()]
    assert len(names) == len(set(names))


def test_catalog_contains_expected_operations(registry):
    """Test a representative sample of the catalog."""
    for name in [
        "health", "me.get", "users.list", "teams.list", "request",
        "contacts.list", "contacts.get", "contacts.create", "contacts.update", "contacts.delete",
        "tasks.delete", "events.update", "notes.create", "opportunities.get", "projects.list",
        "workflows.create", "workflowTemplates.get", "workflowSteps.complete", "workflowSteps.revert",
        "comments.list", "userGroups.list", "categories.list", "tags.list", "customFields.list",
        "contactRoles.list", "activityStream.list", "households.addMember", "households.deleteMember",
    ]:
        assert name in registry


def test_notes_cannot_be_deleted(registry):
    """Test that resources only expose the actions they support."""
    assert "notes.delete" not in registry
    assert "workflows.update" not in registry


@pytest.mark.parametrize("name,method,path", [
    ("contacts.list", HttpMethod.GET, "/v1/contacts"),
    ("contacts.get", HttpMethod.GET, "/v1/contacts/{id}"),
    ("contacts.create", HttpMethod.POST, "/v1/contacts"),
    ("contacts.update", HttpMethod.PUT, "/v1/contacts/{id}"),
    ("contacts.delete", HttpMethod.DELETE, "/v1/contacts/{id}"),
    ("workflowTemplates.list", HttpMethod.GET, "/v1/workflow_templates"),
    ("workflowSteps.revert", HttpMethod.POST, "/v1/workflow_steps/{id}/revert"),
    ("households.addMember", HttpMethod.POST, "/v1/households/{household_id}/members"),
    ("categories.list", HttpMethod.GET, "/v1/categories/{type}"),
])
def test_operation_routes(registry, name, method, path):
    """Test operation verbs and path templates."""
    operation = registry.get(name)
    assert operation.http_method is method
    assert operation.path_template == path


def test_id_operations_require_id(registry):
    """Test that get/update/delete schemas declare id as required."""
    for operation in registry.list_operations():
        if operation.kind in (OperationKind.GET, OperationKind.UPDATE, OperationKind.DELETE, OperationKind.ACTION):
            assert "id" in operation.input_schema.get("required", []), operation.name


def test_create_schema_offers_body_and_fields(registry):
    """Test that create operations advertise raw body and convenience fields."""
    schema = registry.get("contacts.create").input_schema

    assert "body" in schema["properties"]
    assert "first_name" in schema["properties"]
    assert schema["properties"]["type"]["enum"] == ["Person", "Household", "Organization", "Trust"]
    assert "required" not in schema


def test_request_schema_has_method_enum(registry):
    """Test that the passthrough operation uses a strict method enum."""
    schema = registry.get("request").input_schema

    assert schema["properties"]["method"]["enum"] == ["GET", "POST", "PUT", "PATCH", "DELETE"]
    assert schema["required"] == ["method", "path"]


def test_only_resource_lists_are_paginated(registry):
    """Test which operations apply the default pagination policy."""
    assert registry.get("contacts.list").paginated
    assert registry.get("activityStream.list").paginated
    assert not registry.get("tags.list").paginated
    assert not registry.get("comments.list").paginated


def test_resource_expansion():
    """Test expanding a custom resource into descriptors."""
    resource = Resource(name="widgets", api_path="widgets", label="widget", actions=("list", "get"))

    names = [op.name for op in resource.operations()]
    assert names == ["widgets.list", "widgets.get"]


# ===== Body Resolution Tests =====

def test_raw_body_takes_precedence():
    """Test that a raw body wins and convenience fields are ignored."""
    body = resolve_body(
        {"body": {"first_name": "Raw"}, "first_name": "Ignored", "last_name": "Ignored"},
        ("first_name", "last_name"),
    )

    assert body == RawBody({"first_name": "Raw"})


def test_convenience_fields_are_shaped():
    """Test that convenience fields are collected when no raw body is given."""
    body = resolve_body({"first_name": "Jane", "last_name": None, "id": 5}, ("first_name", "last_name"))

    assert body == ShapedBody({"first_name": "Jane"})


def test_missing_body_and_fields():
    """Test that an invocation with no body content is rejected."""
    with pytest.raises(ValidationError):
        resolve_body({}, ("first_name",))


def test_raw_body_must_be_object():
    """Test that a non-object raw body is rejected."""
    with pytest.raises(ValidationError):
        resolve_body({"body": "text"}, ("first_name",))


def test_shape_fields_special_rules():
    """Test email and contact_id shaping."""
    body = shape_fields({"name": "Call", "email": "a@b.com", "contact_id": 7})

    assert body == {
        "name": "Call",
        "email_addresses": [{"address": "a@b.com", "principal": True}],
        "linked_to": [{"id": 7, "type": "Contact"}],
    }


def test_body_for_raw_is_verbatim():
    """Test that a raw body bypasses the shaper."""
    payload = {"email": "kept@as.is"}

    assert body_for(RawBody(payload), shape_fields) is payload


def test_body_for_shaped_without_shaper():
    """Test shaped fields with no shaper are sent as given."""
    assert body_for(ShapedBody({"id": 1, "title": "Head"}), None) == {"id": 1, "title": "Head"}

"""Static catalog of Wealthbox operations."""

from wealthbox_mcp.core.models import OperationDescriptor
from wealthbox_mcp.core.registry import OperationRegistry

from .base import RawBody, ShapedBody, Resource, resolve_body, shape_fields, body_for
from .records import RESOURCES
from .metadata import (
    ACCOUNT_OPERATIONS,
    REQUEST_OPERATION,
    METADATA_OPERATIONS,
    WORKFLOW_STEP_OPERATIONS,
    HOUSEHOLD_OPERATIONS,
)


def default_operations() -> list[OperationDescriptor]:
    """Return every operation in catalog order."""
    operations = list(ACCOUNT_OPERATIONS)
    for resource in RESOURCES:
        operations.extend(resource.operations())
    operations.extend(METADATA_OPERATIONS)
    operations.extend(WORKFLOW_STEP_OPERATIONS)
    operations.extend(HOUSEHOLD_OPERATIONS)
    operations.append(REQUEST_OPERATION)
    return operations


def build_registry() -> OperationRegistry:
    """Build a registry holding the full catalog."""
    return OperationRegistry(default_operations())


__all__ = [
    "RawBody",
    "ShapedBody",
    "Resource",
    "resolve_body",
    "shape_fields",
    "body_for",
    "RESOURCES",
    "default_operations",
    "build_registry",
]

"""Operation registry holding the catalog of callable operations."""

import logging
from typing import Iterable

from .models import OperationDescriptor, OperationNotFoundError

logger = logging.getLogger(__name__)


class OperationRegistry:
    """
    Catalog of operation descriptors keyed by name.

    Names are unique: registering the same name twice is an error rather
    than an overwrite.
    """

    def __init__(self, operations: Iterable[OperationDescriptor] = ()):
        self._operations: dict[str, OperationDescriptor] = {}
        for operation in operations:
            self.register(operation)

    def register(self, operation: OperationDescriptor) -> OperationDescriptor:
        """
        Add an operation to the registry.

        Args:
            operation: Descriptor to register

        Returns:
            The registered descriptor

        Raises:
            ValueError: If an operation with the same name already exists
        """
        if operation.name in self._operations:
            raise ValueError(f"Operation '{operation.name}' is already registered")

        self._operations[operation.name] = operation
        logger.debug(f"Registered operation: {operation.name} ({operation.http_method.value} {operation.path_template})")
        return operation

    def get(self, name: str) -> OperationDescriptor:
        """
        Retrieve an operation by name.

        Raises:
            OperationNotFoundError: If no operation has that name
        """
        if name not in self._operations:
            raise OperationNotFoundError(f"No such operation: '{name}'")

        return self._operations[name]

    def list_operations(self) -> list[OperationDescriptor]:
        """Return all operations in registration order."""
        return list(self._operations.values())

    def __contains__(self, name: object) -> bool:
        return name in self._operations

    def __len__(self) -> int:
        return len(self._operations)

"""Exception types raised by paramguard."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from paramguard.messages import ValidationFault


class ParamGuardError(Exception):
    """Base class for paramguard errors."""


class ConfigurationError(ParamGuardError, ValueError):
    """Invalid construction of a validator set, interceptor or host."""


class ValidationFaultError(ParamGuardError):
    """Abort signal raised when a call fails input validation."""

    def __init__(self, fault: "ValidationFault"):
        self.fault = fault
        super().__init__(fault.message)

    @property
    def operation(self) -> str:
        """Name of the rejected operation."""
        return self.fault.operation


class OperationNotFoundError(ParamGuardError, LookupError):
    """Raised when a host is asked to invoke an operation it does not know."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Unknown operation: {operation}")

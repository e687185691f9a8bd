"""Fault payloads and the generators that render them."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, Field

from paramguard.validation import ValidationFailure

DEFAULT_HEADER = "Service operation {operation} failed due to validation errors:"


class ValidationFault(BaseModel):
    """Structured error payload returned to a caller in place of a response."""

    operation: str = Field(description="Name of the rejected operation")
    message: str = Field(description="Rendered, human-readable summary")
    failures: list[ValidationFailure] = Field(
        default_factory=list, description="Every failure, in input then validator order"
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "operation": self.operation,
            "message": self.message,
            "failures": [failure.to_dict() for failure in self.failures]
        }


class ErrorMessageGenerator(ABC):
    """Turns an operation name and its failures into a fault payload."""

    @abstractmethod
    def generate(self, operation_name: str, failures: Sequence[ValidationFailure]) -> ValidationFault:
        pass


class DefaultErrorMessageGenerator(ErrorMessageGenerator):
    """Render a header line followed by one line per failure."""

    def __init__(self, header: str = DEFAULT_HEADER):
        self.header = header

    def render(self, operation_name: str, failures: Sequence[ValidationFailure]) -> str:
        lines = [self.header.format(operation=operation_name), ""]
        lines.extend(str(failure) for failure in failures)
        return "\n".join(lines)

    def generate(self, operation_name: str, failures: Sequence[ValidationFailure]) -> ValidationFault:
        return ValidationFault(
            operation=operation_name,
            message=self.render(operation_name, failures),
            failures=list(failures)
        )

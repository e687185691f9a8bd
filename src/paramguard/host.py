"""In-process service host that drives the parameter inspector lifecycle."""

import logging
from collections.abc import Callable, Sequence
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from paramguard.config import GuardConfig, build_interceptor
from paramguard.errors import ConfigurationError, OperationNotFoundError, ValidationFaultError
from paramguard.interceptor import ValidatingInterceptor
from paramguard.messages import ValidationFault

logger = logging.getLogger(__name__)


@runtime_checkable
class ParameterInspector(Protocol):
    """Lifecycle hooks run around every operation of a host."""

    def before_call(self, operation_name: str, inputs: Sequence[Any]) -> Any:
        ...

    def after_call(
        self,
        operation_name: str,
        outputs: Sequence[Any],
        return_value: Any,
        correlation_state: Any,
    ) -> None:
        ...


class CallRequest(BaseModel):
    """A call addressed to a named operation."""
    operation: str
    inputs: list[Any] = Field(default_factory=list)


class CallResponse(BaseModel):
    """Result of dispatching a CallRequest."""
    operation: str
    ok: bool
    result: Any = None
    fault: ValidationFault | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "operation": self.operation,
            "ok": self.ok,
            "result": self.result,
            "fault": self.fault.to_dict() if self.fault else None
        }


class ServiceHost:
    """Registry of operations sharing one chain of parameter inspectors."""

    def __init__(self, name: str = "service"):
        self.name = name
        self._operations: dict[str, Callable[..., Any]] = {}
        self._inspectors: list[ParameterInspector] = []

    @property
    def operations(self) -> list[str]:
        return list(self._operations)

    @property
    def inspectors(self) -> tuple[ParameterInspector, ...]:
        return tuple(self._inspectors)

    def register(self, name: str, func: Callable[..., Any]) -> None:
        """Register an operation under ``name``."""
        if name in self._operations:
            raise ConfigurationError(f"Operation already registered: {name}")
        self._operations[name] = func
        logger.debug(f"Registered operation {self.name}.{name}")

    def operation(self, name: str | None = None):
        """Decorator form of ``register``; defaults to the function name."""
        def decorator(func):
            self.register(name or func.__name__, func)
            return func
        return decorator

    def add_inspector(self, inspector: ParameterInspector) -> None:
        if not isinstance(inspector, ParameterInspector):
            raise ConfigurationError(
                f"{type(inspector).__name__} does not implement before_call/after_call"
            )
        self._inspectors.append(inspector)

    def invoke(self, operation_name: str, *inputs: Any) -> Any:
        """Run an operation through the inspector chain.

        Raises:
            OperationNotFoundError: If no operation has that name
            ValidationFaultError: If an inspector rejected the inputs; the
                operation body and every after_call hook are skipped
        """
        try:
            func = self._operations[operation_name]
        except KeyError:
            raise OperationNotFoundError(operation_name) from None

        logger.debug(f"Dispatching {self.name}.{operation_name} with {len(inputs)} input(s)")

        states = [inspector.before_call(operation_name, inputs) for inspector in self._inspectors]

        result = func(*inputs)

        for inspector, state in zip(reversed(self._inspectors), reversed(states)):
            inspector.after_call(operation_name, (), result, state)

        return result

    def dispatch(self, request: CallRequest) -> CallResponse:
        """Invoke an operation and turn validation faults into an error response."""
        try:
            result = self.invoke(request.operation, *request.inputs)
        except ValidationFaultError as e:
            logger.info(
                f"Rejected {self.name}.{request.operation}: "
                f"{len(e.fault.failures)} validation failure(s)"
            )
            return CallResponse(operation=request.operation, ok=False, fault=e.fault)

        return CallResponse(operation=request.operation, ok=True, result=result)


def enable_validation(host: ServiceHost, config: GuardConfig | None = None) -> ValidatingInterceptor:
    """Attach an interceptor built from configuration to every host operation."""
    interceptor = build_interceptor(config)
    host.add_inspector(interceptor)
    return interceptor

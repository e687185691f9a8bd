"""Core validation framework for paramguard.

Defines the failure value produced by validators, the pluggable validator base
class, the ordered validator set an interceptor runs, and the registry used to
resolve validators by name from configuration.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar, overload

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationFailure:
    """A single broken rule on one input object."""
    member: str = ""
    message: str = ""
    rule: str | None = None

    def __str__(self) -> str:
        if self.member:
            return f"{self.member}: {self.message}"
        return self.message

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "member": self.member,
            "message": self.message,
            "rule": self.rule
        }


class Validator(ABC):
    """Base class for validators."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Validator name for identification."""
        pass

    @abstractmethod
    def validate(self, target: Any) -> list[ValidationFailure]:
        """Inspect one input object.

        Args:
            target: Argument passed to the operation, possibly None

        Returns:
            Failures found, in a stable order. Empty when the target is valid.
        """
        pass


class ValidatorSet(Sequence[Validator]):
    """Ordered, non-empty, read-only collection of distinct validators."""

    def __init__(self, validators: Iterable[Validator] | None):
        if validators is None:
            raise ConfigurationError("validators must not be None")

        items = tuple(validators)
        if not items:
            raise ConfigurationError("At least one validator is required.")

        seen: set[int] = set()
        for validator in items:
            if not isinstance(validator, Validator):
                raise ConfigurationError(
                    f"Expected a Validator, got {type(validator).__name__}"
                )
            if id(validator) in seen:
                raise ConfigurationError(f"Duplicate validator: {validator.name}")
            seen.add(id(validator))

        self._validators = items

    @property
    def names(self) -> list[str]:
        return [validator.name for validator in self._validators]

    @overload
    def __getitem__(self, index: int) -> Validator: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Validator, ...]: ...

    def __getitem__(self, index):
        return self._validators[index]

    def __iter__(self) -> Iterator[Validator]:
        return iter(self._validators)

    def __len__(self) -> int:
        return len(self._validators)

    def __repr__(self) -> str:
        return f"ValidatorSet({self.names!r})"


V = TypeVar("V", bound=type[Validator])

_REGISTRY: dict[str, Callable[[], Validator]] = {}


def register_validator(name: str) -> Callable[[V], V]:
    """Class decorator registering a validator factory under ``name``."""
    def decorator(cls: V) -> V:
        if name in _REGISTRY:
            raise ConfigurationError(f"Validator already registered: {name}")
        _REGISTRY[name] = cls
        return cls
    return decorator


def create_validator(name: str) -> Validator:
    """Instantiate a registered validator by name."""
    try:
        factory = _REGISTRY[name]
    except KeyError:
        known = ", ".join(available_validators())
        raise ConfigurationError(f"Unknown validator '{name}'. Available: {known}") from None
    logger.debug(f"Creating validator: {name}")
    return factory()


def available_validators() -> list[str]:
    """Registered validator names, sorted."""
    return sorted(_REGISTRY)


def registered_validator_types() -> dict[str, Callable[[], Validator]]:
    """Registered factories keyed by name, for listing."""
    return dict(sorted(_REGISTRY.items()))

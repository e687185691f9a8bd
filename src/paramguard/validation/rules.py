"""Built-in validators.

Each validator inspects one call input and reports broken rules as
ValidationFailure values.
"""

import dataclasses
import logging
from collections.abc import Callable, Iterable
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, PydanticUserError, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .framework import ValidationFailure, Validator, register_validator

logger = logging.getLogger(__name__)

NULL_INPUT_MESSAGE = "Input is null."


@register_validator("null_check")
class NullCheckValidator(Validator):
    """Reject operation inputs that are None."""

    @property
    def name(self) -> str:
        return "null_check"

    def validate(self, target: Any) -> list[ValidationFailure]:
        if target is None:
            return [ValidationFailure("", NULL_INPUT_MESSAGE, self.name)]
        return []


@lru_cache(maxsize=256)
def _dataclass_adapter(cls: type) -> TypeAdapter | None:
    """Adapter for a dataclass type, or None when its fields carry no pydantic schema."""
    try:
        return TypeAdapter(cls)
    except PydanticUserError as e:
        logger.debug(f"No validation schema for {cls.__name__}: {e}")
        return None


def _raw_state(value: Any) -> Any:
    """Field values of models and dataclasses, nested ones included.

    Reads instance state directly so serializers, computed fields and
    exclusions play no part in re-validation.
    """
    if isinstance(value, BaseModel):
        state = {**value.__dict__, **(getattr(value, "__pydantic_extra__", None) or {})}
        return {key: _raw_state(item) for key, item in state.items()}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: _raw_state(getattr(value, f.name))
            for f in dataclasses.fields(value)
            if f.init and hasattr(value, f.name)
        }
    if type(value) is list:
        return [_raw_state(item) for item in value]
    if type(value) is tuple:
        return tuple(_raw_state(item) for item in value)
    if type(value) is dict:
        return {key: _raw_state(item) for key, item in value.items()}
    return value


@register_validator("annotations")
class AnnotationValidator(Validator):
    """Check the rules declared on a pydantic model or annotated dataclass.

    Models are re-validated from their field values, so instances created with
    ``model_construct`` or mutated after creation are checked as well. Other
    objects, and dataclasses whose fields pydantic cannot describe, carry no
    declared rules and always pass.
    """

    @property
    def name(self) -> str:
        return "annotations"

    def validate(self, target: Any) -> list[ValidationFailure]:
        if target is None:
            return []

        try:
            if isinstance(target, BaseModel):
                type(target).model_validate(_raw_state(target), by_name=True)
            elif dataclasses.is_dataclass(target) and not isinstance(target, type):
                adapter = _dataclass_adapter(type(target))
                if adapter is None:
                    return []
                adapter.validate_python(_raw_state(target), by_name=True)
            else:
                return []
        except PydanticValidationError as e:
            return [self._to_failure(error) for error in e.errors()]
        except PydanticUserError as e:
            logger.debug(f"No validation schema for {type(target).__name__}: {e}")
            return []

        return []

    @staticmethod
    def _to_failure(error: dict) -> ValidationFailure:
        member = ".".join(str(part) for part in error.get("loc", ()))
        return ValidationFailure(member, error["msg"], error["type"])


class RuleValidator(Validator):
    """Adapt a business-rule callable to the Validator interface.

    The rule receives the target and yields failures; plain strings are
    reported as object-level failures tagged with the validator name.
    """

    def __init__(
        self,
        name: str,
        rule: Callable[[Any], Iterable[ValidationFailure | str] | None],
        applies_to: type | tuple[type, ...] | None = None,
    ):
        self._name = name
        self.rule = rule
        self.applies_to = applies_to

    @property
    def name(self) -> str:
        return self._name

    def validate(self, target: Any) -> list[ValidationFailure]:
        if target is None:
            return []
        if self.applies_to is not None and not isinstance(target, self.applies_to):
            return []

        failures = []
        for item in self.rule(target) or ():
            if isinstance(item, ValidationFailure):
                failures.append(item)
            else:
                failures.append(ValidationFailure("", str(item), self.name))
        return failures

    def __repr__(self) -> str:
        return f"RuleValidator({self._name!r})"

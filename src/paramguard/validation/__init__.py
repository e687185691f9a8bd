"""Validation layer for paramguard.

Validators inspect individual call inputs; a ValidatorSet fixes the ordered
collection an interceptor runs for every call.
"""

from .framework import (
    ValidationFailure,
    Validator,
    ValidatorSet,
    available_validators,
    create_validator,
    register_validator,
)
from .rules import AnnotationValidator, NullCheckValidator, RuleValidator

__all__ = [
    "ValidationFailure",
    "Validator",
    "ValidatorSet",
    "available_validators",
    "create_validator",
    "register_validator",
    "AnnotationValidator",
    "NullCheckValidator",
    "RuleValidator"
]

"""paramguard - Input validation for service operation calls.

paramguard runs every argument of a service call through a fixed set of
validators before the operation executes and rejects the call with one
structured fault listing every failure.
"""

__version__ = "0.1.0"
__description__ = "Input validation interceptor for service operation calls"

from paramguard.config import GuardConfig, build_interceptor, load_config
from paramguard.errors import (
    ConfigurationError,
    OperationNotFoundError,
    ParamGuardError,
    ValidationFaultError,
)
from paramguard.host import ServiceHost, enable_validation
from paramguard.interceptor import PROCEED, Proceed, Reject, ValidatingInterceptor
from paramguard.messages import DefaultErrorMessageGenerator, ErrorMessageGenerator, ValidationFault
from paramguard.validation import ValidationFailure, Validator, ValidatorSet

__all__ = [
    "__version__",
    "__description__",
    "GuardConfig",
    "build_interceptor",
    "load_config",
    "ConfigurationError",
    "OperationNotFoundError",
    "ParamGuardError",
    "ValidationFaultError",
    "ServiceHost",
    "enable_validation",
    "PROCEED",
    "Proceed",
    "Reject",
    "ValidatingInterceptor",
    "DefaultErrorMessageGenerator",
    "ErrorMessageGenerator",
    "ValidationFault",
    "ValidationFailure",
    "Validator",
    "ValidatorSet",
]

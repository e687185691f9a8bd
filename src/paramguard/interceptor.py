"""Input-validating parameter inspector for service calls.

The interceptor sits in front of every operation: ``before_call`` runs each
input through each configured validator and aborts the call with a single
ValidationFaultError when anything fails. ``after_call`` exists to complete the
host's pre/post lifecycle and does nothing.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from paramguard.errors import ConfigurationError, ValidationFaultError
from paramguard.messages import ErrorMessageGenerator, ValidationFault
from paramguard.validation import ValidationFailure, Validator, ValidatorSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Proceed:
    """The call passed validation and may execute."""


@dataclass(frozen=True)
class Reject:
    """The call failed validation; ``fault`` is returned to the caller."""
    fault: ValidationFault


PROCEED = Proceed()

CallDecision = Proceed | Reject


class ValidatingInterceptor:
    """Validates operation inputs before the operation runs."""

    def __init__(
        self,
        validators: ValidatorSet | Iterable[Validator] | None,
        error_message_generator: ErrorMessageGenerator | None,
    ):
        if validators is None:
            raise ConfigurationError("validators must not be None")
        if not isinstance(validators, ValidatorSet):
            validators = ValidatorSet(validators)
        if error_message_generator is None:
            raise ConfigurationError("error_message_generator must not be None")

        self._validators = validators
        self._error_message_generator = error_message_generator

        logger.debug(f"Interceptor configured with validators: {', '.join(validators.names)}")

    @property
    def validators(self) -> ValidatorSet:
        return self._validators

    @property
    def error_message_generator(self) -> ErrorMessageGenerator:
        return self._error_message_generator

    def collect_failures(self, inputs: Iterable[Any]) -> list[ValidationFailure]:
        """Run every input through every validator.

        Failures are ordered by input position first, then by validator order.
        """
        failures: list[ValidationFailure] = []
        for target in inputs:
            for validator in self._validators:
                failures.extend(validator.validate(target))
        return failures

    def evaluate(self, operation_name: str, inputs: Sequence[Any] | None) -> CallDecision:
        """Decide whether a call may proceed without raising."""
        failures = self.collect_failures(inputs or ())
        if not failures:
            return PROCEED
        return Reject(self._error_message_generator.generate(operation_name, failures))

    def before_call(self, operation_name: str, inputs: Sequence[Any] | None) -> None:
        """Pre-call hook.

        Returns:
            None as the correlation state; nothing flows to ``after_call``.

        Raises:
            ValidationFaultError: If any input failed validation.
        """
        decision = self.evaluate(operation_name, inputs)
        if isinstance(decision, Reject):
            raise ValidationFaultError(decision.fault)
        return None

    def after_call(
        self,
        operation_name: str,
        outputs: Sequence[Any] | None,
        return_value: Any,
        correlation_state: Any,
    ) -> None:
        """Post-call hook. Responses are not validated."""

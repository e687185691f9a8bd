"""Shared fixtures for paramguard tests."""

from typing import Any

import pytest

from paramguard.messages import DefaultErrorMessageGenerator
from paramguard.validation import ValidationFailure, Validator


class StubValidator(Validator):
    """Validator returning canned failures keyed by target identity."""

    def __init__(self, name: str, results: dict[int, list[ValidationFailure]] | None = None):
        self._name = name
        self.results = results or {}
        self.calls: list[Any] = []

    @property
    def name(self) -> str:
        return self._name

    def validate(self, target: Any) -> list[ValidationFailure]:
        self.calls.append(target)
        return list(self.results.get(id(target), []))


@pytest.fixture
def generator():
    return DefaultErrorMessageGenerator()


@pytest.fixture
def stub_factory():
    """Create stub validators."""
    return StubValidator

"""Validation and computation domain exceptions."""

from typing import List

from .base import DomainException


class GenerationRefusedException(DomainException):
    """
    Raised when a generation request fails its business-rule preconditions.

    Carries every failed rule so the caller can show them all at once.
    """

    def __init__(self, errors: List[str]):
        super().__init__(
            message="; ".join(errors),
            code="GENERATION_REFUSED",
        )
        self.errors = list(errors)


class InvalidArgumentException(DomainException):
    """Raised when a computation receives arguments no caller should send."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_ARGUMENT",
        )

"""Unified exception hierarchy for pysaga.

All library exceptions inherit from PySagaException, enabling unified
error handling across modules.

Categories:
- BusinessException: Definition rule violations
- ValidationException: Structural validation failures of a saga declaration
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class PySagaException(Exception):
    """Base exception for all pysaga errors.

    Carries an optional error code and context dict for structured error data.
    Catch PySagaException to handle all library errors, or catch specific
    subclasses for targeted handling.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "DUPLICATE_ID").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Business Exceptions
# =============================================================================


class BusinessException(PySagaException):
    """Definition rule violations."""


class ValidationException(BusinessException):
    """Input or structural validation failures."""

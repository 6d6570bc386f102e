# =============================================================================
# SIMDCHECK -- CROSS-BACKEND VECTOR VERIFICATION
# File:   simdcheck/verification/exceptions.py
# =============================================================================
#
# SCOPE
# -----
# Exception hierarchy for the recorded-results layer.
# All exceptions are pure value objects: no side effects, no I/O.
#
# EXCEPTION HIERARCHY
# -------------------
#   ResultsError(Exception)                    -- base; never raised directly
#     ResultsValidationError(ResultsError)     -- producer contract violation
#     ResultsComparisonError(ResultsError)     -- misuse of ULP primitives
#
# Value mismatches between two stores are NOT exceptions. They are reported
# through TestReporter and tallied.
#
# MESSAGE CONTRACT
# ----------------
# Every message is deterministic, ASCII-safe and names the offending field
# and value.
# =============================================================================

from __future__ import annotations

from typing import Any


class ResultsError(Exception):
    """
    Base class for all recorded-results exceptions.

    Attributes:
        field_name:  Name of the offending argument or attribute, or empty
                     string if not applicable.
        value:       The offending value, or None.
        message:     Human-readable description. Always non-empty.
    """

    def __init__(
        self,
        message:    str,
        field_name: str = "",
        value:      Any = None,
    ) -> None:
        if not isinstance(message, str) or not message:
            raise ValueError(
                "ResultsError: message must be a non-empty string"
            )
        if not isinstance(field_name, str):
            raise ValueError(
                "ResultsError: field_name must be a string"
            )
        super().__init__(message)
        self.field_name: str = field_name
        self.value:      Any = value
        self.message:    str = message

    def __repr__(self) -> str:
        return (
            self.__class__.__name__
            + "(field_name=" + repr(self.field_name)
            + ", value=" + repr(self.value)
            + ", message=" + repr(self.message)
            + ")"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResultsError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.field_name == other.field_name
            and self.value == other.value
            and self.message == other.message
        )

    __hash__ = Exception.__hash__


class ResultsValidationError(ResultsError):
    """
    Raised when a producer passes an argument that violates the recording
    contract (negative length, wrong buffer size, second fill of an entry).

    Message format:
        "<field_name>: value <value!r> violates constraint: <constraint>"
    """

    def __init__(
        self,
        field_name: str,
        value:      Any,
        constraint: str,
    ) -> None:
        if not isinstance(field_name, str) or not field_name:
            raise ValueError(
                "ResultsValidationError: field_name must be a non-empty string"
            )
        if not isinstance(constraint, str) or not constraint:
            raise ValueError(
                "ResultsValidationError: constraint must be a non-empty string"
            )
        message = (
            field_name
            + ": value "
            + repr(value)
            + " violates constraint: "
            + constraint
        )
        super().__init__(message=message, field_name=field_name, value=value)
        self.constraint: str = constraint


class ResultsComparisonError(ResultsError):
    """
    Raised when the ULP primitives are called outside their domain:
    a non-floating kind, or buffers whose sizes do not match.
    """

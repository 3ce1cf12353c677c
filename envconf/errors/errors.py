"""
Exceptions raised while populating a record from the environment.

Exception hierarchy:
- EnvConfError (base)
  - InvalidValueError: bad target, malformed literal or mapping pair, bad options
  - UnsupportedTypeError: field type outside the handled set
  - UnexportedFieldError: field carries a default but cannot be set
"""

from __future__ import annotations

from typing import Any, Optional


class EnvConfError(Exception):
    """Base exception for all envconf errors."""

    def __init__(
        self,
        message: str,
        *,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.component = component
        self.details = details or {}
        super().__init__(message)

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else ""

    def __str__(self) -> str:
        parts = [self.message]
        if self.component:
            parts.append(f"[component={self.component}]")
        if self.details:
            parts.append(f"[details={self.details}]")
        return " ".join(parts)


class InvalidValueError(EnvConfError, ValueError):
    """Raised when a raw string cannot be parsed or the target is not a record."""

    def __init__(
        self,
        message: str,
        *,
        value: Optional[str] = None,
        expected_type: Optional[str] = None,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.value = value
        self.expected_type = expected_type
        details = details or {}
        if expected_type:
            details["expected_type"] = expected_type
        # Keep raw values out of details
        super().__init__(message, component=component, details=details)


class UnsupportedTypeError(EnvConfError, TypeError):
    """Raised when a field's type is not one envconf knows how to convert."""

    def __init__(
        self,
        message: str = "unsupported type",
        *,
        type_name: Optional[str] = None,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.type_name = type_name
        details = details or {}
        if type_name:
            details["type"] = type_name
        super().__init__(message, component=component, details=details)


class UnexportedFieldError(EnvConfError, AttributeError):
    """Raised when a field with a default cannot be assigned (private or frozen)."""

    def __init__(
        self,
        message: str = "unexported field",
        *,
        field: Optional[str] = None,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.field = field
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, component=component, details=details)

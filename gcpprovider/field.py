"""Field paths and structured validation errors."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from typing import Any, Iterable, NamedTuple

FIELD_IMMUTABLE_MESSAGE = "field is immutable"


class ErrorType(enum.Enum):
    """The kind of a validation error."""

    NOT_FOUND = "FieldValueNotFound"
    REQUIRED = "FieldValueRequired"
    DUPLICATE = "FieldValueDuplicate"
    INVALID = "FieldValueInvalid"
    NOT_SUPPORTED = "FieldValueNotSupported"
    FORBIDDEN = "FieldValueForbidden"
    TOO_LONG = "FieldValueTooLong"
    TOO_MANY = "FieldValueTooMany"
    INTERNAL = "InternalError"

    @property
    def description(self) -> str:
        """Human readable name of the error type."""
        return _DESCRIPTIONS[self]

    def __str__(self) -> str:
        return self.description


_DESCRIPTIONS = {
    ErrorType.NOT_FOUND: "Not found",
    ErrorType.REQUIRED: "Required value",
    ErrorType.DUPLICATE: "Duplicate value",
    ErrorType.INVALID: "Invalid value",
    ErrorType.NOT_SUPPORTED: "Unsupported value",
    ErrorType.FORBIDDEN: "Forbidden",
    ErrorType.TOO_LONG: "Too long",
    ErrorType.TOO_MANY: "Too many",
    ErrorType.INTERNAL: "Internal error",
}

# Error types whose message does not include the offending value.
_VALUELESS = {ErrorType.REQUIRED, ErrorType.FORBIDDEN, ErrorType.TOO_LONG, ErrorType.INTERNAL}


class _Element(NamedTuple):
    name: str
    index: str


class Path:
    """An immutable path to a field, such as ``spec.workers[0].zones``.

    ``Path()`` with no names is the empty path; it prints as ``<nil>`` and its
    children start a fresh path.
    """

    __slots__ = ("_elements",)

    def __init__(self, *names: str) -> None:
        self._elements: tuple[_Element, ...] = tuple(_Element(name, "") for name in names)

    @classmethod
    def _with(cls, elements: tuple[_Element, ...]) -> Path:
        path = cls.__new__(cls)
        path._elements = elements
        return path

    def child(self, name: str, *args: str) -> Path:
        """Return a new path with one or more named children appended."""
        added = tuple(_Element(n, "") for n in (name, *args))
        return Path._with(self._elements + added)

    def index(self, index: int) -> Path:
        """Return a new path with a list index appended."""
        return Path._with(self._elements + (_Element("", str(index)),))

    def __str__(self) -> str:
        if not self._elements:
            return "<nil>"
        parts: list[str] = []
        for position, element in enumerate(self._elements):
            if element.name:
                if position:
                    parts.append(".")
                parts.append(element.name)
            else:
                parts.append(f"[{element.index}]")
        return "".join(parts)

    def __repr__(self) -> str:
        return f"Path({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._elements == other._elements

    def __hash__(self) -> int:
        return hash(self._elements)


def _field_name(path: Path | None) -> str:
    return "<nil>" if path is None else str(path)


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _format_value(value: Any) -> str:
    if isinstance(value, enum.Enum):
        value = value.value
    if value is None:
        return _quote("null")
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return _quote(value)
    return repr(value)


@dataclass(frozen=True)
class FieldError:
    """A single validation error attached to a field path."""

    type: ErrorType
    field: str
    bad_value: Any = None
    detail: str = ""

    def error_body(self) -> str:
        """Return the message without the field path."""
        if self.type in _VALUELESS:
            body = str(self.type)
        else:
            body = f"{self.type}: {_format_value(self.bad_value)}"
        if self.detail:
            body += f": {self.detail}"
        return body

    def __str__(self) -> str:
        return f"{self.field}: {self.error_body()}"


def required(path: Path | None, detail: str) -> FieldError:
    """A required value is missing."""
    return FieldError(ErrorType.REQUIRED, _field_name(path), "", detail)


def invalid(path: Path | None, value: Any, detail: str) -> FieldError:
    """A value is present but not acceptable."""
    return FieldError(ErrorType.INVALID, _field_name(path), value, detail)


def not_supported(path: Path | None, value: Any, valid_values: Iterable[str]) -> FieldError:
    """A value is not one of the supported values."""
    quoted = [_quote(v) for v in valid_values]
    detail = "supported values: " + ", ".join(quoted) if quoted else ""
    return FieldError(ErrorType.NOT_SUPPORTED, _field_name(path), value, detail)


def forbidden(path: Path | None, detail: str) -> FieldError:
    """A field may not be set or used this way."""
    return FieldError(ErrorType.FORBIDDEN, _field_name(path), "", detail)


def duplicate(path: Path | None, value: Any) -> FieldError:
    """A value occurs more than once where it must be unique."""
    return FieldError(ErrorType.DUPLICATE, _field_name(path), value, "")


def internal_error(path: Path | None, error: BaseException | str) -> FieldError:
    """Validation could not be carried out."""
    return FieldError(ErrorType.INTERNAL, _field_name(path), None, str(error))


def validate_immutable_field(new_value: Any, old_value: Any, path: Path | None) -> list[FieldError]:
    """Return an error if a field that may not change has changed."""
    if new_value == old_value:
        return []
    return [invalid(path, new_value, FIELD_IMMUTABLE_MESSAGE)]
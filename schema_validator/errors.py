"""
Error and result types for schema_validator.

Two families live here:

- Structural errors (``SchemaValidatorError`` subclasses) raised when a
  schema is wired incorrectly or the data cannot be traversed. They abort.
- Validation failures (``ValidationError`` records) collected into a
  ``ValidationResult``. They are expected and never raised one by one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping


class SchemaValidatorError(Exception):
    """Base class for every structural error raised by this package."""


class SchemaError(SchemaValidatorError, ValueError):
    """Schema construction failed (unknown rule, bad params, kind mismatch)."""


class AccessorError(SchemaValidatorError, LookupError):
    """Data could not be traversed the way the schema or a rule asked."""


class UnknownFieldError(AccessorError, KeyError):
    def __init__(self, name: str, owner: str = "object"):
        super().__init__(name)
        self.name = name
        self.owner = owner

    def __str__(self) -> str:
        return f"Field '{self.name}' not found on {self.owner}"


class IndexOutOfRangeError(AccessorError, IndexError):
    def __init__(self, index: int, length: int):
        super().__init__(index)
        self.index = index
        self.length = length

    def __str__(self) -> str:
        return f"Index {self.index} out of range for length {self.length}"


class InvalidPathError(AccessorError):
    """Malformed path syntax or an index token that is not ``[N]``."""


class NoParentError(AccessorError):
    """A cross-field lookup was attempted from the root context."""


class MaxDepthExceededError(SchemaValidatorError, RecursionError):
    def __init__(self, path: str, max_depth: int):
        super().__init__(path, max_depth)
        self.path = path
        self.max_depth = max_depth

    def __str__(self) -> str:
        return f"Maximum validation depth {self.max_depth} exceeded at '{self.path}'"


class CoercionError(SchemaValidatorError, ValueError):
    """A Value could not be converted to the requested type."""


@dataclass(frozen=True, slots=True)
class ValidationError:
    """
    A single validation failure.

    Attributes:
        path: Rendered path of the failing node, e.g. ``"items[0].name"``
        code: Rule name that failed, e.g. ``"required"`` or ``"eqfield"``
        params: Positional parameters the rule was bound with
        details: Named values supplied by the rule, e.g. ``{"min": 1, "actual": 0}``
        message: Optional free-form explanation
    """

    path: str
    code: str
    params: tuple[Any, ...] = ()
    details: Mapping[str, Any] = field(default_factory=dict)
    message: str | None = None
    cause: BaseException | None = field(default=None, compare=False, repr=False)

    def __str__(self) -> str:
        label = self.path or "<root>"
        text = f"{label}: {self.code}"
        if self.params:
            text += f" {list(self.params)}"
        if self.message:
            text += f" ({self.message})"
        return text


class ValidationResult:
    """Collected outcome of one validation pass."""

    def __init__(self, errors: list[ValidationError] | None = None):
        self._errors: list[ValidationError] = list(errors or [])

    def errors(self) -> list[ValidationError]:
        return list(self._errors)

    def is_valid(self) -> bool:
        return not self._errors

    def first_error(self) -> ValidationError | None:
        return self._errors[0] if self._errors else None

    def has_field_error(self, path: str) -> bool:
        return any(err.path == path for err in self._errors)

    def errors_by_field(self) -> dict[str, list[ValidationError]]:
        """Group errors by path, for form-style rendering."""
        grouped: dict[str, list[ValidationError]] = {}
        for err in self._errors:
            grouped.setdefault(err.path, []).append(err)
        return grouped

    def raise_if_errors(self) -> None:
        """Raise ``ValidationErrors`` if this result holds any failure."""
        if self._errors:
            raise ValidationErrors(self)

    def __iter__(self) -> Iterator[ValidationError]:
        return iter(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __repr__(self) -> str:
        return f"ValidationResult(errors={self._errors!r})"

    def __str__(self) -> str:
        return "\n".join(str(err) for err in self._errors)


class ValidationErrors(SchemaValidatorError):
    """Exception form of a failed ``ValidationResult``."""

    def __init__(self, result: ValidationResult):
        super().__init__(str(result))
        self.result = result

    def errors(self) -> list[ValidationError]:
        return self.result.errors()

    def has_field_error(self, path: str) -> bool:
        return self.result.has_field_error(path)

    def errors_by_field(self) -> dict[str, list[ValidationError]]:
        return self.result.errors_by_field()

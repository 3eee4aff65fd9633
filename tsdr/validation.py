# =============================================================================
# tsdr/validation.py  -  Declarative argument schemas for the five tools
# =============================================================================
#
# Each tool declares its arguments as a tuple of FieldSpec.  Before anything
# touches the network, the dispatcher runs validate_arguments() and gets a
# ValidationResult back.  The validator itself never raises.
#
# ONLY LENGTH IS CHECKED:
#   Serial numbers must be exactly 8 characters and registration numbers 7
#   or 8.  A non-numeric string of the right length passes and is forwarded
#   to TSDR as-is; TSDR answers with its own error for those.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional

from tsdr.models import ResponseFormat


@dataclass(frozen=True)
class FieldSpec:
    name: str
    description: str = ""
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    choices: tuple[str, ...] = ()
    default: Optional[str] = None

    @property
    def required(self) -> bool:
        return self.default is None

    def check(self, value: Any) -> Optional[str]:
        """Return an error message for `value`, or None when it is valid."""
        if not isinstance(value, str):
            return f"{self.name} must be a string"

        length = len(value)
        if self.min_length is not None and self.min_length == self.max_length:
            if length != self.min_length:
                return f"{self.name} must be exactly {self.min_length} characters"
        else:
            if self.min_length is not None and length < self.min_length:
                return f"{self.name} must be between {self.min_length} and {self.max_length} characters"
            if self.max_length is not None and length > self.max_length:
                return f"{self.name} must be between {self.min_length} and {self.max_length} characters"

        if self.choices and value not in self.choices:
            return f"{self.name} must be one of: {', '.join(self.choices)}"
        return None


@dataclass
class ValidationResult:
    values: dict[str, str] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_arguments(schema: tuple[FieldSpec, ...], arguments: Optional[dict]) -> ValidationResult:
    """Check `arguments` against `schema`; apply defaults for absent fields.

    Unknown argument names are ignored.  `None` counts as absent.
    """
    arguments = arguments or {}
    result = ValidationResult()

    for spec in schema:
        value = arguments.get(spec.name)
        if value is None:
            if spec.required:
                result.errors.append(f"{spec.name} is required")
                continue
            value = spec.default

        error = spec.check(value)
        if error:
            result.errors.append(error)
        else:
            result.values[spec.name] = value

    return result


# -----------------------------------------------------------------------------
# Field declarations shared by the tools
# -----------------------------------------------------------------------------
SERIAL_NUMBER = FieldSpec(
    name="serialNumber",
    description="8-digit trademark serial number",
    min_length=8,
    max_length=8,
)

REGISTRATION_NUMBER = FieldSpec(
    name="registrationNumber",
    description="7-8 digit trademark registration number",
    min_length=7,
    max_length=8,
)

FORMAT = FieldSpec(
    name="format",
    description="Response format",
    choices=tuple(f.value for f in ResponseFormat),
    default=ResponseFormat.JSON.value,
)

SERIAL_SEARCH_SCHEMA = (SERIAL_NUMBER, FORMAT)
REGISTRATION_SEARCH_SCHEMA = (REGISTRATION_NUMBER, FORMAT)
SERIAL_ONLY_SCHEMA = (SERIAL_NUMBER,)

"""Semantic field types — validation, UI hints, defaults.

Six closed variants: string, text, boolean, date, number, select. Each is
a frozen dataclass holding only its configuration plus four pure methods:

- ``validate(value)``: ``None`` when valid, else a :class:`FieldViolation`.
- ``ui_hints()``: rendering metadata for form frontends.
- ``validation_hints()``: the rules a frontend should enforce.
- ``default_value()``: the typed value a fresh field starts with.

Violations are returned as values, never raised.
"""

from __future__ import annotations

import math
import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DATE_FORMAT = "%Y-%m-%dT%H:%M"
DATE_PLACEHOLDER = "YYYY-MM-DDTHH:MM"
DEFAULT_TEXT_ROWS = 3

_DATE_SHAPE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}")
_INTEGER = re.compile(r"[+-]?[0-9]+")


class FieldKind(StrEnum):
    """Semantic kind of an editable field."""

    STRING = "string"
    TEXT = "text"
    BOOLEAN = "boolean"
    DATE = "date"
    NUMBER = "number"
    SELECT = "select"


class ViolationKind(StrEnum):
    """Which validation rule a value broke."""

    WRONG_TYPE = "wrong_type"
    REQUIRED = "required"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    PATTERN_MISMATCH = "pattern_mismatch"
    INVALID_DATE = "invalid_date"
    NOT_A_NUMBER = "not_a_number"
    TOO_SMALL = "too_small"
    TOO_LARGE = "too_large"
    INVALID_OPTION = "invalid_option"


@dataclass(frozen=True)
class FieldViolation:
    """A single broken validation rule."""

    kind: ViolationKind
    message: str


_HINT_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class SelectOption(BaseModel):
    """One choice of a select field."""

    model_config = _HINT_CONFIG

    label: str
    value: Any


class UIHints(BaseModel):
    """Rendering guidance for form frontends."""

    model_config = _HINT_CONFIG

    input_type: str
    placeholder: str = ""
    help_text: str = ""
    rows: int | None = None
    char_limit: int | None = None
    multiline: bool = False
    options: tuple[SelectOption, ...] | None = None


class ValidationHints(BaseModel):
    """Validation rules a frontend should mirror."""

    model_config = _HINT_CONFIG

    required: bool = False
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    pattern_desc: str | None = None
    min: int | None = None
    max: int | None = None


def _check_text(
    value: Any,
    *,
    required: bool,
    min_length: int | None,
    max_length: int | None,
) -> FieldViolation | None:
    """Checks shared by single- and multi-line text fields."""
    if not isinstance(value, str):
        return FieldViolation(ViolationKind.WRONG_TYPE, "value must be a string")
    if required and not value.strip():
        return FieldViolation(ViolationKind.REQUIRED, "field is required")
    if min_length and len(value) < min_length:
        return FieldViolation(ViolationKind.TOO_SHORT, "value is too short")
    if max_length and len(value) > max_length:
        return FieldViolation(ViolationKind.TOO_LONG, "value is too long")
    return None


@dataclass(frozen=True)
class StringField:
    """Single-line text input."""

    kind: ClassVar[FieldKind] = FieldKind.STRING

    required: bool = False
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    pattern_desc: str = ""
    placeholder: str = ""
    help_text: str = ""

    def validate(self, value: Any) -> FieldViolation | None:
        violation = _check_text(
            value,
            required=self.required,
            min_length=self.min_length,
            max_length=self.max_length,
        )
        if violation is not None:
            return violation
        if self.pattern is not None and re.search(self.pattern, value) is None:
            return FieldViolation(
                ViolationKind.PATTERN_MISMATCH,
                "value does not match required pattern",
            )
        return None

    def ui_hints(self) -> UIHints:
        return UIHints(
            input_type="text",
            placeholder=self.placeholder,
            help_text=self.help_text,
            char_limit=self.max_length,
        )

    def validation_hints(self) -> ValidationHints:
        return ValidationHints(
            required=self.required,
            min_length=self.min_length,
            max_length=self.max_length,
            pattern=self.pattern,
            pattern_desc=(self.pattern_desc or None) if self.pattern else None,
        )

    def default_value(self) -> str:
        return ""


@dataclass(frozen=True)
class TextField:
    """Multi-line text area."""

    kind: ClassVar[FieldKind] = FieldKind.TEXT

    required: bool = False
    min_length: int | None = None
    max_length: int | None = None
    rows: int = DEFAULT_TEXT_ROWS
    placeholder: str = ""
    help_text: str = ""

    def validate(self, value: Any) -> FieldViolation | None:
        return _check_text(
            value,
            required=self.required,
            min_length=self.min_length,
            max_length=self.max_length,
        )

    def ui_hints(self) -> UIHints:
        return UIHints(
            input_type="textarea",
            placeholder=self.placeholder,
            help_text=self.help_text,
            rows=self.rows or DEFAULT_TEXT_ROWS,
            char_limit=self.max_length,
            multiline=True,
        )

    def validation_hints(self) -> ValidationHints:
        return ValidationHints(
            required=self.required,
            min_length=self.min_length,
            max_length=self.max_length,
        )

    def default_value(self) -> str:
        return ""


@dataclass(frozen=True)
class BooleanField:
    """Checkbox. A required boolean must be confirmed (``True``)."""

    kind: ClassVar[FieldKind] = FieldKind.BOOLEAN

    required: bool = False
    help_text: str = ""

    def validate(self, value: Any) -> FieldViolation | None:
        if not isinstance(value, bool):
            return FieldViolation(ViolationKind.WRONG_TYPE, "value must be a boolean")
        if self.required and not value:
            return FieldViolation(ViolationKind.REQUIRED, "field must be confirmed")
        return None

    def ui_hints(self) -> UIHints:
        return UIHints(input_type="checkbox", help_text=self.help_text)

    def validation_hints(self) -> ValidationHints:
        return ValidationHints(required=self.required)

    def default_value(self) -> bool:
        return False


@dataclass(frozen=True)
class DateField:
    """Date-time input in ``YYYY-MM-DDTHH:MM`` form."""

    kind: ClassVar[FieldKind] = FieldKind.DATE

    required: bool = False
    placeholder: str = ""
    help_text: str = ""

    def validate(self, value: Any) -> FieldViolation | None:
        if not isinstance(value, str):
            return FieldViolation(ViolationKind.WRONG_TYPE, "value must be a string")
        if self.required and not value.strip():
            return FieldViolation(ViolationKind.REQUIRED, "field is required")
        if value and not _parses_as_date(value):
            return FieldViolation(ViolationKind.INVALID_DATE, "invalid date format")
        return None

    def ui_hints(self) -> UIHints:
        return UIHints(
            input_type="datetime",
            placeholder=self.placeholder or DATE_PLACEHOLDER,
            help_text=self.help_text,
        )

    def validation_hints(self) -> ValidationHints:
        return ValidationHints(required=self.required)

    def default_value(self) -> str:
        return ""


def _parses_as_date(value: str) -> bool:
    if _DATE_SHAPE.fullmatch(value) is None:
        return False
    try:
        datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        return False
    return True


@dataclass(frozen=True)
class NumberField:
    """Integer input; accepts numbers or integer strings."""

    kind: ClassVar[FieldKind] = FieldKind.NUMBER

    required: bool = False
    min: int | None = None
    max: int | None = None
    placeholder: str = ""
    help_text: str = ""

    def validate(self, value: Any) -> FieldViolation | None:
        if isinstance(value, str):
            if self.required and not value.strip():
                return FieldViolation(ViolationKind.REQUIRED, "field is required")
            if value == "":
                return None
            if _INTEGER.fullmatch(value) is None:
                return FieldViolation(ViolationKind.NOT_A_NUMBER, "value must be a number")
            number = int(value)
        elif isinstance(value, bool) or not isinstance(value, (int, float)):
            return FieldViolation(ViolationKind.WRONG_TYPE, "value must be a number")
        elif isinstance(value, float) and not math.isfinite(value):
            return FieldViolation(ViolationKind.NOT_A_NUMBER, "value must be a number")
        else:
            number = int(value)

        if self.min is not None and number < self.min:
            return FieldViolation(ViolationKind.TOO_SMALL, "value is too small")
        if self.max is not None and number > self.max:
            return FieldViolation(ViolationKind.TOO_LARGE, "value is too large")
        return None

    def ui_hints(self) -> UIHints:
        return UIHints(
            input_type="number",
            placeholder=self.placeholder,
            help_text=self.help_text,
        )

    def validation_hints(self) -> ValidationHints:
        return ValidationHints(required=self.required, min=self.min, max=self.max)

    def default_value(self) -> int:
        return self.min if self.min is not None else 0


@dataclass(frozen=True)
class SelectField:
    """Dropdown restricted to a finite option set."""

    kind: ClassVar[FieldKind] = FieldKind.SELECT

    options: tuple[SelectOption, ...] = ()
    required: bool = False
    placeholder: str = ""
    help_text: str = ""

    @classmethod
    def from_values(cls, values: Sequence[Any], *, required: bool = False) -> SelectField:
        """Build a select whose labels are the option values themselves."""
        options = tuple(SelectOption(label=str(v), value=v) for v in values)
        return cls(options=options, required=required)

    def validate(self, value: Any) -> FieldViolation | None:
        if value is None:
            if self.required:
                return FieldViolation(ViolationKind.REQUIRED, "field is required")
            return None
        # Type must match too: True is not the option 1.
        for option in self.options:
            if type(option.value) is type(value) and option.value == value:
                return None
        return FieldViolation(ViolationKind.INVALID_OPTION, "invalid option selected")

    def ui_hints(self) -> UIHints:
        return UIHints(
            input_type="select",
            placeholder=self.placeholder,
            help_text=self.help_text,
            options=self.options,
        )

    def validation_hints(self) -> ValidationHints:
        return ValidationHints(required=self.required)

    def default_value(self) -> Any:
        return self.options[0].value if self.options else None


FieldType = StringField | TextField | BooleanField | DateField | NumberField | SelectField


def field_type_for(
    kind: FieldKind | str,
    *,
    required: bool = False,
    options: Sequence[Any] = (),
) -> FieldType:
    """Instantiate the field type for *kind*.

    Raises:
        ValueError: *kind* is not one of the six field kinds.
    """
    kind = FieldKind(kind)
    if kind is FieldKind.SELECT:
        return SelectField.from_values(options, required=required)
    return _SIMPLE_FIELD_TYPES[kind](required=required)


_SIMPLE_FIELD_TYPES: dict[FieldKind, type[FieldType]] = {
    FieldKind.STRING: StringField,
    FieldKind.TEXT: TextField,
    FieldKind.BOOLEAN: BooleanField,
    FieldKind.DATE: DateField,
    FieldKind.NUMBER: NumberField,
}

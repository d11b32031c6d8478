"""Dataclass validation mixin for basic input checks on records."""

from __future__ import annotations

import types
from abc import ABC
from collections.abc import Mapping, Sequence
from dataclasses import fields, is_dataclass
from typing import Any, Literal, Union, get_args, get_origin, get_type_hints


class ValidationError(ValueError):
    """Raised when dataclass field validation fails."""


class ValidatedModel(ABC):
    """Base class for dataclasses that need runtime input validation.

    Usage:
    - Inherit this class and decorate the child record with `@dataclass`.
    - Mark string fields that must not be blank with `metadata={"non_empty": True}`.
    - Optionally override `model_validate()` for record-level checks.
    """

    def __post_init__(self) -> None:
        if not is_dataclass(self):
            raise TypeError("ValidatedModel must be used with @dataclass records.")
        self._validate_fields()
        self.model_validate()

    def model_validate(self) -> None:
        """Hook for record-level custom validation after field checks."""

    def _validate_fields(self) -> None:
        hints = get_type_hints(type(self))
        for field in fields(self):
            name = field.name
            value = getattr(self, name)
            _validate_type(name, value, hints.get(name, Any))
            _validate_constraints(name, value, dict(field.metadata))


def _validate_type(name: str, value: Any, annotation: Any) -> None:
    if annotation is Any:
        return
    origin = get_origin(annotation)
    args = get_args(annotation)

    if origin is Literal:
        if value not in args:
            raise ValidationError(f"Field '{name}' must be one of {tuple(args)!r}.")
        return

    if origin in (Union, types.UnionType):
        for option in args:
            try:
                _validate_type(name, value, option)
                return
            except ValidationError:
                continue
        raise ValidationError(
            f"Field '{name}' expects {_annotation_name(annotation)}, got {type(value).__name__}."
        )

    if origin in (list, tuple, Sequence):
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
            raise ValidationError(f"Field '{name}' must be a sequence.")
        if origin is list and not isinstance(value, list):
            raise ValidationError(f"Field '{name}' must be a list.")
        if origin is tuple and not isinstance(value, tuple):
            raise ValidationError(f"Field '{name}' must be a tuple.")
        if not args:
            return
        item_type = args[0]
        for index, item in enumerate(value):
            _validate_type(f"{name}[{index}]", item, item_type)
        return

    if origin in (dict, Mapping):
        if not isinstance(value, Mapping):
            raise ValidationError(f"Field '{name}' must be a mapping.")
        return

    if isinstance(annotation, type):
        if annotation is type(None):
            if value is None:
                return
            raise ValidationError(
                f"Field '{name}' expects None, got {type(value).__name__}."
            )
        if value is None:
            raise ValidationError(
                f"Field '{name}' cannot be None (expected {annotation.__name__})."
            )
        if annotation is float and isinstance(value, bool):
            raise ValidationError(f"Field '{name}' expects float, got bool.")
        if annotation is float and isinstance(value, int):
            return
        if not isinstance(value, annotation):
            raise ValidationError(
                f"Field '{name}' expects {annotation.__name__}, got {type(value).__name__}."
            )


def _validate_constraints(name: str, value: Any, metadata: dict[str, Any]) -> None:
    if value is None:
        return

    if metadata.get("non_empty") and isinstance(value, str) and not value.strip():
        raise ValidationError(f"Field '{name}' must be non-empty.")


def _annotation_name(annotation: Any) -> str:
    origin = get_origin(annotation)
    if origin is None:
        if isinstance(annotation, type):
            return annotation.__name__
        return str(annotation)
    args = ", ".join(_annotation_name(arg) for arg in get_args(annotation))
    return f"{getattr(origin, '__name__', str(origin))}[{args}]"

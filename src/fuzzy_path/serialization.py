"""pydantic integration for FuzzyPath.

A ``FuzzyPath`` field is written as its normalized text. Incoming text always
goes through normalization again, so stored or external data is never trusted
to be normalized already. Non-text input fails with pydantic's own
``ValidationError``.
"""

from functools import lru_cache
from typing import Any, Type

from pydantic import TypeAdapter
from pydantic_core import core_schema

from .fuzzy_path import FuzzyPath


def _serialize(value: FuzzyPath) -> str:
    return value.as_str()


def fuzzy_path_core_schema(cls: Type[FuzzyPath]) -> core_schema.CoreSchema:
    """Build the pydantic core schema for ``cls``.

    Python mode accepts an existing instance or a ``str``; JSON mode accepts a
    JSON string. Both serialize to the normalized text.
    """
    from_text = core_schema.no_info_after_validator_function(
        cls,
        core_schema.str_schema(strict=True),
    )
    return core_schema.json_or_python_schema(
        json_schema=from_text,
        python_schema=core_schema.union_schema([
            core_schema.is_instance_schema(cls),
            from_text,
        ]),
        serialization=core_schema.plain_serializer_function_ser_schema(
            _serialize,
            return_schema=core_schema.str_schema(),
        ),
    )


@lru_cache(maxsize=1)
def _adapter() -> TypeAdapter:
    return TypeAdapter(FuzzyPath)


def dump_fuzzy_path(value: FuzzyPath) -> str:
    """Serialize to the plain text field value."""
    return _adapter().dump_python(value)


def load_fuzzy_path(value: Any) -> FuzzyPath:
    """Validate a python value (normally ``str``) into a ``FuzzyPath``.

    Raises:
        pydantic.ValidationError: If ``value`` is not text
    """
    return _adapter().validate_python(value)


def load_fuzzy_path_json(data: str | bytes) -> FuzzyPath:
    """Validate a JSON document holding a single string.

    Raises:
        pydantic.ValidationError: If the document is not a JSON string
    """
    return _adapter().validate_json(data)

"""
Small pure helpers shared by payload shaping and response parsing
"""  # noqa: D200, D212, D415

from collections.abc import Iterable, Mapping, Sequence
import json
import re
from typing import Any

DEFAULT_COUNTRY_CODE = "233"
_NON_DIGITS = re.compile(r"\D")
_PHONE_PATTERN = re.compile(r"^\d{10,15}$")


def to_array[T](value: T | Sequence[T]) -> list[T]:
    """Wrap a single value in a list; lists and tuples are copied as lists"""  # noqa: D415
    if isinstance(value, list | tuple):
        return list(value)
    return [value]  # type: ignore[list-item]


def compact(mapping: Mapping[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None"""  # noqa: D415
    return {key: value for key, value in mapping.items() if value is not None}


def safe_json_parse(text: str | bytes | None, fallback: Any) -> Any:
    """Parse JSON, returning ``fallback`` for empty or malformed input"""  # noqa: D415
    if not text:
        return fallback
    try:
        return json.loads(text)
    except ValueError:
        return fallback


def normalize_phone(phone: str, country_code: str = DEFAULT_COUNTRY_CODE) -> str:
    """Strip formatting and swap a leading trunk ``0`` for the country code.

    >>> normalize_phone("024 000-0000")
    '233240000000'
    """
    digits = _NON_DIGITS.sub("", phone)
    if digits.startswith("0"):
        return country_code + digits[1:]
    return digits


def is_valid_phone(phone: str) -> bool:
    """Check that a number normalizes to 10-15 digits"""  # noqa: D415
    return bool(_PHONE_PATTERN.match(normalize_phone(phone)))


def chunk[T](items: Iterable[T], size: int) -> list[list[T]]:
    """Split ``items`` into consecutive lists of at most ``size`` elements"""  # noqa: D415
    if size < 1:
        raise ValueError("Chunk size must be at least 1")  # noqa: EM101, TRY003
    values = list(items)
    return [values[i : i + size] for i in range(0, len(values), size)]

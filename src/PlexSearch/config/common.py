from __future__ import annotations

"""Shared type checks for configuration and structured filter input."""

from typing import Any, Mapping, Sequence


def get_section(raw: Mapping[str, Any], key: str, *, required: bool) -> Mapping[str, Any]:
    """Return a mapping section from root config.

    Args:
        raw: Root configuration mapping.
        key: Section name.
        required: Whether the section must exist.

    Returns:
        Section mapping, or empty mapping for optional missing sections.

    Raises:
        ValueError: If section is required but missing.
        TypeError: If section is not a mapping.
    """
    section = raw.get(key)
    if section is None:
        if required:
            raise ValueError(f"Missing required config: {key}")
        return {}
    if not isinstance(section, Mapping):
        raise TypeError(f"{key} must be an object")
    return section


def get_optional_value(section: Mapping[str, Any], field: str, default: Any) -> Any:
    """Return optional field value with default."""
    value = section.get(field)
    return default if value is None else value


def expect_str(value: Any, key: str) -> str:
    """Validate and return string value."""
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string")
    return value


def expect_bool(value: Any, key: str) -> bool:
    """Validate and return boolean value."""
    if not isinstance(value, bool):
        raise TypeError(f"{key} must be a boolean")
    return value


def expect_int(value: Any, key: str) -> int:
    """Validate and return integer value (excluding bool)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{key} must be an integer")
    return value


def expect_float(value: Any, key: str) -> float:
    """Validate and return float value from numeric input."""
    return float(expect_number(value, key))


def expect_number(value: Any, key: str) -> int | float:
    """Validate a number, keeping ints as ints so unit conversions stay exact."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{key} must be a number")
    return value


def expect_choice(value: Any, key: str, choices: Sequence[str]) -> str:
    """Validate a string drawn from a closed set."""
    text = expect_str(value, key)
    if text not in choices:
        raise ValueError(f"{key} must be one of {list(choices)}")
    return text


def expect_str_list(value: Any, key: str) -> list[str]:
    """Validate a list of strings."""
    if not isinstance(value, list):
        raise TypeError(f"{key} must be a list")
    out: list[str] = []
    for idx, item in enumerate(value):
        if not isinstance(item, str):
            raise TypeError(f"{key}[{idx}] must be a string")
        out.append(item)
    return out

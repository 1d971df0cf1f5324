"""Type guard functions for runtime type checking in libsql-config.

This module provides type-safe runtime checks that help the type checker
understand type narrowing, replacing defensive hasattr() and duck typing patterns.
"""

import dataclasses
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import msgspec

if TYPE_CHECKING:
    from typing_extensions import TypeGuard

    from libsql_config.typing import DataclassProtocol

__all__ = (
    "is_config_object",
    "is_dataclass_instance",
    "is_mapping",
    "is_msgspec_struct",
    "is_number",
)


def is_mapping(obj: Any) -> "TypeGuard[Mapping[str, Any]]":
    """Check if an object is a mapping.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    return isinstance(obj, Mapping)


def is_dataclass_instance(obj: Any) -> "TypeGuard[DataclassProtocol]":
    """Check if an object is a dataclass instance (not a dataclass type).

    Args:
        obj: An object to check.

    Returns:
        True if the object is a dataclass instance.
    """
    return dataclasses.is_dataclass(obj) and not isinstance(obj, type)


def is_msgspec_struct(obj: Any) -> "TypeGuard[msgspec.Struct]":
    """Check if a value is a msgspec struct instance.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    return isinstance(obj, msgspec.Struct)


def is_config_object(obj: Any) -> bool:
    """Check if a value is shaped like a client configuration record.

    Mappings, dataclass instances and msgspec structs qualify. Strings, numbers,
    sequences and ``None`` do not.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    return is_mapping(obj) or is_dataclass_instance(obj) or is_msgspec_struct(obj)


def is_number(obj: Any) -> "TypeGuard[int | float]":
    """Check if a value is an int or float, excluding bool.

    Args:
        obj: Value to check.

    Returns:
        bool
    """
    return isinstance(obj, (int, float)) and not isinstance(obj, bool)

"""Text helpers shared by configuration normalization and error messages."""

from functools import lru_cache

__all__ = (
    "camelize",
    "quote_literal",
)


@lru_cache(maxsize=100)
def camelize(string: str) -> str:
    """Convert a string to camel case.

    Args:
        string (str): The string to convert.

    Returns:
        str: The converted string.
    """
    return "".join(word if index == 0 else word.capitalize() for index, word in enumerate(string.split("_")))


def quote_literal(value: str) -> str:
    """Quote a user supplied literal for an error message.

    The value is wrapped in double quotes with embedded quotes and backslashes escaped, so
    ``float`` renders as ``"float"`` and empty strings stay visible as ``""``.

    Args:
        value: The literal to quote.

    Returns:
        The quoted literal.
    """
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'

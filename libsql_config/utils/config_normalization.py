"""Configuration normalization helpers.

These utilities turn whatever the caller handed over (a plain dict, a dataclass, a msgspec
struct, or the process environment) into a :class:`~libsql_config.typing.ClientConfig`
whose fields have been checked one by one.
"""

import dataclasses
import os
from typing import TYPE_CHECKING, Any, Callable, Optional, cast

import msgspec

from libsql_config.exceptions import ConfigTypeError
from libsql_config.utils.text import camelize, quote_literal
from libsql_config.utils.type_guards import is_config_object, is_mapping, is_msgspec_struct, is_number

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from libsql_config.typing import ClientConfig

__all__ = ("load_client_config_from_env", "normalize_client_config")

_TRUE_VALUES = frozenset(("true", "1", "yes", "on"))
_FALSE_VALUES = frozenset(("false", "0", "no", "off"))


def _check_str(name: str, value: Any) -> None:
    if not isinstance(value, str):
        msg = f"Invalid value for {name}, expected a string, got {type(value).__name__}"
        raise ConfigTypeError(msg)


def _check_bool(name: str, value: Any) -> None:
    if not isinstance(value, bool):
        msg = f"Invalid value for {name}, expected a boolean, got {type(value).__name__}"
        raise ConfigTypeError(msg)


def _check_number(name: str, value: Any) -> None:
    if not is_number(value):
        msg = f"Invalid value for {name}, expected a number, got {type(value).__name__}"
        raise ConfigTypeError(msg)


_FIELD_CHECKS: "dict[str, Callable[[str, Any], None]]" = {
    "url": _check_str,
    "tls": _check_bool,
    "auth_token": _check_str,
    "encryption_key": _check_str,
    "sync_url": _check_str,
    "sync_interval": _check_number,
}
# int_mode is validated by the expander, fetch is never inspected
_FIELDS = frozenset((*_FIELD_CHECKS, "int_mode", "fetch"))
# each field is accepted under its own name or its exact camelCase alias
_KEY_ALIASES: "dict[str, str]" = {alias: name for name in _FIELDS for alias in (name, camelize(name))}


def _iter_items(raw: Any) -> "Iterable[tuple[Any, Any]]":
    if is_mapping(raw):
        return raw.items()
    if is_msgspec_struct(raw):
        return msgspec.structs.asdict(raw).items()
    return (
        (field.name, getattr(raw, field.name, None))
        for field in dataclasses.fields(raw)
        if field.name in _KEY_ALIASES
    )


def normalize_client_config(raw: Any) -> "ClientConfig":
    """Normalize a raw client configuration.

    This function:
    - Rejects values that are not shaped like a record, before touching any field.
    - Accepts snake_case keys (``auth_token``) as well as camelCase keys (``authToken``).
    - Rejects two keys naming the same field.
    - Drops unknown keys and fields set to ``None``.
    - Checks the type of every remaining field.

    Args:
        raw: Mapping, dataclass instance or msgspec struct.

    Raises:
        ConfigTypeError: If ``raw`` is not record-shaped, ``url`` is missing, a field is given twice,
            or a field has the wrong type.

    Returns:
        Normalized client configuration.
    """
    if not is_config_object(raw):
        msg = f"Expected client configuration as object, got {type(raw).__name__}"
        raise ConfigTypeError(msg)

    normalized: dict[str, Any] = {}
    seen: dict[str, str] = {}
    for key, value in _iter_items(raw):
        name = _KEY_ALIASES.get(key) if isinstance(key, str) else None
        if name is None:
            continue
        if name in seen:
            msg = f"Client configuration sets {name} twice, as {quote_literal(seen[name])} and {quote_literal(key)}"
            raise ConfigTypeError(msg)
        seen[name] = key
        if value is None:
            continue
        check = _FIELD_CHECKS.get(name)
        if check is not None:
            check(name, value)
        normalized[name] = value

    if "url" not in normalized:
        msg = "Client configuration is missing the required 'url' field"
        raise ConfigTypeError(msg)
    return cast("ClientConfig", normalized)


def load_client_config_from_env(
    prefix: str = "LIBSQL_", environ: "Optional[Mapping[str, str]]" = None
) -> "ClientConfig":
    """Load a client configuration from environment variables.

    Environment Variables Supported (shown with the default prefix):
    - LIBSQL_URL: Connection URL (required)
    - LIBSQL_AUTH_TOKEN: Authentication token
    - LIBSQL_ENCRYPTION_KEY: Encryption key for local replicas
    - LIBSQL_SYNC_URL: Replication source URL
    - LIBSQL_SYNC_INTERVAL: Replication interval in seconds (number)
    - LIBSQL_INT_MODE: Integer representation ("number", "bigint" or "string")
    - LIBSQL_TLS: Enable/disable TLS (true/false)

    Empty variables count as unset.

    Args:
        prefix: Prefix shared by all variable names.
        environ: Mapping to read instead of :data:`os.environ`.

    Raises:
        ConfigTypeError: If the URL is not set or a variable cannot be converted.

    Returns:
        Client configuration ready for :func:`~libsql_config.config.expand_config`.
    """
    env = os.environ if environ is None else environ

    url = env.get(f"{prefix}URL")
    if not url:
        msg = f"Environment variable {prefix}URL is not set"
        raise ConfigTypeError(msg)
    config: dict[str, Any] = {"url": url}

    for name in ("auth_token", "encryption_key", "sync_url", "int_mode"):
        if value := env.get(f"{prefix}{name.upper()}"):
            config[name] = value

    if tls := env.get(f"{prefix}TLS"):
        config["tls"] = _env_bool(f"{prefix}TLS", tls)

    if sync_interval := env.get(f"{prefix}SYNC_INTERVAL"):
        try:
            config["sync_interval"] = float(sync_interval)
        except ValueError as e:
            msg = f"Invalid value for {prefix}SYNC_INTERVAL, expected a number, got {quote_literal(sync_interval)}"
            raise ConfigTypeError(msg) from e

    return cast("ClientConfig", config)


def _env_bool(key: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    msg = f"Invalid value for {key}, expected a boolean, got {quote_literal(value)}"
    raise ConfigTypeError(msg)

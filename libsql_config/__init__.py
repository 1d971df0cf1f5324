"""libsql-config: resolve libSQL client connection settings."""

from libsql_config import config, exceptions, typing, uri, utils
from libsql_config.__metadata__ import __version__
from libsql_config.config import SUPPORTED_URL_LINK, ExpandedConfig, expand_config
from libsql_config.exceptions import (
    ConfigTypeError,
    ErrorCode,
    LibsqlError,
    UriParseError,
    UrlInvalidError,
    UrlParamNotSupportedError,
    UrlSchemeNotSupportedError,
)
from libsql_config.typing import MEMORY_PATH, ClientConfig, ExpandedScheme, IntMode
from libsql_config.uri import Authority, Uri, Userinfo, encode_base_url, parse_uri
from libsql_config.utils.config_normalization import load_client_config_from_env

__all__ = (
    "MEMORY_PATH",
    "SUPPORTED_URL_LINK",
    "Authority",
    "ClientConfig",
    "ConfigTypeError",
    "ErrorCode",
    "ExpandedConfig",
    "ExpandedScheme",
    "IntMode",
    "LibsqlError",
    "UriParseError",
    "Uri",
    "UrlInvalidError",
    "UrlParamNotSupportedError",
    "UrlSchemeNotSupportedError",
    "Userinfo",
    "__version__",
    "config",
    "encode_base_url",
    "exceptions",
    "expand_config",
    "load_client_config_from_env",
    "parse_uri",
    "typing",
    "uri",
    "utils",
)

"""Client configuration expansion.

:func:`expand_config` is the single place where a user supplied configuration (a URL plus
optional overrides) is reconciled into the one :class:`ExpandedConfig` that transports
consume. It resolves the abstract ``libsql:`` scheme, applies URL query overrides and
settles the TLS decision.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final, Optional, Union

from libsql_config.exceptions import (
    ConfigTypeError,
    UrlInvalidError,
    UrlParamNotSupportedError,
    UrlSchemeNotSupportedError,
)
from libsql_config.typing import MEMORY_PATH, ExpandedScheme, IntMode
from libsql_config.uri import encode_base_url, parse_uri
from libsql_config.utils.config_normalization import normalize_client_config
from libsql_config.utils.logging import get_logger, log_with_context
from libsql_config.utils.text import quote_literal

if TYPE_CHECKING:
    from collections.abc import Iterable

    from libsql_config.typing import FetchFunction
    from libsql_config.uri import Authority, KeyValue

__all__ = (
    "SUPPORTED_URL_LINK",
    "ExpandedConfig",
    "expand_config",
    "resolve_int_mode",
)

logger = get_logger("config")

SUPPORTED_URL_LINK: Final[str] = "https://github.com/libsql/libsql-client-ts#supported-urls"

_ABSTRACT_SCHEME: Final[str] = "libsql"
_SUPPORTED_SCHEMES_TEXT: Final[str] = '"libsql:", "wss:", "ws:", "https:", "http:" and "file:"'
_TLS_QUERY_VALUES: Final["dict[str, bool]"] = {"0": False, "1": True}
_LOCAL_FILE_HOSTS: Final = frozenset(("", "localhost"))


@dataclass(frozen=True)
class ExpandedConfig:
    """Fully resolved client configuration handed to a transport."""

    scheme: ExpandedScheme
    """Concrete transport scheme."""

    tls: bool
    """Whether the transport must use TLS."""

    authority: "Optional[Authority]"
    """Target host, port and userinfo. Always ``None`` for ``file``."""

    path: str
    """URL path, or the database path (possibly ``:memory:``) for ``file``."""

    auth_token: Optional[str] = None
    encryption_key: Optional[str] = None
    sync_url: Optional[str] = None
    sync_interval: Optional[Union[int, float]] = None
    int_mode: IntMode = IntMode.NUMBER

    fetch: "Optional[FetchFunction]" = None
    """Caller owned fetch hook, forwarded as is."""

    @property
    def is_memory(self) -> bool:
        return self.scheme is ExpandedScheme.FILE and self.path == MEMORY_PATH

    def base_url(self) -> str:
        """Encode the URL a network transport connects to.

        Raises:
            UrlInvalidError: If the configuration uses the ``file`` scheme.

        Returns:
            ``scheme://[userinfo@]host[:port]/path``
        """
        if not self.scheme.is_network:
            msg = f"A {quote_literal(str(self.scheme) + ':')} configuration has no network base URL"
            raise UrlInvalidError(msg)
        return encode_base_url(self.scheme.value, self.authority, self.path)


def resolve_int_mode(value: Any) -> IntMode:
    """Validate the integer representation preference.

    Args:
        value: Raw preference, ``None`` selects ``number``.

    Raises:
        ConfigTypeError: If the value is not one of ``number``, ``bigint`` or ``string``.

    Returns:
        The matching :class:`IntMode`.
    """
    text = "number" if value is None else str(value)
    try:
        return IntMode(text)
    except ValueError as e:
        msg = f'Invalid value for intMode, expected "number", "bigint" or "string", got {quote_literal(text)}'
        raise ConfigTypeError(msg) from e


def _apply_query(
    pairs: "Iterable[KeyValue]", auth_token: Optional[str], tls: Optional[bool]
) -> "tuple[Optional[str], Optional[bool]]":
    """Fold URL query pairs over the structured overrides, in URL order.

    The first invalid pair aborts the fold, so the error reported is the one for the
    earliest offending pair.
    """
    for pair in pairs:
        if pair.key == "authToken":
            auth_token = pair.value or None
        elif pair.key == "tls":
            if pair.value not in _TLS_QUERY_VALUES:
                msg = (
                    f'Unknown value for the "tls" query argument: {quote_literal(pair.value)}. '
                    'Supported values are "0" and "1"'
                )
                raise UrlInvalidError(msg)
            tls = _TLS_QUERY_VALUES[pair.value]
        else:
            raise UrlParamNotSupportedError(pair.key)
    return auth_token, tls


def _resolve_scheme(
    uri_scheme: str, tls: Optional[bool], authority: "Optional[Authority]", prefer_http: bool
) -> "tuple[ExpandedScheme, Optional[bool]]":
    scheme = uri_scheme.lower()
    if scheme == _ABSTRACT_SCHEME:
        if tls is False:
            if authority is None or authority.port is None:
                msg = 'A "libsql:" URL with ?tls=0 must specify an explicit port'
                raise UrlInvalidError(msg)
            return (ExpandedScheme.HTTP if prefer_http else ExpandedScheme.WS), tls
        return (ExpandedScheme.HTTPS if prefer_http else ExpandedScheme.WSS), True

    try:
        expanded = ExpandedScheme(scheme)
    except ValueError:
        raise UrlSchemeNotSupportedError(uri_scheme, _SUPPORTED_SCHEMES_TEXT, SUPPORTED_URL_LINK) from None

    if expanded in (ExpandedScheme.HTTP, ExpandedScheme.WS) and tls is None:
        tls = False
    return expanded, tls


def _resolve_authority(scheme: ExpandedScheme, authority: "Optional[Authority]") -> "Optional[Authority]":
    if scheme.is_network:
        if authority is None:
            msg = f'URL with scheme {quote_literal(scheme.value + ":")} requires authority (the "//" part)'
            raise UrlInvalidError(msg)
        if not authority.host:
            msg = f"URL with scheme {quote_literal(scheme.value + ':')} requires a non-empty host"
            raise UrlInvalidError(msg)
        return authority

    if authority is None:
        return None
    if (
        authority.host.lower() not in _LOCAL_FILE_HOSTS
        or authority.port is not None
        or authority.userinfo is not None
    ):
        msg = f"Invalid host in file URL: {quote_literal(authority.host)}"
        raise UrlInvalidError(msg)
    return None


def expand_config(raw_config: Any, prefer_http: bool = False) -> ExpandedConfig:
    """Expand a raw client configuration into an :class:`ExpandedConfig`.

    Query parameters in the URL override the structured ``tls`` and ``auth_token`` fields.
    ``libsql:`` URLs resolve to ``wss``/``https``, or to ``ws``/``http`` when TLS is
    disabled, which then requires an explicit port.

    Args:
        raw_config: Mapping, dataclass or msgspec struct with a ``url`` field and optional
            ``tls``, ``auth_token``, ``encryption_key``, ``sync_url``, ``sync_interval``,
            ``int_mode`` and ``fetch`` fields.
        prefer_http: Resolve ``libsql:`` to the HTTP family rather than WebSockets.

    Raises:
        ConfigTypeError: If the configuration is not record-shaped or a field is invalid.
        UrlInvalidError: If the URL is malformed, has a fragment, or contradicts its TLS setting.
        UrlParamNotSupportedError: If the URL carries an unknown query parameter.
        UrlSchemeNotSupportedError: If the URL scheme is not supported.

    Returns:
        The expanded configuration.
    """
    config = normalize_client_config(raw_config)

    url = config["url"]
    tls = config.get("tls")
    auth_token = config.get("auth_token")
    encryption_key = config.get("encryption_key")
    sync_url = config.get("sync_url")
    sync_interval = config.get("sync_interval")
    fetch = config.get("fetch")
    int_mode = resolve_int_mode(config.get("int_mode"))

    if url == MEMORY_PATH:
        expanded = ExpandedConfig(
            scheme=ExpandedScheme.FILE,
            tls=False,
            authority=None,
            path=MEMORY_PATH,
            sync_url=sync_url,
            sync_interval=sync_interval,
            int_mode=int_mode,
            fetch=fetch,
        )
        _log_expanded(expanded)
        return expanded

    uri = parse_uri(url)
    auth_token, tls = _apply_query(uri.query.pairs if uri.query is not None else (), auth_token, tls)
    scheme, tls = _resolve_scheme(uri.scheme, tls, uri.authority, prefer_http)

    if uri.fragment is not None:
        msg = f"URL fragments are not supported: {quote_literal('#' + uri.fragment)}"
        raise UrlInvalidError(msg)

    expanded = ExpandedConfig(
        scheme=scheme,
        tls=True if tls is None else tls,
        authority=_resolve_authority(scheme, uri.authority),
        path=uri.path,
        auth_token=auth_token,
        encryption_key=encryption_key,
        sync_url=sync_url,
        sync_interval=sync_interval,
        int_mode=int_mode,
        fetch=fetch,
    )
    _log_expanded(expanded)
    return expanded


def _log_expanded(expanded: ExpandedConfig) -> None:
    log_with_context(
        logger,
        logging.DEBUG,
        "Expanded client configuration",
        scheme=expanded.scheme.value,
        tls=expanded.tls,
        int_mode=expanded.int_mode.value,
        has_auth_token=expanded.auth_token is not None,
    )

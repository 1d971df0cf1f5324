"""URI parsing and encoding for client connection URLs.

The parser follows the generic RFC 3986 layout (``scheme:[//authority]path[?query][#fragment]``)
and only understands as much of it as the client needs. Every component is percent-decoded;
query pairs keep their original order because later pairs override earlier ones.
"""

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote, unquote

from libsql_config.exceptions import UriParseError, UrlInvalidError
from libsql_config.utils.text import quote_literal

__all__ = (
    "Authority",
    "KeyValue",
    "Query",
    "Uri",
    "Userinfo",
    "encode_base_url",
    "parse_uri",
)

_URI_RE = re.compile(
    r"(?P<scheme>[A-Za-z][A-Za-z.+-]*):"
    r"(//(?P<authority>[^/?#]*))?"
    r"(?P<path>[^?#]*)"
    r"(\?(?P<query>[^#]*))?"
    r"(#(?P<fragment>.*))?",
    re.DOTALL,
)
_AUTHORITY_RE = re.compile(
    r"((?P<username>[^:]*)(:(?P<password>.*))?@)?"
    r"((?P<host>[^:\[\]]*)|(\[(?P<host_br>[^\[\]]*)\]))"
    r"(:(?P<port>[0-9]*))?",
    re.DOTALL,
)
# A "%" not followed by two hex digits
_INVALID_PERCENT_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")

# Characters left alone by encodeURIComponent / encodeURI besides [A-Za-z0-9_.~-]
_COMPONENT_SAFE = "!*'()"
_HOST_SAFE = ";,/?:@&=+$#!*'()"


@dataclass(frozen=True)
class Userinfo:
    username: str
    password: Optional[str] = None


@dataclass(frozen=True)
class Authority:
    """Host, optional port and optional userinfo of a URL."""

    host: str
    port: Optional[int] = None
    userinfo: Optional[Userinfo] = None


@dataclass(frozen=True)
class KeyValue:
    key: str
    value: str


@dataclass(frozen=True)
class Query:
    pairs: "tuple[KeyValue, ...]" = ()


@dataclass(frozen=True)
class Uri:
    """A parsed URL.

    ``authority``, ``query`` and ``fragment`` are ``None`` when the component is missing
    entirely; an empty but present component (``https://host#``) yields an empty string.
    """

    scheme: str
    authority: Optional[Authority]
    path: str
    query: Optional[Query] = None
    fragment: Optional[str] = None


def parse_uri(text: str) -> Uri:
    """Parse a URL into its components.

    Args:
        text: The URL to parse.

    Raises:
        UriParseError: If the URL, its authority or any percent escape is malformed.

    Returns:
        The parsed URL.
    """
    match = _URI_RE.fullmatch(text)
    if match is None:
        msg = f"The URL {quote_literal(text)} is not in a valid format"
        raise UriParseError(msg)

    authority = match["authority"]
    query = match["query"]
    fragment = match["fragment"]
    return Uri(
        scheme=match["scheme"],
        authority=_parse_authority(authority) if authority is not None else None,
        path=_percent_decode(match["path"]),
        query=_parse_query(query) if query is not None else None,
        fragment=_percent_decode(fragment) if fragment is not None else None,
    )


def _parse_authority(text: str) -> Authority:
    match = _AUTHORITY_RE.fullmatch(text)
    if match is None:
        msg = f"The authority part of the URL is not in a valid format: {quote_literal(text)}"
        raise UriParseError(msg)

    host = match["host_br"] if match["host_br"] is not None else match["host"]
    port = match["port"]
    username = match["username"]
    password = match["password"]
    return Authority(
        host=_percent_decode(host),
        port=int(port) if port else None,
        userinfo=Userinfo(
            username=_percent_decode(username),
            password=_percent_decode(password) if password is not None else None,
        )
        if username is not None
        else None,
    )


def _parse_query(text: str) -> Query:
    pairs: list[KeyValue] = []
    for sequence in text.split("&"):
        if not sequence:
            continue
        key, sep, value = sequence.partition("=")
        if not sep:
            value = ""
        pairs.append(
            KeyValue(
                key=_percent_decode(key.replace("+", " ")),
                value=_percent_decode(value.replace("+", " ")),
            )
        )
    return Query(pairs=tuple(pairs))


def _percent_decode(text: str) -> str:
    invalid = _INVALID_PERCENT_RE.search(text)
    if invalid is not None:
        msg = f"URL component has invalid percent encoding at position {invalid.start()}: {quote_literal(text)}"
        raise UriParseError(msg)
    try:
        decoded = unquote(text, errors="strict")
    except UnicodeDecodeError as e:
        msg = f"URL component has invalid percent encoding: {quote_literal(text)} is not valid UTF-8"
        raise UriParseError(msg) from e
    try:
        decoded.encode("utf-8")
    except UnicodeEncodeError as e:
        msg = f"URL component is not valid Unicode: {quote_literal(text)} contains a lone surrogate"
        raise UriParseError(msg) from e
    return decoded


def encode_base_url(scheme: str, authority: Optional[Authority], path: str) -> str:
    """Build the base URL a network transport connects to.

    Args:
        scheme: The concrete scheme, e.g. ``wss``.
        authority: Host, port and userinfo of the target.
        path: Decoded URL path.

    Raises:
        UrlInvalidError: If ``authority`` is missing.

    Returns:
        The encoded URL, without query or fragment.
    """
    if authority is None:
        msg = f'URL with scheme {quote_literal(scheme + ":")} requires authority (the "//" part)'
        raise UrlInvalidError(msg)

    authority_text = f"//{_encode_userinfo(authority.userinfo)}{_encode_host(authority.host)}"
    if authority.port is not None:
        authority_text = f"{authority_text}:{authority.port}"

    path_text = "/".join(quote(segment, safe=_COMPONENT_SAFE) for segment in path.split("/"))
    if path_text and not path_text.startswith("/"):
        path_text = f"/{path_text}"

    return f"{scheme}:{authority_text}{path_text}"


def _encode_host(host: str) -> str:
    encoded = quote(host, safe=_HOST_SAFE)
    return f"[{encoded}]" if ":" in host else encoded


def _encode_userinfo(userinfo: Optional[Userinfo]) -> str:
    if userinfo is None:
        return ""
    username = quote(userinfo.username, safe=_COMPONENT_SAFE)
    if userinfo.password is None:
        return f"{username}@"
    return f"{username}:{quote(userinfo.password, safe=_COMPONENT_SAFE)}@"

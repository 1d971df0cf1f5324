"""Types shared across libsql-config."""

from enum import Enum
from typing import Any, ClassVar, Protocol, TypedDict, Union, runtime_checkable

from typing_extensions import NotRequired, TypeAlias

__all__ = (
    "MEMORY_PATH",
    "ClientConfig",
    "DataclassProtocol",
    "ExpandedScheme",
    "FetchFunction",
    "IntMode",
    "IntModeLike",
)

MEMORY_PATH = ":memory:"
"""URL value denoting a private, non-persistent local database."""


class ExpandedScheme(str, Enum):
    """Concrete transport schemes a configuration can resolve to."""

    WSS = "wss"
    WS = "ws"
    HTTPS = "https"
    HTTP = "http"
    FILE = "file"

    def __str__(self) -> str:
        return self.value

    @property
    def is_network(self) -> bool:
        return self is not ExpandedScheme.FILE


class IntMode(str, Enum):
    """How integers returned by the database are represented."""

    NUMBER = "number"
    BIGINT = "bigint"
    STRING = "string"

    def __str__(self) -> str:
        return self.value


IntModeLike: TypeAlias = Union[IntMode, str]


@runtime_checkable
class FetchFunction(Protocol):
    """Network fetch hook supplied by the caller and forwarded to HTTP transports untouched."""

    def __call__(self, *args: Any, **kwargs: Any) -> Any: ...


class ClientConfig(TypedDict):
    """Raw client configuration.

    Only ``url`` is required. Query parameters embedded in ``url`` take precedence over
    ``tls`` and ``auth_token``.
    """

    url: str
    tls: NotRequired[bool]
    auth_token: NotRequired[str]
    encryption_key: NotRequired[str]
    sync_url: NotRequired[str]
    sync_interval: NotRequired[Union[int, float]]
    int_mode: NotRequired[IntModeLike]
    fetch: NotRequired[FetchFunction]


@runtime_checkable
class DataclassProtocol(Protocol):
    """Protocol for instance checking dataclasses."""

    __dataclass_fields__: "ClassVar[dict[str, Any]]"

from enum import Enum
from typing import Any, ClassVar, Optional

from libsql_config.utils.text import quote_literal

__all__ = (
    "ConfigTypeError",
    "ErrorCode",
    "LibsqlError",
    "MissingDependencyError",
    "UriParseError",
    "UrlInvalidError",
    "UrlParamNotSupportedError",
    "UrlSchemeNotSupportedError",
)


class ErrorCode(str, Enum):
    """Classification codes carried by every :class:`LibsqlError`."""

    TYPE_MISMATCH = "TYPE_MISMATCH"
    URL_INVALID = "URL_INVALID"
    URL_PARAM_NOT_SUPPORTED = "URL_PARAM_NOT_SUPPORTED"
    URL_SCHEME_NOT_SUPPORTED = "URL_SCHEME_NOT_SUPPORTED"
    MISSING_DEPENDENCY = "MISSING_DEPENDENCY"

    def __str__(self) -> str:
        return self.value


class LibsqlError(Exception):
    """Base exception class from which all libsql-config exceptions inherit."""

    detail: str
    code: ClassVar[ErrorCode]

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``LibsqlError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__}[{self.code}] - {self.detail}"
        return f"{self.__class__.__name__}[{self.code}]"

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class ConfigTypeError(LibsqlError, TypeError):
    """The client configuration, or one of its fields, has the wrong type or value."""

    code = ErrorCode.TYPE_MISMATCH


class UrlInvalidError(LibsqlError):
    """The URL is well-formed enough to read but describes an unusable target."""

    code = ErrorCode.URL_INVALID


class UriParseError(UrlInvalidError):
    """The URL text could not be parsed.

    Raised by :func:`libsql_config.uri.parse_uri` and forwarded unchanged by the expander.
    """


class UrlParamNotSupportedError(LibsqlError):
    """The URL carries a query parameter the client does not understand."""

    code = ErrorCode.URL_PARAM_NOT_SUPPORTED

    key: str

    def __init__(self, key: str) -> None:
        super().__init__(f"Unknown URL query parameter {quote_literal(key)}")
        self.key = key


class UrlSchemeNotSupportedError(LibsqlError):
    """The URL scheme is outside of the supported set."""

    code = ErrorCode.URL_SCHEME_NOT_SUPPORTED

    scheme: str

    def __init__(self, scheme: str, supported: str, link: Optional[str] = None) -> None:
        message = f"The client supports only {supported} URLs, got {quote_literal(scheme + ':')}."
        if link:
            message = f"{message} For more information, please read {link}"
        super().__init__(message)
        self.scheme = scheme


class MissingDependencyError(LibsqlError, ImportError):
    """Missing optional dependency.

    This exception is raised only when a module depends on a dependency that has not been installed.
    """

    code = ErrorCode.MISSING_DEPENDENCY

    def __init__(self, package: str, install_package: Optional[str] = None) -> None:
        super().__init__(
            f"Package {package!r} is not installed but required. You can install it by running "
            f"'pip install libsql-config[{install_package or package}]' to install libsql-config with the "
            f"required extra or 'pip install {install_package or package}' to install the package separately",
        )

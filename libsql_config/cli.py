import dataclasses
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from click import Group

    from libsql_config.config import ExpandedConfig

__all__ = ("get_libsql_config_group", "run_cli")

_MASK = "********"


def get_libsql_config_group() -> "Group":
    """Get the libsql-config CLI group.

    Raises:
        MissingDependencyError: If the `click` or `rich` package is not installed.

    Returns:
        The libsql-config CLI group.
    """
    from libsql_config.exceptions import MissingDependencyError

    try:
        import click
    except ImportError as e:
        raise MissingDependencyError(package="click", install_package="cli") from e
    try:
        from rich import get_console
        from rich.table import Table
    except ImportError as e:
        raise MissingDependencyError(package="rich", install_package="cli") from e

    from libsql_config._serialization import encode_json
    from libsql_config.config import expand_config
    from libsql_config.exceptions import LibsqlError
    from libsql_config.uri import parse_uri
    from libsql_config.utils.logging import configure_logging

    json_option = click.option("--json", "as_json", help="Print JSON instead of a table.", is_flag=True, default=False)

    def fail(ctx: "click.Context", exc: LibsqlError) -> None:
        click.echo(f"[{exc.code}] {exc.detail}", err=True)
        ctx.exit(1)

    def print_mapping(title: str, data: "dict[str, Any]") -> None:
        table = Table(title=title, show_header=True, header_style="bold")
        table.add_column("Field")
        table.add_column("Value")
        for key, value in data.items():
            table.add_row(key, "" if value is None else str(value))
        get_console().print(table)

    @click.group(name="libsql-config")
    @click.option("--verbose", help="Enable verbose output.", type=bool, default=False, is_flag=True)
    def libsql_config_group(verbose: bool) -> None:
        """Inspect how libSQL client configurations are resolved."""
        if verbose:
            configure_logging(level="DEBUG", format_style="simple")

    @libsql_config_group.command(name="expand", help="Expand a connection URL into the final client configuration.")
    @click.argument("url", envvar="LIBSQL_URL")
    @click.option("--auth-token", envvar="LIBSQL_AUTH_TOKEN", default=None, help="Authentication token.")
    @click.option("--encryption-key", default=None, help="Encryption key for local databases.")
    @click.option("--tls/--no-tls", default=None, help="Force TLS on or off.")
    @click.option("--int-mode", default=None, help='Integer representation: "number", "bigint" or "string".')
    @click.option("--sync-url", default=None, help="Replication source URL.")
    @click.option("--sync-interval", type=float, default=None, help="Replication interval in seconds.")
    @click.option(
        "--prefer-http", is_flag=True, default=False, help="Resolve libsql: URLs to HTTP instead of WebSockets."
    )
    @click.option("--show-secrets", is_flag=True, default=False, help="Print tokens and keys unmasked.")
    @json_option
    @click.pass_context
    def expand_command(
        ctx: "click.Context",
        url: str,
        auth_token: Optional[str],
        encryption_key: Optional[str],
        tls: Optional[bool],
        int_mode: Optional[str],
        sync_url: Optional[str],
        sync_interval: Optional[float],
        prefer_http: bool,
        show_secrets: bool,
        as_json: bool,
    ) -> None:
        raw = {
            "url": url,
            "auth_token": auth_token,
            "encryption_key": encryption_key,
            "tls": tls,
            "int_mode": int_mode,
            "sync_url": sync_url,
            "sync_interval": sync_interval,
        }
        try:
            expanded = expand_config(raw, prefer_http=prefer_http)
        except LibsqlError as exc:
            fail(ctx, exc)
            return

        data = _expanded_to_dict(expanded, show_secrets=show_secrets)
        if as_json:
            click.echo(encode_json(data))
        else:
            print_mapping("Expanded configuration", data)

    @libsql_config_group.command(name="parse", help="Show the components of a URL.")
    @click.argument("url")
    @json_option
    @click.pass_context
    def parse_command(ctx: "click.Context", url: str, as_json: bool) -> None:
        try:
            uri = parse_uri(url)
        except LibsqlError as exc:
            fail(ctx, exc)
            return

        data = dataclasses.asdict(uri)
        if as_json:
            click.echo(encode_json(data))
        else:
            print_mapping("Parsed URL", data)

    return libsql_config_group


def _expanded_to_dict(expanded: "ExpandedConfig", show_secrets: bool = False) -> "dict[str, Any]":
    data = {
        field.name: getattr(expanded, field.name) for field in dataclasses.fields(expanded) if field.name != "fetch"
    }
    data["authority"] = dataclasses.asdict(expanded.authority) if expanded.authority is not None else None
    if not show_secrets:
        for key in ("auth_token", "encryption_key"):
            if data[key] is not None:
                data[key] = _MASK
    return data


def run_cli() -> None:  # pragma: no cover
    """Console script entry point."""
    get_libsql_config_group()()

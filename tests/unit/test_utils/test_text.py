import pytest

from libsql_config.utils.text import camelize, quote_literal


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("auth_token", "authToken"),
        ("encryption_key", "encryptionKey"),
        ("sync_url", "syncUrl"),
        ("sync_interval", "syncInterval"),
        ("int_mode", "intMode"),
        ("url", "url"),
    ],
)
def test_camelize(value: str, expected: str) -> None:
    assert camelize(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [("float", '"float"'), ("", '""'), ('a"b', '"a\\"b"'), ("back\\slash", '"back\\\\slash"'), ("#frag", '"#frag"')],
)
def test_quote_literal(value: str, expected: str) -> None:
    assert quote_literal(value) == expected

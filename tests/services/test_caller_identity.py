from __future__ import annotations

from types import SimpleNamespace

import pytest

from app.services.caller_identity import extract_caller_user_id, parse_user_id


@pytest.mark.parametrize(
    ("raw_value", "expected"),
    [
        ("42", 42),
        (" 7 ", 7),
        (None, None),
        ("", None),
        ("0", None),
        ("-5", None),
        ("12abc", None),
        ("²", None),
        ("١٢", None),
    ],
)
def test_parse_user_id(raw_value: str | None, expected: int | None) -> None:
    assert parse_user_id(raw_value) == expected


def test_extract_caller_user_id_reads_configured_header() -> None:
    request = SimpleNamespace(headers={"X-Learner": "314"})

    assert extract_caller_user_id(request, header_name="X-Learner") == 314
    assert extract_caller_user_id(request, header_name="X-User-Id") is None


def test_extract_caller_user_id_ignores_latin1_superscript_digit() -> None:
    # A raw b"\xb2" header byte reaches the app as "²".
    request = SimpleNamespace(headers={"X-User-Id": b"\xb2".decode("latin-1")})

    assert extract_caller_user_id(request, header_name="X-User-Id") is None
